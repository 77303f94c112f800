"""ParserConfig: options shared by every parse entry point."""

from dataclasses import dataclass, fields


# Which textual form of a line ends up in ``LineRecord.line``
LINE_MODE_ORIGINAL = "original"  # untouched input
LINE_MODE_STRIPPED = "stripped"  # comments removed, ends trimmed
LINE_MODE_COMPACT = "compact"  # comments and all whitespace removed

LINE_MODES: tuple[str, ...] = (
    LINE_MODE_ORIGINAL,
    LINE_MODE_STRIPPED,
    LINE_MODE_COMPACT,
)


@dataclass(frozen=True)
class ParserConfig:
    """Options controlling line rendering, word shape and stream batching."""

    # --- Line parser ---
    line_mode: str = LINE_MODE_ORIGINAL
    flatten: bool = False  # words as "X10.5" instead of ("X", 10.5)

    # --- Streaming ---
    batch_size: int = 1000  # lines parsed per scheduling turn
    chunk_size: int = 65536  # chars/bytes read per chunk from text or files
    encoding: str = "utf-8"  # for byte chunks

    def __post_init__(self) -> None:
        if self.line_mode not in LINE_MODES:
            raise ValueError(
                f"Unknown line mode {self.line_mode!r}; expected one of {LINE_MODES}"
            )
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")

    @classmethod
    def from_options(
        cls, config: "ParserConfig | None" = None, **options
    ) -> "ParserConfig":
        """Build a config from keyword options layered over *config*.

        Unknown option names raise ``TypeError`` just like an unexpected
        keyword argument would.
        """
        base = config if config is not None else DEFAULT_CONFIG
        if not options:
            return base
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise TypeError(f"Unknown parser option(s): {', '.join(unknown)}")
        values = {f.name: getattr(base, f.name) for f in fields(cls)}
        values.update(options)
        return cls(**values)


# Singleton default config
DEFAULT_CONFIG = ParserConfig()
