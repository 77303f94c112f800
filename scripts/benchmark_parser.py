#!/usr/bin/env python3
"""Benchmark G-code parsing throughput."""

import time
import asyncio
import argparse
from gcodestream.config import ParserConfig
from gcodestream.api import parse_text, parse_text_sync
from gcodestream.gcode.library import sample_program


def benchmark_sync(text: str) -> tuple[float, int]:
    """Benchmark in-memory line-by-line parsing."""
    start = time.perf_counter()
    records = parse_text_sync(text)
    elapsed = time.perf_counter() - start
    return len(records) / max(elapsed, 1e-6), len(records)


def benchmark_stream(text: str, config: ParserConfig) -> tuple[float, int]:
    """Benchmark the chunked, batched async path."""
    start = time.perf_counter()
    records = asyncio.run(parse_text(text, config))
    elapsed = time.perf_counter() - start
    return len(records) / max(elapsed, 1e-6), len(records)


def main():
    parser = argparse.ArgumentParser(description="Benchmark gcodestream parsing")
    parser.add_argument("--passes", type=int, default=2000,
                        help="Depth passes in the generated program")
    parser.add_argument("--chunk-size", type=int, default=4096)
    parser.add_argument("--batch-size", type=int, default=1000)
    args = parser.parse_args()

    text = sample_program(passes=args.passes, depth_step=0.01)
    config = ParserConfig(chunk_size=args.chunk_size, batch_size=args.batch_size)

    print("=" * 60)
    print("gcodestream Parser Benchmark")
    print("=" * 60)
    print(f"\nProgram: {len(text):,} characters")

    print("\nBenchmarking parse_text_sync...")
    lines_per_sec, num_lines = benchmark_sync(text)
    print(f"  Lines: {num_lines:,}")
    print(f"  Lines/sec: {lines_per_sec:,.0f}")

    print(f"\nBenchmarking parse_text (chunk={args.chunk_size}, batch={args.batch_size})...")
    lines_per_sec, num_lines = benchmark_stream(text, config)
    print(f"  Lines: {num_lines:,}")
    print(f"  Lines/sec: {lines_per_sec:,.0f}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
