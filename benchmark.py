#!/usr/bin/env python3
"""
Benchmark suite for the JSON Compressor.

Compares inline execution with the thread and process worker backends
across dataset sizes.
"""

import asyncio
import json
import statistics
from typing import Any, Dict, List, Tuple

from json_compressor import JSONCompressor
from json_compressor.config import CompressorConfig
from json_compressor.types import Action, ExecutionMode


class BenchmarkSuite:
    """Benchmark suite for the JSON Compressor."""

    CONFIGURATIONS: List[Tuple[str, ExecutionMode, str]] = [
        ("inline", ExecutionMode.INLINE, "thread"),
        ("thread", ExecutionMode.DELEGATED, "thread"),
        ("process", ExecutionMode.DELEGATED, "process"),
    ]

    def __init__(self, iterations: int = 3):
        """Initialize the benchmark suite."""
        self.iterations = iterations

    def create_test_dataset(self, size_category: str) -> Dict[str, Any]:
        """Create test datasets of different sizes."""
        if size_category == "small":
            return {
                "users": {f"user_{i}": {"name": f"User {i}", "data": f"data_{i}"} for i in range(50)},
                "posts": [{"id": i, "content": f"Post content {i}"} for i in range(100)]
            }
        elif size_category == "medium":
            return {
                "users": {
                    f"user_{i}": {
                        "name": f"User {i}",
                        "profile": {"age": 20 + i % 50, "city": f"City {i % 20}"},
                        "posts": [f"post_{j}" for j in range(i % 10)]
                    } for i in range(500)
                },
                "analytics": {f"day_{i}": {"views": i * 100, "clicks": i * 10} for i in range(365)}
            }
        elif size_category == "large":
            return {
                f"section_{i}": {
                    f"item_{j}": {"id": j, "data": f"Large data content {j} " * 5} for j in range(100)
                } for i in range(30)
            }
        else:
            raise ValueError(f"Unknown size category: {size_category}")

    def _compressor(self, backend: str) -> JSONCompressor:
        config = CompressorConfig()
        config.set('execution', 'worker_backend', backend)
        return JSONCompressor(config=config)

    async def benchmark_modes(self, json_string: str) -> Dict[str, Any]:
        """Time compress and decompress in each execution mode."""
        results = {}

        for label, mode, backend in self.CONFIGURATIONS:
            compressor = self._compressor(backend)
            compress_times = []
            decompress_times = []
            compressed = None

            for _ in range(self.iterations):
                compressed = await compressor.run_action(Action.COMPRESS, json_string, mode)
                if not compressed.success:
                    print(f"   ❌ {label} compress failed: {compressed.error}")
                    break
                compress_times.append(compressed.duration_ms)

                restored = await compressor.run_action(Action.DECOMPRESS, compressed.output, mode)
                if not restored.success:
                    print(f"   ❌ {label} decompress failed: {restored.error}")
                    break
                decompress_times.append(restored.duration_ms)

            if compress_times and decompress_times:
                results[label] = {
                    "compress_ms": statistics.mean(compress_times),
                    "decompress_ms": statistics.mean(decompress_times),
                    "output_kb": compressed.result_size / 1024,
                    "reduction_pct": compressed.reduction or 0.0,
                }

        return results

    def print_results(self, results: Dict[str, Any], title: str):
        """Print benchmark results in a formatted table."""
        print(f"\n📈 {title}")
        print("=" * 80)

        if not results:
            print("No results to display.")
            return

        first_key = next(iter(results.keys()))
        columns = list(results[first_key].keys())

        header = f"{'Mode':<15}"
        for col in columns:
            header += f"{col:<15}"
        print(header)
        print("-" * len(header))

        for mode, data in results.items():
            row = f"{mode:<15}"
            for col in columns:
                row += f"{data.get(col, 0):<15.2f}"
            print(row)

    async def run_comprehensive_benchmark(self):
        """Run the complete benchmark suite."""
        print("🚀 JSON Compressor Benchmark Suite")
        print("=" * 60)

        for category in ("small", "medium", "large"):
            json_string = json.dumps(self.create_test_dataset(category))
            print(f"\n📊 {category} dataset: {len(json_string.encode('utf-8')) / 1024:.1f} KB")

            results = await self.benchmark_modes(json_string)
            self.print_results(results, f"Execution modes ({category})")

            if "inline" in results:
                baseline = results["inline"]["compress_ms"]
                for label, data in results.items():
                    if label != "inline" and baseline > 0:
                        print(f"   • {label} overhead: {data['compress_ms'] - baseline:+.2f} ms per compress")


async def main():
    """Run the benchmark suite."""
    benchmark = BenchmarkSuite()
    await benchmark.run_comprehensive_benchmark()


if __name__ == "__main__":
    asyncio.run(main())
