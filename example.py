#!/usr/bin/env python3
"""
Example usage of the JSON Compressor.

This script compresses a JSON document, recognizes the result as a
compressed string, and decompresses it back to formatted JSON.
"""

import asyncio
import json

from json_compressor import JSONCompressor
from json_compressor.config import CompressorConfig


async def main():
    """Main example function."""
    print("JSON Compressor Example")
    print("=" * 50)

    sample_data = {
        "users": {
            "user_001": {
                "name": "Alice Johnson",
                "email": "alice@example.com",
                "profile": {"age": 30, "city": "New York", "interests": ["reading", "hiking"]}
            },
            "user_002": {
                "name": "Bob Smith",
                "email": "bob@example.com",
                "profile": {"age": 25, "city": "San Francisco", "interests": ["coding", "music"]}
            }
        },
        "posts": [
            {"id": 1, "author": "user_001", "title": "My First Post", "tags": ["introduction", "hello"]},
            {"id": 2, "author": "user_002", "title": "Learning Python", "tags": ["python", "learning"]}
        ],
        "config": {"version": "1.0.0", "features": {"comments": True, "messaging": False}}
    }

    json_string = json.dumps(sample_data, indent=2)
    compressor = JSONCompressor(config=CompressorConfig())

    analysis = compressor.analyze(json_string)
    print(f"Input: {analysis.byte_size} bytes, detected as {analysis.classification.value}")
    print(analysis.status_message)

    compressed = await compressor.handle_action(json_string, use_worker=True)
    if not compressed.success:
        print(f"❌ Compression failed: {compressed.error}")
        return

    print(f"\n✅ Compressed in {compressed.duration_ms:.2f} ms (worker)")
    print(f"   {compressed.original_size} B -> {compressed.result_size} B "
          f"({compressor.size_calculator.format_reduction(compressed.original_size, compressed.result_size)})")
    print(f"   {compressed.output[:60]}...")

    print(f"\n{compressor.analyze(compressed.output).status_message}")

    restored = await compressor.handle_action(compressed.output, use_worker=False)
    if not restored.success:
        print(f"❌ Decompression failed: {restored.error}")
        return

    print(f"\n✅ Decompressed in {restored.duration_ms:.2f} ms (inline)")
    print(restored.output[:200] + "...")
    print(f"\nRound trip preserved the document: {json.loads(restored.output) == sample_data}")

    print()
    print(compressor.profiler.export_metrics("summary"))


if __name__ == "__main__":
    asyncio.run(main())
