#!/usr/bin/env python3
"""
Generate benchmark input files by replicating story.txt to different sizes.
"""

import sys
from pathlib import Path

# Configuration
SHARED_DIR = Path("shared")
SAMPLES_DIR = SHARED_DIR / "samples"
INPUT_DIR = SHARED_DIR / "input"
SOURCE_FILE = SAMPLES_DIR / "story.txt"

# Target sizes (approximate)
TARGETS = [
    ("story_small.txt", 64 * 1024),           # ~64KB
    ("story_medium.txt", 1024 * 1024),        # ~1MB
    ("story_large.txt", 10 * 1024 * 1024),    # ~10MB
    ("story_xlarge.txt", 50 * 1024 * 1024),   # ~50MB
]


def generate_file(output_path: Path, target_size: int, source_content: bytes) -> int:
    """
    Generate a file by replicating source content until target size is reached.

    Only whole copies are written so no line is cut in half.

    Args:
        output_path: Path where the output file should be written
        target_size: Target file size in bytes
        source_content: The content to replicate

    Returns:
        Size of the written file in bytes
    """
    print(f"Generating {output_path.name} (target: {target_size / (1024*1024):.1f} MB)...")

    source_size = len(source_content)
    if source_size == 0:
        raise ValueError("Source file is empty!")
    if not source_content.endswith(b"\n"):
        source_content += b"\n"

    replications = max(1, int(target_size / source_size))

    with open(output_path, 'wb') as f:
        for _ in range(replications):
            f.write(source_content)

    actual_size = output_path.stat().st_size
    print(f"  ✓ Created: {output_path.name} ({actual_size / (1024*1024):.2f} MB, {replications} replications)")
    return actual_size


def main():
    """Generate all benchmark input files."""
    print("=" * 70)
    print("Generating Benchmark Input Files")
    print("=" * 70)

    INPUT_DIR.mkdir(parents=True, exist_ok=True)

    if not SOURCE_FILE.exists():
        print(f"❌ Source file not found: {SOURCE_FILE}")
        return 1

    source_content = SOURCE_FILE.read_bytes()
    print(f"\n📄 Source file: {SOURCE_FILE} ({len(source_content)} bytes)")

    total_size = 0
    for filename, target_size in TARGETS:
        total_size += generate_file(INPUT_DIR / filename, target_size, source_content)

    print(f"\n✓ Generated {len(TARGETS)} files, {total_size / (1024*1024):.1f} MB total")
    return 0


if __name__ == "__main__":
    sys.exit(main())
