#!/usr/bin/env python3
"""
Quick Start Guide for the XML Path Cursor.

This example walks through the primitive moves, path matching and the
structural dump on a small catalog document.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xml_path_cursor import (
    CursorConfig,
    PathCursor,
    dump_to_string,
    iter_path,
    iter_scan,
)

CATALOG = """<?xml version="1.0"?>
<catalog>
  <book id="b1" genre="fiction">
    <title>Dune</title>
    <author>Frank Herbert</author>
    <price currency="USD">9.99</price>
  </book>
  <book id="b2">
    <title>Emma</title>
    <author>Jane Austen</author>
  </book>
  <magazine>
    <title>Byte</title>
  </magazine>
</catalog>
"""


def quick_start_example():
    """Quick start example showing basic usage."""

    print("🚀 QUICK START - XML Path Cursor")
    print("=" * 40)

    # Step 1: Primitive moves
    print("\n🧭 Step 1: Stepping and reading text")
    print("-" * 30)

    with PathCursor.open(CATALOG) as cursor:
        cursor.step("catalog")
        cursor.step("book")
        cursor.step("author")
        print(f"📍 Position: /{'/'.join(cursor.current_path)} (depth {cursor.depth})")
        print(f"✏️  Author: {cursor.back()}")
        cursor.back(-1)
        print(f"⬆️  Back at depth {cursor.depth}, last move {cursor.last_move.kind.name}")

    # Step 2: Path matching with a wildcard
    print("\n🔍 Step 2: Every title under any catalog entry")
    print("-" * 30)

    with PathCursor.open(CATALOG) as cursor:
        for depth in iter_path(cursor, ["catalog", "*", "title"]):
            parent = cursor.current_path[-2]
            print(f"  - {parent}: {cursor.back()} (depth {depth})")

    # Step 3: Scanning the whole document
    print("\n📚 Step 3: Counting elements by name")
    print("-" * 30)

    with PathCursor.open(CATALOG, CursorConfig.strict()) as cursor:
        matches = sum(1 for _ in iter_scan(cursor, "author", 0))
        print(f"✅ Found {matches} author elements")
        print(f"📊 Events consumed: {cursor.metrics.events_consumed}")

    # Step 4: Structural dump
    print("\n🗂️  Step 4: Structural dump")
    print("-" * 30)
    print(dump_to_string(CATALOG, margin="  "), end="")


if __name__ == "__main__":
    quick_start_example()
