#!/usr/bin/env python
"""
Demo: phonetic and typeahead search against a running Redis.

Run with: REDIS_URL=redis://localhost:6379/0 python examples/demo.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from textindex import SearchCollection, SearchOptions, Window
from textindex.config import load_config


DOCS = [
    (1, "John Smith plays guitar"),
    (2, "Jon Smyth is running late"),
    (3, "Catherine runs the guitar shop"),
    (4, "Kathryn sells cats"),
]


async def demo_phonetic():
    """Demo 1: sound-alike matching ranked by term frequency."""
    print("=" * 60)
    print("DEMO 1: Phonetic search")
    print("=" * 60)

    collection = SearchCollection.from_config(load_config(["index.name=demo-phonetic"]))
    try:
        await collection.index.drop()
        for doc_id, text in DOCS:
            await collection.set(doc_id, text)
            print(f"  Doc {doc_id}: {text}")

        for query, combinator in [("smith", "and"), ("kathrin guitar", "or"), ("run", "and")]:
            result = await collection.search(query, SearchOptions(combinator=combinator))
            print(f"\n  {query!r} ({combinator}): {result}")

        await collection.delete(2)
        print(f"\n  After deleting doc 2, 'smith': {await collection.search('smith')}")
    finally:
        await collection.close()


async def demo_typeahead():
    """Demo 2: prefix matching for autocomplete."""
    print("\n" + "=" * 60)
    print("DEMO 2: Typeahead search")
    print("=" * 60)

    config = load_config(["index.name=demo-prefix", "index.mode=prefix"])
    collection = SearchCollection.from_config(config)
    try:
        await collection.index.drop()
        for doc_id, text in DOCS:
            await collection.set(doc_id, text)

        for query in ["gu", "smi", "ca", "gu sm"]:
            print(f"  {query!r}: {await collection.search(query)}")

        first_two = SearchOptions(window=Window(0, 1))
        print(f"  'gu' first two: {await collection.search('gu', first_two)}")
    finally:
        await collection.close()


def main():
    """Run all demos."""
    asyncio.run(demo_phonetic())
    asyncio.run(demo_typeahead())


if __name__ == "__main__":
    main()
