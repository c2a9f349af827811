#!/usr/bin/env python3
"""Seed catalogue script.

Creates the catalogue tables and seeds sample items with sequential SKUs.

Usage:
    python scripts/seed_catalogue.py --count 100
    python scripts/seed_catalogue.py --count 500 --start-sku 1000 --seed 7
"""

import argparse
import asyncio
import random
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalogue_api.catalogue.guard import MutationGuard
from catalogue_api.domain.exceptions import SkuConflictError
from catalogue_api.infrastructure.config import settings
from catalogue_api.infrastructure.database import Database

TYPES = ["HardGood", "SoftGood", "Software", "Game", "Music", "Movie"]
MANUFACTURERS = ["Acme", "Contoso", "Northwind", "Fabrikam", "Globex", "Initech"]
CATEGORIES = [
    {"id": "abcat0100000", "name": "TV & Home Theater"},
    {"id": "abcat0200000", "name": "Audio"},
    {"id": "abcat0500000", "name": "Computers & Tablets"},
    {"id": "abcat0800000", "name": "Cell Phones"},
    {"id": "pcmcat242800050021", "name": "Health, Fitness & Beauty"},
    {"id": "pcmcat312300050015", "name": "Connected Home & Housewares"},
]
NOUNS = ["Speaker", "Headphones", "Charger", "Cable", "Adapter", "Stand", "Case"]


def build_item(sku: int, rng: random.Random) -> dict:
    """Build one sample catalogue record."""
    manufacturer = rng.choice(MANUFACTURERS)
    noun = rng.choice(NOUNS)
    model = f"{manufacturer[:3].upper()}-{sku:05d}"
    return {
        "sku": sku,
        "name": f"{manufacturer} {noun} {model}",
        "type": rng.choice(TYPES),
        "price": rng.randint(1, 500),
        "upc": f"{rng.randint(0, 10**12 - 1):012d}",
        "category": rng.sample(CATEGORIES, k=rng.randint(1, 2)),
        "shipping": rng.choice([0, 0, 5, 10]),
        "description": f"{noun} by {manufacturer}, model {model}.",
        "manufacturer": manufacturer,
        "model": model,
        "url": f"https://example.com/products/{sku}",
        "image": f"https://example.com/images/{sku}.jpg",
    }


async def seed(count: int, start_sku: int, seed_value: int) -> tuple[int, int]:
    """Seed items, skipping SKUs that already exist.

    Returns:
        Tuple of (created, skipped).
    """
    rng = random.Random(seed_value)
    database = Database(settings.database_url, echo=settings.debug)
    await database.connect()
    created = skipped = 0

    try:
        await database.create_schema()
        async with database.session() as session:
            guard = MutationGuard(session)
            for sku in range(start_sku, start_sku + count):
                try:
                    await guard.create(build_item(sku, rng))
                    created += 1
                except SkuConflictError:
                    skipped += 1
    finally:
        await database.disconnect()

    return created, skipped


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the product catalogue")
    parser.add_argument("--count", type=int, default=100, help="Number of items (default: 100)")
    parser.add_argument("--start-sku", type=int, default=1, help="First SKU (default: 1)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    print("=" * 60)
    print("Catalogue Seeder")
    print("=" * 60)
    print(f"Items: {args.count} starting at SKU {args.start_sku}")
    print()

    created, skipped = await seed(args.count, args.start_sku, args.seed)

    print(f"  ✓ Created: {created} items")
    print(f"  ✓ Skipped: {skipped} existing SKUs")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
