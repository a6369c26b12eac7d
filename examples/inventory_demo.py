"""
Rauk Inventory SDK demo.

Usage:
    # Install the package
    pip install -e .

    # Run the demo
    python examples/inventory_demo.py

Environment variables:
    RAUK_API_KEY_ID     - API key ID (24 characters)
    RAUK_API_SECRET     - API secret (64 characters)
    RAUK_API_PUBLIC_KEY - API public key (32 characters)
    RAUK_API_BASE_URL   - Override API URL (default: https://inventory.rauk.app)
    RAUK_DEMO_SKU       - SKU to look up (default: ITEM-001)
"""

import asyncio
import logging
import os

from rauk_inventory import (
    Credentials,
    RaukError,
    RaukInventoryClient,
    is_authentication_error,
    is_network_error,
    is_validation_error,
)

logging.basicConfig(level=logging.DEBUG if os.getenv("RAUK_DEBUG") else logging.INFO)

SKU = os.getenv("RAUK_DEMO_SKU", "ITEM-001")


async def main() -> None:
    client = RaukInventoryClient.from_credentials(Credentials.from_env())

    try:
        item = await client.find_one({"sku": SKU}, {"select": {"sku": 1, "packageQuantity": 1}})
        if item is None:
            print(f"No item with sku {SKU}")
            return
        print(f"Found {item['sku']}: {item.get('packageQuantity')} per package")

        counts = await client.aggregate([
            {"$match": {"sku": SKU}},
            {"$group": {"_id": "$currentLocation.id", "count": {"$sum": 1}}},
        ])
        for row in counts:
            print(f"  {row['_id']}: {row['count']}")

    except RaukError as e:
        if is_validation_error(e):
            for message in e.get_all_messages():
                print(f"Invalid request: {message}")
        elif is_authentication_error(e):
            print(f"Check your API keys: {e.message}")
        elif is_network_error(e):
            print(f"Service unavailable ({e.status_code}): {e.message}")
        else:
            print(f"Request failed: {e.to_dict()}")


if __name__ == "__main__":
    asyncio.run(main())
