#!/usr/bin/env python
import asyncio

from sdk.catalog import CatalogClient
from sdk.config import ClientSettings


async def main():
    config = ClientSettings().to_config()

    async with CatalogClient(config) as c:
        # -----------------------------
        # First load goes to the server
        # -----------------------------
        print("Fetching products...")
        first = await c.get_products()
        if not first.ok:
            print(f"Fetch failed: {first.error.message}")
            return
        for p in first.products:
            print(f"  {p.id}: {p.name} ${p.price} (stock {p.stock})")

        # -----------------------------
        # Second load is served from cache
        # -----------------------------
        print("\nFetching again (should be cached)...")
        second = await c.get_products()
        print(f"from_cache={second.from_cache}, same object={second.products is first.products}")

        # -----------------------------
        # Forced refresh
        # -----------------------------
        print("\nForcing a refresh...")
        third = await c.get_products(force_refresh=True)
        print(f"ok={third.ok}, from_cache={third.from_cache}")

        # -----------------------------
        # Status
        # -----------------------------
        print("\nStatus:")
        print(c.status())


if __name__ == "__main__":
    asyncio.run(main())
