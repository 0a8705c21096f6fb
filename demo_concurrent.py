import asyncio

from sdk.catalog import CatalogClient
from sdk.config import ClientSettings


async def load(client: CatalogClient, label: str, force_refresh: bool):
    result = await client.get_products(force_refresh=force_refresh)
    if result.ok:
        print(f"✅ {label}: {len(result.products)} products (from_cache={result.from_cache})")
    else:
        print(f"❌ {label}: {result.error.message}")
    return result


async def main():
    config = ClientSettings().to_config()

    async with CatalogClient(config) as c:
        # Start one load, then a forced refresh before it finishes.
        # The first request is cancelled and its caller gets the refresh's outcome.
        print("\n⚡ Starting two overlapping loads...")
        first = asyncio.create_task(load(c, "first", force_refresh=False))
        await asyncio.sleep(0)
        second = asyncio.create_task(load(c, "second", force_refresh=True))
        a, b = await asyncio.gather(first, second)

        print("\n📦 Same outcome for both callers:", a.products == b.products)
        print("🧾 Status:", c.status())


if __name__ == "__main__":
    asyncio.run(main())
