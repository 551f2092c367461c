import asyncio

import httpx

from sdk.pyproducts import ProductClient

PRODUCT_ID = 7

PAYLOAD_A = {"sku": "A", "manufacturer": "Alpha", "category_id": 1, "weight": 1, "some_other_id": 1}
PAYLOAD_B = {"sku": "B", "manufacturer": "Bravo", "category_id": 2, "weight": 2, "some_other_id": 2}


async def writer(c, ac, rounds):
    for i in range(rounds):
        payload = PAYLOAD_A if i % 2 == 0 else PAYLOAD_B
        await c.put_details_async(PRODUCT_ID, payload, ac)


async def reader(c, ac, rounds):
    torn = 0
    for _ in range(rounds):
        p = await c.get_product_async(PRODUCT_ID, ac)
        seen = {k: v for k, v in p.items() if k != "product_id"}
        if seen not in (PAYLOAD_A, PAYLOAD_B):
            torn += 1
            print(f"❌ mixed record observed: {p}")
    return torn


async def main():
    c = ProductClient()

    async with httpx.AsyncClient(timeout=c.timeout) as ac:
        await c.put_details_async(PRODUCT_ID, PAYLOAD_A, ac)

        print("\n⚡ Two writers alternating payloads while four readers poll...")
        results = await asyncio.gather(
            writer(c, ac, 50),
            writer(c, ac, 50),
            *[reader(c, ac, 100) for _ in range(4)],
        )

        torn = sum(r for r in results if r)
        if torn:
            print(f"\n❌ {torn} reads saw a partially written record")
        else:
            print("\n✅ every read saw one whole payload")

        print("\n📦 Final product state:", await c.get_product_async(PRODUCT_ID, ac))


if __name__ == "__main__":
    asyncio.run(main())
