# tests/test_concurrency.py
import asyncio

import httpx

from productsvc.database import ProductStore
from productsvc.main import create_app

PAYLOAD_A = {"sku": "A", "manufacturer": "Alpha", "category_id": 1, "weight": 1, "some_other_id": 1}
PAYLOAD_B = {"sku": "B", "manufacturer": "Bravo", "category_id": 2, "weight": 2, "some_other_id": 2}


def _client(app):
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


async def _write(ac, payload):
    return await ac.post("/products/7/details", json=payload)


async def _read(ac):
    return await ac.get("/products/7")


async def _mixed_traffic(app):
    async with _client(app) as ac:
        await _write(ac, PAYLOAD_A)
        tasks = []
        for i in range(40):
            tasks.append(_write(ac, PAYLOAD_A if i % 2 else PAYLOAD_B))
            tasks.append(_read(ac))
            tasks.append(_read(ac))
        return await asyncio.gather(*tasks)


def test_concurrent_reads_never_see_mixed_record():
    app = create_app(ProductStore())
    results = asyncio.run(_mixed_traffic(app))

    assert all(r.status_code == 200 for r in results)
    whole = [dict(PAYLOAD_A, product_id=7), dict(PAYLOAD_B, product_id=7)]
    for r in results:
        assert r.json() in whole


async def _writers_on_distinct_ids(app, n):
    async with _client(app) as ac:
        await asyncio.gather(*[
            ac.post(f"/products/{i}/details", json=dict(PAYLOAD_A, sku=f"S{i}"))
            for i in range(1, n + 1)
        ])
        return await asyncio.gather(*[ac.get(f"/products/{i}") for i in range(1, n + 1)])


def test_concurrent_writes_to_distinct_ids():
    store = ProductStore()
    app = create_app(store)
    reads = asyncio.run(_writers_on_distinct_ids(app, 25))

    assert len(store) == 25
    for i, r in enumerate(reads, start=1):
        assert r.status_code == 200
        assert r.json()["product_id"] == i
        assert r.json()["sku"] == f"S{i}"
