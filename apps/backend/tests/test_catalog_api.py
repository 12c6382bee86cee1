import asyncio
import sys
import time
import unittest
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from chaos_catalog import main
from chaos_catalog.chaos import FaultPolicy


class CatalogApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self._old_policy = main.policy_store.replace(FaultPolicy.disabled())
        self.client = TestClient(main.app)

    def tearDown(self) -> None:
        main.policy_store.replace(self._old_policy)

    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "service": "Chaos Catalog"})

    def test_search_returns_camel_case_items(self):
        before = int(time.time() * 1000)
        response = self.client.get("/api/search", params={"q": "ssd"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["query"], "ssd")
        self.assertEqual(body["count"], 3)
        self.assertEqual(len(body["items"]), body["count"])
        self.assertEqual(
            body["items"][0],
            {"id": "p-100", "name": "NVMe SSD 1TB", "category": "storage", "priceCents": 6900},
        )
        self.assertGreaterEqual(body["timestamp"], before)

    def test_search_without_query_lists_everything(self):
        body = self.client.get("/api/search").json()

        self.assertEqual(body["query"], "")
        self.assertEqual(body["count"], 10)
        self.assertEqual(body["items"][-1]["id"], "p-109")

    def test_product_lookup(self):
        response = self.client.get("/api/product/p-102")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"id": "p-102", "name": "DDR5 RAM 16GB", "category": "memory", "priceCents": 5200},
        )

    def test_unknown_product_is_404(self):
        response = self.client.get("/api/product/p-999")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"detail": "no such product"})

    def test_checkout_is_deterministic_and_skips_unknown_ids(self):
        payload = {"productIds": ["p-100", "unknown", "p-102"], "email": "demo@example.com"}

        first = self.client.post("/api/checkout", json=payload)
        second = self.client.post("/api/checkout", json={"productIds": payload["productIds"]})

        self.assertEqual(first.status_code, 200)
        body = first.json()
        self.assertEqual(body["total"], 12100)
        self.assertEqual(len(body["orderId"]), 16)
        self.assertEqual(body["orderId"], second.json()["orderId"])
        self.assertIn("timestamp", body)

    def test_checkout_order_matters(self):
        forward = self.client.post("/api/checkout", json={"productIds": ["p-100", "p-102"]}).json()
        reverse = self.client.post("/api/checkout", json={"productIds": ["p-102", "p-100"]}).json()

        self.assertEqual(forward["total"], reverse["total"])
        self.assertEqual(forward["orderId"], "97e6e31d9869bede")
        self.assertNotEqual(forward["orderId"], reverse["orderId"])

    def test_empty_checkout(self):
        body = self.client.post("/api/checkout", json={}).json()
        self.assertEqual(body["total"], 0)
        self.assertEqual(body["orderId"], "8349de51e5ec7850")

    def test_full_error_rate_fails_every_catalog_route(self):
        main.policy_store.replace(FaultPolicy(error_rate=1.0))

        search = self.client.get("/api/search", params={"q": "ram"})
        product = self.client.get("/api/product/p-100")
        checkout = self.client.post("/api/checkout", json={"productIds": ["p-100"]})

        for response in (search, product, checkout):
            self.assertEqual(response.status_code, 500)
        self.assertEqual(search.json()["detail"], "chaos: injected error for GET /api/search")
        self.assertEqual(
            product.json()["detail"],
            "chaos: injected error for GET /api/product/{product_id}",
        )
        self.assertEqual(
            checkout.json()["detail"],
            "chaos: injected error for POST /api/checkout",
        )

    def test_injected_error_wins_over_not_found(self):
        main.policy_store.replace(FaultPolicy(error_rate=1.0))
        response = self.client.get("/api/product/p-999")
        self.assertEqual(response.status_code, 500)

    def test_base_delay_adds_latency(self):
        main.policy_store.replace(FaultPolicy(base_delay_ms=50))

        started = time.perf_counter()
        response = self.client.get("/api/product/p-100")
        elapsed = time.perf_counter() - started

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["X-Chaos-Delay-Ms"], "50")
        self.assertGreaterEqual(elapsed, 0.045)

    def test_delay_suspends_only_the_issuing_request(self):
        main.policy_store.replace(FaultPolicy(base_delay_ms=300))

        async def fire(count: int) -> list[httpx.Response]:
            transport = httpx.ASGITransport(app=main.app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                return await asyncio.gather(
                    *(client.get("/api/product/p-100") for _ in range(count))
                )

        started = time.perf_counter()
        responses = asyncio.run(fire(5))
        elapsed = time.perf_counter() - started

        self.assertTrue(all(r.status_code == 200 for r in responses))
        self.assertGreaterEqual(elapsed, 0.29)
        self.assertLess(elapsed, 1.0)

    def test_chaos_policy_round_trip(self):
        response = self.client.get("/api/chaos")
        self.assertEqual(
            response.json(),
            {"latencyMs": 0, "jitterMs": 0, "errorRate": 0.0, "active": False},
        )

        updated = self.client.put("/api/chaos", json={"latencyMs": 20, "errorRate": 0.25})
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(
            updated.json(),
            {"latencyMs": 20, "jitterMs": 0, "errorRate": 0.25, "active": True},
        )
        self.assertEqual(main.policy_store.current(), FaultPolicy(base_delay_ms=20, error_rate=0.25))

        partial = self.client.put("/api/chaos", json={"jitterMs": 5})
        self.assertEqual(partial.json()["latencyMs"], 20)
        self.assertEqual(partial.json()["jitterMs"], 5)

    def test_chaos_policy_rejects_out_of_range_values(self):
        self.assertEqual(self.client.put("/api/chaos", json={"errorRate": 1.5}).status_code, 422)
        self.assertEqual(self.client.put("/api/chaos", json={"latencyMs": -1}).status_code, 422)
        self.assertFalse(main.policy_store.current().is_active)

    def test_chaos_control_is_never_fault_injected(self):
        main.policy_store.replace(FaultPolicy(error_rate=1.0))

        response = self.client.put("/api/chaos", json={"errorRate": 0.0})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/api/search").status_code, 200)


if __name__ == "__main__":
    unittest.main()
