"""Tests for the FastAPI contrib: routes, envelopes and error mapping."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storefront_catalog import Settings
from storefront_catalog.contrib.fastapi import create_app
from storefront_core import InMemoryCollection, StorageUnavailableError


@pytest.fixture
def client() -> TestClient:
    app = create_app(
        Settings(log_level="DEBUG"),
        products=InMemoryCollection(),
        enquiries=InMemoryCollection(),
    )
    return TestClient(app)


def _create_enquiry(client: TestClient, body: dict) -> dict:
    response = client.post("/api/enquiries", json=body)
    assert response.status_code == 201
    return response.json()["enquiry"]


class TestEnquiryRoutes:
    def test_create_and_fetch(self, client: TestClient, new_enquiry) -> None:
        response = client.post("/api/enquiries", json=new_enquiry())

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Enquiry created successfully"
        enquiry_id = body["enquiry"]["id"]

        fetched = client.get(f"/api/enquiries/{enquiry_id}")
        assert fetched.status_code == 200
        assert fetched.json()["email"] == "asha.rao@example.com"
        assert fetched.json()["createdAt"] == body["enquiry"]["createdAt"]

    def test_validation_failure(self, client: TestClient) -> None:
        response = client.post("/api/enquiries", json={"phone": "123"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert "Customer name is required" in body["details"]
        assert "Please provide a valid 10-digit phone number" in body["details"]

    def test_identifier_errors(self, client: TestClient) -> None:
        bad = client.get("/api/enquiries/not-an-id")
        missing = client.get("/api/enquiries/65a1f0c2e4b0a1b2c3d4e5f6")

        assert bad.status_code == 400
        assert bad.json() == {"error": "Invalid enquiry ID format"}
        assert missing.status_code == 404
        assert missing.json() == {"error": "Enquiry not found"}

    def test_list_with_filters_and_pagination(
        self, client: TestClient, new_enquiry
    ) -> None:
        for priority in ["urgent", "low", "urgent", "urgent"]:
            _create_enquiry(client, new_enquiry(priority=priority))

        response = client.get(
            "/api/enquiries", params={"priority": "urgent", "page": 2, "limit": 2}
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["enquiries"]) == 1
        assert body["pagination"] == {
            "current": 2,
            "pages": 2,
            "total": 3,
            "hasNext": False,
            "hasPrev": True,
        }

    def test_repeated_filter_param(self, client: TestClient, new_enquiry) -> None:
        for priority in ["urgent", "low", "high"]:
            _create_enquiry(client, new_enquiry(priority=priority))

        response = client.get("/api/enquiries?priority=urgent&priority=high")

        assert response.json()["pagination"]["total"] == 2

    @pytest.mark.parametrize(
        "query",
        ["page=0", "limit=abc", "sortBy=password", "status=archived", "dateFrom=soon"],
    )
    def test_bad_query_parameters(self, client: TestClient, query: str) -> None:
        response = client.get(f"/api/enquiries?{query}")

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_status_priority_and_complete(self, client: TestClient, new_enquiry) -> None:
        enquiry = _create_enquiry(client, new_enquiry())
        url = f"/api/enquiries/{enquiry['id']}"

        status = client.put(f"{url}/status", json={"status": "in-progress"})
        priority = client.put(f"{url}/priority", json={"priority": "high"})
        complete = client.post(f"{url}/complete", json={"notes": "done"})

        assert status.json()["message"] == "Status updated successfully"
        assert priority.json()["enquiry"]["priority"] == "high"
        assert complete.json()["message"] == "Enquiry marked as completed"
        assert complete.json()["enquiry"]["status"] == "completed"
        assert complete.json()["enquiry"]["notes"] == "done"

    def test_invalid_status_message(self, client: TestClient, new_enquiry) -> None:
        enquiry = _create_enquiry(client, new_enquiry())

        response = client.put(
            f"/api/enquiries/{enquiry['id']}/status", json={"status": "closed"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "Valid status is required (pending, in-progress, completed, cancelled)"
        }

    @pytest.mark.parametrize(
        ("path", "body"),
        [
            ("status", {"status": ["completed"]}),
            ("status", {"status": {"a": 1}}),
            ("priority", {"priority": ["high"]}),
            ("priority", {"priority": {"a": 1}}),
        ],
    )
    def test_non_string_choices_are_rejected(
        self, client: TestClient, new_enquiry, path: str, body: dict
    ) -> None:
        enquiry = _create_enquiry(client, new_enquiry())

        response = client.put(f"/api/enquiries/{enquiry['id']}/{path}", json=body)

        assert response.status_code == 400
        assert response.json()["error"].startswith(f"Valid {path} is required")

    def test_bulk_status_rejects_non_text_notes(
        self, client: TestClient, new_enquiry
    ) -> None:
        enquiry_id = _create_enquiry(client, new_enquiry())["id"]

        response = client.put(
            "/api/enquiries/bulk/status",
            json={"enquiryIds": [enquiry_id], "status": "completed", "notes": 5},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Notes must be text"}

    def test_bulk_status(self, client: TestClient, new_enquiry) -> None:
        ids = [_create_enquiry(client, new_enquiry())["id"] for _ in range(3)]

        response = client.put(
            "/api/enquiries/bulk/status",
            json={"enquiryIds": ids[:2], "status": "completed"},
        )

        assert response.json() == {
            "message": "2 enquiries updated successfully",
            "modifiedCount": 2,
            "matchedCount": 2,
        }
        missing = client.put("/api/enquiries/bulk/status", json={"status": "completed"})
        assert missing.status_code == 400
        assert missing.json() == {"error": "Valid enquiry IDs array is required"}

    def test_pending_priority_and_search(self, client: TestClient, new_enquiry) -> None:
        _create_enquiry(client, new_enquiry(name="Ravi", priority="urgent"))
        _create_enquiry(client, new_enquiry(name="Meera", city="Nagpur"))

        pending = client.get("/api/enquiries/pending/list").json()
        urgent = client.get("/api/enquiries/priority/urgent").json()
        search = client.get("/api/enquiries/search/nagpur").json()

        assert pending["count"] == 2
        assert pending["enquiries"][0]["name"] == "Ravi"
        assert urgent["message"] == "urgent priority enquiries fetched successfully"
        assert [e["name"] for e in urgent["enquiries"]] == ["Ravi"]
        assert search["searchTerm"] == "nagpur"
        assert [e["name"] for e in search["enquiries"]] == ["Meera"]
        invalid = client.get("/api/enquiries/priority/critical")
        assert invalid.status_code == 400
        assert invalid.json() == {"error": "Invalid priority level"}

    def test_export_csv(self, client: TestClient, new_enquiry) -> None:
        _create_enquiry(client, new_enquiry())

        response = client.get("/api/enquiries/export/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert (
            response.headers["content-disposition"]
            == "attachment; filename=enquiries.csv"
        )
        assert response.text.startswith("Name,Email,Phone,City,State")

    def test_stats_overview(self, client: TestClient, new_enquiry) -> None:
        _create_enquiry(client, new_enquiry(priority="urgent"))

        body = client.get("/api/enquiries/stats/overview").json()

        assert body["overview"]["totalEnquiries"] == 1
        assert body["overview"]["pendingCount"] == 1
        assert body["priorityStats"] == [{"_id": "urgent", "count": 1}]
        assert len(body["monthlyStats"]) == 1

    def test_delete(self, client: TestClient, new_enquiry) -> None:
        enquiry = _create_enquiry(client, new_enquiry())

        response = client.delete(f"/api/enquiries/{enquiry['id']}")

        assert response.json()["message"] == "Enquiry deleted successfully"
        assert client.get(f"/api/enquiries/{enquiry['id']}").status_code == 404


class TestProductRoutes:
    def test_product_lifecycle(self, client: TestClient, new_product) -> None:
        created = client.post("/api/products", json=new_product(stock=12))
        assert created.status_code == 201
        product_id = created.json()["product"]["id"]

        stock = client.put(f"/api/products/{product_id}/stock", json={"stock": 4})
        rating = client.post(f"/api/products/{product_id}/rating", json={"rating": 5})
        listed = client.get("/api/products", params={"stockStatus": "low-stock"})

        assert stock.json()["stockStatus"] == "low-stock"
        assert stock.json()["product"]["stock"] == 4
        assert rating.json()["product"]["ratings"] == {"average": 5.0, "count": 1}
        assert [p["id"] for p in listed.json()["products"]] == [product_id]

        deleted = client.delete(f"/api/products/{product_id}")
        assert deleted.json()["message"] == "Product deleted successfully"
        assert client.get(f"/api/products/{product_id}").json() == {
            "error": "Product not found"
        }
        assert client.get("/api/products").json()["pagination"]["total"] == 0

    def test_operation_errors(self, client: TestClient, new_product) -> None:
        product_id = client.post("/api/products", json=new_product()).json()["product"][
            "id"
        ]

        stock = client.put(f"/api/products/{product_id}/stock", json={"stock": -2})
        rating = client.post(f"/api/products/{product_id}/rating", json={"rating": 9})

        assert stock.status_code == 400
        assert stock.json() == {"error": "Valid stock quantity is required"}
        assert rating.json() == {"error": "Rating must be between 1 and 5"}

    def test_stats(self, client: TestClient, new_product) -> None:
        client.post("/api/products", json=new_product(stock=0, featured=True))

        body = client.get("/api/products/stats/overview").json()

        assert body == {
            "totalProducts": 1,
            "outOfStock": 1,
            "lowStock": 0,
            "featuredProducts": 1,
            "categories": [{"_id": "Lighting", "count": 1}],
        }


class _DownCollection(InMemoryCollection):
    async def find(self, *args, **kwargs):
        raise StorageUnavailableError("connection refused")


def test_storage_unavailable_maps_to_503() -> None:
    app = create_app(
        Settings(), products=_DownCollection(), enquiries=InMemoryCollection()
    )

    response = TestClient(app).get("/api/products")

    assert response.status_code == 503
    assert response.json() == {"error": "Storage unavailable", "retryable": False}


def test_collections_must_be_paired() -> None:
    with pytest.raises(ValueError):
        create_app(Settings(), products=InMemoryCollection())
