"""
Integration tests for customer endpoints
"""

from uuid import uuid4

import pytest

from conftest import ADDRESS

pytestmark = pytest.mark.integration


def customer_payload(email: str = "jordan@example.com", **overrides) -> dict:
    payload = {
        "first_name": "Jordan",
        "last_name": "Lee",
        "email": email,
        "phone": "5550123456",
        "address": ADDRESS,
        "property_type": "APARTMENT",
    }
    payload.update(overrides)
    return payload


async def create_customer(client, headers, **kwargs) -> dict:
    response = await client.post("/api/v1/customers/", json=customer_payload(**kwargs), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateCustomer:
    async def test_create(self, client, auth_headers):
        response = await client.post(
            "/api/v1/customers/", json=customer_payload(), headers=auth_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["email"] == "jordan@example.com"
        assert body["data"]["zip_code"] == "62701"
        assert body["data"]["status"] == "POTENTIAL"

    async def test_duplicate_email_conflicts(self, client, auth_headers):
        await create_customer(client, auth_headers)
        response = await client.post(
            "/api/v1/customers/", json=customer_payload("JORDAN@example.com"), headers=auth_headers
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Customer already exists with this email"

    async def test_same_email_for_another_business(self, client, auth_headers, other_auth_headers):
        await create_customer(client, auth_headers)
        response = await client.post(
            "/api/v1/customers/", json=customer_payload(), headers=other_auth_headers
        )

        assert response.status_code == 201

    async def test_short_zip_rejected(self, client, auth_headers):
        payload = customer_payload(address={**ADDRESS, "zip_code": "123"})
        response = await client.post("/api/v1/customers/", json=payload, headers=auth_headers)

        assert response.status_code == 422
        assert any(e.startswith("address.zip_code") for e in response.json()["errors"])


class TestListCustomers:
    async def test_pagination_and_search(self, client, auth_headers):
        for i in range(3):
            await create_customer(client, auth_headers, email=f"c{i}@example.com")
        await create_customer(client, auth_headers, email="casey@example.com", first_name="Casey")

        response = await client.get(
            "/api/v1/customers/", params={"limit": 2, "page": 1}, headers=auth_headers
        )
        data = response.json()["data"]
        assert response.status_code == 200
        assert len(data["customers"]) == 2
        assert data["meta"] == {"total": 4, "page": 1, "limit": 2, "total_pages": 2}

        response = await client.get(
            "/api/v1/customers/", params={"search": "casey"}, headers=auth_headers
        )
        customers = response.json()["data"]["customers"]
        assert [c["email"] for c in customers] == ["casey@example.com"]
        assert customers[0]["booking_count"] == 0

    async def test_oversized_limit_capped(self, client, auth_headers):
        await create_customer(client, auth_headers)

        response = await client.get(
            "/api/v1/customers/", params={"limit": 500}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["meta"]["limit"] == 100
        assert response.json()["data"]["meta"]["total"] == 1

    async def test_zero_limit_rejected(self, client, auth_headers):
        response = await client.get(
            "/api/v1/customers/", params={"limit": 0}, headers=auth_headers
        )

        assert response.status_code == 422

    async def test_search_wildcards_are_literal(self, client, auth_headers):
        await create_customer(client, auth_headers, email="jo_dan@example.com")
        await create_customer(client, auth_headers, email="jordan@example.com")

        response = await client.get(
            "/api/v1/customers/", params={"search": "jo_d"}, headers=auth_headers
        )
        assert [c["email"] for c in response.json()["data"]["customers"]] == [
            "jo_dan@example.com"
        ]

        response = await client.get(
            "/api/v1/customers/", params={"search": "%"}, headers=auth_headers
        )
        assert response.json()["data"]["meta"]["total"] == 0

    async def test_invalid_sort_field(self, client, auth_headers):
        response = await client.get(
            "/api/v1/customers/", params={"sort_by": "password_hash"}, headers=auth_headers
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Invalid list parameters"

    async def test_only_own_customers_listed(self, client, auth_headers, other_auth_headers):
        await create_customer(client, auth_headers)

        response = await client.get("/api/v1/customers/", headers=other_auth_headers)

        assert response.json()["data"]["meta"]["total"] == 0


class TestCustomerDetail:
    async def test_detail_with_notes(self, client, auth_headers):
        customer = await create_customer(client, auth_headers)
        response = await client.post(
            f"/api/v1/customers/{customer['id']}/notes",
            json={"content": "Has a dog"},
            headers=auth_headers,
        )
        assert response.status_code == 201

        response = await client.get(f"/api/v1/customers/{customer['id']}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert [note["content"] for note in data["notes"]] == ["Has a dog"]
        assert data["bookings"] == []

    async def test_other_business_gets_not_found(self, client, auth_headers, other_auth_headers):
        customer = await create_customer(client, auth_headers)

        for method in ("GET", "DELETE"):
            response = await client.request(
                method, f"/api/v1/customers/{customer['id']}", headers=other_auth_headers
            )
            assert response.status_code == 404
            assert response.json()["success"] is False

        response = await client.put(
            f"/api/v1/customers/{customer['id']}",
            json={"first_name": "Mallory"},
            headers=other_auth_headers,
        )
        assert response.status_code == 404

    async def test_unknown_id_same_response(self, client, auth_headers):
        response = await client.get(f"/api/v1/customers/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404
        assert "Customer" in response.json()["message"]


class TestUpdateDeleteCustomer:
    async def test_partial_update(self, client, auth_headers):
        customer = await create_customer(client, auth_headers)

        response = await client.put(
            f"/api/v1/customers/{customer['id']}",
            json={"status": "ACTIVE", "address": {**ADDRESS, "city": "Shelbyville"}},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "ACTIVE"
        assert data["city"] == "Shelbyville"
        assert data["first_name"] == "Jordan"

    async def test_delete(self, client, auth_headers):
        customer = await create_customer(client, auth_headers)

        response = await client.delete(f"/api/v1/customers/{customer['id']}", headers=auth_headers)
        assert response.status_code == 200

        response = await client.get(f"/api/v1/customers/{customer['id']}", headers=auth_headers)
        assert response.status_code == 404
