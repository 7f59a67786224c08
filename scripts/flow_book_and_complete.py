#!/usr/bin/env python3
"""
End-to-end booking flow against a running server.

This script only orchestrates API calls; all rules live in the backend.

Usage:
    python scripts/flow_book_and_complete.py --email owner@sparkle-cleaning.com --password Sparkle@123

Flow:
    1. Login as the business
    2. Create a service with two add-ons
    3. Create a customer
    4. Book the service with both add-ons
    5. Confirm, start and complete the booking
    6. Leave a review
    7. Try to delete the service (expected: 409)
"""

import argparse
import json
import sys
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import httpx

BASE_URL = "http://localhost:8000"


def login(client: httpx.Client, email: str, password: str) -> str:
    """Login and return the access token."""
    response = client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    if response.status_code != 200:
        print(f"ERROR: Login failed for {email}: {response.status_code}")
        print(response.text)
        sys.exit(1)
    return response.json()["data"]["access_token"]


def api_request(
    client: httpx.Client, token: str, method: str, endpoint: str, data: dict | None = None
) -> dict:
    """Make an authenticated API request and return status plus envelope."""
    response = client.request(
        method,
        endpoint,
        headers={"Authorization": f"Bearer {token}"},
        json=data,
        follow_redirects=True,
    )
    return {"status": response.status_code, "body": response.json() if response.text else {}}


def print_step(step: int, title: str):
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(result: dict, fields: list[str] | None = None) -> bool:
    """Print the envelope's data (optionally filtered); False on an error status."""
    if result["status"] >= 400:
        print(f"ERROR ({result['status']}): {json.dumps(result['body'], indent=2)}")
        return False

    data = result["body"].get("data") or {}
    print(f"Status: {result['status']} - {result['body'].get('message')}")
    if fields:
        data = {k: data.get(k) for k in fields if k in data}
    print(json.dumps(data, indent=2))
    return True


def main():
    parser = argparse.ArgumentParser(description="Book, complete and review a cleaning")
    parser.add_argument("--email", required=True, help="Business login email")
    parser.add_argument("--password", required=True, help="Business password")
    parser.add_argument("--base-url", default=BASE_URL, help="API base URL")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=10.0) as client:
        print_step(1, "Login as business")
        token = login(client, args.email, args.password)
        print(f"Logged in as {args.email}")

        print_step(2, "Create service with add-ons")
        service = api_request(client, token, "POST", "/api/v1/services/", {
            "name": f"Standard Clean {uuid4().hex[:6]}",
            "category": "REGULAR",
            "base_price": "100.00",
            "base_duration": 60,
            "add_ons": [
                {"name": "Inside fridge", "price": "20.00", "duration": 15},
                {"name": "Balcony", "price": "10.00", "duration": 5},
            ],
        })
        if not print_result(service, ["id", "name", "base_price", "add_ons"]):
            sys.exit(1)
        service_data = service["body"]["data"]

        print_step(3, "Create customer")
        customer = api_request(client, token, "POST", "/api/v1/customers/", {
            "first_name": "Jordan",
            "last_name": "Lee",
            "email": f"jordan.{uuid4().hex[:6]}@example.com",
            "phone": "5550123456",
            "address": {
                "street": "42 Elm St",
                "city": "Springfield",
                "state": "IL",
                "zip_code": "62701",
            },
        })
        if not print_result(customer, ["id", "email", "status"]):
            sys.exit(1)

        print_step(4, "Create booking")
        booking = api_request(client, token, "POST", "/api/v1/bookings/", {
            "customer_id": customer["body"]["data"]["id"],
            "service_id": service_data["id"],
            "add_on_ids": [add_on["id"] for add_on in service_data["add_ons"]],
            "scheduled_date": (datetime.now(UTC) + timedelta(days=2)).isoformat(),
        })
        if not print_result(booking, ["id", "status", "total_price", "estimated_duration"]):
            sys.exit(1)
        booking_id = booking["body"]["data"]["id"]

        print_step(5, "Move booking through its lifecycle")
        for status in ("CONFIRMED", "IN_PROGRESS"):
            result = api_request(
                client, token, "PATCH", f"/api/v1/bookings/{booking_id}/status", {"status": status}
            )
            if not print_result(result, ["id", "status"]):
                sys.exit(1)
        result = api_request(client, token, "PATCH", f"/api/v1/bookings/{booking_id}/status", {
            "status": "COMPLETED",
            "actual_duration": 85,
            "after_photos": ["https://example.com/after-1.jpg"],
        })
        if not print_result(result, ["id", "status", "actual_duration", "completed_at"]):
            sys.exit(1)

        print_step(6, "Leave a review")
        review = api_request(
            client, token, "POST", f"/api/v1/bookings/{booking_id}/review",
            {"rating": 5, "comment": "Spotless"},
        )
        if not print_result(review, ["id", "rating"]):
            sys.exit(1)

        print_step(7, "Try to delete the booked service")
        result = api_request(client, token, "DELETE", f"/api/v1/services/{service_data['id']}")
        if result["status"] != 409:
            print(f"ERROR: expected 409, got {result['status']}")
            sys.exit(1)
        print(f"Refused as expected: {result['body'].get('message')}")

    print("\n" + "="*60)
    print("FULL FLOW COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()
