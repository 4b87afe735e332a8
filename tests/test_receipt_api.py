"""Receipt drafting endpoints."""

from __future__ import annotations


def test_totals_endpoint_computes_gst_and_due(client, merchant, auth) -> None:
    response = client.post(
        "/api/receipts/totals",
        json={
            "items": [{"description": "Widget", "quantity": 2, "price": 50, "advanceAmount": 40}],
            "paymentStatus": "advance",
            "gstPercentage": 18,
        },
        headers=auth(merchant.id),
    )

    assert response.status_code == 200
    assert response.json() == {"subtotal": 100.0, "gstAmount": 18.0, "total": 118.0, "dueTotal": 78.0}


def test_totals_endpoint_requires_auth(client) -> None:
    response = client.post("/api/receipts/totals", json={"items": []})

    assert response.status_code == 401


def test_validate_endpoint_returns_normalized_body(client, merchant, auth) -> None:
    response = client.post(
        "/api/receipts/validate",
        json={
            "receiptNumber": "REC-0100",
            "date": "2026-10-18",
            "customerName": "Ravi Kumar",
            "customerContact": "9988776655",
            "paymentType": "online",
            "paymentStatus": "due",
            "total": 100,
            "dueTotal": 100,
            "items": [{"description": "Widget", "quantity": 2, "price": 50, "dueAmount": 100}],
        },
        headers=auth(merchant.id),
    )

    assert response.status_code == 200
    assert response.json()["paymentType"] == "cash"


def test_validate_endpoint_reports_field_errors(client, merchant, auth) -> None:
    response = client.post(
        "/api/receipts/validate",
        json={"receiptNumber": "REC-0101", "paymentType": "cash", "paymentStatus": "full", "items": []},
        headers=auth(merchant.id),
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid receipt"
    assert body["fieldErrors"]["items"] == "At least one item is required"
    assert body["fieldErrors"]["customerName"] == "Required"


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}
