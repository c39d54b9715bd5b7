def _document(**overrides):
    document = {
        "kind": "invoice",
        "id": "inv-1",
        "number": "INV-2024-0001",
        "date": "2024-05-18",
        "placeOfSupply": "Maharashtra (27)",
        "items": [{"id": "1", "qty": 2, "rate": 100, "taxRate": 18}],
    }
    document.update(overrides)
    return document


def test_line_item_endpoint(client):
    response = client.post(
        "/v1/compute/line-item",
        json={"item": {"qty": 2, "rate": 100, "taxRate": 18}, "isInterState": True},
    )
    assert response.status_code == 200
    assert response.json() == {"taxableValue": 200, "cgst": 0, "sgst": 0, "igst": 36, "total": 236}


def test_totals_endpoint_uses_seller_state(client):
    response = client.post("/v1/compute/totals", json={"document": _document()})
    assert response.status_code == 200
    body = response.json()
    assert body["isInterState"] is True
    assert body["supplyStateCode"] == "27"
    assert body["breakdown"]["igst"] == 36
    assert body["total"] == 236
    assert body["formattedTotal"] == "₹236.00"
    assert body["amountInWords"] == "two hundred and thirty six rupees only"


def test_totals_endpoint_seller_override(client):
    response = client.post(
        "/v1/compute/totals",
        json={"document": _document(), "sellerStateCode": "27"},
    )
    body = response.json()
    assert body["isInterState"] is False
    assert body["breakdown"]["cgst"] == 18


def test_totals_endpoint_clamps_but_keeps_raw_breakdown(client):
    response = client.post(
        "/v1/compute/totals",
        json={"document": _document(discountValue=1000)},
    )
    body = response.json()
    assert body["total"] == 0
    assert body["breakdown"]["finalTotal"] == -764
    assert body["amountInWords"] == "zero rupees only"


def test_totals_endpoint_reports_words_overflow(client):
    response = client.post(
        "/v1/compute/totals",
        json={"document": _document(items=[{"qty": 1, "rate": 2000000000, "taxRate": 0}])},
    )
    body = response.json()
    assert body["total"] == 2000000000
    assert body["amountInWords"] is None


def test_totals_endpoint_requires_kind(client):
    document = _document()
    document.pop("kind")
    response = client.post("/v1/compute/totals", json={"document": document})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_words_endpoint(client):
    response = client.post("/v1/compute/words", json={"amount": 123456})
    assert response.status_code == 200
    assert response.json() == {
        "rupees": 123456,
        "words": "one lakh twenty three thousand four hundred and fifty six rupees only",
    }


def test_words_endpoint_overflow(client):
    response = client.post("/v1/compute/words", json={"amount": 1000000000})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "AMOUNT_OUT_OF_RANGE"


def test_format_endpoint(client):
    response = client.post("/v1/compute/format", json={"amount": 1234567.5})
    assert response.json() == {"formatted": "₹12,34,567.50"}
