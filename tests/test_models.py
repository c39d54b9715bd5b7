from billing.models.documents import DiscountType, DocumentKind, Invoice, Quotation, parse_document
from billing.utils.ids import generate_document_id, generate_document_number, next_document_number


def _blob(**overrides):
    blob = {
        "id": "inv-1",
        "number": "INV-2024-001",
        "date": "2024-05-18",
        "dueDate": "",
        "status": "Paid",
        "clientId": "c1",
        "items": [{"id": "1", "description": "Web design", "hsn": "9983", "qty": 1, "rate": 15000, "taxRate": 18}],
        "placeOfSupply": "Delhi (07)",
    }
    blob.update(overrides)
    return blob


def test_untagged_blob_is_tagged_from_its_collection():
    document = parse_document(_blob(), DocumentKind.INVOICE)
    assert isinstance(document, Invoice)
    assert document.due_date is None
    assert document.discount_type is DiscountType.FIXED
    assert document.additional_charges == []


def test_quotation_blob_keeps_valid_until():
    document = parse_document(
        _blob(id="qt-1", status="Draft", validUntil="2024-06-20"),
        DocumentKind.QUOTATION,
    )
    assert isinstance(document, Quotation)
    assert document.valid_until.isoformat() == "2024-06-20"


def test_unknown_discount_type_is_treated_as_fixed():
    document = parse_document(_blob(discountType="bogus", discountValue="12"), DocumentKind.INVOICE)
    assert document.discount_type is DiscountType.FIXED
    assert document.discount_value == 12


def test_dump_uses_camel_case():
    document = parse_document(_blob(), DocumentKind.INVOICE)
    dumped = document.model_dump(by_alias=True, mode="json")
    assert dumped["kind"] == "invoice"
    assert dumped["placeOfSupply"] == "Delhi (07)"
    assert dumped["items"][0]["taxRate"] == 18


def test_document_numbers():
    assert generate_document_number(DocumentKind.INVOICE, 7, 2024) == "INV-2024-0007"
    existing = ["QT-2024-0003", "QT-2024-0010", "QT-2023-0099", "custom"]
    assert next_document_number(DocumentKind.QUOTATION, existing, 2024) == "QT-2024-0011"
    assert next_document_number(DocumentKind.QUOTATION, [], 2025) == "QT-2025-0001"


def test_document_ids_are_prefixed():
    assert generate_document_id(DocumentKind.INVOICE).startswith("inv-")
    assert generate_document_id(DocumentKind.QUOTATION).startswith("qt-")
