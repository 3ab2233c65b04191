"""
Test API fatture: bozza, emissione, stati, note di rettifica e XML
"""
import xml.etree.ElementTree as ET
from datetime import date, timedelta
from decimal import Decimal

import pytest

ISSUER = {
    "ragione_sociale": "Azienda Test SRL",
    "indirizzo": {"street": "Via Roma 123", "city": "Roma", "province": "RM", "postal_code": "00100"},
    "partita_iva": "12345678903",
    "regime_fiscale": "RF01",
}

PROFESSIONAL = {
    "ragione_sociale": "Studio Rossi",
    "partita_iva": "01234567897",
    "codice_fiscale": "RSSMRA85T10A562S",
    "client_type": "Professional",
    "address": {"street": "Via Roma 1", "city": "Roma", "province": "RM", "postal_code": "00100"},
    "subject_to_ritenuta": True,
}

TODAY = date.today()


def invoice_payload(client_id, **kwargs):
    payload = {
        "client_id": client_id,
        "invoice_date": TODAY.isoformat(),
        "due_date": (TODAY + timedelta(days=30)).isoformat(),
        "items": [{"description": "Consulenza", "quantity": "1", "unit_price": "1000.00", "iva_rate": 22}],
        "payment_info": {"iban": "IT60X0542811101000000123456"},
    }
    payload.update(kwargs)
    return payload


@pytest.fixture
def client_id(api_client):
    api_client.put("/api/v1/issuer-profile", json=ISSUER)
    return api_client.post("/api/v1/clients/", json=PROFESSIONAL).json()["id"]


@pytest.fixture
def draft(api_client, client_id):
    return api_client.post("/api/v1/invoices/", json=invoice_payload(client_id)).json()


def test_create_invoice(api_client, client_id):
    response = api_client.post("/api/v1/invoices/", json=invoice_payload(client_id))

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "Draft"
    assert body["invoice_number"] is None
    assert Decimal(body["imponibile_total"]) == Decimal("1000.00")
    assert Decimal(body["iva_total"]) == Decimal("220.00")
    assert Decimal(body["ritenuta_amount"]) == Decimal("200.00")
    assert Decimal(body["total_due"]) == Decimal("1020.00")


def test_create_invoice_unknown_client(api_client):
    response = api_client.post(
        "/api/v1/invoices/", json=invoice_payload("00000000-0000-0000-0000-000000000000")
    )

    assert response.status_code == 404


def test_create_invoice_fiscal_errors(api_client, client_id):
    items = [{"description": "Esportazione", "quantity": "1", "unit_price": "100.00", "iva_rate": 0}]
    response = api_client.post("/api/v1/invoices/", json=invoice_payload(client_id, items=items))

    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "VALIDATION_ERROR"
    assert [e["field"] for e in body["details"]["errors"]] == ["items[0].natura"]


def test_create_invoice_invalid_iban(api_client, client_id):
    response = api_client.post(
        "/api/v1/invoices/", json=invoice_payload(client_id, payment_info={"iban": "DE89370400440532013000"})
    )

    assert response.status_code == 400
    assert response.json()["details"]["errors"][0]["field"] == "payment_info.iban"


def test_create_invoice_rejects_negative_quantity(api_client, client_id):
    items = [{"description": "Consulenza", "quantity": "-1", "unit_price": "10.00"}]
    response = api_client.post("/api/v1/invoices/", json=invoice_payload(client_id, items=items))

    assert response.status_code == 422


def test_get_invoices_with_filters(api_client, client_id, draft):
    api_client.post(f"/api/v1/invoices/{draft['id']}/issue")
    api_client.post("/api/v1/invoices/", json=invoice_payload(client_id))

    response = api_client.get("/api/v1/invoices/?status=Draft")

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert response.json()["invoices"][0]["status"] == "Draft"

    response = api_client.get(f"/api/v1/invoices/?client_id={client_id}")
    assert response.json()["total"] == 2


def test_update_draft(api_client, client_id, draft):
    items = [{"description": "Consulenza", "quantity": "2", "unit_price": "500.00", "iva_rate": 10}]
    response = api_client.put(f"/api/v1/invoices/{draft['id']}", json=invoice_payload(client_id, items=items))

    assert response.status_code == 200
    assert Decimal(response.json()["iva_total"]) == Decimal("100.00")
    assert response.json()["id"] == draft["id"]


def test_issued_invoice_not_modifiable(api_client, client_id, draft):
    api_client.post(f"/api/v1/invoices/{draft['id']}/issue")

    response = api_client.put(f"/api/v1/invoices/{draft['id']}", json=invoice_payload(client_id))
    assert response.status_code == 400
    assert response.json()["error_code"] == "INVOICE_NOT_MODIFIABLE"

    assert api_client.delete(f"/api/v1/invoices/{draft['id']}").status_code == 400


def test_delete_draft(api_client, draft):
    assert api_client.delete(f"/api/v1/invoices/{draft['id']}").status_code == 204
    assert api_client.get(f"/api/v1/invoices/{draft['id']}").status_code == 404


def test_recalculate_draft(api_client, draft):
    response = api_client.post(f"/api/v1/invoices/{draft['id']}/recalculate")

    assert response.status_code == 200
    assert Decimal(response.json()["total_due"]) == Decimal("1020.00")


def test_issue_assigns_sequential_numbers(api_client, client_id, draft):
    second = api_client.post("/api/v1/invoices/", json=invoice_payload(client_id)).json()

    first_issue = api_client.post(f"/api/v1/invoices/{draft['id']}/issue")
    second_issue = api_client.post(f"/api/v1/invoices/{second['id']}/issue")

    assert first_issue.status_code == 200
    assert first_issue.json()["status"] == "Issued"
    assert first_issue.json()["invoice_number"] == f"{TODAY.year}/001"
    assert second_issue.json()["invoice_number"] == f"{TODAY.year}/002"


def test_issue_twice_rejected(api_client, draft):
    api_client.post(f"/api/v1/invoices/{draft['id']}/issue")

    response = api_client.post(f"/api/v1/invoices/{draft['id']}/issue")

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_STATE_TRANSITION"


def test_transition_to_issued_numbers_invoice(api_client, draft):
    response = api_client.post(f"/api/v1/invoices/{draft['id']}/transition", json={"new_status": "Issued"})

    assert response.status_code == 200
    assert response.json()["invoice"]["invoice_number"] == f"{TODAY.year}/001"
    assert response.json()["warning"] is None


def test_transition_flow(api_client, draft):
    api_client.post(f"/api/v1/invoices/{draft['id']}/issue")

    sent = api_client.post(f"/api/v1/invoices/{draft['id']}/transition", json={"new_status": "Sent"})
    paid = api_client.post(f"/api/v1/invoices/{draft['id']}/transition", json={"new_status": "Paid"})
    cancelled = api_client.post(f"/api/v1/invoices/{draft['id']}/transition", json={"new_status": "Cancelled"})

    assert sent.json()["invoice"]["status"] == "Sent"
    assert paid.json()["invoice"]["status"] == "Paid"
    assert cancelled.status_code == 400


def test_cancel_issued_invoice_warns(api_client, draft):
    api_client.post(f"/api/v1/invoices/{draft['id']}/issue")

    response = api_client.post(f"/api/v1/invoices/{draft['id']}/transition", json={"new_status": "Cancelled"})

    assert response.status_code == 200
    assert response.json()["invoice"]["status"] == "Cancelled"
    assert "nota di credito" in response.json()["warning"]


def test_credit_note(api_client, draft):
    issued = api_client.post(f"/api/v1/invoices/{draft['id']}/issue").json()

    response = api_client.post(f"/api/v1/invoices/{draft['id']}/credit-notes", json={"reason": "Storno totale"})

    assert response.status_code == 201
    note = response.json()
    assert note["document_type"] == "TD04"
    assert note["status"] == "Draft"
    assert note["related_invoice_id"] == draft["id"]
    assert note["related_invoice_number"] == issued["invoice_number"]
    assert Decimal(note["total_due"]) == -Decimal(issued["total_due"])


def test_issue_credit_note_with_fixed_discount(api_client, client_id):
    items = [{"description": "Consulenza", "quantity": "1", "unit_price": "100.00", "discount_amount": "10.00"}]
    original = api_client.post("/api/v1/invoices/", json=invoice_payload(client_id, items=items)).json()
    issued = api_client.post(f"/api/v1/invoices/{original['id']}/issue").json()
    note = api_client.post(f"/api/v1/invoices/{original['id']}/credit-notes", json={"reason": "Storno"}).json()

    response = api_client.post(f"/api/v1/invoices/{note['id']}/issue")

    assert response.status_code == 200
    body = response.json()
    assert Decimal(issued["imponibile_total"]) == Decimal("90.00")
    assert Decimal(body["imponibile_total"]) == Decimal("-90.00")
    assert Decimal(body["total_due"]) == -Decimal(issued["total_due"])


def test_issue_credit_note_exceeding_original_rejected(api_client, draft):
    from uuid import UUID
    from fatturazione.routers.dependencies import get_invoice_repository

    api_client.post(f"/api/v1/invoices/{draft['id']}/issue")
    note = api_client.post(f"/api/v1/invoices/{draft['id']}/credit-notes", json={"reason": "Storno"}).json()
    repository = get_invoice_repository()
    stored = repository.get_by_id(UUID(note["id"]))
    inflated = stored.items[0].model_copy(update={"unit_price": Decimal("-5000.00")})
    repository.update(stored.model_copy(update={"items": [inflated]}))

    response = api_client.post(f"/api/v1/invoices/{note['id']}/issue")

    assert response.status_code == 400
    assert response.json()["error_code"] == "CREDIT_NOTE_INVALID"
    # nessun numero consumato
    assert repository.get_by_id(UUID(note["id"])).invoice_number is None
    assert repository.get_last_invoice_number() == f"{TODAY.year}/001"


def test_create_correction_document_rejected(api_client, client_id):
    response = api_client.post("/api/v1/invoices/", json=invoice_payload(client_id, document_type="TD04"))

    assert response.status_code == 400
    fields = [e["field"] for e in response.json()["details"]["errors"]]
    assert "document_type" in fields


def test_update_to_correction_document_rejected(api_client, client_id, draft):
    response = api_client.put(
        f"/api/v1/invoices/{draft['id']}", json=invoice_payload(client_id, document_type="TD05")
    )

    assert response.status_code == 400
    fields = [e["field"] for e in response.json()["details"]["errors"]]
    assert "document_type" in fields


def test_credit_note_on_draft_rejected(api_client, draft):
    response = api_client.post(f"/api/v1/invoices/{draft['id']}/credit-notes", json={"reason": "Storno"})

    assert response.status_code == 400
    assert response.json()["error_code"] == "CREDIT_NOTE_INVALID"


def test_debit_note(api_client, draft):
    api_client.post(f"/api/v1/invoices/{draft['id']}/issue")
    payload = {
        "reason": "Spese non addebitate",
        "items": [{"description": "Trasferta", "quantity": "1", "unit_price": "100.00", "iva_rate": 22}],
    }

    response = api_client.post(f"/api/v1/invoices/{draft['id']}/debit-notes", json=payload)

    assert response.status_code == 201
    assert response.json()["document_type"] == "TD05"
    assert Decimal(response.json()["total_due"]) == Decimal("122.00")


def test_invoice_xml(api_client, draft):
    issued = api_client.post(f"/api/v1/invoices/{draft['id']}/issue").json()

    response = api_client.get(f"/api/v1/invoices/{draft['id']}/xml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    root = ET.fromstring(response.content)
    documento = root.find("FatturaElettronicaBody/DatiGenerali/DatiGeneraliDocumento")
    assert documento.findtext("Numero") == issued["invoice_number"]
    assert documento.findtext("DatiRitenuta/ImportoRitenuta") == "200.00"
    assert root.findtext("FatturaElettronicaBody/DatiPagamento/DettaglioPagamento/ImportoPagamento") == "1020.00"


def test_invoice_xml_without_issuer_profile(api_client, draft):
    from fatturazione.routers.dependencies import get_issuer_profile_repository
    get_issuer_profile_repository().clear()

    response = api_client.get(f"/api/v1/invoices/{draft['id']}/xml")

    assert response.status_code == 400
    assert response.json()["error_code"] == "ISSUER_PROFILE_MISSING"


def test_invoice_not_found(api_client):
    response = api_client.get("/api/v1/invoices/00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404
    assert response.json()["error_code"] == "ENTITY_NOT_FOUND"


def test_discount_larger_than_line_rejected(api_client, client_id):
    items = [{"description": "Consulenza", "quantity": "1", "unit_price": "100.00", "discount_amount": "150.00"}]
    response = api_client.post("/api/v1/invoices/", json=invoice_payload(client_id, items=items))

    assert response.status_code == 422
