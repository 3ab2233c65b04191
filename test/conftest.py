"""
Fixture condivise per i test del motore fiscale e delle API
"""
from datetime import date, timedelta
from decimal import Decimal

import pytest
from starlette.testclient import TestClient

from fatturazione.models.address import Address
from fatturazione.models.client import Client
from fatturazione.models.fatturapa_enums import ClientType, IvaRate, RegimeFiscale
from fatturazione.models.invoice import Invoice, InvoiceItem
from fatturazione.models.issuer_profile import IssuerProfile

ISSUER_PIVA = "12345678903"
CLIENT_PIVA = "01234567897"


@pytest.fixture
def company_client() -> Client:
    return Client(
        ragione_sociale="Cliente Test SRL",
        partita_iva=CLIENT_PIVA,
        client_type=ClientType.COMPANY,
        address=Address(street="Via Milano 456", city="Milano", province="MI", postal_code="20100"),
        codice_destinatario="ABC1234",
    )


@pytest.fixture
def professional_client() -> Client:
    return Client(
        ragione_sociale="Studio Rossi",
        partita_iva=CLIENT_PIVA,
        codice_fiscale="RSSMRA85T10A562S",
        client_type=ClientType.PROFESSIONAL,
        address=Address(street="Via Roma 1", city="Roma", province="RM", postal_code="00100"),
        subject_to_ritenuta=True,
        ritenuta_percentage=Decimal("20"),
        ritenuta_base_percentage=Decimal("100"),
    )


@pytest.fixture
def pa_client() -> Client:
    return Client(
        ragione_sociale="Comune di Test",
        codice_fiscale="80012345676",
        client_type=ClientType.PUBLIC_ADMINISTRATION,
        address=Address(street="Piazza Municipio 1", city="Torino", province="TO", postal_code="10100"),
        subject_to_split_payment=True,
        codice_univoco_ufficio="UFE123",
    )


@pytest.fixture
def issuer_profile() -> IssuerProfile:
    return IssuerProfile(
        ragione_sociale="Azienda Test SRL",
        indirizzo=Address(street="Via Roma 123", city="Roma", province="RM", postal_code="00100"),
        partita_iva=ISSUER_PIVA,
        regime_fiscale=RegimeFiscale.RF01,
    )


@pytest.fixture
def make_item():
    def _make_item(unit_price="1000.00", quantity="1", rate=IvaRate.STANDARD, natura=None, **kwargs) -> InvoiceItem:
        return InvoiceItem(
            description=kwargs.pop("description", "Consulenza"),
            quantity=Decimal(quantity),
            unit_price=Decimal(unit_price),
            iva_rate=rate,
            natura=natura,
            **kwargs
        )
    return _make_item


@pytest.fixture
def make_invoice(make_item):
    def _make_invoice(client: Client = None, items=None, **kwargs) -> Invoice:
        today = kwargs.pop("invoice_date", date.today())
        return Invoice(
            invoice_date=today,
            due_date=kwargs.pop("due_date", today + timedelta(days=30)),
            client_id=client.id if client else None,
            client=client,
            items=items if items is not None else [make_item()],
            **kwargs
        )
    return _make_invoice


@pytest.fixture
def api_client():
    """TestClient con repository in memoria svuotate"""
    from fatturazione.main import app
    from fatturazione.routers.dependencies import (
        get_client_repository, get_invoice_repository, get_issuer_profile_repository
    )

    get_client_repository().clear()
    get_invoice_repository().clear()
    get_issuer_profile_repository().clear()

    with TestClient(app) as client:
        yield client
