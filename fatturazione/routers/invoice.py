"""
Invoice Router: fatture, ciclo di vita, note di rettifica e XML FatturaPA
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response, status

from fatturazione.models.fatturapa_enums import InvoiceStatus
from fatturazione.models.invoice import Invoice
from fatturazione.schemas.invoice_schema import (
    InvoiceCreateSchema,
    AllInvoicesResponseSchema,
    InvoiceStatusTransitionSchema,
    InvoiceTransitionResponseSchema,
    CreditNoteCreateSchema,
    DebitNoteCreateSchema
)
from fatturazione.services.interfaces.invoice_service_interface import IInvoiceService
from .dependencies import get_invoice_service, LIMIT_DEFAULT, MAX_LIMIT

router = APIRouter(
    prefix="/api/v1/invoices",
    tags=["Invoice"],
)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=Invoice)
async def create_invoice(
    invoice_data: InvoiceCreateSchema,
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    """Crea una fattura in bozza e ne calcola i totali."""
    return await invoice_service.create_invoice(invoice_data)


@router.get("/", status_code=status.HTTP_200_OK, response_model=AllInvoicesResponseSchema)
async def get_all_invoices(
    invoice_service: IInvoiceService = Depends(get_invoice_service),
    page: int = Query(1, gt=0),
    limit: int = Query(LIMIT_DEFAULT, gt=0, le=MAX_LIMIT),
    invoice_status: Optional[InvoiceStatus] = Query(None, alias="status"),
    client_id: Optional[UUID] = Query(None)
):
    """
    Restituisce le fatture con supporto alla paginazione.

    - **page**: La pagina da restituire
    - **limit**: Il numero massimo di risultati per pagina
    - **status**: Filtro per stato
    - **client_id**: Filtro per cliente
    """
    invoices, total = await invoice_service.get_invoices(
        page=page, limit=limit, status=invoice_status, client_id=client_id
    )
    return {"invoices": invoices, "total": total, "page": page, "limit": limit}


@router.get("/{invoice_id}", status_code=status.HTTP_200_OK, response_model=Invoice)
async def get_invoice(
    invoice_id: UUID = Path(...),
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    return await invoice_service.get_invoice(invoice_id)


@router.put("/{invoice_id}", status_code=status.HTTP_200_OK, response_model=Invoice)
async def update_invoice(
    invoice_data: InvoiceCreateSchema,
    invoice_id: UUID = Path(...),
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    """Aggiorna una fattura in bozza."""
    return await invoice_service.update_invoice(invoice_id, invoice_data)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: UUID = Path(...),
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    """Elimina una fattura in bozza."""
    await invoice_service.delete_invoice(invoice_id)


@router.post("/{invoice_id}/recalculate", status_code=status.HTTP_200_OK, response_model=Invoice)
async def recalculate_invoice(
    invoice_id: UUID = Path(...),
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    return await invoice_service.recalculate_invoice(invoice_id)


@router.post("/{invoice_id}/issue", status_code=status.HTTP_200_OK, response_model=Invoice)
async def issue_invoice(
    invoice_id: UUID = Path(...),
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    """Emette la fattura: ricalcolo, numerazione AAAA/NNN e stato Issued."""
    return await invoice_service.issue_invoice(invoice_id)


@router.post("/{invoice_id}/transition", status_code=status.HTTP_200_OK, response_model=InvoiceTransitionResponseSchema)
async def transition_invoice(
    transition: InvoiceStatusTransitionSchema,
    invoice_id: UUID = Path(...),
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    """Cambia lo stato; l'annullamento di una fattura emessa restituisce un avviso."""
    result = await invoice_service.transition_invoice(invoice_id, transition.new_status)
    return {"invoice": result.invoice, "warning": result.warning}


@router.post("/{invoice_id}/credit-notes", status_code=status.HTTP_201_CREATED, response_model=Invoice)
async def create_credit_note(
    note_data: CreditNoteCreateSchema,
    invoice_id: UUID = Path(...),
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    return await invoice_service.create_credit_note(invoice_id, note_data.reason)


@router.post("/{invoice_id}/debit-notes", status_code=status.HTTP_201_CREATED, response_model=Invoice)
async def create_debit_note(
    note_data: DebitNoteCreateSchema,
    invoice_id: UUID = Path(...),
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    return await invoice_service.create_debit_note(invoice_id, note_data.items, note_data.reason)


@router.get("/{invoice_id}/xml", status_code=status.HTTP_200_OK)
async def get_invoice_xml(
    invoice_id: UUID = Path(...),
    invoice_service: IInvoiceService = Depends(get_invoice_service)
):
    """Restituisce l'XML FatturaPA della fattura."""
    xml = await invoice_service.generate_xml(invoice_id)
    return Response(content=xml, media_type="application/xml")
