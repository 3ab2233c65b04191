"""
Invoice Service: orchestrazione dei casi d'uso sulle fatture
"""
import logging
import threading
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from fatturazione.core.exceptions import (
    ValidationException,
    ExceptionFactory,
    ErrorCode
)
from fatturazione.models.fatturapa_enums import InvoiceStatus, TipoDocumento, DOCUMENTI_COLLEGATI
from fatturazione.models.invoice import Invoice, InvoiceItem
from fatturazione.repository.interfaces.client_repository_interface import IClientRepository
from fatturazione.repository.interfaces.invoice_repository_interface import IInvoiceRepository
from fatturazione.repository.interfaces.issuer_profile_repository_interface import IIssuerProfileRepository
from fatturazione.schemas.invoice_schema import InvoiceCreateSchema, InvoiceItemSchema
from fatturazione.services.credit_note_service import CreditNoteService
from fatturazione.services.fatturapa_serializer import FatturaPASerializer
from fatturazione.services.interfaces.invoice_service_interface import IInvoiceService
from fatturazione.services.invoice_calculation_service import InvoiceCalculationService
from fatturazione.services.invoice_lifecycle_service import InvoiceLifecycleService, TransitionResult
from fatturazione.services.validators.invoice_validator import InvoiceValidator
from fatturazione.services.validators.payment_info_validator import PaymentInfoValidator

logger = logging.getLogger(__name__)


class InvoiceService(IInvoiceService):
    """Casi d'uso: bozze, emissione, stati, note di rettifica, XML"""

    def __init__(
        self,
        invoice_repository: IInvoiceRepository,
        client_repository: IClientRepository,
        issuer_profile_repository: IIssuerProfileRepository,
        calculation_service: Optional[InvoiceCalculationService] = None,
        lifecycle_service: Optional[InvoiceLifecycleService] = None,
        credit_note_service: Optional[CreditNoteService] = None,
        serializer: Optional[FatturaPASerializer] = None,
        invoice_validator: Optional[InvoiceValidator] = None,
        payment_info_validator: Optional[PaymentInfoValidator] = None
    ):
        self._invoice_repository = invoice_repository
        self._client_repository = client_repository
        self._issuer_profile_repository = issuer_profile_repository
        self._calculation_service = calculation_service or InvoiceCalculationService()
        self._lifecycle_service = lifecycle_service or InvoiceLifecycleService(self._calculation_service)
        self._credit_note_service = credit_note_service or CreditNoteService()
        self._serializer = serializer or FatturaPASerializer()
        self._invoice_validator = invoice_validator or InvoiceValidator()
        self._payment_info_validator = payment_info_validator or PaymentInfoValidator()
        # numero e stato Issued assegnati in sezione critica
        self._issue_lock = threading.Lock()

    # ==================== BOZZE ====================

    async def create_invoice(self, invoice_data: InvoiceCreateSchema) -> Invoice:
        client = self._client_repository.get_by_id(invoice_data.client_id)
        if client is None:
            raise ExceptionFactory.client_not_found(invoice_data.client_id)

        invoice = Invoice(**invoice_data.model_dump(), status=InvoiceStatus.DRAFT)
        self._validate_draft(invoice)

        invoice = self._calculation_service.calculate(invoice, client)
        self._invoice_repository.create(invoice)
        logger.info(
            f"Fattura {invoice.id} creata in bozza per il cliente {client.ragione_sociale}",
            extra={"invoice_id": str(invoice.id), "client_id": str(client.id)}
        )
        return invoice

    async def update_invoice(self, invoice_id: UUID, invoice_data: InvoiceCreateSchema) -> Invoice:
        existing = self._get_or_raise(invoice_id)
        self._ensure_draft(existing)

        client = self._client_repository.get_by_id(invoice_data.client_id)
        if client is None:
            raise ExceptionFactory.client_not_found(invoice_data.client_id)

        invoice = Invoice(
            **invoice_data.model_dump(),
            id=existing.id,
            status=existing.status,
            created_at=existing.created_at,
            updated_at=datetime.now()
        )
        self._validate_draft(invoice)

        invoice = self._calculation_service.calculate(invoice, client)
        self._invoice_repository.update(invoice)
        logger.info(f"Fattura {invoice.id} aggiornata", extra={"invoice_id": str(invoice.id)})
        return invoice

    async def get_invoice(self, invoice_id: UUID) -> Invoice:
        return self._get_or_raise(invoice_id)

    async def get_invoices(
        self,
        page: int = 1,
        limit: int = 10,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[UUID] = None
    ) -> Tuple[List[Invoice], int]:
        invoices = self._invoice_repository.get_all(status=status, client_id=client_id)
        start = (page - 1) * limit
        return invoices[start:start + limit], len(invoices)

    async def delete_invoice(self, invoice_id: UUID) -> bool:
        invoice = self._get_or_raise(invoice_id)
        self._ensure_draft(invoice)
        deleted = self._invoice_repository.delete(invoice_id)
        logger.info(f"Fattura {invoice_id} eliminata", extra={"invoice_id": str(invoice_id)})
        return deleted

    async def recalculate_invoice(self, invoice_id: UUID) -> Invoice:
        invoice = self._get_or_raise(invoice_id)
        self._ensure_draft(invoice)

        client = self._client_repository.get_by_id(invoice.client_id) if invoice.client_id else None
        invoice = self._calculation_service.calculate(invoice, client)
        invoice = invoice.model_copy(update={"updated_at": datetime.now()})
        self._invoice_repository.update(invoice)
        return invoice

    # ==================== CICLO DI VITA ====================

    async def issue_invoice(self, invoice_id: UUID) -> Invoice:
        with self._issue_lock:
            invoice = self._get_or_raise(invoice_id)
            client = self._client_repository.get_by_id(invoice.client_id) if invoice.client_id else None
            if client is None:
                raise ExceptionFactory.client_not_found(invoice.client_id)

            last_number = self._invoice_repository.get_last_invoice_number()
            issued = self._lifecycle_service.issue(invoice, client, last_number)
            if issued.document_type == TipoDocumento.TD04:
                # importi ricalcolati confrontati con la fattura stornata
                original = (
                    self._invoice_repository.get_by_id(issued.related_invoice_id)
                    if issued.related_invoice_id else None
                )
                self._ensure_valid_note(issued, original)
            self._invoice_repository.update(issued)

        logger.info(
            f"Fattura {issued.invoice_number} emessa: totale {issued.total_due}",
            extra={"invoice_id": str(issued.id), "invoice_number": issued.invoice_number}
        )
        return issued

    async def transition_invoice(self, invoice_id: UUID, new_status: InvoiceStatus) -> TransitionResult:
        if new_status == InvoiceStatus.ISSUED:
            return TransitionResult(await self.issue_invoice(invoice_id))

        invoice = self._get_or_raise(invoice_id)
        result = self._lifecycle_service.transition(invoice, new_status)
        self._invoice_repository.update(result.invoice)

        logger.info(
            f"Fattura {invoice_id}: {invoice.status.value} -> {new_status.value}",
            extra={"invoice_id": str(invoice_id), "warning": result.warning}
        )
        return result

    # ==================== NOTE DI CREDITO/DEBITO ====================

    async def create_credit_note(self, invoice_id: UUID, reason: str) -> Invoice:
        original = self._get_or_raise(invoice_id)
        note = self._credit_note_service.create_credit_note(original, reason)
        self._ensure_valid_note(note, original)

        self._invoice_repository.create(note)
        logger.info(
            f"Nota di credito {note.id} creata per la fattura {original.invoice_number}",
            extra={"invoice_id": str(note.id), "related_invoice_id": str(original.id)}
        )
        return note

    async def create_debit_note(self, invoice_id: UUID, items: List[InvoiceItemSchema], reason: str) -> Invoice:
        original = self._get_or_raise(invoice_id)
        additional_items = [InvoiceItem(**item.model_dump()) for item in items]
        note = self._credit_note_service.create_debit_note(original, additional_items, reason)
        self._invoice_validator.ensure_fiscal_rules(note)
        self._ensure_valid_note(note, original)

        self._invoice_repository.create(note)
        logger.info(
            f"Nota di debito {note.id} creata per la fattura {original.invoice_number}",
            extra={"invoice_id": str(note.id), "related_invoice_id": str(original.id)}
        )
        return note

    # ==================== XML ====================

    async def generate_xml(self, invoice_id: UUID) -> str:
        invoice = self._get_or_raise(invoice_id)

        # le bozze usano l'anagrafica corrente, le emesse quella al momento dell'emissione
        if invoice.client is None or invoice.status == InvoiceStatus.DRAFT:
            client = self._client_repository.get_by_id(invoice.client_id) if invoice.client_id else None
            if client is None:
                raise ExceptionFactory.client_not_found(invoice.client_id)
            invoice = invoice.model_copy(update={"client": client})

        issuer = self._issuer_profile_repository.get()
        xml = self._serializer.generate(invoice, issuer)
        logger.info(f"XML FatturaPA generato per la fattura {invoice.invoice_number or invoice.id}")
        return xml

    # ==================== HELPERS ====================

    def _get_or_raise(self, invoice_id: UUID) -> Invoice:
        invoice = self._invoice_repository.get_by_id(invoice_id)
        if invoice is None:
            raise ExceptionFactory.invoice_not_found(invoice_id)
        return invoice

    @staticmethod
    def _ensure_draft(invoice: Invoice) -> None:
        if invoice.status != InvoiceStatus.DRAFT:
            raise ExceptionFactory.invoice_not_modifiable(invoice.id, invoice.status)

    def _validate_draft(self, invoice: Invoice) -> None:
        result = self._invoice_validator.validate(invoice)
        errors = result.error_dicts()

        # le rettifiche nascono solo dalla fattura originale
        if invoice.document_type in DOCUMENTI_COLLEGATI:
            errors.append({
                "field": "document_type",
                "message": f"Il tipo documento {invoice.document_type.value} richiede il collegamento "
                           f"a una fattura emessa: usare le note di credito/debito"
            })

        if invoice.payment_info is not None:
            payment_result = self._payment_info_validator.validate(invoice.payment_info)
            errors.extend(payment_result.error_dicts())
            for warning in payment_result.warnings:
                logger.warning(f"Fattura {invoice.id}: {warning.message}", extra={"field": warning.field})

        if errors:
            raise ValidationException(
                "Dati fattura non validi",
                ErrorCode.VALIDATION_ERROR,
                {"invoice_id": str(invoice.id)},
                errors=errors
            )

    def _ensure_valid_note(self, note: Invoice, original: Optional[Invoice]) -> None:
        ok, errors = self._credit_note_service.validate(note, original)
        if not ok:
            raise ValidationException(
                "Nota di rettifica non valida",
                ErrorCode.CREDIT_NOTE_INVALID,
                {"related_invoice_id": str(note.related_invoice_id)},
                errors=[e.to_dict() for e in errors]
            )
