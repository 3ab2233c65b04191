"""
Ciclo di vita della fattura: Draft -> Issued -> Sent -> Paid/Overdue, con annullamento
"""
import logging
from datetime import date, datetime
from typing import Dict, FrozenSet, NamedTuple, Optional

from fatturazione.core.exceptions import ExceptionFactory
from fatturazione.models.client import Client
from fatturazione.models.fatturapa_enums import InvoiceStatus
from fatturazione.models.invoice import Invoice
from fatturazione.services.invoice_calculation_service import InvoiceCalculationService
from fatturazione.services.invoice_numbering_service import InvoiceNumberingService

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[InvoiceStatus, FrozenSet[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: frozenset({InvoiceStatus.ISSUED, InvoiceStatus.CANCELLED}),
    InvoiceStatus.ISSUED: frozenset({InvoiceStatus.SENT, InvoiceStatus.CANCELLED}),
    InvoiceStatus.SENT: frozenset({InvoiceStatus.PAID, InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED}),
    InvoiceStatus.OVERDUE: frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED}),
    InvoiceStatus.PAID: frozenset(),
    InvoiceStatus.CANCELLED: frozenset(),
}

CREDIT_NOTE_WARNING = (
    "L'annullamento di una fattura già emessa richiede l'emissione di una "
    "nota di credito (Art. 26 DPR 633/72)."
)


class TransitionResult(NamedTuple):
    invoice: Invoice
    warning: Optional[str] = None


class InvoiceLifecycleService:
    """Controllore delle transizioni di stato"""

    def __init__(
        self,
        calculation_service: Optional[InvoiceCalculationService] = None,
        numbering_service: Optional[InvoiceNumberingService] = None
    ):
        self._calculation_service = calculation_service or InvoiceCalculationService()
        self._numbering_service = numbering_service or InvoiceNumberingService()

    @staticmethod
    def can_transition(current: InvoiceStatus, target: InvoiceStatus) -> bool:
        return target in ALLOWED_TRANSITIONS.get(current, frozenset())

    def issue(
        self,
        invoice: Invoice,
        client: Optional[Client],
        last_number: Optional[str],
        today: Optional[date] = None
    ) -> Invoice:
        """
        Emissione: ricalcolo dei totali, assegnazione del numero e passaggio a Issued.

        Nessuna modifica viene applicata se uno dei passi fallisce.
        """
        if invoice is None:
            raise ExceptionFactory.required_argument("invoice")
        if not self.can_transition(invoice.status, InvoiceStatus.ISSUED):
            raise ExceptionFactory.invalid_transition(invoice.status, InvoiceStatus.ISSUED)

        calculated = self._calculation_service.calculate(invoice, client)
        number = self._numbering_service.next_number(last_number, today)

        logger.info(f"Fattura {invoice.id} emessa con numero {number}")
        return calculated.model_copy(update={
            "invoice_number": number,
            "status": InvoiceStatus.ISSUED,
            "updated_at": datetime.now(),
        })

    def transition(self, invoice: Invoice, new_status: InvoiceStatus) -> TransitionResult:
        """Cambio di stato semplice: nessun ricalcolo e nessuna numerazione"""
        if invoice is None:
            raise ExceptionFactory.required_argument("invoice")
        # l'emissione deve passare da issue() per numero e totali
        if new_status == InvoiceStatus.ISSUED or not self.can_transition(invoice.status, new_status):
            raise ExceptionFactory.invalid_transition(invoice.status, new_status)

        warning = None
        if new_status == InvoiceStatus.CANCELLED and invoice.status != InvoiceStatus.DRAFT:
            warning = CREDIT_NOTE_WARNING
            logger.warning(f"Fattura {invoice.invoice_number} annullata dopo l'emissione: richiesta nota di credito")

        updated = invoice.model_copy(update={"status": new_status, "updated_at": datetime.now()})
        return TransitionResult(updated, warning)
