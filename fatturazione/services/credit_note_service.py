"""
Note di credito (TD04) e note di debito (TD05) collegate a una fattura emessa
"""
import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import uuid4

from fatturazione.core.exceptions import ExceptionFactory
from fatturazione.models.fatturapa_enums import TipoDocumento, InvoiceStatus
from fatturazione.models.invoice import Invoice, InvoiceItem
from fatturazione.services.invoice_calculation_service import InvoiceCalculationService
from fatturazione.services.validators.validation_result import ValidationIssue

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

NOTE_TYPES = (TipoDocumento.TD04, TipoDocumento.TD05)
STATI_COLLEGABILI = (InvoiceStatus.ISSUED, InvoiceStatus.SENT, InvoiceStatus.PAID, InvoiceStatus.OVERDUE)


def _neg(value: Decimal) -> Decimal:
    return -abs(value)


class CreditNoteService:
    """Derivazione e validazione dei documenti di rettifica"""

    def __init__(self, due_days: int = 30):
        self._due_days = due_days

    def _new_note(self, original: Invoice, document_type: TipoDocumento, reason: str, today: date) -> Invoice:
        return Invoice(
            id=uuid4(),
            document_type=document_type,
            status=InvoiceStatus.DRAFT,
            invoice_date=today,
            due_date=today + timedelta(days=self._due_days),
            client_id=original.client_id,
            client=original.client,
            related_invoice_id=original.id,
            related_invoice_number=original.invoice_number,
            notes=reason,
            causale=reason,
            is_regime_forfettario=original.is_regime_forfettario,
            payment_info=original.payment_info,
        )

    # ==================== NOTE DI CREDITO ====================

    def create_credit_note(self, original: Invoice, reason: str, today: Optional[date] = None) -> Invoice:
        """
        Storno totale della fattura originale.

        Le quantità restano invariate, prezzi e importi sono negativi;
        il bollo non viene mai riaddebitato sulla nota di credito.
        """
        if original is None:
            raise ExceptionFactory.required_argument("original")

        note = self._new_note(original, TipoDocumento.TD04, reason, today or date.today())
        items = [
            item.model_copy(update={
                "unit_price": _neg(item.unit_price),
                # stesso segno del prezzo: il ricalcolo in emissione restituisce lo stesso imponibile
                "discount_amount": _neg(item.discount_amount),
                "imponibile": _neg(item.imponibile),
                "iva_amount": _neg(item.iva_amount),
                "total": _neg(item.total),
            })
            for item in original.items
        ]

        logger.info(f"Nota di credito derivata dalla fattura {original.invoice_number}")
        return note.model_copy(update={
            "items": items,
            "imponibile_total": _neg(original.imponibile_total),
            "iva_total": _neg(original.iva_total),
            "sub_total": _neg(original.sub_total),
            "ritenuta_amount": _neg(original.ritenuta_amount),
            "total_due": _neg(original.total_due),
            "iva_by_rate": {rate: _neg(amount) for rate, amount in original.iva_by_rate.items()},
            "esigibilita_iva": original.esigibilita_iva,
            "bollo_amount": ZERO,
            "bollo_virtuale": False,
        })

    # ==================== NOTE DI DEBITO ====================

    def create_debit_note(
        self,
        original: Invoice,
        additional_items: List[InvoiceItem],
        reason: str,
        today: Optional[date] = None
    ) -> Invoice:
        """Integrazione della fattura originale con le sole righe aggiuntive"""
        if original is None:
            raise ExceptionFactory.required_argument("original")
        if additional_items is None:
            raise ExceptionFactory.required_argument("additional_items")

        note = self._new_note(original, TipoDocumento.TD05, reason, today or date.today())
        items = [InvoiceCalculationService.calculate_item(item) for item in additional_items]

        imponibile_total = sum((item.imponibile for item in items), ZERO)
        iva_total = sum((item.iva_amount for item in items), ZERO)
        iva_by_rate = {}
        for item in items:
            iva_by_rate[item.iva_rate] = iva_by_rate.get(item.iva_rate, ZERO) + item.iva_amount

        logger.info(f"Nota di debito derivata dalla fattura {original.invoice_number}")
        return note.model_copy(update={
            "items": items,
            "imponibile_total": imponibile_total,
            "iva_total": iva_total,
            "sub_total": imponibile_total + iva_total,
            "total_due": imponibile_total + iva_total,
            "iva_by_rate": iva_by_rate,
        })

    # ==================== VALIDAZIONE ====================

    def validate(self, note: Invoice, original: Optional[Invoice]) -> Tuple[bool, List[ValidationIssue]]:
        """Verifica collegamento e importi della nota rispetto alla fattura originale"""
        errors: List[ValidationIssue] = []

        if note.document_type not in NOTE_TYPES:
            errors.append(ValidationIssue("document_type", "Il tipo documento deve essere TD04 o TD05"))

        if note.related_invoice_id is None:
            errors.append(ValidationIssue("related_invoice_id", "Il riferimento alla fattura originale è obbligatorio"))
        if not note.related_invoice_number or not note.related_invoice_number.strip():
            errors.append(ValidationIssue("related_invoice_number", "Il numero della fattura originale è obbligatorio"))

        if original is None:
            errors.append(ValidationIssue("related_invoice_id", "Fattura originale non trovata"))
            return False, errors

        if original.status not in STATI_COLLEGABILI:
            errors.append(ValidationIssue(
                "related_invoice_id",
                f"La fattura originale in stato {original.status.value} non può essere rettificata"
            ))

        if note.document_type == TipoDocumento.TD04:
            if abs(note.imponibile_total) > abs(original.imponibile_total):
                errors.append(ValidationIssue(
                    "imponibile_total",
                    "L'imponibile della nota di credito supera quello della fattura originale"
                ))
            if abs(note.iva_total) > abs(original.iva_total):
                errors.append(ValidationIssue(
                    "iva_total",
                    "L'IVA della nota di credito supera quella della fattura originale"
                ))

        return not errors, errors
