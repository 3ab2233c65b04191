"""
Motore di calcolo fiscale della fattura.

Il calcolo è una trasformazione pura: le righe e la fattura restituite sono
nuove istanze, l'input non viene mai modificato. Il regime di calcolo
(ordinario, forfettario, split payment) è risolto una sola volta per fattura
prima di qualsiasi aggregazione.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, List, Optional

from fatturazione.core.exceptions import ExceptionFactory
from fatturazione.models.client import Client
from fatturazione.models.fatturapa_enums import IvaRate, EsigibilitaIVA
from fatturazione.models.invoice import Invoice, InvoiceItem
from fatturazione.services.bollo_service import BolloService
from fatturazione.services.ritenuta_service import RitenutaService
from fatturazione.services.validators.invoice_validator import InvoiceValidator

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0")

SPLIT_PAYMENT_NOTE = "Scissione dei pagamenti — Art. 17-ter"


class CalculationMode(str, Enum):
    """Regime di calcolo, mutuamente esclusivo"""
    ORDINARIO = "ordinario"
    FORFETTARIO = "forfettario"
    SPLIT_PAYMENT = "split_payment"


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _append_note(notes: Optional[str], line: str) -> str:
    """Aggiunge una riga alle note una sola volta"""
    if not notes:
        return line
    if line in notes:
        return notes
    return f"{notes}\n{line}"


class InvoiceCalculationService:
    """Calcolo di imponibile, IVA, ritenuta, bollo e netto a pagare"""

    def __init__(
        self,
        ritenuta_service: Optional[RitenutaService] = None,
        bollo_service: Optional[BolloService] = None,
        invoice_validator: Optional[InvoiceValidator] = None
    ):
        self._ritenuta_service = ritenuta_service or RitenutaService()
        self._bollo_service = bollo_service or BolloService()
        self._invoice_validator = invoice_validator or InvoiceValidator()

    @staticmethod
    def resolve_mode(invoice: Invoice, client: Optional[Client]) -> CalculationMode:
        if invoice.is_regime_forfettario:
            return CalculationMode.FORFETTARIO
        if client is not None and client.subject_to_split_payment:
            return CalculationMode.SPLIT_PAYMENT
        return CalculationMode.ORDINARIO

    @staticmethod
    def calculate_item(item: InvoiceItem) -> InvoiceItem:
        """Imponibile, IVA e totale di una singola riga"""
        subtotal = item.quantity * item.unit_price
        # percentuale e importo fisso non si sommano mai
        if item.discount_percentage > 0:
            discount = subtotal * item.discount_percentage / HUNDRED
        else:
            discount = item.discount_amount

        imponibile = subtotal - discount
        iva = round2(imponibile * Decimal(item.iva_rate.value) / HUNDRED)
        return item.model_copy(update={
            "imponibile": imponibile,
            "iva_amount": iva,
            "total": imponibile + iva,
        })

    def calculate(self, invoice: Invoice, client: Optional[Client] = None) -> Invoice:
        """
        Ricalcola tutti i totali della fattura.

        Args:
            invoice: Fattura da calcolare
            client: Cliente; se assente si usa quello associato alla fattura

        Returns:
            Invoice: Nuova istanza con righe e totali calcolati

        Raises:
            ValidationException: Se la fattura viola regole fiscali
        """
        if invoice is None:
            raise ExceptionFactory.required_argument("invoice")
        if client is None:
            client = invoice.client

        self._invoice_validator.ensure_fiscal_rules(invoice)

        if not invoice.items:
            return invoice.model_copy(update={
                "client": client,
                "imponibile_total": ZERO,
                "iva_total": ZERO,
                "sub_total": ZERO,
                "ritenuta_amount": ZERO,
                "bollo_amount": ZERO,
                "total_due": ZERO,
                "iva_by_rate": {},
                "bollo_virtuale": False,
            })

        mode = self.resolve_mode(invoice, client)
        items = [self.calculate_item(item) for item in invoice.items]
        imponibile_total = sum((item.imponibile for item in items), ZERO)

        if mode == CalculationMode.FORFETTARIO:
            update = self._calculate_forfettario(invoice, items, imponibile_total)
        else:
            update = self._calculate_ordinario(invoice, client, items, imponibile_total, mode)

        update["client"] = client
        update["imponibile_total"] = imponibile_total
        update["bollo_virtuale"] = update["bollo_amount"] > 0
        update["esigibilita_iva"] = (
            EsigibilitaIVA.S if client is not None and client.subject_to_split_payment else EsigibilitaIVA.I
        )

        logger.debug(
            f"Fattura {invoice.id} calcolata in regime {mode.value}: totale {update['total_due']}",
            extra={"invoice_id": str(invoice.id), "mode": mode.value}
        )
        return invoice.model_copy(update=update)

    def _calculate_forfettario(self, invoice: Invoice, items: List[InvoiceItem], imponibile_total: Decimal) -> dict:
        items = [item.model_copy(update={"iva_amount": ZERO, "total": item.imponibile}) for item in items]
        bollo = self._bollo_service.calculate_bollo(
            invoice.model_copy(update={"items": items, "imponibile_total": imponibile_total})
        )
        return {
            "items": items,
            "iva_total": ZERO,
            "sub_total": imponibile_total,
            "iva_by_rate": {},
            "ritenuta_amount": ZERO,
            "bollo_amount": bollo,
            "total_due": imponibile_total + bollo,
        }

    def _calculate_ordinario(
        self,
        invoice: Invoice,
        client: Optional[Client],
        items: List[InvoiceItem],
        imponibile_total: Decimal,
        mode: CalculationMode
    ) -> dict:
        iva_total = sum((item.iva_amount for item in items), ZERO)
        sub_total = imponibile_total + iva_total

        iva_by_rate: Dict[IvaRate, Decimal] = {}
        for item in items:
            iva_by_rate[item.iva_rate] = iva_by_rate.get(item.iva_rate, ZERO) + item.iva_amount

        bollo = ZERO
        if any(item.natura is not None for item in items):
            bollo = self._bollo_service.calculate_bollo(
                invoice.model_copy(update={"items": items, "imponibile_total": imponibile_total})
            )

        update = {
            "items": items,
            "iva_total": iva_total,
            "sub_total": sub_total,
            "iva_by_rate": iva_by_rate,
            "bollo_amount": bollo,
        }

        if mode == CalculationMode.SPLIT_PAYMENT:
            # IVA versata direttamente dalla PA, niente ritenuta
            update["ritenuta_amount"] = ZERO
            update["total_due"] = imponibile_total + bollo
            update["notes"] = _append_note(invoice.notes, SPLIT_PAYMENT_NOTE)
        else:
            ritenuta = self._ritenuta_service.calculate_ritenuta(imponibile_total, client)
            update["ritenuta_amount"] = ritenuta
            update["total_due"] = sub_total - ritenuta + bollo

        return update
