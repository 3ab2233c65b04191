from decimal import Decimal

from fatturazione.models.invoice import Invoice

BOLLO_THRESHOLD = Decimal("77.47")
BOLLO_AMOUNT = Decimal("2.00")


class BolloService:
    """Imposta di bollo virtuale sulle fatture in regime forfettario"""

    def bollo_applies(self, invoice: Invoice) -> bool:
        # soglia esclusa: 77.47 non è soggetta
        return invoice.is_regime_forfettario and invoice.imponibile_total > BOLLO_THRESHOLD

    def calculate_bollo(self, invoice: Invoice) -> Decimal:
        if self.bollo_applies(invoice):
            return BOLLO_AMOUNT
        return Decimal("0")
