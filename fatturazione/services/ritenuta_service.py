"""
Calcolo della ritenuta d'acconto.

Una sola formula copre tutte le varianti di legge variando la base imponibile
e l'aliquota configurate sul cliente:

- professionisti: base 100%, aliquota 20%
- agenti senza dipendenti: base 50%, aliquota 23%
- agenti con dipendenti: base 20%, aliquota 23%
- non residenti: base 100%, aliquota 30%
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from fatturazione.models.client import Client
from fatturazione.models.fatturapa_enums import ClientType

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


class RitenutaService:
    """Calcolatore ritenuta d'acconto"""

    def calculate_ritenuta(self, imponibile: Decimal, client: Optional[Client]) -> Decimal:
        """Ritenuta = imponibile x base% x aliquota%, arrotondata solo alla fine"""
        if client is None or not client.subject_to_ritenuta:
            return Decimal("0")

        amount = imponibile * (client.ritenuta_base_percentage / HUNDRED) * (client.ritenuta_percentage / HUNDRED)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)

    @staticmethod
    def standard_rate(client_type: ClientType) -> Decimal:
        """Aliquota ordinaria per tipologia di cliente"""
        if client_type == ClientType.PROFESSIONAL:
            return Decimal("20")
        return Decimal("0")
