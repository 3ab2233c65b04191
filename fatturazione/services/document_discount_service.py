from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


class DocumentDiscountService:
    """Sconto a livello di documento"""

    def apply_discount(self, amount: Decimal, percentage: Decimal, fixed_amount: Decimal) -> Decimal:
        """
        Applica prima lo sconto percentuale e poi quello fisso, senza scendere sotto zero.

        L'ordine non è invertibile: la percentuale si applica sempre alla base
        precedente allo sconto fisso.
        """
        discounted = amount * (Decimal("1") - percentage / Decimal("100"))
        discounted -= fixed_amount
        if discounted < 0:
            discounted = Decimal("0")
        return discounted.quantize(CENT, rounding=ROUND_HALF_UP)
