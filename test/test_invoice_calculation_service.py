"""
Test per il motore di calcolo fiscale
"""

import pytest
from decimal import Decimal

from fatturazione.core.exceptions import ValidationException, PreconditionException
from fatturazione.models.fatturapa_enums import IvaRate, Natura, EsigibilitaIVA
from fatturazione.services.invoice_calculation_service import (
    InvoiceCalculationService, CalculationMode, SPLIT_PAYMENT_NOTE
)
from fatturazione.services.validators.invoice_validator import CAUSALE_FORFETTARIO


class TestCalculateItem:
    """Test del calcolo per singola riga"""

    def test_imponibile_iva_totale(self, make_item):
        item = InvoiceCalculationService.calculate_item(make_item(unit_price="1000.00"))

        assert item.imponibile == Decimal("1000.00")
        assert item.iva_amount == Decimal("220.00")
        assert item.total == Decimal("1220.00")

    def test_percentage_discount_wins_over_fixed(self, make_item):
        item = InvoiceCalculationService.calculate_item(
            make_item(unit_price="100.00", quantity="2",
                      discount_percentage=Decimal("10"), discount_amount=Decimal("50"))
        )

        assert item.imponibile == Decimal("180.00")
        assert item.iva_amount == Decimal("39.60")

    def test_fixed_discount_when_no_percentage(self, make_item):
        item = InvoiceCalculationService.calculate_item(
            make_item(unit_price="100.00", discount_amount=Decimal("15"))
        )

        assert item.imponibile == Decimal("85.00")
        assert item.total == item.imponibile + item.iva_amount

    def test_iva_rounded_half_up(self, make_item):
        # 10.25 * 22% = 2.255 -> 2.26
        item = InvoiceCalculationService.calculate_item(make_item(unit_price="10.25"))
        assert item.iva_amount == Decimal("2.26")

    def test_input_item_not_mutated(self, make_item):
        original = make_item(unit_price="50.00")
        InvoiceCalculationService.calculate_item(original)
        assert original.imponibile == Decimal("0")
        assert original.iva_amount == Decimal("0")


class TestInvoiceCalculationService:
    """Test dei totali documento"""

    def setup_method(self):
        self.service = InvoiceCalculationService()

    def test_ordinary_invoice(self, company_client, make_invoice):
        result = self.service.calculate(make_invoice(company_client))

        assert result.imponibile_total == Decimal("1000.00")
        assert result.iva_total == Decimal("220.00")
        assert result.sub_total == Decimal("1220.00")
        assert result.ritenuta_amount == Decimal("0")
        assert result.total_due == Decimal("1220.00")
        assert result.iva_by_rate == {IvaRate.STANDARD: Decimal("220.00")}
        assert result.esigibilita_iva == EsigibilitaIVA.I
        assert result.bollo_virtuale is False

    def test_professional_with_ritenuta(self, professional_client, make_invoice):
        result = self.service.calculate(make_invoice(professional_client))

        assert result.ritenuta_amount == Decimal("200.00")
        assert result.total_due == Decimal("1020.00")

    def test_agent_without_employees(self, professional_client, make_invoice, make_item):
        agent = professional_client.model_copy(update={
            "ritenuta_percentage": Decimal("23"),
            "ritenuta_base_percentage": Decimal("50"),
        })
        result = self.service.calculate(make_invoice(agent, items=[make_item(unit_price="10000.00")]))

        assert result.ritenuta_amount == Decimal("1150.00")

    def test_flat_rate_regime(self, company_client, make_invoice):
        invoice = make_invoice(company_client, is_regime_forfettario=True, causale=CAUSALE_FORFETTARIO)
        result = self.service.calculate(invoice)

        assert result.iva_total == Decimal("0")
        assert result.iva_by_rate == {}
        assert result.bollo_amount == Decimal("2.00")
        assert result.bollo_virtuale is True
        assert result.total_due == Decimal("1002.00")
        assert all(item.iva_amount == 0 and item.total == item.imponibile for item in result.items)

    def test_flat_rate_ignores_ritenuta(self, professional_client, make_invoice):
        invoice = make_invoice(professional_client, is_regime_forfettario=True, causale=CAUSALE_FORFETTARIO)
        result = self.service.calculate(invoice)

        assert result.ritenuta_amount == Decimal("0")

    def test_flat_rate_below_bollo_threshold(self, company_client, make_invoice, make_item):
        invoice = make_invoice(
            company_client, items=[make_item(unit_price="77.47")],
            is_regime_forfettario=True, causale=CAUSALE_FORFETTARIO
        )
        result = self.service.calculate(invoice)

        assert result.bollo_amount == Decimal("0")
        assert result.bollo_virtuale is False
        assert result.total_due == Decimal("77.47")

    def test_split_payment(self, pa_client, make_invoice):
        result = self.service.calculate(make_invoice(pa_client))

        assert result.iva_total == Decimal("220.00")
        assert result.total_due == Decimal("1000.00")
        assert result.ritenuta_amount == Decimal("0")
        assert result.esigibilita_iva == EsigibilitaIVA.S
        assert SPLIT_PAYMENT_NOTE in result.notes

    def test_split_payment_excludes_ritenuta(self, pa_client, make_invoice):
        pa_with_ritenuta = pa_client.model_copy(update={"subject_to_ritenuta": True})
        result = self.service.calculate(make_invoice(pa_with_ritenuta))

        assert result.ritenuta_amount == Decimal("0")
        assert result.total_due == Decimal("1000.00")

    def test_split_payment_note_idempotent(self, pa_client, make_invoice):
        once = self.service.calculate(make_invoice(pa_client, notes="Contratto 2026"))
        twice = self.service.calculate(once)

        assert twice.notes.count(SPLIT_PAYMENT_NOTE) == 1
        assert twice.notes.startswith("Contratto 2026")
        assert twice.total_due == once.total_due

    def test_empty_items(self, company_client, make_invoice):
        result = self.service.calculate(make_invoice(company_client, items=[]))

        assert result.imponibile_total == 0
        assert result.total_due == 0
        assert result.iva_by_rate == {}

    def test_iva_by_rate_groups(self, company_client, make_invoice, make_item):
        items = [
            make_item(unit_price="100.00"),
            make_item(unit_price="200.00"),
            make_item(unit_price="100.00", rate=IvaRate.REDUCED),
            make_item(unit_price="50.00", rate=IvaRate.ZERO, natura=Natura.N4),
        ]
        result = self.service.calculate(make_invoice(company_client, items=items))

        assert result.iva_by_rate[IvaRate.STANDARD] == Decimal("66.00")
        assert result.iva_by_rate[IvaRate.REDUCED] == Decimal("10.00")
        assert result.iva_by_rate[IvaRate.ZERO] == Decimal("0")
        assert result.imponibile_total == sum(i.imponibile for i in result.items)
        assert result.sub_total == result.imponibile_total + result.iva_total

    def test_ordinary_with_natura_has_no_bollo(self, company_client, make_invoice, make_item):
        items = [make_item(unit_price="500.00", rate=IvaRate.ZERO, natura=Natura.N2_1)]
        result = self.service.calculate(make_invoice(company_client, items=items))

        assert result.bollo_amount == Decimal("0")

    def test_recalculation_is_idempotent(self, professional_client, make_invoice):
        once = self.service.calculate(make_invoice(professional_client))
        twice = self.service.calculate(once)

        assert twice.model_dump(exclude={"updated_at"}) == once.model_dump(exclude={"updated_at"})

    def test_input_invoice_not_mutated(self, company_client, make_invoice):
        invoice = make_invoice(company_client)
        self.service.calculate(invoice)

        assert invoice.total_due == Decimal("0")
        assert invoice.items[0].imponibile == Decimal("0")

    def test_fiscal_violation_raises_with_all_errors(self, company_client, make_invoice, make_item):
        items = [
            make_item(rate=IvaRate.ZERO),
            make_item(natura=Natura.N4),
        ]
        with pytest.raises(ValidationException) as exc_info:
            self.service.calculate(make_invoice(company_client, items=items))

        fields = [e["field"] for e in exc_info.value.errors]
        assert fields == ["items[0].natura", "items[1].natura"]

    def test_missing_invoice_is_precondition_error(self):
        with pytest.raises(PreconditionException):
            self.service.calculate(None)

    def test_resolve_mode(self, company_client, pa_client, make_invoice):
        assert self.service.resolve_mode(make_invoice(company_client), company_client) == CalculationMode.ORDINARIO
        assert self.service.resolve_mode(make_invoice(pa_client), pa_client) == CalculationMode.SPLIT_PAYMENT
        forfettario = make_invoice(pa_client, is_regime_forfettario=True)
        assert self.service.resolve_mode(forfettario, pa_client) == CalculationMode.FORFETTARIO
