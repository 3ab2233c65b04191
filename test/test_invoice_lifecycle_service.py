"""
Test per il ciclo di vita della fattura
"""
from datetime import date
from decimal import Decimal

import pytest

from fatturazione.core.exceptions import BusinessRuleException, ValidationException, ErrorCode
from fatturazione.models.fatturapa_enums import InvoiceStatus, IvaRate
from fatturazione.services.invoice_lifecycle_service import (
    InvoiceLifecycleService, CREDIT_NOTE_WARNING
)


class TestInvoiceLifecycleService:

    def setup_method(self):
        self.service = InvoiceLifecycleService()
        self.today = date(2025, 6, 1)

    def test_issue_assigns_number_and_totals(self, company_client, make_invoice):
        invoice = make_invoice(company_client)

        issued = self.service.issue(invoice, company_client, "2025/004", self.today)

        assert issued.status == InvoiceStatus.ISSUED
        assert issued.invoice_number == "2025/005"
        assert issued.total_due == Decimal("1220.00")
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.invoice_number is None

    def test_issue_first_of_year(self, company_client, make_invoice):
        issued = self.service.issue(make_invoice(company_client), company_client, "2024/120", self.today)
        assert issued.invoice_number == "2025/001"

    def test_issue_only_from_draft(self, company_client, make_invoice):
        invoice = make_invoice(company_client, status=InvoiceStatus.SENT)

        with pytest.raises(BusinessRuleException) as exc_info:
            self.service.issue(invoice, company_client, None, self.today)
        assert exc_info.value.error_code == ErrorCode.INVALID_STATE_TRANSITION.value

    def test_issue_blocked_by_fiscal_violation(self, company_client, make_invoice, make_item):
        invoice = make_invoice(company_client, items=[make_item(rate=IvaRate.ZERO)])

        with pytest.raises(ValidationException):
            self.service.issue(invoice, company_client, None, self.today)

    @pytest.mark.parametrize("current,target", [
        (InvoiceStatus.ISSUED, InvoiceStatus.SENT),
        (InvoiceStatus.SENT, InvoiceStatus.PAID),
        (InvoiceStatus.SENT, InvoiceStatus.OVERDUE),
        (InvoiceStatus.OVERDUE, InvoiceStatus.PAID),
    ])
    def test_allowed_transitions(self, make_invoice, current, target):
        result = self.service.transition(make_invoice(status=current), target)

        assert result.invoice.status == target
        assert result.warning is None

    @pytest.mark.parametrize("current,target", [
        (InvoiceStatus.DRAFT, InvoiceStatus.SENT),
        (InvoiceStatus.DRAFT, InvoiceStatus.PAID),
        (InvoiceStatus.ISSUED, InvoiceStatus.PAID),
        (InvoiceStatus.PAID, InvoiceStatus.CANCELLED),
        (InvoiceStatus.CANCELLED, InvoiceStatus.DRAFT),
        (InvoiceStatus.SENT, InvoiceStatus.DRAFT),
    ])
    def test_rejected_transitions(self, make_invoice, current, target):
        with pytest.raises(BusinessRuleException):
            self.service.transition(make_invoice(status=current), target)

    def test_generic_transition_cannot_issue(self, make_invoice):
        with pytest.raises(BusinessRuleException):
            self.service.transition(make_invoice(), InvoiceStatus.ISSUED)

    def test_cancel_draft_without_warning(self, make_invoice):
        result = self.service.transition(make_invoice(), InvoiceStatus.CANCELLED)

        assert result.invoice.status == InvoiceStatus.CANCELLED
        assert result.warning is None

    @pytest.mark.parametrize("current", [InvoiceStatus.ISSUED, InvoiceStatus.SENT, InvoiceStatus.OVERDUE])
    def test_cancel_after_issue_warns(self, make_invoice, current):
        result = self.service.transition(make_invoice(status=current), InvoiceStatus.CANCELLED)

        assert result.invoice.status == InvoiceStatus.CANCELLED
        assert result.warning == CREDIT_NOTE_WARNING
        assert "nota di credito" in result.warning

    def test_can_transition(self):
        assert InvoiceLifecycleService.can_transition(InvoiceStatus.DRAFT, InvoiceStatus.ISSUED)
        assert not InvoiceLifecycleService.can_transition(InvoiceStatus.PAID, InvoiceStatus.OVERDUE)
