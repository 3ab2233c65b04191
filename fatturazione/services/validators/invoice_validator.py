"""
Validazione fattura: regole strutturali e regole fiscali che condizionano il calcolo
"""
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from fatturazione.core.exceptions import ValidationException, ErrorCode
from fatturazione.models.fatturapa_enums import IvaRate, TipoDocumento, DOCUMENTI_COLLEGATI
from fatturazione.models.invoice import Invoice
from fatturazione.services.validators.validation_result import ValidationIssue, ValidationResult

SIMPLIFIED_INVOICE_LIMIT = Decimal("400")
IMMEDIATE_INVOICE_DAYS = 12
DEFERRED_INVOICE_DAY = 15

CAUSALE_FORFETTARIO = (
    "Operazione effettuata ai sensi dell'art. 1, commi 54-89, Legge n. 190/2014 - "
    "Regime forfettario. Operazione senza applicazione dell'IVA e non soggetta a ritenuta d'acconto."
)


def _has_causale_forfettario(causale: Optional[str]) -> bool:
    if not causale:
        return False
    text = causale.upper()
    return "ART. 1, COMMI 54-89" in text and "LEGGE" in text and "190/2014" in text


class InvoiceValidator:
    """Validatore fattura"""

    def validate(self, invoice: Invoice, today: Optional[date] = None) -> ValidationResult:
        """Regole strutturali seguite dalle regole fiscali"""
        today = today or date.today()
        errors: List[ValidationIssue] = []

        if invoice.client_id is None:
            errors.append(ValidationIssue("client_id", "Il cliente è obbligatorio"))
        if invoice.due_date < invoice.invoice_date:
            errors.append(ValidationIssue("due_date", "La data di scadenza non può precedere la data fattura"))
        if invoice.invoice_date > today:
            errors.append(ValidationIssue("invoice_date", "La data fattura non può essere futura"))
        if not invoice.items:
            errors.append(ValidationIssue("items", "La fattura deve contenere almeno una riga"))

        for i, item in enumerate(invoice.items):
            if not item.description or not item.description.strip():
                errors.append(ValidationIssue(f"items[{i}].description", "La descrizione è obbligatoria"))
            if item.quantity <= 0:
                errors.append(ValidationIssue(f"items[{i}].quantity", "La quantità deve essere maggiore di zero"))
            if item.unit_price < 0:
                errors.append(ValidationIssue(f"items[{i}].unit_price", "Il prezzo unitario non può essere negativo"))

        errors.extend(self.validate_fiscal_rules(invoice).errors)
        return ValidationResult.of(errors)

    def validate_fiscal_rules(self, invoice: Invoice) -> ValidationResult:
        """Regole fiscali da rispettare prima del calcolo dei totali"""
        errors: List[ValidationIssue] = []

        # Natura IVA
        for i, item in enumerate(invoice.items):
            field = f"items[{i}].natura"
            if item.iva_rate == IvaRate.ZERO and item.natura is None:
                errors.append(ValidationIssue(field, "Natura IVA obbligatoria per aliquota 0%"))
            elif item.iva_rate != IvaRate.ZERO and item.natura is not None:
                errors.append(ValidationIssue(field, "Natura IVA ammessa solo con aliquota 0%"))
            if item.natura is not None and item.natura.is_reverse_charge and item.iva_rate != IvaRate.ZERO:
                errors.append(ValidationIssue(field, "Le nature di inversione contabile (N6.x) richiedono aliquota 0%"))

        # Regime forfettario
        if (invoice.is_regime_forfettario
                and invoice.document_type not in DOCUMENTI_COLLEGATI
                and not _has_causale_forfettario(invoice.causale)):
            errors.append(ValidationIssue(
                "causale",
                "Il regime forfettario richiede la dicitura: art. 1, commi 54-89, Legge 190/2014"
            ))

        # Fattura semplificata
        is_simplified = invoice.is_simplified or invoice.document_type == TipoDocumento.TD07
        if is_simplified and not invoice.is_regime_forfettario:
            total = sum((item.quantity * item.unit_price for item in invoice.items), Decimal("0"))
            if total > SIMPLIFIED_INVOICE_LIMIT:
                errors.append(ValidationIssue(
                    "items",
                    f"La fattura semplificata non può superare {SIMPLIFIED_INVOICE_LIMIT} euro"
                ))

        # Termini di emissione
        if invoice.data_operazione is not None:
            if invoice.document_type == TipoDocumento.TD01:
                deadline = invoice.data_operazione + timedelta(days=IMMEDIATE_INVOICE_DAYS)
                if invoice.invoice_date > deadline:
                    errors.append(ValidationIssue(
                        "invoice_date",
                        f"La fattura immediata deve essere emessa entro {IMMEDIATE_INVOICE_DAYS} giorni "
                        f"dall'operazione (entro il {deadline.isoformat()})"
                    ))
            elif invoice.document_type == TipoDocumento.TD24:
                deadline = (invoice.data_operazione + relativedelta(months=1)).replace(day=DEFERRED_INVOICE_DAY)
                if invoice.invoice_date > deadline:
                    errors.append(ValidationIssue(
                        "invoice_date",
                        f"La fattura differita deve essere emessa entro il {DEFERRED_INVOICE_DAY} "
                        f"del mese successivo all'operazione (entro il {deadline.isoformat()})"
                    ))

        return ValidationResult.of(errors)

    def ensure_fiscal_rules(self, invoice: Invoice) -> None:
        """Solleva ValidationException con tutte le violazioni fiscali"""
        result = self.validate_fiscal_rules(invoice)
        if not result.is_valid:
            raise ValidationException(
                "La fattura viola regole fiscali",
                ErrorCode.FISCAL_RULE_VIOLATION,
                {"invoice_id": str(invoice.id)},
                errors=result.error_dicts()
            )
