import re

from fatturazione.models.fatturapa_enums import ModalitaPagamento
from fatturazione.models.invoice import PaymentInfo
from fatturazione.services.validators.validation_result import ValidationIssue, ValidationResult

_IBAN_IT_RE = re.compile(r"^IT\d{2}[A-Z]\d{10}[A-Za-z0-9]{12}$")


class PaymentInfoValidator:
    """Validazione dei dati di pagamento"""

    def validate(self, payment_info: PaymentInfo) -> ValidationResult:
        errors = []
        warnings = []

        if payment_info.iban:
            iban = payment_info.iban.replace(" ", "").upper()
            if not _IBAN_IT_RE.match(iban):
                errors.append(ValidationIssue("payment_info.iban", "IBAN italiano non valido"))
        elif payment_info.modalita == ModalitaPagamento.MP05_BONIFICO:
            warnings.append(ValidationIssue("payment_info.iban", "IBAN non indicato per pagamento con bonifico"))

        return ValidationResult.of(errors, warnings)
