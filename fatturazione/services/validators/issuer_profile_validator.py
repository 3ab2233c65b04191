import re

from fatturazione.models.issuer_profile import IssuerProfile
from fatturazione.services.validators.codice_fiscale_validator import CodiceFiscaleValidator
from fatturazione.services.validators.partita_iva_validator import PartitaIvaValidator
from fatturazione.services.validators.validation_result import ValidationIssue, ValidationResult

_REGIME_FISCALE_RE = re.compile(r"^RF(0[1-9]|1[0-9])$")


class IssuerProfileValidator:
    """Validazione del profilo emittente"""

    def validate(self, profile: IssuerProfile) -> ValidationResult:
        errors = []

        if not profile.ragione_sociale or not profile.ragione_sociale.strip():
            errors.append(ValidationIssue("ragione_sociale", "La ragione sociale è obbligatoria"))

        if not PartitaIvaValidator.is_valid(profile.partita_iva):
            errors.append(ValidationIssue("partita_iva", "Partita IVA non valida"))

        if not _REGIME_FISCALE_RE.match(profile.regime_fiscale.value):
            errors.append(ValidationIssue("regime_fiscale", "Regime fiscale non valido (RF01-RF19)"))

        if profile.codice_fiscale and not CodiceFiscaleValidator.is_valid(profile.codice_fiscale):
            errors.append(ValidationIssue("codice_fiscale", "Codice fiscale non valido"))

        return ValidationResult.of(errors)
