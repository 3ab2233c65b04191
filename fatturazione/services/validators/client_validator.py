"""
Validazione anagrafica cliente
"""
import re
from decimal import Decimal

from fatturazione.models.client import Client
from fatturazione.services.validators.codice_fiscale_validator import CodiceFiscaleValidator
from fatturazione.services.validators.partita_iva_validator import PartitaIvaValidator
from fatturazione.services.validators.validation_result import ValidationIssue, ValidationResult

_CODICE_UFFICIO_RE = re.compile(r"^[A-Za-z0-9]{6}$")
_CODICE_DESTINATARIO_RE = re.compile(r"^[A-Za-z0-9]{7}$")
_CAP_RE = re.compile(r"^\d{5}$")
_PROVINCIA_RE = re.compile(r"^[A-Z]{2}$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ClientValidator:
    """Regole formali e fiscali sull'anagrafica cliente"""

    def validate(self, client: Client) -> ValidationResult:
        errors = []

        if not client.ragione_sociale or not client.ragione_sociale.strip():
            errors.append(ValidationIssue("ragione_sociale", "La ragione sociale è obbligatoria"))

        if client.is_public_administration:
            if not client.codice_univoco_ufficio or not _CODICE_UFFICIO_RE.match(client.codice_univoco_ufficio):
                errors.append(ValidationIssue(
                    "codice_univoco_ufficio",
                    "Il codice univoco ufficio è obbligatorio per la PA e deve essere di 6 caratteri alfanumerici"
                ))
        elif client.subject_to_split_payment:
            errors.append(ValidationIssue(
                "subject_to_split_payment",
                "Lo split payment è applicabile solo alla Pubblica Amministrazione"
            ))

        if client.partita_iva and not PartitaIvaValidator.is_valid(client.partita_iva):
            errors.append(ValidationIssue("partita_iva", "Partita IVA non valida"))

        if client.codice_fiscale and not CodiceFiscaleValidator.is_valid(client.codice_fiscale):
            errors.append(ValidationIssue("codice_fiscale", "Codice fiscale non valido"))

        if client.address.postal_code and not _CAP_RE.match(client.address.postal_code):
            errors.append(ValidationIssue("address.postal_code", "Il CAP deve essere di 5 cifre"))

        if client.address.province and not _PROVINCIA_RE.match(client.address.province):
            errors.append(ValidationIssue("address.province", "La provincia deve essere una sigla di 2 lettere maiuscole"))

        if client.email and not _EMAIL_RE.match(client.email):
            errors.append(ValidationIssue("email", "Indirizzo email non valido"))

        if client.codice_destinatario and not _CODICE_DESTINATARIO_RE.match(client.codice_destinatario):
            errors.append(ValidationIssue("codice_destinatario", "Il codice destinatario deve essere di 7 caratteri"))

        for name in ("ritenuta_percentage", "ritenuta_base_percentage"):
            value = getattr(client, name)
            if value < Decimal("0") or value > Decimal("100"):
                errors.append(ValidationIssue(name, "La percentuale deve essere compresa tra 0 e 100"))

        return ValidationResult.of(errors)
