"""
Sistema di gestione errori centralizzato.

Due livelli: errori di input/regole di business (DomainException e derivate),
sempre strutturati e recuperabili correggendo l'input, ed errori di
precondizione (PreconditionException) che segnalano una violazione del
contratto da parte del chiamante.
"""
from abc import ABC
from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorCode(Enum):
    """Codici errore standardizzati"""
    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    INVALID_INVOICE_NUMBER = "INVALID_INVOICE_NUMBER"
    FISCAL_RULE_VIOLATION = "FISCAL_RULE_VIOLATION"
    CREDIT_NOTE_INVALID = "CREDIT_NOTE_INVALID"
    ISSUER_PROFILE_MISSING = "ISSUER_PROFILE_MISSING"

    # Business logic errors
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    INVOICE_NOT_MODIFIABLE = "INVOICE_NOT_MODIFIABLE"
    CLIENT_IN_USE = "CLIENT_IN_USE"

    # Not found errors
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"

    # Precondition errors
    PRECONDITION_FAILED = "PRECONDITION_FAILED"

    # Infrastructure errors
    STORAGE_ERROR = "STORAGE_ERROR"


class BaseApplicationException(Exception, ABC):
    """Base exception per l'applicazione"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400
    ):
        self.message = message
        self.error_code = error_code.value
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Converte l'eccezione in dizionario per la risposta API"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "status_code": self.status_code
        }


class DomainException(BaseApplicationException):
    """Eccezioni del dominio business"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 400)


class ValidationException(DomainException):
    """Errori di validazione, con l'elenco completo delle violazioni in details['errors']"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        errors: Optional[List[Dict[str, str]]] = None
    ):
        error_details = details or {}
        if errors:
            error_details["errors"] = list(errors)
        super().__init__(message, error_code, error_details)

    @property
    def errors(self) -> List[Dict[str, str]]:
        return self.details.get("errors", [])


class BusinessRuleException(DomainException):
    """Violazione regole business"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details)


class NotFoundException(BaseApplicationException):
    """Entità non trovata"""

    def __init__(
        self,
        entity_type: str,
        entity_id: Any = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if entity_id is not None:
            message = f"{entity_type} with id '{entity_id}' not found"
        else:
            message = f"{entity_type} not found"

        error_details = details or {}
        if entity_id is not None:
            error_details["entity_id"] = str(entity_id)
        error_details["entity_type"] = entity_type

        super().__init__(
            message,
            ErrorCode.ENTITY_NOT_FOUND,
            error_details,
            404
        )


class PreconditionException(BaseApplicationException):
    """Violazione del contratto da parte del chiamante (argomenti mancanti, cliente non associato)"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.PRECONDITION_FAILED, details, 500)


class InfrastructureException(BaseApplicationException):
    """Errori di infrastruttura"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.STORAGE_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 500)


def _label(value: Any) -> str:
    return str(getattr(value, "value", value))


# Factory per creare eccezioni specifiche
class ExceptionFactory:
    """Factory per creare eccezioni specifiche"""

    @staticmethod
    def invoice_not_found(invoice_id: Any) -> NotFoundException:
        return NotFoundException("Invoice", invoice_id)

    @staticmethod
    def client_not_found(client_id: Any) -> NotFoundException:
        return NotFoundException("Client", client_id)

    @staticmethod
    def issuer_profile_missing() -> ValidationException:
        return ValidationException(
            "Profilo emittente non configurato",
            ErrorCode.ISSUER_PROFILE_MISSING,
            errors=[{"field": "issuer_profile", "message": "Profilo emittente non configurato"}]
        )

    @staticmethod
    def invalid_transition(current: Any, target: Any) -> BusinessRuleException:
        return BusinessRuleException(
            f"Transizione di stato non consentita: {_label(current)} -> {_label(target)}",
            ErrorCode.INVALID_STATE_TRANSITION,
            {"from": _label(current), "to": _label(target)}
        )

    @staticmethod
    def invoice_not_modifiable(invoice_id: Any, status: Any) -> BusinessRuleException:
        return BusinessRuleException(
            "Solo le fatture in bozza possono essere modificate",
            ErrorCode.INVOICE_NOT_MODIFIABLE,
            {"invoice_id": str(invoice_id), "status": _label(status)}
        )

    @staticmethod
    def required_argument(name: str) -> PreconditionException:
        return PreconditionException(
            f"Argomento obbligatorio mancante: {name}",
            {"argument": name}
        )
