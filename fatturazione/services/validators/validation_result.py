"""
Risultati di validazione.

Dataclass immutabili per rappresentare errori e avvisi di validazione.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Dict, Tuple


@dataclass(frozen=True)
class ValidationIssue:
    """
    Singola violazione di una regola.

    Attributes:
        field: Campo o percorso (es. "items[0].natura")
        message: Messaggio descrittivo per l'utente
    """
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """
    Esito di una validazione.

    Attributes:
        errors: Violazioni bloccanti
        warnings: Segnalazioni non bloccanti
    """
    errors: Tuple[ValidationIssue, ...] = field(default_factory=tuple)
    warnings: Tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def of(cls, errors: List[ValidationIssue], warnings: List[ValidationIssue] = None) -> "ValidationResult":
        return cls(tuple(errors), tuple(warnings or ()))

    def error_dicts(self) -> List[Dict[str, str]]:
        return [e.to_dict() for e in self.errors]

    def warning_dicts(self) -> List[Dict[str, str]]:
        return [w.to_dict() for w in self.warnings]
