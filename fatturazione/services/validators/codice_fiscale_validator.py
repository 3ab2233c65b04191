"""
Validazione Codice Fiscale: persone fisiche (16 caratteri) e soggetti diversi (11 cifre)
"""
import re

from fatturazione.services.validators.partita_iva_validator import PartitaIvaValidator

_CF_PERSONA_RE = re.compile(r"^[A-Z]{6}[0-9LMNPQRSTUV]{2}[A-Z][0-9LMNPQRSTUV]{2}[A-Z][0-9LMNPQRSTUV]{3}[A-Z]$")
_CF_NUMERICO_RE = re.compile(r"^\d{11}$")

# Valori per i caratteri in posizione dispari (1-based)
_ODD_VALUES = {
    "0": 1, "1": 0, "2": 5, "3": 7, "4": 9, "5": 13, "6": 15, "7": 17, "8": 19, "9": 21,
    "A": 1, "B": 0, "C": 5, "D": 7, "E": 9, "F": 13, "G": 15, "H": 17, "I": 19, "J": 21,
    "K": 2, "L": 4, "M": 18, "N": 20, "O": 11, "P": 3, "Q": 6, "R": 8, "S": 12, "T": 14,
    "U": 16, "V": 10, "W": 22, "X": 25, "Y": 24, "Z": 23,
}


def _even_value(ch: str) -> int:
    if ch.isdigit():
        return int(ch)
    return ord(ch) - ord("A")


class CodiceFiscaleValidator:
    """Verifica formato e carattere di controllo del Codice Fiscale"""

    @staticmethod
    def is_valid(codice_fiscale: str) -> bool:
        if not codice_fiscale:
            return False
        cf = codice_fiscale.strip().upper()

        if _CF_NUMERICO_RE.match(cf):
            return PartitaIvaValidator.is_valid(cf)
        if not _CF_PERSONA_RE.match(cf):
            return False

        total = 0
        for i, ch in enumerate(cf[:15]):
            # i pari (0-based) corrisponde a posizione dispari
            total += _ODD_VALUES[ch] if i % 2 == 0 else _even_value(ch)
        return cf[15] == chr(ord("A") + total % 26)
