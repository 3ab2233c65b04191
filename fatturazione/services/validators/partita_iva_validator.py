"""
Validazione Partita IVA italiana (11 cifre con cifra di controllo)
"""
import re

_PIVA_RE = re.compile(r"^\d{11}$")


class PartitaIvaValidator:
    """Verifica formato e cifra di controllo della Partita IVA"""

    @staticmethod
    def is_valid(partita_iva: str) -> bool:
        if not partita_iva:
            return False
        piva = partita_iva.strip()
        if piva.upper().startswith("IT"):
            piva = piva[2:]
        if not _PIVA_RE.match(piva):
            return False

        total = 0
        for i, ch in enumerate(piva):
            digit = int(ch)
            if i % 2 == 1:
                digit *= 2
                if digit > 9:
                    digit -= 9
            total += digit
        return total % 10 == 0
