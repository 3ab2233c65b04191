"""
Numerazione progressiva delle fatture nel formato AAAA/NNN con azzeramento annuale
"""
import logging
import re
from datetime import date
from typing import Optional, Tuple

from fatturazione.core.exceptions import ValidationException, ErrorCode

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^(\d{4})/(\d{3})$")
MAX_SEQUENCE = 999


class InvoiceNumberingService:
    """Allocatore del numero fattura"""

    @staticmethod
    def parse_number(number: str) -> Tuple[int, int]:
        """Restituisce (anno, progressivo) oppure solleva ValidationException"""
        match = _NUMBER_RE.match(number or "")
        if not match:
            raise ValidationException(
                f"Formato numero fattura non valido: '{number}' (atteso AAAA/NNN)",
                ErrorCode.INVALID_INVOICE_NUMBER,
                {"invoice_number": number},
                errors=[{"field": "invoice_number", "message": "Formato atteso AAAA/NNN"}]
            )
        return int(match.group(1)), int(match.group(2))

    def next_number(self, last_number: Optional[str], today: Optional[date] = None) -> str:
        current_year = (today or date.today()).year

        if last_number is None or not last_number.strip():
            return f"{current_year}/001"

        year, sequence = self.parse_number(last_number.strip())
        if year != current_year:
            logger.info(f"Nuovo anno fiscale {current_year}: numerazione azzerata (ultimo numero {last_number})")
            sequence = 1
        else:
            sequence += 1

        if sequence > MAX_SEQUENCE:
            raise ValidationException(
                f"Numerazione esaurita per l'anno {current_year}",
                ErrorCode.INVALID_INVOICE_NUMBER,
                {"invoice_number": last_number},
                errors=[{"field": "invoice_number", "message": f"Progressivo oltre {MAX_SEQUENCE}"}]
            )
        return f"{current_year}/{sequence:03d}"
