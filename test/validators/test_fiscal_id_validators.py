"""
Test per Partita IVA e Codice Fiscale
"""
import pytest

from fatturazione.services.validators.codice_fiscale_validator import CodiceFiscaleValidator
from fatturazione.services.validators.partita_iva_validator import PartitaIvaValidator


class TestPartitaIvaValidator:

    @pytest.mark.parametrize("piva", ["12345678903", "01234567897", "IT12345678903", " 12345678903 "])
    def test_valid(self, piva):
        assert PartitaIvaValidator.is_valid(piva) is True

    @pytest.mark.parametrize("piva", ["12345678901", "1234567890", "123456789012", "ABCDEFGHIJK", "", None])
    def test_invalid(self, piva):
        assert PartitaIvaValidator.is_valid(piva) is False


class TestCodiceFiscaleValidator:

    @pytest.mark.parametrize("cf", ["RSSMRA85T10A562S", "rssmra85t10a562s", "80012345676"])
    def test_valid(self, cf):
        assert CodiceFiscaleValidator.is_valid(cf) is True

    @pytest.mark.parametrize("cf", ["RSSMRA85T10A562X", "RSSMRA85T10A562", "80012345678", "", None])
    def test_invalid(self, cf):
        assert CodiceFiscaleValidator.is_valid(cf) is False
