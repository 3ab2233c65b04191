from .address import Address
from .client import Client
from .invoice import Invoice, InvoiceItem, PaymentInfo
from .issuer_profile import IssuerProfile

__all__ = [
    "Address",
    "Client",
    "Invoice",
    "InvoiceItem",
    "PaymentInfo",
    "IssuerProfile",
]
