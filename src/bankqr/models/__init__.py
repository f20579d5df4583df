"""
Pydantic models for payment input.
"""

from bankqr.enums import RecipientType
from bankqr.models.payment import PaymentData

__all__ = [
    "PaymentData",
    "RecipientType",
]
