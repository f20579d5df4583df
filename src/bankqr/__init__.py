"""
bankqr - Polish bank transfer QR code payload builder.

This package validates payment fields and assembles them into the
``|``-separated record that banking apps read from transfer QR codes.
Rendering the QR image itself is left to a QR code library.
"""

__version__ = "0.1.0"

from bankqr.builder import RecordBuilder
from bankqr.enums import RecipientType
from bankqr.exceptions import (
    BankQrError,
    ConfigurationError,
    FieldError,
    FieldTypeError,
    FormatError,
    InternalInvariantError,
    RangeError,
    RequiredFieldError,
)
from bankqr.models import PaymentData
from bankqr.validation import RecordValidator, ValidationResult, validate_payment

__all__ = [
    # Builder
    "RecordBuilder",
    "RecipientType",
    # Input model
    "PaymentData",
    # Validation
    "RecordValidator",
    "ValidationResult",
    "validate_payment",
    # Errors
    "BankQrError",
    "ConfigurationError",
    "FieldError",
    "FieldTypeError",
    "FormatError",
    "RequiredFieldError",
    "RangeError",
    "InternalInvariantError",
]
