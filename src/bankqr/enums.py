"""
Enums for payment record metadata.

These enums define the valid values for key record attributes.
"""

from enum import Enum


class RecipientType(str, Enum):
    """Kind of transfer recipient. Companies must supply a VAT ID."""

    COMPANY = "company"
    PERSON = "person"
