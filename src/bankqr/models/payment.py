"""
Payment input model.

Describes one transfer as raw input, before any field normalization.
"""

from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from bankqr.enums import RecipientType


class PaymentData(BaseModel):
    """
    Raw payment description, e.g. loaded from a JSON document.

    Types are strict so values reach the record builder unchanged: an int
    VAT ID is zero-padded there, and a float amount means zloty while an
    int amount means grosz. Length and format rules are not applied here.

    Attributes:
        recipient_type: Company or person recipient
        vat_id: Recipient VAT ID (NIP), required for companies
        bank_account: 26-digit account number, spaces allowed
        recipient_name: Recipient name (cut to 20 chars)
        country_code: Two-letter country code
        payment_title: Payment title (cut to 32 chars)
        amount: float zloty or int grosz
        reserved1: Payment reference ID, also accepted as ``ref_id``
        reserved2: Invobill reference ID, also accepted as ``invobill``
        reserved3: Free-form reserved field
    """

    model_config = ConfigDict(
        # Reject misspelled keys instead of dropping them
        extra="forbid",
        populate_by_name=True,
    )

    recipient_type: RecipientType = Field(
        default=RecipientType.PERSON,
        description="Recipient kind",
    )

    vat_id: Optional[Union[StrictStr, StrictInt]] = Field(
        default=None,
        description="VAT ID (NIP), 10 digits, hyphens allowed",
    )

    bank_account: Optional[StrictStr] = Field(
        default=None,
        description="Bank account number, 26 digits",
    )

    recipient_name: Optional[StrictStr] = Field(
        default=None,
        description="Recipient name",
    )

    country_code: Optional[StrictStr] = Field(
        default=None,
        description="Two-letter country code (e.g. 'PL')",
    )

    payment_title: Optional[StrictStr] = Field(
        default=None,
        description="Payment title",
    )

    amount: Optional[Union[StrictInt, StrictFloat]] = Field(
        default=None,
        description="Amount: float in zloty or int in grosz",
    )

    reserved1: Optional[StrictStr] = Field(
        default=None,
        description="Payment reference ID",
        validation_alias=AliasChoices("reserved1", "ref_id"),
    )

    reserved2: Optional[StrictStr] = Field(
        default=None,
        description="Invobill reference ID",
        validation_alias=AliasChoices("reserved2", "invobill"),
    )

    reserved3: Optional[StrictStr] = Field(
        default=None,
        description="Reserved",
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.model_dump(mode="json", exclude_none=True)
