from __future__ import annotations

from pydantic import BaseModel, Field, ValidationInfo, field_validator

import churngraph.categories as categories


class OneHotEncoding(BaseModel, frozen=True):
    """
    Categorical bundle of a customer.

    Each field holds a value from its closed vocabulary or "Unknown".
    """

    education_level: str = categories.UNKNOWN
    marital_status: str = categories.UNKNOWN
    income_range: str = categories.UNKNOWN
    card_type: str = categories.UNKNOWN

    @field_validator("education_level", "marital_status", "income_range", "card_type")
    @classmethod
    def _check_vocabulary(cls, value: str, info: ValidationInfo) -> str:
        if not categories.in_vocabulary(info.field_name, value):
            raise ValueError(
                f"{value!r} is not a known {info.field_name.replace('_', ' ')}"
            )
        return value


class Customer(BaseModel, frozen=True):
    """
    Immutable customer record.

    Built once from the record source and never mutated. Credit limit and
    revolving balance are optional; similarity checks skip them when absent.

    Attributes:
        churn_status: "Attrited Customer" or "Existing Customer"
        age: Customer age in years
        encoding: Categorical bundle (education, marital, income, card)
        tenure_months: Months the customer has been with the bank
        product_count: Number of products held
        inactive_months: Months inactive in the last 12 months
        contact_count: Contacts with the bank in the last 12 months
        credit_limit: Card credit limit in dollars
        revolving_balance: Revolving balance on the card in dollars
        transaction_amount: Total transaction amount in dollars
        transaction_count: Total number of transactions
        utilization_ratio: Average card utilization ratio
    """

    churn_status: str
    age: int = Field(ge=0)
    encoding: OneHotEncoding = Field(default_factory=OneHotEncoding)
    tenure_months: int = Field(default=0, ge=0)
    product_count: int = Field(default=0, ge=0)
    inactive_months: int = Field(default=0, ge=0)
    contact_count: int = Field(default=0, ge=0)
    credit_limit: int | None = Field(default=None, ge=0)
    revolving_balance: int | None = Field(default=None, ge=0)
    transaction_amount: int = Field(default=0, ge=0)
    transaction_count: int = Field(default=0, ge=0)
    utilization_ratio: float = Field(default=0.0, ge=0.0)

    def is_churned(self, existing_label: str = "Existing Customer") -> bool:
        """Whether the customer is outside the existing-customer group."""
        return self.churn_status != existing_label
