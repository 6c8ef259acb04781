from __future__ import annotations

import math
import typing as T
from pathlib import Path

import polars as pl
from loguru import logger

import churngraph.errors as errors
from churngraph.categories import UNKNOWN, map_category
from churngraph.customer import Customer, OneHotEncoding

MAX_RECORDS = 1000
MIN_FIELDS = 21
DEFAULT_AGE = 2

# Positional layout of the BankChurners export.
CHURN_FIELD = 1
AGE_FIELD = 2
EDUCATION_FIELD = 5
MARITAL_FIELD = 6
INCOME_FIELD = 7
CARD_FIELD = 8
TENURE_FIELD = 9
PRODUCTS_FIELD = 10
INACTIVE_FIELD = 11
CONTACTS_FIELD = 12
CREDIT_LIMIT_FIELD = 13
BALANCE_FIELD = 14
AMOUNT_FIELD = 17
COUNT_FIELD = 18
UTILIZATION_FIELD = 20


def _parse_int(value: str | None, default: int = 0) -> int:
    """Parse an integer field, accepting "12.0" style text. Falls back to default."""
    if value is None:
        return default
    text = value.strip()
    try:
        parsed = int(text)
    except ValueError:
        try:
            parsed = int(float(text))
        except (ValueError, OverflowError):
            return default
    return parsed if parsed >= 0 else default


def _parse_float(value: str | None, default: float = 0.0) -> float:
    if value is None:
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    if math.isnan(parsed) or math.isinf(parsed) or parsed < 0:
        return default
    return parsed


def _category(row: T.Sequence[str | None], index: int) -> str:
    if index >= len(row):
        return UNKNOWN
    return map_category(row[index])


def customer_from_row(
    row: T.Sequence[str | None],
    include_credit_fields: bool = False,
) -> Customer:
    """
    Build a Customer from one positional record.

    Categorical fields go through map_category. Numeric fields that fail to
    parse take their defaults (age 2, others 0).

    Args:
        row: Raw field values in file order
        include_credit_fields: Also read credit limit and revolving balance

    Returns:
        Parsed customer

    Raises:
        DatasetLoadError: If the row has fewer than 21 fields
    """
    if len(row) < MIN_FIELDS:
        raise errors.DatasetLoadError(
            f"Record has {len(row)} fields, expected at least {MIN_FIELDS}",
            hint="Check that the file is a complete BankChurners export.",
        )

    return Customer(
        churn_status=row[CHURN_FIELD] if row[CHURN_FIELD] is not None else UNKNOWN,
        age=_parse_int(row[AGE_FIELD], DEFAULT_AGE),
        encoding=OneHotEncoding(
            education_level=_category(row, EDUCATION_FIELD),
            marital_status=_category(row, MARITAL_FIELD),
            income_range=_category(row, INCOME_FIELD),
            card_type=_category(row, CARD_FIELD),
        ),
        tenure_months=_parse_int(row[TENURE_FIELD]),
        product_count=_parse_int(row[PRODUCTS_FIELD]),
        inactive_months=_parse_int(row[INACTIVE_FIELD]),
        contact_count=_parse_int(row[CONTACTS_FIELD]),
        credit_limit=_parse_int(row[CREDIT_LIMIT_FIELD]) if include_credit_fields else None,
        revolving_balance=_parse_int(row[BALANCE_FIELD]) if include_credit_fields else None,
        transaction_amount=_parse_int(row[AMOUNT_FIELD]),
        transaction_count=_parse_int(row[COUNT_FIELD]),
        utilization_ratio=_parse_float(row[UTILIZATION_FIELD]),
    )


def load_customers(
    path: str | Path,
    limit: int = MAX_RECORDS,
    include_credit_fields: bool = False,
) -> list[Customer]:
    """
    Read customers from a CSV file.

    Every column is read as text and mapped by position. Only the first
    `limit` records are used.

    Args:
        path: CSV file with a header row
        limit: Maximum number of records. Defaults to 1000.
        include_credit_fields: Also read credit limit and revolving balance

    Returns:
        Customers in file order

    Raises:
        DatasetLoadError: If the file is missing, unreadable or malformed

    Example:
        customers = load_customers("BankChurners.csv")
    """
    path = Path(path)
    if not path.exists():
        raise errors.DatasetLoadError(f"File not found: {path}")

    try:
        df = pl.read_csv(path, infer_schema_length=0, n_rows=limit)
    except Exception as e:
        raise errors.DatasetLoadError(
            f"Failed to read {path}",
            cause=e,
            hint="The dataset must be a comma-separated file with a header row.",
        ) from e

    if df.width < MIN_FIELDS:
        raise errors.DatasetLoadError(
            f"{path} has {df.width} columns, expected at least {MIN_FIELDS}",
            hint="Check that the file is a complete BankChurners export.",
        )

    customers = [
        customer_from_row(row, include_credit_fields=include_credit_fields)
        for row in df.iter_rows()
    ]
    logger.debug(f"Loaded {len(customers)} customers from {path}")
    return customers
