"""Closed vocabularies for the categorical customer fields."""

UNKNOWN = "Unknown"

EDUCATION_LEVELS = frozenset(
    {"High School", "Graduate", "Uneducated", "College", "Post-Graduate", "Doctorate"}
)
MARITAL_STATUSES = frozenset({"Married", "Single", "Divorced"})
INCOME_RANGES = frozenset(
    {"Less than $40K", "$40K - $60K", "$60K - $80K", "$80K - $120K", "$120K +"}
)
CARD_TYPES = frozenset({"Blue", "Silver", "Gold", "Platinum"})

VOCABULARIES: dict[str, frozenset[str]] = {
    "education_level": EDUCATION_LEVELS,
    "marital_status": MARITAL_STATUSES,
    "income_range": INCOME_RANGES,
    "card_type": CARD_TYPES,
}

_KNOWN = EDUCATION_LEVELS | MARITAL_STATUSES | INCOME_RANGES | CARD_TYPES


def map_category(value: str | None) -> str:
    """
    Normalize a raw categorical value.

    Any value outside the known vocabularies, including None, maps to
    "Unknown". Known values are returned unchanged.

    Args:
        value: Raw field value from the record source

    Returns:
        The value itself if known, otherwise "Unknown"

    Example:
        map_category("Gold")      # "Gold"
        map_category("Purple")    # "Unknown"
    """
    if value is not None and value in _KNOWN:
        return value
    return UNKNOWN


def in_vocabulary(family: str, value: str) -> bool:
    """Check whether value belongs to a category family or is "Unknown"."""
    return value == UNKNOWN or value in VOCABULARIES[family]
