"""
Similarity predicate between two customers.

Twelve attributes are always checked. Credit limit and revolving balance
join the check only when both customers carry them. Exact-match attributes
compare raw values. Bucketed attributes compare against a fixed table of
named ranges in one of two modes:

    literal: both stringified values must equal the same bucket label.
             Numeric values never equal a label, so these attributes only
             match for pre-bucketed input.
    range:   each value is classified into its bucket and the labels are
             compared.
"""

from __future__ import annotations

import typing as T
from dataclasses import dataclass

from churngraph.customer import Customer

BucketMode = T.Literal["literal", "range"]

DEFAULT_NEIGHBOR_THRESHOLD = 2


@dataclass(frozen=True)
class Bucket:
    """Named half-open range [lower, upper). None leaves a side unbounded."""

    label: str
    lower: float | None = None
    upper: float | None = None

    def contains(self, value: float) -> bool:
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value >= self.upper:
            return False
        return True


TENURE_BUCKETS = (
    Bucket("20-30", 20, 30),
    Bucket("30-40", 30, 40),
    Bucket("40-50", 40, 50),
    Bucket(">50", 50),
)
CREDIT_LIMIT_BUCKETS = (
    Bucket("5000<", None, 5000),
    Bucket("5000-10000", 5000, 10000),
    Bucket("10000-15000", 10000, 15000),
    Bucket("15000-20000", 15000, 20000),
    Bucket("20000-25000", 20000, 25000),
    Bucket("25000-30000", 25000, 30000),
    Bucket(">30000", 30000),
)
AMOUNT_BUCKETS = (
    Bucket("500<", None, 500),
    Bucket("500-1000", 500, 1000),
    Bucket("1000-1500", 1000, 1500),
    Bucket("1500-2000", 1500, 2000),
    Bucket(">2000", 2000),
)
TRANSACTION_COUNT_BUCKETS = (
    Bucket("<10", None, 10),
    Bucket("10-20", 10, 20),
    Bucket("20-30", 20, 30),
    Bucket("30-40", 30, 40),
    Bucket(">40", 40),
)
UTILIZATION_BUCKETS = (
    Bucket("<0.100", None, 0.1),
    Bucket("0.100-0.200", 0.1, 0.2),
    Bucket("0.200-0.300", 0.2, 0.3),
    Bucket("0.300-0.400", 0.3, 0.4),
    Bucket(">0.400", 0.4),
)

# Range mode only: tenure below 20 months would otherwise fall outside every bucket.
TENURE_RANGE_BUCKETS = (Bucket("<20", None, 20),) + TENURE_BUCKETS


@dataclass(frozen=True)
class Attribute:
    """
    One checked customer attribute.

    Attributes:
        label: Category name used in formatted traits
        field: Customer field name
        buckets: Named ranges for bucketed attributes, None for exact match
        range_buckets: Bucket table used in range mode, defaults to buckets
        optional: Skip the check when either customer lacks the value
        categorical: Value lives in the one-hot bundle
    """

    label: str
    field: str
    buckets: tuple[Bucket, ...] | None = None
    range_buckets: tuple[Bucket, ...] | None = None
    optional: bool = False
    categorical: bool = False

    def value(self, customer: Customer) -> T.Any:
        source = customer.encoding if self.categorical else customer
        return getattr(source, self.field)


ATTRIBUTES: tuple[Attribute, ...] = (
    Attribute("Age", "age"),
    Attribute("Education Level", "education_level", categorical=True),
    Attribute("Marital Status", "marital_status", categorical=True),
    Attribute("Income Range", "income_range", categorical=True),
    Attribute("Card Type", "card_type", categorical=True),
    Attribute("Mon W Bank", "tenure_months", TENURE_BUCKETS, TENURE_RANGE_BUCKETS),
    Attribute("Number of Products Purchased", "product_count"),
    Attribute("Month inactive", "inactive_months"),
    Attribute("Number of Contacts from Bank (past 12 months)", "contact_count"),
    Attribute(
        "Card's Credit Limit", "credit_limit", CREDIT_LIMIT_BUCKETS, optional=True
    ),
    Attribute(
        "Evolving Balance on Card", "revolving_balance", AMOUNT_BUCKETS, optional=True
    ),
    Attribute(
        "Total Dollar Amount of Transaction via Card",
        "transaction_amount",
        AMOUNT_BUCKETS,
    ),
    Attribute(
        "Total Number of Transactions via Card",
        "transaction_count",
        TRANSACTION_COUNT_BUCKETS,
    ),
    Attribute("Average Card Utilization Ratio", "utilization_ratio", UTILIZATION_BUCKETS),
)


def classify(value: float, buckets: T.Iterable[Bucket]) -> str | None:
    """
    Find the label of the bucket containing value.

    Args:
        value: Numeric attribute value
        buckets: Ordered bucket table

    Returns:
        Bucket label, or None if no bucket contains the value
    """
    for bucket in buckets:
        if bucket.contains(value):
            return bucket.label
    return None


class SimilarityPredicate:
    """
    Decides whether two customers are neighbors and which traits they share.

    The predicate is symmetric: every check compares the two values with
    an equality test, so swapping the customers cannot change the outcome.

    Attributes:
        threshold: Minimum number of shared attributes for two neighbors
        bucket_mode: How bucketed attributes are compared

    Example:
        predicate = SimilarityPredicate(threshold=2)
        predicate.is_neighbor(alice, bob)
        predicate.traits_shared(alice, bob)
    """

    def __init__(
        self,
        threshold: int = DEFAULT_NEIGHBOR_THRESHOLD,
        bucket_mode: BucketMode = "literal",
    ) -> None:
        if threshold < 1:
            raise ValueError(f"threshold must be at least 1, got {threshold}")
        if bucket_mode not in ("literal", "range"):
            raise ValueError(f"Unknown bucket mode: {bucket_mode}")
        self.threshold = threshold
        self.bucket_mode = bucket_mode

    def shared_value(self, attribute: Attribute, a: Customer, b: Customer) -> str | None:
        """
        Compare one attribute between two customers.

        Args:
            attribute: Attribute to compare
            a: First customer
            b: Second customer

        Returns:
            Display value of the shared trait, or None if not shared
        """
        value_a = attribute.value(a)
        value_b = attribute.value(b)

        if attribute.optional and (value_a is None or value_b is None):
            return None

        if attribute.buckets is None:
            return str(value_a) if value_a == value_b else None

        if self.bucket_mode == "literal":
            text_a, text_b = str(value_a), str(value_b)
            for bucket in attribute.buckets:
                if text_a == bucket.label and text_b == bucket.label:
                    return str(value_a)
            return None

        table = attribute.range_buckets or attribute.buckets
        label_a = classify(value_a, table)
        if label_a is not None and label_a == classify(value_b, table):
            return label_a
        return None

    def traits_shared(self, a: Customer, b: Customer) -> list[str]:
        """
        List the traits two customers have in common.

        Traits are formatted as "<category>: <value>" and appear in the
        fixed attribute order.

        Args:
            a: First customer
            b: Second customer

        Returns:
            Formatted shared traits
        """
        traits = []
        for attribute in ATTRIBUTES:
            value = self.shared_value(attribute, a, b)
            if value is not None:
                traits.append(f"{attribute.label}: {value}")
        return traits

    def shared_count(self, a: Customer, b: Customer) -> int:
        return sum(
            1 for attribute in ATTRIBUTES if self.shared_value(attribute, a, b) is not None
        )

    def is_neighbor(self, a: Customer, b: Customer) -> bool:
        """Whether a and b share at least threshold attributes."""
        return self.shared_count(a, b) >= self.threshold


_default = SimilarityPredicate()


def traits_shared(a: Customer, b: Customer) -> list[str]:
    """Shared traits under the default predicate."""
    return _default.traits_shared(a, b)


def is_neighbor(a: Customer, b: Customer) -> bool:
    """Neighbor test under the default predicate."""
    return _default.is_neighbor(a, b)


def split_trait(trait: str) -> tuple[str, str] | None:
    """
    Split a formatted trait into (category, value).

    Args:
        trait: Trait string such as "Card Type: Silver"

    Returns:
        Stripped (category, value) pair, or None if there is no separator
    """
    category, sep, value = trait.partition(":")
    if not sep:
        return None
    return category.strip(), value.strip()
