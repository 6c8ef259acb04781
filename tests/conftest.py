"""Shared test fixtures for churngraph tests."""

import tempfile
from pathlib import Path

import pytest

from churngraph import Customer, OneHotEncoding

HEADER = [
    "CLIENTNUM",
    "Attrition_Flag",
    "Customer_Age",
    "Gender",
    "Dependent_count",
    "Education_Level",
    "Marital_Status",
    "Income_Category",
    "Card_Category",
    "Months_on_book",
    "Total_Relationship_Count",
    "Months_Inactive_12_mon",
    "Contacts_Count_12_mon",
    "Credit_Limit",
    "Total_Revolving_Bal",
    "Avg_Open_To_Buy",
    "Total_Amt_Chng_Q4_Q1",
    "Total_Trans_Amt",
    "Total_Trans_Ct",
    "Total_Ct_Chng_Q4_Q1",
    "Avg_Utilization_Ratio",
]


@pytest.fixture
def temp_dir():
    """Temporary directory that's cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_customer():
    """Factory for customers with explicit categorical and numeric fields."""

    def _make(
        churn_status="Attrited Customer",
        age=40,
        education_level="Unknown",
        marital_status="Unknown",
        income_range="Unknown",
        card_type="Blue",
        **numeric,
    ):
        return Customer(
            churn_status=churn_status,
            age=age,
            encoding=OneHotEncoding(
                education_level=education_level,
                marital_status=marital_status,
                income_range=income_range,
                card_type=card_type,
            ),
            **numeric,
        )

    return _make


@pytest.fixture
def customer_a():
    return Customer(
        churn_status="Existing Customer",
        age=25,
        encoding=OneHotEncoding(
            education_level="Graduate",
            marital_status="Single",
            income_range="$40K - $60K",
            card_type="Silver",
        ),
        tenure_months=12,
        product_count=5,
        inactive_months=2,
        contact_count=8,
        credit_limit=15000,
        revolving_balance=1200,
        transaction_amount=5000,
        transaction_count=25,
        utilization_ratio=0.4,
    )


@pytest.fixture
def customer_b():
    return Customer(
        churn_status="Attrited Customer",
        age=30,
        encoding=OneHotEncoding(
            education_level="Graduate",
            marital_status="Single",
            income_range="$40K - $60K",
            card_type="Silver",
        ),
        tenure_months=8,
        product_count=3,
        inactive_months=3,
        contact_count=12,
        credit_limit=12000,
        revolving_balance=800,
        transaction_amount=3000,
        transaction_count=15,
        utilization_ratio=0.3,
    )


@pytest.fixture
def stranger(make_customer):
    """Customer sharing no exact-match attribute with customer_a or customer_b."""
    return make_customer(
        age=60,
        education_level="Doctorate",
        marital_status="Married",
        income_range="$120K +",
        card_type="Blue",
        tenure_months=40,
        product_count=1,
        inactive_months=6,
        contact_count=0,
        transaction_amount=900,
        transaction_count=70,
        utilization_ratio=0.9,
    )


@pytest.fixture
def star_churned(make_customer):
    """
    Churned customers forming a star: the hub shares two traits with each
    leaf, the leaves share nothing with each other.
    """
    hub = make_customer(
        age=40,
        education_level="Graduate",
        marital_status="Single",
        income_range="$40K - $60K",
        card_type="Blue",
        product_count=1,
        inactive_months=1,
        contact_count=1,
    )
    leaf_1 = make_customer(
        age=21,
        education_level="Graduate",
        marital_status="Single",
        income_range="Less than $40K",
        card_type="Silver",
        product_count=2,
        inactive_months=2,
        contact_count=2,
    )
    leaf_2 = make_customer(
        age=22,
        education_level="College",
        marital_status="Married",
        income_range="$40K - $60K",
        card_type="Blue",
        product_count=3,
        inactive_months=3,
        contact_count=3,
    )
    leaf_3 = make_customer(
        age=23,
        education_level="Doctorate",
        marital_status="Divorced",
        income_range="$80K - $120K",
        card_type="Gold",
        product_count=1,
        inactive_months=1,
        contact_count=4,
    )
    return [hub, leaf_1, leaf_2, leaf_3]


@pytest.fixture
def mixed_customers(star_churned, customer_a, customer_b):
    """Star customers interleaved with two existing customers."""
    hub, leaf_1, leaf_2, leaf_3 = star_churned
    existing_b = customer_b.model_copy(update={"churn_status": "Existing Customer"})
    return [hub, customer_a, leaf_1, leaf_2, existing_b, leaf_3]


def _csv_line(values):
    return ",".join(str(v) for v in values)


@pytest.fixture
def bank_rows():
    """Raw BankChurners-style rows matching the mixed_customers scenario."""
    return [
        ["1", "Attrited Customer", "40", "M", "0", "Graduate", "Single", "$40K - $60K",
         "Blue", "0", "1", "1", "1", "", "", "", "", "0", "0", "", "0"],
        ["2", "Existing Customer", "25", "F", "0", "Graduate", "Single", "$40K - $60K",
         "Silver", "12", "5", "2", "8", "15000.0", "1200", "", "", "5000", "25", "", "0.4"],
        ["3", "Attrited Customer", "21", "F", "0", "Graduate", "Single", "Less than $40K",
         "Silver", "0", "2", "2", "2", "", "", "", "", "0", "0", "", "0"],
        ["4", "Attrited Customer", "22", "M", "0", "College", "Married", "$40K - $60K",
         "Blue", "0", "3", "3", "3", "", "", "", "", "0", "0", "", "0"],
        ["5", "Existing Customer", "30", "M", "0", "Graduate", "Single", "$40K - $60K",
         "Silver", "8", "3", "3", "12", "12000.0", "800", "", "", "3000", "15", "", "0.3"],
        ["6", "Attrited Customer", "23", "F", "0", "Doctorate", "Divorced", "$80K - $120K",
         "Gold", "0", "1", "1", "4", "", "", "", "", "0", "0", "", "0"],
    ]


@pytest.fixture
def bank_csv(temp_dir, bank_rows):
    """CSV file in the BankChurners layout."""
    path = temp_dir / "BankChurners.csv"
    lines = [_csv_line(HEADER)] + [_csv_line(row) for row in bank_rows]
    path.write_text("\n".join(lines) + "\n")
    return path
