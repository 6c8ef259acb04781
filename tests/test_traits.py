import pytest

from churngraph import aggregate_traits, build_graph, top_shared_traits
from churngraph.traits import TraitTally, breakdown, round_half_up


@pytest.fixture
def trio(customer_a, customer_b):
    """customer_a, customer_b and an exact-match twin of customer_a."""
    twin = customer_a.model_copy(update={"churn_status": "Attrited Customer"})
    customers = [customer_a, customer_b, twin]
    return customers, build_graph(customers)


class TestTopSharedTraits:
    """Tests for per-node trait ranking."""

    def test_ranks_by_count(self, trio):
        # Given customer_a with neighbors customer_b (4 traits) and a twin (8 traits)
        customers, graph = trio

        # When ranking node 0's shared traits
        ranked = top_shared_traits(graph, 0, customers)

        # Then the four traits shared with both neighbors come first
        assert ranked == [
            ("Education Level: Graduate", 2),
            ("Marital Status: Single", 2),
            ("Income Range: $40K - $60K", 2),
            ("Card Type: Silver", 2),
        ]

    def test_limit(self, trio):
        customers, graph = trio

        ranked = top_shared_traits(graph, 0, customers, limit=2)

        assert [trait for trait, _ in ranked] == [
            "Education Level: Graduate",
            "Marital Status: Single",
        ]

    def test_ties_keep_discovery_order(self, star_churned):
        # Given a hub whose neighbors each contribute two distinct traits once
        graph = build_graph(star_churned)

        # When ranking the hub's traits
        ranked = top_shared_traits(graph, 0, star_churned)

        # Then equal counts keep the order they were first seen
        assert ranked == [
            ("Education Level: Graduate", 1),
            ("Marital Status: Single", 1),
            ("Income Range: $40K - $60K", 1),
            ("Card Type: Blue", 1),
        ]

    def test_ignores_neighbors_outside_customer_list(self, star_churned):
        graph = build_graph(star_churned)

        ranked = top_shared_traits(graph, 0, star_churned[:2], limit=10)

        assert ranked == [
            ("Education Level: Graduate", 1),
            ("Marital Status: Single", 1),
        ]

    def test_isolated_node_has_no_traits(self, customer_a, stranger):
        graph = build_graph([customer_a, stranger])

        assert top_shared_traits(graph, 1, [customer_a, stranger]) == []


class TestAggregateTraits:
    """Tests for aggregation across high-centrality nodes."""

    def test_empty_selection_is_explicit(self, trio):
        customers, graph = trio

        report = aggregate_traits([], customers, graph)

        assert report.is_empty
        assert report.categories == []
        assert report.totals == {}

    def test_single_node(self, trio):
        customers, graph = trio

        report = aggregate_traits([0], customers, graph)

        assert not report.is_empty
        assert report.totals == {
            "Education Level: Graduate": 2,
            "Marital Status: Single": 2,
            "Income Range: $40K - $60K": 2,
            "Card Type: Silver": 2,
        }
        assert report.grand_total == 8
        for category in report.categories:
            assert category.total == 2
            assert category.percentage == 25.0
            assert len(category.values) == 1
            assert category.values[0].percentage == 100.0

    def test_merges_nodes(self, trio):
        customers, graph = trio

        report = aggregate_traits([0, 1, 2], customers, graph)

        assert report.totals["Education Level: Graduate"] == 6
        assert report.grand_total == sum(report.totals.values())

    def test_invalid_index_is_reported_and_skipped(self, mocker, trio):
        # Given a selection with an index past the customer list
        customers, graph = trio
        mock_logger = mocker.patch("churngraph.traits.logger")

        # When aggregating
        report = aggregate_traits([0, 7], customers, graph)

        # Then the bad index is logged and skipped, the rest still counts
        mock_logger.warning.assert_called_once_with("Invalid node index: 7")
        assert report.skipped_nodes == [7]
        assert report.grand_total == 8

    def test_node_without_traits_is_skipped(self, customer_a, stranger):
        customers = [customer_a, stranger]
        graph = build_graph(customers)

        report = aggregate_traits([1], customers, graph)

        assert not report.is_empty
        assert report.categories == []
        assert report.skipped_nodes == []

    def test_percentages_sum_to_hundred(self, customer_a, customer_b, star_churned):
        customers = [customer_a, customer_b, *star_churned]
        graph = build_graph(customers)

        report = aggregate_traits(list(graph.nodes), customers, graph)

        assert report.categories
        assert sum(c.total for c in report.categories) == report.grand_total
        assert sum(c.percentage for c in report.categories) == pytest.approx(100, abs=0.05 * len(report.categories))
        for category in report.categories:
            assert sum(v.percentage for v in category.values) == pytest.approx(
                100, abs=0.05 * len(category.values)
            )
            assert sum(v.count for v in category.values) == category.total


class TestBreakdown:
    """Tests for category percentages."""

    def test_uneven_counts(self):
        # Given a tally with two card types and one age
        tally = TraitTally()
        tally.add("Card Type: Silver", 3)
        tally.add("Card Type: Blue", 1)
        tally.add("Age: 25", 4)

        # When computing the breakdown
        categories = {c.category: c for c in breakdown(tally)}

        # Then category and value shares are relative to their totals
        assert categories["Card Type"].total == 4
        assert categories["Card Type"].percentage == 50.0
        shares = {v.value: v.percentage for v in categories["Card Type"].values}
        assert shares == {"Silver": 75.0, "Blue": 25.0}
        assert categories["Age"].values[0].percentage == 100.0

    def test_thirds_round_to_one_decimal(self):
        tally = TraitTally()
        tally.add("Card Type: Silver", 1)
        tally.add("Card Type: Blue", 2)

        values = {v.value: v.percentage for v in breakdown(tally)[0].values}

        assert values == {"Silver": 33.3, "Blue": 66.7}

    def test_empty_tally(self):
        assert breakdown(TraitTally()) == []

    def test_trait_without_category_only_counts_in_totals(self):
        tally = TraitTally()
        tally.add("Silver", 2)

        assert tally.totals == {"Silver": 2}
        assert tally.by_category == {}


@pytest.mark.parametrize(
    "value,expected",
    [(12.25, 12.3), (12.24, 12.2), (33.333, 33.3), (66.666, 66.7), (100.0, 100.0), (0.05, 0.1)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == pytest.approx(expected)
