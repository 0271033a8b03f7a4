"""Unit tests for the two-list merge engine."""

from pantrylist.plan.merge import combine_lines, merge_lists, merge_many
from pantrylist.schemas import Range, Single


class TestRangeMerging:
    """Tests for merging range quantities."""

    def test_range_plus_range(self, make_line):
        """Test bounds are summed componentwise."""
        result = merge_lists([make_line("basil", (10, 15))], [make_line("basil", (10, 15))])
        assert len(result) == 1
        assert result[0].quantity == Range(min=20, max=30)
        assert result[0].display_quantity == "20-30"

    def test_asymmetric_ranges(self, make_line):
        """Test asymmetric ranges are not averaged."""
        result = merge_lists([make_line("carrots", (4, 6))], [make_line("carrots", (2, 3))])
        assert result[0].display_quantity == "6-9"

    def test_range_plus_number(self, make_line):
        """Test a number is treated as a degenerate range."""
        result = merge_lists([make_line("basil", (10, 15))], [make_line("basil", 5)])
        assert result[0].display_quantity == "15-20"

    def test_number_plus_range(self, make_line):
        """Test range + number is commutative."""
        result = merge_lists([make_line("basil", 5)], [make_line("basil", (10, 15))])
        assert result[0].quantity == Range(min=15, max=20)


class TestSingleMerging:
    """Tests for merging single quantities."""

    def test_plain_sum(self, make_line):
        """Test 2 + 6 = 8."""
        result = merge_lists([make_line("eggs", 2)], [make_line("eggs", 6)])
        assert result[0].quantity == Single(value=8)
        assert result[0].display_quantity == "8"

    def test_case_insensitive_names(self, make_line):
        """Test names match case-insensitively and the first casing wins."""
        result = merge_lists([make_line("Egg", 2)], [make_line("egg", 3)])
        assert len(result) == 1
        assert result[0].name == "Egg"
        assert result[0].quantity == Single(value=5)

    def test_unit_conversion_before_sum(self, make_line):
        """Test 1 cup + 8 tablespoon = 1.5 cup."""
        result = merge_lists([make_line("milk", 1, "cup")], [make_line("milk", 8, "tablespoon")])
        assert result[0].quantity == Single(value=1.5)
        assert result[0].unit == "cup"
        assert result[0].display_quantity == "1.5"

    def test_unit_spellings(self, make_line):
        """Test differently spelled units of the same kind."""
        result = merge_lists([make_line("flour", 1, "cups")], [make_line("flour", 2, "cup")])
        assert result[0].quantity == Single(value=3)
        assert result[0].unit == "cups"

    def test_incompatible_units_kept_separate(self, make_line):
        """Test 1 cup sugar + 100 gram sugar stays two entries."""
        result = merge_lists([make_line("sugar", 1, "cup")], [make_line("sugar", 100, "gram")])
        assert len(result) == 2
        assert [(r.name, r.unit) for r in result] == [("sugar", "cup"), ("sugar", "gram")]

    def test_incompatible_entry_becomes_target(self, make_line):
        """Test a later line combines with a separately kept entry."""
        result = merge_lists(
            [make_line("sugar", 1, "cup")],
            [make_line("sugar", 100, "gram"), make_line("sugar", 1, "kilogram")],
        )
        assert len(result) == 2
        assert result[1].quantity == Single(value=1100)
        assert result[1].unit == "gram"

    def test_unitless_and_unit_kept_separate(self, make_line):
        """Test a count without a unit does not absorb a weight."""
        result = merge_lists([make_line("onion", 2)], [make_line("onion", 1, "pound")])
        assert len(result) == 2


class TestMergeLists:
    """Tests for merge_lists list-level behaviour."""

    def test_order_preserving_union(self, make_line):
        """Test A's entries come first, then unmatched B entries."""
        a = [make_line("flour", 2, "cup"), make_line("eggs", 2)]
        b = [make_line("butter", 1, "stick"), make_line("eggs", 1), make_line("salt", 1, "tsp")]
        result = merge_lists(a, b)
        assert [r.name for r in result] == ["flour", "eggs", "butter", "salt"]
        assert result[1].quantity == Single(value=3)

    def test_same_name_entries_in_b_combine(self, make_line):
        """Test same-named B entries sum even when A lacks the name."""
        result = merge_lists([make_line("milk", 1, "cup")], [make_line("egg", 2), make_line("Egg", 3)])
        assert [(r.name, r.display_quantity) for r in result] == [("milk", "1"), ("egg", "5")]

    def test_b_combines_the_same_with_or_without_a_match(self, make_line):
        """Test what A holds does not change how B's own entries combine."""
        b = [make_line("egg", 2), make_line("egg", 3)]
        assert merge_lists([make_line("egg", 1)], b)[0].quantity == Single(value=6)
        assert [r.quantity for r in merge_lists([], b)] == [Single(value=5)]

    def test_empty_list_identity(self, make_line):
        """Test merging with an empty list returns the list unchanged."""
        items = [make_line("flour", 2, "cup"), make_line("eggs", 2), make_line("Flour", 1, "g")]
        assert merge_lists(items, []) == items
        assert merge_lists([], items) == items

    def test_inputs_not_modified(self, make_line):
        """Test neither input list is mutated."""
        a = [make_line("eggs", 2)]
        b = [make_line("eggs", 3)]
        merge_lists(a, b)
        assert a == [make_line("eggs", 2)]
        assert b == [make_line("eggs", 3)]

    def test_recipe_ids_concatenated(self, make_line):
        """Test recipe ids of combined lines are kept without duplicates."""
        result = merge_lists(
            [make_line("eggs", 2, None, "r1")],
            [make_line("eggs", 3, None, "r2", "r1")],
        )
        assert result[0].recipe_ids == ("r1", "r2")


class TestMergeMany:
    """Tests for merge_many function."""

    def test_fold(self, make_line):
        """Test several lists are folded left to right."""
        result = merge_many(
            [
                [make_line("eggs", 2)],
                [make_line("eggs", 1), make_line("milk", 1, "cup")],
                [make_line("milk", 4, "tablespoon")],
            ]
        )
        assert [r.name for r in result] == ["eggs", "milk"]
        assert result[0].quantity == Single(value=3)
        assert result[1].quantity == Single(value=1.25)

    def test_empty(self):
        """Test folding nothing gives an empty list."""
        assert merge_many([]) == []


class TestCombineLines:
    """Tests for combine_lines function."""

    def test_incompatible_returns_none(self, make_line):
        """Test incompatible units cannot combine."""
        assert combine_lines(make_line("sugar", 1, "cup"), make_line("sugar", 5, "gram")) is None

    def test_range_with_conversion(self, make_line):
        """Test range bounds are converted into the first line's unit."""
        result = combine_lines(make_line("stock", (1, 2), "cup"), make_line("stock", 16, "tbsp"))
        assert result.quantity == Range(min=2, max=3)
