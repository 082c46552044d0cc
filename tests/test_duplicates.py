"""Tests for duplicate item detection."""

from mealcart.duplicates import (
    are_likely_same,
    calculate_similarity,
    find_duplicate_groups,
    find_duplicates,
    normalize_item_name,
    suggest_merge,
)


class TestNormalize:

    def test_strips_descriptors(self):
        assert normalize_item_name("Fresh Basil") == "basil"
        assert normalize_item_name("eggs organic") == "eggs"

    def test_strips_amounts(self):
        assert normalize_item_name("organic 2 lb chicken") == "chicken"

    def test_empty(self):
        assert normalize_item_name("") == ""
        assert normalize_item_name(None) == ""


class TestSimilarity:

    def test_exact_after_normalizing(self):
        assert calculate_similarity("fresh basil", "Basil") == 1.0

    def test_containment(self):
        assert calculate_similarity("chicken breast", "chicken breasts") == 0.8

    def test_unrelated(self):
        assert calculate_similarity("apple", "zucchini") < 0.5

    def test_empty(self):
        assert calculate_similarity("", "basil") == 0.0

    def test_likely_same(self):
        assert are_likely_same("chicken breast", "chicken breasts")
        assert not are_likely_same("milk", "bread")


class TestFindDuplicates:

    def test_most_similar_first(self):
        items = [{"name": "milk"}, {"name": "basil leaves"}, {"name": "fresh basil"}]
        matches = find_duplicates("basil", items)

        assert [m["item"]["name"] for m in matches] == ["fresh basil", "basil leaves"]
        assert matches[0]["similarity"] == 1.0
        assert matches[0]["normalized_name"] == "basil"

    def test_nothing_to_compare(self):
        assert find_duplicates("basil", []) == []
        assert find_duplicates("", [{"name": "basil"}]) == []

    def test_groups(self):
        items = [{"name": "basil"}, {"name": "milk"}, {"name": "fresh basil"}, {"name": "bread"}]
        groups = find_duplicate_groups(items)
        assert groups == [[{"name": "basil"}, {"name": "fresh basil"}]]


class TestSuggestMerge:

    def test_same_unit_adds_quantities(self):
        existing = {"id": 7, "name": "fresh basil", "quantity": "1", "unit": "cup", "category": "Produce"}
        merged = suggest_merge("basil", "2", "cup", existing)

        assert merged["id"] == 7
        assert merged["name"] == "fresh basil"
        assert merged["quantity"] == "3"
        assert merged["unit"] == "cup"
        assert merged["category"] == "Produce"

    def test_different_units_are_listed(self):
        existing = {"name": "milk", "quantity": "1", "unit": "cup"}
        merged = suggest_merge("milk", "2", "tbsp", existing)

        assert merged["quantity"] == "1 cup + 2 tbsp"
        assert merged["unit"] is None

    def test_prefers_more_descriptive_name(self):
        merged = suggest_merge("chicken breasts", None, None, {"name": "chicken"})
        assert merged["name"] == "chicken breasts"

    def test_quantity_from_new_item(self):
        merged = suggest_merge("milk", "2", "cup", {"name": "milk"})
        assert merged["quantity"] == "2"
        assert merged["unit"] == "cup"
