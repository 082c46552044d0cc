"""Tests for grocery categories and pantry staples."""

from mealcart.pantry import (
    CATEGORY_ORDER, OTHER, Pantry, categorize_ingredient, category_rank, is_pantry_item,
)


class TestCategorize:

    def test_known_sections(self):
        assert categorize_ingredient("tomato") == "Produce"
        assert categorize_ingredient("ground beef") == "Meat & Seafood"
        assert categorize_ingredient("cheddar cheese") == "Dairy & Eggs"
        assert categorize_ingredient("pasta") == "Pantry & Dry Goods"
        assert categorize_ingredient("capers") == "Canned & Jarred"
        assert categorize_ingredient("frozen peas") == "Frozen"

    def test_unknown_goes_to_other(self):
        assert categorize_ingredient("za'atar") == OTHER

    def test_earlier_section_wins(self):
        # "chicken broth" matches both meat and canned keywords
        assert categorize_ingredient("chicken broth") == "Meat & Seafood"

    def test_case_insensitive(self):
        assert categorize_ingredient("Fresh BASIL") == "Produce"

    def test_category_rank(self):
        assert category_rank("Produce") == 0
        assert category_rank(OTHER) == len(CATEGORY_ORDER) - 1
        assert category_rank("Bakery") == len(CATEGORY_ORDER)


class TestPantryItems:

    def test_staples(self):
        assert is_pantry_item("salt")
        assert is_pantry_item("olive oil")

    def test_staple_inside_name(self):
        assert is_pantry_item("kosher salt")

    def test_name_inside_staple(self):
        assert is_pantry_item("powder")

    def test_not_a_staple(self):
        assert not is_pantry_item("chicken breast")
        assert not is_pantry_item("milk")


class TestPantry:

    def test_defaults(self):
        pantry = Pantry()
        assert "salt" in pantry
        assert "milk" not in pantry

    def test_custom_staples(self):
        pantry = Pantry(staples=["Rice"])
        assert len(pantry) == 1
        assert pantry.is_staple("basmati rice")
        assert not pantry.is_staple("salt")

    def test_add_ignores_duplicates(self):
        pantry = Pantry(staples=[])
        pantry.add("rice")
        pantry.add(" RICE ")
        assert pantry.staples == ["rice"]

    def test_from_file(self, tmp_path):
        path = tmp_path / "pantry.md"
        path.write_text(
            "# Pantry\n"
            "\n"
            "- [x] Rice, 5 lbs\n"
            "- soy sauce\n"
            "Some notes\n",
            encoding="utf-8",
        )

        pantry = Pantry.from_file(path, include_defaults=False)
        assert pantry.staples == ["rice", "soy sauce"]

    def test_from_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "pantry.md"
        path.write_text("- rice\n", encoding="utf-8")

        pantry = Pantry.from_file(path)
        assert "rice" in pantry
        assert "salt" in pantry

    def test_missing_file(self, tmp_path, caplog):
        pantry = Pantry.from_file(tmp_path / "nope.md")
        assert "salt" in pantry
        assert "Pantry file not found" in caplog.text
