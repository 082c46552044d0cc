"""Tests for the data models."""

from mealcart.models import ConsolidatedIngredient, IngredientSource, Recipe, ShoppingList


class TestRecipe:

    def test_from_dict_is_tolerant(self):
        recipe = Recipe.from_dict({"name": "Soup", "ingredients": None, "scaling": None})
        assert recipe.ingredients == []
        assert recipe.scaling == 1.0

    def test_from_dict_source_alias(self):
        recipe = Recipe.from_dict({"name": "Soup", "source": "https://example.com/soup"})
        assert recipe.source_url == "https://example.com/soup"

    def test_from_dict_flat_tag_list(self):
        recipe = Recipe.from_dict({"name": "Soup", "ingredients": ["1 onion"], "tags": ["Quick", "Vegan"]})
        assert recipe.tags == {"tags": ["Quick", "Vegan"]}

    def test_from_dict_category_tag_fields(self):
        recipe = Recipe.from_dict({
            "name": "Soup",
            "cuisine_tags": ["Italian"],
            "convenience_tags": "Quick, One-Pot",
        })
        assert recipe.tags == {"cuisine_tags": ["Italian"], "convenience_tags": ["Quick", "One-Pot"]}

    def test_from_dict_ignores_wrong_types(self):
        recipe = Recipe.from_dict({"name": "Soup", "ingredients": 5, "tags": 3, "cuisine_tags": 7})
        assert recipe.ingredients == []
        assert recipe.tags == {}

    def test_to_dict_reads_back(self):
        recipe = Recipe(
            name="Soup",
            ingredients=["1 onion"],
            scaling=2,
            tags={"cuisine_tags": ["French"]},
            source_url="https://example.com/soup",
        )
        assert Recipe.from_dict(recipe.to_dict()) == recipe

    def test_scale_factor(self):
        assert Recipe(name="A", scaling=2).scale_factor == 2
        assert Recipe(name="A", scaling="1.5").scale_factor == 1.5
        assert Recipe(name="A", scaling=0).scale_factor == 1
        assert Recipe(name="A", scaling="lots").scale_factor == 1


class TestShoppingList:

    def make_list(self):
        source = IngredientSource(recipe="A", original="2 cups milk", quantity=2, unit="cups")
        milk = ConsolidatedIngredient("milk", 2, "cups", "Dairy & Eggs", (source,))
        basil = ConsolidatedIngredient("basil", None, "", "Produce")
        return ShoppingList(categories={"Produce": [basil], "Dairy & Eggs": [milk]})

    def test_lookup(self):
        shopping_list = self.make_list()
        assert len(shopping_list) == 2
        assert shopping_list.find(" Milk ").quantity == 2
        assert shopping_list.find("eggs") is None
        assert [i.item for i in shopping_list.all_items()] == ["basil", "milk"]

    def test_get_by_category_is_a_copy(self):
        shopping_list = self.make_list()
        grouped = shopping_list.get_by_category()
        grouped["Produce"].clear()
        assert len(shopping_list.categories["Produce"]) == 1

    def test_str(self):
        shopping_list = self.make_list()
        assert str(shopping_list.find("milk")) == "milk: 2 cups"
        assert str(shopping_list.find("basil")) == "basil"

    def test_dict_round_trip(self):
        shopping_list = self.make_list()
        assert ShoppingList.from_dict(shopping_list.to_dict()) == shopping_list
