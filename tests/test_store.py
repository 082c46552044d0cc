"""Tests for shopping list persistence."""

import json

import pytest

from mealcart.models import Recipe
from mealcart.shopping import ShoppingListGenerator
from mealcart.store import InMemoryPlanStore, JsonPlanStore, StoreError, validate_plan_id


@pytest.fixture
def shopping_list():
    recipe = Recipe(name="Pancakes", ingredients=["2 cups milk", "2 eggs"], scaling=2)
    return ShoppingListGenerator().generate([recipe])


class TestPlanIds:

    @pytest.mark.parametrize("plan_id", ["week-1", "2024_06_03", "plan.v2", 42])
    def test_valid(self, plan_id):
        assert validate_plan_id(plan_id) == str(plan_id)

    @pytest.mark.parametrize("plan_id", ["", None, "../etc", "a/b", ".hidden", "week 1"])
    def test_invalid(self, plan_id):
        with pytest.raises(StoreError):
            validate_plan_id(plan_id)


class TestInMemoryPlanStore:

    def test_save_and_get(self, shopping_list):
        store = InMemoryPlanStore()
        store.save("week-1", shopping_list)
        assert store.get("week-1") == shopping_list

    def test_missing(self):
        assert InMemoryPlanStore().get("week-1") is None

    def test_stored_copy_is_independent(self, shopping_list):
        store = InMemoryPlanStore()
        store.save("week-1", shopping_list)
        shopping_list.categories.clear()
        assert not store.get("week-1").is_empty

    def test_delete(self, shopping_list):
        store = InMemoryPlanStore()
        store.save("week-1", shopping_list)
        assert store.delete("week-1") is True
        assert store.delete("week-1") is False


class TestJsonPlanStore:

    def test_save_writes_json(self, tmp_path, shopping_list):
        store = JsonPlanStore(tmp_path / "plans")
        store.save("week-1", shopping_list)

        payload = json.loads((tmp_path / "plans" / "week-1.json").read_text())
        assert payload["weekly_plan_id"] == "week-1"
        assert "created_at" in payload
        milk = payload["items"]["Dairy & Eggs"][1]
        assert milk["item"] == "milk"
        assert milk["quantity"] == 4
        assert milk["sources"][0]["scaling"] == 2

    def test_get_restores_list(self, tmp_path, shopping_list):
        store = JsonPlanStore(tmp_path)
        store.save("week-1", shopping_list)

        loaded = store.get("week-1")
        assert loaded == shopping_list
        assert loaded.find("milk").sources[0].scaled

    def test_missing_plan(self, tmp_path):
        assert JsonPlanStore(tmp_path).get("week-1") is None

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "week-1.json").write_text("{not json")
        with pytest.raises(StoreError):
            JsonPlanStore(tmp_path).get("week-1")

    def test_unexpected_shape(self, tmp_path):
        (tmp_path / "week-1.json").write_text(json.dumps({"weekly_plan_id": "week-1"}))
        with pytest.raises(StoreError):
            JsonPlanStore(tmp_path).get("week-1")

    def test_invalid_plan_id(self, tmp_path, shopping_list):
        with pytest.raises(StoreError):
            JsonPlanStore(tmp_path).save("../escape", shopping_list)

    def test_unwritable_location(self, tmp_path, shopping_list):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        with pytest.raises(StoreError):
            JsonPlanStore(blocker).save("week-1", shopping_list)

    def test_delete_and_list(self, tmp_path, shopping_list):
        store = JsonPlanStore(tmp_path)
        store.save("week-2", shopping_list)
        store.save("week-1", shopping_list)
        assert store.list_plans() == ["week-1", "week-2"]

        assert store.delete("week-1") is True
        assert store.delete("week-1") is False
        assert store.list_plans() == ["week-2"]
