"""
Pytest configuration and shared fixtures.
"""

import json

import pytest

from mealcart.models import Recipe
from mealcart.shopping import ShoppingListGenerator
from mealcart.store import InMemoryPlanStore


CONFIG_ENV_VARS = [
    "MEALCART_RECIPES_PATH",
    "MEALCART_PLANS_PATH",
    "MEALCART_PANTRY_PATH",
    "MEALCART_EXCLUDE_PANTRY",
    "MEALCART_LOG_LEVEL",
    "MEALCART_DUPLICATE_THRESHOLD",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove mealcart settings from the environment, restoring them afterwards.

    Setting first makes monkeypatch remember the original state, so
    anything a .env file adds during the test is undone too.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def pancakes():
    return Recipe(
        name="Pancakes",
        ingredients=["2 cups milk", "2 eggs", "1 tbsp sugar", "2 cups flour"],
    )


@pytest.fixture
def omelette():
    return Recipe(
        name="Omelette",
        ingredients=["3 eggs", "2 tbsp milk", "1/2 cup cheddar cheese", "salt to taste"],
    )


@pytest.fixture
def store():
    return InMemoryPlanStore()


@pytest.fixture
def generator(store):
    return ShoppingListGenerator(store=store)


@pytest.fixture
def recipe_dir(tmp_path):
    """A recipe library with one markdown and one JSON recipe."""
    recipes = tmp_path / "recipes"
    recipes.mkdir()

    (recipes / "pasta.md").write_text(
        "---\n"
        "cuisine_tags: [Italian, Fusion]\n"
        "source: https://example.com/pasta\n"
        "---\n"
        "# Weeknight Pasta\n"
        "\n"
        "## Ingredients\n"
        "- 8 oz pasta\n"
        "- 1 cup milk\n"
        "- 1 tsp salt\n"
        "\n"
        "## Instructions\n"
        "1. Boil the pasta.\n",
        encoding="utf-8",
    )

    (recipes / "more.json").write_text(json.dumps([
        {"name": "Salad", "ingredients": ["1 cup milk", "2 tomato"]},
    ]), encoding="utf-8")

    return recipes


@pytest.fixture
def cli_env(clean_env, tmp_path, recipe_dir):
    """Point the CLI at temporary recipe and plan directories."""
    clean_env.setenv("MEALCART_RECIPES_PATH", str(recipe_dir))
    clean_env.setenv("MEALCART_PLANS_PATH", str(tmp_path / "plans"))
    return ["--env", str(tmp_path / "missing.env")]
