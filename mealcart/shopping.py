"""Shopping list generation from recipes."""

import logging
import math
from collections import defaultdict
from typing import Iterable, Optional

from .models import (
    ConsolidatedIngredient, IngredientSource, ParsedIngredient, Recipe, ShoppingList,
)
from .pantry import Pantry, categorize_ingredient, category_rank
from .parsing import parse_ingredient
from .store import StoreError
from .units import are_units_compatible, convert_quantity

logger = logging.getLogger(__name__)


# Common cooking fractions for display
COMMON_FRACTIONS = {
    0.25: "1/4",
    0.33: "1/3",
    0.5: "1/2",
    0.67: "2/3",
    0.75: "3/4",
}

FRACTION_TOLERANCE = 0.01


def _match_fraction(decimal: float) -> Optional[str]:
    for value, fraction in COMMON_FRACTIONS.items():
        if abs(decimal - value) < FRACTION_TOLERANCE:
            return fraction
    return None


def format_quantity(quantity: Optional[float], unit: str = "") -> str:
    """Format a quantity and unit for display, e.g. "1 1/2 cup"."""
    if not quantity:
        return ""

    rounded = round(quantity, 2)

    text = _match_fraction(rounded)
    if text is None and rounded > 1:
        whole = math.floor(rounded)
        fraction = _match_fraction(rounded - whole)
        if fraction:
            text = f"{whole} {fraction}"

    if text is None:
        text = str(int(rounded)) if rounded == int(rounded) else str(rounded)

    return f"{text} {unit}".strip()


def _source_from(ingredient: ParsedIngredient) -> IngredientSource:
    return IngredientSource(
        recipe=ingredient.recipe,
        original=ingredient.original,
        quantity=ingredient.quantity,
        unit=ingredient.unit,
        scaling=ingredient.scaling,
    )


def consolidate_ingredients(parsed_ingredients: Iterable[ParsedIngredient]) -> list[ConsolidatedIngredient]:
    """Merge ingredients with the same item name.

    The first occurrence of an item fixes its unit and category. Later
    occurrences always add a source; their quantity is converted and added
    only when the units are compatible. A missing quantity adds nothing.
    """
    # item -> [quantity, unit, category, sources]
    merged: dict[str, list] = {}

    for ingredient in parsed_ingredients:
        source = _source_from(ingredient)
        entry = merged.get(ingredient.item)

        if entry is None:
            merged[ingredient.item] = [
                ingredient.quantity,
                ingredient.unit,
                categorize_ingredient(ingredient.item),
                [source],
            ]
            continue

        total, unit, _, sources = entry
        if are_units_compatible(unit, ingredient.unit):
            converted = convert_quantity(ingredient.quantity, ingredient.unit, unit)
            if converted is not None:
                entry[0] = (total or 0) + converted
        sources.append(source)

    return [
        ConsolidatedIngredient(
            item=item,
            quantity=quantity,
            unit=unit,
            category=category,
            sources=tuple(sources),
        )
        for item, (quantity, unit, category, sources) in merged.items()
    ]


def group_by_category(consolidated: Iterable[ConsolidatedIngredient]) -> ShoppingList:
    """Group items into store sections, sections in store order, items A-Z."""
    grouped: dict[str, list[ConsolidatedIngredient]] = defaultdict(list)
    for ingredient in consolidated:
        grouped[ingredient.category].append(ingredient)

    categories = {}
    for category in sorted(grouped, key=category_rank):
        categories[category] = sorted(grouped[category], key=lambda x: x.item)

    return ShoppingList(categories=categories)


def source_display_text(item: ConsolidatedIngredient, source: IngredientSource) -> str:
    """Text for one source line: the scaled amount if the recipe was scaled."""
    if source.scaled:
        qty = format_quantity(source.quantity, source.unit)
        return f"{qty} {item.item} ({source.scaling:g}x)".strip()
    return source.original


def to_copy_text(shopping_list: ShoppingList, group_by_recipe: bool = False) -> str:
    """Plain text version of a shopping list for the clipboard."""
    lines = ["Shopping List", "=" * 20, ""]

    if group_by_recipe:
        by_recipe: dict[str, list[str]] = {}
        for _, items in shopping_list:
            for item in items:
                for source in item.sources:
                    by_recipe.setdefault(source.recipe, []).append(f"• {source.original}")

        for recipe, ingredients in by_recipe.items():
            lines.append(f"{recipe}:")
            lines.extend(ingredients)
            lines.append("")
    else:
        for category, items in shopping_list:
            if not items:
                continue

            lines.append(f"{category}:")
            for item in items:
                qty = format_quantity(item.quantity, item.unit)
                sources = ", ".join(s.original for s in item.sources)
                name = f"{qty} {item.item}" if qty else item.item
                lines.append(f"• {name} ({sources})")
            lines.append("")

    return "\n".join(lines) + "\n"


class ShoppingListGenerator:
    """Generate shopping lists from recipes and optionally save them to a plan."""

    def __init__(self, store=None, pantry: Optional[Pantry] = None):
        self.store = store
        self.pantry = pantry if pantry is not None else Pantry()

    def parse_recipes(
        self,
        recipes: Iterable[Recipe],
        exclude_pantry: bool = True,
    ) -> list[ParsedIngredient]:
        """Parse every ingredient line of every recipe, scaled per recipe."""
        parsed_ingredients = []

        for recipe in recipes:
            if not recipe.ingredients:
                logger.debug("Skipping recipe without ingredients: %s", recipe.name)
                continue

            factor = recipe.scale_factor
            for line in recipe.ingredients:
                if not isinstance(line, str) or not line.strip():
                    continue

                parsed = parse_ingredient(line).with_recipe(recipe.name).scaled(factor)

                if exclude_pantry and self.pantry.is_staple(parsed.item):
                    continue

                parsed_ingredients.append(parsed)

        return parsed_ingredients

    def generate(self, recipes: Iterable[Recipe], exclude_pantry: bool = True) -> ShoppingList:
        """Generate a shopping list from the given recipes.

        Plain dicts with "name" and "ingredients" are accepted as well.
        """
        recipes = [r if isinstance(r, Recipe) else Recipe.from_dict(r) for r in recipes]
        parsed = self.parse_recipes(recipes, exclude_pantry=exclude_pantry)

        shopping_list = group_by_category(consolidate_ingredients(parsed))

        logger.info(
            "Generated shopping list: %d items in %d categories from %d recipes",
            len(shopping_list), len(shopping_list.categories), len(recipes),
        )
        return shopping_list

    def save_to_plan(self, plan_id, shopping_list: ShoppingList) -> bool:
        """Store a list for a plan. Failures are logged, not raised."""
        if self.store is None:
            logger.debug("No plan store configured; not saving plan %s", plan_id)
            return False

        try:
            self.store.save(plan_id, shopping_list)
        except StoreError as e:
            logger.warning("Could not save shopping list: %s", e)
            return False

        return True

    def get_for_plan(self, plan_id) -> Optional[ShoppingList]:
        """Load the stored list for a plan, or None."""
        if self.store is None:
            return None

        try:
            return self.store.get(plan_id)
        except StoreError as e:
            logger.warning("Could not load shopping list: %s", e)
            return None

    def generate_for_plan(
        self,
        recipes: Iterable[Recipe],
        plan_id,
        exclude_pantry: bool = True,
    ) -> ShoppingList:
        """Generate a list and save it to the plan; a failed save still returns the list."""
        shopping_list = self.generate(recipes, exclude_pantry=exclude_pantry)
        self.save_to_plan(plan_id, shopping_list)
        return shopping_list
