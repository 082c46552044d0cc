"""Data models for mealcart."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional


class MealcartError(Exception):
    """Base class for mealcart errors."""


@dataclass
class Recipe:
    """A recipe as supplied by the recipe source: a name and ingredient lines."""
    name: str
    ingredients: list[str] = field(default_factory=list)
    scaling: float = 1.0  # serving multiplier chosen in the meal plan
    tags: dict[str, list[str]] = field(default_factory=dict)
    source_path: Optional[Path] = None
    source_url: Optional[str] = None

    @property
    def scale_factor(self) -> float:
        """Scaling as a usable multiplier (anything invalid counts as 1)."""
        try:
            factor = float(self.scaling)
        except (TypeError, ValueError):
            return 1.0
        return factor if factor > 0 else 1.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "ingredients": list(self.ingredients),
            "scaling": self.scaling,
            "tags": {k: list(v) for k, v in self.tags.items()},
            "source_url": self.source_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Recipe":
        """Build a recipe from a plain record, ignoring fields of the wrong type."""
        from .recipe_parser import parse_tags

        ingredients = data.get("ingredients") or []
        if isinstance(ingredients, str):
            ingredients = [ingredients]
        elif not isinstance(ingredients, (list, tuple)):
            ingredients = []

        # "tags" is either our own category mapping or a flat list of names
        tags = {}
        if isinstance(data.get("tags"), dict):
            for key, value in data["tags"].items():
                if isinstance(value, (list, tuple)):
                    tags[key] = list(value)
            data = {k: v for k, v in data.items() if k != "tags"}
        tags.update(parse_tags(data))

        return cls(
            name=str(data.get("name") or "Untitled"),
            ingredients=list(ingredients),
            scaling=data.get("scaling") or 1.0,
            tags=tags,
            source_url=data.get("source_url") or data.get("source"),
        )


@dataclass(frozen=True)
class ParsedIngredient:
    """One ingredient line broken into quantity, unit and item."""
    original: str
    quantity: Optional[float]
    unit: str
    item: str
    recipe: str = ""
    scaling: float = 1.0

    def with_recipe(self, recipe: str) -> "ParsedIngredient":
        return replace(self, recipe=recipe)

    def scaled(self, factor: float) -> "ParsedIngredient":
        """Return a copy with the quantity multiplied by factor."""
        if factor == 1:
            return self
        quantity = self.quantity * factor if self.quantity is not None else None
        return replace(self, quantity=quantity, scaling=factor)


@dataclass(frozen=True)
class IngredientSource:
    """Where a consolidated entry came from: one recipe line."""
    recipe: str
    original: str
    quantity: Optional[float]
    unit: str
    scaling: float = 1.0

    @property
    def scaled(self) -> bool:
        return self.scaling != 1

    def to_dict(self) -> dict:
        return {
            "recipe": self.recipe,
            "original": self.original,
            "quantity": self.quantity,
            "unit": self.unit,
            "scaling": self.scaling,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "IngredientSource":
        return cls(
            recipe=data.get("recipe", ""),
            original=data.get("original", ""),
            quantity=data.get("quantity"),
            unit=data.get("unit") or "",
            scaling=data.get("scaling") or 1.0,
        )


@dataclass(frozen=True)
class ConsolidatedIngredient:
    """An item on the shopping list, merged across recipes."""
    item: str
    quantity: Optional[float]
    unit: str
    category: str
    sources: tuple[IngredientSource, ...] = ()

    def __str__(self) -> str:
        if self.quantity and self.unit:
            return f"{self.item}: {self.quantity:g} {self.unit}"
        elif self.quantity:
            return f"{self.item}: {self.quantity:g}"
        return self.item

    @property
    def recipes(self) -> list[str]:
        """Recipe names that contributed, in first-seen order."""
        seen: list[str] = []
        for source in self.sources:
            if source.recipe not in seen:
                seen.append(source.recipe)
        return seen

    def to_dict(self) -> dict:
        return {
            "item": self.item,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "sources": [s.to_dict() for s in self.sources],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConsolidatedIngredient":
        return cls(
            item=data["item"],
            quantity=data.get("quantity"),
            unit=data.get("unit") or "",
            category=data.get("category") or "Other",
            sources=tuple(IngredientSource.from_dict(s) for s in data.get("sources", [])),
        )


@dataclass
class ShoppingList:
    """A shopping list: categories in store order, items sorted by name."""
    categories: dict[str, list[ConsolidatedIngredient]] = field(default_factory=dict)

    def __len__(self) -> int:
        return sum(len(items) for items in self.categories.values())

    def __iter__(self):
        return iter(self.categories.items())

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def get_by_category(self) -> dict[str, list[ConsolidatedIngredient]]:
        """Group items by category."""
        return {category: list(items) for category, items in self.categories.items()}

    def all_items(self) -> list[ConsolidatedIngredient]:
        return [item for items in self.categories.values() for item in items]

    def find(self, item: str) -> Optional[ConsolidatedIngredient]:
        """Look up an entry by its item key."""
        key = item.lower().strip()
        for entry in self.all_items():
            if entry.item == key:
                return entry
        return None

    def to_dict(self) -> dict:
        return {
            category: [item.to_dict() for item in items]
            for category, items in self.categories.items()
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ShoppingList":
        return cls(categories={
            category: [ConsolidatedIngredient.from_dict(item) for item in items]
            for category, items in data.items()
        })
