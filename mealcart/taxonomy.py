"""Recipe tag taxonomy.

A ``TagTaxonomy`` is an immutable value: every edit returns a new
taxonomy and leaves the old one untouched. Recipe tags are updated
separately with ``retag_recipes``, which returns new recipes as well.
"""

import re
from collections import Counter
from dataclasses import replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .models import MealcartError, Recipe


class TaxonomyError(MealcartError):
    """Raised for invalid tag categories, names or edits."""


DEFAULT_TAG_TAXONOMY = {
    "cuisine_tags": [
        "Italian", "Asian", "Mexican", "Mediterranean", "American",
        "Indian", "French", "Caribbean", "Latin American", "European",
    ],
    "ingredient_tags": [
        "Chicken", "Beef", "Pork", "Seafood", "Vegetarian", "Vegetable",
        "Pasta", "Rice", "Soup", "Salad", "Sandwich", "Egg", "Beans",
        "Grains", "Tofu",
    ],
    "convenience_tags": [
        "Quick", "Easy", "One-Pot", "Slow-Cooker", "Instant-Pot", "No-Cook",
        "Make-Ahead", "Freezer-Friendly", "Meal-Prep", "Budget-Friendly",
        "Oven-Baked", "Stovetop", "Grilled", "Comfort-Food",
    ],
    "dietary_tags": [
        "Gluten-Free", "Dairy-Free", "Vegan", "Vegetarian", "Low-Carb",
        "High-Protein", "Keto", "Paleo", "Healthy", "Light", "Spicy",
        "Kid-Friendly",
    ],
}

CATEGORY_DISPLAY_NAMES = {
    "cuisine_tags": "Cuisine",
    "ingredient_tags": "Main Ingredients",
    "convenience_tags": "Convenience",
    "dietary_tags": "Dietary",
}

MAX_TAG_LENGTH = 50
INVALID_TAG_CHARS = re.compile(r'[<>:"/\\|?*]')


def category_key(category: str) -> str:
    """Accept both "cuisine" and "cuisine_tags"."""
    category = category.strip().lower()
    return category if category.endswith("_tags") else f"{category}_tags"


def category_display_name(category: str) -> str:
    return CATEGORY_DISPLAY_NAMES.get(category_key(category), category)


def validate_tag_name(tag_name) -> str:
    """Return the trimmed tag name, or raise TaxonomyError."""
    if not tag_name or not isinstance(tag_name, str):
        raise TaxonomyError("Tag name must be a non-empty string")

    trimmed = tag_name.strip()
    if not trimmed:
        raise TaxonomyError("Tag name cannot be empty")
    if len(trimmed) > MAX_TAG_LENGTH:
        raise TaxonomyError(f"Tag name cannot exceed {MAX_TAG_LENGTH} characters")
    if INVALID_TAG_CHARS.search(trimmed):
        raise TaxonomyError("Tag name contains invalid characters")

    return trimmed


class TagTaxonomy:
    """Tag categories, each holding a sorted tuple of tag names."""

    def __init__(self, categories: Mapping[str, Iterable[str]]):
        self._categories = MappingProxyType({
            category_key(category): tuple(sorted(set(tags)))
            for category, tags in categories.items()
        })

    @classmethod
    def default(cls) -> "TagTaxonomy":
        return cls(DEFAULT_TAG_TAXONOMY)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TagTaxonomy):
            return NotImplemented
        return dict(self._categories) == dict(other._categories)

    def __repr__(self) -> str:
        return f"TagTaxonomy({dict(self._categories)!r})"

    def __contains__(self, category: str) -> bool:
        return category_key(category) in self._categories

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._categories)

    def tags(self, category: str) -> tuple[str, ...]:
        return self._categories[self._require_category(category)]

    def has_tag(self, category: str, tag_name: str) -> bool:
        return tag_name in self._categories.get(category_key(category), ())

    def to_dict(self) -> dict[str, list[str]]:
        return {category: list(tags) for category, tags in self._categories.items()}

    def _require_category(self, category: str) -> str:
        if not category:
            raise TaxonomyError("Category is required")
        key = category_key(category)
        if key not in self._categories:
            raise TaxonomyError(f"Invalid category: {category}")
        return key

    def _with_tags(self, category: str, tags: Iterable[str]) -> "TagTaxonomy":
        categories = dict(self._categories)
        categories[category] = tuple(tags)
        return TagTaxonomy(categories)

    def add_tag(self, category: str, tag_name: str) -> "TagTaxonomy":
        key = self._require_category(category)
        tag_name = validate_tag_name(tag_name)
        if tag_name in self._categories[key]:
            raise TaxonomyError(f'Tag "{tag_name}" already exists in {key}')
        return self._with_tags(key, self._categories[key] + (tag_name,))

    def rename_tag(self, category: str, old_name: str, new_name: str) -> "TagTaxonomy":
        key = self._require_category(category)
        new_name = validate_tag_name(new_name)
        if old_name == new_name:
            return self

        tags = self._categories[key]
        if old_name not in tags:
            raise TaxonomyError(f'Tag "{old_name}" does not exist in {key}')
        if new_name in tags:
            raise TaxonomyError(f'Tag "{new_name}" already exists in {key}')

        return self._with_tags(key, [new_name if t == old_name else t for t in tags])

    def delete_tag(self, category: str, tag_name: str) -> "TagTaxonomy":
        key = self._require_category(category)
        tags = self._categories[key]
        if tag_name not in tags:
            raise TaxonomyError(f'Tag "{tag_name}" does not exist in {key}')
        return self._with_tags(key, [t for t in tags if t != tag_name])

    def merge_tags(self, category: str, source_tags: Iterable[str], target_tag: str) -> "TagTaxonomy":
        """Fold source tags into an existing target tag."""
        key = self._require_category(category)
        source_tags = [t for t in source_tags if t != target_tag]
        if not source_tags or not target_tag:
            raise TaxonomyError("Source tags and a target tag are required")

        tags = self._categories[key]
        if target_tag not in tags:
            raise TaxonomyError(f'Target tag "{target_tag}" does not exist in {key}')

        return self._with_tags(key, [t for t in tags if t not in source_tags])

    def stats(self) -> dict:
        by_category = {category: len(tags) for category, tags in self._categories.items()}
        return {
            "total_tags": sum(by_category.values()),
            "by_category": by_category,
            "total_categories": len(by_category),
        }


def retag_recipes(
    recipes: Iterable[Recipe],
    category: str,
    replacements: Mapping[str, Optional[str]],
) -> tuple[list[Recipe], int]:
    """Apply tag replacements to recipes in one category.

    ``replacements`` maps an old tag to its new name, or to None to remove
    it. Returns new Recipe objects and the number of recipes that changed.
    Duplicate tags created by a merge are collapsed.
    """
    key = category_key(category)
    updated = []
    affected = 0

    for recipe in recipes:
        tags = recipe.tags.get(key, [])
        if not any(tag in replacements for tag in tags):
            updated.append(recipe)
            continue

        new_tags: list[str] = []
        for tag in tags:
            if tag in replacements:
                tag = replacements[tag]
            if tag and tag not in new_tags:
                new_tags.append(tag)

        updated.append(replace(recipe, tags={**recipe.tags, key: new_tags}))
        affected += 1

    return updated, affected


def tag_usage(recipes: Iterable[Recipe]) -> dict[str, Counter]:
    """Count how many recipes use each tag, per category."""
    usage: dict[str, Counter] = {}
    for recipe in recipes:
        for category, tags in recipe.tags.items():
            usage.setdefault(category, Counter()).update(set(tags))
    return usage


def find_orphaned_tags(
    recipes: Iterable[Recipe],
    taxonomy: Optional[TagTaxonomy] = None,
) -> dict[str, list[str]]:
    """Tags used by recipes that the taxonomy doesn't know, per category."""
    taxonomy = taxonomy or TagTaxonomy.default()
    orphaned: dict[str, set] = {category: set() for category in taxonomy.categories}

    for recipe in recipes:
        for category in orphaned:
            for tag in recipe.tags.get(category, []):
                if not taxonomy.has_tag(category, tag):
                    orphaned[category].add(tag)

    return {category: sorted(tags) for category, tags in orphaned.items()}
