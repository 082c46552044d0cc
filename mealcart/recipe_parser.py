"""Recipe loading from markdown files with YAML frontmatter, or JSON."""

import json
import logging
import re
from pathlib import Path
from typing import Optional

import frontmatter

from .models import MealcartError, Recipe
from .taxonomy import DEFAULT_TAG_TAXONOMY

logger = logging.getLogger(__name__)

INGREDIENTS_SECTION = re.compile(r"^##\s+Ingredients\s*\n(.*?)(?=^## |\Z)", re.MULTILINE | re.DOTALL)
BULLET = re.compile(r"^[-*]\s+(?:\[.\]\s*)?(.*)$")


def parse_scaling(metadata: dict) -> float:
    """Serving multiplier from "scaling" or "servings_multiplier"."""
    value = metadata.get("scaling", metadata.get("servings_multiplier"))
    if value is None:
        return 1.0
    try:
        scaling = float(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring invalid scaling value: %r", value)
        return 1.0
    return scaling if scaling > 0 else 1.0


def parse_tags(metadata: dict) -> dict[str, list[str]]:
    """Collect tag lists per taxonomy category.

    Both "cuisine_tags: [...]" and the short "cuisine: [...]" form are
    read. A plain "tags" list is kept under "tags".
    """
    tags = {}
    for category in [*DEFAULT_TAG_TAXONOMY, "tags"]:
        short = category.removesuffix("_tags")
        value = metadata.get(category, metadata.get(short))
        if not value:
            continue
        if isinstance(value, str):
            value = [t.strip() for t in value.split(",")]
        elif not isinstance(value, (list, tuple)):
            logger.debug("Ignoring %s: expected a list, got %r", category, value)
            continue
        tags[category] = [str(t).strip() for t in value if str(t).strip()]
    return tags


def parse_ingredient_lines(content: str) -> list[str]:
    """Bullet lines under "## Ingredients", checkboxes stripped."""
    match = INGREDIENTS_SECTION.search(content)
    if not match:
        return []

    ingredients = []
    for line in match.group(1).split("\n"):
        bullet = BULLET.match(line.strip())
        if bullet and bullet.group(1).strip():
            ingredients.append(bullet.group(1).strip())
    return ingredients


def parse_recipe_file(file_path: Path) -> Optional[Recipe]:
    """Parse a markdown recipe file into a Recipe, or None if unreadable."""
    file_path = Path(file_path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            post = frontmatter.load(f)
    except Exception as e:
        logger.warning("Error loading %s: %s", file_path, e)
        return None

    metadata = post.metadata
    content = post.content

    # Name from frontmatter, then the H1 heading, then the filename
    name = metadata.get("name") or metadata.get("title")
    if not name:
        name_match = re.search(r"^#\s+(.+)$", content, re.MULTILINE)
        name = name_match.group(1).strip() if name_match else file_path.stem

    return Recipe(
        name=str(name),
        ingredients=parse_ingredient_lines(content),
        scaling=parse_scaling(metadata),
        tags=parse_tags(metadata),
        source_path=file_path,
        source_url=metadata.get("source_url") or metadata.get("source"),
    )


def load_recipes_json(file_path: Path) -> list[Recipe]:
    """Load recipes from a JSON array (or an object with a "recipes" key)."""
    file_path = Path(file_path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise MealcartError(f"Could not read recipes from {file_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("recipes", [data])
    if not isinstance(data, list):
        raise MealcartError(f"Expected a list of recipes in {file_path}")

    recipes = []
    for entry in data:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object recipe entry in %s", file_path)
            continue
        recipe = Recipe.from_dict(entry)
        recipe.source_path = file_path
        recipes.append(recipe)
    return recipes


def load_recipes(path: Path) -> list[Recipe]:
    """Load recipes from a markdown file, a JSON file or a directory."""
    path = Path(path)
    if path.is_dir():
        return list(RecipeLibrary(path).recipes.values())
    if path.suffix.lower() == ".json":
        return load_recipes_json(path)

    recipe = parse_recipe_file(path)
    return [recipe] if recipe else []


class RecipeLibrary:
    """A collection of recipes loaded from a directory."""

    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)
        self.recipes: dict[str, Recipe] = {}
        self._load_recipes()

    def _load_recipes(self):
        """Load all markdown and JSON recipes under the base path."""
        if not self.base_path.exists():
            logger.warning("Recipe path does not exist: %s", self.base_path)
            return

        for md_file in sorted(self.base_path.rglob("*.md")):
            recipe = parse_recipe_file(md_file)
            if recipe:
                self.recipes[recipe.name] = recipe

        for json_file in sorted(self.base_path.rglob("*.json")):
            try:
                recipes = load_recipes_json(json_file)
            except MealcartError as e:
                logger.warning("%s", e)
                continue
            for recipe in recipes:
                self.recipes[recipe.name] = recipe

        logger.info("Loaded %d recipes from %s", len(self.recipes), self.base_path)

    def __len__(self) -> int:
        return len(self.recipes)

    def names(self) -> list[str]:
        return sorted(self.recipes)

    def get_recipe(self, name: str) -> Optional[Recipe]:
        """Get a recipe by name, ignoring case."""
        if name in self.recipes:
            return self.recipes[name]
        name_lower = name.lower()
        for recipe_name, recipe in self.recipes.items():
            if recipe_name.lower() == name_lower:
                return recipe
        return None

    def search(self, query: Optional[str] = None) -> list[Recipe]:
        """Recipes whose name contains query, sorted by name."""
        results = [self.recipes[name] for name in self.names()]
        if query:
            query_lower = query.lower()
            results = [r for r in results if query_lower in r.name.lower()]
        return results
