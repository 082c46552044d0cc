"""Grocery categories and pantry staples."""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


# Store sections in display order
CATEGORY_ORDER = [
    "Produce",
    "Meat & Seafood",
    "Dairy & Eggs",
    "Pantry & Dry Goods",
    "Canned & Jarred",
    "Frozen",
    "Other",
]

OTHER = "Other"

# Category mappings for ingredients. Checked in CATEGORY_ORDER, so an item
# matching several sections lands in the earliest one.
CATEGORY_KEYWORDS = {
    "Produce": [
        "onion", "garlic", "tomato", "lettuce", "cucumber", "bell pepper", "pepper",
        "carrot", "celery", "potato", "lemon", "lime", "orange", "apple", "banana",
        "spinach", "basil", "parsley", "cilantro", "dill", "thyme", "oregano",
        "rosemary", "ginger", "avocado", "mushroom", "zucchini", "broccoli",
        "cauliflower",
    ],
    "Meat & Seafood": [
        "chicken", "beef", "pork", "turkey", "salmon", "fish", "shrimp",
        "ground turkey", "ground beef", "chicken breast", "chicken thigh",
        "bacon", "ham",
    ],
    "Dairy & Eggs": [
        "milk", "cheese", "yogurt", "cream", "sour cream", "heavy cream", "eggs",
        "egg", "butter", "mozzarella", "cheddar", "parmesan", "feta",
    ],
    "Pantry & Dry Goods": [
        "rice", "pasta", "bread", "flour", "sugar", "honey", "vinegar", "soy sauce",
        "olive oil", "coconut oil", "beans", "lentils", "quinoa", "oats", "nuts",
        "almonds", "pine nuts",
    ],
    "Canned & Jarred": [
        "tomatoes", "coconut milk", "broth", "stock", "olives", "capers", "sauce",
        "paste",
    ],
    "Frozen": [
        "frozen",
    ],
}

# Common staples assumed to be on hand
PANTRY_STAPLES = [
    "salt", "pepper", "black pepper", "white pepper", "garlic powder", "onion powder",
    "olive oil", "vegetable oil", "canola oil", "cooking oil", "oil", "butter",
    "flour", "all-purpose flour", "sugar", "brown sugar", "white sugar",
    "baking powder", "baking soda", "vanilla extract", "vanilla", "water",
]


def categorize_ingredient(name: str) -> str:
    """Determine the store section of an ingredient."""
    name_lower = name.lower()

    for category in CATEGORY_ORDER:
        keywords = CATEGORY_KEYWORDS.get(category)
        if keywords and any(kw in name_lower for kw in keywords):
            return category

    return OTHER


def category_rank(category: str) -> int:
    """Position of a category in store order; unknown ones sort last."""
    try:
        return CATEGORY_ORDER.index(category)
    except ValueError:
        return len(CATEGORY_ORDER)


def staple_matches(staple: str, ingredient_name: str) -> bool:
    """Check if a staple matches an ingredient name, in either direction."""
    staple = staple.lower()
    name = ingredient_name.lower()
    return staple in name or name in staple


def is_pantry_item(name: str) -> bool:
    """Check an ingredient against the default staples list."""
    return any(staple_matches(staple, name) for staple in PANTRY_STAPLES)


class Pantry:
    """The set of staples that can be left off a shopping list.

    Starts from PANTRY_STAPLES; a markdown file with one "- item" per line
    can add household-specific staples.
    """

    def __init__(self, staples: Optional[Iterable[str]] = None):
        self.staples: list[str] = []
        for staple in PANTRY_STAPLES if staples is None else staples:
            self.add(staple)

    def __contains__(self, name: str) -> bool:
        return self.is_staple(name)

    def __len__(self) -> int:
        return len(self.staples)

    def add(self, staple: str) -> None:
        staple = staple.lower().strip()
        if staple and staple not in self.staples:
            self.staples.append(staple)

    def is_staple(self, name: str) -> bool:
        return any(staple_matches(staple, name) for staple in self.staples)

    @classmethod
    def from_file(cls, pantry_path: Path, include_defaults: bool = True) -> "Pantry":
        """Load staples from a markdown list, skipping headers and notes."""
        pantry = cls() if include_defaults else cls(staples=[])

        if not pantry_path.exists():
            logger.warning("Pantry file not found: %s", pantry_path)
            return pantry

        with open(pantry_path, "r", encoding="utf-8") as f:
            content = f.read()

        added = 0
        for line in content.split("\n"):
            line = line.strip()
            if not line.startswith("- "):
                continue
            # Remove checkbox and trailing quantity ("Rice, 5 lbs")
            name = re.sub(r"^-\s*(\[.\])?\s*", "", line)
            name = name.split(",")[0].strip()
            if name:
                pantry.add(name)
                added += 1

        logger.info("Loaded %d pantry staples from %s", added, pantry_path)
        return pantry
