"""Ingredient line parsing."""

import re
from typing import Optional

from .models import ParsedIngredient


# Plain number, simple fraction ("1/2") or decimal
QUANTITY = r"\d+(?:/\d+)?(?:\.\d+)?"

KNOWN_UNITS = (
    r"tablespoons?|tbsp|teaspoons?|tsp|cups?|lbs?|pounds?|ounces?|oz|cloves?|slices?"
)

# Tried in order, first match wins
QTY_UNIT_ITEM = re.compile(rf"^({QUANTITY})\s+([a-z]+)\s+(.+)$", re.IGNORECASE)
QTY_KNOWN_UNIT_ITEM = re.compile(rf"^({QUANTITY})\s+({KNOWN_UNITS})\s+(.+)$", re.IGNORECASE)
QTY_ITEM = re.compile(rf"^({QUANTITY})\s+(.+)$", re.IGNORECASE)
ITEM_ONLY = re.compile(r"^(.+)$")


def parse_quantity(qty_str: Optional[str]) -> Optional[float]:
    """Convert "2", "0.5" or "1/2" to a float, or None if it can't be read."""
    if not qty_str:
        return None

    qty_str = qty_str.strip()
    try:
        if "/" in qty_str:
            parts = qty_str.split("/")
            if len(parts) == 2:
                return float(parts[0]) / float(parts[1])
            return None
        return float(qty_str)
    except (ValueError, ZeroDivisionError):
        return None


def parse_ingredient(line: str) -> ParsedIngredient:
    """Parse an ingredient string like "2 cups flour".

    Always returns a record. Lines without a leading quantity come back
    with quantity None, no unit and the whole lowercased line as the item.
    Mixed numbers are not combined: "1 1/2 cups flour" reads as quantity 1
    of "1/2 cups flour".
    """
    original = (line or "").strip()

    for pattern in (QTY_UNIT_ITEM, QTY_KNOWN_UNIT_ITEM):
        match = pattern.match(original)
        if match:
            return ParsedIngredient(
                original=original,
                quantity=parse_quantity(match.group(1)),
                unit=match.group(2).lower(),
                item=match.group(3).lower().strip(),
            )

    match = QTY_ITEM.match(original)
    if match:
        return ParsedIngredient(
            original=original,
            quantity=parse_quantity(match.group(1)),
            unit="",
            item=match.group(2).lower().strip(),
        )

    match = ITEM_ONLY.match(original)
    item = match.group(1) if match else original

    return ParsedIngredient(
        original=original,
        quantity=None,
        unit="",
        item=item.lower().strip(),
    )
