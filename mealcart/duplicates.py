"""Duplicate detection for shopping list entries.

Catches near-duplicates such as "fresh basil" vs "basil" or "chicken
breast" vs "chicken breasts" when items are added by hand. List
generation itself still keys on the exact item text.
"""

import re
from typing import Optional

from thefuzz import fuzz


DESCRIPTORS = r"fresh|organic|free-range|cage-free|grass-fed|wild-caught"
MEASUREMENTS = (
    r"lb|lbs|kg|g|oz|ml|l|cup|cups|tbsp|tsp|pound|pounds|kilogram|gram|ounce"
    r"|liter|milliliter|tablespoon|teaspoon"
)


def normalize_item_name(name: Optional[str]) -> str:
    """Lowercase, drop descriptors like "organic" and embedded amounts."""
    if not name or not isinstance(name, str):
        return ""

    name = name.lower().strip()
    name = re.sub(rf"^({DESCRIPTORS})\s+", "", name)
    name = re.sub(rf"\s+({DESCRIPTORS})$", "", name)
    name = re.sub(rf"\b\d+\s*({MEASUREMENTS})\b", "", name)
    return re.sub(r"\s+", " ", name).strip()


def calculate_similarity(name1: str, name2: str) -> float:
    """Similarity between two item names, from 0 to 1."""
    norm1 = normalize_item_name(name1)
    norm2 = normalize_item_name(name2)

    if not norm1 or not norm2:
        return 0.0

    if norm1 == norm2:
        return 1.0

    if norm1 in norm2 or norm2 in norm1:
        return 0.8

    similarity = fuzz.ratio(norm1, norm2) / 100

    # Shared words count for more than raw edit distance
    words1 = norm1.split(" ")
    words2 = norm2.split(" ")
    common = [word for word in words1 if word in words2]
    if common:
        word_similarity = len(common) / max(len(words1), len(words2))
        return max(similarity, word_similarity * 0.7)

    return similarity


def find_duplicates(new_item_name: str, existing_items: list[dict], threshold: float = 0.7) -> list[dict]:
    """Existing items similar to a new one, most similar first.

    Each existing item is a dict with at least a "name" key.
    """
    if not new_item_name or not existing_items:
        return []

    duplicates = []
    for item in existing_items:
        similarity = calculate_similarity(new_item_name, item.get("name", ""))
        if similarity >= threshold:
            duplicates.append({
                "item": item,
                "similarity": similarity,
                "normalized_name": normalize_item_name(item.get("name", "")),
            })

    duplicates.sort(key=lambda d: d["similarity"], reverse=True)
    return duplicates


def are_likely_same(name1: str, name2: str) -> bool:
    return calculate_similarity(name1, name2) >= 0.8


def find_duplicate_groups(items: list[dict], threshold: float = 0.8) -> list[list[dict]]:
    """Group items whose names are likely the same product."""
    groups = []
    processed = set()

    for i, item in enumerate(items):
        if i in processed:
            continue

        group = [item]
        processed.add(i)

        for j in range(i + 1, len(items)):
            if j in processed:
                continue
            if calculate_similarity(item.get("name", ""), items[j].get("name", "")) >= threshold:
                group.append(items[j])
                processed.add(j)

        if len(group) > 1:
            groups.append(group)

    return groups


def suggest_merge(
    new_item_name: str,
    new_item_quantity: Optional[str],
    new_item_unit: Optional[str],
    existing_item: dict,
) -> dict:
    """Suggest how a new item and an existing duplicate should be combined."""
    existing_name = existing_item.get("name", "")
    existing_quantity = existing_item.get("quantity")
    existing_unit = existing_item.get("unit")

    # Prefer the more descriptive name
    suggested_name = existing_name
    if len(normalize_item_name(new_item_name)) > len(normalize_item_name(existing_name)):
        suggested_name = new_item_name

    suggested_quantity = existing_quantity
    suggested_unit = existing_unit

    if new_item_quantity and existing_quantity:
        if new_item_unit == existing_unit:
            total = _to_number(new_item_quantity) + _to_number(existing_quantity)
            suggested_quantity = f"{total:g}"
            suggested_unit = new_item_unit
        else:
            # Different units: keep both amounts side by side
            suggested_quantity = (
                f"{existing_quantity} {existing_unit or ''} + {new_item_quantity} {new_item_unit or ''}"
            ).strip()
            suggested_unit = None
    elif new_item_quantity:
        suggested_quantity = new_item_quantity
        suggested_unit = new_item_unit

    return {
        "id": existing_item.get("id"),
        "name": suggested_name,
        "quantity": suggested_quantity,
        "unit": suggested_unit,
        "category": existing_item.get("category"),
        "notes": existing_item.get("notes"),
    }


def _to_number(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
