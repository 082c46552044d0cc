"""Unit families and conversions.

Two layers live here. The shopping-list layer (``are_units_compatible`` and
``convert_quantity``) decides whether two recipe quantities can be summed
and never fails: unknown pairs pass through unchanged. The measurement
layer (``convert_measurement`` and friends) is the general-purpose
converter behind the ``convert`` command, with metric base units and an
explicit ``None`` when no conversion exists.
"""

import re
from typing import Optional


# Units that can be summed together when consolidating a shopping list
VOLUME_UNITS = {
    "cup", "cups", "tablespoon", "tablespoons", "tbsp",
    "teaspoon", "teaspoons", "tsp", "ml", "liter", "liters",
}
WEIGHT_UNITS = {
    "lb", "lbs", "pound", "pounds", "oz", "ounce", "ounces",
    "gram", "grams", "kg",
}
COUNT_UNITS = {"", "piece", "pieces", "clove", "cloves", "slice", "slices"}

UNIT_FAMILIES = {
    "volume": VOLUME_UNITS,
    "weight": WEIGHT_UNITS,
    "count": COUNT_UNITS,
}

# Volume factors relative to one cup. ml and liters are volume units
# without a factor, so they pass through unconverted.
VOLUME_TO_CUP = {
    "teaspoon": 1 / 48, "teaspoons": 1 / 48, "tsp": 1 / 48,
    "tablespoon": 1 / 16, "tablespoons": 1 / 16, "tbsp": 1 / 16,
    "cup": 1, "cups": 1,
}

# Weight factors relative to one ounce
WEIGHT_TO_OZ = {
    "ounce": 1, "ounces": 1, "oz": 1,
    "pound": 16, "pounds": 16, "lb": 16, "lbs": 16,
}


def unit_family(unit: str) -> Optional[str]:
    """Return "volume", "weight", "count" or None for an unknown unit."""
    for family, units in UNIT_FAMILIES.items():
        if unit in units:
            return family
    return None


def are_units_compatible(unit_a: str, unit_b: str) -> bool:
    """Two units can be summed iff both belong to the same family."""
    family = unit_family(unit_a)
    return family is not None and family == unit_family(unit_b)


def convert_quantity(quantity: Optional[float], from_unit: str, to_unit: str) -> Optional[float]:
    """Convert between compatible units, or return quantity unchanged."""
    if not quantity or from_unit == to_unit:
        return quantity

    for table in (VOLUME_TO_CUP, WEIGHT_TO_OZ):
        if from_unit in table and to_unit in table:
            return quantity * table[from_unit] / table[to_unit]

    return quantity


# General measurement conversion (base units: grams, milliliters, centimeters)
MEASUREMENT_CONVERSIONS = {
    "weight": {
        "g": 1, "gram": 1, "grams": 1,
        "kg": 1000, "kilogram": 1000, "kilograms": 1000,
        "lb": 453.592, "lbs": 453.592, "pound": 453.592, "pounds": 453.592,
        "oz": 28.3495, "ounce": 28.3495, "ounces": 28.3495,
    },
    "volume": {
        "ml": 1, "milliliter": 1, "milliliters": 1,
        "l": 1000, "liter": 1000, "liters": 1000,
        "cup": 236.588, "cups": 236.588,
        "tbsp": 14.7868, "tablespoon": 14.7868, "tablespoons": 14.7868,
        "tsp": 4.92892, "teaspoon": 4.92892, "teaspoons": 4.92892,
        "fl_oz": 29.5735, "fluid_ounce": 29.5735, "fluid_ounces": 29.5735,
        "pint": 473.176, "pints": 473.176,
        "quart": 946.353, "quarts": 946.353,
        "gallon": 3785.41, "gallons": 3785.41,
    },
    "length": {
        "cm": 1, "centimeter": 1, "centimeters": 1,
        "m": 100, "meter": 100, "meters": 100,
        "in": 2.54, "inch": 2.54, "inches": 2.54,
        "ft": 30.48, "foot": 30.48, "feet": 30.48,
    },
}

# Common units offered per category, in suggestion order
COMMON_UNITS = {
    "weight": ["g", "kg", "lb", "oz"],
    "volume": ["ml", "l", "cup", "tbsp", "tsp", "fl oz"],
    "length": ["cm", "m", "in", "ft"],
    "count": ["piece", "pieces", "each", "dozen", "bunch", "bag", "box", "can", "jar", "bottle"],
}


def normalize_unit(unit: Optional[str]) -> str:
    """Lowercase a unit name and replace punctuation/spaces with underscores."""
    if not unit or not isinstance(unit, str):
        return ""
    return re.sub(r"[^a-z0-9]", "_", unit.lower().strip())


def get_unit_category(unit: Optional[str]) -> str:
    """Category of a measurement unit; anything unknown counts as "count"."""
    normalized = normalize_unit(unit)
    for category, conversions in MEASUREMENT_CONVERSIONS.items():
        if normalized in conversions:
            return category
    return "count"


def can_convert_units(unit_a: str, unit_b: str) -> bool:
    category = get_unit_category(unit_a)
    return category == get_unit_category(unit_b) and category != "count"


def convert_measurement(value: Optional[float], from_unit: str, to_unit: str) -> Optional[float]:
    """Convert value between measurement units.

    Returns None when either unit is missing, the units are in different
    categories, or they are count units. Results are rounded to 3 places.
    """
    if not value or not from_unit or not to_unit:
        return None

    from_normalized = normalize_unit(from_unit)
    to_normalized = normalize_unit(to_unit)
    if from_normalized == to_normalized:
        return value

    if not can_convert_units(from_unit, to_unit):
        return None

    conversions = MEASUREMENT_CONVERSIONS[get_unit_category(from_unit)]
    base_value = value * conversions[from_normalized]
    return round(base_value / conversions[to_normalized], 3)


def format_converted_value(value: float) -> str:
    if value >= 1000:
        return str(round(value))
    elif value >= 1:
        return f"{value:.1f}"
    return f"{value:.2f}"


def get_conversion_suggestions(unit: str, value: float) -> list[dict]:
    """Up to three equivalent amounts in other common units of the same category."""
    category = get_unit_category(unit)
    if category == "count":
        return []

    suggestions = []
    for common_unit in COMMON_UNITS[category]:
        converted = convert_measurement(value, unit, common_unit)
        if converted is not None and converted != value:
            suggestions.append({
                "unit": common_unit,
                "value": converted,
                "display_value": format_converted_value(converted),
            })

    return suggestions[:3]


def suggest_units_for_item(item_name: Optional[str]) -> list[str]:
    """Suggest likely units for a shopping item by keyword."""
    if not item_name or not isinstance(item_name, str):
        return ["piece"]

    name = item_name.lower()
    suggestions = []

    weight_keywords = ["meat", "chicken", "beef", "pork", "fish", "cheese", "butter", "flour", "sugar"]
    if any(kw in name for kw in weight_keywords):
        suggestions.extend(["lb", "kg", "oz"])

    volume_keywords = ["milk", "juice", "oil", "vinegar", "sauce", "broth"]
    if any(kw in name for kw in volume_keywords):
        suggestions.extend(["cup", "ml", "fl oz"])

    count_keywords = ["egg", "apple", "banana", "onion", "potato", "tomato"]
    if any(kw in name for kw in count_keywords):
        suggestions.extend(["piece", "dozen", "bunch"])

    if not suggestions:
        suggestions = ["piece", "cup", "lb"]

    return suggestions[:3]
