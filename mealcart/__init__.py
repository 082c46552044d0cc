"""mealcart - Consolidated shopping lists from meal plan recipes."""

__version__ = "0.1.0"

# Lazy imports to avoid circular dependencies
def __getattr__(name):
    if name in ("Config", "ConfigError"):
        from . import config
        return getattr(config, name)
    elif name in ("Recipe", "ParsedIngredient", "IngredientSource",
                  "ConsolidatedIngredient", "ShoppingList", "MealcartError"):
        from . import models
        return getattr(models, name)
    elif name in ("parse_ingredient", "parse_quantity"):
        from . import parsing
        return getattr(parsing, name)
    elif name in ("Pantry", "categorize_ingredient", "is_pantry_item"):
        from . import pantry
        return getattr(pantry, name)
    elif name in ("are_units_compatible", "convert_quantity", "convert_measurement"):
        from . import units
        return getattr(units, name)
    elif name in ("ShoppingListGenerator", "consolidate_ingredients",
                  "format_quantity", "to_copy_text"):
        from . import shopping
        return getattr(shopping, name)
    elif name in ("JsonPlanStore", "InMemoryPlanStore", "StoreError"):
        from . import store
        return getattr(store, name)
    elif name in ("TagTaxonomy", "TaxonomyError"):
        from . import taxonomy
        return getattr(taxonomy, name)
    elif name in ("RecipeLibrary", "parse_recipe_file", "load_recipes_json"):
        from . import recipe_parser
        return getattr(recipe_parser, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "Config",
    "ConfigError",
    "Recipe",
    "ParsedIngredient",
    "IngredientSource",
    "ConsolidatedIngredient",
    "ShoppingList",
    "MealcartError",
    "parse_ingredient",
    "parse_quantity",
    "Pantry",
    "categorize_ingredient",
    "is_pantry_item",
    "are_units_compatible",
    "convert_quantity",
    "convert_measurement",
    "ShoppingListGenerator",
    "consolidate_ingredients",
    "format_quantity",
    "to_copy_text",
    "JsonPlanStore",
    "InMemoryPlanStore",
    "StoreError",
    "TagTaxonomy",
    "TaxonomyError",
    "RecipeLibrary",
    "parse_recipe_file",
    "load_recipes_json",
]
