"""Command-line interface for mealcart."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import Config, ConfigError
from .duplicates import find_duplicate_groups
from .models import MealcartError, ShoppingList
from .pantry import Pantry, categorize_ingredient
from .parsing import parse_ingredient
from .recipe_parser import RecipeLibrary, load_recipes
from .shopping import ShoppingListGenerator, format_quantity, source_display_text, to_copy_text
from .store import JsonPlanStore
from .taxonomy import TagTaxonomy, category_display_name, find_orphaned_tags, tag_usage
from .units import convert_measurement, format_converted_value, get_conversion_suggestions

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger("mealcart").setLevel(level)


def load_pantry(config: Config) -> Pantry:
    if config.pantry_path:
        return Pantry.from_file(config.pantry_path)
    return Pantry()


def render_shopping_list(shopping_list: ShoppingList, by_recipe: bool = False) -> None:
    """Print a shopping list as one table per category."""
    if shopping_list.is_empty:
        console.print("[yellow]Nothing to buy.[/yellow]")
        return

    console.print(Panel(
        f"[bold]{len(shopping_list)}[/bold] items in "
        f"[bold]{len(shopping_list.categories)}[/bold] categories",
        title="🛒 Shopping List",
    ))

    for category, items in shopping_list:
        table = Table(title=category, title_justify="left")
        table.add_column("Item", style="cyan")
        table.add_column("Amount", justify="right", style="green")
        table.add_column("From", style="dim")

        for item in items:
            if by_recipe:
                sources = "\n".join(
                    f"{s.recipe}: {source_display_text(item, s)}" for s in item.sources
                )
            else:
                sources = ", ".join(item.recipes)
            table.add_row(item.item, format_quantity(item.quantity, item.unit), sources)

        console.print(table)


@click.group()
@click.option("--env", default=None, help="Path to .env file")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, env, verbose):
    """🛒 mealcart - Shopping lists from your meal plan recipes."""
    ctx.ensure_object(dict)
    try:
        config = Config.from_env(Path(env) if env else None)
    except ConfigError as e:
        raise click.ClickException(str(e))

    setup_logging("DEBUG" if verbose else config.log_level)
    for error in config.validate():
        logger.debug("Config: %s", error)

    ctx.obj["env"] = env
    ctx.obj["config"] = config


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option("--recipe", "-r", "names", multiple=True, help="Recipe name from the library")
@click.option("--keep-pantry", is_flag=True, help="Keep pantry staples on the list")
@click.option("--by-recipe", is_flag=True, help="Show or export items grouped by recipe")
@click.option("--plan-id", default=None, help="Save the list for this meal plan")
@click.option("--copy-text", is_flag=True, help="Print plain text for the clipboard")
@click.option("--output", "-o", default=None, type=click.Path(path_type=Path), help="Write plain text to a file")
@click.pass_context
def shop(ctx, paths, names, keep_pantry, by_recipe, plan_id, copy_text, output):
    """Build a shopping list from recipe files, directories or library names."""
    config = ctx.obj["config"]

    try:
        recipes = []
        for path in paths:
            recipes.extend(load_recipes(path))

        if names or not paths:
            library = RecipeLibrary(config.recipes_path)
            if not names:
                recipes.extend(library.search())
            for name in names:
                recipe = library.get_recipe(name)
                if recipe is None:
                    raise click.ClickException(f"Recipe not found: {name}")
                recipes.append(recipe)
    except MealcartError as e:
        raise click.ClickException(str(e))

    if not recipes:
        console.print("[yellow]No recipes found.[/yellow]")
        return

    store = JsonPlanStore(config.plans_path) if plan_id else None
    generator = ShoppingListGenerator(store=store, pantry=load_pantry(config))
    exclude_pantry = config.exclude_pantry and not keep_pantry

    if plan_id:
        shopping_list = generator.generate_for_plan(recipes, plan_id, exclude_pantry=exclude_pantry)
    else:
        shopping_list = generator.generate(recipes, exclude_pantry=exclude_pantry)

    if output:
        output.write_text(to_copy_text(shopping_list, group_by_recipe=by_recipe), encoding="utf-8")
        console.print(f"[green]✅ Shopping list saved to {output}[/green]")
    elif copy_text:
        click.echo(to_copy_text(shopping_list, group_by_recipe=by_recipe), nl=False)
    else:
        render_shopping_list(shopping_list, by_recipe=by_recipe)


@cli.command()
@click.argument("plan_id")
@click.option("--copy-text", is_flag=True, help="Print plain text for the clipboard")
@click.pass_context
def show(ctx, plan_id, copy_text):
    """Show the saved shopping list for a meal plan."""
    config = ctx.obj["config"]
    generator = ShoppingListGenerator(store=JsonPlanStore(config.plans_path))

    shopping_list = generator.get_for_plan(plan_id)
    if shopping_list is None:
        raise click.ClickException(f"No shopping list saved for plan {plan_id}")

    if copy_text:
        click.echo(to_copy_text(shopping_list), nl=False)
    else:
        render_shopping_list(shopping_list)


@cli.command()
@click.argument("line")
@click.pass_context
def parse(ctx, line):
    """Show how an ingredient line is read."""
    parsed = parse_ingredient(line)
    pantry = load_pantry(ctx.obj["config"])

    table = Table(title="🔍 Parsed Ingredient", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", style="cyan")
    table.add_row("Quantity", "" if parsed.quantity is None else f"{parsed.quantity:g}")
    table.add_row("Unit", parsed.unit)
    table.add_row("Item", parsed.item)
    table.add_row("Category", categorize_ingredient(parsed.item))
    table.add_row("Pantry staple", "yes" if pantry.is_staple(parsed.item) else "no")
    console.print(table)


@cli.command()
@click.argument("value", type=float)
@click.argument("from_unit")
@click.argument("to_unit")
def convert(value, from_unit, to_unit):
    """Convert an amount between measurement units."""
    result = convert_measurement(value, from_unit, to_unit)
    if result is None:
        raise click.ClickException(f"Can't convert {from_unit} to {to_unit}")

    console.print(f"{value:g} {from_unit} = [bold green]{format_converted_value(result)} {to_unit}[/bold green]")

    suggestions = [s for s in get_conversion_suggestions(from_unit, value) if s["unit"] != to_unit]
    if suggestions:
        also = ", ".join(f"{s['display_value']} {s['unit']}" for s in suggestions)
        console.print(f"[dim]Also: {also}[/dim]")


@cli.command()
@click.argument("query", required=False)
@click.pass_context
def recipes(ctx, query):
    """List recipes in the library."""
    config = ctx.obj["config"]
    library = RecipeLibrary(config.recipes_path)

    results = library.search(query)
    if not results:
        console.print("[yellow]No recipes found.[/yellow]")
        return

    table = Table(title=f"📚 Recipes ({len(results)})")
    table.add_column("Recipe", style="cyan")
    table.add_column("Ingredients", justify="right")
    table.add_column("Scaling", justify="right", style="green")

    for recipe in results:
        table.add_row(recipe.name[:40], str(len(recipe.ingredients)), f"{recipe.scale_factor:g}x")

    console.print(table)


@cli.command()
@click.pass_context
def tags(ctx):
    """Show the tag taxonomy with usage counts and orphaned tags."""
    config = ctx.obj["config"]
    taxonomy = TagTaxonomy.default()
    library_recipes = RecipeLibrary(config.recipes_path).search()
    usage = tag_usage(library_recipes)

    stats = taxonomy.stats()
    console.print(Panel(
        f"Total tags: {stats['total_tags']}\n"
        f"Categories: {stats['total_categories']}\n"
        f"Recipes: {len(library_recipes)}",
        title="🏷️ Tags",
    ))

    table = Table(title="Tag usage")
    table.add_column("Category", style="bold")
    table.add_column("Tag", style="cyan")
    table.add_column("Recipes", justify="right", style="green")

    for category in taxonomy.categories:
        counts = usage.get(category, {})
        for tag in taxonomy.tags(category):
            table.add_row(category_display_name(category), tag, str(counts.get(tag, 0)))

    console.print(table)

    orphaned = {c: t for c, t in find_orphaned_tags(library_recipes, taxonomy).items() if t}
    if orphaned:
        console.print("\n[yellow]Tags not in the taxonomy:[/yellow]")
        for category, names in orphaned.items():
            console.print(f"[bold]{category_display_name(category)}:[/bold] {', '.join(names)}")


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--threshold", type=float, default=None, help="Similarity threshold (0-1)")
@click.pass_context
def duplicates(ctx, names, threshold):
    """Find item names that are probably the same thing."""
    if threshold is None:
        threshold = ctx.obj["config"].duplicate_threshold

    groups = find_duplicate_groups([{"name": name} for name in names], threshold=threshold)
    if not groups:
        console.print("[green]No duplicates found.[/green]")
        return

    for i, group in enumerate(groups, 1):
        console.print(f"[bold]Group {i}:[/bold] " + ", ".join(item["name"] for item in group))


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
