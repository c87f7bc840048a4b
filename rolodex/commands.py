from __future__ import annotations

import click
from flask import Flask, current_app
from flask.cli import with_appcontext

from .errors import StoreUnavailable
from .memory_storage import DEFAULT_SEED_FILE, load_seed_documents
from .models import RecipeDraft
from .repository import RecipeRepository


@click.command("seed-recipes")
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, dir_okay=False),
    default=str(DEFAULT_SEED_FILE),
)
@with_appcontext
def seed_recipes_command(path: str) -> None:
    """Insert the recipes listed in PATH into the configured store."""

    repository: RecipeRepository = current_app.config["RECIPE_REPOSITORY"]

    try:
        records = load_seed_documents(path)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    added = 0
    for record in records:
        tags = record.get("tags")
        draft = RecipeDraft(
            name=str(record.get("name", "")),
            ingredients=str(record.get("ingredients", "")),
            instructions=str(record.get("instructions", "")),
            source=str(record.get("source") or ""),
            tags=[tag for tag in tags if isinstance(tag, str)] if isinstance(tags, list) else [],
        )
        try:
            repository.add(draft)
        except StoreUnavailable as exc:
            raise click.ClickException(
                f"Stopped after {added} of {len(records)} recipes: {exc}"
            ) from exc
        added += 1

    click.echo(f"Added {added} recipes to '{repository.collection_name}'.")


def register_commands(app: Flask) -> None:
    app.cli.add_command(seed_recipes_command)


__all__ = ["register_commands", "seed_recipes_command"]
