"""In-memory view of the recipe collection.

The catalog keeps the last successfully loaded list of recipes (the
snapshot) and derives everything the index page shows from it: the
search-filtered subsequence and the random pick.
"""

from __future__ import annotations

import itertools
import random
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from loguru import logger

from .errors import EmptyCatalogError, StoreUnavailable
from .models import Recipe
from .repository import RecipeRepository

_default_rng = random.Random()


def filter_recipes(recipes: Sequence[Recipe], term: str) -> List[Recipe]:
    """Return the recipes whose name or any tag contains ``term``.

    Matching is a case-insensitive substring test. The result keeps the
    order of ``recipes``; an empty term matches everything.
    """

    needle = term.lower()
    if not needle:
        return list(recipes)

    return [
        recipe
        for recipe in recipes
        if needle in recipe.name.lower() or any(needle in tag.lower() for tag in recipe.tags)
    ]


def pick_random(recipes: Sequence[Recipe], rng: Optional[random.Random] = None) -> Recipe:
    if not recipes:
        raise EmptyCatalogError("Cannot pick a random recipe from an empty catalog.")
    rng = rng or _default_rng
    return recipes[rng.randrange(len(recipes))]


class RecipeCatalog:
    """Holds the authoritative recipe snapshot for the running application.

    Each :meth:`refresh` takes a ticket before it calls the store. When the
    load finishes, its result replaces the snapshot only if no refresh that
    started later has already been installed, so a slow reload cannot
    overwrite a newer one.
    """

    def __init__(self, repository: RecipeRepository) -> None:
        self._repository = repository
        self._lock = threading.Lock()
        self._tickets = itertools.count(1)
        self._installed_ticket = 0
        self._snapshot: List[Recipe] = []

    @property
    def snapshot(self) -> List[Recipe]:
        with self._lock:
            return self._snapshot

    def refresh(self) -> List[Recipe]:
        """Reload every recipe and return the current snapshot.

        On :class:`StoreUnavailable` the previous snapshot is kept.
        """

        with self._lock:
            ticket = next(self._tickets)

        try:
            recipes = self._repository.load_all()
        except StoreUnavailable:
            return self.snapshot

        with self._lock:
            if ticket > self._installed_ticket:
                self._snapshot = recipes
                self._installed_ticket = ticket
            else:
                logger.debug(
                    "Discarding reload {}; reload {} is newer", ticket, self._installed_ticket
                )
            return self._snapshot

    def view(self, search_term: str = "", *, random_pick: bool = False) -> "CatalogView":
        """Reload and build the view for one page render.

        Raises :class:`EmptyCatalogError` when ``random_pick`` is requested
        and there is nothing to pick from.
        """

        recipes = self.refresh()
        selected = pick_random(recipes) if random_pick else None
        return CatalogView(
            recipes=recipes,
            search_term=search_term,
            filtered=filter_recipes(recipes, search_term),
            selected_random=selected,
            is_random_dialog_open=selected is not None,
        )


@dataclass
class CatalogView:
    recipes: List[Recipe]
    search_term: str = ""
    filtered: List[Recipe] = field(default_factory=list)
    selected_random: Optional[Recipe] = None
    is_random_dialog_open: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.filtered


__all__ = ["CatalogView", "RecipeCatalog", "filter_recipes", "pick_random"]
