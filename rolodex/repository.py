from __future__ import annotations

from typing import List

from loguru import logger

from .errors import StoreUnavailable
from .models import Recipe, RecipeDraft
from .storage import DocumentStore


class RecipeRepository:
    """Mediates every call between the web layer and the document store.

    Failures are logged here and re-raised as :class:`StoreUnavailable`;
    deciding whether the user sees them is left to the caller.
    """

    def __init__(self, store: DocumentStore, *, collection_name: str = "recipes") -> None:
        self._store = store
        self._collection_name = collection_name

    @property
    def collection_name(self) -> str:
        return self._collection_name

    def load_all(self) -> List[Recipe]:
        try:
            documents = self._store.list_documents(self._collection_name)
            recipes = [Recipe.from_document(doc_id, data) for doc_id, data in documents]
        except StoreUnavailable:
            logger.exception("Error fetching recipes from '{}'", self._collection_name)
            raise

        logger.debug("Loaded {} recipes from '{}'", len(recipes), self._collection_name)
        return recipes

    def add(self, draft: RecipeDraft) -> Recipe:
        fields = draft.to_document()
        try:
            recipe_id = self._store.insert_document(self._collection_name, fields)
        except StoreUnavailable:
            logger.exception("Error adding recipe '{}'", draft.name)
            raise

        logger.info("Recipe '{}' added with id {}", draft.name, recipe_id)
        return Recipe.from_document(recipe_id, fields)

    def delete_by_id(self, recipe_id: str) -> None:
        try:
            self._store.delete_document(self._collection_name, recipe_id)
        except StoreUnavailable:
            logger.exception("Error deleting recipe {}", recipe_id)
            raise

        logger.info("Recipe {} deleted", recipe_id)


__all__ = ["RecipeRepository"]
