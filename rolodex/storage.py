from __future__ import annotations

from typing import Any, Dict, Iterable, Protocol, Tuple

Document = Tuple[str, Dict[str, Any]]


class DocumentStore(Protocol):
    """Protocol describing the document database the repository talks to.

    Implementations raise :class:`rolodex.errors.StoreUnavailable` for any
    failure to reach the database or to make sense of its answer.
    """

    def list_documents(self, collection: str) -> Iterable[Document]:
        """Return ``(id, fields)`` pairs for every document in ``collection``."""

    def insert_document(self, collection: str, fields: Dict[str, Any]) -> str:
        """Store a new document and return the id assigned to it."""

    def delete_document(self, collection: str, document_id: str) -> None:
        """Remove a document by id."""


__all__ = ["Document", "DocumentStore"]
