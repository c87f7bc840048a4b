from __future__ import annotations

import copy
import json
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from loguru import logger

from .storage import Document, DocumentStore

DEFAULT_SEED_FILE = Path(__file__).resolve().parent / "data" / "seed_recipes.json"


def load_seed_documents(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read a JSON list of recipe-shaped records.

    Raises :class:`ValueError` when the file does not hold a list of
    objects.
    """

    with open(path, encoding="utf-8") as handle:
        records = json.load(handle)

    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ValueError(f"Seed file '{path}' must contain a JSON list of objects.")
    return records


class InMemoryDocumentStore(DocumentStore):
    """Process-local document store, used for demos and tests.

    Documents keep their insertion order. Seed records are placed in the
    collection named by ``seed_collection``; a record's ``id`` key, when
    present, becomes its document id.
    """

    def __init__(
        self,
        seed: Optional[Iterable[Dict[str, Any]]] = None,
        *,
        seed_collection: str = "recipes",
    ) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

        for record in seed or ():
            fields = dict(record)
            doc_id = str(fields.pop("id", "") or uuid.uuid4().hex)
            self._collections.setdefault(seed_collection, {})[doc_id] = fields

    @classmethod
    def from_seed_file(
        cls, path: Union[str, Path], *, seed_collection: str = "recipes"
    ) -> "InMemoryDocumentStore":
        records = load_seed_documents(path)
        logger.info("Seeded in-memory store with {} recipes from {}", len(records), path)
        return cls(records, seed_collection=seed_collection)

    def list_documents(self, collection: str) -> List[Document]:
        with self._lock:
            documents = self._collections.get(collection, {})
            return [(doc_id, copy.deepcopy(fields)) for doc_id, fields in documents.items()]

    def insert_document(self, collection: str, fields: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        with self._lock:
            self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(fields)
        return doc_id

    def delete_document(self, collection: str, document_id: str) -> None:
        # Like Firestore, deleting a missing document is not an error.
        with self._lock:
            self._collections.get(collection, {}).pop(document_id, None)


__all__ = ["DEFAULT_SEED_FILE", "InMemoryDocumentStore", "load_seed_documents"]
