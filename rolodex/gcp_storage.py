from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from google.api_core import exceptions as gcloud_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore

from .errors import StoreUnavailable
from .storage import Document, DocumentStore


@contextmanager
def _store_call(action: str) -> Iterator[None]:
    try:
        yield
    except (gcloud_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as exc:
        raise StoreUnavailable(f"Firestore failed to {action}: {exc}") from exc


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by Google Cloud Firestore."""

    def __init__(
        self,
        *,
        project: Optional[str] = None,
        client: Optional[firestore.Client] = None,
    ) -> None:
        self._project = project
        self._client = client if client is not None else firestore.Client(project=project)

    def list_documents(self, collection: str) -> List[Document]:
        documents: List[Document] = []
        # The stream is lazy; errors surface while iterating.
        with _store_call(f"list '{collection}'"):
            for snapshot in self._client.collection(collection).stream():
                data = snapshot.to_dict()
                if data is None:
                    data = {}
                elif not isinstance(data, dict):
                    raise StoreUnavailable(
                        f"Document '{snapshot.id}' in '{collection}' is not a mapping."
                    )
                documents.append((snapshot.id, data))
        return documents

    def insert_document(self, collection: str, fields: Dict[str, Any]) -> str:
        with _store_call(f"insert into '{collection}'"):
            doc_ref = self._client.collection(collection).document()
            doc_ref.set(fields)
        return doc_ref.id

    def delete_document(self, collection: str, document_id: str) -> None:
        with _store_call(f"delete '{document_id}' from '{collection}'"):
            self._client.collection(collection).document(document_id).delete()


__all__ = ["FirestoreDocumentStore"]
