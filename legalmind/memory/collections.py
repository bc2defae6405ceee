"""Collection store - durable, append-only document sets keyed by collection name."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from legalmind.models.memory import Document

logger = logging.getLogger(__name__)


def collection_key(role: str, case_id: str) -> str:
    """Build the collection key for one role within one case."""
    return f"{role}_{case_id}"


class CollectionStore(Protocol):
    """Storage interface for document collections."""

    def append(self, key: str, document: Document) -> None:
        """Append a document to a collection, creating it on first write."""
        ...

    def load_all(self, key: str) -> list[Document]:
        """Load every document in insertion order (empty if never written)."""
        ...

    def remove(self, key: str, document_id: str) -> bool:
        """Remove a document by ID.

        Returns:
            True if a document was removed
        """
        ...


class JsonCollectionStore:
    """Collection store backed by one JSON file per collection.

    Writes go to a temp file in the same directory and are swapped in with
    ``os.replace`` so readers never observe a partially written collection.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._root / f"{key}.json"

    def append(self, key: str, document: Document) -> None:
        """Append a document to a collection."""
        documents = self.load_all(key)
        documents.append(document)
        self._write(key, documents)

    def load_all(self, key: str) -> list[Document]:
        """Load all documents in a collection."""
        path = self._path(key)
        if not path.exists():
            return []

        raw = json.loads(path.read_text(encoding="utf-8"))
        return [Document.model_validate(item) for item in raw]

    def remove(self, key: str, document_id: str) -> bool:
        """Remove a document from a collection."""
        documents = self.load_all(key)
        remaining = [doc for doc in documents if doc.id != document_id]
        if len(remaining) == len(documents):
            return False

        self._write(key, remaining)
        return True

    def _write(self, key: str, documents: list[Document]) -> None:
        payload = json.dumps([doc.model_dump(mode="json") for doc in documents], indent=2)

        fd, tmp_path = tempfile.mkstemp(dir=self._root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_path, self._path(key))
        except OSError:
            logger.error(f"Failed to write collection {key}")
            Path(tmp_path).unlink(missing_ok=True)
            raise


class InMemoryCollectionStore:
    """In-memory implementation of CollectionStore."""

    def __init__(self) -> None:
        self._collections: dict[str, list[Document]] = {}

    def append(self, key: str, document: Document) -> None:
        """Append a document to a collection."""
        self._collections.setdefault(key, []).append(document)

    def load_all(self, key: str) -> list[Document]:
        """Load all documents in a collection."""
        return list(self._collections.get(key, []))

    def remove(self, key: str, document_id: str) -> bool:
        """Remove a document from a collection."""
        documents = self._collections.get(key, [])
        remaining = [doc for doc in documents if doc.id != document_id]
        if len(remaining) == len(documents):
            return False

        self._collections[key] = remaining
        return True
