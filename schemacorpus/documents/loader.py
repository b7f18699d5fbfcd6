"""
Collaborator interfaces consumed by the folder tree.

StorageAdapter maps corpus paths of one namespace to a physical location.
PersistenceLoader turns raw content into a Document and registers it in the
folder it was requested from. Concrete adapters and document formats live
outside this package.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from schemacorpus.documents.models import Document

if TYPE_CHECKING:
    from schemacorpus.documents.folder import Folder

logger = logging.getLogger("schemacorpus.documents.loader")


class StorageAdapter(ABC):
    """Resolves corpus paths of one mounted namespace to physical storage."""

    @abstractmethod
    def create_adapter_path(self, corpus_path: str) -> str:
        """Physical location of a namespace-relative corpus path."""

    @abstractmethod
    async def read(self, corpus_path: str) -> str:
        """Raw content stored at a namespace-relative corpus path."""


class PersistenceLoader(ABC):
    """
    Loads documents on a cache miss.

    Implementations must register the document they return in the folder
    (``self.register(folder, document)``); the folder does not do that
    bookkeeping itself.
    """

    @abstractmethod
    async def load_document(
        self,
        folder: "Folder",
        document_name: str,
        existing: Optional[Document] = None,
    ) -> Optional[Document]:
        """
        Load ``document_name`` from ``folder``.

        Args:
            folder: Folder the document belongs to.
            document_name: Case-sensitive document name.
            existing: Instance evicted by a forced reload, if any; a hint for
                the replacement, already removed from the folder.

        Returns:
            The new Document, or None when nothing could be produced.
        """

    @staticmethod
    def register(folder: "Folder", document: Document) -> Document:
        """Insert a freshly loaded document into the folder's collections."""
        folder.documents.append(document)
        logger.debug(f"Registered document: {document.at_corpus_path}")
        return document
