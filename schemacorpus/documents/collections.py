"""
Owned collections of a Folder: child folders and documents.

Both collections are the only code that mutates a folder's children,
so the parent links and the document name lookup always agree with
the ordered lists.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Union

from schemacorpus.documents.models import Document
from schemacorpus.engine.errors import NameConflictError

if TYPE_CHECKING:
    from schemacorpus.documents.folder import Folder

logger = logging.getLogger("schemacorpus.documents.collections")


class FolderCollection:
    """Ordered child folders of one owner folder."""

    def __init__(self, owner: "Folder"):
        self._owner = owner
        self._items: List["Folder"] = []

    def append(self, child: Union[str, "Folder"]) -> "Folder":
        """
        Attach a child folder, creating it from a name if needed.

        The child inherits the owner's corpus context.
        """
        from schemacorpus.documents.folder import Folder

        if isinstance(child, str):
            child = Folder(child, ctx=self._owner.ctx)
        if child.parent is not None:
            raise ValueError(f"Folder '{child.name}' already belongs to '{child.parent.folder_path}'")
        if self.find(child.name) is not None:
            raise NameConflictError(
                f"Folder '{child.name}' already exists in '{self._owner.folder_path}'",
                object_ref=self._owner.at_corpus_path,
            )

        child._parent = self._owner
        if child.ctx is None:
            child.ctx = self._owner.ctx
        self._items.append(child)
        logger.debug(f"Created folder: {child.folder_path}")
        return child

    def find(self, name: str) -> Optional["Folder"]:
        """First child whose name matches case-insensitively."""
        wanted = name.lower()
        for folder in self._items:
            if folder.name.lower() == wanted:
                return folder
        return None

    def __iter__(self) -> Iterator["Folder"]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> "Folder":
        return self._items[index]

    def __repr__(self) -> str:
        return f"<FolderCollection {[f.name for f in self._items]}>"


class DocumentCollection:
    """
    Ordered documents of one folder, kept in sync with ``folder.document_lookup``.
    """

    def __init__(self, owner: "Folder"):
        self._owner = owner
        self._items: List[Document] = []

    @property
    def _lookup(self) -> Dict[str, Document]:
        return self._owner.document_lookup

    def append(self, document: Document) -> Document:
        """Register a document under its name."""
        if document.name in self._lookup:
            raise NameConflictError(
                f"Document '{document.name}' already exists in folder",
                object_ref=self._owner.at_corpus_path,
                document_name=document.name,
            )
        if document.folder is not None and document.folder is not self._owner:
            document.folder.documents.remove(document.name)

        self._items.append(document)
        self._lookup[document.name] = document
        document._folder = self._owner
        return document

    def remove(self, name: str) -> Optional[Document]:
        """Drop a document from both the list and the lookup. Returns it, if present."""
        document = self._lookup.pop(name, None)
        if document is None:
            return None
        self._items = [d for d in self._items if d is not document]
        document._folder = None
        return document

    def get(self, name: str) -> Optional[Document]:
        return self._lookup.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._lookup

    def __iter__(self) -> Iterator[Document]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Document:
        return self._items[index]

    def __repr__(self) -> str:
        return f"<DocumentCollection {[d.name for d in self._items]}>"
