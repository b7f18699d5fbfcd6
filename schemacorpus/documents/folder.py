"""
SchemaCorpus Folder — Node of the namespace-rooted folder tree.

A Folder owns its child folders and caches the documents loaded from it.
Paths are walked one segment at a time; folder names match
case-insensitively but keep their authored casing.

    root = corpus.mount("adls", adapter)            # root folder "" -> path "/"
    models = root.resolve_folder("/models/core/", create_missing=True)
    doc = await models.resolve_document("entity.cdm.json")
    models.at_corpus_path                           # "adls:/models/core/"

Loading is the only suspending operation. At most one load per document
name is in flight per folder; concurrent requests for the same name await
that load instead of starting another.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from schemacorpus.documents.addressing import corpus_path
from schemacorpus.documents.collections import DocumentCollection, FolderCollection
from schemacorpus.documents.models import Document
from schemacorpus.documents.paths import SEPARATOR, split_first, split_segments
from schemacorpus.engine.diagnostics import DiagnosticCode
from schemacorpus.engine.errors import AddressingError, LoadError

if TYPE_CHECKING:
    from schemacorpus.documents.loader import PersistenceLoader
    from schemacorpus.engine.context import CorpusContext

logger = logging.getLogger("schemacorpus.documents.folder")


class Folder:
    """
    Folder in a corpus tree.

    Attributes:
        name: Authored name, unique among siblings ignoring case.
        namespace: Set only on the root of a mounted namespace.
        child_folders: Ordered child folders, each owned by this folder.
        documents: Ordered cached documents.
        document_lookup: Case-sensitive name -> Document, in sync with documents.
        ctx: Shared corpus collaborators (loader, diagnostics). Not owned.
    """

    def __init__(
        self,
        name: str,
        ctx: Optional["CorpusContext"] = None,
        namespace: Optional[str] = None,
    ):
        self.name = name
        self.ctx = ctx
        self.namespace = namespace
        self._parent: Optional[Folder] = None
        self.child_folders = FolderCollection(self)
        self.document_lookup: Dict[str, Document] = {}
        self.documents = DocumentCollection(self)
        self._loads_in_flight: Dict[str, asyncio.Future] = {}

    # -----------------------------------------------------------------------
    # Tree position
    # -----------------------------------------------------------------------

    @property
    def parent(self) -> Optional["Folder"]:
        return self._parent

    @property
    def root(self) -> "Folder":
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    @property
    def folder_path(self) -> str:
        """Ancestor names down to this folder, each followed by '/'."""
        names: List[str] = []
        node: Optional[Folder] = self
        while node is not None:
            names.append(node.name)
            node = node._parent
        return "".join(f"{name}{SEPARATOR}" for name in reversed(names))

    @property
    def effective_namespace(self) -> Optional[str]:
        """Own namespace, or the nearest ancestor's."""
        node: Optional[Folder] = self
        while node is not None:
            if node.namespace:
                return node.namespace
            node = node._parent
        return None

    @property
    def at_corpus_path(self) -> str:
        return corpus_path(self)

    # -----------------------------------------------------------------------
    # Folder resolution
    # -----------------------------------------------------------------------

    def resolve_folder(self, path: str, create_missing: bool = False) -> Optional["Folder"]:
        """
        Walk ``path`` down from this folder.

        The first segment must be this folder's own name. Every further
        segment names a child folder, matched ignoring case. A trailing
        separator is optional.

        Args:
            path: Path rooted at this folder, e.g. ``"root/a/b/"``.
            create_missing: Create folders that do not exist yet.

        Returns:
            The addressed Folder, or None after reporting an addressing error.
            A failed call leaves the tree unchanged.
        """
        segments = split_segments(path)
        if segments[0].lower() != self.name.lower():
            return self._report_addressing(
                DiagnosticCode.INVALID_PATH, f"Invalid path '{path}'", path, segments[0]
            )

        names = segments[1:]
        if names and names[-1] == "":
            names.pop()
        if "" in names:
            return self._report_addressing(
                DiagnosticCode.EMPTY_SEGMENT,
                f"Invalid path '{path}': empty folder name",
                path,
                "",
            )

        current = self
        for index, name in enumerate(names):
            child = current.child_folders.find(name)
            if child is None:
                if not create_missing:
                    return self._report_addressing(
                        DiagnosticCode.FOLDER_NOT_FOUND,
                        f"Folder '{name}' not found under '{current.folder_path}' for path '{path}'",
                        path,
                        name,
                    )
                for missing in names[index:]:
                    current = current.child_folders.append(missing)
                return current
            current = child
        return current

    # -----------------------------------------------------------------------
    # Document cache
    # -----------------------------------------------------------------------

    async def resolve_document(
        self, object_path: str, force_reload: bool = False
    ) -> Optional[Document]:
        """
        Return the document named by the first segment of ``object_path``.

        Cached documents are returned without I/O unless ``force_reload``
        is set; a forced reload evicts the cached instance (warning first if
        it has unsaved changes) and asks the loader for a new one.

        Raises:
            LoadError: No loader is configured or it produced nothing.
            Exception: Whatever the loader raised, unchanged.
        """
        document_name, _ = split_first(object_path)
        if not document_name:
            return self._report_addressing(
                DiagnosticCode.INVALID_DOCUMENT_NAME,
                f"Invalid document path '{object_path}'",
                object_path,
                document_name,
            )

        in_flight = self._loads_in_flight.get(document_name)
        if in_flight is not None:
            return await asyncio.shield(in_flight)

        existing = self.document_lookup.get(document_name)
        if existing is not None and not force_reload:
            return existing

        loader = self._require_loader(document_name)
        if existing is not None:
            # drop it from the caches since it will be back in a moment
            if existing.is_dirty:
                self._report_discarded(existing)
            self.documents.remove(document_name)

        return await self._load(loader, document_name, existing)

    def _require_loader(self, document_name: str) -> "PersistenceLoader":
        loader = self.ctx.loader if self.ctx else None
        if loader is None:
            raise LoadError(
                f"No persistence loader available for '{document_name}'",
                object_ref=f"{self.at_corpus_path}{document_name}",
                document_name=document_name,
                folder_path=self.folder_path,
            )
        return loader

    async def _load(
        self,
        loader: "PersistenceLoader",
        document_name: str,
        existing: Optional[Document],
    ) -> Document:
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._loads_in_flight[document_name] = future
        try:
            document = await loader.load_document(self, document_name, existing)
            if document is None:
                raise LoadError(
                    f"Could not load document '{document_name}'",
                    object_ref=f"{self.at_corpus_path}{document_name}",
                    document_name=document_name,
                    folder_path=self.folder_path,
                )
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # retrieved here so an unawaited future does not warn; waiters still raise
            future.exception()
            raise
        else:
            future.set_result(document)
            logger.debug(f"Loaded document: {document.at_corpus_path}")
            return document
        finally:
            self._loads_in_flight.pop(document_name, None)

    @property
    def loads_in_flight(self) -> List[str]:
        """Names of documents currently being loaded."""
        return list(self._loads_in_flight)

    # -----------------------------------------------------------------------
    # Diagnostics
    # -----------------------------------------------------------------------

    def _report_addressing(
        self,
        code: DiagnosticCode,
        message: str,
        path: str,
        segment: Optional[str] = None,
    ) -> None:
        correlation_id = self.ctx.correlation_id if self.ctx else None
        error = AddressingError(
            message,
            path=path,
            segment=segment,
            object_ref=self.at_corpus_path,
            correlation_id=correlation_id,
        )
        if self.ctx is None:
            logger.error(message)
            return None
        self.ctx.diagnostics.error(
            "Folder", code, message, object_ref=self.at_corpus_path, error=error
        )
        return None

    def _report_discarded(self, document: Document) -> None:
        message = f"discarding changes in document: {document.name}"
        if self.ctx is None:
            logger.warning(message)
            return
        self.ctx.diagnostics.warning(
            "Folder",
            DiagnosticCode.DISCARDING_CHANGES,
            message,
            object_ref=document.at_corpus_path,
            document_name=document.name,
        )

    def __repr__(self) -> str:
        return f"<Folder {self.at_corpus_path}>"
