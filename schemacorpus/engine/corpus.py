"""
SchemaCorpus Corpus — Namespace mounts and corpus-path entry points.

A Corpus owns one root Folder per mounted namespace and the context shared
by every folder of those trees (persistence loader, diagnostic sink).

Lifecycle:
    corpus = Corpus(loader=my_loader, config=load_corpus_config())
    corpus.startup()                         # structured file logging, if enabled
    corpus.mount("adls", adls_adapter)
    doc = await corpus.fetch_document("adls:/models/entity.cdm.json")
    corpus.shutdown()                        # flush logs
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from schemacorpus.documents.folder import Folder
from schemacorpus.documents.loader import PersistenceLoader, StorageAdapter
from schemacorpus.documents.models import Document
from schemacorpus.documents.paths import (
    NAMESPACE_SEPARATOR,
    SEPARATOR,
    split_namespace_path,
)
from schemacorpus.engine.config import CorpusConfig, validate_namespace_name
from schemacorpus.engine.context import CorpusContext
from schemacorpus.engine.diagnostics import DiagnosticCode, DiagnosticSink
from schemacorpus.engine.errors import AddressingError, CorpusConfigError
from schemacorpus.engine.logging import AsyncLogQueue, FileLogger, log_corpus_event

logger = logging.getLogger("schemacorpus.engine.corpus")


class Corpus:
    """
    Entry point for addressing folders and documents by corpus path.

    Corpus paths have the form ``namespace:/folder/.../document``. Paths
    without a namespace use the configured default namespace.
    """

    def __init__(
        self,
        loader: Optional[PersistenceLoader] = None,
        config: Optional[CorpusConfig] = None,
    ):
        self.config = config or CorpusConfig()
        self.ctx = CorpusContext(loader=loader, diagnostics=DiagnosticSink(), corpus=self)
        self.log_queue: Optional[AsyncLogQueue] = None
        self.default_namespace: Optional[str] = self.config.default_namespace

        self._roots: Dict[str, Folder] = {}
        self._adapters: Dict[str, StorageAdapter] = {}
        self._started = False

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def diagnostics(self) -> DiagnosticSink:
        return self.ctx.diagnostics

    @property
    def loader(self) -> Optional[PersistenceLoader]:
        return self.ctx.loader

    @loader.setter
    def loader(self, loader: Optional[PersistenceLoader]) -> None:
        self.ctx.loader = loader

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------

    def startup(self) -> None:
        """Apply the logging config and start the structured log pipeline."""
        if self._started:
            logger.warning("Corpus already started")
            return

        logging.getLogger("schemacorpus").setLevel(self.config.logging.level)

        if self.config.logging.file_logging:
            queue_cfg = self.config.logging.async_queue
            self.log_queue = AsyncLogQueue(
                file_logger=FileLogger(log_dir=self.config.logging.directory),
                flush_interval_ms=queue_cfg.flush_interval_ms,
                flush_batch_size=queue_cfg.flush_batch_size,
                max_queue_size=queue_cfg.max_queue_size,
            )
            self.log_queue.start()
            self.diagnostics.log_queue = self.log_queue
            self.log_queue.push(
                log_corpus_event(
                    "corpus_started",
                    details={"name": self.name, "namespaces": sorted(self._roots)},
                    correlation_id=self.ctx.correlation_id,
                )
            )

        self._started = True
        logger.info(f"Corpus '{self.name}' started")

    def shutdown(self) -> None:
        """Flush and stop the structured log pipeline."""
        if not self._started:
            return

        if self.log_queue is not None:
            self.log_queue.push(
                log_corpus_event("corpus_shutdown", correlation_id=self.ctx.correlation_id)
            )
            self.log_queue.stop()
            self.diagnostics.log_queue = None
            self.log_queue = None

        self._started = False
        logger.info(f"Corpus '{self.name}' shut down")

    # -----------------------------------------------------------------------
    # Namespaces
    # -----------------------------------------------------------------------

    def mount(
        self,
        namespace: str,
        adapter: StorageAdapter,
        root_name: Optional[str] = None,
    ) -> Folder:
        """
        Attach a storage adapter under ``namespace`` and create its root folder.

        Remounting a namespace replaces its root, dropping the cached tree.

        Raises:
            CorpusConfigError: Invalid namespace name, or a namespace not
                listed in a configuration that lists namespaces.
        """
        try:
            validate_namespace_name(namespace)
        except ValueError as e:
            raise CorpusConfigError(str(e), namespace=namespace) from e

        ns_config = self.config.namespace(namespace)
        if self.config.namespaces and ns_config is None:
            raise CorpusConfigError(
                f"Namespace '{namespace}' is not configured",
                namespace=namespace,
                configured=[ns.name for ns in self.config.namespaces],
            )
        if root_name is None:
            root_name = ns_config.root_name if ns_config else ""

        root = Folder(root_name, ctx=self.ctx, namespace=namespace)
        self._roots[namespace] = root
        self._adapters[namespace] = adapter
        if self.default_namespace is None:
            self.default_namespace = namespace

        if self.log_queue is not None:
            self.log_queue.push(
                log_corpus_event(
                    "namespace_mounted",
                    details={"namespace": namespace, "adapter": type(adapter).__name__},
                    correlation_id=self.ctx.correlation_id,
                )
            )
        logger.info(f"Mounted namespace '{namespace}' ({type(adapter).__name__})")
        return root

    def unmount(self, namespace: str) -> bool:
        """Detach a namespace. Returns False when it was not mounted."""
        if namespace not in self._roots:
            return False
        del self._roots[namespace]
        del self._adapters[namespace]
        if self.default_namespace == namespace:
            self.default_namespace = self.config.default_namespace
        logger.info(f"Unmounted namespace '{namespace}'")
        return True

    @property
    def namespaces(self) -> Tuple[str, ...]:
        return tuple(self._roots)

    def fetch_adapter(self, namespace: Optional[str] = None) -> Optional[StorageAdapter]:
        return self._adapters.get(namespace or self.default_namespace or "")

    def fetch_root_folder(self, namespace: Optional[str] = None) -> Optional[Folder]:
        """Root folder of a namespace (default namespace when omitted)."""
        namespace = namespace or self.default_namespace
        root = self._roots.get(namespace) if namespace else None
        if root is None:
            message = f"Namespace '{namespace}' is not mounted"
            self.diagnostics.error(
                "Corpus",
                DiagnosticCode.NAMESPACE_NOT_MOUNTED,
                message,
                object_ref=f"{namespace}{NAMESPACE_SEPARATOR}",
                error=AddressingError(
                    message,
                    path=f"{namespace}{NAMESPACE_SEPARATOR}",
                    correlation_id=self.ctx.correlation_id,
                ),
            )
        return root

    # -----------------------------------------------------------------------
    # Corpus paths
    # -----------------------------------------------------------------------

    def create_absolute_corpus_path(
        self, path: str, relative_to: Optional[Folder] = None
    ) -> str:
        """
        Make ``path`` a fully qualified ``namespace:/...`` corpus path.

        Namespaced paths are kept. Rooted paths (``/a/b``) get the default
        namespace. Relative paths are resolved against ``relative_to``, or
        the default namespace root when no folder is given.
        """
        namespace, rest = split_namespace_path(path)
        if namespace:
            return path

        if rest.startswith(SEPARATOR) or relative_to is None:
            rooted = rest if rest.startswith(SEPARATOR) else f"{SEPARATOR}{rest}"
            if not self.default_namespace:
                return rooted
            return f"{self.default_namespace}{NAMESPACE_SEPARATOR}{rooted}"

        return f"{relative_to.at_corpus_path}{rest}"

    def _split(self, corpus_path: str) -> Tuple[Optional[Folder], str]:
        namespace, path = split_namespace_path(corpus_path)
        return self._locate(namespace, path)

    def _locate(self, namespace: Optional[str], path: str) -> Tuple[Optional[Folder], str]:
        root = self.fetch_root_folder(namespace)
        if root is None:
            return None, path

        # "/a/b", "a/b" and "<root>/a/b" all address a/b under the namespace root
        relative = path.lstrip(SEPARATOR)
        if root.name:
            root_prefix = f"{root.name}{SEPARATOR}"
            if relative.lower() == root.name.lower():
                relative = ""
            elif relative.lower().startswith(root_prefix.lower()):
                relative = relative[len(root_prefix):]
        return root, f"{root.folder_path}{relative}"

    def resolve_folder(
        self, corpus_path: str, create_missing: bool = False
    ) -> Optional[Folder]:
        """Folder addressed by a corpus path such as ``adls:/a/b/``."""
        root, path = self._split(corpus_path)
        if root is None:
            return None
        return root.resolve_folder(path, create_missing=create_missing)

    async def fetch_document(
        self, corpus_path: str, force_reload: bool = False
    ) -> Optional[Document]:
        """
        Document addressed by a corpus path such as ``adls:/a/b/doc.json``.

        Intermediate folders are created on demand once the path is known to
        name a document. Addressing failures return None (reported to
        diagnostics); load failures raise.
        """
        namespace, path = split_namespace_path(corpus_path)
        folder_part, _, document_name = path.rpartition(SEPARATOR)
        root, folder_path = self._locate(namespace, f"{folder_part}{SEPARATOR}")
        if root is None:
            return None

        if not document_name:
            message = f"Invalid document path '{corpus_path}'"
            self.diagnostics.error(
                "Corpus",
                DiagnosticCode.INVALID_DOCUMENT_NAME,
                message,
                object_ref=root.at_corpus_path,
                error=AddressingError(
                    message,
                    path=corpus_path,
                    segment=document_name,
                    correlation_id=self.ctx.correlation_id,
                ),
            )
            return None

        folder = root.resolve_folder(folder_path, create_missing=True)
        if folder is None:
            return None
        return await folder.resolve_document(document_name, force_reload=force_reload)

    def __repr__(self) -> str:
        return f"<Corpus '{self.name}' namespaces={list(self._roots)}>"
