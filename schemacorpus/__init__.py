"""
SchemaCorpus — Namespace-rooted folder tree and document cache for schema artifacts.

    from schemacorpus import Corpus, PersistenceLoader

Folders are addressed by corpus path (``namespace:/a/b/``), created on
demand, and cache the documents loaded from them by name.
"""

__version__ = "1.0.0"

from schemacorpus.documents import Document, Folder, PersistenceLoader, StorageAdapter  # noqa: E402
from schemacorpus.engine.corpus import Corpus  # noqa: E402
from schemacorpus.engine.errors import (  # noqa: E402
    AddressingError,
    CorpusConfigError,
    CorpusError,
    LoadError,
    NameConflictError,
)

__all__ = [
    "AddressingError",
    "Corpus",
    "CorpusConfigError",
    "CorpusError",
    "Document",
    "Folder",
    "LoadError",
    "NameConflictError",
    "PersistenceLoader",
    "StorageAdapter",
]
