"""
SchemaCorpus Folder & Document tree.

Folders address documents by path; documents are loaded once through a
PersistenceLoader and cached by name in their folder.
"""

from schemacorpus.documents.addressing import UNADDRESSABLE_PREFIX, corpus_path
from schemacorpus.documents.folder import Folder
from schemacorpus.documents.loader import PersistenceLoader, StorageAdapter
from schemacorpus.documents.models import Document

__all__ = [
    "Document",
    "Folder",
    "PersistenceLoader",
    "StorageAdapter",
    "UNADDRESSABLE_PREFIX",
    "corpus_path",
]
