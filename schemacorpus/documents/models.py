"""
SchemaCorpus Document Model — cached document handle.

A Document is produced by the persistence loader on first successful load
and replaced, never mutated in place, on forced reload. Its content is
opaque to the folder tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from schemacorpus.documents.addressing import UNADDRESSABLE_PREFIX

if TYPE_CHECKING:
    from schemacorpus.documents.folder import Folder

logger = logging.getLogger("schemacorpus.documents.models")


class Document(BaseModel):
    """
    Document handle cached by name in its owning Folder.

    The owning folder is set by DocumentCollection when the document is
    registered and cleared when it is removed.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(min_length=1, description="Document name, case-sensitive as authored")
    is_dirty: bool = Field(default=False, description="Has unsaved in-memory modifications")
    content: Any = Field(default=None, description="Opaque content owned by the document")

    _folder: Optional["Folder"] = PrivateAttr(default=None)

    @property
    def folder(self) -> Optional["Folder"]:
        return self._folder

    @property
    def at_corpus_path(self) -> str:
        if self._folder is None:
            return f"{UNADDRESSABLE_PREFIX}{self.name}"
        return f"{self._folder.at_corpus_path}{self.name}"

    def mark_dirty(self) -> None:
        self.is_dirty = True

    def __repr__(self) -> str:
        return f"<Document '{self.name}' dirty={self.is_dirty}>"
