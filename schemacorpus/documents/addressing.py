"""Canonical corpus path computation for folders."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemacorpus.documents.paths import NAMESPACE_SEPARATOR

if TYPE_CHECKING:
    from schemacorpus.documents.folder import Folder

# Prefix for folders that sit outside any mounted adapter
UNADDRESSABLE_PREFIX = "NULL:/"


def corpus_path(node: "Folder") -> str:
    """
    ``namespace:folder_path`` for mounted folders, ``NULL:/folder_path`` otherwise.

    Computed from the live tree on every call.
    """
    namespace = node.effective_namespace
    if not namespace:
        return f"{UNADDRESSABLE_PREFIX}{node.folder_path}"
    return f"{namespace}{NAMESPACE_SEPARATOR}{node.folder_path}"
