"""
SchemaCorpus Context — Shared collaborators handed to every folder.

Folders hold a non-owning reference to this context. It is used to reach
the persistence loader and the diagnostic sink, never to reach sibling
folders or mutate corpus-wide state.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

from schemacorpus.engine.diagnostics import DiagnosticSink

if TYPE_CHECKING:
    from schemacorpus.documents.loader import PersistenceLoader
    from schemacorpus.engine.corpus import Corpus


@dataclass
class CorpusContext:
    """Collaborators shared by all folders of one corpus."""

    loader: Optional["PersistenceLoader"] = None
    diagnostics: DiagnosticSink = field(default_factory=DiagnosticSink)
    corpus: Optional["Corpus"] = None
    correlation_id: str = field(default_factory=lambda: f"corp_{uuid.uuid4().hex[:12]}")

    def __post_init__(self) -> None:
        if self.diagnostics.correlation_id is None:
            self.diagnostics.correlation_id = self.correlation_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logging."""
        return {
            "correlation_id": self.correlation_id,
            "loader": type(self.loader).__name__ if self.loader else None,
            "corpus": getattr(self.corpus, "name", None),
        }
