"""
SchemaCorpus Error Hierarchy — Structured exceptions for corpus addressing and loading.

All errors carry the corpus path they concern (object_ref) and the
correlation id of the corpus context that produced them, and serialize to
JSON for the structured log files.

Hierarchy:
    CorpusError
    ├── AddressingError        — Path does not address a folder in the tree
    ├── LoadError              — Persistence loader could not produce a document
    ├── NameConflictError      — Name already taken by a sibling folder or document
    └── CorpusConfigError      — Invalid corpus.yaml or namespace configuration

Addressing errors are reported to the diagnostic sink by the resolution
operations and surfaced as ``None``; load errors propagate to the caller.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class CorpusError(Exception):
    """
    Base error for all corpus failures.
    All context is serializable to JSON.
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.correlation_id: Optional[str] = context.get("correlation_id")
        self.object_ref: Optional[str] = context.get("object_ref")
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to JSON-compatible dict for logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "correlation_id": self.correlation_id,
            "object_ref": self.object_ref,
            "timestamp": self.timestamp,
            "context": {
                k: str(v) for k, v in self.context.items()
                if k not in ("correlation_id", "object_ref")
            },
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        if self.object_ref:
            parts.append(f"object_ref={self.object_ref}")
        if self.correlation_id:
            parts.append(f"correlation_id={self.correlation_id}")
        return " | ".join(parts)


class AddressingError(CorpusError):
    """
    A path segment does not match the expected folder, or a folder is
    missing and creation was not requested.
    """

    def __init__(self, message: str, **context: Any):
        self.path: Optional[str] = context.get("path")
        self.segment: Optional[str] = context.get("segment")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["path"] = self.path
        d["segment"] = self.segment
        return d


class LoadError(CorpusError):
    """The persistence loader could not produce a document."""

    def __init__(self, message: str, **context: Any):
        self.document_name: Optional[str] = context.get("document_name")
        self.folder_path: Optional[str] = context.get("folder_path")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["document_name"] = self.document_name
        d["folder_path"] = self.folder_path
        return d


class NameConflictError(CorpusError):
    """A sibling folder or document already uses the name."""
    pass


class CorpusConfigError(CorpusError):
    """Configuration error — invalid corpus.yaml or namespace mount."""
    pass
