"""
SchemaCorpus Diagnostics — Structured error/warning reporting for the folder tree.

The resolution operations never abort on addressing problems; they report
an event here and hand the caller ``None``. Two levels exist:

    error    — addressing failures (invalid path, missing folder, bad namespace)
    warning  — in-memory changes discarded by a forced document reload

Each event is kept in memory, mirrored to the module logger, and, when a
log queue is attached, written to the structured JSONL files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from schemacorpus.engine.errors import CorpusError
from schemacorpus.engine.logging import (
    AsyncLogQueue,
    log_addressing_error,
    log_discarded_changes,
)

logger = logging.getLogger("schemacorpus.engine.diagnostics")


class DiagnosticLevel(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(str, Enum):
    """What went wrong, for filtering and tests."""
    INVALID_PATH = "invalid_path"
    EMPTY_SEGMENT = "empty_segment"
    FOLDER_NOT_FOUND = "folder_not_found"
    INVALID_DOCUMENT_NAME = "invalid_document_name"
    NAMESPACE_NOT_MOUNTED = "namespace_not_mounted"
    DISCARDING_CHANGES = "discarding_changes"


@dataclass
class DiagnosticEvent:
    """One reported error or warning."""
    level: DiagnosticLevel
    code: DiagnosticCode
    source: str
    message: str
    object_ref: Optional[str] = None
    error: Optional[CorpusError] = None
    reported_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "level": self.level.value,
            "code": self.code.value,
            "source": self.source,
            "message": self.message,
            "object_ref": self.object_ref,
            "reported_at": self.reported_at.isoformat(),
        }
        if self.error is not None:
            d["error"] = self.error.to_dict()
        return d


class DiagnosticSink:
    """
    Collects diagnostic events for one corpus.

    Usage:
        sink = DiagnosticSink(log_queue=queue, correlation_id="corp_ab12")
        sink.error("Folder", DiagnosticCode.INVALID_PATH, "Invalid path 'x/'", error=err)
        assert sink.errors
    """

    def __init__(
        self,
        log_queue: Optional[AsyncLogQueue] = None,
        correlation_id: Optional[str] = None,
    ):
        self.log_queue = log_queue
        self.correlation_id = correlation_id
        self._events: List[DiagnosticEvent] = []

    def error(
        self,
        source: str,
        code: DiagnosticCode,
        message: str,
        object_ref: Optional[str] = None,
        error: Optional[CorpusError] = None,
    ) -> DiagnosticEvent:
        """Report an addressing failure."""
        event = DiagnosticEvent(
            level=DiagnosticLevel.ERROR,
            code=code,
            source=source,
            message=message,
            object_ref=object_ref,
            error=error,
        )
        self._events.append(event)
        logger.error(f"{source}: {message}")

        if self.log_queue is not None:
            path = getattr(error, "path", None) or ""
            self.log_queue.push(
                log_addressing_error(
                    object_type=_object_type_for(source),
                    object_ref=object_ref or "",
                    path=path,
                    code=code.value,
                    message=message,
                    correlation_id=self.correlation_id,
                )
            )
        return event

    def warning(
        self,
        source: str,
        code: DiagnosticCode,
        message: str,
        object_ref: Optional[str] = None,
        document_name: Optional[str] = None,
    ) -> DiagnosticEvent:
        """Report a non-fatal condition, such as discarded document changes."""
        event = DiagnosticEvent(
            level=DiagnosticLevel.WARNING,
            code=code,
            source=source,
            message=message,
            object_ref=object_ref,
        )
        self._events.append(event)
        logger.warning(f"{source}: {message}")

        if self.log_queue is not None and code == DiagnosticCode.DISCARDING_CHANGES:
            self.log_queue.push(
                log_discarded_changes(
                    object_ref=object_ref or "",
                    document_name=document_name or "",
                    correlation_id=self.correlation_id,
                )
            )
        return event

    @property
    def events(self) -> List[DiagnosticEvent]:
        return list(self._events)

    @property
    def errors(self) -> List[DiagnosticEvent]:
        return [e for e in self._events if e.level == DiagnosticLevel.ERROR]

    @property
    def warnings(self) -> List[DiagnosticEvent]:
        return [e for e in self._events if e.level == DiagnosticLevel.WARNING]

    def clear(self) -> None:
        self._events.clear()


def _object_type_for(source: str) -> str:
    return "folders" if source == "Folder" else "corpus"
