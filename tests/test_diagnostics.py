"""Unit tests for schemacorpus.engine.diagnostics and the corpus context."""

import logging
from unittest.mock import MagicMock

from schemacorpus.engine.context import CorpusContext
from schemacorpus.engine.diagnostics import (
    DiagnosticCode,
    DiagnosticLevel,
    DiagnosticSink,
)
from schemacorpus.engine.errors import AddressingError


class TestDiagnosticSink:
    def test_error_recorded(self):
        sink = DiagnosticSink()
        err = AddressingError("Invalid path 'x'", path="x")
        event = sink.error("Folder", DiagnosticCode.INVALID_PATH, "Invalid path 'x'", error=err)
        assert sink.errors == [event]
        assert sink.warnings == []
        assert event.level == DiagnosticLevel.ERROR
        assert event.error is err

    def test_warning_recorded(self):
        sink = DiagnosticSink()
        sink.warning("Folder", DiagnosticCode.DISCARDING_CHANGES, "discarding")
        assert len(sink.warnings) == 1
        assert sink.errors == []

    def test_events_in_order_and_clear(self):
        sink = DiagnosticSink()
        sink.warning("Folder", DiagnosticCode.DISCARDING_CHANGES, "w")
        sink.error("Corpus", DiagnosticCode.NAMESPACE_NOT_MOUNTED, "e")
        assert [e.message for e in sink.events] == ["w", "e"]
        sink.clear()
        assert sink.events == []

    def test_mirrored_to_logger(self, caplog):
        sink = DiagnosticSink()
        with caplog.at_level(logging.WARNING, logger="schemacorpus.engine.diagnostics"):
            sink.error("Folder", DiagnosticCode.INVALID_PATH, "Invalid path 'x'")
            sink.warning("Folder", DiagnosticCode.DISCARDING_CHANGES, "discarding changes")
        assert "Invalid path 'x'" in caplog.text
        assert "discarding changes" in caplog.text

    def test_pushes_to_log_queue(self):
        queue = MagicMock()
        sink = DiagnosticSink(log_queue=queue, correlation_id="corp_1")
        sink.error(
            "Folder",
            DiagnosticCode.FOLDER_NOT_FOUND,
            "missing",
            object_ref="adls:/",
            error=AddressingError("missing", path="/a/"),
        )
        sink.warning(
            "Folder",
            DiagnosticCode.DISCARDING_CHANGES,
            "discarding",
            object_ref="adls:/a.json",
            document_name="a.json",
        )
        first, second = [c.args[0] for c in queue.push.call_args_list]
        assert (first.object_type, first.category) == ("folders", "addressing")
        assert first.data["path"] == "/a/"
        assert first.data["correlation_id"] == "corp_1"
        assert (second.object_type, second.category) == ("documents", "cache")

    def test_event_to_dict(self):
        sink = DiagnosticSink()
        event = sink.error(
            "Folder",
            DiagnosticCode.INVALID_PATH,
            "bad",
            error=AddressingError("bad", path="x"),
        )
        d = event.to_dict()
        assert d["level"] == "error"
        assert d["code"] == "invalid_path"
        assert d["error"]["path"] == "x"


class TestCorpusContext:
    def test_correlation_id_shared_with_sink(self):
        ctx = CorpusContext()
        assert ctx.correlation_id.startswith("corp_")
        assert ctx.diagnostics.correlation_id == ctx.correlation_id

    def test_to_dict(self, loader):
        d = CorpusContext(loader=loader).to_dict()
        assert d["loader"] == "FakeLoader"
        assert d["corpus"] is None
