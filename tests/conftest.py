"""
SchemaCorpus Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from schemacorpus.documents.folder import Folder
from schemacorpus.documents.loader import PersistenceLoader, StorageAdapter
from schemacorpus.documents.models import Document
from schemacorpus.engine.context import CorpusContext
from schemacorpus.engine.corpus import Corpus


class FakeLoader(PersistenceLoader):
    """
    In-memory loader: content comes from a dict keyed by document name.

    ``gate`` (an asyncio.Event) holds every load until set, to keep loads
    in flight. ``fail_with`` makes the next loads raise.
    """

    def __init__(self, contents: Optional[Dict[str, Any]] = None):
        self.contents = contents if contents is not None else {}
        self.calls: List[Dict[str, Any]] = []
        self.gate: Optional[asyncio.Event] = None
        self.fail_with: Optional[Exception] = None
        self.return_none = False

    async def load_document(self, folder, document_name, existing=None):
        self.calls.append(
            {"folder": folder, "name": document_name, "existing": existing}
        )
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        if self.return_none:
            return None
        document = Document(name=document_name, content=self.contents.get(document_name))
        return self.register(folder, document)


class FakeAdapter(StorageAdapter):
    def __init__(self, root: str = "/data"):
        self.root = root

    def create_adapter_path(self, corpus_path: str) -> str:
        return f"{self.root}{corpus_path}"

    async def read(self, corpus_path: str) -> str:
        return ""


@pytest.fixture(autouse=True)
def _isolate_config():
    """Reset global config singleton between tests."""
    import schemacorpus.engine.config as cfg_mod

    cfg_mod._corpus_config = None


@pytest.fixture
def loader():
    return FakeLoader({"entity.cdm.json": {"entity": "Customer"}})


@pytest.fixture
def ctx(loader):
    return CorpusContext(loader=loader)


@pytest.fixture
def root(ctx):
    """Unmounted root folder named 'root'."""
    return Folder("root", ctx=ctx)


@pytest.fixture
def adapter():
    return FakeAdapter()


@pytest.fixture
def corpus(loader, adapter):
    corpus = Corpus(loader=loader)
    corpus.mount("adls", adapter)
    return corpus


@pytest.fixture
def project_root(tmp_path):
    """A directory holding a corpus.yaml."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "corpus.yaml").write_text(
        "corpus:\n"
        "  name: TestCorpus\n"
        "default_namespace: local\n"
        "namespaces:\n"
        "  - local\n"
        "  - name: adls\n"
        "    root_name: root\n"
        "logging:\n"
        "  level: debug\n"
        "  directory: logs\n",
        encoding="utf-8",
    )
    return root
