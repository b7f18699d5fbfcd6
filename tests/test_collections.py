"""Unit tests for schemacorpus.documents.collections and the Document model."""

import pytest

from schemacorpus.documents.folder import Folder
from schemacorpus.documents.models import Document
from schemacorpus.engine.errors import NameConflictError


class TestDocumentCollection:
    def setup_method(self):
        self.folder = Folder("root", namespace="adls")

    def test_append_updates_list_and_lookup(self):
        doc = self.folder.documents.append(Document(name="a.json"))
        assert list(self.folder.documents) == [doc]
        assert self.folder.document_lookup == {"a.json": doc}
        assert doc.folder is self.folder

    def test_remove_updates_list_and_lookup(self):
        a = self.folder.documents.append(Document(name="a.json"))
        b = self.folder.documents.append(Document(name="b.json"))
        removed = self.folder.documents.remove("a.json")
        assert removed is a
        assert list(self.folder.documents) == [b]
        assert list(self.folder.document_lookup) == ["b.json"]
        assert a.folder is None

    def test_remove_missing(self):
        assert self.folder.documents.remove("nope") is None

    def test_duplicate_name_rejected(self):
        self.folder.documents.append(Document(name="a.json"))
        with pytest.raises(NameConflictError):
            self.folder.documents.append(Document(name="a.json"))
        assert len(self.folder.documents) == 1

    def test_names_case_sensitive(self):
        self.folder.documents.append(Document(name="a.json"))
        self.folder.documents.append(Document(name="A.json"))
        assert len(self.folder.documents) == 2
        assert "A.json" in self.folder.documents
        assert self.folder.documents.get("a.JSON") is None

    def test_moving_document_detaches_from_previous_folder(self):
        other = Folder("other")
        doc = self.folder.documents.append(Document(name="a.json"))
        other.documents.append(doc)
        assert "a.json" not in self.folder.document_lookup
        assert len(self.folder.documents) == 0
        assert doc.folder is other


class TestFolderCollection:
    def test_append_by_name(self):
        root = Folder("root")
        child = root.child_folders.append("Child")
        assert child.parent is root
        assert root.child_folders[0] is child

    def test_append_folder_already_owned(self):
        root = Folder("root")
        other = Folder("other")
        child = root.child_folders.append("child")
        with pytest.raises(ValueError):
            other.child_folders.append(child)

    def test_find_first_match(self):
        root = Folder("root")
        a = root.child_folders.append("a")
        root.child_folders.append("b")
        assert root.child_folders.find("A") is a
        assert root.child_folders.find("c") is None


class TestDocument:
    def test_defaults(self):
        doc = Document(name="a.json")
        assert doc.is_dirty is False
        assert doc.content is None
        assert doc.folder is None

    def test_name_required(self):
        with pytest.raises(ValueError):
            Document(name="")

    def test_mark_dirty(self):
        doc = Document(name="a.json")
        doc.mark_dirty()
        assert doc.is_dirty is True

    def test_corpus_path(self):
        root = Folder("", namespace="adls")
        folder = root.resolve_folder("/models/", create_missing=True)
        doc = folder.documents.append(Document(name="a.json"))
        assert doc.at_corpus_path == "adls:/models/a.json"

    def test_detached_corpus_path(self):
        assert Document(name="a.json").at_corpus_path == "NULL:/a.json"

    def test_folder_not_serialized(self):
        folder = Folder("root")
        doc = folder.documents.append(Document(name="a.json", content={"k": 1}))
        assert doc.model_dump() == {"name": "a.json", "is_dirty": False, "content": {"k": 1}}
