"""Unit tests for schemacorpus.engine.config — CorpusConfig and loading."""

import pytest

from schemacorpus.engine.config import (
    CorpusConfig,
    LoggingConfig,
    NamespaceConfig,
    get_corpus_config,
    load_corpus_config,
)


class TestCorpusConfig:
    """Test CorpusConfig Pydantic model."""

    def test_defaults(self):
        cfg = CorpusConfig()
        assert cfg.name == "Schema Corpus"
        assert cfg.default_namespace is None
        assert cfg.namespaces == []
        assert cfg.logging.level == "INFO"
        assert cfg.logging.file_logging is False
        assert cfg.logging.async_queue.flush_batch_size == 50

    def test_namespace_shorthand(self):
        cfg = CorpusConfig(namespaces=["local", {"name": "adls", "root_name": "root"}])
        assert [ns.name for ns in cfg.namespaces] == ["local", "adls"]
        assert cfg.namespace("adls").root_name == "root"
        assert cfg.namespace("local").root_name == ""
        assert cfg.namespace("missing") is None

    @pytest.mark.parametrize("bad", ["", "a:b", "a/b"])
    def test_invalid_namespace_name(self, bad):
        with pytest.raises(ValueError, match="invalid namespace"):
            NamespaceConfig(name=bad)

    def test_duplicate_namespace(self):
        with pytest.raises(ValueError, match="duplicate"):
            CorpusConfig(namespaces=["local", "local"])

    def test_default_namespace_must_be_listed(self):
        with pytest.raises(ValueError, match="default_namespace"):
            CorpusConfig(default_namespace="adls", namespaces=["local"])

    def test_default_namespace_without_list(self):
        cfg = CorpusConfig(default_namespace="adls")
        assert cfg.default_namespace == "adls"

    def test_logging_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_logging_level(self):
        with pytest.raises(ValueError, match="logging level"):
            LoggingConfig(level="chatty")


class TestLoadCorpusConfig:
    def test_load_explicit_path(self, project_root):
        cfg = load_corpus_config(str(project_root / "corpus.yaml"))
        assert cfg.name == "TestCorpus"
        assert cfg.default_namespace == "local"
        assert [ns.name for ns in cfg.namespaces] == ["local", "adls"]
        assert cfg.namespace("adls").root_name == "root"
        assert cfg.logging.level == "DEBUG"
        assert cfg.logging.directory == "logs"

    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = load_corpus_config(str(tmp_path / "nope.yaml"))
        assert cfg == CorpusConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "corpus.yaml"
        path.write_text("", encoding="utf-8")
        assert load_corpus_config(str(path)).name == "Schema Corpus"

    def test_auto_discovery(self, project_root, monkeypatch):
        nested = project_root / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert load_corpus_config().name == "TestCorpus"

    def test_get_caches(self, project_root, monkeypatch):
        monkeypatch.chdir(project_root)
        first = get_corpus_config()
        assert get_corpus_config() is first
