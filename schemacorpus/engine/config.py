"""
SchemaCorpus Configuration — Load and validate corpus.yaml.

Usage:
    from schemacorpus.engine.config import load_corpus_config, get_corpus_config

Example corpus.yaml:

    corpus:
      name: Sales Schemas
    default_namespace: local
    namespaces:
      - local
      - name: adls
        root_name: ""
    logging:
      level: INFO
      directory: .corpus/logs
      file_logging: true
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

CONFIG_FILE_NAME = "corpus.yaml"


def validate_namespace_name(name: str) -> str:
    """Namespaces are non-empty and may not contain ':' or '/'."""
    if not name or ":" in name or "/" in name:
        raise ValueError(f"invalid namespace '{name}': must be non-empty without ':' or '/'")
    return name


# ---------------------------------------------------------------------------
# Pydantic models for corpus.yaml
# ---------------------------------------------------------------------------

class NamespaceConfig(BaseModel):
    name: str
    root_name: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_namespace_name(v)


class LogAsyncQueueConfig(BaseModel):
    flush_interval_ms: int = 100
    flush_batch_size: int = 50
    max_queue_size: int = 10000


class LoggingConfig(BaseModel):
    level: str = "INFO"
    directory: str = ".corpus/logs"
    file_logging: bool = False
    async_queue: LogAsyncQueueConfig = LogAsyncQueueConfig()

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"level must be a logging level name, got '{v}'")
        return v


class CorpusConfig(BaseModel):
    """Root model for corpus.yaml."""
    name: str = "Schema Corpus"
    default_namespace: Optional[str] = None
    namespaces: List[NamespaceConfig] = Field(default_factory=list)
    logging: LoggingConfig = LoggingConfig()

    @field_validator("namespaces", mode="before")
    @classmethod
    def expand_namespace_names(cls, v):
        # "- local" is shorthand for "- name: local"
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v

    @model_validator(mode="after")
    def validate_namespaces(self) -> "CorpusConfig":
        names = [ns.name for ns in self.namespaces]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate namespace in {names}")
        if self.default_namespace and names and self.default_namespace not in names:
            raise ValueError(
                f"default_namespace '{self.default_namespace}' is not one of {names}"
            )
        return self

    def namespace(self, name: str) -> Optional[NamespaceConfig]:
        """Return the configuration of a namespace, if listed."""
        for ns in self.namespaces:
            if ns.name == name:
                return ns
        return None


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

_corpus_config: Optional[CorpusConfig] = None


def _find_project_root() -> Path:
    """Find the project root by looking for corpus.yaml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILE_NAME).exists():
            return parent
    return current


def load_corpus_config(config_path: Optional[str] = None) -> CorpusConfig:
    """
    Load and validate corpus.yaml.

    Args:
        config_path: Explicit path to corpus.yaml. If None, auto-discovers.

    Returns:
        Validated CorpusConfig instance.
    """
    global _corpus_config

    if config_path is None:
        root = _find_project_root()
        config_path = str(root / CONFIG_FILE_NAME)

    path = Path(config_path)
    if not path.exists():
        # Return defaults if no config file
        _corpus_config = CorpusConfig()
        return _corpus_config

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    # Flatten the top-level "corpus" key if present
    corpus_data = raw.get("corpus", {})
    config_data = {
        "name": corpus_data.get("name", raw.get("name", "Schema Corpus")),
        "default_namespace": corpus_data.get(
            "default_namespace", raw.get("default_namespace")
        ),
        "namespaces": raw.get("namespaces", []),
        "logging": raw.get("logging", {}),
    }

    _corpus_config = CorpusConfig(**config_data)
    return _corpus_config


def get_corpus_config() -> CorpusConfig:
    """Get the currently loaded corpus config, loading if necessary."""
    global _corpus_config
    if _corpus_config is None:
        _corpus_config = load_corpus_config()
    return _corpus_config
