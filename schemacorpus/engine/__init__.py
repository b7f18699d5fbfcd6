"""SchemaCorpus Engine — Corpus facade, config, diagnostics, logging, errors."""
