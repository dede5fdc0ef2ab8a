"""Image ingestion and file codecs."""
