"""Tab, history and settings storage, standard paths, OpenSearch discovery and backup helpers for a mobile web browser."""

__version__ = "0.1.0"