"""Sealbox: a self-hosted secret storage service with a SQLite-backed HTTP API."""

__version__ = "0.1.0"