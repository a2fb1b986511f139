"""Shared utilities: configuration, logging, schemas, HTTP, storage."""
