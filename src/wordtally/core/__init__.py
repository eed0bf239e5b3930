"""Shared infrastructure: configuration, logging, events, storage and CLI."""
