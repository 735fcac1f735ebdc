"""Snapshot-backed services: loading, indexing, merging and querying."""
