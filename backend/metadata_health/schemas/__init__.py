"""Pydantic models for snapshot records and response envelopes."""
