"""Structured logging utilities."""

from .audit import AuditEvent, JsonlAuditLogger, summarize_query, utc_timestamp

__all__ = ["AuditEvent", "JsonlAuditLogger", "summarize_query", "utc_timestamp"]
