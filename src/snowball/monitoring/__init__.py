"""Monitoring exports."""

from snowball.monitoring.audit import AuditLog

__all__ = ["AuditLog"]
