"""Runtime context exports."""

from snowball.runtime.context import RunContext, create_run_context, hash_run_config
from snowball.runtime.service import execute_run, resolve_series, summary_payload

__all__ = [
    "RunContext",
    "create_run_context",
    "execute_run",
    "hash_run_config",
    "resolve_series",
    "summary_payload",
]
