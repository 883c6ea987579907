"""Run identity for audit records."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from snowball.config.loader import compute_config_hash, serialize_config
from snowball.config.models import RunConfig, RunMode


@dataclass(frozen=True)
class RunContext:
    run_id: str
    mode: RunMode
    config_hash: str
    started_at: datetime
    config_path: Optional[Path] = None


def hash_run_config(config: RunConfig) -> str:
    canonical = json.dumps(serialize_config(config), sort_keys=True)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def create_run_context(
    config: RunConfig,
    config_path: Optional[str | Path] = None,
    run_id: Optional[str] = None,
) -> RunContext:
    """Identify a run by its config file hash, or by the config itself when in memory."""
    path = Path(config_path) if config_path is not None else None
    config_hash = compute_config_hash(path) if path is not None else hash_run_config(config)
    started_at = datetime.now(timezone.utc)
    if run_id is None:
        stamp = started_at.strftime("%Y%m%dT%H%M%SZ")
        run_id = f"{config.run_id_prefix}-{config.mode.value}-{stamp}-{config_hash[:8]}"
    return RunContext(
        run_id=run_id,
        mode=config.mode,
        config_hash=config_hash,
        started_at=started_at,
        config_path=path,
    )
