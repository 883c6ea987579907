"""Execute configured runs with audit records."""

from __future__ import annotations

import logging
import random
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

from snowball.config.loader import json_safe, serialize_params
from snowball.config.models import RunConfig
from snowball.data.loader import load_series
from snowball.data.models import HistoricalSeries
from snowball.export.csv_export import write_timeline_csv
from snowball.monitoring.audit import AuditLog
from snowball.simulator.dispatch import run
from snowball.simulator.errors import SimulatorError
from snowball.simulator.models import RunResult

logger = logging.getLogger(__name__)


def summary_payload(result: RunResult) -> dict[str, Any]:
    payload = json_safe(asdict(result.summary))
    payload["mode"] = result.mode.value
    payload["periods"] = len(result.timeline)
    return payload


def resolve_series(config: RunConfig, base_dir: Optional[Path] = None) -> Optional[HistoricalSeries]:
    if config.series_path is None:
        return None
    path = Path(config.series_path)
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return load_series(path)


def execute_run(
    config: RunConfig,
    series: Optional[HistoricalSeries] = None,
    audit: Optional[AuditLog] = None,
    rng: Optional[random.Random] = None,
) -> RunResult:
    """Run the configured mode, recording start, completion or failure.

    Failures are logged and re-raised unchanged.
    """
    if audit is not None:
        audit.log(
            "run_started",
            {
                "name": config.name,
                "mode": config.mode.value,
                "series": series.name if series is not None else None,
                "params": serialize_params(config.params),
            },
        )

    try:
        result = run(config.mode, config.params, series=series, rng=rng)
    except SimulatorError as exc:
        logger.warning("%s run failed: %s", config.mode.value, exc)
        if audit is not None:
            audit.log("run_failed", {"error": type(exc).__name__, "message": str(exc)})
        raise

    payload = summary_payload(result)
    if config.export.csv_path is not None:
        csv_path = write_timeline_csv(result, config.export.csv_path)
        payload["csv_path"] = str(csv_path)
        logger.info("Wrote %s timeline rows to %s", len(result.timeline), csv_path)

    if audit is not None:
        audit.log("run_completed", payload)
    logger.info("%s run completed (%s periods)", config.mode.value, len(result.timeline))
    return result
