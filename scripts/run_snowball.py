from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from snowball.config import freeze_config, load_config, verify_config_lock
from snowball.data import load_series, with_computed_stats
from snowball.monitoring import AuditLog
from snowball.runtime import create_run_context, execute_run, resolve_series, summary_payload
from snowball.simulator import SimulatorError


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--output", help="JSON report path")
    parser.add_argument("--series", help="Override the series file named in the config")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--freeze", action="store_true", help="Write the config lock file and exit")
    parser.add_argument(
        "--require-lock",
        action="store_true",
        help="Refuse to run unless the config matches its lock file",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    config = load_config(config_path)
    if args.freeze:
        lock_path = freeze_config(config_path)
        print(f"Frozen {config.name} ({config.mode.value}) -> {lock_path}")
        return
    if args.require_lock and not verify_config_lock(config_path):
        raise SystemExit(f"{config_path} does not match its lock file; re-freeze with --freeze")

    context = create_run_context(config, config_path)
    audit = AuditLog(config.monitoring.audit_log_path, run_id=context.run_id, config_hash=context.config_hash)

    if args.series:
        series = load_series(args.series)
    else:
        series = resolve_series(config)
    if series is not None:
        series = with_computed_stats(series)

    try:
        result = execute_run(config, series=series, audit=audit)
    except SimulatorError as exc:
        raise SystemExit(f"Run {context.run_id} failed: {exc}") from exc

    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "run_id": context.run_id,
        "config_path": str(config_path),
        "summary": summary_payload(result),
    }
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
        print(f"Wrote {output_path}")
    else:
        print(json.dumps(report, indent=2, default=str))


if __name__ == "__main__":
    main()
