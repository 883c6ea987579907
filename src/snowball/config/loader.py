"""Load and freeze run configuration files."""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import asdict, fields
from datetime import date, datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

from snowball.config.models import (
    ContributionBasis,
    DipBuyStrategy,
    ExportConfig,
    InvestmentPhase,
    MonitoringConfig,
    RunConfig,
    RunMode,
    SimulationParams,
)
from snowball.simulator.errors import InvalidParameterError

logger = logging.getLogger(__name__)

# option names used by the dashboard front end
CAMEL_CASE_ALIASES = {
    "initialCapital": "initial_capital",
    "monthlyInvestment": "monthly_investment",
    "startDate": "start_date",
    "endDate": "end_date",
    "annualReturn": "annual_return",
    "commissionRate": "commission_rate",
    "taxRate": "tax_rate",
    "reinvestDividends": "reinvest_dividends",
    "dipBuyStrategy": "dip_buy_strategy",
    "dipBuyMultiplier": "dip_buy_multiplier",
    "rsiThreshold": "rsi_threshold",
    "rsiPeriod": "rsi_period",
    "usePhases": "use_phases",
    "investmentPhases": "investment_phases",
    "monteCarloRuns": "monte_carlo_runs",
    "riskFreeRate": "risk_free_rate",
    "sharpeBasis": "sharpe_basis",
    "anchorDate": "anchor_date",
    "targetAsset": "target_asset",
}

_PARAM_FIELDS = {item.name for item in fields(SimulationParams)}


def load_config(path: str | Path) -> RunConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = _require(data, "name")
    version = str(_require(data, "version"))
    run_id_prefix = data.get("run_id_prefix", name)
    mode = _parse_enum(RunMode, _require(data, "mode"), "mode")
    params = params_from_mapping(data.get("params", {}) or {})
    monitoring = _parse_monitoring(data.get("monitoring", {}) or {})
    export = _parse_export(data.get("export", {}) or {})

    series_path = data.get("series")
    if series_path is not None:
        series_path = str(series_path)
    logger.debug("Loaded %s config %s (mode=%s)", name, path, mode.value)

    return RunConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        mode=mode,
        params=params,
        series_path=series_path,
        monitoring=monitoring,
        export=export,
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    path = Path(path)
    config_hash = compute_config_hash(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)

    payload = {
        "config_path": str(path),
        "config_hash": config_hash,
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)
    if not lock_path.exists():
        return False
    payload = json.loads(lock_path.read_text(encoding="utf-8"))
    expected = payload.get("config_hash")
    return expected == compute_config_hash(path)


def params_from_mapping(data: dict[str, Any]) -> SimulationParams:
    """Build parameters from snake_case or camelCase option names."""
    values: dict[str, Any] = {}
    for key, raw in data.items():
        name = CAMEL_CASE_ALIASES.get(key, key)
        if name not in _PARAM_FIELDS:
            raise InvalidParameterError(f"Unknown parameter: {key}")
        values[name] = _coerce_param(name, raw)
    return SimulationParams(**values)


def serialize_config(config: RunConfig) -> dict[str, Any]:
    return json_safe(asdict(config))


def serialize_params(params: SimulationParams) -> dict[str, Any]:
    return json_safe(asdict(params))


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _parse_enum(enum_cls, value: Any, key: str):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidParameterError(f"Invalid {key}: {value}") from exc


_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise InvalidParameterError(f"Invalid {key}: {value!r}")


def _parse_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise InvalidParameterError(f"Invalid {key}: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidParameterError(f"{key} must be a whole number, got {value}")
    return int(value)


def _parse_date(value: Any, key: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise InvalidParameterError(f"Invalid {key}: {value}") from exc


def _parse_phases(value: Any) -> tuple[InvestmentPhase, ...]:
    if value is None:
        return ()
    phases = []
    for item in value:
        if isinstance(item, InvestmentPhase):
            phases.append(item)
            continue
        try:
            phases.append(InvestmentPhase(months=_parse_int(item["months"], "phase months"), amount=float(item["amount"])))
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidParameterError(f"Invalid investment phase: {item}") from exc
    return tuple(phases)


def _coerce_param(name: str, value: Any) -> Any:
    def optional_float(raw: Any) -> Optional[float]:
        if raw is None:
            return None
        return float(raw)

    def optional_int(raw: Any) -> Optional[int]:
        if raw is None:
            return None
        return _parse_int(raw, name)

    try:
        if name in {"start_date", "end_date", "anchor_date"}:
            return _parse_date(value, name)
        if name == "investment_phases":
            return _parse_phases(value)
        if name == "dip_buy_strategy":
            return _parse_enum(DipBuyStrategy, value, name)
        if name == "sharpe_basis":
            return _parse_enum(ContributionBasis, value, name)
        if name in {"reinvest_dividends", "use_phases"}:
            return _parse_bool(value, name)
        if name in {"years", "rsi_period", "monte_carlo_runs", "workers"}:
            return _parse_int(value, name)
        if name == "seed":
            return optional_int(value)
        if name == "target_asset":
            return optional_float(value)
        return float(value)
    except (TypeError, ValueError) as exc:
        if isinstance(exc, InvalidParameterError):
            raise
        raise InvalidParameterError(f"Invalid {name}: {value}") from exc


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")),
    )


def _parse_export(data: dict[str, Any]) -> ExportConfig:
    csv_path = data.get("csv_path")
    return ExportConfig(csv_path=str(csv_path) if csv_path is not None else None)


def json_safe(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    return value
