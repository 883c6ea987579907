"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Optional


class RunMode(str, Enum):
    BACKTEST = "backtest"
    FORECAST = "forecast"
    SIMULATION = "simulation"


class DipBuyStrategy(str, Enum):
    NONE = "none"
    RSI = "rsi"


class ContributionBasis(str, Enum):
    ACTUAL = "actual"
    FLAT = "flat"


@dataclass(frozen=True)
class InvestmentPhase:
    months: int
    amount: float


@dataclass(frozen=True)
class SimulationParams:
    initial_capital: float = 100000.0
    monthly_investment: float = 10000.0
    years: int = 10
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    annual_return: float = 0.07
    commission_rate: float = 0.001425
    tax_rate: float = 0.003
    reinvest_dividends: bool = True
    dip_buy_strategy: DipBuyStrategy = DipBuyStrategy.NONE
    dip_buy_multiplier: float = 2.0
    rsi_threshold: float = 30.0
    rsi_period: int = 14
    use_phases: bool = False
    investment_phases: tuple[InvestmentPhase, ...] = ()
    monte_carlo_runs: int = 1000
    risk_free_rate: float = 0.02
    sharpe_basis: ContributionBasis = ContributionBasis.ACTUAL
    seed: Optional[int] = None
    anchor_date: Optional[date] = None
    target_asset: Optional[float] = None
    workers: int = 1

    @property
    def months(self) -> int:
        return self.years * 12

    def has_date_window(self) -> bool:
        return self.start_date is not None or self.end_date is not None


def default_params(**overrides: Any) -> SimulationParams:
    """Return a fresh parameter set with the given fields replaced."""
    return replace(SimulationParams(), **overrides)


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"


@dataclass(frozen=True)
class ExportConfig:
    csv_path: Optional[str] = None


@dataclass(frozen=True)
class RunConfig:
    name: str
    version: str
    run_id_prefix: str
    mode: RunMode
    params: SimulationParams
    series_path: Optional[str] = None
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
