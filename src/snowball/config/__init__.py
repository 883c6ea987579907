"""Config loading and freezing."""

from snowball.config.models import (
    ContributionBasis,
    DipBuyStrategy,
    ExportConfig,
    InvestmentPhase,
    MonitoringConfig,
    RunConfig,
    RunMode,
    SimulationParams,
    default_params,
)
from snowball.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    params_from_mapping,
    serialize_config,
    serialize_params,
    verify_config_lock,
)

__all__ = [
    "ContributionBasis",
    "DipBuyStrategy",
    "ExportConfig",
    "InvestmentPhase",
    "MonitoringConfig",
    "RunConfig",
    "RunMode",
    "SimulationParams",
    "compute_config_hash",
    "default_params",
    "freeze_config",
    "load_config",
    "params_from_mapping",
    "serialize_config",
    "serialize_params",
    "verify_config_lock",
]
