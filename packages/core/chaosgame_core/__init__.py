"""Core services: configuration, scheduling, the chaos game loop, and diagnostics."""

from .chaos_game import ChaosGameLoop, LoopState, LoopStats
from .config import (
    ChaosGameConfig,
    ConfigError,
    config_to_dict,
    load_config,
    validate_config,
    with_overrides,
)
from .diagnostics import build_doctor_payload
from .performance import BudgetStatus, PerformanceController, PerformanceTargets
from .scheduling import ManualScheduler, Scheduler, TimerHandle

__all__ = [
    "BudgetStatus",
    "ChaosGameConfig",
    "ChaosGameLoop",
    "ConfigError",
    "LoopState",
    "LoopStats",
    "ManualScheduler",
    "PerformanceController",
    "PerformanceTargets",
    "Scheduler",
    "TimerHandle",
    "build_doctor_payload",
    "config_to_dict",
    "load_config",
    "validate_config",
    "with_overrides",
]
