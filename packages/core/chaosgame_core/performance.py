"""Runtime resource budgeting for the plotting loop."""

from __future__ import annotations

from dataclasses import dataclass

try:
    import psutil
except Exception:  # pragma: no cover
    psutil = None


@dataclass(frozen=True)
class PerformanceTargets:
    cpu_percent_max: float = 50.0
    rss_mb_max: float = 300.0
    dots_per_second_min: float = 30.0


@dataclass(frozen=True)
class BudgetStatus:
    cpu_percent: float
    rss_mb: float
    dots_per_second: float
    overloaded: bool
    warning: str | None


class PerformanceController:
    def __init__(self, targets: PerformanceTargets | None = None) -> None:
        self.targets = targets or PerformanceTargets()
        self._process = psutil.Process() if psutil is not None else None
        if self._process is not None:
            # Prime non-blocking CPU measurement.
            self._process.cpu_percent(interval=None)

    def sample(self, dots_per_second: float) -> BudgetStatus:
        if self._process is None:
            cpu = 0.0
            rss_mb = 0.0
        else:
            cpu = float(self._process.cpu_percent(interval=None))
            rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)
        overloaded = cpu > self.targets.cpu_percent_max or rss_mb > self.targets.rss_mb_max

        warning = None
        if overloaded:
            warning = "resource_overload"
        elif dots_per_second < self.targets.dots_per_second_min:
            warning = "below_dots_target"

        return BudgetStatus(
            cpu_percent=cpu,
            rss_mb=rss_mb,
            dots_per_second=float(dots_per_second),
            overloaded=overloaded,
            warning=warning,
        )
