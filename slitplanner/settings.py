from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_NODE_BUDGET = 200_000
DEFAULT_MAX_PATTERNS_PER_COIL = 50
DEFAULT_THICKNESS_TOLERANCE = 0.1


@dataclass(frozen=True)
class PlannerSettings:
    node_budget: int = DEFAULT_NODE_BUDGET
    max_patterns_per_coil: int = DEFAULT_MAX_PATTERNS_PER_COIL
    thickness_tolerance: float = DEFAULT_THICKNESS_TOLERANCE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "PlannerSettings":
        """Lê as configurações das variáveis SLITPLANNER_*."""
        return cls(
            node_budget=int(os.environ.get("SLITPLANNER_NODE_BUDGET", DEFAULT_NODE_BUDGET)),
            max_patterns_per_coil=int(
                os.environ.get("SLITPLANNER_MAX_PATTERNS", DEFAULT_MAX_PATTERNS_PER_COIL)
            ),
            log_level=os.environ.get("SLITPLANNER_LOG_LEVEL", "INFO"),
        )
