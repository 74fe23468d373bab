"""
SlitPlanner - Otimização do Corte Longitudinal de Bobinas

Seleciona, para cada bobina, o padrão de tiras e a linha de corte que
maximizam o rendimento atendendo às quantidades de tiras dos pedidos.
"""

from .core import SlitPlanner, optimize
from .models import (
    Coil, Order, LineSpec, Weights, SlitWidth, SlittingPattern,
    OptimizationResult, OptimizationRequest, MaterialClass, Priority, SolverStatus,
    LineLoad, OrderCoverage,
)
from .settings import PlannerSettings
from .exceptions import SlitPlannerError, InvalidPlanInput

__version__ = "1.0.0"
__author__ = "SlitPlanner Team"

__all__ = [
    "SlitPlanner",
    "optimize",
    "Coil",
    "Order",
    "LineSpec",
    "Weights",
    "SlitWidth",
    "SlittingPattern",
    "OptimizationResult",
    "OptimizationRequest",
    "MaterialClass",
    "Priority",
    "SolverStatus",
    "LineLoad",
    "OrderCoverage",
    "PlannerSettings",
    "SlitPlannerError",
    "InvalidPlanInput",
]
