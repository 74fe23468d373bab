"""
Exceções do SlitPlanner
"""


class SlitPlannerError(Exception):
    """Erro base do pacote"""


class InvalidPlanInput(SlitPlannerError, ValueError):
    """Entrada malformada rejeitada na fronteira do motor"""
