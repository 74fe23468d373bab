"""
Balanceamento de carga entre as duas linhas de corte
"""

import logging
from typing import List

from .models import LineSpec, SlittingPattern, LINE_1, LINE_2

logger = logging.getLogger(__name__)


def line_counts(patterns: List[SlittingPattern]) -> dict:
    """Quantidade de padrões por linha"""
    counts = {LINE_1: 0, LINE_2: 0}
    for pattern in patterns:
        if pattern.assigned_line in counts:
            counts[pattern.assigned_line] += 1
    return counts


def balance_lines(patterns: List[SlittingPattern], line_specs: List[LineSpec]) -> List[SlittingPattern]:
    """
    Redistribui os padrões por alternância quando as linhas diferem em mais de 1

    A alternância não verifica a capacidade HR/CR da linha de destino nem
    se as larguras das tiras cabem na faixa de largura dessa linha.
    """
    counts = line_counts(patterns)
    has_line_2 = any(spec.line_name == LINE_2 for spec in line_specs)

    if abs(counts[LINE_1] - counts[LINE_2]) > 1 and has_line_2:
        for idx, pattern in enumerate(patterns):
            pattern.assigned_line = LINE_1 if idx % 2 == 0 else LINE_2
        logger.warning(
            "Linhas rebalanceadas por alternância (%d/%d -> %d/%d), capacidade HR/CR e faixa de largura não reavaliadas",
            counts[LINE_1], counts[LINE_2], *line_counts(patterns).values(),
        )

    return patterns
