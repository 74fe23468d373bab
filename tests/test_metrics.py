from __future__ import annotations

import pytest

from slitplanner.metrics import aggregate_metrics, compute_line_loads, MINUTES_PER_COIL
from slitplanner.models import SlitWidth, SlittingPattern


def pattern(coil_id, yield_percent, scrap, line=None):
    return SlittingPattern(
        pattern_key=f"pattern-{coil_id}-or",
        coil_id=coil_id,
        pattern_id="P-OR-1",
        slit_widths=[SlitWidth(width=100, order_id="O1", quantity=1)],
        scrap_width=scrap,
        yield_percent=yield_percent,
        assigned_line=line,
    )


def test_empty_plan_has_zero_metrics(make_order):
    metrics = aggregate_metrics([], [make_order("O1")], {})
    assert metrics.total_yield == 0
    assert metrics.total_scrap == 0
    assert metrics.orders_covered == 0
    assert metrics.unfulfilled_orders == 1
    assert metrics.total_orders == 1
    assert metrics.order_slits_assigned == {"O1": 0}


def test_average_yield_and_total_scrap():
    metrics = aggregate_metrics([pattern("C1", 90.0, 100), pattern("C2", 80.0, 40)], [], {})
    assert metrics.total_yield == pytest.approx(85.0)
    assert metrics.total_scrap == pytest.approx(140.0)


def test_orders_classified_by_assigned_slits(make_order):
    orders = [
        make_order("full", no_of_slit=2),
        make_order("over", no_of_slit=1),
        make_order("partial", no_of_slit=3),
        make_order("none", no_of_slit=1),
    ]
    metrics = aggregate_metrics([], orders, {"full": 2, "over": 2, "partial": 1})
    assert metrics.orders_covered == 2
    assert metrics.partially_fulfilled_orders == 1
    assert metrics.unfulfilled_orders == 1
    assert metrics.order_slits_assigned == {"full": 2, "over": 2, "partial": 1, "none": 0}


def test_line_load_counts_coils_and_setup_changes(make_line):
    lines = [make_line("Line-1", setup_time=15, setup_cost=1200), make_line("Line-2", setup_time=10)]
    patterns = [
        pattern("C1", 90.0, 10, "Line-1"),
        pattern("C2", 90.0, 10, "Line-1"),
        pattern("C3", 90.0, 10, "Line-1"),
        pattern("C4", 90.0, 10, "Line-2"),
    ]
    line_1, line_2 = compute_line_loads(patterns, lines)

    assert line_1.line_name == "Line-1"
    assert line_1.coil_count == 3
    assert line_1.setup_changes == 2
    assert line_1.estimated_minutes == pytest.approx(3 * MINUTES_PER_COIL + 2 * 15)
    assert line_1.setup_cost == pytest.approx(2400)

    assert line_2.coil_count == 1
    assert line_2.setup_changes == 0
    assert line_2.estimated_minutes == pytest.approx(MINUTES_PER_COIL)


def test_idle_line_has_zero_load(make_line):
    (load,) = compute_line_loads([], [make_line("Line-2", setup_time=30)])
    assert load.coil_count == 0
    assert load.setup_changes == 0
    assert load.estimated_minutes == 0


def test_metrics_carry_line_loads(make_order, make_line):
    lines = [make_line("Line-1"), make_line("Line-2")]
    metrics = aggregate_metrics([pattern("C1", 90.0, 10, "Line-2")], [make_order()], {"O1": 1}, lines)
    assert [(l.line_name, l.coil_count) for l in metrics.line_loads] == [("Line-1", 0), ("Line-2", 1)]
