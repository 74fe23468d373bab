from __future__ import annotations

import pytest

from slitplanner.models import Coil, Order, LineSpec, Weights, MaterialClass, Priority


@pytest.fixture
def make_coil():
    def _make(coil_id="C1", width=1250, material_class=MaterialClass.HR, grade="SS304",
              thickness=2.0, lines=("Line-1",), weight=5000):
        return Coil(
            coil_id=coil_id,
            material_class=material_class,
            grade=grade,
            thickness=thickness,
            width=width,
            weight=weight,
            line_compatibility=list(lines),
        )
    return _make


@pytest.fixture
def make_order():
    def _make(order_id="O1", width=600, no_of_slit=1, material_class=MaterialClass.HR,
              grade="SS304", thickness=2.0, priority=Priority.MEDIUM, tolerance=2,
              weight=1000):
        return Order(
            order_id=order_id,
            material_class=material_class,
            grade=grade,
            thickness=thickness,
            required_width=width,
            width_tolerance=tolerance,
            weight=weight,
            no_of_slit=no_of_slit,
            priority=priority,
        )
    return _make


@pytest.fixture
def make_line():
    def _make(name="Line-1", min_slit=50, max_slit=600, max_knives=10, edge=5,
              hr=True, cr=True, setup_time=0, setup_cost=0):
        return LineSpec(
            line_name=name,
            min_slit_width=min_slit,
            max_slit_width=max_slit,
            max_knives=max_knives,
            scrap_edge_min=edge,
            hr_capability=hr,
            cr_capability=cr,
            setup_time=setup_time,
            setup_change_cost=setup_cost,
        )
    return _make


@pytest.fixture
def weights():
    return Weights(w1=40, w2=30, w3=20, w4=10)
