from __future__ import annotations

import pytest
from pydantic import ValidationError

from slitplanner.models import (
    Coil, Order, LineSpec, Weights, OptimizationRequest, MaterialClass, Priority, SlitWidth, SlittingPattern,
)


def test_order_defaults_to_single_slit_and_medium_priority():
    order = Order(order_id="O1", material_class="HR", grade="SS304", thickness=2.0, required_width=600)
    assert order.no_of_slit == 1
    assert order.priority == Priority.MEDIUM
    assert order.material_class == MaterialClass.HR


def test_order_rejects_zero_slit_count():
    with pytest.raises(ValidationError):
        Order(order_id="O1", material_class="HR", grade="SS304", thickness=2.0, required_width=600, no_of_slit=0)


def test_coil_rejects_negative_width():
    with pytest.raises(ValidationError):
        Coil(coil_id="C1", material_class="CR", grade="X", thickness=1.0, width=-5, line_compatibility=["Line-1"])


def test_weights_reject_negative_values_but_need_not_sum_to_100():
    assert Weights(w1=90, w2=90, w3=0, w4=0).w1 == 90
    with pytest.raises(ValidationError):
        Weights(w1=-1)


def test_line_spec_rejects_inverted_slit_range():
    with pytest.raises(ValidationError):
        LineSpec(line_name="Line-1", min_slit_width=600, max_slit_width=50, max_knives=10)


def test_line_spec_supports_material_class():
    spec = LineSpec(line_name="Line-1", min_slit_width=50, max_slit_width=600, max_knives=10,
                    hr_capability=True, cr_capability=False)
    assert spec.supports(MaterialClass.HR)
    assert not spec.supports(MaterialClass.CR)


def test_request_rejects_unknown_line_reference(make_coil, make_order, make_line):
    with pytest.raises(ValidationError):
        OptimizationRequest(
            coils=[make_coil(lines=("Line-9",))],
            orders=[make_order()],
            line_specs=[make_line()],
        )


def test_request_without_line_specs_skips_line_check(make_coil):
    request = OptimizationRequest(coils=[make_coil(lines=("Line-9",))])
    assert request.line_specs == []


def test_inputs_are_frozen(make_coil):
    coil = make_coil()
    with pytest.raises(ValidationError):
        coil.width = 10


def test_pattern_used_width_and_slit_count():
    pattern = SlittingPattern(
        pattern_key="pattern-C1-or",
        coil_id="C1",
        pattern_id="P-OR-1",
        slit_widths=[SlitWidth(width=600, order_id="O1", quantity=2), SlitWidth(width=30, order_id="O2", quantity=1)],
        scrap_width=20,
        yield_percent=98.4,
    )
    assert pattern.used_width == 1230
    assert pattern.slit_count == 3


def test_coil_may_have_no_allowed_lines():
    coil = Coil(coil_id="C1", material_class="HR", grade="SS304", thickness=2.0, width=1250)
    assert coil.line_compatibility == []
