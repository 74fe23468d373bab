"""
Dados de exemplo para demonstração e para a API
"""

from datetime import date

from .models import Coil, Order, LineSpec, Weights, OptimizationRequest, MaterialClass, Priority


def create_sample_request() -> OptimizationRequest:
    """Cria uma requisição de exemplo com duas linhas e três bobinas"""

    coils = [
        Coil(
            coil_id="HR-1001",
            material_class=MaterialClass.HR,
            grade="SS304",
            thickness=2.0,
            width=1250,
            weight=8500,
            line_compatibility=["Line-1", "Line-2"],
        ),
        Coil(
            coil_id="HR-1002",
            material_class=MaterialClass.HR,
            grade="SS304",
            thickness=2.0,
            width=1500,
            weight=9800,
            line_compatibility=["Line-1"],
        ),
        Coil(
            coil_id="CR-2001",
            material_class=MaterialClass.CR,
            grade="IS513",
            thickness=1.2,
            width=1220,
            weight=7200,
            line_compatibility=["Line-2"],
        ),
    ]

    orders = [
        Order(
            order_id="SO-501",
            material_class=MaterialClass.HR,
            grade="SS304",
            thickness=2.0,
            required_width=600,
            width_tolerance=2,
            weight=4000,
            no_of_slit=2,
            priority=Priority.HIGH,
            due_date=date(2026, 11, 2),
        ),
        Order(
            order_id="SO-502",
            material_class=MaterialClass.HR,
            grade="SS304",
            thickness=2.0,
            required_width=320,
            width_tolerance=1,
            weight=3000,
            no_of_slit=4,
            priority=Priority.MEDIUM,
            due_date=date(2026, 11, 9),
        ),
        Order(
            order_id="SO-503",
            material_class=MaterialClass.CR,
            grade="IS513",
            thickness=1.2,
            required_width=280,
            width_tolerance=1,
            weight=2500,
            no_of_slit=3,
            priority=Priority.LOW,
        ),
    ]

    line_specs = [
        LineSpec(
            line_name="Line-1",
            min_slit_width=50,
            max_slit_width=600,
            max_knives=10,
            scrap_edge_min=5,
            scrap_edge_max=15,
            setup_change_cost=1200,
            setup_time=30,
            hr_capability=True,
            cr_capability=False,
        ),
        LineSpec(
            line_name="Line-2",
            min_slit_width=40,
            max_slit_width=500,
            max_knives=12,
            scrap_edge_min=4,
            scrap_edge_max=12,
            setup_change_cost=900,
            setup_time=25,
            hr_capability=True,
            cr_capability=True,
        ),
    ]

    return OptimizationRequest(
        coils=coils,
        orders=orders,
        line_specs=line_specs,
        weights=Weights(w1=40, w2=30, w3=20, w4=10),
    )
