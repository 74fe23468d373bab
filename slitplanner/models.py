"""
Modelos de dados para o sistema SlitPlanner
"""

from datetime import date
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from enum import Enum


LINE_1 = "Line-1"
LINE_2 = "Line-2"


class MaterialClass(str, Enum):
    """Classes de material suportadas"""
    HR = "HR"   # Laminado a quente
    CR = "CR"   # Laminado a frio


class Priority(str, Enum):
    """Prioridade do pedido"""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Posição na ordenação (High primeiro)"""
        return {"High": 0, "Medium": 1, "Low": 2}[self.value]


class SolverStatus(str, Enum):
    """Estado final da busca"""
    OPTIMAL = "OPTIMAL"
    FEASIBLE = "FEASIBLE"
    INFEASIBLE = "INFEASIBLE"
    NOT_RUN = "NOT_RUN"


class Coil(BaseModel):
    """Representa uma bobina bruta disponível em estoque"""
    model_config = ConfigDict(frozen=True)

    coil_id: str = Field(..., description="Identificador único da bobina")
    material_class: MaterialClass = Field(..., description="Classe do material (HR/CR)")
    grade: str = Field(..., description="Grau do aço")
    thickness: float = Field(..., gt=0, description="Espessura (mm)")
    width: float = Field(..., gt=0, description="Largura (mm)")
    weight: float = Field(0.0, ge=0, description="Peso (kg)")
    line_compatibility: List[str] = Field(default_factory=list, description="Linhas em que a bobina pode rodar")
    inner_diameter: Optional[float] = Field(None, ge=0, description="Diâmetro interno (mm)")
    outer_diameter: Optional[float] = Field(None, ge=0, description="Diâmetro externo (mm)")


class Order(BaseModel):
    """Representa um pedido de tiras de um cliente"""
    model_config = ConfigDict(frozen=True)

    order_id: str = Field(..., description="Identificador único do pedido")
    material_class: MaterialClass = Field(..., description="Classe do material (HR/CR)")
    grade: str = Field(..., description="Grau do aço")
    thickness: float = Field(..., gt=0, description="Espessura (mm)")
    required_width: float = Field(..., gt=0, description="Largura da tira (mm)")
    width_tolerance: float = Field(0.0, ge=0, description="Tolerância de largura (mm)")
    weight: float = Field(0.0, ge=0, description="Peso requerido (kg)")
    no_of_slit: int = Field(1, ge=1, description="Quantidade de tiras requerida")
    priority: Priority = Field(Priority.MEDIUM, description="Prioridade do pedido")
    due_date: Optional[date] = Field(None, description="Data de entrega")


class LineSpec(BaseModel):
    """Especificação de uma linha de corte longitudinal (slitter)"""
    model_config = ConfigDict(frozen=True)

    line_name: str = Field(..., description="Nome da linha (Line-1/Line-2)")
    min_slit_width: float = Field(..., ge=0, description="Largura mínima de tira (mm)")
    max_slit_width: float = Field(..., gt=0, description="Largura máxima de tira (mm)")
    max_knives: int = Field(..., ge=1, description="Número máximo de facas")
    scrap_edge_min: float = Field(0.0, ge=0, description="Refilo mínimo por borda (mm)")
    scrap_edge_max: float = Field(0.0, ge=0, description="Refilo máximo por borda (mm)")
    setup_change_cost: float = Field(0.0, ge=0, description="Custo de troca de setup")
    setup_time: float = Field(0.0, ge=0, description="Tempo de setup (min)")
    hr_capability: bool = Field(True, description="Processa HR")
    cr_capability: bool = Field(True, description="Processa CR")

    @field_validator('max_slit_width')
    @classmethod
    def validate_slit_range(cls, v, info):
        min_width = info.data.get('min_slit_width')
        if min_width is not None and v < min_width:
            raise ValueError("Largura máxima de tira menor que a mínima")
        return v

    @field_validator('scrap_edge_max')
    @classmethod
    def validate_edge_range(cls, v, info):
        edge_min = info.data.get('scrap_edge_min')
        if edge_min is not None and v and v < edge_min:
            raise ValueError("Refilo máximo menor que o mínimo")
        return v

    def supports(self, material_class: MaterialClass) -> bool:
        """Se a linha processa a classe de material"""
        if material_class == MaterialClass.HR:
            return self.hr_capability
        return self.cr_capability


class Weights(BaseModel):
    """Pesos percentuais do objetivo (multiplicadores independentes)"""
    model_config = ConfigDict(frozen=True)

    w1: float = Field(40.0, ge=0, description="Rendimento (%)")
    w2: float = Field(30.0, ge=0, description="Atendimento de tiras")
    w3: float = Field(20.0, ge=0, description="Penalidade de sucata")
    w4: float = Field(10.0, ge=0, description="Penalidade de setup")


class SlitWidth(BaseModel):
    """Grupo de tiras de mesma largura dentro de um padrão"""
    width: float = Field(..., description="Largura da tira (mm)")
    order_id: Optional[str] = Field(None, description="Pedido atendido")
    quantity: int = Field(..., ge=1, description="Quantidade de tiras")


class SlittingPattern(BaseModel):
    """Padrão de corte selecionado para uma bobina"""
    pattern_key: str = Field(..., description="Chave do padrão")
    coil_id: str = Field(..., description="ID da bobina")
    pattern_id: str = Field(..., description="Identificador exibido do padrão")
    slit_widths: List[SlitWidth] = Field(..., description="Tiras agrupadas por largura")
    scrap_width: float = Field(..., description="Sucata total incluindo refilo (mm)")
    yield_percent: float = Field(..., description="Rendimento percentual")
    score: float = Field(0.0, description="Pontuação no objetivo")
    assigned_line: Optional[str] = Field(None, description="Linha atribuída")

    @property
    def used_width(self) -> float:
        """Largura total convertida em tiras"""
        return sum(s.width * s.quantity for s in self.slit_widths)

    @property
    def slit_count(self) -> int:
        """Número total de tiras"""
        return sum(s.quantity for s in self.slit_widths)


class LineLoad(BaseModel):
    """Carga de uma linha de corte no plano final"""
    line_name: str = Field(..., description="Nome da linha")
    coil_count: int = Field(0, description="Bobinas atribuídas")
    setup_changes: int = Field(0, description="Trocas de setup entre bobinas consecutivas")
    estimated_minutes: float = Field(0.0, description="Tempo estimado (min)")
    setup_cost: float = Field(0.0, description="Custo total das trocas de setup")


class OrderCoverage(BaseModel):
    """Cobertura de matéria-prima de um pedido pelo estoque de bobinas"""
    order_id: str = Field(..., description="ID do pedido")
    compatible_coils: List[str] = Field(default_factory=list, description="Bobinas compatíveis")
    available_weight: float = Field(0.0, description="Peso disponível nas bobinas compatíveis (kg)")
    required_weight: float = Field(0.0, description="Peso requerido pelo pedido (kg)")
    can_fulfill: bool = Field(False, description="Estoque suficiente para o pedido")
    shortfall: float = Field(0.0, description="Peso faltante (kg)")


class OptimizationResult(BaseModel):
    """Resultado completo da otimização"""
    patterns: List[SlittingPattern] = Field(default_factory=list, description="Padrões selecionados")
    total_yield: float = Field(0.0, description="Rendimento médio (%)")
    total_scrap: float = Field(0.0, description="Sucata total (mm)")
    orders_covered: int = Field(0, description="Pedidos totalmente atendidos")
    total_orders: int = Field(0, description="Total de pedidos")
    partially_fulfilled_orders: int = Field(0, description="Pedidos parcialmente atendidos")
    order_slits_assigned: Dict[str, int] = Field(default_factory=dict, description="Tiras atribuídas por pedido")
    line_loads: List[LineLoad] = Field(default_factory=list, description="Carga por linha de corte")
    rm_coverage: List[OrderCoverage] = Field(default_factory=list, description="Cobertura de matéria-prima por pedido")
    solver_status: SolverStatus = Field(SolverStatus.NOT_RUN, description="Estado do solver")
    algorithm_used: str = Field("none", description="Algoritmo utilizado")
    processing_time: float = Field(0.0, description="Tempo de processamento (ms)")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Metadados adicionais")


class OptimizationRequest(BaseModel):
    """Requisição para otimização"""
    coils: List[Coil] = Field(default_factory=list, description="Bobinas disponíveis")
    orders: List[Order] = Field(default_factory=list, description="Pedidos a atender")
    line_specs: List[LineSpec] = Field(default_factory=list, description="Linhas disponíveis")
    weights: Weights = Field(default_factory=Weights, description="Pesos do objetivo")

    @model_validator(mode='after')
    def validate_line_references(self):
        if not self.line_specs:
            return self
        known = {spec.line_name for spec in self.line_specs}
        for coil in self.coils:
            unknown = [name for name in coil.line_compatibility if name not in known]
            if unknown:
                raise ValueError(
                    f"Bobina {coil.coil_id} referencia linhas desconhecidas: {', '.join(unknown)}"
                )
        return self
