#!/usr/bin/env python3
"""
Script principal para executar o sistema SlitPlanner
"""

import sys
import argparse
from dataclasses import replace

from slitplanner import SlitPlanner, PlannerSettings
from slitplanner.samples import create_sample_request
from slitplanner.logging_conf import configure_logging


def run_demo(settings: PlannerSettings):
    """Executa demonstração do sistema"""

    print("🔧 SlitPlanner - Demonstração do Sistema")
    print("=" * 60)

    request = create_sample_request()
    planner = SlitPlanner(settings)

    print(f"✓ Planejador configurado com orçamento de {settings.node_budget} nós")
    print(f"✓ {len(request.coils)} bobinas carregadas")
    print(f"✓ {len(request.orders)} pedidos definidos")
    print(f"✓ {len(request.line_specs)} linhas de corte")

    print("\n🔄 Executando otimização...")
    result = planner.optimize_request(request)

    if not result.patterns:
        print("❌ Nenhum padrão de corte encontrado")
        return result

    print(f"\n✅ Otimização concluída ({result.algorithm_used}, {result.solver_status.value})")
    print(f"📊 Rendimento médio: {result.total_yield:.1f}%")
    print(f"🗑️  Sucata total: {result.total_scrap:.1f}mm")
    print(f"📦 Pedidos atendidos: {result.orders_covered}/{result.total_orders}"
          f" ({result.partially_fulfilled_orders} parciais)")
    print(f"⚡ Tempo de processamento: {result.processing_time:.1f}ms")

    print(f"\n📋 Padrões:")
    for pattern in result.patterns:
        slits = ", ".join(f"{s.quantity}x{s.width:g}mm ({s.order_id})" for s in pattern.slit_widths)
        print(f"  {pattern.pattern_id} {pattern.coil_id} [{pattern.assigned_line}]: {slits}"
              f" | rendimento {pattern.yield_percent:.1f}%, sucata {pattern.scrap_width:g}mm")

    print(f"\n🏭 Carga das linhas:")
    for load in result.line_loads:
        print(f"  {load.line_name}: {load.coil_count} bobinas | ~{load.estimated_minutes:g} min"
              f" | {load.setup_changes} trocas de setup")

    print(f"\n📦 Matéria-prima por pedido:")
    for coverage in result.rm_coverage:
        status = "pronto" if coverage.can_fulfill else f"faltam {coverage.shortfall:g}kg"
        print(f"  {coverage.order_id}: {coverage.available_weight:g}kg disponíveis"
              f" em {len(coverage.compatible_coils)} bobinas | {status}")

    return result


def run_api_server():
    """Inicia o servidor da API"""

    print("🚀 Iniciando servidor da API SlitPlanner...")

    import uvicorn

    print("✓ Servidor iniciado em http://localhost:8000")
    print("✓ Documentação da API: http://localhost:8000/docs")
    print("\nPressione Ctrl+C para parar o servidor")

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )


def main(argv=None):
    """Função principal"""

    parser = argparse.ArgumentParser(
        description="SlitPlanner - Otimização do Corte Longitudinal de Bobinas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemplos de uso:
  python run.py demo                       # Executa demonstração
  python run.py demo --node-budget 5000    # Demonstração com busca curta
  python run.py api                        # Inicia servidor da API
        """
    )

    parser.add_argument(
        'command',
        choices=['demo', 'api'],
        help='Comando a executar'
    )

    parser.add_argument(
        '--node-budget',
        type=int,
        metavar='N',
        help='Número máximo de nós explorados pelo solver'
    )

    parser.add_argument(
        '--log-level',
        default=None,
        help='Nível de log (DEBUG, INFO, WARNING)'
    )

    args = parser.parse_args(argv)

    settings = PlannerSettings.from_env()
    if args.node_budget is not None:
        settings = replace(settings, node_budget=args.node_budget)
    configure_logging(args.log_level or settings.log_level)

    try:
        if args.command == 'demo':
            run_demo(settings)
        elif args.command == 'api':
            run_api_server()
    except KeyboardInterrupt:
        print("\n\n👋 Sistema interrompido pelo usuário")

    return 0


if __name__ == "__main__":
    sys.exit(main())
