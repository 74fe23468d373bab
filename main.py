"""
Servidor FastAPI principal para o SlitPlanner
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from slitplanner import SlitPlanner, PlannerSettings, SlitPlannerError, __version__
from slitplanner.models import OptimizationRequest, OptimizationResult
from slitplanner.samples import create_sample_request
from slitplanner.logging_conf import configure_logging

settings = PlannerSettings.from_env()
configure_logging(settings.log_level)

# Configuração do FastAPI
app = FastAPI(
    title="SlitPlanner API",
    description="API para otimização do corte longitudinal de bobinas",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configuração de CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Instância global do SlitPlanner
slit_planner = SlitPlanner(settings)


@app.get("/")
async def root():
    """Página inicial da API - redireciona para documentação"""
    return {
        "message": "SlitPlanner API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health")
async def health_check():
    """Verificação de saúde da API"""
    return {
        "status": "healthy",
        "service": "SlitPlanner API",
        "version": __version__
    }


@app.post("/optimize", response_model=OptimizationResult)
def optimize(request: OptimizationRequest):
    """
    Otimização do corte das bobinas

    Args:
        request: Bobinas, pedidos, linhas e pesos

    Returns:
        Resultado da otimização em formato JSON
    """
    try:
        return slit_planner.optimize_request(request)
    except SlitPlannerError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/optimize/batch")
def optimize_batch(requests: list[OptimizationRequest]):
    """
    Otimização em lote de múltiplas requisições

    Args:
        requests: Lista de requisições de otimização

    Returns:
        Lista de resultados da otimização
    """
    try:
        results = [slit_planner.optimize_request(request) for request in requests]
    except SlitPlannerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "total_requests": len(requests),
        "with_patterns": len([r for r in results if r.patterns]),
        "results": results
    }


@app.get("/examples")
async def get_example():
    """Retorna exemplo de dados para otimização"""
    return create_sample_request().model_dump(mode="json")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
