"""Ponto de entrada da API FastAPI.

Responsabilidades:
- Configurar a aplicação FastAPI
- Registrar rotas e eventos
- Carregar o cadastro no startup
"""

import os

import uvicorn
from fastapi import FastAPI, HTTPException

from src.api.analytics_controller import ControladorAnalitico
from src.api.import_controller import ControladorImportacao
from src.api.student_controller import ControladorEstudantes
from src.infrastructure.data.student_repository import RepositorioEstudantes
from src.util.logger import logger

app = FastAPI(
    title="Registro de Estudantes",
    description="API de cadastro de estudantes com importação CSV em lote e indicadores",
    version="1.0.0",
)


def carregar_cadastro() -> int:
    """Carrega o cadastro em memória e retorna a quantidade de estudantes."""
    return len(RepositorioEstudantes().listar())


@app.on_event("startup")
async def evento_inicializacao():
    """Executa ações de inicialização da aplicação.

    Responsabilidades:
    - Registrar log de inicialização
    - Carregar o cadastro de estudantes

    Retorno:
    - None: não retorna valor
    """
    logger.info("Inicializando recursos da API...")
    total = carregar_cadastro()
    logger.info(f"Cadastro pronto com {total} estudantes.")


controlador_importacao = ControladorImportacao()
app.include_router(controlador_importacao.roteador, prefix="/api/v1", tags=["Importação"])

controlador_estudantes = ControladorEstudantes()
app.include_router(controlador_estudantes.roteador, prefix="/api/v1", tags=["Estudantes"])

controlador_analitico = ControladorAnalitico()
app.include_router(controlador_analitico.roteador, prefix="/api/v1", tags=["Painel"])


@app.get("/health", tags=["Infraestrutura"])
def checar_saude():
    """Endpoint de health check.

    Retorno:
    - dict: status da aplicação
    """
    try:
        carregar_cadastro()
        return {"status": "ok"}
    except Exception as erro:
        raise HTTPException(status_code=503, detail=str(erro))


if __name__ == "__main__":
    porta = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=porta)
