"""Controlador de importação em lote da API.

Responsabilidades:
- Receber arquivos CSV enviados pelo cliente
- Resolver dependência do serviço de cadastro
- Traduzir erros em respostas HTTP
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Header, HTTPException, UploadFile

from src.application.student_service import ServicoEstudantes
from src.util.logger import logger


def obter_servico_cadastro():
    """Dependência para obter uma instância do serviço de cadastro.

    Retorno:
    - ServicoEstudantes: instância pronta para uso
    """
    return ServicoEstudantes()


class ControladorImportacao:
    """Controlador para importação de estudantes por CSV.

    Responsabilidades:
    - Registrar rota de importação
    - Ler os uploads e repassar ao serviço
    """

    def __init__(self):
        """Inicializa o controlador.

        Responsabilidades:
        - Instanciar o roteador
        - Registrar a rota de importação
        """
        self.roteador = APIRouter()
        self.roteador.add_api_route(
            path="/students/import",
            endpoint=self._importar,
            methods=["POST"],
            response_model=dict,
            summary="Importa estudantes a partir de um ou mais arquivos CSV",
        )

    @staticmethod
    async def _importar(
        files: Optional[List[UploadFile]] = File(None),
        criado_por: Optional[str] = Header(None, alias="X-User-Id"),
        servico: ServicoEstudantes = Depends(obter_servico_cadastro),
    ):
        """Importa os arquivos enviados e grava os estudantes válidos.

        Parâmetros:
        - files (list[UploadFile]): arquivos CSV
        - criado_por (str | None): cabeçalho X-User-Id
        - servico (ServicoEstudantes): serviço injetado

        Retorno:
        - dict: resultado da importação (successful, failed, totalRows, files)

        Exceções:
        - HTTPException: 400 para lote inválido, 500 para falha inesperada
        """
        arquivos = []
        for arquivo in files or []:
            arquivos.append((arquivo.filename or "upload.csv", await arquivo.read()))

        try:
            resultado = await servico.importar(arquivos, criado_por=criado_por)
        except ValueError as erro:
            raise HTTPException(status_code=400, detail=str(erro))
        except Exception as erro:
            logger.error(f"Importação abortada: {erro}")
            raise HTTPException(status_code=500, detail=str(erro))

        return resultado.model_dump(by_alias=True)
