"""Controlador do cadastro de estudantes.

Responsabilidades:
- Expor busca, criação, edição e remoção de estudantes
- Expor exportação do cadastro
- Traduzir erros em respostas HTTP
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response

from src.application.student_service import ServicoEstudantes
from src.domain.student import DadosEstudante, ErroValidacaoEstudante


def obter_servico_estudantes():
    """Dependência para obter uma instância do serviço de estudantes.

    Retorno:
    - ServicoEstudantes: instância pronta para uso
    """
    return ServicoEstudantes()


def _erro_validacao(erro: ErroValidacaoEstudante) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": "Student data is not valid",
            "errors": [item.model_dump() for item in erro.erros],
        },
    )


class ControladorEstudantes:
    """Controlador de CRUD de estudantes.

    Responsabilidades:
    - Registrar as rotas do cadastro
    - Serializar registros com chaves camelCase
    """

    def __init__(self):
        """Inicializa o controlador.

        Responsabilidades:
        - Instanciar o roteador
        - Registrar as rotas disponíveis
        """
        self.roteador = APIRouter()
        self._registrar_rotas()

    def _registrar_rotas(self):
        """Registra as rotas do cadastro.

        A rota de exportação vem antes da rota por id para não ser capturada por ela.
        """
        self.roteador.add_api_route(
            path="/students",
            endpoint=self._listar,
            methods=["GET"],
            response_model=list,
            summary="Lista estudantes com busca por nome, email ou curso",
        )
        self.roteador.add_api_route(
            path="/students/export",
            endpoint=self._exportar,
            methods=["GET"],
            summary="Exporta o cadastro em CSV ou JSON",
        )
        self.roteador.add_api_route(
            path="/students/{id_estudante}",
            endpoint=self._obter,
            methods=["GET"],
            response_model=dict,
        )
        self.roteador.add_api_route(
            path="/students",
            endpoint=self._criar,
            methods=["POST"],
            response_model=dict,
            status_code=201,
        )
        self.roteador.add_api_route(
            path="/students/{id_estudante}",
            endpoint=self._atualizar,
            methods=["PUT"],
            response_model=dict,
        )
        self.roteador.add_api_route(
            path="/students/{id_estudante}",
            endpoint=self._remover,
            methods=["DELETE"],
            response_model=dict,
        )

    @staticmethod
    async def _listar(q: Optional[str] = None, servico: ServicoEstudantes = Depends(obter_servico_estudantes)):
        """Lista estudantes, opcionalmente filtrados pelo termo `q`."""
        try:
            return [estudante.model_dump(by_alias=True) for estudante in servico.listar(q)]
        except RuntimeError as erro:
            raise HTTPException(status_code=503, detail=str(erro))

    @staticmethod
    async def _exportar(
        formato: str = Query("csv", alias="format"),
        servico: ServicoEstudantes = Depends(obter_servico_estudantes),
    ):
        """Exporta o cadastro como arquivo para download.

        Parâmetros:
        - formato (str): "csv" ou "json" (query `format`)

        Retorno:
        - Response: arquivo com Content-Disposition de anexo
        """
        try:
            conteudo, tipo_midia = servico.exportar(formato)
        except ValueError as erro:
            raise HTTPException(status_code=400, detail=str(erro))

        nome_arquivo = f"student-performance-{date.today().isoformat()}.{formato.lower()}"
        return Response(
            content=conteudo,
            media_type=tipo_midia,
            headers={"Content-Disposition": f'attachment; filename="{nome_arquivo}"'},
        )

    @staticmethod
    async def _obter(id_estudante: str, servico: ServicoEstudantes = Depends(obter_servico_estudantes)):
        try:
            return servico.obter(id_estudante).model_dump(by_alias=True)
        except KeyError as erro:
            raise HTTPException(status_code=404, detail=str(erro.args[0]))

    @staticmethod
    async def _criar(
        dados: DadosEstudante,
        criado_por: Optional[str] = Header(None, alias="X-User-Id"),
        servico: ServicoEstudantes = Depends(obter_servico_estudantes),
    ):
        """Cria um estudante após validar os campos.

        Exceções:
        - HTTPException: 422 com a lista de erros de validação
        """
        try:
            return servico.criar(dados, criado_por=criado_por).model_dump(by_alias=True)
        except ErroValidacaoEstudante as erro:
            raise _erro_validacao(erro)

    @staticmethod
    async def _atualizar(
        id_estudante: str,
        dados: DadosEstudante,
        servico: ServicoEstudantes = Depends(obter_servico_estudantes),
    ):
        try:
            return servico.atualizar(id_estudante, dados).model_dump(by_alias=True)
        except KeyError as erro:
            raise HTTPException(status_code=404, detail=str(erro.args[0]))
        except ErroValidacaoEstudante as erro:
            raise _erro_validacao(erro)

    @staticmethod
    async def _remover(id_estudante: str, servico: ServicoEstudantes = Depends(obter_servico_estudantes)):
        try:
            servico.remover(id_estudante)
        except KeyError as erro:
            raise HTTPException(status_code=404, detail=str(erro.args[0]))
        return {"deleted": id_estudante}
