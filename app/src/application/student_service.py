"""Serviço de cadastro de estudantes.

Responsabilidades:
- Buscar, criar, editar e remover estudantes
- Persistir o resultado de importações em lote
- Exportar o cadastro em CSV ou JSON
"""

import csv
import json
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from src.application.import_service import ArquivoImportacao, ServicoImportacao
from src.config.settings import Configuracoes
from src.domain.student import (
    DadosEstudante,
    ErroValidacaoEstudante,
    EstudanteArmazenado,
    RegistroEstudante,
    ResultadoImportacao,
)
from src.domain.validation import validar_estudante
from src.infrastructure.data.student_repository import RepositorioEstudantes
from src.util.logger import logger

FORMATOS_EXPORTACAO = {
    "csv": "text/csv; charset=utf-8",
    "json": "application/json",
}


def formatar_nota(nota: float) -> str:
    """Nota inteira sai sem casas decimais (95.0 -> "95")."""
    return str(int(nota)) if float(nota).is_integer() else repr(float(nota))


class ServicoEstudantes:
    """Regras de aplicação sobre o cadastro de estudantes.

    Responsabilidades:
    - Validar dados antes de gravar
    - Delegar persistência ao repositório
    - Encadear importação e gravação dos registros válidos
    """

    def __init__(
        self,
        repositorio: Optional[RepositorioEstudantes] = None,
        servico_importacao: Optional[ServicoImportacao] = None,
    ):
        self.repositorio = repositorio or RepositorioEstudantes()
        self.servico_importacao = servico_importacao or ServicoImportacao()

    def listar(self, consulta: Optional[str] = None) -> List[EstudanteArmazenado]:
        """Lista estudantes, filtrando por nome, email ou curso.

        Parâmetros:
        - consulta (str | None): trecho buscado, sem diferenciar maiúsculas

        Retorno:
        - list[EstudanteArmazenado]: estudantes encontrados
        """
        estudantes = self.repositorio.listar()
        if not consulta or not consulta.strip():
            return estudantes

        termo = consulta.lower()
        return [
            estudante
            for estudante in estudantes
            if termo in estudante.name.lower()
            or termo in estudante.email.lower()
            or termo in estudante.course.lower()
        ]

    def obter(self, id_estudante: str) -> EstudanteArmazenado:
        return self.repositorio.obter(id_estudante)

    @staticmethod
    def _validar(dados: DadosEstudante, id_estudante: str = "new") -> RegistroEstudante:
        candidato = RegistroEstudante(id=id_estudante, **dados.model_dump())
        erros = validar_estudante(candidato, 0)
        if erros:
            raise ErroValidacaoEstudante(erros)
        return candidato

    def criar(self, dados: DadosEstudante, criado_por: Optional[str] = None) -> EstudanteArmazenado:
        """Valida e grava um novo estudante.

        Exceções:
        - ErroValidacaoEstudante: quando alguma regra de campo falha
        """
        candidato = self._validar(dados)
        return self.repositorio.inserir_varios([candidato], criado_por=criado_por)[0]

    def atualizar(self, id_estudante: str, dados: DadosEstudante) -> EstudanteArmazenado:
        """Valida e substitui os campos de um estudante existente.

        Exceções:
        - KeyError: quando o estudante não existe
        - ErroValidacaoEstudante: quando alguma regra de campo falha
        """
        self.repositorio.obter(id_estudante)
        self._validar(dados, id_estudante)
        return self.repositorio.atualizar(id_estudante, dados)

    def remover(self, id_estudante: str) -> None:
        self.repositorio.remover(id_estudante)

    async def importar(
        self, arquivos: Sequence[ArquivoImportacao], criado_por: Optional[str] = None
    ) -> ResultadoImportacao:
        """Importa arquivos CSV e grava os estudantes válidos.

        Parâmetros:
        - arquivos (list[tuple]): pares (nome, conteúdo)
        - criado_por (str | None): referência de quem disparou a importação

        Retorno:
        - ResultadoImportacao: resultado com ids definitivos nos registros gravados
        """
        resultado = await self.servico_importacao.processar_arquivos(arquivos)
        if not resultado.successful:
            return resultado

        gravados = self.repositorio.inserir_varios(resultado.successful, criado_por=criado_por)
        logger.info(f"Importação gravou {len(gravados)} estudantes; {len(resultado.failed)} linhas rejeitadas.")
        return resultado.model_copy(update={"successful": gravados})

    def exportar(self, formato: str = "csv") -> Tuple[str, str]:
        """Serializa o cadastro completo.

        Parâmetros:
        - formato (str): "csv" ou "json"

        Retorno:
        - tuple: (conteúdo, media type)

        Exceções:
        - ValueError: quando o formato não é suportado
        """
        formato = (formato or "").lower()
        if formato not in FORMATOS_EXPORTACAO:
            raise ValueError(f"Formato de exportação não suportado: {formato}")

        estudantes = self.repositorio.listar()
        if formato == "json":
            conteudo = json.dumps(
                [estudante.model_dump(by_alias=True) for estudante in estudantes],
                ensure_ascii=False,
                indent=2,
            )
        else:
            df = pd.DataFrame(
                [estudante.model_dump(by_alias=True) for estudante in estudantes],
                columns=Configuracoes.CAMPOS_ESTUDANTE,
            )
            df["grade"] = df["grade"].map(formatar_nota)
            conteudo = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")

        return conteudo, FORMATOS_EXPORTACAO[formato]
