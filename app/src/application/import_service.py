"""Serviço de importação de estudantes a partir de arquivos CSV.

Responsabilidades:
- Mapear colunas do cabeçalho para os campos do estudante
- Montar candidatos com valores padrão tipados e validá-los
- Processar vários arquivos de forma concorrente e consolidar o resultado
"""

import asyncio
import math
import re
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from src.config.settings import Configuracoes
from src.domain.student import FalhaLinha, RegistroEstudante, ResultadoImportacao, ResumoArquivo
from src.domain.validation import validar_estudante
from src.infrastructure.data.csv_parser import analisar_texto_delimitado
from src.util.logger import logger

Relogio = Callable[[], datetime]
ArquivoImportacao = Tuple[str, Union[str, bytes]]

# Maior literal decimal no início do token; o restante é ignorado.
PREFIXO_NUMERICO = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Cabeçalho esperado (minúsculo) -> campo do modelo.
COLUNAS_ESTUDANTE = {
    "name": "name",
    "email": "email",
    "grade": "grade",
    "course": "course",
    "enrollmentdate": "enrollment_date",
}


class _ResultadoArquivo(NamedTuple):
    resumo: ResumoArquivo
    estudantes: List[RegistroEstudante]
    falhas: List[FalhaLinha]


def localizar_colunas(cabecalhos: Sequence[str]) -> Dict[str, Optional[int]]:
    """Resolve a posição de cada campo pelo nome do cabeçalho.

    Parâmetros:
    - cabecalhos (list[str]): cabeçalhos já sem espaços

    Retorno:
    - dict: campo -> índice da primeira coluna correspondente, ou None
    """
    normalizados = [cabecalho.lower() for cabecalho in cabecalhos]
    posicoes = {}
    for nome_coluna, campo in COLUNAS_ESTUDANTE.items():
        posicoes[campo] = normalizados.index(nome_coluna) if nome_coluna in normalizados else None
    return posicoes


def converter_nota(token: str) -> float:
    """Converte o token de nota pelo prefixo numérico.

    Vazio vira 0, "85%" vira 85 e texto sem prefixo numérico vira NaN.
    """
    if not token:
        return 0.0
    correspondencia = PREFIXO_NUMERICO.match(token)
    if correspondencia is None:
        return math.nan
    return float(correspondencia.group(0))


def _linha_vazia(linha: Sequence[str]) -> bool:
    return len(linha) == 0 or (len(linha) == 1 and linha[0] == "")


def mapear_linhas_para_estudantes(
    linhas: Sequence[Sequence[str]],
    cabecalhos: Sequence[str],
    relogio: Relogio = datetime.now,
    indice_arquivo: int = 0,
) -> Tuple[List[RegistroEstudante], List[FalhaLinha]]:
    """Converte linhas tokenizadas em estudantes válidos e falhas.

    Parâmetros:
    - linhas (list[list[str]]): linhas de dados do arquivo
    - cabecalhos (list[str]): cabeçalhos do arquivo
    - relogio (callable): fonte da data atual para datas ausentes e ids
    - indice_arquivo (int): posição do arquivo no lote, compõe o id temporário

    Retorno:
    - tuple: (estudantes válidos, falhas por linha), na ordem do arquivo
    """
    posicoes = localizar_colunas(cabecalhos)
    agora = relogio()
    data_padrao = agora.date().isoformat()
    carimbo = int(agora.timestamp() * 1000)

    estudantes: List[RegistroEstudante] = []
    falhas: List[FalhaLinha] = []

    for indice_linha, linha in enumerate(linhas):
        if _linha_vazia(linha):
            continue

        def _token(campo: str) -> str:
            posicao = posicoes[campo]
            if posicao is None or posicao >= len(linha):
                return ""
            return linha[posicao]

        candidato = RegistroEstudante(
            id=f"{Configuracoes.TEMP_ID_PREFIX}-{carimbo}-{indice_arquivo}-{indice_linha}",
            name=_token("name"),
            email=_token("email"),
            grade=converter_nota(_token("grade")),
            course=_token("course"),
            enrollment_date=_token("enrollment_date") or data_padrao,
        )

        erros = validar_estudante(candidato, indice_linha + 2)
        if erros:
            falhas.append(FalhaLinha(row_data=list(linha), errors=erros))
        else:
            estudantes.append(candidato)

    return estudantes, falhas


class ServicoImportacao:
    """Orquestra a importação em lote de arquivos CSV.

    Responsabilidades:
    - Validar o lote recebido
    - Processar cada arquivo em uma tarefa independente
    - Consolidar resultados na ordem de envio
    """

    def __init__(self, relogio: Relogio = datetime.now, codificacao: Optional[str] = None):
        self.relogio = relogio
        self.codificacao = codificacao or Configuracoes.IMPORT_ENCODING

    async def processar_arquivos(self, arquivos: Sequence[ArquivoImportacao]) -> ResultadoImportacao:
        """Processa todos os arquivos e devolve o resultado agregado.

        Parâmetros:
        - arquivos (list[tuple]): pares (nome, conteúdo em texto ou bytes)

        Retorno:
        - ResultadoImportacao: estudantes válidos, falhas e total de linhas

        Exceções:
        - ValueError: quando nenhum arquivo é enviado ou o lote excede o limite
        - RuntimeError: quando a leitura de algum arquivo falha inesperadamente
        """
        if not arquivos:
            raise ValueError("Nenhum arquivo enviado para importação.")

        if len(arquivos) > Configuracoes.MAX_IMPORT_FILES:
            raise ValueError(
                f"Limite de {Configuracoes.MAX_IMPORT_FILES} arquivos por importação excedido "
                f"({len(arquivos)} recebidos)."
            )

        agora = self.relogio()
        tarefas = [
            asyncio.to_thread(self._processar_arquivo, indice, nome, conteudo, agora)
            for indice, (nome, conteudo) in enumerate(arquivos)
        ]

        parciais = await asyncio.gather(*tarefas, return_exceptions=True)

        erros = [parcial for parcial in parciais if isinstance(parcial, BaseException)]
        if erros:
            for erro in erros:
                logger.error(f"Falha inesperada durante a importação: {erro!r}")
            raise RuntimeError(f"Falha ao processar arquivos de importação: {erros[0]}") from erros[0]

        return self._consolidar(parciais)

    def _processar_arquivo(
        self, indice: int, nome: str, conteudo: Union[str, bytes], agora: datetime
    ) -> _ResultadoArquivo:
        """Lê, tokeniza, mapeia e valida um único arquivo.

        Arquivos que não podem ser decodificados contribuem com zero linhas e
        ficam registrados no resumo com a mensagem de erro.
        """
        if isinstance(conteudo, bytes):
            try:
                conteudo = conteudo.decode(self.codificacao)
            except UnicodeDecodeError as erro:
                logger.warning(f"Arquivo '{nome}' ignorado: não foi possível decodificar ({erro}).")
                return _ResultadoArquivo(
                    resumo=ResumoArquivo(file=nome, error=f"Could not decode file as {self.codificacao}"),
                    estudantes=[],
                    falhas=[],
                )

        linhas, cabecalhos = analisar_texto_delimitado(conteudo)
        estudantes, falhas = mapear_linhas_para_estudantes(
            linhas, cabecalhos, relogio=lambda: agora, indice_arquivo=indice
        )

        logger.info(f"Arquivo '{nome}' processado: {len(estudantes)} válidos, {len(falhas)} com erro.")
        return _ResultadoArquivo(
            resumo=ResumoArquivo(file=nome, successful=len(estudantes), failed=len(falhas)),
            estudantes=estudantes,
            falhas=falhas,
        )

    @staticmethod
    def _consolidar(parciais: Sequence[_ResultadoArquivo]) -> ResultadoImportacao:
        estudantes: List[RegistroEstudante] = []
        falhas: List[FalhaLinha] = []
        for parcial in parciais:
            estudantes.extend(parcial.estudantes)
            falhas.extend(parcial.falhas)

        total_linhas = len(estudantes) + len(falhas)
        logger.info(
            f"Importação concluída: {len(parciais)} arquivos, {total_linhas} linhas, "
            f"{len(estudantes)} válidas, {len(falhas)} com erro."
        )

        return ResultadoImportacao(
            successful=estudantes,
            failed=falhas,
            total_rows=total_linhas,
            files=[parcial.resumo for parcial in parciais],
        )
