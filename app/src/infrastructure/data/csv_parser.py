"""Leitura de texto CSV enviado para importação.

Responsabilidades:
- Separar linhas e descartar linhas em branco
- Extrair cabeçalhos
- Tokenizar campos respeitando aspas
"""

import re
from typing import List, Tuple

SEPARADOR_LINHAS = re.compile(r"\r?\n")
BOM = "\ufeff"


def tokenizar_linha(linha: str) -> List[str]:
    """Divide uma linha em campos, tratando vírgulas entre aspas como texto.

    Aspas apenas alternam o modo "entre aspas" e são descartadas; aspas
    duplicadas não viram uma aspa literal.

    Parâmetros:
    - linha (str): linha de dados

    Retorno:
    - list[str]: campos sem espaços nas bordas
    """
    campos = []
    atual = []
    entre_aspas = False

    for caractere in linha:
        if caractere == '"':
            entre_aspas = not entre_aspas
        elif caractere == "," and not entre_aspas:
            campos.append("".join(atual).strip())
            atual = []
        else:
            atual.append(caractere)

    campos.append("".join(atual).strip())
    return campos


def analisar_texto_delimitado(conteudo: str) -> Tuple[List[List[str]], List[str]]:
    """Converte texto CSV em linhas tokenizadas e cabeçalhos.

    Parâmetros:
    - conteudo (str): texto completo do arquivo

    Retorno:
    - tuple: (linhas de dados, cabeçalhos); ambos vazios quando não há conteúdo
    """
    if conteudo.startswith(BOM):
        conteudo = conteudo[len(BOM):]

    linhas = [linha for linha in SEPARADOR_LINHAS.split(conteudo) if linha.strip() != ""]
    if not linhas:
        return [], []

    cabecalhos = [cabecalho.strip() for cabecalho in linhas[0].split(",")]
    dados = [tokenizar_linha(linha) for linha in linhas[1:]]

    return dados, cabecalhos
