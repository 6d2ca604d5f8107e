"""Regras de validação de um registro de estudante.

Responsabilidades:
- Avaliar todas as regras de campo sem interromper na primeira falha
- Manter ordem estável dos erros (nome, email, nota, curso, data)
"""

import math
import re
from datetime import date
from typing import List

from src.domain.student import ErroValidacao, RegistroEstudante

PADRAO_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PADRAO_DATA = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

MENSAGEM_DATA_INVALIDA = "Enrollment date is not valid (use YYYY-MM-DD format)"


def email_valido(email: str) -> bool:
    return PADRAO_EMAIL.fullmatch(email) is not None


def data_valida(texto: str) -> bool:
    """Indica se o texto é uma data YYYY-MM-DD real do calendário.

    Parâmetros:
    - texto (str): data informada

    Retorno:
    - bool: True quando o formato bate e a data reconstruída é idêntica
    """
    if not PADRAO_DATA.fullmatch(texto):
        return False

    try:
        convertida = date.fromisoformat(texto)
    except ValueError:
        return False

    return convertida.isoformat() == texto


def _vazio(valor: str) -> bool:
    return not valor or not valor.strip()


def validar_estudante(candidato: RegistroEstudante, numero_linha: int) -> List[ErroValidacao]:
    """Valida um candidato e devolve todos os erros encontrados.

    Parâmetros:
    - candidato (RegistroEstudante): registro já montado com defaults
    - numero_linha (int): linha de origem no arquivo (0 para formulários)

    Retorno:
    - list[ErroValidacao]: erros na ordem das regras; vazio quando válido
    """
    erros: List[ErroValidacao] = []

    def _registrar(campo: str, mensagem: str) -> None:
        erros.append(ErroValidacao(row=numero_linha, field=campo, message=mensagem))

    if _vazio(candidato.name):
        _registrar("name", "Name is required")

    if _vazio(candidato.email):
        _registrar("email", "Email is required")
    elif not email_valido(candidato.email):
        _registrar("email", "Email is not valid")

    if not math.isfinite(candidato.grade):
        _registrar("grade", "Grade must be a number")
    elif candidato.grade < 0 or candidato.grade > 100:
        _registrar("grade", "Grade must be between 0 and 100")

    if _vazio(candidato.course):
        _registrar("course", "Course is required")

    if candidato.enrollment_date and not data_valida(candidato.enrollment_date):
        _registrar("enrollmentDate", MENSAGEM_DATA_INVALIDA)

    return erros
