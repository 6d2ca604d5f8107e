"""Testes das regras de validação de estudantes."""

import math

import pytest

from src.domain.student import RegistroEstudante
from src.domain.validation import data_valida, email_valido, validar_estudante


def _registro(**campos):
    base = {
        "id": "temp-1",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "grade": 95.0,
        "course": "Biology",
        "enrollment_date": "2024-01-15",
    }
    base.update(campos)
    return RegistroEstudante(**base)


def _mensagens(erros):
    return [erro.message for erro in erros]


def test_registro_valido_sem_erros():
    assert validar_estudante(_registro(), 2) == []


def test_todos_os_erros_na_ordem_das_regras():
    erros = validar_estudante(
        _registro(name="", email="bad-email", grade=150.0, course="", enrollment_date="2024-13-40"), 3
    )

    assert _mensagens(erros) == [
        "Name is required",
        "Email is not valid",
        "Grade must be between 0 and 100",
        "Course is required",
        "Enrollment date is not valid (use YYYY-MM-DD format)",
    ]
    assert [erro.field for erro in erros] == ["name", "email", "grade", "course", "enrollmentDate"]
    assert {erro.row for erro in erros} == {3}


def test_campos_somente_com_espacos_sao_obrigatorios():
    erros = validar_estudante(_registro(name="   ", email="  ", course="\t"), 4)

    assert _mensagens(erros) == ["Name is required", "Email is required", "Course is required"]


def test_email_vazio_nao_verifica_formato():
    erros = validar_estudante(_registro(email=""), 2)

    assert _mensagens(erros) == ["Email is required"]


@pytest.mark.parametrize("nota", [math.nan, math.inf, -math.inf])
def test_nota_nao_numerica_gera_apenas_erro_de_numero(nota):
    erros = validar_estudante(_registro(grade=nota), 2)

    assert _mensagens(erros) == ["Grade must be a number"]


@pytest.mark.parametrize("nota,valida", [(0.0, True), (100.0, True), (-0.1, False), (100.01, False)])
def test_limites_da_nota(nota, valida):
    erros = validar_estudante(_registro(grade=nota), 2)

    assert (erros == []) is valida


def test_data_vazia_nao_e_validada():
    assert validar_estudante(_registro(enrollment_date=""), 2) == []


@pytest.mark.parametrize(
    "texto,esperado",
    [
        ("2024-01-15", True),
        ("2024-02-29", True),
        ("2023-02-29", False),
        ("2024-04-31", False),
        ("2024-1-15", False),
        ("15/01/2024", False),
        ("2024-01-15T00:00", False),
        ("2024-01-15\n", False),
    ],
)
def test_data_valida(texto, esperado):
    assert data_valida(texto) is esperado


@pytest.mark.parametrize(
    "email,esperado",
    [
        ("a@b.co", True),
        ("first.last@school.edu", True),
        ("bad-email", False),
        ("a@b", False),
        ("a b@c.d", False),
        ("a@@b.c", False),
    ],
)
def test_email_valido(email, esperado):
    assert email_valido(email) is esperado
