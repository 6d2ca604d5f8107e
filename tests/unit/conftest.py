"""Fixtures compartilhadas para os testes."""

import sys
from datetime import datetime
from pathlib import Path

import pytest


RAIZ = Path(__file__).resolve().parents[2]
DIRETORIO_APP = RAIZ / "app"
if str(DIRETORIO_APP) not in sys.path:
    sys.path.insert(0, str(DIRETORIO_APP))

from src.config.settings import Configuracoes  # noqa: E402
from src.infrastructure.data.student_repository import RepositorioEstudantes  # noqa: E402

DATA_FIXA = datetime(2024, 3, 10, 12, 0, 0)
CABECALHO = "name,email,grade,course,enrollmentDate"


@pytest.fixture(autouse=True)
def cadastro_isolado(tmp_path, monkeypatch):
    """Aponta o cadastro para um arquivo temporário e zera o singleton."""
    caminho = tmp_path / "students.csv"
    monkeypatch.setattr(Configuracoes, "STUDENTS_PATH", str(caminho))
    RepositorioEstudantes._instancia = None
    yield caminho
    RepositorioEstudantes._instancia = None


@pytest.fixture()
def relogio_fixo():
    """Relógio que sempre retorna a mesma data."""
    return lambda: DATA_FIXA


@pytest.fixture()
def csv_valido():
    """Retorna um CSV com três estudantes válidos."""
    return "\n".join(
        [
            CABECALHO,
            "Jane Doe,jane@example.com,95,Biology,2024-01-15",
            "John Roe,john@example.com,72.5,Chemistry,2023-09-01",
            "\"Smith, Ann\",ann@example.com,88,Biology,2024-02-29",
        ]
    )


@pytest.fixture()
def csv_misto():
    """Retorna um CSV com um estudante válido e um inválido."""
    return "\r\n".join(
        [
            CABECALHO,
            "Mary Poe,mary@example.com,64,History,2024-01-20",
            ",bad-email,150,,2024-13-40",
        ]
    )


@pytest.fixture()
def dados_estudante():
    """Retorna o payload de criação de um estudante."""
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "grade": 95,
        "course": "Biology",
        "enrollmentDate": "2024-01-15",
    }
