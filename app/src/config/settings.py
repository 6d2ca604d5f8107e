"""Configurações centrais do projeto.

Responsabilidades:
- Definir caminhos de arquivos
- Definir limites da importação em lote
- Definir colunas canônicas do cadastro de estudantes
"""

import os
from pathlib import Path


class Configuracoes:
    """Centraliza configurações da aplicação.

    Responsabilidades:
    - Fornecer caminhos de diretórios
    - Declarar constantes de importação e análise
    - Listar colunas aceitas no CSV
    """

    BASE_DIR = Path(__file__).resolve().parents[2]
    DEFAULT_DATA_DIR = os.path.join(BASE_DIR, "data")
    DATA_DIR = os.path.abspath(os.getenv("DATA_DIR", DEFAULT_DATA_DIR))
    STUDENTS_PATH = os.getenv("STUDENTS_PATH", os.path.join(DATA_DIR, "students.csv"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    IMPORT_ENCODING = os.getenv("IMPORT_ENCODING", "utf-8-sig")
    MAX_IMPORT_FILES = int(os.getenv("MAX_IMPORT_FILES", "20"))
    TEMP_ID_PREFIX = "temp"

    TOP_PERFORMER_MIN_GRADE = float(os.getenv("TOP_PERFORMER_MIN_GRADE", "90"))
    NEEDS_IMPROVEMENT_MAX_GRADE = float(os.getenv("NEEDS_IMPROVEMENT_MAX_GRADE", "70"))

    # Ordem usada na exportação e no arquivo persistido.
    CAMPOS_ESTUDANTE = ["name", "email", "grade", "course", "enrollmentDate"]
