"""Modelos de domínio do cadastro de estudantes.

Responsabilidades:
- Representar registros de estudante e falhas de importação
- Expor chaves JSON em camelCase para os clientes
- Garantir imutabilidade dos resultados de uma importação
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ModeloImutavel(BaseModel):
    """Base congelada que aceita nome de campo ou alias."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ErroValidacao(ModeloImutavel):
    """Uma regra violada por uma linha."""

    row: int
    field: str
    message: str


class RegistroEstudante(ModeloImutavel):
    """Registro de estudante com os cinco campos canônicos.

    A nota pode ser NaN enquanto o registro ainda é candidato; a validação
    decide se ele entra no conjunto válido.
    """

    id: str
    name: str = ""
    email: str = ""
    grade: float = 0.0
    course: str = ""
    enrollment_date: str = Field("", alias="enrollmentDate")


class EstudanteArmazenado(RegistroEstudante):
    """Registro persistido, com identificador durável e autor."""

    created_by: Optional[str] = Field(None, alias="createdBy")


class DadosEstudante(BaseModel):
    """Dados enviados pelo cliente para criar ou editar um estudante."""

    name: str = ""
    email: str = ""
    grade: float = 0.0
    course: str = ""
    enrollment_date: str = Field(default_factory=lambda: date.today().isoformat(), alias="enrollmentDate")

    model_config = ConfigDict(populate_by_name=True)


class FalhaLinha(ModeloImutavel):
    """Linha bruta rejeitada e a lista ordenada de erros."""

    row_data: List[str] = Field(default_factory=list, alias="rowData")
    errors: List[ErroValidacao] = Field(default_factory=list)


class ResumoArquivo(ModeloImutavel):
    """Contagens de um arquivo dentro de uma importação."""

    file: str
    successful: int = 0
    failed: int = 0
    error: Optional[str] = None


class ResultadoImportacao(ModeloImutavel):
    """Resultado agregado de uma execução de importação."""

    successful: List[RegistroEstudante] = Field(default_factory=list)
    failed: List[FalhaLinha] = Field(default_factory=list)
    total_rows: int = Field(0, alias="totalRows")
    files: List[ResumoArquivo] = Field(default_factory=list)


class ErroValidacaoEstudante(ValueError):
    """Payload de estudante rejeitado pelas regras de validação."""

    def __init__(self, erros: List[ErroValidacao]):
        super().__init__("; ".join(erro.message for erro in erros))
        self.erros = erros
