"""Serviço de indicadores do painel de estudantes.

Responsabilidades:
- Contar estudantes e calcular a nota média
- Distribuir estudantes por curso e por nota
- Destacar melhores desempenhos e quem precisa de reforço
"""

from typing import Optional

import pandas as pd

from src.config.settings import Configuracoes
from src.infrastructure.data.student_repository import RepositorioEstudantes


class ServicoAnalitico:
    """Calcula os dados consumidos pelos gráficos do painel.

    Responsabilidades:
    - Montar DataFrame a partir do repositório
    - Agregar por curso e por nota
    - Aplicar limites configurados de desempenho
    """

    def __init__(self, repositorio: Optional[RepositorioEstudantes] = None):
        self.repositorio = repositorio or RepositorioEstudantes()

    def _carregar_dataframe(self) -> pd.DataFrame:
        registros = [estudante.model_dump(by_alias=True) for estudante in self.repositorio.listar()]
        return pd.DataFrame(registros, columns=["id", *Configuracoes.CAMPOS_ESTUDANTE])

    def obter_resumo(self) -> dict:
        """Retorna o resumo completo do painel.

        Retorno:
        - dict: totais, distribuições e listas de destaque
        """
        df = self._carregar_dataframe()
        if df.empty:
            return {
                "totalStudents": 0,
                "averageGrade": 0.0,
                "courseDistribution": [],
                "gradeDistribution": [],
                "topPerformers": [],
                "needsImprovement": [],
            }

        df["grade"] = pd.to_numeric(df["grade"], errors="coerce")

        return {
            "totalStudents": int(len(df)),
            "averageGrade": round(float(df["grade"].mean()), 2),
            "courseDistribution": self._distribuicao_cursos(df),
            "gradeDistribution": self._distribuicao_notas(df),
            "topPerformers": self._selecionar(df, df["grade"] >= Configuracoes.TOP_PERFORMER_MIN_GRADE),
            "needsImprovement": self._selecionar(df, df["grade"] < Configuracoes.NEEDS_IMPROVEMENT_MAX_GRADE),
        }

    @staticmethod
    def _distribuicao_cursos(df: pd.DataFrame) -> list:
        contagem = df.groupby("course", sort=False).size()
        return [{"name": str(curso), "value": int(total)} for curso, total in contagem.items()]

    @staticmethod
    def _distribuicao_notas(df: pd.DataFrame) -> list:
        contagem = df.groupby("grade").size().sort_index()
        return [{"grade": float(nota), "count": int(total)} for nota, total in contagem.items()]

    @staticmethod
    def _selecionar(df: pd.DataFrame, mascara: pd.Series) -> list:
        selecionados = df.loc[mascara].sort_values("grade", ascending=False, kind="stable")
        return selecionados.to_dict("records")
