"""Repositório de estudantes persistido em CSV.

Responsabilidades:
- Carregar o cadastro do disco sob demanda
- Atribuir identificadores duráveis aos registros inseridos
- Regravar o arquivo a cada alteração
"""

import os
import uuid
from threading import Lock, RLock
from typing import Dict, Iterable, List, Optional

import pandas as pd

from src.config.settings import Configuracoes
from src.domain.student import DadosEstudante, EstudanteArmazenado, RegistroEstudante
from src.util.logger import logger

COLUNAS_ARQUIVO = ["id", *Configuracoes.CAMPOS_ESTUDANTE, "createdBy"]


class RepositorioEstudantes:
    """Singleton thread-safe para o cadastro de estudantes.

    Responsabilidades:
    - Manter os registros em memória na ordem de inserção
    - Serializar alterações concorrentes
    - Espelhar o estado no arquivo configurado
    """

    _instancia = None
    _lock = Lock()
    _lock_dados = RLock()

    def __new__(cls):
        """Cria ou reutiliza a instância única.

        Retorno:
        - RepositorioEstudantes: instância singleton
        """
        if cls._instancia is None:
            with cls._lock:
                if cls._instancia is None:
                    instancia = super(RepositorioEstudantes, cls).__new__(cls)
                    instancia._registros = None
                    cls._instancia = instancia
        return cls._instancia

    def _dados(self) -> Dict[str, EstudanteArmazenado]:
        with self._lock_dados:
            if self._registros is None:
                self._registros = self._carregar()
            return self._registros

    @staticmethod
    def _carregar() -> Dict[str, EstudanteArmazenado]:
        """Lê o arquivo de estudantes; ausência do arquivo significa cadastro vazio.

        Exceções:
        - RuntimeError: quando o arquivo existe mas não pode ser lido
        """
        caminho = Configuracoes.STUDENTS_PATH
        if not os.path.exists(caminho):
            logger.info(f"Cadastro de estudantes não encontrado em {caminho}. Iniciando vazio.")
            return {}

        try:
            df = pd.read_csv(caminho, dtype=str, keep_default_na=False)
        except Exception as erro:
            logger.error(f"Erro ao carregar cadastro de estudantes: {erro}")
            raise RuntimeError(f"Cadastro de estudantes ilegível em {caminho}") from erro

        registros = {}
        try:
            for linha in df.to_dict("records"):
                registro = EstudanteArmazenado(
                    id=linha["id"],
                    name=linha.get("name", ""),
                    email=linha.get("email", ""),
                    grade=float(linha.get("grade") or 0),
                    course=linha.get("course", ""),
                    enrollment_date=linha.get("enrollmentDate", ""),
                    created_by=linha.get("createdBy") or None,
                )
                registros[registro.id] = registro
        except (KeyError, ValueError) as erro:
            logger.error(f"Registro inválido no cadastro de estudantes: {erro!r}")
            raise RuntimeError(f"Cadastro de estudantes inválido em {caminho}") from erro

        logger.info(f"Cadastro carregado com {len(registros)} estudantes.")
        return registros

    def _salvar(self, registros: Dict[str, EstudanteArmazenado]) -> None:
        """Grava o cadastro e só então o adota como estado em memória."""
        caminho = Configuracoes.STUDENTS_PATH
        df = pd.DataFrame(
            [registro.model_dump(by_alias=True) for registro in registros.values()],
            columns=COLUNAS_ARQUIVO,
        )
        os.makedirs(os.path.dirname(caminho) or ".", exist_ok=True)
        temporario = f"{caminho}.tmp"
        try:
            df.to_csv(temporario, index=False)
            os.replace(temporario, caminho)
        except OSError as erro:
            logger.error(f"Erro ao gravar cadastro de estudantes: {erro}")
            if os.path.exists(temporario):
                os.remove(temporario)
            raise

        self._registros = registros

    def listar(self) -> List[EstudanteArmazenado]:
        return list(self._dados().values())

    def obter(self, id_estudante: str) -> EstudanteArmazenado:
        """Busca um estudante pelo id.

        Exceções:
        - KeyError: quando o id não existe
        """
        registros = self._dados()
        if id_estudante not in registros:
            raise KeyError(f"Estudante {id_estudante} não encontrado.")
        return registros[id_estudante]

    def inserir_varios(
        self, registros: Iterable[RegistroEstudante], criado_por: Optional[str] = None
    ) -> List[EstudanteArmazenado]:
        """Persiste registros validados com novos ids duráveis.

        Parâmetros:
        - registros (list[RegistroEstudante]): registros válidos (ids temporários são descartados)
        - criado_por (str | None): referência de quem criou

        Retorno:
        - list[EstudanteArmazenado]: registros gravados, na mesma ordem

        Exceções:
        - OSError: quando a gravação falha; o cadastro em memória fica inalterado
        """
        with self._lock_dados:
            novos = dict(self._dados())
            inseridos = []
            for registro in registros:
                armazenado = EstudanteArmazenado(
                    **registro.model_dump(exclude={"id", "created_by"}),
                    id=str(uuid.uuid4()),
                    created_by=criado_por,
                )
                novos[armazenado.id] = armazenado
                inseridos.append(armazenado)

            if inseridos:
                self._salvar(novos)
                logger.info(f"{len(inseridos)} estudantes gravados no cadastro.")
            return inseridos

    def atualizar(self, id_estudante: str, dados_estudante: DadosEstudante) -> EstudanteArmazenado:
        with self._lock_dados:
            atual = self.obter(id_estudante)
            atualizado = atual.model_copy(update=dados_estudante.model_dump())
            novos = dict(self._dados())
            novos[id_estudante] = atualizado
            self._salvar(novos)
            return atualizado

    def remover(self, id_estudante: str) -> None:
        with self._lock_dados:
            self.obter(id_estudante)
            novos = dict(self._dados())
            del novos[id_estudante]
            self._salvar(novos)
            logger.info(f"Estudante {id_estudante} removido do cadastro.")
