"""Fábrica de logger da aplicação.

Responsabilidades:
- Configurar loggers de forma padronizada
- Evitar duplicação de handlers
- Direcionar saída para stdout
"""

import logging
import sys

from src.config.settings import Configuracoes

FORMATO_LOG = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FORMATO_DATA = "%Y-%m-%d %H:%M:%S"


class FabricaLogger:
    """Responsável por configurar e fornecer instâncias de Logger.

    Responsabilidades:
    - Configuração única por nome de logger
    - Nível vindo das configurações
    - Handler de console
    """

    @classmethod
    def configurar(cls, nome: str = "REGISTRO_ESTUDANTES_APP", nivel: str | None = None):
        """Configura o logger se ainda não tiver handlers.

        Parâmetros:
        - nome (str): nome do logger
        - nivel (str | None): nível explícito; usa LOG_LEVEL quando omitido

        Retorno:
        - logging.Logger: logger configurado
        """
        logger_instancia = logging.getLogger(nome)

        if logger_instancia.handlers:
            return logger_instancia

        logger_instancia.setLevel(nivel or Configuracoes.LOG_LEVEL)

        handler_console = logging.StreamHandler(sys.stdout)
        handler_console.setFormatter(logging.Formatter(fmt=FORMATO_LOG, datefmt=FORMATO_DATA))
        logger_instancia.addHandler(handler_console)
        logger_instancia.propagate = False

        return logger_instancia


logger = FabricaLogger.configurar()
