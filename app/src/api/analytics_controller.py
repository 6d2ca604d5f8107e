"""Controlador de indicadores do painel.

Responsabilidades:
- Expor o resumo analítico do cadastro
- Fornecer dependência do serviço analítico
"""

from fastapi import APIRouter, Depends, HTTPException

from src.application.analytics_service import ServicoAnalitico


def obter_servico_analitico():
    """Dependência para obter uma instância do serviço analítico.

    Retorno:
    - ServicoAnalitico: instância pronta para uso
    """
    return ServicoAnalitico()


class ControladorAnalitico:
    """Controlador para endpoints do painel.

    Responsabilidades:
    - Registrar rota de resumo
    """

    def __init__(self):
        self.roteador = APIRouter()
        self.roteador.add_api_route(
            "/analytics/summary",
            self._obter_resumo,
            methods=["GET"],
            response_model=dict,
            summary="Totais, distribuições e destaques do cadastro",
        )

    @staticmethod
    async def _obter_resumo(servico: ServicoAnalitico = Depends(obter_servico_analitico)):
        """Retorna os dados consumidos pelos gráficos do painel."""
        try:
            return servico.obter_resumo()
        except RuntimeError as erro:
            raise HTTPException(status_code=503, detail=str(erro))
