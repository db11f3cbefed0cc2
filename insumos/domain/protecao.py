"""
Proteção automática contra explosão de consumo.

Detecta erros de cadastro (por exemplo, quantidade de insumo informada
"por lote de 500 unidades" em vez de "por unidade") que produziriam
números absurdos de consumo e de compra.

A proteção apenas relata: nunca limita nem altera o consumo calculado.
Quem chama decide se bloqueia, avisa ou libera a produção.
"""

from __future__ import annotations

import logging
from typing import Optional

from insumos.config import DEFAULTS, LimitesCalculo
from insumos.domain.formulas import peso_com_perda_kg
from insumos.domain.models import ParametrosCalculo, ProtecaoAntiExplosao, TipoInsumo
from insumos.domain.unidades import converter_para_kg

logger = logging.getLogger("insumos.protecao")

MENSAGEM_PROTECAO = (
    "Erro lógico detectado: consumo acima do limite físico possível. "
    "Verifique cadastro por lote/traço."
)


def avaliar_protecao(
    params: ParametrosCalculo,
    consumo_calculado: float,
    consumo_em_kg: Optional[float] = None,
    limites: LimitesCalculo = DEFAULTS,
) -> ProtecaoAntiExplosao:
    """Avalia um consumo contra o limite físico plausível.

    Regras:
        - insumo ``PESO``: limite = peso total com perda × 3, comparado
          com o consumo em kg;
        - insumo ``UNIDADE``: limite = demanda × 3, comparado com o
          consumo na unidade cadastrada.

    Args:
        params: Parâmetros do cálculo avaliado.
        consumo_calculado: Consumo na unidade cadastrada do insumo.
        consumo_em_kg: Consumo normalizado para kg. Se omitido, é derivado
            de ``consumo_calculado`` pela unidade do insumo.
        limites: Multiplicadores dos limites físicos.

    Returns:
        ``ProtecaoAntiExplosao`` com o limite, o consumo observado, a razão
        de excesso (0 quando dentro do limite) e a mensagem de erro.
    """
    if consumo_em_kg is None:
        consumo_em_kg = converter_para_kg(consumo_calculado, params.insumo.unidade)

    if params.insumo.tipo == TipoInsumo.PESO:
        peso_kg = peso_com_perda_kg(
            params.peso_unitario_g, params.demanda_total_unidades, params.perda_percentual
        )
        limite_maximo = peso_kg * limites.fator_limite_peso
        consumo_observado = consumo_em_kg
    else:
        limite_maximo = params.demanda_total_unidades * limites.fator_limite_unidade
        consumo_observado = consumo_calculado

    excede_limite = consumo_observado > limite_maximo
    if not excede_limite:
        return ProtecaoAntiExplosao(
            excede_limite=False,
            limite_maximo=limite_maximo,
            consumo_observado=consumo_observado,
            razao_excedente=0.0,
            mensagem_erro=None,
        )

    if limite_maximo == 0:
        razao = float("inf")
    else:
        razao = consumo_observado / limite_maximo

    logger.error(
        "PROTEÇÃO ANTI-EXPLOSÃO ATIVADA: insumo=%s consumo=%.2f %s limite=%.2f razao=%.1fx",
        params.insumo.nome or "-",
        consumo_observado,
        "kg" if params.insumo.tipo == TipoInsumo.PESO else params.insumo.unidade,
        limite_maximo,
        razao,
    )
    return ProtecaoAntiExplosao(
        excede_limite=True,
        limite_maximo=limite_maximo,
        consumo_observado=consumo_observado,
        razao_excedente=razao,
        mensagem_erro=MENSAGEM_PROTECAO,
    )
