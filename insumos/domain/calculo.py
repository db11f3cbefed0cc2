"""
Regra-Mãe de cálculo de insumos por demanda.

Esta é a única regra válida para converter uma demanda de unidades
produzidas em consumo de matéria-prima. Princípios:

- nunca multiplicar a quantidade configurada por lote diretamente pela
  quantidade de unidades;
- toda conversão parte do consumo real por UNIDADE (peso unitário);
- a perda é aplicada sobre a matéria-prima, nunca sobre o produto final;
- unidade nunca é lote, lote nunca é unidade.

O cálculo não lança exceções para entradas numéricas (demanda zero ou
negativa gera dados, não erros); anomalias são relatadas pela proteção
anti-explosão e pelo validador.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from insumos.config import DEFAULTS, LimitesCalculo
from insumos.domain.formulas import fator_perda, peso_total_final_kg, quantidade_lotes
from insumos.domain.models import ParametrosCalculo, ResultadoCalculo, TipoInsumo
from insumos.domain.protecao import avaliar_protecao
from insumos.domain.unidades import converter_para_kg

logger = logging.getLogger("insumos.calculo")


def calcular_consumo_insumo(
    params: ParametrosCalculo,
    limites: LimitesCalculo = DEFAULTS,
) -> ResultadoCalculo:
    """Calcula o consumo de um insumo seguindo a Regra-Mãe.

    PASSO 1: peso total final = (peso unitário × demanda) ÷ 1000
    PASSO 2: fator de perda = 1 + perda% ÷ 100
    PASSO 3: peso total com perda = peso total × fator de perda
    PASSO 4: tipo ``PESO`` → consumo = peso total com perda;
             tipo ``UNIDADE`` → consumo = demanda × quantidade por unidade
    PASSO 5: unidade ``g``/``ml`` → consumo em kg = consumo ÷ 1000
    PASSO 6: alerta suave se consumo em kg > 5 × peso total com perda
             (apenas insumos ``PESO``)
    """
    insumo = params.insumo

    peso_final_kg = peso_total_final_kg(params.peso_unitario_g, params.demanda_total_unidades)
    peso_perda_kg = peso_final_kg * fator_perda(params.perda_percentual)

    if insumo.tipo == TipoInsumo.PESO:
        consumo_calculado = peso_perda_kg
    else:
        # quantidade_por_referencia aqui é "por unidade", nunca por lote
        consumo_calculado = params.demanda_total_unidades * insumo.quantidade_por_referencia

    consumo_em_kg = converter_para_kg(consumo_calculado, insumo.unidade)

    alerta = (
        insumo.tipo == TipoInsumo.PESO
        and consumo_em_kg > limites.fator_alerta_excessivo * peso_perda_kg
    )
    if alerta:
        logger.warning(
            "ALERTA REGRA-MÃE: consumo excessivo insumo=%s consumo=%.2fkg peso_com_perda=%.2fkg razao=%.1fx",
            insumo.nome or "-",
            consumo_em_kg,
            peso_perda_kg,
            consumo_em_kg / peso_perda_kg if peso_perda_kg else float("inf"),
        )

    protecao = avaliar_protecao(params, consumo_calculado, consumo_em_kg, limites=limites)

    return ResultadoCalculo(
        consumo_calculado=consumo_calculado,
        consumo_em_kg=consumo_em_kg,
        peso_total_final_kg=peso_final_kg,
        peso_total_com_perda_kg=peso_perda_kg,
        alerta_consumo_excessivo=alerta,
        protecao=protecao,
    )


def calcular_quantidade_lotes(
    demanda_total_unidades: Union[int, float],
    equivalencia_por_lote: Optional[Union[int, float]],
) -> int:
    """Número de lotes/traços para a fila de produção (não para consumo)."""
    return quantidade_lotes(demanda_total_unidades, equivalencia_por_lote)
