"""
Validação diagnóstica de cálculos de insumo.

Não é uma trava de segurança: procura um erro de cadastro conhecido
(multiplicar a quantidade configurada por lote pelo número de lotes) e
consumos negativos, devolvendo mensagens para revisão humana.
"""

from __future__ import annotations

from typing import List

from insumos.config import DEFAULTS, LimitesCalculo
from insumos.domain.formulas import peso_total_final_kg, quantidade_lotes
from insumos.domain.models import ParametrosCalculo, ResultadoCalculo, TipoInsumo
from insumos.domain.unidades import diagnosticar_unidade

MENSAGEM_MULTIPLICACAO_LOTE = "Possível erro: multiplicação direta por lote detectada"
MENSAGEM_CONSUMO_NEGATIVO = "Consumo negativo não é válido"


def validar_calculo_insumo(
    params: ParametrosCalculo,
    consumo_calculado: float,
    limites: LimitesCalculo = DEFAULTS,
) -> List[str]:
    """Valida se o consumo informado é coerente com a Regra-Mãe.

    Regras:
        - Só para insumos de peso com equivalência por lote positiva, calcula
          ``lotes = ceil(demanda / equivalencia)`` e o valor suspeito
          ``lotes × quantidade``. Se o consumo coincide com o suspeito
          (tolerância 0,01) e o suspeito não coincide, por acaso, com o
          peso correto (tolerância 0,1), relata multiplicação por lote.
        - Consumo negativo é sempre inválido.

    Returns:
        Lista de diagnósticos (vazia quando nada foi encontrado).
    """
    erros: List[str] = []

    equivalencia = params.equivalencia_por_lote_unidades
    if params.insumo.tipo == TipoInsumo.PESO and equivalencia is not None and equivalencia > 0:
        lotes = quantidade_lotes(params.demanda_total_unidades, equivalencia)
        suspeito = lotes * params.insumo.quantidade_por_referencia
        if abs(consumo_calculado - suspeito) < limites.tolerancia_lote and suspeito > 0:
            peso_correto = peso_total_final_kg(params.peso_unitario_g, params.demanda_total_unidades)
            if abs(suspeito - peso_correto) > limites.tolerancia_peso:
                erros.append(MENSAGEM_MULTIPLICACAO_LOTE)

    if consumo_calculado < 0:
        erros.append(MENSAGEM_CONSUMO_NEGATIVO)

    return erros


def validar_resultado(
    params: ParametrosCalculo,
    resultado: ResultadoCalculo,
    limites: LimitesCalculo = DEFAULTS,
) -> List[str]:
    """Valida um ``ResultadoCalculo`` e acrescenta o diagnóstico de unidade."""
    erros = validar_calculo_insumo(params, resultado.consumo_calculado, limites=limites)
    erros.extend(diagnosticar_unidade(params.insumo.unidade))
    return erros
