"""
Políticas de entrada e de compra para o cálculo de insumos.

Este módulo contém a camada de guarda de entrada (rejeita parâmetros
fisicamente impossíveis antes de chamar o núcleo puro), a classificação
de status da necessidade de compra e o arredondamento de quantidades a
múltiplos de embalagem. São usadas pelos casos de uso de produção e de
necessidade de compra.
"""

from __future__ import annotations

from math import ceil
from typing import List, Optional

from insumos.domain.models import ParametrosCalculo


class ParametrosInvalidosError(ValueError):
    """Parâmetros de cálculo rejeitados pela guarda de entrada."""

    def __init__(self, erros: List[str]):
        self.erros = list(erros)
        super().__init__("; ".join(self.erros))


def erros_parametros(params: ParametrosCalculo) -> List[str]:
    """Lista os problemas de entrada de um cálculo, sem lançar exceção.

    Regras:
        - demanda negativa;
        - peso unitário negativo;
        - perda percentual negativa.
    """
    erros: List[str] = []
    if params.demanda_total_unidades < 0:
        erros.append(f"Demanda negativa: {params.demanda_total_unidades}")
    if params.peso_unitario_g < 0:
        erros.append(f"Peso unitário negativo: {params.peso_unitario_g}")
    if params.perda_percentual < 0:
        erros.append(f"Perda percentual negativa: {params.perda_percentual}")
    return erros


def exigir_parametros_validos(params: ParametrosCalculo) -> ParametrosCalculo:
    """Guarda de entrada: lança ``ParametrosInvalidosError`` se houver problemas.

    Returns:
        Os próprios ``params``, para permitir encadeamento.
    """
    erros = erros_parametros(params)
    if erros:
        raise ParametrosInvalidosError(erros)
    return params


def status_necessidade(saldo_apos_producao: float, estoque_minimo: float) -> str:
    """Classifica a situação de um insumo depois da produção prevista.

    Regras:
        - ``saldo <= 0`` → ``'critico'``
        - ``saldo <= estoque_minimo`` → ``'alerta'``
        - caso contrário → ``'ok'``
    """
    if saldo_apos_producao <= 0:
        return "critico"
    if saldo_apos_producao <= estoque_minimo:
        return "alerta"
    return "ok"


def quantidade_a_comprar(saldo_apos_producao: float, estoque_minimo: float) -> float:
    """Quantidade para repor o saldo até o estoque mínimo."""
    status = status_necessidade(saldo_apos_producao, estoque_minimo)
    if status == "critico":
        return abs(saldo_apos_producao) + estoque_minimo
    if status == "alerta":
        return estoque_minimo - saldo_apos_producao
    return 0.0


def arredonda_multiplo(x: Optional[float], mult: Optional[float]) -> Optional[float]:
    """Arredonda ``x`` para cima ao múltiplo de embalagem ``mult``.

    Caso ``mult`` seja ``None`` ou menor ou igual a zero, retorna ``x``
    sem alteração.

    Returns:
        ``ceil(x / mult) * mult`` se ``mult`` for positivo; caso
        contrário, ``x``.
    """
    if x is None:
        return None
    val = float(x)
    if mult is None:
        return val
    m = float(mult)
    if m <= 0:
        return val
    return ceil(val / m) * m
