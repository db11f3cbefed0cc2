"""
Mathematical formulas for ingredient consumption.

These functions implement the individual steps of the "Regra-Mãe"
(the mother rule for consumption by demand): finished weight, waste
factor, weight with waste and lot count. The consumption calculator,
the explosion guard and the validator all derive their figures from
here, so each of them can re-check a result independently.

All functions are pure: they depend solely on their inputs and do
not modify any external state.
"""

from math import ceil
from typing import Optional, Union

Number = Union[int, float]


def peso_total_final_kg(peso_unitario_g: Number, demanda_total_unidades: Number) -> float:
    """Total finished-product weight, in kilograms, before waste.

    The unit weight is given in grams, hence the division by 1000:

        peso_total_final_kg = (peso_unitario_g * demanda) / 1000
    """
    return (peso_unitario_g * demanda_total_unidades) / 1000


def fator_perda(perda_percentual: Number) -> float:
    """Multiplicative waste factor (5 → 1.05)."""
    return 1 + (perda_percentual / 100)


def peso_com_perda_kg(
    peso_unitario_g: Number,
    demanda_total_unidades: Number,
    perda_percentual: Number,
) -> float:
    """Finished weight with the waste factor applied.

    Waste is applied on the raw material, never on the finished product
    count: the finished weight is computed first and then scaled.
    """
    return peso_total_final_kg(peso_unitario_g, demanda_total_unidades) * fator_perda(perda_percentual)


def quantidade_lotes(demanda_total_unidades: Number, equivalencia_por_lote: Optional[Number]) -> int:
    """Number of production lots (traços) needed to cover the demand.

    Only meaningful for organising the production queue; it must never
    be used to compute ingredient consumption. A missing or non-positive
    lot size yields a single lot.
    """
    if equivalencia_por_lote is None or equivalencia_por_lote <= 0:
        return 1
    return int(ceil(demanda_total_unidades / equivalencia_por_lote))
