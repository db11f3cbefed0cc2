"""
Classificação de unidades de medida de insumos.

A unidade cadastrada é texto livre (``kg``, ``g``, ``ml``, ``un``,
``pcs``...). Ela decide duas coisas:

- se o insumo é consumido por contagem (``TipoInsumo.UNIDADE``) ou em
  proporção ao peso produzido (``TipoInsumo.PESO``);
- se o consumo precisa ser convertido de gramas/mililitros para kg.

Unidades desconhecidas são tratadas como peso. Essa política é mantida,
mas ``diagnosticar_unidade`` permite relatar o caso separadamente.
"""

from __future__ import annotations

from typing import List, Optional

from insumos.domain.models import TipoInsumo

UNIDADES_DISCRETAS = frozenset({"un", "unidade", "unidades", "pcs", "pc", "peça", "peças"})
UNIDADES_MILESIMAIS = frozenset({"g", "ml"})
UNIDADES_MASSA_VOLUME = frozenset({"kg", "g", "l", "ml"})


def _lower(unidade: Optional[str]) -> str:
    return "" if unidade is None else str(unidade).lower()


def determinar_tipo_insumo(unidade: Optional[str]) -> TipoInsumo:
    """Determina o tipo do insumo a partir da unidade de medida.

    Regra:
        - ``un``, ``unidade``, ``unidades``, ``pcs``, ``pc``, ``peça``,
          ``peças`` (qualquer caixa) → ``TipoInsumo.UNIDADE``
        - qualquer outra coisa → ``TipoInsumo.PESO``

    Apenas sinônimos exatos contam: ``"pç"`` não está na lista e é peso.
    """
    if _lower(unidade) in UNIDADES_DISCRETAS:
        return TipoInsumo.UNIDADE
    return TipoInsumo.PESO


def converter_para_kg(consumo: float, unidade: Optional[str]) -> float:
    """Converte o consumo para kg quando a unidade é ``g`` ou ``ml``."""
    if _lower(unidade) in UNIDADES_MILESIMAIS:
        return consumo / 1000
    return consumo


def unidade_reconhecida(unidade: Optional[str]) -> bool:
    u = _lower(unidade)
    return u in UNIDADES_DISCRETAS or u in UNIDADES_MASSA_VOLUME


def diagnosticar_unidade(unidade: Optional[str]) -> List[str]:
    """Retorna um diagnóstico quando a unidade não é reconhecida.

    A classificação continua sendo ``PESO``; o diagnóstico serve apenas
    para revisão humana do cadastro.
    """
    if unidade_reconhecida(unidade):
        return []
    return [
        f"Unidade não reconhecida: {unidade!r}. Assumindo insumo proporcional ao peso."
    ]
