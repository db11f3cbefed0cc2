# insumos/domain/models.py
"""
Modelos (dataclasses) do domínio de cálculo de insumos.

Observação importante:
- Todas as entidades são criadas a cada cálculo e nunca persistidas aqui.
- São imutáveis (frozen); quem chama decide se e onde guardar o resultado.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class TipoInsumo(str, Enum):
    """Como o insumo escala com a produção."""
    PESO = "peso"          # proporcional ao peso produzido (massa, recheio)
    UNIDADE = "unidade"    # proporcional à contagem (embalagem, etiqueta)


@dataclass(frozen=True)
class Insumo:
    """Configuração de um insumo dentro da ficha técnica de um item."""
    quantidade_por_referencia: float
    tipo: TipoInsumo
    unidade: str                      # kg, g, ml, l, un, pcs... (texto livre)
    nome: Optional[str] = None


@dataclass(frozen=True)
class ParametrosCalculo:
    """Entrada de um cálculo de consumo."""
    demanda_total_unidades: float
    peso_unitario_g: float
    perda_percentual: float
    insumo: Insumo
    equivalencia_por_lote_unidades: Optional[float] = None   # só para planejar lotes


@dataclass(frozen=True)
class ProtecaoAntiExplosao:
    """Resultado da proteção contra explosão de consumo (apenas relata)."""
    excede_limite: bool
    limite_maximo: float
    consumo_observado: float
    razao_excedente: float
    mensagem_erro: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ResultadoCalculo:
    """Resultado de ``calcular_consumo_insumo``."""
    consumo_calculado: float
    consumo_em_kg: float
    peso_total_final_kg: float
    peso_total_com_perda_kg: float
    alerta_consumo_excessivo: bool
    protecao: ProtecaoAntiExplosao

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
