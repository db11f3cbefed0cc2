# insumos/config.py
"""
Configurações globais e limites padrão do motor de cálculo de insumos.
"""

import os
from dataclasses import dataclass


# Diretório padrão dos arquivos de log
LOGS_DIR = os.environ.get("INSUMOS_LOGS_DIR", os.path.join(os.getcwd(), "logs"))


@dataclass(frozen=True)
class LimitesCalculo:
    """Limites físicos e tolerâncias usados pelo cálculo e pelas validações."""
    fator_limite_peso: float = 3.0        # insumo peso: até 3x o peso final com perda
    fator_limite_unidade: float = 3.0     # insumo unidade: até 3 por unidade produzida
    fator_alerta_excessivo: float = 5.0   # alerta suave: consumo > 5x o peso com perda
    tolerancia_lote: float = 0.01         # igualdade com "lotes x quantidade"
    tolerancia_peso: float = 0.1          # coincidência com o peso correto


# Instância global dos valores padrão
DEFAULTS = LimitesCalculo()
