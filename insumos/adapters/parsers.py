"""
Utilidades de parsing para quantidades, números e pesos digitados.

Este módulo interpreta strings no formato encontrado nas planilhas de
ficha técnica (por exemplo, "0,4 kg - Quilograma" ou "200g") e o peso
digitado de forma progressiva nas telas de contagem (até 3 dígitos são
gramas, a partir de 4 dígitos o valor é exibido em kg).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

# "1.500" sem vírgula segue como decimal (1.5); com vírgula ou mais de um ponto, o ponto é milhar
_NUM = r"[-+]?(?:\d{1,3}(?:\.\d{3})+(?:,\d+)?|\d+(?:[.,]\d+)?)"
_NUM_RE = re.compile(_NUM)
_QTD_RE = re.compile(r"^\s*(" + _NUM + r")\s*([^\d\s-][^\s-]*)?")


def _to_float(s: str) -> float:
    if "," in s or s.count(".") > 1:
        s = s.replace(".", "").replace(",", ".")
    return float(s)


def parse_numero(val: Any) -> Optional[float]:
    """Converte um valor de planilha em float (aceita vírgula decimal).

    Examples:
        "5,5" → 5.5; "1.234,5" → 1234.5; "  10 " → 10.0; "" → None; "abc" → None
    """
    if val is None:
        return None
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return float(val)
    s = str(val).strip()
    if not s:
        return None
    m = _NUM_RE.search(s)
    if not m:
        return None
    return _to_float(m.group(0))


def parse_quantidade_raw(txt: Optional[str]) -> Tuple[Optional[float], Optional[str], Optional[str]]:
    """Interpreta uma string de quantidade com unidade.

    A string de entrada segue o padrão "<valor> <unidade> - <descrição>",
    com ou sem espaço entre valor e unidade. O valor pode usar vírgula ou
    ponto como separador decimal. A unidade é retornada em minúsculas.

    Exemplos:
        "0,4 kg - Quilograma" → (0.4, "kg", "Quilograma")
        "200g"                → (200.0, "g", None)
        "2 UN"                → (2.0, "un", None)

    Returns:
        Uma tupla (numero, unidade, descricao). Qualquer valor que não
        possa ser determinado será retornado como None.
    """
    if txt is None:
        return None, None, None
    s = str(txt).strip()
    if not s:
        return None, None, None
    m = _QTD_RE.match(s)
    if not m:
        return None, None, None
    num = _to_float(m.group(1))
    unidade = m.group(2).lower() if m.group(2) else None
    resto = s[m.end():]
    desc = None
    if "-" in resto:
        desc = resto.split("-", 1)[1].strip() or None
    return num, unidade, desc


@dataclass(frozen=True)
class PesoInterpretado:
    """Peso digitado e sua interpretação para exibição."""
    valor_raw: int            # valor bruto digitado (sempre em gramas)
    valor_gramas: int
    valor_kg: float
    unidade_exibicao: str     # 'g' | 'kg'
    formatado: str            # ex.: "300 g" ou "5,5 kg"


def _formatar_kg(kg: float) -> str:
    if kg % 1 == 0:
        return f"{kg:.0f}"
    return f"{kg:.3f}".rstrip("0").rstrip(".").replace(".", ",")


def parse_peso_progressivo(valor: Any) -> PesoInterpretado:
    """Interpreta o peso digitado conforme a regra progressiva.

    Apenas dígitos são considerados. O valor é sempre em gramas; até 3
    dígitos ele é exibido em gramas, com 4 ou mais em quilogramas.
    """
    digitos = re.sub(r"\D", "", "" if valor is None else str(valor))
    num = int(digitos) if digitos else 0
    if num == 0:
        return PesoInterpretado(0, 0, 0.0, "g", "")
    if len(digitos) <= 3:
        return PesoInterpretado(num, num, num / 1000, "g", f"{num} g")
    kg = num / 1000
    return PesoInterpretado(num, num, kg, "kg", f"{_formatar_kg(kg)} kg")


def formatar_peso_progressivo(valor: Any) -> str:
    """Formata o peso para exibição ("300 g", "5,5 kg")."""
    return parse_peso_progressivo(valor).formatado


def kg_para_raw(valor_kg: Optional[float]) -> str:
    """Converte kg (armazenado) para o valor bruto em gramas exibido no campo."""
    if not valor_kg:
        return ""
    return str(round(valor_kg * 1000))
