# insumos/adapters/planilha_loader.py
"""
Loaders para planilhas (XLSX/CSV) de FICHA TÉCNICA e de ESTOQUE de insumos.

Essas funções:
- leem planilhas usando pandas;
- normalizam cabeçalhos (acentos, variações, sinônimos);
- retornam listas de dicionários com as chaves esperadas pelos casos de uso.

Observações:
- Números aceitam vírgula decimal ("5,5").
- A coluna de quantidade pode trazer a unidade junto ("0,4 kg"); nesse caso
  ela é usada quando a coluna de unidade estiver vazia.
- Células vazias viram None; o caso de uso decide o que fazer com elas.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from insumos.adapters.parsers import parse_numero, parse_quantidade_raw


# ---------------------------
# utilitários de normalização
# ---------------------------

def _slug(s: str) -> str:
    """Normaliza cabeçalhos: minúsculas, sem acentos, sem não-alfanumérico."""
    if s is None:
        return ""
    s = str(s).strip().lower()
    acentos = dict(zip("áàâãäéèêëíìîïóòôõöúùûüç", "aaaaaeeeeiiiiooooouuuuc"))
    s = "".join(acentos.get(ch, ch) for ch in s)
    s = re.sub(r"[^a-z0-9]+", " ", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def _safe_get(row, key):
    """Lê um valor da linha tratando NA do pandas como None."""
    val = row.get(key)
    if val is None or pd.isna(val):
        return None
    val = str(val).strip()
    return val or None


_ALIASES = {
    # ficha técnica
    "item": "item",
    "produto": "item",
    "item porcionado": "item",

    "demanda": "demanda",
    "demanda total": "demanda",
    "demanda unidades": "demanda",
    "unidades": "demanda",

    "peso unitario": "peso_unitario_g",
    "peso unitario g": "peso_unitario_g",
    "peso unitario final g": "peso_unitario_g",
    "peso g": "peso_unitario_g",

    "perda": "perda_percentual",
    "perda percentual": "perda_percentual",
    "perda pct": "perda_percentual",

    "equivalencia": "equivalencia_lote",
    "equivalencia lote": "equivalencia_lote",
    "equivalencia traco": "equivalencia_lote",
    "unidades por lote": "equivalencia_lote",

    "insumo": "insumo",
    "materia prima": "insumo",

    "quantidade": "quantidade",
    "qtd": "quantidade",
    "qtde": "quantidade",
    "quantidade por unidade": "quantidade",
    "quantidade por lote": "quantidade",

    "unidade": "unidade",
    "unidade medida": "unidade",
    "unidade de medida": "unidade",
    "un": "unidade",

    "tipo": "tipo",
    "tipo insumo": "tipo",

    # estoque
    "estoque": "estoque_atual",
    "estoque atual": "estoque_atual",
    "quantidade em estoque": "estoque_atual",

    "estoque minimo": "estoque_minimo",
    "minimo": "estoque_minimo",

    "multiplo": "multiplo_compra",
    "multiplo compra": "multiplo_compra",
    "embalagem": "multiplo_compra",
}


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Renomeia colunas com base em sinônimos/variações."""
    new_cols = {}
    for col in df.columns:
        key = _slug(col)
        new_cols[col] = _ALIASES.get(key, key.replace(" ", "_"))
    return df.rename(columns=new_cols)


def _read_planilha(path: str) -> pd.DataFrame:
    """Lê XLSX ou CSV preservando o texto das células."""
    if Path(path).suffix.lower() == ".csv":
        df = pd.read_csv(path, dtype="string")
    else:
        df = pd.read_excel(path, dtype="string")
    return _normalize_columns(df)


# ---------------------------
# loaders públicos
# ---------------------------

def load_ficha_tecnica(path: str) -> List[Dict[str, Any]]:
    """Lê a planilha de ficha técnica (uma linha por item × insumo).

    Campos de saída (chaves do dict por linha):
      - item: str | None
      - insumo: str | None
      - demanda: float | None
      - peso_unitario_g: float | None
      - perda_percentual: float | None
      - equivalencia_lote: float | None
      - quantidade: float | None
      - unidade: str | None
      - tipo: str | None  ('peso' | 'unidade'; None → classificar pela unidade)
    """
    df = _read_planilha(path)
    out: List[Dict[str, Any]] = []
    for _, row in df.iterrows():
        qtd_raw = _safe_get(row, "quantidade")
        quantidade, unidade_qtd, _desc = parse_quantidade_raw(qtd_raw)
        unidade = _safe_get(row, "unidade") or unidade_qtd
        tipo = _safe_get(row, "tipo")
        out.append({
            "item": _safe_get(row, "item"),
            "insumo": _safe_get(row, "insumo"),
            "demanda": parse_numero(_safe_get(row, "demanda")),
            "peso_unitario_g": parse_numero(_safe_get(row, "peso_unitario_g")),
            "perda_percentual": parse_numero(_safe_get(row, "perda_percentual")),
            "equivalencia_lote": parse_numero(_safe_get(row, "equivalencia_lote")),
            "quantidade": quantidade,
            "unidade": unidade,
            "tipo": tipo.lower() if tipo else None,
        })
    return out


def load_estoque_insumos(path: str) -> List[Dict[str, Any]]:
    """Lê a planilha de estoque de insumos.

    Campos de saída:
      - insumo: str | None
      - estoque_atual: float (0.0 quando vazio)
      - estoque_minimo: float (0.0 quando vazio)
      - unidade: str | None
      - multiplo_compra: float | None
    """
    df = _read_planilha(path)
    out: List[Dict[str, Any]] = []
    for _, row in df.iterrows():
        out.append({
            "insumo": _safe_get(row, "insumo"),
            "estoque_atual": parse_numero(_safe_get(row, "estoque_atual")) or 0.0,
            "estoque_minimo": parse_numero(_safe_get(row, "estoque_minimo")) or 0.0,
            "unidade": _safe_get(row, "unidade"),
            "multiplo_compra": parse_numero(_safe_get(row, "multiplo_compra")),
        })
    return out
