# insumos/usecases/necessidade_compra.py
"""
Caso de uso: necessidade de compra de insumos após a produção prevista.

Para cada insumo com consumo previsto:
- saldo após produção = estoque atual - consumo previsto;
- status e quantidade a comprar seguem ``status_necessidade`` e
  ``quantidade_a_comprar`` (crítico, alerta, ok);
- se houver múltiplo de compra (embalagem), a quantidade é arredondada
  para cima.

Insumos sem consumo previsto não entram na lista. Insumos consumidos mas
ausentes da planilha de estoque entram com estoque zero.
"""

from __future__ import annotations

from typing import Any, Dict, List

from insumos.adapters.planilha_loader import load_estoque_insumos
from insumos.domain.policies import arredonda_multiplo, quantidade_a_comprar, status_necessidade
from insumos.usecases.calcular_producao import run_calculo_planilha


def calcular_necessidades(
    consumo_por_insumo: Dict[str, float],
    estoques: List[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """Monta a lista de necessidades, ordenada por criticidade.

    Args:
        consumo_por_insumo: Consumo previsto (kg ou unidades) por insumo.
        estoques: Registros ``{"insumo", "estoque_atual", "estoque_minimo",
            "unidade", "multiplo_compra"}``.
    """
    est_by_nome = {str(e.get("insumo")): e for e in estoques if e.get("insumo")}

    lista: List[Dict[str, Any]] = []
    for nome, consumo_previsto in consumo_por_insumo.items():
        est = est_by_nome.get(nome, {})
        estoque_atual = float(est.get("estoque_atual") or 0.0)
        estoque_minimo = float(est.get("estoque_minimo") or 0.0)
        saldo = estoque_atual - consumo_previsto

        comprar = quantidade_a_comprar(saldo, estoque_minimo)
        if comprar > 0:
            comprar = arredonda_multiplo(comprar, est.get("multiplo_compra"))

        lista.append({
            "insumo": nome,
            "unidade": est.get("unidade"),
            "estoque_atual": estoque_atual,
            "estoque_minimo": estoque_minimo,
            "consumo_previsto": consumo_previsto,
            "saldo_apos_producao": saldo,
            "status": status_necessidade(saldo, estoque_minimo),
            "quantidade_comprar": comprar,
        })

    ordem = {"critico": 0, "alerta": 1, "ok": 2}
    lista.sort(key=lambda r: (ordem[r["status"]], r["insumo"]))
    return lista


def run_necessidade_compra(ficha_path: str, estoque_path: str) -> Dict[str, Any]:
    """Calcula a produção da ficha técnica e cruza com a planilha de estoque."""
    producao = run_calculo_planilha(ficha_path)
    necessidades = calcular_necessidades(
        producao["consumo_por_insumo"], load_estoque_insumos(estoque_path)
    )
    return {
        "necessidades": necessidades,
        "resumo": {
            "critico": sum(1 for n in necessidades if n["status"] == "critico"),
            "alerta": sum(1 for n in necessidades if n["status"] == "alerta"),
            "ok": sum(1 for n in necessidades if n["status"] == "ok"),
            "total": len(necessidades),
        },
        "erros": producao["erros"],
        "alertas": producao["alertas"],
    }
