# insumos/usecases/calcular_producao.py
"""
Caso de uso: calcular o consumo de insumos de uma rodada de produção.

Fluxo:
1) Para cada linha (item × insumo), monta os parâmetros do cálculo
   (tipo informado ou classificado pela unidade).
2) Aplica a guarda de entrada (demanda/peso/perda negativos são erros da linha).
3) Calcula o consumo pela Regra-Mãe e valida o resultado.
4) Reúne alertas (proteção anti-explosão, consumo excessivo, diagnósticos)
   sem interromper as demais linhas.
5) Soma o consumo em kg por insumo e o número de lotes por item.

Observações:
- As linhas são independentes: a ordem não altera o resultado.
- Nada é persistido; quem chama guarda o resultado se precisar.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from insumos.config import DEFAULTS, LimitesCalculo
from insumos.adapters.planilha_loader import load_ficha_tecnica
from insumos.domain.calculo import calcular_consumo_insumo, calcular_quantidade_lotes
from insumos.domain.models import Insumo, ParametrosCalculo, TipoInsumo
from insumos.domain.policies import exigir_parametros_validos
from insumos.domain.unidades import determinar_tipo_insumo
from insumos.domain.validacao import validar_resultado
from insumos.infra.logger import log_calculo, log_diagnostico, log_system_event


def _num(val: Any, default: Optional[float] = None) -> Optional[float]:
    if val is None:
        return default
    return float(val)


def montar_parametros(linha: Dict[str, Any]) -> ParametrosCalculo:
    """Converte uma linha da ficha técnica em ``ParametrosCalculo``.

    Raises:
        ValueError: quando falta a demanda, quando falta tipo e unidade
            ou quando o tipo informado é desconhecido.
    """
    demanda = _num(linha.get("demanda"))
    if demanda is None:
        raise ValueError("Demanda não informada")

    unidade = linha.get("unidade")
    tipo_raw = linha.get("tipo")
    if tipo_raw:
        try:
            tipo = TipoInsumo(str(tipo_raw).strip().lower())
        except ValueError:
            raise ValueError(f"Tipo de insumo desconhecido: {tipo_raw!r}") from None
    elif unidade:
        tipo = determinar_tipo_insumo(unidade)
    else:
        raise ValueError("Informe a unidade ou o tipo do insumo")

    insumo = Insumo(
        quantidade_por_referencia=_num(linha.get("quantidade"), 0.0),
        tipo=tipo,
        unidade=unidade or "",
        nome=linha.get("insumo"),
    )
    return ParametrosCalculo(
        demanda_total_unidades=demanda,
        peso_unitario_g=_num(linha.get("peso_unitario_g"), 0.0),
        perda_percentual=_num(linha.get("perda_percentual"), 0.0),
        insumo=insumo,
        equivalencia_por_lote_unidades=_num(linha.get("equivalencia_lote")),
    )


def run_calculo_producao(
    linhas: List[Dict[str, Any]],
    limites: LimitesCalculo = DEFAULTS,
    inicio_linha: int = 1,
) -> Dict[str, Any]:
    """Calcula todas as linhas e consolida o consumo por insumo.

    Returns:
        Dicionário com ``total``, ``sucessos``, ``registros``, ``erros``
        (``{"linha", "mensagem"}``), ``alertas``, ``consumo_por_insumo``
        (kg por insumo) e ``lotes_por_item``.
    """
    registros: List[Dict[str, Any]] = []
    erros: List[Dict[str, Any]] = []
    alertas: List[Dict[str, Any]] = []
    consumo_por_insumo: Dict[str, float] = {}
    lotes_por_item: Dict[str, int] = {}

    for idx, linha in enumerate(linhas, start=inicio_linha):
        item = linha.get("item")
        nome_insumo = linha.get("insumo")
        try:
            params = exigir_parametros_validos(montar_parametros(linha))
        except ValueError as e:
            erros.append({"linha": idx, "mensagem": str(e)})
            log_system_event("linha_rejeitada", {"linha": idx, "erro": str(e)}, level="warning")
            continue

        resultado = calcular_consumo_insumo(params, limites=limites)
        diagnosticos = validar_resultado(params, resultado, limites=limites)
        log_calculo(item, nome_insumo, resultado.to_dict())
        log_diagnostico(item, nome_insumo, diagnosticos)

        base = {"linha": idx, "item": item, "insumo": nome_insumo}
        if resultado.protecao.excede_limite:
            alertas.append({
                **base,
                "tipo": "protecao",
                "mensagem": resultado.protecao.mensagem_erro,
                "razao": resultado.protecao.razao_excedente,
            })
        if resultado.alerta_consumo_excessivo:
            alertas.append({**base, "tipo": "consumo_excessivo", "mensagem": "Consumo acima de 5x o peso com perda"})
        for msg in diagnosticos:
            alertas.append({**base, "tipo": "diagnostico", "mensagem": msg})

        chave = nome_insumo or "(sem nome)"
        consumo_por_insumo[chave] = consumo_por_insumo.get(chave, 0.0) + resultado.consumo_em_kg
        if item and item not in lotes_por_item:
            lotes_por_item[item] = calcular_quantidade_lotes(
                params.demanda_total_unidades, params.equivalencia_por_lote_unidades
            )

        registros.append({
            **base,
            "tipo_insumo": params.insumo.tipo.value,
            "unidade": params.insumo.unidade,
            "consumo": resultado.consumo_calculado,
            "consumo_kg": resultado.consumo_em_kg,
            "peso_com_perda_kg": resultado.peso_total_com_perda_kg,
            "limite": resultado.protecao.limite_maximo,
            "excede_limite": resultado.protecao.excede_limite,
        })

    log_system_event("calculo_producao", {"total": len(linhas), "erros": len(erros), "alertas": len(alertas)})
    return {
        "tipo": "Cálculo de Produção",
        "total": len(linhas),
        "sucessos": len(registros),
        "registros": registros,
        "erros": erros,
        "alertas": alertas,
        "consumo_por_insumo": consumo_por_insumo,
        "lotes_por_item": lotes_por_item,
    }


def run_calculo_planilha(path: str, limites: LimitesCalculo = DEFAULTS) -> Dict[str, Any]:
    """Lê a ficha técnica (XLSX/CSV) e executa ``run_calculo_producao``."""
    linhas = load_ficha_tecnica(path)
    log_system_event("planilha_carregada", {"arquivo": path, "linhas": len(linhas)})
    # linha 1 da planilha é o cabeçalho
    return run_calculo_producao(linhas, limites=limites, inicio_linha=2)
