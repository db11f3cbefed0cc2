from math import isclose

import pandas as pd

from insumos.domain.models import TipoInsumo
from insumos.usecases.calcular_producao import (
    montar_parametros,
    run_calculo_planilha,
    run_calculo_producao,
)
from insumos.usecases.necessidade_compra import calcular_necessidades, run_necessidade_compra


def _linhas():
    return [
        # massa: 1000 x 80 g = 80 kg, perda 5% → 84 kg
        {"item": "Coxinha", "insumo": "Massa", "demanda": 1000, "peso_unitario_g": 80,
         "perda_percentual": 5, "equivalencia_lote": 500, "quantidade": 0, "unidade": "kg"},
        # embalagem: 1 por unidade
        {"item": "Coxinha", "insumo": "Embalagem", "demanda": 1000, "peso_unitario_g": 80,
         "perda_percentual": 5, "equivalencia_lote": 500, "quantidade": 1, "unidade": "un"},
        # massa também usada por outro item: 200 x 100 g = 20 kg
        {"item": "Kibe", "insumo": "Massa", "demanda": 200, "peso_unitario_g": 100,
         "perda_percentual": 0, "quantidade": 0, "unidade": "kg"},
    ]


def test_montar_parametros_classifica_pela_unidade():
    params = montar_parametros({"demanda": 10, "unidade": "pcs", "quantidade": 2})
    assert params.insumo.tipo == TipoInsumo.UNIDADE
    assert params.peso_unitario_g == 0.0
    assert params.perda_percentual == 0.0

    params = montar_parametros({"demanda": 10, "unidade": "un", "tipo": "Peso"})
    assert params.insumo.tipo == TipoInsumo.PESO


def test_run_calculo_producao_consolida_por_insumo():
    res = run_calculo_producao(_linhas())
    assert res["total"] == 3
    assert res["sucessos"] == 3
    assert res["erros"] == []
    assert res["alertas"] == []
    assert isclose(res["consumo_por_insumo"]["Massa"], 84.0 + 20.0, rel_tol=1e-12)
    assert res["consumo_por_insumo"]["Embalagem"] == 1000
    assert res["lotes_por_item"] == {"Coxinha": 2, "Kibe": 1}


def test_ordem_das_linhas_nao_altera_resultado():
    direto = run_calculo_producao(_linhas())
    invertido = run_calculo_producao(list(reversed(_linhas())))
    for nome, kg in direto["consumo_por_insumo"].items():
        assert isclose(invertido["consumo_por_insumo"][nome], kg, rel_tol=1e-12)


def test_linha_invalida_nao_interrompe_as_demais():
    linhas = _linhas() + [
        {"item": "X", "insumo": "Sal", "demanda": -5, "peso_unitario_g": 10, "unidade": "kg"},
        {"item": "Y", "insumo": "Sal", "unidade": "kg"},
        {"item": "Z", "insumo": "Sal", "demanda": 5, "tipo": "litro"},
    ]
    res = run_calculo_producao(linhas)
    assert res["sucessos"] == 3
    assert [e["linha"] for e in res["erros"]] == [4, 5, 6]
    assert "Demanda negativa" in res["erros"][0]["mensagem"]
    assert "Demanda não informada" in res["erros"][1]["mensagem"]
    assert "desconhecido" in res["erros"][2]["mensagem"]


def test_alertas_de_protecao_e_diagnostico():
    linhas = [
        # etiqueta cadastrada por lote (500) como se fosse por unidade
        {"item": "Coxinha", "insumo": "Etiqueta", "demanda": 1000, "quantidade": 500,
         "equivalencia_lote": 500, "unidade": "un"},
        {"item": "Coxinha", "insumo": "Tempero", "demanda": 100, "peso_unitario_g": 50,
         "unidade": "pç"},
    ]
    res = run_calculo_producao(linhas)
    tipos = [(a["insumo"], a["tipo"]) for a in res["alertas"]]
    assert ("Etiqueta", "protecao") in tipos
    assert ("Tempero", "diagnostico") in tipos
    protecao = next(a for a in res["alertas"] if a["tipo"] == "protecao")
    assert isclose(protecao["razao"], 500000 / 3000, rel_tol=1e-12)


def test_insumos_contaveis_corretos_sem_alerta_de_lote():
    linhas = [
        {"item": "Bolo", "insumo": "Caixa", "demanda": 40, "equivalencia_lote": 1,
         "quantidade": 1, "unidade": "un"},
        {"item": "Torta", "insumo": "Etiqueta", "demanda": 1, "equivalencia_lote": 10,
         "quantidade": 2, "unidade": "un"},
    ]
    res = run_calculo_producao(linhas)
    assert res["sucessos"] == 2
    assert res["alertas"] == []
    assert res["consumo_por_insumo"] == {"Caixa": 40, "Etiqueta": 2}



def test_necessidades_status_e_ordem():
    consumo = {"Massa": 104.0, "Embalagem": 1000.0, "Sal": 1.0}
    estoques = [
        {"insumo": "Massa", "estoque_atual": 100.0, "estoque_minimo": 10.0, "unidade": "kg", "multiplo_compra": 5},
        {"insumo": "Embalagem", "estoque_atual": 1050.0, "estoque_minimo": 100.0, "unidade": "un"},
        {"insumo": "Sal", "estoque_atual": 20.0, "estoque_minimo": 2.0, "unidade": "kg"},
        {"insumo": "Farinha", "estoque_atual": 0.0, "estoque_minimo": 5.0, "unidade": "kg"},
    ]
    lista = calcular_necessidades(consumo, estoques)
    assert [n["insumo"] for n in lista] == ["Massa", "Embalagem", "Sal"]

    massa, emb, sal = lista
    assert massa["status"] == "critico"
    assert massa["saldo_apos_producao"] == -4.0
    # 4 + 10 = 14 → múltiplo de 5 = 15
    assert massa["quantidade_comprar"] == 15
    assert emb["status"] == "alerta"
    assert emb["quantidade_comprar"] == 50.0
    assert sal["status"] == "ok"
    assert sal["quantidade_comprar"] == 0.0


def test_run_calculo_planilha_e_necessidade(tmp_path):
    ficha = tmp_path / "ficha.csv"
    pd.DataFrame({
        "Item": ["Coxinha", "Coxinha"],
        "Demanda": ["100", "100"],
        "Peso Unitário g": ["200", "200"],
        "Insumo": ["Massa", "Embalagem"],
        "Quantidade": ["0", "1"],
        "Unidade": ["kg", "un"],
    }).to_csv(ficha, index=False)
    estoque = tmp_path / "estoque.csv"
    pd.DataFrame({
        "Insumo": ["Massa", "Embalagem"],
        "Estoque Atual": ["15", "500"],
        "Estoque Mínimo": ["5", "50"],
    }).to_csv(estoque, index=False)

    prod = run_calculo_planilha(str(ficha))
    assert prod["consumo_por_insumo"] == {"Massa": 20.0, "Embalagem": 100.0}

    res = run_necessidade_compra(str(ficha), str(estoque))
    assert res["resumo"] == {"critico": 1, "alerta": 0, "ok": 1, "total": 2}
    assert res["necessidades"][0]["insumo"] == "Massa"
    assert res["necessidades"][0]["quantidade_comprar"] == 10.0
