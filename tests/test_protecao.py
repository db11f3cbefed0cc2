import logging
from math import isclose

from insumos.config import LimitesCalculo
from insumos.domain.models import Insumo, ParametrosCalculo, TipoInsumo
from insumos.domain.protecao import MENSAGEM_PROTECAO, avaliar_protecao


def _params(tipo=TipoInsumo.PESO, unidade="kg", demanda=100, peso_g=200, perda=0, quantidade=0.4):
    return ParametrosCalculo(
        demanda_total_unidades=demanda,
        peso_unitario_g=peso_g,
        perda_percentual=perda,
        insumo=Insumo(quantidade_por_referencia=quantidade, tipo=tipo, unidade=unidade, nome="recheio"),
    )


def test_peso_acima_de_tres_vezes_excede(caplog):
    # 100 x 200 g = 20 kg → limite 60 kg
    with caplog.at_level(logging.ERROR, logger="insumos.protecao"):
        prot = avaliar_protecao(_params(), consumo_calculado=70.0, consumo_em_kg=70.0)
    assert prot.excede_limite is True
    assert isclose(prot.limite_maximo, 60.0, rel_tol=1e-12)
    assert prot.consumo_observado == 70.0
    assert isclose(prot.razao_excedente, 1.1667, rel_tol=1e-4)
    assert prot.mensagem_erro == MENSAGEM_PROTECAO
    assert any("PROTEÇÃO ANTI-EXPLOSÃO" in r.getMessage() for r in caplog.records)


def test_peso_dentro_do_limite():
    prot = avaliar_protecao(_params(), consumo_calculado=60.0)
    # igual ao limite não excede
    assert prot.excede_limite is False
    assert prot.razao_excedente == 0.0
    assert prot.mensagem_erro is None


def test_peso_considera_perda_no_limite():
    prot = avaliar_protecao(_params(perda=50), consumo_calculado=70.0)
    # 20 kg x 1,5 = 30 kg → limite 90 kg
    assert isclose(prot.limite_maximo, 90.0, rel_tol=1e-12)
    assert prot.excede_limite is False


def test_consumo_em_kg_derivado_da_unidade():
    # 70000 g = 70 kg, acima do limite de 60 kg
    prot = avaliar_protecao(_params(unidade="g"), consumo_calculado=70000.0)
    assert prot.excede_limite is True
    assert prot.consumo_observado == 70.0


def test_unidade_usa_demanda_vezes_tres():
    params = _params(tipo=TipoInsumo.UNIDADE, unidade="un", demanda=100)
    ok = avaliar_protecao(params, consumo_calculado=300)
    assert ok.excede_limite is False
    assert ok.limite_maximo == 300

    ruim = avaliar_protecao(params, consumo_calculado=50000)
    assert ruim.excede_limite is True
    assert ruim.consumo_observado == 50000
    assert isclose(ruim.razao_excedente, 50000 / 300, rel_tol=1e-12)


def test_limites_injetados():
    limites = LimitesCalculo(fator_limite_peso=4.0)
    prot = avaliar_protecao(_params(), consumo_calculado=70.0, limites=limites)
    assert prot.limite_maximo == 80.0
    assert prot.excede_limite is False


def test_limite_zero_com_consumo_positivo():
    params = _params(tipo=TipoInsumo.UNIDADE, unidade="un", demanda=0)
    prot = avaliar_protecao(params, consumo_calculado=5)
    assert prot.excede_limite is True
    assert prot.razao_excedente == float("inf")
