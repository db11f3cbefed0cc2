from math import isclose

from insumos.domain.formulas import (
    fator_perda,
    peso_com_perda_kg,
    peso_total_final_kg,
    quantidade_lotes,
)


def test_peso_total_final_e_perda():
    # 100 unidades de 200 g = 20 kg
    assert peso_total_final_kg(200, 100) == 20.0
    assert isclose(fator_perda(5), 1.05, rel_tol=1e-12)
    assert fator_perda(0) == 1.0
    assert isclose(peso_com_perda_kg(200, 100, 10), 22.0, rel_tol=1e-12)


def test_quantidade_lotes():
    assert quantidade_lotes(1000, 500) == 2
    assert quantidade_lotes(1001, 500) == 3
    assert quantidade_lotes(0, 500) == 0
    # sem equivalência (ou inválida) → um lote
    assert quantidade_lotes(1000, None) == 1
    assert quantidade_lotes(1000, 0) == 1
    assert quantidade_lotes(1000, -5) == 1
