import pytest

from insumos.adapters.parsers import (
    formatar_peso_progressivo,
    kg_para_raw,
    parse_numero,
    parse_peso_progressivo,
    parse_quantidade_raw,
)


@pytest.mark.parametrize(
    "txt,exp_num,exp_unit,exp_desc",
    [
        ("0,4 kg - Quilograma", 0.4, "kg", "Quilograma"),
        ("200g", 200.0, "g", None),
        ("2 UN", 2.0, "un", None),
        ("5.00 ML - mililitro", 5.0, "ml", "mililitro"),
        ("1.500,0 g", 1500.0, "g", None),
        ("1.234,5 kg - Quilograma", 1234.5, "kg", "Quilograma"),
        ("10", 10.0, None, None),
        ("", None, None, None),
        (None, None, None, None),
    ],
)
def test_parse_quantidade_raw(txt, exp_num, exp_unit, exp_desc):
    num, unit, desc = parse_quantidade_raw(txt)
    assert (num == exp_num) or (num is None and exp_num is None)
    assert unit == exp_unit
    assert desc == exp_desc


@pytest.mark.parametrize(
    "val,esperado",
    [
        ("5,5", 5.5),
        ("1.234,5", 1234.5),
        ("10.000,00", 10000.0),
        ("1.234.567", 1234567.0),
        ("0.4", 0.4),
        (" 10 ", 10.0),
        (3, 3.0),
        ("", None),
        ("abc", None),
        (None, None),
    ],
)
def test_parse_numero(val, esperado):
    assert parse_numero(val) == esperado


def test_peso_progressivo_gramas():
    peso = parse_peso_progressivo("300")
    assert peso.unidade_exibicao == "g"
    assert peso.valor_gramas == 300
    assert peso.valor_kg == 0.3
    assert peso.formatado == "300 g"


def test_peso_progressivo_quilos():
    assert formatar_peso_progressivo("5500") == "5,5 kg"
    assert formatar_peso_progressivo("3000") == "3 kg"
    assert formatar_peso_progressivo("1250") == "1,25 kg"
    peso = parse_peso_progressivo("5.500 g")
    assert peso.unidade_exibicao == "kg"
    assert peso.valor_kg == 5.5


def test_peso_progressivo_vazio():
    peso = parse_peso_progressivo("")
    assert peso.valor_raw == 0
    assert peso.formatado == ""


def test_kg_para_raw():
    assert kg_para_raw(1.25) == "1250"
    assert kg_para_raw(0) == ""
    assert kg_para_raw(None) == ""
