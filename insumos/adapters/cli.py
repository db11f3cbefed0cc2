# insumos/adapters/cli.py
"""
CLI do motor de cálculo de insumos (Typer).

Comandos principais:
- calcular                   -> calcula o consumo de um insumo (Regra-Mãe)
- classificar <unidade>      -> mostra o tipo do insumo para uma unidade
- validar                    -> valida um consumo já calculado
- lotes                      -> número de lotes/traços da fila de produção
- peso <valor>               -> interpreta um peso digitado (regra progressiva)
- producao <planilha>        -> calcula uma rodada de produção a partir de XLSX/CSV
- necessidade <ficha> <est>  -> necessidade de compra após a produção
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from insumos.config import LOGS_DIR
from insumos.adapters.parsers import parse_peso_progressivo
from insumos.domain.calculo import calcular_consumo_insumo, calcular_quantidade_lotes
from insumos.domain.models import ResultadoCalculo
from insumos.domain.policies import exigir_parametros_validos
from insumos.domain.unidades import determinar_tipo_insumo, diagnosticar_unidade
from insumos.domain.validacao import validar_calculo_insumo, validar_resultado
from insumos.infra.logger import configurar_logs, log_system_event
from insumos.usecases.calcular_producao import montar_parametros, run_calculo_planilha
from insumos.usecases.necessidade_compra import run_necessidade_compra


app = typer.Typer(help="Insumos: cálculo de consumo por demanda (Regra-Mãe)")
console = Console()


@app.callback()
def cmd_root(
    logs: bool = typer.Option(False, "--logs", help="Grava logs em arquivo"),
    logs_dir: str = typer.Option(LOGS_DIR, "--logs-dir", help="Diretório dos logs"),
):
    """Opções globais."""
    if logs:
        configurar_logs(logs_dir)
        log_system_event("cli_start", {"logs_dir": logs_dir})


# -----------------------
# util
# -----------------------

def _print_json(obj) -> None:
    typer.echo(json.dumps(obj, ensure_ascii=False, indent=2, default=str))


def _fmt(val: Any) -> str:
    """Formata números no padrão brasileiro (1.234,56)."""
    if isinstance(val, bool):
        return "sim" if val else "não"
    if isinstance(val, (int, float)):
        return f"{val:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    if val is None:
        return ""
    return str(val)


def _display_rows(rows: List[Dict[str, Any]], title: str) -> None:
    """Exibe uma lista de dicionários como tabela Rich."""
    if not rows:
        console.print(Panel("Nenhum dado encontrado", title=title, border_style="yellow"))
        return
    table = Table(title=title, box=box.ROUNDED)
    columns = list(rows[0].keys())
    for column in columns:
        if isinstance(rows[0].get(column), (int, float)) and not isinstance(rows[0].get(column), bool):
            table.add_column(column, justify="right")
        else:
            table.add_column(column)
    for row in rows:
        values = []
        for col in columns:
            val = row.get(col, "")
            if col == "status":
                cor = {"critico": "bold red", "alerta": "bold yellow", "ok": "bold green"}.get(str(val))
                values.append(f"[{cor}]{val}[/]" if cor else escape(str(val)))
            else:
                values.append(escape(_fmt(val)))
        table.add_row(*values)
    console.print(table)


def _display_resultado(resultado: ResultadoCalculo, diagnosticos: List[str]) -> None:
    table = Table(title="Consumo do Insumo", box=box.ROUNDED)
    table.add_column("Campo")
    table.add_column("Valor", justify="right")
    table.add_row("Peso total final (kg)", _fmt(resultado.peso_total_final_kg))
    table.add_row("Peso total com perda (kg)", _fmt(resultado.peso_total_com_perda_kg))
    table.add_row("Consumo calculado", _fmt(resultado.consumo_calculado))
    table.add_row("Consumo em kg", _fmt(resultado.consumo_em_kg))
    table.add_row("Limite máximo", _fmt(resultado.protecao.limite_maximo))
    console.print(table)

    if resultado.alerta_consumo_excessivo:
        console.print("[bold yellow]⚠ Consumo excessivo: acima de 5x o peso com perda[/]")
    if resultado.protecao.excede_limite:
        console.print(Panel(
            f"{resultado.protecao.mensagem_erro}\n"
            f"Razão excedente: {resultado.protecao.razao_excedente:.2f}x",
            title="Proteção anti-explosão",
            border_style="red",
        ))
    for msg in diagnosticos:
        console.print(f"[yellow]• {escape(msg)}[/]")


def _display_lote(data: Dict[str, Any], title: str) -> None:
    """Resumo de um processamento em lote (produção)."""
    panel_content = [
        f"Total de linhas: {data['total']}",
        f"Calculadas com sucesso: {data.get('sucessos', 0)}",
    ]
    if data.get("erros"):
        panel_content.append(f"Erros: {len(data['erros'])}")
    if data.get("alertas"):
        panel_content.append(f"Alertas: {len(data['alertas'])}")
    console.print(Panel("\n".join(panel_content), title=title))

    consumo = [{"insumo": k, "consumo_kg": v} for k, v in data.get("consumo_por_insumo", {}).items()]
    _display_rows(consumo, "Consumo por Insumo")
    lotes = [{"item": k, "lotes": v} for k, v in data.get("lotes_por_item", {}).items()]
    if lotes:
        _display_rows(lotes, "Lotes por Item")

    if data.get("alertas"):
        _display_rows(
            [{"linha": a["linha"], "insumo": a.get("insumo"), "tipo": a["tipo"], "mensagem": a["mensagem"]}
             for a in data["alertas"]],
            "Alertas",
        )
    if data.get("erros"):
        erro_table = Table(title="Erros Encontrados")
        erro_table.add_column("Linha")
        erro_table.add_column("Erro")
        for erro in data["erros"]:
            erro_table.add_row(str(erro.get("linha", "?")), escape(erro.get("mensagem", "Erro desconhecido")))
        console.print(erro_table)


def _params_from_options(
    demanda: float,
    peso_g: float,
    perda: float,
    quantidade: float,
    unidade: str,
    tipo: Optional[str],
    equivalencia: Optional[float],
    nome: Optional[str],
    estrito: bool,
):
    linha = {
        "demanda": demanda,
        "peso_unitario_g": peso_g,
        "perda_percentual": perda,
        "quantidade": quantidade,
        "unidade": unidade,
        "tipo": tipo,
        "equivalencia_lote": equivalencia,
        "insumo": nome,
    }
    try:
        params = montar_parametros(linha)
        if estrito:
            exigir_parametros_validos(params)
    except ValueError as e:
        console.print(f"[bold red]Parâmetros inválidos:[/] {escape(str(e))}")
        raise typer.Exit(code=1)
    return params


# -----------------------
# comandos de cálculo
# -----------------------

@app.command("calcular")
def cmd_calcular(
    demanda: float = typer.Option(..., help="Demanda total em unidades produzidas"),
    peso_g: float = typer.Option(..., "--peso-g", help="Peso unitário final em gramas"),
    perda: float = typer.Option(0.0, help="Perda percentual (ex.: 5 = +5%)"),
    quantidade: float = typer.Option(0.0, help="Quantidade do insumo por unidade produzida"),
    unidade: str = typer.Option("kg", help="Unidade do insumo (kg, g, ml, un...)"),
    tipo: Optional[str] = typer.Option(None, help="peso | unidade (padrão: pela unidade)"),
    equivalencia: Optional[float] = typer.Option(None, help="Unidades por lote/traço"),
    nome: Optional[str] = typer.Option(None, help="Nome do insumo"),
    estrito: bool = typer.Option(False, "--estrito", help="Rejeita demanda/peso/perda negativos"),
    as_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
):
    """Calcula o consumo de um insumo e avalia a proteção anti-explosão."""
    params = _params_from_options(demanda, peso_g, perda, quantidade, unidade, tipo, equivalencia, nome, estrito)
    resultado = calcular_consumo_insumo(params)
    diagnosticos = validar_resultado(params, resultado)
    if as_json:
        _print_json({**resultado.to_dict(), "diagnosticos": diagnosticos})
        return
    _display_resultado(resultado, diagnosticos)


@app.command("classificar")
def cmd_classificar(
    unidade: str = typer.Argument(..., help="Unidade de medida (ex.: kg, un, pcs)"),
    as_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
):
    """Mostra o tipo do insumo (peso | unidade) para a unidade informada."""
    tipo = determinar_tipo_insumo(unidade)
    diagnosticos = diagnosticar_unidade(unidade)
    if as_json:
        _print_json({"unidade": unidade, "tipo": tipo.value, "diagnosticos": diagnosticos})
        return
    typer.echo(tipo.value)
    for msg in diagnosticos:
        console.print(f"[yellow]• {escape(msg)}[/]")


@app.command("validar")
def cmd_validar(
    consumo: float = typer.Option(..., help="Consumo calculado a validar"),
    demanda: float = typer.Option(..., help="Demanda total em unidades produzidas"),
    peso_g: float = typer.Option(..., "--peso-g", help="Peso unitário final em gramas"),
    quantidade: float = typer.Option(..., help="Quantidade configurada do insumo"),
    equivalencia: Optional[float] = typer.Option(None, help="Unidades por lote/traço"),
    perda: float = typer.Option(0.0, help="Perda percentual"),
    unidade: str = typer.Option("kg", help="Unidade do insumo"),
    tipo: Optional[str] = typer.Option(None, help="peso | unidade (padrão: pela unidade)"),
    as_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
):
    """Procura multiplicação direta por lote e consumo negativo."""
    params = _params_from_options(demanda, peso_g, perda, quantidade, unidade, tipo, equivalencia, None, False)
    diagnosticos = validar_calculo_insumo(params, consumo)
    if as_json:
        _print_json({"diagnosticos": diagnosticos})
        return
    if not diagnosticos:
        console.print("[bold green]Nenhum problema encontrado.[/]")
    for msg in diagnosticos:
        console.print(f"[yellow]• {escape(msg)}[/]")


@app.command("lotes")
def cmd_lotes(
    demanda: float = typer.Option(..., help="Demanda total em unidades"),
    equivalencia: Optional[float] = typer.Option(None, help="Unidades por lote/traço"),
):
    """Número de lotes/traços para a fila de produção."""
    typer.echo(calcular_quantidade_lotes(demanda, equivalencia))


@app.command("peso")
def cmd_peso(valor: str = typer.Argument(..., help="Peso digitado em gramas (ex.: 300, 5500)")):
    """Interpreta um peso digitado (até 3 dígitos = g; 4+ dígitos = kg)."""
    peso = parse_peso_progressivo(valor)
    typer.echo(peso.formatado or "0 g")


# -----------------------
# comandos de planilha
# -----------------------

@app.command("producao")
def cmd_producao(
    path: str = typer.Argument(..., help="Caminho da ficha técnica (XLSX ou CSV)"),
    as_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
):
    """Calcula o consumo de uma rodada de produção a partir da ficha técnica."""
    info = run_calculo_planilha(path)
    if as_json:
        _print_json(info)
        return
    _display_lote(info, title="Cálculo de Produção")


@app.command("necessidade")
def cmd_necessidade(
    ficha_path: str = typer.Argument(..., help="Ficha técnica (XLSX ou CSV)"),
    estoque_path: str = typer.Argument(..., help="Estoque de insumos (XLSX ou CSV)"),
    as_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
):
    """Necessidade de compra de insumos após a produção prevista."""
    res = run_necessidade_compra(ficha_path, estoque_path)
    if as_json:
        _print_json(res)
        return
    _display_rows(res["necessidades"], "Necessidade de Compra")
    resumo = res["resumo"]
    console.print(
        f"[dim]Crítico: {resumo['critico']} | Alerta: {resumo['alerta']} | "
        f"OK: {resumo['ok']} | Total: {resumo['total']}[/dim]"
    )


# Entry point opcional:
def main():
    app()


if __name__ == "__main__":
    main()
