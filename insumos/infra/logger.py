# insumos/infra/logger.py
"""
Sistema de logging do motor de cálculo de insumos.

Os módulos de domínio usam apenas ``logging.getLogger("insumos.<area>")``;
este módulo conecta esses loggers a arquivos em disco e oferece funções
auxiliares para registrar cálculos, diagnósticos e eventos do sistema.
O pacote ``logging`` é seguro para uso concorrente.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from insumos.config import LOGS_DIR


# Flag global para habilitar/desabilitar os logs auxiliares
ENABLE_LOGGING = False

# Configuração base dos loggers
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Nome do logger -> arquivo
LOG_FILES = {
    "insumos.calculo": "calculo.log",
    "insumos.protecao": "protecao.log",
    "insumos.producao": "producao.log",
    "insumos.system": "system.log",
}

calculo_logger = logging.getLogger("insumos.calculo")
protecao_logger = logging.getLogger("insumos.protecao")
producao_logger = logging.getLogger("insumos.producao")
system_logger = logging.getLogger("insumos.system")

_logs_dir: Path = Path(LOGS_DIR)


def setup_logger(name: str, log_file: str, level: int = logging.INFO) -> logging.Logger:
    """
    Configura um logger específico com arquivo de saída.

    Args:
        name: Nome do logger
        log_file: Caminho do arquivo de log
        level: Nível de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Logger configurado
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove handlers anteriores (reconfiguração não duplica linhas)
    while logger.handlers:
        handler = logger.handlers[0]
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(file_handler)

    return logger


def configurar_logs(logs_dir: Optional[str] = None, level: int = logging.INFO) -> Dict[str, logging.Logger]:
    """
    Liga todos os loggers do pacote aos arquivos em ``logs_dir``.

    Também habilita ``ENABLE_LOGGING`` para as funções auxiliares.

    Returns:
        Dicionário nome -> logger configurado
    """
    global ENABLE_LOGGING, _logs_dir
    _logs_dir = Path(logs_dir or LOGS_DIR)
    loggers = {
        name: setup_logger(name, str(_logs_dir / filename), level)
        for name, filename in LOG_FILES.items()
    }
    ENABLE_LOGGING = True
    return loggers


def log_calculo(item: Optional[str], insumo: Optional[str], resultado: Dict[str, Any]) -> None:
    """
    Registra um cálculo de consumo concluído.

    Args:
        item: Item produzido
        insumo: Insumo calculado
        resultado: Resultado serializado (``ResultadoCalculo.to_dict()``)
    """
    if not ENABLE_LOGGING:
        return
    producao_logger.info(
        f"CALCULO: item={item} insumo={insumo} "
        f"consumo={resultado.get('consumo_calculado')} consumo_kg={resultado.get('consumo_em_kg')}"
    )


def log_diagnostico(item: Optional[str], insumo: Optional[str], diagnosticos: List[str]) -> None:
    """Registra diagnósticos do validador (um aviso por mensagem)."""
    if not ENABLE_LOGGING:
        return
    for msg in diagnosticos:
        producao_logger.warning(f"DIAGNOSTICO: item={item} insumo={insumo} - {msg}")


def log_system_event(event: str, details: Dict[str, Any] = None, level: str = "info") -> None:
    """
    Log para eventos do sistema.

    Args:
        event: Descrição do evento
        details: Detalhes adicionais (opcional)
        level: Nível do log (info, warning, error)
    """
    if not ENABLE_LOGGING:
        return
    log_method = getattr(system_logger, level.lower(), system_logger.info)
    log_method(f"SYSTEM_EVENT: {event} - {details or {}}")


def get_log_summary(log_type: str = "calculo", lines: int = 100) -> str:
    """
    Obtém as linhas mais recentes de um log.

    Args:
        log_type: Tipo de log (calculo, protecao, producao, system)
        lines: Número de linhas a retornar

    Returns:
        Conteúdo do log como string
    """
    log_file = _logs_dir / f"{log_type}.log"
    if f"insumos.{log_type}" not in LOG_FILES or not log_file.exists():
        return f"Log {log_type} não encontrado."

    for handler in logging.getLogger(f"insumos.{log_type}").handlers:
        handler.flush()
    with open(log_file, 'r', encoding='utf-8') as f:
        all_lines = f.readlines()
    return ''.join(all_lines[-lines:])
