"""
Логування пакета cg4d.

Exports:
    - logger: глобальний loguru-логер.
    - set_level: переставити консольний sink на інший рівень.
    - setup_logfile: додати файловий sink з ротацією.
"""
from __future__ import annotations
import sys
from typing import Optional

from loguru import logger

__all__ = ["logger", "set_level", "setup_logfile"]

_console_id: Optional[int] = None


def set_level(level: str = "INFO") -> int:
    """
    Замінює консольний sink (stderr) на новий з рівнем `level`.
    Перший виклик прибирає стандартний sink loguru.
    """
    global _console_id
    if _console_id is None:
        logger.remove()
    else:
        logger.remove(_console_id)
    _console_id = logger.add(sys.stderr, level=level.upper())
    return _console_id


def setup_logfile(
    log_path: str,
    rotation: str = "10 MB",
    retention: str = "10 days",
    compression: str = "zip",
    level: str = "INFO",
) -> int:
    """
    Додає файловий sink з ротацією.

    Args:
        log_path: шлях до файлу логу.
        rotation: розмір або період ротації.
        retention: скільки зберігати старі логи.
        compression: стиснення ротованих файлів.
        level: рівень логування.
    """
    sink_id = logger.add(
        log_path,
        rotation=rotation,
        retention=retention,
        compression=compression,
        level=level.upper(),
        backtrace=True,
    )
    logger.info("cg4d file logging initialized: {}", log_path)
    return sink_id
