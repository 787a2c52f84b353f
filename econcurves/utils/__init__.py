"""Вспомогательные утилиты (логирование)."""

from econcurves.utils.logger import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
