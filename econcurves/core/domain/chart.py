"""
Chart primitives — точки кривых и закрашиваемых областей

Порядок точек в кривой значим: кривая рисуется как ломаная.
"""

from typing import NamedTuple


class ChartPoint(NamedTuple):
    """Один сэмпл кривой (x = количество, y = цена/стоимость)."""

    x: float
    y: float


class AreaSamplePoint(NamedTuple):
    """
    Сэмпл закрашиваемой области (излишек, чистые потери).

    Область рисуется как базовая кривая base_value плюс неотрицательное
    смещение offset_value поверх неё.
    """

    x: float
    base_value: float
    offset_value: float

    @property
    def top_value(self) -> float:
        return self.base_value + self.offset_value
