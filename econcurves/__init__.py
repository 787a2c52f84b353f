"""
econcurves — вычислительное ядро калькуляторов спроса и предложения.

Парсер выражений от одной переменной q, численные методы (корни, производная,
интеграл) и экономические калькуляторы (рынок, монополия, фирма, эластичность,
изо-прибыль).
"""

__version__ = "1.0.0"
