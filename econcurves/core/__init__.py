"""
Core expression engine, numerical primitives, domain records and contracts.

This module contains the foundational building blocks that are independent
of the presentation layer (charts, settings, localisation).
"""
