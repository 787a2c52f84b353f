"""
Test suite for econcurves

Contains:
- tests/unit/          : Unit tests for individual modules
"""
