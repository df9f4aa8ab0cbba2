"""
Test suite for matrix_engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
