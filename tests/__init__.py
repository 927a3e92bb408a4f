"""
Test suite for polycalc

Contains:
- tests/unit/          : Unit tests for the grammar, term store, contracts and calculus engine
"""
