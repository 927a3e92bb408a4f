"""
Core domain models, grammar, mathematical primitives, and contracts.

This module contains the foundational building blocks that the calculus
engine operates on; none of it depends on the engine.
"""
