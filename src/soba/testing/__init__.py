from __future__ import annotations

from .corpus import generate_expression, generate_expression_sources

__all__ = ["generate_expression", "generate_expression_sources"]
