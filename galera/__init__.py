"""Galera cluster status checks."""

from galera.evaluator import STATUS_VARIABLES, evaluate

__all__ = ["STATUS_VARIABLES", "evaluate"]
