"""
Synthesized tree elements.
"""

from modcompile.core.elements import EvaluationStatement


def create_module_evaluation_statement(name: str) -> EvaluationStatement:
    """Element that evaluates the registered module ``name`` when the output runs."""
    return EvaluationStatement(name)
