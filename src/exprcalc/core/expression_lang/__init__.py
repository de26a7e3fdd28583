"""
exprcalc arithmetic expression language.

Tokenizer, parser, and evaluator for unsigned integer arithmetic with
``+ - * /`` and parentheses.

Usage:
    from exprcalc.core.expression_lang import evaluate, parse_expr

    expr = parse_expr("(1 + 2) * 3")
    result = evaluate(expr)
    # result == 9
"""

from exprcalc.core.expression_lang.evaluator import evaluate
from exprcalc.core.expression_lang.parser import parse, parse_expr
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, render_tokens, tokenize

__all__ = ["Token", "TokenKind", "evaluate", "parse", "parse_expr", "render_tokens", "tokenize"]
