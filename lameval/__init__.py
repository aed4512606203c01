"""Untyped lambda calculus evaluator with top-level assignments.

For reference:
- "Pure lambda calculus": lambda calculus as defined by Church (see lameval/pure)
- "lameval language": lambda calculus + assignments, Church numeral literals and comments (see lameval/lang)

Basic program flow:
    1. Parser: tokenizes an input unit and builds a list of statements (lang/parser.py)
    2. Inlining: names bound by earlier assignments are replaced by their values, and the result is echoed
    3. Evaluation: each statement is reduced to beta-normal form in order; assignments update the namespace, and the
       result of the last statement is printed (lang/session.py)
"""
