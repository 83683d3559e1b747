# toylang/grammar.py
"""
PEG grammar of the toy language (parsimonious).

Every token rule swallows the whitespace that follows it, so the only
place whitespace is matched explicitly is at the very start of the
program.  Names are single lowercase letters: a letter followed by
another letter is a keyword or an error, never a name.
"""

from __future__ import annotations

from parsimonious.grammar import Grammar

TOYLANG_GRAMMAR = Grammar(r'''
    # ─────────────────────────────────────────────────────────────
    # Statements
    # ─────────────────────────────────────────────────────────────

    program         = ws statement+
    statement       = assignment / if_stmt / while_stmt

    assignment      = name assign expr
    if_stmt         = kw_if expr statement+ kw_end
    while_stmt      = kw_while expr statement+ kw_end

    # ─────────────────────────────────────────────────────────────
    # Expressions (all binary operators are left-associative)
    # ─────────────────────────────────────────────────────────────

    expr            = additive (compare_op additive)*
    additive        = term (add_op term)*
    term            = factor (mul_op factor)*
    factor          = number / name / group
    group           = lparen expr rparen

    # ─────────────────────────────────────────────────────────────
    # Tokens
    # ─────────────────────────────────────────────────────────────

    name            = ~r"[a-z](?![a-z])" ws
    number          = ~r"[0-9]+" ws
    compare_op      = ~r"[<>]" ws
    add_op          = ~r"[+-]" ws
    mul_op          = ~r"[*/]" ws
    assign          = "=" ws
    lparen          = "(" ws
    rparen          = ")" ws

    kw_if           = ~r"if(?![a-z])" ws
    kw_while        = ~r"while(?![a-z])" ws
    kw_end          = ~r"end(?![a-z])" ws

    ws              = ~r"\s*"
''')


__all__ = ["TOYLANG_GRAMMAR"]
