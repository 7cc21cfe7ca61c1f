"""Tokenizer for the OCaml- language.

Token definitions are written as a Lark terminal grammar and run through
Lark's basic lexer. Lark resolves keyword/identifier
collisions for us: any identifier whose text equals a keyword terminal
is retyped to that keyword. Whitespace and `(* ... *)` comments are
ignored.

`tokenize` returns a list of Lark `Token` objects followed by a
synthesized `EOF` token, all carrying 1-based line and column numbers.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Token
from lark.exceptions import UnexpectedCharacters

from .errors import LexError


OCMINUS_TOKENS = r"""
    start: _token*

    _token: NUM | TRUE | FALSE | ID
          | IF | THEN | ELSE | LET | LETREC | IN | FUN | KWAND | NOT
          | PLUS | MINUS | TIMES | DIV | MOD
          | AND | OR
          | EQ | NE | LT | LE | GT | GE
          | LPAREN | RPAREN | ARROW | SEMI

    // Keywords
    IF: "if"
    THEN: "then"
    ELSE: "else"
    LET: "let"
    LETREC: "letrec"
    IN: "in"
    FUN: "fun"
    KWAND: "and"
    NOT: "not"
    TRUE: "true"
    FALSE: "false"

    // Operators and punctuation
    PLUS: "+"
    MINUS: "-"
    TIMES: "*"
    DIV: "/"
    MOD: "%"
    AND: "&&"
    OR: "||"
    EQ: "="
    NE: "<>"
    LT: "<"
    LE: "<="
    GT: ">"
    GE: ">="
    LPAREN: "("
    RPAREN: ")"
    ARROW: "->"
    SEMI: ";"

    NUM: /[0-9]+/
    ID: /[a-zA-Z_][a-zA-Z0-9_']*/

    COMMENT.2: /\(\*(.|\n)*?\*\)/
    %ignore COMMENT

    %import common.WS
    %ignore WS
"""


# Lexer-only mode: no parse tables are built and `lex` reuses one BasicLexer.
OCMINUS_LEXER = Lark(
    OCMINUS_TOKENS,
    parser=None,
    lexer='basic',
)


def end_of_input(source: str) -> Token:
    """Build the EOF token positioned just past the last character."""
    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    return Token('EOF', '', start_pos=len(source), line=line, column=column)


def tokenize(source: str) -> List[Token]:
    """Convert source text into a list of tokens ending with EOF."""
    try:
        tokens = list(OCMINUS_LEXER.lex(source))
    except UnexpectedCharacters as e:
        raise LexError(f"unexpected character {e.char!r}", e.line, e.column) from e
    tokens.append(end_of_input(source))
    return tokens


def lexemes(source: str) -> List[str]:
    """Return the source text of each token, without the EOF marker."""
    return [str(token) for token in tokenize(source) if token.type != 'EOF']
