"""types.py

Attribute types used in Lox objects.
"""

from typing import (
    get_args,
    Literal as LiteralType,
    Union,
)

__all__ = [
    'NameKey',
    'PyLiteral',
    'TokenType',
    'TOKENTYPES',
]

TokenType = LiteralType[
    # Single-character tokens
    'LEFT_PAREN', 'RIGHT_PAREN', 'LEFT_BRACE', 'RIGHT_BRACE',
    'COMMA', 'DOT', 'MINUS', 'PLUS', 'SEMICOLON', 'SLASH', 'STAR',
    # One or two character tokens
    'BANG', 'BANG_EQUAL',
    'EQUAL', 'EQUAL_EQUAL',
    'GREATER', 'GREATER_EQUAL',
    'LESS', 'LESS_EQUAL',
    # Literals
    'IDENTIFIER', 'STRING', 'NUMBER',
    # Keywords
    'AND', 'CLASS', 'ELSE', 'FALSE', 'FUN', 'FOR', 'IF', 'NIL', 'OR',
    'PRINT', 'RETURN', 'SUPER', 'THIS', 'TRUE', 'VAR', 'WHILE',
    'EOF',
]
TOKENTYPES = get_args(TokenType)

NameKey = str  # for Environment/Instance
PyLiteral = Union[bool, float, str, None]
