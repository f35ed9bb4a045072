# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for TypeScript declaration files."""

from tsbindgen.parser.lexer import LexerError, Token, TokenType, tokenize
from tsbindgen.parser.parser import ParseError, parse
from tsbindgen.parser.syntax import SourceFile, SyntaxKind

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "LexerError",
    "parse",
    "ParseError",
    "SourceFile",
    "SyntaxKind",
]
