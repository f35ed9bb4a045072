# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner for the TypeScript declaration subset.

Produces a flat token list terminated by EOF. Plain comments vanish; a JSDoc
block (``/** ... */``) rides along on the ``doc`` field of the next token.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the declaration lexer."""

    # Keywords
    DECLARE = "declare"
    EXPORT = "export"
    NAMESPACE = "namespace"
    MODULE = "module"
    INTERFACE = "interface"
    ENUM = "enum"
    TYPE = "type"
    CONST = "const"
    READONLY = "readonly"
    EXTENDS = "extends"

    # Symbols and operators
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LANGLE = "<"
    RANGLE = ">"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    SEMICOLON = ";"
    DOT = "."
    ELLIPSIS = "..."
    COLON = ":"
    QUESTION = "?"
    PIPE = "|"
    AMPERSAND = "&"
    EQUALS = "="
    ARROW = "=>"
    MINUS = "-"
    PLUS = "+"
    STAR = "*"
    BANG = "!"
    AT = "@"

    # Literals
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """One token of declaration source, positioned at its first character.

    Attributes:
        type: Token category.
        value: Source text; for STRING tokens the unquoted, unescaped content.
        line: Line of the first character, counted from 1.
        column: Column of the first character, counted from 1.
        doc: Raw text of the JSDoc comment directly preceding the token, if any.
    """

    type: TokenType
    value: str
    line: int
    column: int
    doc: str | None = None


class LexerError(Exception):
    """Source text that cannot be split into tokens.

    Attributes:
        line: Line of the offending input.
        column: Column of the offending input.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(source: str) -> list[Token]:
    """Split the text of a ``.d.ts`` file into tokens.

    Whitespace and comments produce no tokens. The list always ends with
    exactly one EOF token.

    Raises:
        LexerError: For a character outside the grammar, a bad escape, or a
            string or block comment left open.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "declare": TokenType.DECLARE,
    "export": TokenType.EXPORT,
    "namespace": TokenType.NAMESPACE,
    "module": TokenType.MODULE,
    "interface": TokenType.INTERFACE,
    "enum": TokenType.ENUM,
    "type": TokenType.TYPE,
    "const": TokenType.CONST,
    "readonly": TokenType.READONLY,
    "extends": TokenType.EXTENDS,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    "?": TokenType.QUESTION,
    "|": TokenType.PIPE,
    "&": TokenType.AMPERSAND,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "!": TokenType.BANG,
    "@": TokenType.AT,
}

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "`": "`",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_WHITESPACE = frozenset(" \t\r\n\ufeff")


class _Lexer:
    def __init__(self, source: str) -> None:
        self._text = source
        self._end = len(source)
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []
        self._doc: str | None = None

    def tokenize(self) -> list[Token]:
        while True:
            self._skip_trivia()
            if self._at_end():
                break
            self._next_token()
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    # Cursor

    def _at_end(self) -> bool:
        return self._pos >= self._end

    def _char(self, ahead: int = 0) -> str:
        """Character at the cursor (or *ahead* of it); empty once past the end."""
        index = self._pos + ahead
        return self._text[index] if index < self._end else ""

    def _take(self, count: int = 1) -> str:
        """Move the cursor *count* characters forward and return the text passed over."""
        start = self._pos
        for _ in range(count):
            if self._text[self._pos] == "\n":
                self._line += 1
                self._column = 1
            else:
                self._column += 1
            self._pos += 1
        return self._text[start : self._pos]

    def _take_while(self, allowed: str | frozenset[str]) -> None:
        while not self._at_end() and self._char() in allowed:
            self._take()

    def _push(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        self._tokens.append(Token(token_type, value, line, column, self._doc))
        self._doc = None

    # Trivia

    def _skip_trivia(self) -> None:
        while not self._at_end():
            ch = self._char()
            if ch in _WHITESPACE:
                self._take()
            elif ch == "/" and self._char(1) == "/":
                while not self._at_end() and self._char() != "\n":
                    self._take()
            elif ch == "/" and self._char(1) == "*":
                self._block_comment()
            else:
                return

    def _block_comment(self) -> None:
        """Skip a ``/* */`` comment, keeping it as pending JSDoc when it opens with ``/**``.

        The empty comment ``/**/`` is not documentation.
        """
        line, column, start = self._line, self._column, self._pos
        documentation = self._char(2) == "*" and self._char(3) != "/"
        self._take(2)
        closing = self._text.find("*/", self._pos)
        if closing < 0:
            raise LexerError("Unterminated block comment", line, column)
        self._take(closing + 2 - self._pos)
        if documentation:
            self._doc = self._text[start : self._pos]

    # Tokens

    def _next_token(self) -> None:
        line, column = self._line, self._column
        ch = self._char()

        if ch == "=":
            if self._char(1) == ">":
                self._push(TokenType.ARROW, self._take(2), line, column)
            else:
                self._push(TokenType.EQUALS, self._take(), line, column)
        elif ch == ".":
            if self._char(1) == "." and self._char(2) == ".":
                self._push(TokenType.ELLIPSIS, self._take(3), line, column)
            elif self._char(1).isdigit():
                self._number(line, column)
            else:
                self._push(TokenType.DOT, self._take(), line, column)
        elif ch in _SINGLE_CHAR_TOKENS:
            self._push(_SINGLE_CHAR_TOKENS[ch], self._take(), line, column)
        elif ch == '"' or ch == "'":
            self._string(line, column)
        elif ch.isdigit():
            self._number(line, column)
        elif ch.isalpha() or ch in "_$":
            self._word(line, column)
        else:
            raise LexerError(f"Unexpected character: {ch!r}", line, column)

    def _string(self, line: int, column: int) -> None:
        """Quoted literal; the token value holds the decoded text without quotes."""
        quote = self._take()
        decoded: list[str] = []
        while not self._at_end():
            ch = self._char()
            if ch == quote:
                self._take()
                self._push(TokenType.STRING, "".join(decoded), line, column)
                return
            if ch == "\n":
                break
            self._take()
            if ch != "\\":
                decoded.append(ch)
            elif self._at_end():
                break
            else:
                decoded.append(self._escape())
        raise LexerError("Unterminated string literal", line, column)

    def _escape(self) -> str:
        code = self._char()
        if code in _ESCAPES:
            self._take()
            return _ESCAPES[code]
        if code == "u":
            self._take()
            digits = self._text[self._pos : self._pos + 4]
            if len(digits) != 4 or not set(digits) <= _HEX_DIGITS:
                raise LexerError("Invalid unicode escape sequence", self._line, self._column)
            self._take(4)
            return chr(int(digits, 16))
        raise LexerError(f"Invalid escape sequence: '\\{code}'", self._line, self._column)

    def _number(self, line: int, column: int) -> None:
        """Decimal (fraction, exponent) or ``0x`` hex literal. ``_`` separators are dropped."""
        start = self._pos
        digits = "0123456789_"
        if self._char() == "0" and self._char(1) in ("x", "X"):
            self._take(2)
            self._take_while(_HEX_DIGITS | {"_"})
            if not set(self._text[start + 2 : self._pos]) & _HEX_DIGITS:
                raise LexerError("Hex literal has no digits", line, column)
        else:
            self._take_while(digits)
            if self._char() == "." and self._char(1).isdigit():
                self._take()
                self._take_while(digits)
            if self._char() in ("e", "E"):
                signed = self._char(1) in ("+", "-") and self._char(2).isdigit()
                if signed or self._char(1).isdigit():
                    self._take(2 if signed else 1)
                    self._take_while(digits)
        self._push(TokenType.NUMBER, self._text[start : self._pos].replace("_", ""), line, column)

    def _word(self, line: int, column: int) -> None:
        start = self._pos
        while not self._at_end() and (self._char().isalnum() or self._char() in "_$"):
            self._take()
        word = self._text[start : self._pos]
        self._push(_KEYWORDS.get(word, TokenType.IDENTIFIER), word, line, column)
