# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for TypeScript declaration files.

Converts a token stream produced by the lexer into a raw syntax tree. Only the
declaration subset needed for binding generation is understood in detail;
other statements are consumed as balanced token runs and kept as
``UnknownStatement`` nodes.
"""

from tsbindgen.parser.lexer import Token, TokenType, tokenize
from tsbindgen.parser.syntax import (
    ArrayType,
    CallSignature,
    EnumDeclaration,
    EnumMember,
    FunctionType,
    Identifier,
    IndexedAccessType,
    IndexSignature,
    InterfaceDeclaration,
    IntersectionType,
    KeywordType,
    LiteralType,
    MemberNode,
    MethodSignature,
    ModuleDeclaration,
    NumericLiteral,
    ParenthesizedType,
    PropertySignature,
    QualifiedName,
    SourceFile,
    StatementNode,
    StringLiteral,
    TupleType,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeNode,
    TypeOperator,
    TypeReference,
    UnionType,
    UnknownExpression,
    UnknownStatement,
)

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """A token sequence that does not form a valid declaration.

    Attributes:
        line: Line of the offending token.
        column: Column of the offending token.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def parse(source: str) -> SourceFile:
    """Build the syntax tree of a ``.d.ts`` file.

    Raises:
        LexerError: If the text cannot be tokenized.
        ParseError: If the tokens do not form declarations.
    """
    return _Parser(tokenize(source)).parse()


# ################
# Implementation
# ################

_KEYWORD_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.DECLARE,
        TokenType.EXPORT,
        TokenType.NAMESPACE,
        TokenType.MODULE,
        TokenType.INTERFACE,
        TokenType.ENUM,
        TokenType.TYPE,
        TokenType.CONST,
        TokenType.READONLY,
        TokenType.EXTENDS,
    }
)

# Identifiers that denote a keyword type when used in type position.
_TYPE_KEYWORDS: frozenset[str] = frozenset(
    {
        "string",
        "number",
        "boolean",
        "object",
        "any",
        "unknown",
        "never",
        "void",
        "null",
        "undefined",
        "bigint",
        "symbol",
        "this",
    }
)

_TYPE_OPERATORS: frozenset[str] = frozenset({"keyof", "typeof", "unique", "infer"})

_OPENERS: dict[TokenType, TokenType] = {
    TokenType.LBRACE: TokenType.RBRACE,
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACKET: TokenType.RBRACKET,
}


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._last = len(tokens) - 1
        self._pos = 0

    def parse(self) -> SourceFile:
        result = SourceFile(line=1, column=1)
        while not self._at_end():
            statement = self._parse_statement()
            if statement is not None:
                result.statements.append(statement)
        return result

    # Cursor

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _peek_type(self, offset: int = 0) -> TokenType:
        """Type of the token *offset* places ahead; EOF past the end."""
        return self._tokens[min(self._pos + offset, self._last)].type

    def _at_end(self) -> bool:
        return self._peek_type() == TokenType.EOF

    def _advance(self) -> Token:
        """Step past the current token and return it. The cursor never leaves EOF."""
        token = self._tokens[self._pos]
        self._pos = min(self._pos + 1, self._last)
        return token

    def _expect(self, *types: TokenType) -> Token:
        token = self._current()
        if token.type in types:
            return self._advance()
        wanted = " or ".join(repr(t.value) for t in types)
        raise ParseError(f"Expected {wanted}, got {token.value!r}", token.line, token.column)

    def _check(self, *types: TokenType) -> bool:
        return self._peek_type() in types

    def _match(self, *types: TokenType) -> bool:
        """Step past the current token only if it has one of *types*."""
        matched = self._check(*types)
        if matched:
            self._advance()
        return matched

    def _expect_name_token(self) -> Token:
        """Take an identifier. Keywords count too, since ``type`` or ``module`` are valid names."""
        token = self._current()
        if token.type == TokenType.IDENTIFIER or token.type in _KEYWORD_TYPES:
            return self._advance()
        raise ParseError(f"Expected identifier, got {token.value!r}", token.line, token.column)

    def _expect_property_name(self) -> Token:
        """Consume a property or enum member name: identifier, keyword, string or number."""
        if self._check(TokenType.STRING, TokenType.NUMBER):
            return self._advance()
        return self._expect_name_token()

    def _skip_balanced(self) -> list[Token]:
        """Consume a bracketed group starting at the current opener, including its closer."""
        opener = self._current()
        closer = _OPENERS[opener.type]
        consumed = [self._advance()]
        while not self._check(closer):
            if self._at_end():
                raise ParseError(f"Unterminated {opener.value!r}", opener.line, opener.column)
            if self._peek_type() in _OPENERS:
                consumed.extend(self._skip_balanced())
            else:
                consumed.append(self._advance())
        consumed.append(self._advance())
        return consumed

    def _skip_type_parameters(self) -> None:
        """Skip an optional ``<...>`` type parameter list, honouring nesting."""
        if not self._check(TokenType.LANGLE):
            return
        start = self._advance()
        depth = 1
        while depth > 0:
            if self._at_end():
                raise ParseError("Unterminated type parameter list", start.line, start.column)
            tok = self._advance()
            if tok.type == TokenType.LANGLE:
                depth += 1
            elif tok.type == TokenType.RANGLE:
                depth -= 1

    def _skip_terminators(self) -> None:
        while self._check(TokenType.SEMICOLON, TokenType.COMMA):
            self._advance()

    # Statements

    def _parse_statement(self) -> StatementNode | None:
        """Parse one statement; returns None for stray semicolons."""
        first = self._current()
        if first.type == TokenType.SEMICOLON:
            self._advance()
            return None
        doc = first.doc

        # Modifiers may precede any declaration.
        while self._check(TokenType.EXPORT, TokenType.DECLARE) and not self._is_name_use():
            self._advance()

        tok = self._current()
        if tok.type in (TokenType.NAMESPACE, TokenType.MODULE) and self._peek_type(1) in (
            TokenType.IDENTIFIER,
            TokenType.STRING,
            *_KEYWORD_TYPES,
        ):
            return self._parse_module(doc)
        if tok.type == TokenType.INTERFACE:
            return self._parse_interface(doc)
        if tok.type == TokenType.ENUM:
            return self._parse_enum(doc, is_const=False)
        if tok.type == TokenType.CONST and self._peek_type(1) == TokenType.ENUM:
            self._advance()  # consume 'const'
            return self._parse_enum(doc, is_const=True)
        if tok.type == TokenType.TYPE and self._peek_type(1) in (TokenType.IDENTIFIER, *_KEYWORD_TYPES):
            return self._parse_type_alias(doc)
        return self._parse_unknown_statement(first, doc)

    def _is_name_use(self) -> bool:
        """Return True when an 'export'/'declare' keyword is not acting as a modifier."""
        return self._peek_type(1) in (TokenType.EQUALS, TokenType.DOT, TokenType.LPAREN)

    def _parse_unknown_statement(self, first: Token, doc: str | None) -> UnknownStatement:
        """Consume tokens up to the end of an unrecognised statement.

        A statement ends at a top-level ';', after a top-level '{...}' block
        that is not followed by an operator continuing the expression, or
        before the closing '}' of the enclosing block.
        """
        if self._check(TokenType.RBRACE) and self._current() is first:
            raise ParseError("Unexpected token '}'", first.line, first.column)
        parts: list[str] = []
        while not self._at_end() and not self._check(TokenType.RBRACE):
            if self._check(TokenType.SEMICOLON):
                self._advance()
                break
            if self._check(TokenType.LBRACE):
                parts.extend(t.value for t in self._skip_balanced())
                if not self._check(TokenType.EQUALS, TokenType.DOT, TokenType.COMMA, TokenType.COLON):
                    self._match(TokenType.SEMICOLON)
                    break
                continue
            if self._peek_type() in _OPENERS:
                parts.extend(t.value for t in self._skip_balanced())
                continue
            parts.append(self._advance().value)
        return UnknownStatement(line=first.line, column=first.column, text=" ".join(parts), doc=doc)

    def _parse_module(self, doc: str | None) -> ModuleDeclaration:
        """Parse: namespace|module <Name>(.<Name>)* { statement* }"""
        keyword = self._advance()
        if self._check(TokenType.STRING):
            names = [self._advance().value]
        else:
            names = [self._expect_name_token().value]
            while self._match(TokenType.DOT):
                names.append(self._expect_name_token().value)

        body: list[StatementNode] = []
        if self._check(TokenType.LBRACE):
            self._advance()  # consume {
            while not self._check(TokenType.RBRACE, TokenType.EOF):
                statement = self._parse_statement()
                if statement is not None:
                    body.append(statement)
            self._expect(TokenType.RBRACE)
        else:
            self._match(TokenType.SEMICOLON)

        # 'namespace a.b.c {}' nests as a { b { c {} } }; the doc belongs to the outermost.
        module = ModuleDeclaration(line=keyword.line, column=keyword.column, name=names[-1], body=body)
        for name in reversed(names[:-1]):
            module = ModuleDeclaration(line=keyword.line, column=keyword.column, name=name, body=[module])
        module.doc = doc
        return module

    def _parse_interface(self, doc: str | None) -> InterfaceDeclaration:
        """Parse: interface <Name> [<T>] [extends A, B] { member* }"""
        keyword = self._expect(TokenType.INTERFACE)
        name_tok = self._expect_name_token()
        self._skip_type_parameters()
        heritage: list[TypeNode] = []
        if self._match(TokenType.EXTENDS):
            heritage.append(self._parse_type())
            while self._match(TokenType.COMMA):
                heritage.append(self._parse_type())
        members = self._parse_object_members()
        return InterfaceDeclaration(
            line=keyword.line,
            column=keyword.column,
            name=name_tok.value,
            members=members,
            heritage=heritage,
            doc=doc,
        )

    def _parse_enum(self, doc: str | None, is_const: bool) -> EnumDeclaration:
        """Parse: [const] enum <Name> { <Member> [= <init>] (, <Member> [= <init>])* }"""
        keyword = self._expect(TokenType.ENUM)
        name_tok = self._expect_name_token()
        self._expect(TokenType.LBRACE)
        enum_decl = EnumDeclaration(
            line=keyword.line,
            column=keyword.column,
            name=name_tok.value,
            is_const=is_const,
            doc=doc,
        )
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            member_tok = self._expect_property_name()
            member = EnumMember(
                line=member_tok.line,
                column=member_tok.column,
                name=member_tok.value,
                doc=member_tok.doc,
            )
            if self._match(TokenType.EQUALS):
                member.initializer = self._parse_initializer()
            enum_decl.members.append(member)
            if not self._match(TokenType.COMMA):
                break
        self._expect(TokenType.RBRACE)
        return enum_decl

    def _parse_initializer(self) -> StringLiteral | NumericLiteral | UnknownExpression:
        """Parse an enum member initializer up to the next ',' or '}'."""
        start = self._current()
        if self._check(TokenType.STRING) and self._peek_type(1) in (TokenType.COMMA, TokenType.RBRACE):
            tok = self._advance()
            return StringLiteral(line=tok.line, column=tok.column, text=tok.value)
        if self._check(TokenType.NUMBER) and self._peek_type(1) in (TokenType.COMMA, TokenType.RBRACE):
            tok = self._advance()
            return NumericLiteral(line=tok.line, column=tok.column, text=tok.value)
        if (
            self._check(TokenType.MINUS)
            and self._peek_type(1) == TokenType.NUMBER
            and self._peek_type(2) in (TokenType.COMMA, TokenType.RBRACE)
        ):
            self._advance()  # consume -
            tok = self._advance()
            return NumericLiteral(line=start.line, column=start.column, text=f"-{tok.value}")

        parts: list[str] = []
        while not self._check(TokenType.COMMA, TokenType.RBRACE, TokenType.EOF):
            if self._peek_type() in _OPENERS:
                parts.extend(t.value for t in self._skip_balanced())
            else:
                parts.append(self._advance().value)
        return UnknownExpression(line=start.line, column=start.column, text=" ".join(parts))

    def _parse_type_alias(self, doc: str | None) -> TypeAliasDeclaration:
        """Parse: type <Name> [<T>] = <type> [;]"""
        keyword = self._expect(TokenType.TYPE)
        name_tok = self._expect_name_token()
        self._skip_type_parameters()
        self._expect(TokenType.EQUALS)
        alias_type = self._parse_type()
        self._match(TokenType.SEMICOLON)
        return TypeAliasDeclaration(
            line=keyword.line,
            column=keyword.column,
            name=name_tok.value,
            type=alias_type,
            doc=doc,
        )

    # Members of object types

    def _parse_object_members(self) -> list[MemberNode]:
        """Parse: { member* } as found in interfaces and type literals."""
        self._expect(TokenType.LBRACE)
        members: list[MemberNode] = []
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            members.append(self._parse_member())
            self._skip_terminators()
        self._expect(TokenType.RBRACE)
        return members

    def _parse_member(self) -> MemberNode:
        """Parse one property, method, index or call signature."""
        first = self._current()
        doc = first.doc

        if self._check(TokenType.LPAREN, TokenType.LANGLE):
            self._skip_type_parameters()
            self._skip_balanced()
            if self._match(TokenType.COLON):
                self._parse_type()
            return CallSignature(line=first.line, column=first.column, doc=doc)

        readonly = False
        if self._check(TokenType.READONLY) and self._peek_type(1) not in (
            TokenType.COLON,
            TokenType.QUESTION,
            TokenType.LPAREN,
            TokenType.SEMICOLON,
            TokenType.COMMA,
            TokenType.RBRACE,
        ):
            self._advance()
            readonly = True

        if self._check(TokenType.LBRACKET):
            self._skip_balanced()
            if self._check(TokenType.QUESTION):
                self._advance()
            index_type = self._parse_type() if self._match(TokenType.COLON) else None
            return IndexSignature(line=first.line, column=first.column, type=index_type, doc=doc)

        name_tok = self._expect_property_name()
        question = self._match(TokenType.QUESTION)

        if self._check(TokenType.LPAREN, TokenType.LANGLE):
            self._skip_type_parameters()
            self._skip_balanced()
            if self._match(TokenType.COLON):
                self._parse_type()
            return MethodSignature(line=first.line, column=first.column, name=name_tok.value, doc=doc)

        member_type = self._parse_type() if self._match(TokenType.COLON) else None
        return PropertySignature(
            line=first.line,
            column=first.column,
            name=name_tok.value,
            type=member_type,
            question_token=question,
            readonly=readonly,
            doc=doc,
        )

    # Types

    def _parse_type(self) -> TypeNode:
        """Parse a full type expression: union of intersections."""
        start = self._current()
        self._match(TokenType.PIPE)  # leading '|' is allowed
        types = [self._parse_intersection()]
        while self._match(TokenType.PIPE):
            types.append(self._parse_intersection())
        if len(types) == 1:
            return types[0]
        return UnionType(line=start.line, column=start.column, types=types)

    def _parse_intersection(self) -> TypeNode:
        start = self._current()
        self._match(TokenType.AMPERSAND)
        types = [self._parse_postfix()]
        while self._match(TokenType.AMPERSAND):
            types.append(self._parse_postfix())
        if len(types) == 1:
            return types[0]
        return IntersectionType(line=start.line, column=start.column, types=types)

    def _parse_postfix(self) -> TypeNode:
        """Parse a primary type followed by any number of '[]' suffixes."""
        start = self._current()
        result = self._parse_primary()
        while self._check(TokenType.LBRACKET):
            if self._peek_type(1) == TokenType.RBRACKET:
                self._advance()  # [
                self._advance()  # ]
                result = ArrayType(line=start.line, column=start.column, element_type=result)
            else:
                self._skip_balanced()
                result = IndexedAccessType(line=start.line, column=start.column, object_type=result)
        return result

    def _parse_primary(self) -> TypeNode:
        tok = self._current()

        if tok.type == TokenType.LPAREN:
            if self._is_function_type():
                return self._parse_function_type()
            self._advance()  # consume (
            inner = self._parse_type()
            self._expect(TokenType.RPAREN)
            return ParenthesizedType(line=tok.line, column=tok.column, type=inner)

        if tok.type == TokenType.LANGLE:
            return self._parse_function_type()

        if tok.type == TokenType.STRING:
            self._advance()
            literal = StringLiteral(line=tok.line, column=tok.column, text=tok.value)
            return LiteralType(line=tok.line, column=tok.column, literal=literal)

        if tok.type == TokenType.NUMBER:
            self._advance()
            number = NumericLiteral(line=tok.line, column=tok.column, text=tok.value)
            return LiteralType(line=tok.line, column=tok.column, literal=number)

        if tok.type == TokenType.MINUS and self._peek_type(1) == TokenType.NUMBER:
            self._advance()  # consume -
            num_tok = self._advance()
            number = NumericLiteral(line=tok.line, column=tok.column, text=f"-{num_tok.value}")
            return LiteralType(line=tok.line, column=tok.column, literal=number)

        if tok.type == TokenType.LBRACE:
            members = self._parse_object_members()
            return TypeLiteral(line=tok.line, column=tok.column, members=members)

        if tok.type == TokenType.LBRACKET:
            return self._parse_tuple()

        is_operator = tok.type == TokenType.READONLY or (
            tok.type == TokenType.IDENTIFIER and tok.value in _TYPE_OPERATORS
        )
        if is_operator and self._peek_type(1) in (
            TokenType.IDENTIFIER,
            TokenType.LPAREN,
            TokenType.LBRACKET,
            TokenType.LBRACE,
            *_KEYWORD_TYPES,
        ):
            self._advance()
            operand = self._parse_postfix()
            return TypeOperator(line=tok.line, column=tok.column, operator=tok.value, type=operand)

        if tok.type == TokenType.IDENTIFIER and tok.value in ("true", "false"):
            self._advance()
            keyword = KeywordType(line=tok.line, column=tok.column, keyword=tok.value)
            return LiteralType(line=tok.line, column=tok.column, literal=keyword)

        if tok.type == TokenType.IDENTIFIER and tok.value in _TYPE_KEYWORDS and self._peek_type(1) != TokenType.DOT:
            self._advance()
            return KeywordType(line=tok.line, column=tok.column, keyword=tok.value)

        if tok.type == TokenType.IDENTIFIER or tok.type in _KEYWORD_TYPES:
            return self._parse_type_reference()

        raise ParseError(f"Unexpected token {tok.value!r} in type expression", tok.line, tok.column)

    def _parse_type_reference(self) -> TypeReference:
        """Parse: <Name>(.<Name>)* [<T, ...>]"""
        first = self._expect_name_token()
        name: Identifier | QualifiedName = Identifier(line=first.line, column=first.column, text=first.value)
        while self._match(TokenType.DOT):
            part = self._expect_name_token()
            right = Identifier(line=part.line, column=part.column, text=part.value)
            name = QualifiedName(line=first.line, column=first.column, left=name, right=right)
        arguments: list[TypeNode] = []
        if self._match(TokenType.LANGLE):
            arguments.append(self._parse_type())
            while self._match(TokenType.COMMA):
                arguments.append(self._parse_type())
            self._expect(TokenType.RANGLE)
        return TypeReference(line=first.line, column=first.column, type_name=name, type_arguments=arguments)

    def _parse_tuple(self) -> TupleType:
        """Parse: [ T, ...T[], name?: T ]"""
        start = self._expect(TokenType.LBRACKET)
        elements: list[TypeNode] = []
        while not self._check(TokenType.RBRACKET, TokenType.EOF):
            self._match(TokenType.ELLIPSIS)
            # Labelled element: 'name: T' or 'name?: T'.
            if self._peek_type(1) in (TokenType.COLON, TokenType.QUESTION) and (
                self._check(TokenType.IDENTIFIER) or self._peek_type() in _KEYWORD_TYPES
            ):
                self._advance()
                self._match(TokenType.QUESTION)
                self._expect(TokenType.COLON)
            elements.append(self._parse_type())
            self._match(TokenType.QUESTION)
            if not self._match(TokenType.COMMA):
                break
        self._expect(TokenType.RBRACKET)
        return TupleType(line=start.line, column=start.column, elements=elements)

    def _is_function_type(self) -> bool:
        """Return True if the '(' at the current position opens a function type's parameters."""
        depth = 0
        index = self._pos
        while index < len(self._tokens):
            token_type = self._tokens[index].type
            if token_type == TokenType.LPAREN:
                depth += 1
            elif token_type == TokenType.RPAREN:
                depth -= 1
                if depth == 0:
                    next_index = min(index + 1, len(self._tokens) - 1)
                    return self._tokens[next_index].type == TokenType.ARROW
            elif token_type == TokenType.EOF:
                return False
            index += 1
        return False

    def _parse_function_type(self) -> FunctionType:
        """Parse: [<T>] ( params ) => <type>"""
        start = self._current()
        self._skip_type_parameters()
        self._skip_balanced()
        self._expect(TokenType.ARROW)
        return_type = self._parse_type()
        return FunctionType(line=start.line, column=start.column, return_type=return_type)
