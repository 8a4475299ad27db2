"""
Lexical analyzer for the Monkey programming language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with kind, literal text, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens, one `next_token()` at a time.

Features:
    - Skips whitespace
    - Longest-match recognition of operators (`==` before `=`, `!=` before `!`)
    - Recognizes:
        * Identifiers and keywords (`fn`, `let`, `true`, `false`, `if`, `else`, `return`)
        * Integer literals
        * Operators and punctuation

Unknown characters never raise: they come back as `ILLEGAL` tokens so the
parser can report them alongside every other diagnostic. Once the source is
exhausted, `next_token()` keeps returning `EOF`.

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from typing import Any

from monkey.monkey_constants import EOF, IDENT, ILLEGAL, INT, keywords, token_hashmap

# Longest operator spelling in token_hashmap
MAX_OPERATOR_LEN = max(len(op) for op in token_hashmap)


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` from the current position, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Monkey language.

    Attributes:
        type (str): The token kind (e.g. 'IDENT', 'INT', 'LET', 'EOF').
        literal (str): The source text the token was read from.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, literal: str, line: int = 0, col: int = 0):
        self.type = type_
        self.literal = literal
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.literal})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.literal, self.line, self.col))


class Lexer:
    """Lexical analyzer for the Monkey language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in " \t\r\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest operator or delimiter at the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(MAX_OPERATOR_LEN):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream."""
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(EOF, "", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if ch.isascii() and (ch.isalpha() or ch == "_"):
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isascii() and (self.peek().isalnum() or self.peek() == "_")
            ):
                ident += self.advance()
            return Token(keywords.get(ident, IDENT), ident, line, col)

        # 2. Integer
        if ch.isascii() and ch.isdigit():
            num = ""
            while not self.stream.end_of_file() and (
                self.peek().isascii() and self.peek().isdigit()
            ):
                num += self.advance()
            return Token(INT, num, line, col)

        # 3. Operator or delimiter
        token = self.match_operator()
        if token:
            return token

        # 4. Unknown character
        return Token(ILLEGAL, self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Lex `source` completely, returning every token including the trailing EOF."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == EOF:
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
