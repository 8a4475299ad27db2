"""
Monkey Language Parser

Parses a Monkey token stream into an abstract syntax tree (`Program`).

The parser pulls tokens from a lexer on demand and keeps two tokens of
lookahead (`cur_token` and `peek_token`). Statements are dispatched on the
current token kind; expressions are parsed by precedence climbing (Pratt
parsing) through per-token-kind prefix and infix parse functions.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expr>;`
    * `return <expr>;`
    * expression statements (`<expr>;`, trailing semicolon optional)

- Expressions:
    * identifiers, integer literals, `true` / `false`
    * prefix operators: `!x`, `-x`
    * infix operators: `+ - * / < > == !=`
    * grouping: `(a + b) * c`
    * calls: `add(1, 2 * 3)`

Precedence (lowest to highest)
------------------------------
LOWEST < EQUALS (== !=) < LESSGREATER (< >) < SUM (+ -) < PRODUCT (* /)
< PREFIX (unary ! -) < CALL (`(`)

Parser Behavior
---------------
- Never raises on malformed input. Each problem is recorded as a message in
  `errors` and parsing resumes at the next token, so one pass reports as many
  problems as possible.
- A non-empty `errors` list means the returned `Program` may be missing
  statements or contain `None` children at the failure points.
- A `Parser` is single-use: construct it, call `parse_program()` once, read
  `errors`.

Diagnostics
-----------
- `expected next token to be <kind>, got <kind> instead`
- `no prefix parse function for <kind> found`
- `could not parse "<literal>" as integer`
- `expression nested too deeply near line <n>`
"""

from __future__ import annotations

import functools
from enum import IntEnum
from typing import Any, Callable, Protocol

from monkey.monkey_ast import (
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import (
    ASSIGN,
    ASTERISK,
    BANG,
    COMMA,
    EOF,
    EQ,
    FALSE,
    GT,
    IDENT,
    INT,
    LET,
    LPAREN,
    LT,
    MINUS,
    NOT_EQ,
    PLUS,
    RETURN,
    RPAREN,
    SEMICOLON,
    SLASH,
    TRUE,
)
from monkey.monkey_lexer import Token

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class TokenSource(Protocol):
    """Anything that hands out tokens one at a time, e.g. `monkey_lexer.Lexer`."""

    def next_token(self) -> Token: ...  # pragma: no cover


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # myFunction(X)


PRECEDENCES: dict[str, Precedence] = {
    EQ: Precedence.EQUALS,
    NOT_EQ: Precedence.EQUALS,
    LT: Precedence.LESSGREATER,
    GT: Precedence.LESSGREATER,
    PLUS: Precedence.SUM,
    MINUS: Precedence.SUM,
    SLASH: Precedence.PRODUCT,
    ASTERISK: Precedence.PRODUCT,
    LPAREN: Precedence.CALL,
}

PrefixParseFn = Callable[[], "Expression | None"]
InfixParseFn = Callable[["Expression"], "Expression | None"]

# Parse functions that print BEGIN/END lines when tracing
TRACED_PARSE_FNS = (
    "parse_expression_statement",
    "parse_expression",
    "parse_integer_literal",
    "parse_prefix_expression",
    "parse_infix_expression",
)


def traced(parser: Parser, fn: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap the bound parse function `fn` so each call prints indented BEGIN/END lines."""

    @functools.wraps(fn)
    def wrapper(*args: Any) -> Any:
        parser._trace_print(f"BEGIN {fn.__name__}")
        parser.trace_level += 1
        try:
            return fn(*args)
        finally:
            parser.trace_level -= 1
            parser._trace_print(f"END {fn.__name__}")

    return wrapper


class Parser:
    """
    Monkey Parser Class

    Attributes
    ----------
    lexer : TokenSource
        Source of tokens; only `next_token()` is used.
    cur_token : Token
        The token under examination.
    peek_token : Token
        The token after `cur_token`.
    errors : list[str]
        Diagnostics collected so far, in encounter order.
    trace : bool
        When True, expression parse functions print BEGIN/END lines.
    prefix_parse_fns : dict[str, PrefixParseFn]
        Token kind -> function that starts an expression at that token.
    infix_parse_fns : dict[str, InfixParseFn]
        Token kind -> function that extends an expression with that operator.

    Methods
    -------
    parse_program() -> Program
        Parse statements until EOF.
    parse_statement() -> Statement | None
        Parse the statement starting at `cur_token`.
    parse_expression(precedence: Precedence) -> Expression | None
        Parse an expression binding tighter than `precedence`.
    """

    def __init__(self, lexer: TokenSource, trace: bool = False) -> None:
        self.lexer = lexer
        self.errors: list[str] = []
        self.trace = trace
        self.trace_level = 0

        # Instance attributes shadow the methods, so untraced parsers pay nothing
        if trace:
            for name in TRACED_PARSE_FNS:
                setattr(self, name, traced(self, getattr(self, name)))

        self.prefix_parse_fns: dict[str, PrefixParseFn] = {
            IDENT: self.parse_identifier,
            INT: self.parse_integer_literal,
            TRUE: self.parse_boolean,
            FALSE: self.parse_boolean,
            BANG: self.parse_prefix_expression,
            MINUS: self.parse_prefix_expression,
            LPAREN: self.parse_grouped_expression,
        }
        self.infix_parse_fns: dict[str, InfixParseFn] = {
            op: self.parse_infix_expression
            for op in (PLUS, MINUS, SLASH, ASTERISK, EQ, NOT_EQ, LT, GT)
        }
        self.infix_parse_fns[LPAREN] = self.parse_call_expression

        # Prime cur_token and peek_token
        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

    # Cursor

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: str) -> bool:
        return self.cur_token.type == kind

    def peek_token_is(self, kind: str) -> bool:
        return self.peek_token.type == kind

    def expect_peek(self, kind: str) -> bool:
        """Advance if the next token is `kind`; otherwise record an error and stay put."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # Diagnostics

    def peek_error(self, kind: str) -> None:
        self.errors.append(
            f"expected next token to be {kind}, got {self.peek_token.type} instead"
        )

    def no_prefix_parse_fn_error(self, kind: str) -> None:
        self.errors.append(f"no prefix parse function for {kind} found")

    def _trace_print(self, message: str) -> None:
        print("\t" * self.trace_level + message)

    # Statements

    def parse_program(self) -> Program:
        """Parse statements until EOF, skipping past anything that fails to parse."""
        program = Program()
        while not self.cur_token_is(EOF):
            try:
                stmt = self.parse_statement()
            except RecursionError:
                self.errors.append(
                    f"expression nested too deeply near line {self.cur_token.line}"
                )
                self.trace_level = 0
                while not self.cur_token_is(EOF):
                    self.next_token()
                break
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Statement | None:
        if self.cur_token_is(LET):
            return self.parse_let_statement()
        if self.cur_token_is(RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        tok = self.cur_token

        if not self.expect_peek(IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(SEMICOLON):
            self.next_token()
        return LetStatement(tok, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        tok = self.cur_token

        self.next_token()
        return_value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(SEMICOLON):
            self.next_token()
        return ReturnStatement(tok, return_value)

    def parse_expression_statement(self) -> ExpressionStatement:
        tok = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)

        # Semicolon is optional so `5 + 5` works on a single REPL line
        if self.peek_token_is(SEMICOLON):
            self.next_token()
        return ExpressionStatement(tok, expression)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()
        if left is None:
            return None

        while not self.peek_token_is(SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
            if left is None:
                return None

        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> IntegerLiteral | None:
        tok = self.cur_token
        # int() alone would also take "+5", "1_000" and non-ASCII digits
        value = None
        if tok.literal.isascii() and tok.literal.isdigit():
            value = int(tok.literal, 10)
        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self.errors.append(f'could not parse "{tok.literal}" as integer')
            return None
        return IntegerLiteral(tok, value)

    def parse_boolean(self) -> Boolean:
        return Boolean(self.cur_token, self.cur_token_is(TRUE))

    def parse_prefix_expression(self) -> PrefixExpression:
        tok = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(tok, tok.literal, right)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        tok = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        # Same precedence, not one less: equal operators associate to the left
        right = self.parse_expression(precedence)
        return InfixExpression(tok, left, tok.literal, right)

    def parse_grouped_expression(self) -> Expression | None:
        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(RPAREN):
            return None
        return expr

    def parse_call_expression(self, function: Expression) -> CallExpression | None:
        tok = self.cur_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(tok, function, arguments)

    def parse_call_arguments(self) -> list[Expression] | None:
        args: list[Expression] = []

        if self.peek_token_is(RPAREN):
            self.next_token()
            return args

        self.next_token()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)

        while self.peek_token_is(COMMA):
            self.next_token()
            self.next_token()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self.expect_peek(RPAREN):
            return None
        return args


__all__ = ["PRECEDENCES", "Parser", "Precedence", "TokenSource"]
