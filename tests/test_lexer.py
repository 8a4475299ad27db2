import pytest
from hypothesis import given
from hypothesis import strategies as st

from monkey.monkey_constants import keywords, token_hashmap
from monkey.monkey_lexer import CharacterStream, Lexer, Token, tokenize


def kinds(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    code = "= + - ! * / < > , ; ( ) { }"
    expected = [
        "ASSIGN",
        "PLUS",
        "MINUS",
        "BANG",
        "ASTERISK",
        "SLASH",
        "LT",
        "GT",
        "COMMA",
        "SEMICOLON",
        "LPAREN",
        "RPAREN",
        "LBRACE",
        "RBRACE",
        "EOF",
    ]
    assert kinds(code) == expected


def test_two_char_operators_use_longest_match() -> None:
    tokens = tokenize("10 == 10; 10 != 9; !x; y = 1")
    assert [(t.type, t.literal) for t in tokens] == [
        ("INT", "10"),
        ("EQ", "=="),
        ("INT", "10"),
        ("SEMICOLON", ";"),
        ("INT", "10"),
        ("NOT_EQ", "!="),
        ("INT", "9"),
        ("SEMICOLON", ";"),
        ("BANG", "!"),
        ("IDENT", "x"),
        ("SEMICOLON", ";"),
        ("IDENT", "y"),
        ("ASSIGN", "="),
        ("INT", "1"),
        ("EOF", ""),
    ]


def test_let_statement_tokens() -> None:
    tokens = tokenize("let five = 5;")
    assert [(t.type, t.literal) for t in tokens] == [
        ("LET", "let"),
        ("IDENT", "five"),
        ("ASSIGN", "="),
        ("INT", "5"),
        ("SEMICOLON", ";"),
        ("EOF", ""),
    ]


@pytest.mark.parametrize("word,kind", sorted(keywords.items()))  # type: ignore[misc]
def test_keyword_token(word: str, kind: str) -> None:
    tok = Lexer(CharacterStream(word)).next_token()
    assert tok.type == kind
    assert tok.literal == word


def test_keywords_are_case_sensitive() -> None:
    tok = Lexer(CharacterStream("LET")).next_token()
    assert tok.type == "IDENT"
    assert tok.literal == "LET"


def test_identifier_with_digits_and_underscores() -> None:
    tok = Lexer(CharacterStream("_foo_bar2")).next_token()
    assert tok.type == "IDENT"
    assert tok.literal == "_foo_bar2"


def test_number_followed_by_identifier() -> None:
    assert kinds("123abc") == ["INT", "IDENT", "EOF"]


def test_line_and_column_tracking() -> None:
    tokens = tokenize("x = 1\n  y = 2")
    assert (tokens[0].line, tokens[0].col) == (1, 1)
    assert (tokens[3].line, tokens[3].col) == (2, 3)
    assert tokens[3].literal == "y"


def test_illegal_character_becomes_illegal_token() -> None:
    tokens = tokenize("a @ b")
    assert [(t.type, t.literal) for t in tokens] == [
        ("IDENT", "a"),
        ("ILLEGAL", "@"),
        ("IDENT", "b"),
        ("EOF", ""),
    ]


def test_non_ascii_letters_are_illegal() -> None:
    assert kinds("é") == ["ILLEGAL", "EOF"]


def test_eof_is_returned_indefinitely() -> None:
    lexer = Lexer(CharacterStream("x"))
    assert lexer.next_token().type == "IDENT"
    for _ in range(3):
        tok = lexer.next_token()
        assert tok.type == "EOF"
        assert tok.literal == ""


def test_empty_and_whitespace_sources() -> None:
    assert kinds("") == ["EOF"]
    assert kinds(" \t\r\n ") == ["EOF"]


def test_character_stream_methods() -> None:
    stream = CharacterStream("abc")
    assert stream.peek() == "a"
    assert stream.peek(2) == "c"
    assert stream.peek(3) == ""
    assert stream.next() == "a"
    assert not stream.end_of_file()
    stream.next()
    stream.next()
    assert stream.end_of_file()
    with pytest.raises(EOFError):
        stream.next()


def test_token_repr_and_eq() -> None:
    t1 = Token("INT", "42", 1, 2)
    t2 = Token("INT", "42", 1, 2)
    t3 = Token("IDENT", "x")

    assert repr(t1) == "Token(INT, 42)"
    assert t1 == t2
    assert t1 != t3
    assert t1 != "Token(INT, 42)"
    assert len({t1, t2, t3}) == 2


@given(st.sampled_from(sorted(token_hashmap)))  # type: ignore[misc]
def test_every_operator_spelling_lexes_to_its_kind(op: str) -> None:
    tok = Lexer(CharacterStream(op)).next_token()
    assert tok.type == token_hashmap[op]
    assert tok.literal == op


@given(st.text())  # type: ignore[misc]
def test_lexer_never_raises_and_ends_with_eof(source: str) -> None:
    tokens = tokenize(source)
    assert tokens[-1].type == "EOF"
    assert all(t.type != "EOF" for t in tokens[:-1])


@given(st.integers(min_value=0, max_value=10**30))  # type: ignore[misc]
def test_integer_literal_text_is_preserved(n: int) -> None:
    tok = Lexer(CharacterStream(str(n))).next_token()
    assert tok.type == "INT"
    assert tok.literal == str(n)
