from __future__ import annotations

import pytest

from lsapp.lexer import Lexer, LexState, tokenize
from lsapp.spans import Position
from lsapp.tokens import Token, TokenKind


def _kinds(tokens: list[Token]) -> list[tuple[str, str]]:
    return [(t.kind.name, t.lexeme) for t in tokens]


@pytest.mark.parametrize(
    ("src", "state", "expected"),
    [
        ("abc]=\n", LexState.READ_HEADER, "abc"),
        ("abc]=\n", LexState.READ_VALUE, "abc]="),
        ("abc%f=\n", LexState.READ_KEY, "abc%f"),
        ("abc%f=\n", LexState.READ_EXEC, "abc"),
        ("abc%f=\n", LexState.READ_VALUE, "abc%f="),
        ("abc%f=\n", LexState.READ_HEADER, "abc%f="),
        ("value #comment", LexState.READ_VALUE, "value "),
        ("text1;text2", LexState.READ_VALUE, "text1"),
        ("text1\n", LexState.READ_VALUE, "text1"),
        ("a %% b %f", LexState.READ_EXEC, "a %% b "),
        ("50% off", LexState.READ_EXEC, "50% off"),
        ("tail %", LexState.READ_EXEC, "tail %"),
        ("x %#c", LexState.READ_EXEC, "x %"),
    ],
)
def test_read_text_stops_at_state_delimiter(src: str, state: LexState, expected: str) -> None:
    assert Lexer(src, state=state).read_text() == expected


def test_skip_comment_moves_to_next_line() -> None:
    lx = Lexer("text #comment!\r\nmore text", state=LexState.READ_VALUE)
    assert lx.read_text() == "text "
    lx.skip_comment()
    assert lx.position.row == 1
    assert lx.position.col == 0
    assert lx.read_text() == "more text"


def test_skip_whitespace() -> None:
    lx = Lexer("\t\t     text\r\n   \t\t", state=LexState.READ_VALUE)
    lx.skip_whitespace()
    assert (lx.position.row, lx.position.col) == (0, 7)
    assert lx.read_text() == "text"
    lx.advance_line()
    assert (lx.position.row, lx.position.col) == (1, 0)
    lx.skip_whitespace()
    assert (lx.position.row, lx.position.col) == (1, 5)


def test_next_token_walks_a_whole_file() -> None:
    lx = Lexer(
        """
        [header]
        key1[en]=Hello World! [text] = stuff #this is a comment
        key2=./hello %F lol
        Exec=/usr/bin/app %f --arg %%
        #comment on a line
        key3=list;of;stuff!
        """
    )

    def step(kind: TokenKind, lexeme: str | None = None, state: LexState | None = None) -> None:
        tok = lx.next_token()
        assert tok is not None
        assert tok.kind is kind
        if lexeme is not None:
            assert tok.lexeme == lexeme
        if state is not None:
            assert lx.state is state

    assert lx.state is LexState.READ_KEY
    step(TokenKind.LBRACKET, state=LexState.READ_HEADER)
    step(TokenKind.TEXT, "header")
    step(TokenKind.RBRACKET, state=LexState.READ_KEY)

    step(TokenKind.TEXT, "key1", LexState.READ_KEY)
    step(TokenKind.LBRACKET)
    step(TokenKind.TEXT, "en")
    step(TokenKind.RBRACKET)
    step(TokenKind.EQUAL, state=LexState.READ_VALUE)
    step(TokenKind.TEXT, "Hello World! [text] = stuff ")

    step(TokenKind.TEXT, "key2", LexState.READ_KEY)
    step(TokenKind.EQUAL, state=LexState.READ_VALUE)
    step(TokenKind.TEXT, "./hello %F lol")

    step(TokenKind.TEXT, "Exec", LexState.READ_KEY)
    step(TokenKind.EQUAL, state=LexState.READ_EXEC)
    step(TokenKind.TEXT, "/usr/bin/app ", LexState.READ_EXEC)
    step(TokenKind.ARGUMENT, "f", LexState.READ_EXEC)
    step(TokenKind.TEXT, " --arg %%")

    step(TokenKind.TEXT, "key3", LexState.READ_KEY)
    step(TokenKind.EQUAL, state=LexState.READ_VALUE)
    step(TokenKind.TEXT, "list", LexState.READ_VALUE)
    step(TokenKind.SEMICOLON)
    step(TokenKind.TEXT, "of")
    step(TokenKind.SEMICOLON)
    step(TokenKind.TEXT, "stuff!")

    assert lx.next_token() is None
    assert lx.next_token() is None


def test_spans_survive_multiple_skips() -> None:
    lx = Lexer("key=value\r\t \t#a comment\n\n    #another comment\tyes\n\t    key2=\tvalue")

    key = lx.next_token()
    assert key is not None and key.lexeme == "key"
    assert (key.span.start.col, key.span.end.col) == (0, 3)

    eq = lx.next_token()
    assert eq is not None and eq.kind is TokenKind.EQUAL
    assert (eq.span.start.col, eq.span.end.col) == (3, 4)

    value = lx.next_token()
    assert value is not None and value.lexeme == "value"
    assert (value.span.start.col, value.span.end.col) == (4, 9)

    key2 = lx.next_token()
    assert key2 is not None and key2.lexeme == "key2"
    assert key2.span.start.row == 4
    assert (key2.span.start.col, key2.span.end.col) == (5, 9)

    assert lx.next_token().kind is TokenKind.EQUAL

    value2 = lx.next_token()
    assert value2 is not None and value2.lexeme == "value"
    assert (value2.span.start.col, value2.span.end.col) == (11, 16)


def test_simple_entry() -> None:
    lx = Lexer("key=value\n")
    assert lx.next_token().kind is TokenKind.TEXT
    assert lx.next_token().kind is TokenKind.EQUAL
    assert lx.state is LexState.READ_VALUE
    assert _kinds(tokenize("key=value\n")) == [("TEXT", "key"), ("EQUAL", "="), ("TEXT", "value")]


def test_header_returns_to_key_state() -> None:
    lx = Lexer("[header]")
    toks = list(lx)
    assert _kinds(toks) == [("LBRACKET", "["), ("TEXT", "header"), ("RBRACKET", "]")]
    assert lx.state is LexState.READ_KEY


def test_exec_placeholders() -> None:
    assert _kinds(tokenize("Exec=/usr/bin/app %f --arg %%\n")) == [
        ("TEXT", "Exec"),
        ("EQUAL", "="),
        ("TEXT", "/usr/bin/app "),
        ("ARGUMENT", "f"),
        ("TEXT", " --arg %%"),
    ]


def test_exec_percent_at_start_of_scan_takes_next_character() -> None:
    assert _kinds(tokenize("Exec=%%foo %u")) == [
        ("TEXT", "Exec"),
        ("EQUAL", "="),
        ("ARGUMENT", "%"),
        ("TEXT", "foo "),
        ("ARGUMENT", "u"),
    ]


def test_exec_percent_right_after_a_field_code() -> None:
    assert _kinds(tokenize("Exec=app %f%%\n")) == [
        ("TEXT", "Exec"),
        ("EQUAL", "="),
        ("TEXT", "app "),
        ("ARGUMENT", "f"),
        ("ARGUMENT", "%"),
    ]


def test_exec_percent_before_line_break_keeps_the_line() -> None:
    lx = Lexer("Exec=%\nk=v")
    toks = list(lx)
    assert _kinds(toks) == [
        ("TEXT", "Exec"),
        ("EQUAL", "="),
        ("ARGUMENT", "\0"),
        ("TEXT", "k"),
        ("EQUAL", "="),
        ("TEXT", "v"),
    ]
    assert toks[3].span.start == Position(1, 0, 7)
    assert lx.state is LexState.READ_VALUE


def test_exec_bare_percent_at_end_of_input() -> None:
    toks = tokenize("Exec=%")
    assert _kinds(toks) == [("TEXT", "Exec"), ("EQUAL", "="), ("ARGUMENT", "\0")]


def test_exec_keeps_blanks_and_ignores_value_delimiters() -> None:
    assert _kinds(tokenize("Exec= sh -c 'a;b' [x]=y %k")) == [
        ("TEXT", "Exec"),
        ("EQUAL", "="),
        ("TEXT", " sh -c 'a;b' [x]=y "),
        ("ARGUMENT", "k"),
    ]


def test_localized_exec_key_still_reads_a_command() -> None:
    lx = Lexer("Exec[en]=app %f")
    toks = list(lx)
    assert toks[-1].kind is TokenKind.ARGUMENT
    assert lx.state is LexState.READ_EXEC


def test_percent_is_plain_text_outside_exec() -> None:
    assert _kinds(tokenize("key2=./hello %F lol")) == [
        ("TEXT", "key2"),
        ("EQUAL", "="),
        ("TEXT", "./hello %F lol"),
    ]


def test_list_value() -> None:
    assert _kinds(tokenize("key3=list;of;stuff!\n")) == [
        ("TEXT", "key3"),
        ("EQUAL", "="),
        ("TEXT", "list"),
        ("SEMICOLON", ";"),
        ("TEXT", "of"),
        ("SEMICOLON", ";"),
        ("TEXT", "stuff!"),
    ]


def test_unmatched_right_bracket_is_emitted() -> None:
    assert _kinds(tokenize("]key=v")) == [
        ("RBRACKET", "]"),
        ("TEXT", "key"),
        ("EQUAL", "="),
        ("TEXT", "v"),
    ]


def test_line_break_resets_state() -> None:
    lx = Lexer("Exec=app\nkey=v;w\r\n[next]")
    toks = list(lx)
    assert [t.kind for t in toks] == [
        TokenKind.TEXT,
        TokenKind.EQUAL,
        TokenKind.TEXT,
        TokenKind.TEXT,
        TokenKind.EQUAL,
        TokenKind.TEXT,
        TokenKind.SEMICOLON,
        TokenKind.TEXT,
        TokenKind.LBRACKET,
        TokenKind.TEXT,
        TokenKind.RBRACKET,
    ]
    assert toks[-1].span.start == Position(2, 5, 23)


def test_single_character_tokens_span_one_column() -> None:
    for tok in tokenize("[a]\nk[de]=x;y"):
        if tok.kind is not TokenKind.TEXT:
            assert tok.span.end.col - tok.span.start.col == 1


def test_fresh_lexers_over_the_same_text_agree() -> None:
    src = "[A]\nName[de]=Hallo\nExec=run %U\n"
    assert tokenize(src, file="a.desktop") == tokenize(src, file="a.desktop")
    assert tokenize(src)[0].span.file == "<memory>"
