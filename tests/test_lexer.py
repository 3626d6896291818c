"""Lexer tests: the transition table state by state, then whole documents."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

import libini.parsers.lexer as lexer_module
from libini.parsers.base import IniSourceError
from libini.parsers.lexer import (
    INITIAL_STATE,
    CharReader,
    Delimiter,
    IniLexer,
    LexState,
    next_token_kind,
    tokenize_text,
)
from libini.parsers.tokens import Token, TokenType

T = TokenType
D = Delimiter


# =============================================================================
# Transition table
# =============================================================================

@pytest.mark.parametrize(
    "state, lookahead, expected",
    [
        # start of document / default
        (INITIAL_STATE, "[", LexState(T.LBRACE, D.KEY)),
        (INITIAL_STATE, "k", LexState(T.IDENTIFIER, D.KEY)),
        (LexState(T.RBRACE, D.KEY), "[", LexState(T.LBRACE, D.KEY)),
        (LexState(T.RBRACE, D.KEY), "k", LexState(T.IDENTIFIER, D.KEY)),
        (LexState(T.NUMBER, D.KEY), "k", LexState(T.IDENTIFIER, D.KEY)),
        # section header
        (LexState(T.LBRACE, D.KEY), "s", LexState(T.SECTION, D.SECTION_END)),
        (LexState(T.LBRACE, D.KEY), "]", LexState(T.SECTION, D.SECTION_END)),
        (LexState(T.SECTION, D.SECTION_END), "]", LexState(T.RBRACE, D.KEY)),
        # double quotes
        (LexState(T.DOUBLE_QUOTE, D.KEY), "v", LexState(T.STRING, D.DOUBLE_QUOTE)),
        (LexState(T.DOUBLE_QUOTE, D.KEY), '"', LexState(T.STRING, D.DOUBLE_QUOTE)),
        (LexState(T.DOUBLE_QUOTE, D.DOUBLE_QUOTE), "k", LexState(T.IDENTIFIER, D.KEY)),
        (LexState(T.DOUBLE_QUOTE, D.DOUBLE_QUOTE), "[", LexState(T.LBRACE, D.KEY)),
        # single quotes
        (LexState(T.SINGLE_QUOTE, D.KEY), "v", LexState(T.STRING, D.SINGLE_QUOTE)),
        (LexState(T.SINGLE_QUOTE, D.SINGLE_QUOTE), "[", LexState(T.LBRACE, D.KEY)),
        (LexState(T.SINGLE_QUOTE, D.SINGLE_QUOTE), "k", LexState(T.IDENTIFIER, D.KEY)),
        # string payload is followed by its closing quote
        (LexState(T.STRING, D.DOUBLE_QUOTE), '"', LexState(T.DOUBLE_QUOTE, D.DOUBLE_QUOTE)),
        (LexState(T.STRING, D.SINGLE_QUOTE), "'", LexState(T.SINGLE_QUOTE, D.SINGLE_QUOTE)),
        # member key, then equals
        (LexState(T.IDENTIFIER, D.KEY), "=", LexState(T.EQUALS, D.KEY)),
        (LexState(T.IDENTIFIER, D.KEY), "k", LexState(T.IDENTIFIER, D.KEY)),
        # value after equals
        (LexState(T.EQUALS, D.KEY), "4", LexState(T.NUMBER, D.KEY)),
        (LexState(T.EQUALS, D.KEY), "'", LexState(T.SINGLE_QUOTE, D.KEY)),
        (LexState(T.EQUALS, D.KEY), '"', LexState(T.DOUBLE_QUOTE, D.KEY)),
        (LexState(T.EQUALS, D.KEY), "v", LexState(T.IDENTIFIER, D.LINE)),
        (LexState(T.EQUALS, D.KEY), "-", LexState(T.IDENTIFIER, D.LINE)),
        # a bare value ends the member
        (LexState(T.IDENTIFIER, D.LINE), "k", LexState(T.IDENTIFIER, D.KEY)),
        (LexState(T.IDENTIFIER, D.LINE), "[", LexState(T.LBRACE, D.KEY)),
    ],
)
def test_transition_table(state: LexState, lookahead: str, expected: LexState) -> None:
    """Every row of the classification table."""
    assert next_token_kind(state, lookahead) == expected


@pytest.mark.parametrize(
    "state",
    [
        INITIAL_STATE,
        LexState(T.LBRACE, D.KEY),
        LexState(T.STRING, D.DOUBLE_QUOTE),
        LexState(T.EQUALS, D.KEY),
    ],
)
def test_end_of_stream_classifies_as_eof(state: LexState) -> None:
    """No lookahead always ends tokenization and keeps the delimiter."""
    result = next_token_kind(state, None)
    assert result.kind is T.END_OF_FILE
    assert result.delimiter is state.delimiter


def test_in_quote_only_between_opening_quote_and_string() -> None:
    assert LexState(T.DOUBLE_QUOTE, D.KEY).in_quote
    assert LexState(T.SINGLE_QUOTE, D.KEY).in_quote
    assert not LexState(T.DOUBLE_QUOTE, D.DOUBLE_QUOTE).in_quote
    assert not LexState(T.SINGLE_QUOTE, D.SINGLE_QUOTE).in_quote
    assert not LexState(T.STRING, D.DOUBLE_QUOTE).in_quote
    assert not INITIAL_STATE.in_quote


def test_delimiters() -> None:
    assert D.SECTION_END.matches("]")
    assert D.KEY.matches(" ") and D.KEY.matches("=") and D.KEY.matches("\n")
    assert not D.KEY.matches("a")
    assert D.LINE.matches("\n") and D.LINE.matches("#")
    assert not D.LINE.matches(" ")
    assert not D.NONE.matches("]")
    assert D.for_quote(T.SINGLE_QUOTE) is D.SINGLE_QUOTE
    with pytest.raises(ValueError):
        D.for_quote(T.STRING)


def test_char_reader_crosses_chunk_boundaries() -> None:
    reader = CharReader(io.StringIO("abcdef"), chunk_size=2)
    assert reader.read_until(lambda c: c == "e") == "abcd"
    assert reader.advance() == "e"
    assert reader.peek() == "f"
    assert reader.advance() == "f"
    assert reader.peek() is None
    assert reader.advance() is None


# =============================================================================
# Whole documents
# =============================================================================

def test_tokenizes_sample_document() -> None:
    tokens = tokenize_text('[server]\nhost = "localhost"\nport = 8080\n')
    assert tokens == (
        Token.lbrace(),
        Token.section("server"),
        Token.rbrace(),
        Token.identifier("host"),
        Token.equals(),
        Token.double_quote(),
        Token.string("localhost"),
        Token.double_quote(),
        Token.identifier("port"),
        Token.equals(),
        Token.number(8080.0),
    )


def test_empty_and_comment_only_documents_produce_no_tokens() -> None:
    assert tokenize_text("") == ()
    assert tokenize_text("# only a comment\n") == ()
    assert tokenize_text("   \n\t\r\n# one\n  # two") == ()


def test_trailing_comments_do_not_affect_token_boundaries() -> None:
    with_comments = tokenize_text("[a] # header\nx = 1 # one\ny = 'v' # quoted\n")
    without = tokenize_text("[a]\nx = 1\ny = 'v'\n")
    assert with_comments == without


def test_comment_marker_inside_quotes_is_content() -> None:
    tokens = tokenize_text('[a]\nx = " #not a comment "\n')
    assert Token.string(" #not a comment ") in tokens


@pytest.mark.parametrize(
    "literal, expected",
    [("42", 42.0), ("3.14", 3.14), ("0.5", 0.5), ("7.", 7.0), ("007", 7.0)],
)
def test_number_literals(literal: str, expected: float) -> None:
    tokens = tokenize_text(f"[a]\nx = {literal}\n")
    assert tokens[-1] == Token.number(expected)
    assert tokens[-1].value == float(literal)


def test_single_quoted_value_followed_by_section() -> None:
    tokens = tokenize_text("[s]\nq = 'it is'\n[t]\n")
    assert tokens[3:] == (
        Token.identifier("q"),
        Token.equals(),
        Token.single_quote(),
        Token.string("it is"),
        Token.single_quote(),
        Token.lbrace(),
        Token.section("t"),
        Token.rbrace(),
    )


def test_double_quoted_value_followed_by_section() -> None:
    tokens = tokenize_text('[a]\nx = "v"\n[b]\n')
    assert tokens[-3:] == (Token.lbrace(), Token.section("b"), Token.rbrace())


def test_other_quote_kind_is_content() -> None:
    tokens = tokenize_text("[a]\nx = 'say \"hi\"'\ny = \"it's\"\n")
    assert Token.string('say "hi"') in tokens
    assert Token.string("it's") in tokens


def test_empty_quoted_value() -> None:
    tokens = tokenize_text('[a]\nx = ""\n')
    assert tokens[-3:] == (Token.double_quote(), Token.string(""), Token.double_quote())


def test_bare_value_reads_to_end_of_line() -> None:
    tokens = tokenize_text("[a]\nname = primary node  # note\nnext = 2\n")
    assert tokens[3:] == (
        Token.identifier("name"),
        Token.equals(),
        Token.identifier("primary node"),
        Token.identifier("next"),
        Token.equals(),
        Token.number(2.0),
    )


def test_key_value_without_spaces() -> None:
    tokens = tokenize_text("[a]\nk=v\nn=1\n")
    assert tokens[3:] == (
        Token.identifier("k"),
        Token.equals(),
        Token.identifier("v"),
        Token.identifier("n"),
        Token.equals(),
        Token.number(1.0),
    )


def test_text_after_key_is_not_taken_as_equals() -> None:
    tokens = tokenize_text("[a]\nmy key = 1\n")
    assert tokens[3:] == (
        Token.identifier("my"),
        Token.identifier("key"),
        Token.equals(),
        Token.number(1.0),
    )


def test_trailing_text_after_quote_starts_a_key() -> None:
    tokens = tokenize_text('[a]\nx = "v" junk\ny = 2\n')
    assert tokens[7:] == (
        Token.double_quote(),
        Token.identifier("junk"),
        Token.identifier("y"),
        Token.equals(),
        Token.number(2.0),
    )


def test_value_does_not_continue_on_next_line() -> None:
    """An empty value reads as an empty bare value, not the next line."""
    tokens = tokenize_text("[a]\nx =\ny = 1\n")
    assert tokens[3:] == (
        Token.identifier("x"),
        Token.equals(),
        Token.identifier(""),
        Token.identifier("y"),
        Token.equals(),
        Token.number(1.0),
    )
    assert tokenize_text("[a]\nx = # note\n")[-1] == Token.identifier("")


def test_crlf_line_endings() -> None:
    assert tokenize_text("[a]\r\nx = v\r\n") == tokenize_text("[a]\nx = v\n")


def test_unterminated_section_swallows_rest_of_stream() -> None:
    """The lexer degrades instead of raising."""
    tokens = tokenize_text("[abc\nx = 1\n")
    assert tokens == (Token.lbrace(), Token.section("abc\nx = 1\n"))


def test_unterminated_quote_runs_to_end_of_stream() -> None:
    tokens = tokenize_text('[a]\nx = "abc\ny = 2\n')
    assert tokens[-1] == Token.string("abc\ny = 2\n")


# =============================================================================
# File-backed lexer
# =============================================================================

def test_ini_lexer_reads_file_repeatedly(tmp_path: Path) -> None:
    path = tmp_path / "conf.ini"
    path.write_text("[a]\nx = 1\n", encoding="utf-8")

    lexer = IniLexer(path)
    first = lexer.tokenize()
    assert first == lexer()
    assert first == tokenize_text("[a]\nx = 1\n")


def test_ini_lexer_closes_stream(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """The source is closed before tokenize returns."""
    opened = []

    class TrackingStream(io.StringIO):
        pass

    def fake_open(*args, **kwargs):
        stream = TrackingStream("[a]\nx = 1\n")
        opened.append(stream)
        return stream

    monkeypatch.setattr(lexer_module, "open", fake_open, raising=False)

    tokens = IniLexer(tmp_path / "virtual.ini").tokenize()

    assert len(tokens) == 6
    assert len(opened) == 1
    assert opened[0].closed


def test_ini_lexer_missing_file(tmp_path: Path) -> None:
    lexer = IniLexer(tmp_path / "missing.ini")
    with pytest.raises(IniSourceError) as excinfo:
        lexer.tokenize()
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert "missing.ini" in str(excinfo.value)


def test_ini_lexer_decode_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.ini"
    path.write_bytes(b"[a]\nx = \xff\xfe\n")
    with pytest.raises(IniSourceError) as excinfo:
        IniLexer(path).tokenize()
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_ini_lexer_custom_encoding(tmp_path: Path) -> None:
    path = tmp_path / "latin.ini"
    path.write_bytes('[a]\nx = "caf\xe9"\n'.encode("latin-1"))
    tokens = IniLexer(path, encoding="latin-1").tokenize()
    assert Token.string("caf\xe9") in tokens
