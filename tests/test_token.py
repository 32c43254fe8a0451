import pytest

from asmcore.syntax.token import Token, TokenKind, decide_next_token, is_whitespace


@pytest.mark.parametrize(
    "src, kind",
    [
        ("  \t\r", TokenKind.WHITESPACE),
        ("; a comment", TokenKind.COMMENT),
        (";* outer ;* inner *; still *;", TokenKind.COMMENT),
        ("0x1f", TokenKind.NUMBER),
        ("123_456", TokenKind.NUMBER),
        ("$ff", TokenKind.NUMBER),
        ("%0101", TokenKind.NUMBER),
        ("label_1", TokenKind.IDENTIFIER),
        ("asm", TokenKind.KEYWORD_ASM),
        ("true", TokenKind.KEYWORD_TRUE),
        ("false", TokenKind.KEYWORD_FALSE),
        ('"hello"', TokenKind.STRING),
        ("\n", TokenKind.LINE_BREAK),
        ("::", TokenKind.COLON_COLON),
        (":", TokenKind.COLON),
        ("->", TokenKind.ARROW_RIGHT),
        ("<-", TokenKind.ARROW_LEFT),
        ("=>", TokenKind.HEAVY_ARROW_RIGHT),
        ("&&", TokenKind.DOUBLE_AMPERSAND),
        ("||", TokenKind.DOUBLE_VERTICAL_BAR),
        ("==", TokenKind.DOUBLE_EQUAL),
        ("!=", TokenKind.EXCLAMATION_EQUAL),
        ("<=", TokenKind.LESS_THAN_EQUAL),
        ("<<", TokenKind.DOUBLE_LESS_THAN),
        (">=", TokenKind.GREATER_THAN_EQUAL),
        (">>>", TokenKind.TRIPLE_GREATER_THAN),
        (">>", TokenKind.DOUBLE_GREATER_THAN),
        ("`", TokenKind.GRAVE),
        ("@", TokenKind.AT),
    ],
)
def test_whole_input_is_one_token(src, kind):
    assert decide_next_token(src) == (kind, len(src))


def test_line_comment_stops_before_line_break():
    src = "; note\nnext"
    assert decide_next_token(src) == (TokenKind.COMMENT, src.index("\n"))


def test_block_comment_stops_after_closing():
    src = ";* block *;rest"
    assert decide_next_token(src) == (TokenKind.COMMENT, src.index("rest"))


def test_unterminated_block_comment_runs_to_end():
    src = ";* never closed ;* nested *;"
    assert decide_next_token(src) == (TokenKind.COMMENT, len(src))


def test_identifier_stops_at_operator():
    src = "abc+1"
    assert decide_next_token(src) == (TokenKind.IDENTIFIER, src.index("+"))


def test_keyword_prefix_is_identifier():
    src = "asmx"
    assert decide_next_token(src) == (TokenKind.IDENTIFIER, len(src))


def test_lone_dollar_is_identifier():
    assert decide_next_token("$ ") == (TokenKind.IDENTIFIER, 1)


def test_lone_percent_is_operator():
    assert decide_next_token("% 2") == (TokenKind.PERCENT, 1)


def test_percent_followed_by_non_binary_is_operator():
    assert decide_next_token("%2")[0] == TokenKind.PERCENT


def test_string_length_counts_utf8_bytes():
    src = '"é"'
    assert decide_next_token(src) == (TokenKind.STRING, len(src.encode("utf-8")))


def test_unterminated_string_is_error():
    assert decide_next_token('"abc')[0] == TokenKind.ERROR


def test_unknown_character_is_error():
    kind, length = decide_next_token("é")
    assert kind == TokenKind.ERROR
    assert length == len("é".encode("utf-8"))


def test_number_takes_priority_over_identifier():
    assert decide_next_token("0b101")[0] == TokenKind.NUMBER


@pytest.mark.parametrize(
    "src, ignorable",
    [
        (" ", True),
        ("; comment", True),
        ("\n", True),
        ("abc", False),
        ("12", False),
        ("+", False),
        ('"s"', False),
    ],
)
def test_ignorable_kinds(src, ignorable):
    kind, _ = decide_next_token(src)
    assert kind.is_ignorable() is ignorable


def test_allowed_pattern_tokens():
    assert TokenKind.IDENTIFIER.is_allowed_pattern_token()
    assert TokenKind.HASH.is_allowed_pattern_token()
    assert not TokenKind.COLON.is_allowed_pattern_token()
    assert not TokenKind.STRING.is_allowed_pattern_token()
    assert not TokenKind.GREATER_THAN_EQUAL.is_allowed_pattern_token()


def test_printable_strings():
    assert TokenKind.LINE_BREAK.printable() == "line break"
    assert TokenKind.KEYWORD_ASM.printable() == "`asm` keyword"
    assert TokenKind.GRAVE.printable() == "```"
    assert TokenKind.TRIPLE_GREATER_THAN.printable() == "`>>>`"


@pytest.mark.parametrize(
    "src, text",
    [
        ("(", "`(`"),
        ("abc", "identifier"),
        ("12", "number"),
        ("é", "error"),
        ("   ", "whitespace"),
        ("; c", "comment"),
        ("false", "`false` keyword"),
    ],
)
def test_printable_of_decided_token(src, text):
    kind, _ = decide_next_token(src)
    assert kind.printable() == text


def test_is_whitespace():
    assert is_whitespace(" ")
    assert is_whitespace("\t")
    assert is_whitespace("\r")
    assert not is_whitespace("\n")
    assert not is_whitespace("a")


def test_token_holds_fields():
    tk = Token(span=(0, 3), kind=TokenKind.IDENTIFIER)
    assert tk.kind == TokenKind.IDENTIFIER
    assert tk.span == (0, 3)