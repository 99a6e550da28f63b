"""
Lexical tokens of the GLSL minifier.

The lexer is purely lexical: it splits source text into words, operator runs,
dots and preprocessor lines, and never fails.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from glsl_minify.constants import TOKEN_PATTERN, WORD_CHARACTER


class TokenType(Enum):
    """Kinds of tokens produced by the lexer."""

    # A variable, function, type or reserved keyword (except the three below)
    TOKEN = auto()
    ATTRIBUTE = auto()
    UNIFORM = auto()
    VARYING = auto()
    # Operators, including brackets and parentheses, but not the dot
    OPERATOR = auto()
    # Dots are special in GLSL because of vector swizzle masks
    DOT = auto()
    NUMERIC = auto()
    PREPROCESSOR = auto()
    # Used by the lookback state when there is no token
    NONE = auto()


# Token types that are written as words and must be kept apart by a space
WORD_TYPES = frozenset(
    {TokenType.TOKEN, TokenType.ATTRIBUTE, TokenType.UNIFORM, TokenType.VARYING}
)

_KEYWORD_TYPES = {
    "attribute": TokenType.ATTRIBUTE,
    "uniform": TokenType.UNIFORM,
    "varying": TokenType.VARYING,
}


@dataclass(frozen=True)
class Token:
    """A single lexical token."""

    text: str
    type: TokenType


def get_token_type(token: str) -> TokenType:
    """Determine the token type of a token string.

    Args:
        token: Non-empty token text

    Returns:
        The token type
    """
    if token in _KEYWORD_TYPES:
        return _KEYWORD_TYPES[token]
    if token == ".":
        return TokenType.DOT
    if token[0] == "#":
        return TokenType.PREPROCESSOR
    if token[0].isdigit() and token[0].isascii():
        return TokenType.NUMERIC
    if WORD_CHARACTER.match(token[0]):
        return TokenType.TOKEN
    return TokenType.OPERATOR


def tokenize(content: str) -> Iterator[Token]:
    """Split GLSL source into tokens, skipping whitespace.

    Args:
        content: GLSL source

    Yields:
        Tokens in source order
    """
    for match in TOKEN_PATTERN.finditer(content):
        text = match.group(0)
        yield Token(text, get_token_type(text))


@dataclass(frozen=True)
class LexerState:
    """Lookback over the two previous tokens.

    Attributes:
        prev_text: Text of the previous token
        prev_type: Type of the previous token
        prev_prev_type: Type of the token before that
    """

    prev_text: str = ""
    prev_type: TokenType = TokenType.NONE
    prev_prev_type: TokenType = TokenType.NONE

    def advance(self, token: Token) -> "LexerState":
        """Return the state after consuming a token."""
        return LexerState(
            prev_text=token.text,
            prev_type=token.type,
            prev_prev_type=self.prev_type,
        )

    @property
    def after_dot(self) -> bool:
        """Whether the next token is a swizzle mask or field name."""
        return self.prev_type is TokenType.DOT

    @property
    def declares_interface(self) -> bool:
        """Whether the next token is the name in an attribute or varying declaration."""
        return self.prev_prev_type in (TokenType.ATTRIBUTE, TokenType.VARYING)

    @property
    def declares_uniform(self) -> bool:
        """Whether the next token is the name in a uniform declaration."""
        return self.prev_prev_type is TokenType.UNIFORM
