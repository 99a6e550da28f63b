"""
The tokenizing renamer, the final pass of the GLSL minifier.

Tokens are written back without whitespace, except where two words would
otherwise fuse, and every renamable identifier is replaced by its minified
name from the run's TokenMap.
"""

from loguru import logger

from glsl_minify.constants import BUILTIN_VARIABLE_PREFIX, PREPROCESSOR_DEFINE
from glsl_minify.symbols import TokenMap
from glsl_minify.tokens import WORD_TYPES, LexerState, Token, TokenType, tokenize


def minify_name(tokens: TokenMap, name: str, uniform_type: str | None = None) -> str:
    """Minify an identifier, leaving GL built-in variables alone.

    Names starting with ``gl_`` never reach the token map, so they neither get
    renamed nor use up a minified name.
    """
    if name.startswith(BUILTIN_VARIABLE_PREFIX):
        return name
    return tokens.minify_token(name, uniform_type)


def _minify_preprocessor(line: str, tokens: TokenMap) -> str:
    # Special case for #define: the value being defined is minified
    match = PREPROCESSOR_DEFINE.search(line)
    if match:
        return f"#define {minify_name(tokens, match.group(1))} {match.group(2)}\n"

    # Preprocessor directives require the newline
    return line + "\n"


def _minify_word(token: Token, state: LexerState, tokens: TokenMap) -> str:
    # A word following a dot is a swizzle mask or a struct field
    if state.after_dot:
        return token.text

    # Attribute and varying names are part of the shader interface
    if state.declares_interface:
        tokens.reserve_keywords([token.text])

    if state.declares_uniform:
        # The previous token is the uniform's type
        return minify_name(tokens, token.text, state.prev_text)
    return minify_name(tokens, token.text)


def reserve_interface_names(source_tokens: list[Token], tokens: TokenMap) -> None:
    """Reserve every attribute and varying name before any name is allocated.

    Allocation skips reserved names, so a minified name can never spell an
    interface name declared later in the source.
    """
    state = LexerState()
    for token in source_tokens:
        if token.type in WORD_TYPES and state.declares_interface:
            if not state.after_dot:
                tokens.reserve_keywords([token.text])
        state = state.advance(token)


def render_token(token: Token, state: LexerState, tokens: TokenMap) -> str:
    """Render one token in minified form.

    Args:
        token: The current token
        state: Lookback over the two previous tokens
        tokens: Symbol table of the current run

    Returns:
        Output text for the token, including any separator it needs
    """
    if token.type is TokenType.PREPROCESSOR:
        return _minify_preprocessor(token.text, tokens)

    if token.type in (TokenType.OPERATOR, TokenType.DOT):
        return token.text

    if token.type is TokenType.NUMERIC:
        # Keep numbers from fusing with a preceding keyword, e.g. "return 1"
        if state.prev_type in WORD_TYPES or state.prev_type is TokenType.NUMERIC:
            return " " + token.text
        return token.text

    text = _minify_word(token, state, tokens)
    if state.after_dot:
        return text

    # Operators and preprocessor lines already end in a delimiter
    if state.prev_type in (
        TokenType.OPERATOR,
        TokenType.PREPROCESSOR,
        TokenType.NONE,
    ):
        return text
    return " " + text


def minify_source(content: str, tokens: TokenMap) -> str:
    """Minify preprocessed GLSL source.

    Args:
        content: Output of the second preprocessor pass
        tokens: Symbol table of the current run

    Returns:
        Minified GLSL code
    """
    source_tokens = list(tokenize(content))
    reserve_interface_names(source_tokens, tokens)

    parts: list[str] = []
    state = LexerState()
    for token in source_tokens:
        text = render_token(token, state, tokens)

        # A preprocessor directive must start its own line
        if (
            token.type is TokenType.PREPROCESSOR
            and parts
            and not parts[-1].endswith("\n")
        ):
            parts.append("\n")

        parts.append(text)
        state = state.advance(token)

    logger.debug(f"Allocated {tokens.minified_count} minified names")
    return "".join(parts)
