"""
Source preprocessing for the GLSL minifier.

Two string-based passes run before tokenization:

1. Comment removal and recursive @include expansion
2. @nomangle and @define directive processing

Usage:
    flattened = preprocess_pass1(GlslFile(source), resolver)
    processed = preprocess_pass2(flattened, tokens)
"""

import json
import os

from loguru import logger

from glsl_minify.constants import (
    ANY_DIRECTIVE,
    BLOCK_COMMENT,
    DEFINE_DIRECTIVE,
    INCLUDE_DIRECTIVE,
    LINE_COMMENT,
    NOMANGLE_DIRECTIVE,
    WORD_CHARACTER,
)
from glsl_minify.errors import DirectiveSyntaxError, InclusionError
from glsl_minify.models import GlslFile
from glsl_minify.resolver import FileResolver
from glsl_minify.symbols import TokenMap


def strip_comments(content: str) -> str:
    """Remove carriage returns and C/C++ style comments.

    Line comments are replaced by a newline so that a directive following the
    comment still starts a line.

    Args:
        content: Raw source text

    Returns:
        Source text without comments
    """
    output = content.replace("\r", "")
    output = BLOCK_COMMENT.sub("", output)
    return LINE_COMMENT.sub("\n", output)


def _parse_include_filename(literal: str, requested_by: str | None) -> str:
    """Decode the quoted file name of an @include directive."""
    try:
        filename = json.loads(literal)
    except json.JSONDecodeError as e:
        raise InclusionError(
            literal.strip(), requested_by, "malformed file name literal"
        ) from e

    if not isinstance(filename, str):
        raise InclusionError(
            literal.strip(), requested_by, "file name must be a string literal"
        )
    return filename


def preprocess_pass1(
    content: GlslFile,
    resolver: FileResolver,
    default_directory: str | None = None,
    active: tuple[str, ...] = (),
) -> str:
    """Remove comments and expand @include directives.

    Directives are expanded one at a time, from the top of the buffer, each
    with the fully expanded contents of the included file.

    Args:
        content: The source buffer to process
        resolver: Collaborator that reads included files
        default_directory: Base directory for buffers without a path
        active: Paths of the files currently being expanded

    Returns:
        The flattened source

    Raises:
        InclusionError: If an included file cannot be read or includes itself
    """
    output = strip_comments(content.contents)
    if content.path:
        active = active + (content.path,)

    while True:
        match = INCLUDE_DIRECTIVE.search(output)
        if not match:
            break

        filename = _parse_include_filename(match.group(1), content.path)

        # Included files resolve relative to the file that includes them
        current_directory = (
            os.path.dirname(content.path) if content.path else default_directory
        )
        try:
            include_file = resolver.resolve_and_read(filename, current_directory)
        except (OSError, UnicodeDecodeError) as e:
            raise InclusionError(filename, content.path, str(e)) from e

        if include_file.path and include_file.path in active:
            raise InclusionError(filename, content.path, "circular include")

        logger.debug(f"Including {include_file.path or filename}")
        include_content = preprocess_pass1(
            include_file, resolver, default_directory, active
        )

        output = output[: match.start()] + include_content + output[match.end() :]

    return output


def replace_macro(content: str, name: str, value: str) -> str:
    """Replace every whole-word occurrence of a macro name.

    A match is whole-word when the character after it is not a word character.
    The character before it is not checked. Replaced text is not rescanned.

    Args:
        content: Source text
        name: Macro name
        value: Replacement text

    Returns:
        Source text with the macro expanded
    """
    output = content
    offset = output.find(name)
    while offset >= 0:
        next_offset = offset + len(name)
        if next_offset < len(output) and WORD_CHARACTER.match(output[next_offset]):
            # Part of a larger token. Search again after the end of that word.
            while next_offset < len(output) and WORD_CHARACTER.match(
                output[next_offset]
            ):
                next_offset += 1
            offset = next_offset
        else:
            output = output[:offset] + value + output[next_offset:]
            offset += len(value)

        offset = output.find(name, offset)

    return output


def _check_leftover_directives(output: str, strict: bool) -> None:
    """Report directive-looking text that no directive pattern consumed."""
    for match in ANY_DIRECTIVE.finditer(output):
        line_start = output.rfind("\n", 0, match.start()) + 1
        line_end = output.find("\n", match.end())
        line = output[line_start : line_end if line_end >= 0 else len(output)]

        if strict:
            raise DirectiveSyntaxError(match.group(0), line)
        logger.warning(f"Ignoring malformed {match.group(0)} directive: {line.strip()!r}")


def preprocess_pass2(content: str, tokens: TokenMap, strict: bool = False) -> str:
    """Process @nomangle and @define directives.

    Args:
        content: Output of the first pass
        tokens: Symbol table of the current run
        strict: Raise DirectiveSyntaxError for malformed directives

    Returns:
        Source text with directives removed and macros expanded

    Raises:
        DirectiveSyntaxError: In strict mode, for a malformed directive
    """
    output = content

    while True:
        match = NOMANGLE_DIRECTIVE.search(output)
        if not match:
            break

        keywords = match.group(1).split()
        logger.debug(f"Reserving {keywords}")
        tokens.reserve_keywords(keywords)

        output = output[: match.start()] + output[match.end() :]

    while True:
        match = DEFINE_DIRECTIVE.search(output)
        if not match:
            break
        name, value = match.group(1), match.group(2)

        output = output[: match.start()] + output[match.end() :]

        # Replacement starts at the beginning of the buffer, so uses that come
        # before the @define line are expanded too
        logger.debug(f"Expanding macro {name} -> {value!r}")
        output = replace_macro(output, name, value)

    _check_leftover_directives(output, strict)
    return output
