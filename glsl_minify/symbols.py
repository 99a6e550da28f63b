"""
Symbol table for the GLSL minifier.

The TokenMap records the minified name of every identifier seen during a run,
the names that must keep their spelling, and the declared type of uniforms.
"""

from collections.abc import Iterable, Iterator

from loguru import logger

from glsl_minify.constants import GLSL_RESERVED_KEYWORDS, MINIFIED_NAME_ALPHABET
from glsl_minify.models import GlslUniform


class TokenMap:
    """Minifies tokens and tracks reserved ones.

    One instance belongs to exactly one minifier run. It is seeded with the GLSL
    reserved keywords, which map to themselves.

    Examples:
        >>> tokens = TokenMap()
        >>> tokens.minify_token("uColor", "vec3")
        'A'
        >>> tokens.minify_token("float")
        'float'
    """

    def __init__(self, reserved: Iterable[str] = GLSL_RESERVED_KEYWORDS):
        """Initialize the token map.

        Args:
            reserved: Names that map to themselves from the start
        """
        # The record type is GlslUniform for every token, not just uniforms;
        # only uniforms have the type field set
        self._tokens: dict[str, GlslUniform] = {}

        # Names are assigned in order of first appearance
        self._minified_count = 0

        self.reserve_keywords(reserved)

    def reserve_keywords(self, keywords: Iterable[str]) -> None:
        """Add keywords to the reserved list to prevent minifying them.

        Args:
            keywords: Names to keep unchanged
        """
        for keyword in keywords:
            self._tokens[keyword] = GlslUniform(min_name=keyword)

    @staticmethod
    def get_minified_name(index: int) -> str:
        """Convert an allocation index to a name.

        The numbering works like spreadsheet columns over the 52 letters:
        0 -> 'A', 51 -> 'z', 52 -> 'AA', 53 -> 'AB'.

        Args:
            index: Zero-based allocation index

        Returns:
            The minified name for that index
        """
        base = len(MINIFIED_NAME_ALPHABET)
        quotient, remainder = divmod(index, base)
        digit = MINIFIED_NAME_ALPHABET[remainder]
        if quotient == 0:
            return digit
        return TokenMap.get_minified_name(quotient - 1) + digit

    def minify_token(self, name: str, uniform_type: str | None = None) -> str:
        """Minify a token.

        Args:
            name: Token name
            uniform_type: The declared type if the token is a uniform

        Returns:
            Minified token name
        """
        existing = self._tokens.get(name)
        if existing is not None:
            return existing.min_name

        # Never hand out a name that a reserved identifier already spells
        min_name = self.get_minified_name(self._minified_count)
        self._minified_count += 1
        while self.is_reserved(min_name):
            min_name = self.get_minified_name(self._minified_count)
            self._minified_count += 1

        self._tokens[name] = GlslUniform(min_name=min_name, type=uniform_type)
        logger.debug(f"Minified {name} -> {min_name}")
        return min_name

    def is_reserved(self, name: str) -> bool:
        """Check whether a name is known to map to itself."""
        record = self._tokens.get(name)
        return record is not None and record.min_name == name

    def get_uniforms(self) -> dict[str, GlslUniform]:
        """Return the uniforms and their associated data types."""
        return {
            original: record
            for original, record in self._tokens.items()
            if record.type
        }

    @property
    def minified_count(self) -> int:
        """Number of names allocated so far."""
        return self._minified_count

    def __contains__(self, name: object) -> bool:
        return name in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)
