"""
Top-level interface of the GLSL minifier.

This module ties the three passes together:

1. Comment removal and @include expansion
2. @nomangle and @define directive processing
3. Tokenizing and renaming

Each run gets its own TokenMap, so one GlslMinify instance can minify many
unrelated shaders without their names influencing each other.
"""

from pathlib import Path

from loguru import logger

from glsl_minify.minifier import minify_source
from glsl_minify.models import GlslFile, GlslProgram, MinifierConfig
from glsl_minify.preprocessor import preprocess_pass1, preprocess_pass2
from glsl_minify.resolver import FileResolver, FileSystemResolver
from glsl_minify.symbols import TokenMap


class GlslMinify:
    """Minifies GLSL source and reports the renamed uniforms.

    Examples:
        >>> program = GlslMinify().execute("uniform vec3 uColor;")
        >>> program.code
        'uniform vec3 A;'
        >>> program.uniforms["uColor"].min_name
        'A'
    """

    def __init__(
        self,
        resolver: FileResolver | None = None,
        config: MinifierConfig | None = None,
    ):
        """Initialize the minifier.

        Args:
            resolver: Collaborator used to read @include files. Defaults to a
                FileSystemResolver over the configured include paths.
            config: Run options
        """
        self.config = config or MinifierConfig()
        self.resolver: FileResolver = resolver or FileSystemResolver(
            self.config.include_paths
        )

    def create_token_map(self) -> TokenMap:
        """Create the symbol table for a new run."""
        tokens = TokenMap()
        tokens.reserve_keywords(self.config.nomangle)
        return tokens

    def execute(self, content: str, path: str | None = None) -> GlslProgram:
        """Minify GLSL source.

        Args:
            content: GLSL source text
            path: Path of the source, used to resolve relative @include
                directives and reported in errors

        Returns:
            The minified program

        Raises:
            InclusionError: If an @include directive cannot be expanded
            DirectiveSyntaxError: In strict mode, for a malformed directive
        """
        tokens = self.create_token_map()

        pass1 = preprocess_pass1(
            GlslFile(contents=content, path=path),
            self.resolver,
            self.config.default_directory,
        )
        pass2 = preprocess_pass2(pass1, tokens, strict=self.config.strict)
        pass3 = minify_source(pass2, tokens)

        uniforms = tokens.get_uniforms()
        logger.debug(
            f"Minified {len(content)} -> {len(pass3)} characters, "
            f"{len(uniforms)} uniforms"
        )
        return GlslProgram(code=pass3, uniforms=uniforms)

    def execute_file(self, filename: str | Path) -> GlslProgram:
        """Read a shader through the resolver and minify it.

        Args:
            filename: Path of the shader

        Returns:
            The minified program

        Raises:
            OSError: If the shader itself cannot be read
            UnicodeDecodeError: If the shader itself is not valid text
            InclusionError: If an @include directive cannot be expanded
        """
        root = self.resolver.resolve_and_read(
            str(filename), self.config.default_directory
        )
        return self.execute(root.contents, root.path)


def minify(
    source: str,
    path: str | None = None,
    resolver: FileResolver | None = None,
    **options: object,
) -> GlslProgram:
    """Minify GLSL source in a single call.

    Args:
        source: GLSL source text
        path: Optional path of the source for resolving @include directives
        resolver: Optional include resolver
        **options: Fields of MinifierConfig

    Returns:
        The minified program
    """
    config = MinifierConfig(**options)  # type: ignore[arg-type]
    return GlslMinify(resolver, config).execute(source, path)


def minify_file(
    filename: str | Path, resolver: FileResolver | None = None, **options: object
) -> GlslProgram:
    """Minify a GLSL file in a single call.

    Args:
        filename: Path of the shader
        resolver: Optional include resolver
        **options: Fields of MinifierConfig

    Returns:
        The minified program
    """
    config = MinifierConfig(**options)  # type: ignore[arg-type]
    return GlslMinify(resolver, config).execute_file(filename)
