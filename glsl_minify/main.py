"""Command line interface for glsl-minify.

This module provides a command-line interface for minifying GLSL shader files,
listing the uniforms they declare and rebuilding them on change.
"""

import json
import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import arrow
import typer
import watchdog.events
import watchdog.observers
from loguru import logger
from watchdog.events import FileSystemEventHandler

from glsl_minify.core import GlslMinify
from glsl_minify.errors import MinifierError
from glsl_minify.models import GlslProgram, MinifierConfig
from glsl_minify.resolver import FileSystemResolver

# Define type variables for TypedCallable
F = TypeVar("F", bound=Callable[..., Any])

OUTPUT_FORMATS = ("glsl", "json", "js")


# TypedCommand decorator helper
def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="glsl-minify",
    help=(
        "Minify GLSL shaders and report their renamed uniforms. "
        "Commands: minify, uniforms, watch."
    ),
    add_completion=False,
)


@app.callback()
def configure(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every pass in detail"
    ),
) -> None:
    """Configure logging before running a command."""
    # Write through typer so the sink follows whatever stderr is current
    logger.remove()
    logger.add(
        lambda message: typer.echo(message, err=True, nl=False),
        level="DEBUG" if verbose else "INFO",
        format="{time:HH:mm:ss} | {level: <8} | {message}",
    )


# Define reusable options
SHADER_ARG = typer.Argument(..., help="GLSL file to minify")
NOMANGLE_OPTION = typer.Option(
    None, "--nomangle", "-n", help="Identifier that must not be renamed"
)
INCLUDE_PATH_OPTION = typer.Option(
    None,
    "--include-path",
    "-I",
    help="Directory searched for @include files",
    envvar="GLSL_MINIFY_INCLUDE_PATH",
)
STRICT_OPTION = typer.Option(
    False, "--strict", help="Fail on malformed directives instead of warning"
)


def _create_minifier(
    nomangle: list[str] | None,
    include_path: list[Path] | None,
    strict: bool,
) -> tuple[GlslMinify, FileSystemResolver]:
    """Build a minifier and its resolver from command line options.

    Args:
        nomangle: Extra reserved identifiers
        include_path: Include search directories
        strict: Whether malformed directives are errors

    Returns:
        Tuple of (minifier, resolver)
    """
    config = MinifierConfig(
        nomangle=list(nomangle or []),
        include_paths=list(include_path or []),
        strict=strict,
    )
    resolver = FileSystemResolver(config.include_paths)
    return GlslMinify(resolver, config), resolver


def _minify_shader(minifier: GlslMinify, shader_file: Path) -> GlslProgram:
    """Minify a shader file, turning failures into a non-zero exit.

    Args:
        minifier: Configured minifier
        shader_file: Shader to minify

    Returns:
        The minified program
    """
    try:
        logger.debug(f"Minifying {shader_file}")
        return minifier.execute_file(shader_file)
    except MinifierError as e:
        logger.error(f"Minification error: {e}")
        raise typer.Exit(1) from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read shader: {e}")
        raise typer.Exit(1) from e


def _add_header_comments(code: str, source_file: Path) -> str:
    """Add header comments to the code.

    Args:
        code: Minified code
        source_file: Source GLSL file

    Returns:
        Code with header comments
    """
    timestamp = arrow.utcnow().format("YYYY-MM-DD HH:mm:ss UTC")
    header = f"// Minified by glsl-minify v{__import__('glsl_minify').__version__}\n"
    header += f"// Generation time: {timestamp}\n"
    header += f"// Source file: {os.path.basename(source_file)}\n"

    # Code may start with a #version directive, which must stay first
    if code.startswith("#version"):
        version, _, rest = code.partition("\n")
        return f"{version}\n{header}{rest}"
    return header + code


def _format_program(
    program: GlslProgram, format: str, source_file: Path, header: bool
) -> str:
    """Render a minified program in the requested output format.

    Args:
        program: Minified program
        format: One of glsl, json, js
        source_file: Source GLSL file
        header: Whether GLSL output gets header comments

    Returns:
        Output text
    """
    if format == "glsl":
        if header:
            return _add_header_comments(program.code, source_file)
        return program.code
    elif format == "json":
        return json.dumps(program.to_dict(), indent=2)
    elif format == "js":
        return "module.exports = " + json.dumps(program.to_dict())
    else:
        raise ValueError(f"Unknown format: {format}")


def _write_output(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text)
        return

    output.write_text(text, encoding="utf-8")
    logger.info(f"Minified shader written to {output}")


@typed_command(app.command("minify"))
def minify_shader(
    shader_file: Path = SHADER_ARG,
    output: Path | None = typer.Argument(
        None, help="Output file path (stdout if omitted)"
    ),
    format: str = typer.Option(
        "glsl", "--format", "-f", help="Output format (glsl, json, js)"
    ),
    nomangle: list[str] | None = NOMANGLE_OPTION,
    include_path: list[Path] | None = INCLUDE_PATH_OPTION,
    strict: bool = STRICT_OPTION,
    header: bool = typer.Option(
        False, "--header", help="Prefix GLSL output with a generation comment"
    ),
) -> None:
    """Minify a GLSL shader.

    Comments are removed, @include, @nomangle and @define directives are
    applied and identifiers are renamed to the shortest available names.

    Example: glsl-minify minify shaders/main.frag main.min.frag
    """
    if format not in OUTPUT_FORMATS:
        logger.error(f"Unknown format: {format}")
        raise typer.Exit(2)

    minifier, _ = _create_minifier(nomangle, include_path, strict)
    program = _minify_shader(minifier, shader_file)
    _write_output(_format_program(program, format, shader_file, header), output)


@typed_command(app.command("uniforms"))
def list_uniforms(
    shader_file: Path = SHADER_ARG,
    nomangle: list[str] | None = NOMANGLE_OPTION,
    include_path: list[Path] | None = INCLUDE_PATH_OPTION,
    strict: bool = STRICT_OPTION,
) -> None:
    """List the uniforms of a shader with their type and minified name.

    Example: glsl-minify uniforms shaders/main.frag
    """
    minifier, _ = _create_minifier(nomangle, include_path, strict)
    program = _minify_shader(minifier, shader_file)

    if not program.uniforms:
        logger.info("No uniforms found")
        return

    for name, uniform in program.uniforms.items():
        typer.echo(f"{name} {uniform.type} {uniform.min_name}")


class ShaderChangeHandler(FileSystemEventHandler):  # type: ignore
    """Event handler that rebuilds a shader when it or its includes change."""

    def __init__(
        self,
        shader_file: Path,
        output: Path,
        format: str,
        nomangle: list[str] | None,
        include_path: list[Path] | None,
        strict: bool,
    ):
        """Initialize shader change handler.

        Args:
            shader_file: Path to shader file
            output: Path of the minified output
            format: Output format
            nomangle: Extra reserved identifiers
            include_path: Include search directories
            strict: Whether malformed directives are errors
        """
        self.shader_file = shader_file
        self.output = output
        self.format = format
        self.nomangle = nomangle
        self.include_path = include_path
        self.strict = strict
        self.dependencies: set[str] = {str(shader_file.resolve())}
        self.needs_rebuild = False

    def on_modified(self, event: watchdog.events.FileSystemEvent) -> None:
        """Handle file modification events.

        Args:
            event: File system event
        """
        if os.path.abspath(str(event.src_path)) in self.dependencies:
            logger.info(f"Detected changes in {event.src_path}")
            self.needs_rebuild = True

    def rebuild(self) -> bool:
        """Minify the shader again and write the output.

        Returns:
            True if the build succeeded
        """
        minifier, resolver = _create_minifier(
            self.nomangle, self.include_path, self.strict
        )
        try:
            program = minifier.execute_file(self.shader_file)
        except (MinifierError, OSError, UnicodeDecodeError) as e:
            logger.error(f"Error minifying shader: {e}")
            return False
        finally:
            # Keep watching whatever was read, even if the build failed
            self.dependencies.update(resolver.dependencies)

        text = _format_program(program, self.format, self.shader_file, False)
        _write_output(text, self.output)
        return True

    @property
    def directories(self) -> set[str]:
        """Directories that hold the shader and its includes."""
        return {os.path.dirname(path) for path in self.dependencies}


@typed_command(app.command("watch"))
def watch_shader(
    shader_file: Path = SHADER_ARG,
    output: Path = typer.Argument(..., help="Output file path"),
    format: str = typer.Option(
        "glsl", "--format", "-f", help="Output format (glsl, json, js)"
    ),
    nomangle: list[str] | None = NOMANGLE_OPTION,
    include_path: list[Path] | None = INCLUDE_PATH_OPTION,
    strict: bool = STRICT_OPTION,
) -> None:
    """Watch a shader and its includes and re-minify on changes.

    Example: glsl-minify watch shaders/main.frag main.min.frag
    """
    if format not in OUTPUT_FORMATS:
        logger.error(f"Unknown format: {format}")
        raise typer.Exit(2)

    handler = ShaderChangeHandler(
        shader_file, output, format, nomangle, include_path, strict
    )
    handler.rebuild()

    # Watch the directories, not the files themselves
    observer = watchdog.observers.Observer()
    watched: set[str] = set()
    for directory in handler.directories:
        observer.schedule(handler, path=directory, recursive=False)
        watched.add(directory)
    observer.start()

    logger.info(f"Watching {shader_file} (press Ctrl+C to stop)...")
    try:
        while True:
            time.sleep(0.1)
            if not handler.needs_rebuild:
                continue

            handler.needs_rebuild = False
            handler.rebuild()

            # New includes may live in directories not watched yet
            for directory in handler.directories - watched:
                observer.schedule(handler, path=directory, recursive=False)
                watched.add(directory)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, stopping...")
    finally:
        observer.stop()
        observer.join()


if __name__ == "__main__":
    app()
