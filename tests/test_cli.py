"""Tests for the glsl-minify command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from glsl_minify.main import ShaderChangeHandler, app

runner = CliRunner()


@pytest.fixture
def sample_shader_file(tmp_path):
    """Create a temporary shader with an include."""
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "color.glsl").write_text("uniform vec3 uColor;\n")
    shader = tmp_path / "main.frag"
    shader.write_text(
        '@include "color.glsl"\n'
        "// Solid color\n"
        "void main() {\n"
        "    gl_FragColor = vec4(uColor, 1.0);\n"
        "}\n"
    )
    return shader


def _include_args(shader):
    return ["--include-path", str(shader.parent / "lib")]


def test_help():
    """Test that the CLI help command works."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Minify GLSL shaders" in result.stdout


def test_minify_to_stdout(sample_shader_file):
    """Test minifying to stdout."""
    result = runner.invoke(app, ["minify", str(sample_shader_file), *_include_args(sample_shader_file)])

    assert result.exit_code == 0
    assert result.stdout == "uniform vec3 A;void main(){gl_FragColor=vec4(A,1.0);}\n"


def test_minify_to_file(sample_shader_file, tmp_path):
    """Test minifying to an output file."""
    output = tmp_path / "main.min.frag"

    result = runner.invoke(
        app,
        ["minify", str(sample_shader_file), str(output), *_include_args(sample_shader_file)],
    )

    assert result.exit_code == 0
    assert output.read_text() == "uniform vec3 A;void main(){gl_FragColor=vec4(A,1.0);}"


def test_minify_json(sample_shader_file):
    """Test the JSON output format."""
    result = runner.invoke(
        app,
        ["minify", str(sample_shader_file), "--format", "json", *_include_args(sample_shader_file)],
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["uniforms"] == {"uColor": {"type": "vec3", "minifiedName": "A"}}


def test_minify_js_module(sample_shader_file):
    """Test the JavaScript module output format."""
    result = runner.invoke(
        app,
        ["minify", str(sample_shader_file), "-f", "js", *_include_args(sample_shader_file)],
    )

    assert result.exit_code == 0
    assert result.stdout.startswith("module.exports = {")
    assert json.loads(result.stdout[len("module.exports = ") :])["code"].startswith("uniform")


def test_minify_header(sample_shader_file):
    """Test that --header adds generation comments."""
    result = runner.invoke(
        app,
        ["minify", str(sample_shader_file), "--header", *_include_args(sample_shader_file)],
    )

    assert result.exit_code == 0
    assert result.stdout.startswith("// Minified by glsl-minify v")
    assert "// Source file: main.frag" in result.stdout


def test_minify_nomangle_option(sample_shader_file):
    """Test that --nomangle keeps names."""
    result = runner.invoke(
        app,
        ["minify", str(sample_shader_file), "-n", "uColor", *_include_args(sample_shader_file)],
    )

    assert result.exit_code == 0
    assert "uniform vec3 uColor;" in result.stdout


def test_include_path_from_environment(sample_shader_file):
    """Test that include paths can come from the environment."""
    result = runner.invoke(
        app,
        ["minify", str(sample_shader_file)],
        env={"GLSL_MINIFY_INCLUDE_PATH": str(sample_shader_file.parent / "lib")},
    )

    assert result.exit_code == 0
    assert result.stdout.startswith("uniform vec3 A;")


def test_missing_include_exits_with_error(sample_shader_file):
    """Test that an unresolved include fails the command."""
    result = runner.invoke(app, ["minify", str(sample_shader_file)], env={})

    assert result.exit_code == 1


def test_missing_shader_exits_with_error(tmp_path):
    """Test that a missing input file fails the command."""
    result = runner.invoke(app, ["minify", str(tmp_path / "nope.frag")])

    assert result.exit_code == 1


def test_unknown_format(sample_shader_file):
    """Test that an unknown output format is rejected."""
    result = runner.invoke(app, ["minify", str(sample_shader_file), "--format", "xml"])

    assert result.exit_code == 2


def test_uniforms_command(sample_shader_file):
    """Test listing uniforms."""
    result = runner.invoke(app, ["uniforms", str(sample_shader_file), *_include_args(sample_shader_file)])

    assert result.exit_code == 0
    assert result.stdout == "uColor vec3 A\n"


def test_watch_handler_rebuild(sample_shader_file, tmp_path):
    """Test that the watch handler rebuilds and tracks included files."""
    output = tmp_path / "out.frag"
    handler = ShaderChangeHandler(
        sample_shader_file, output, "glsl", None, [sample_shader_file.parent / "lib"], False
    )

    assert handler.rebuild()
    assert output.read_text().startswith("uniform vec3 A;")
    assert str((sample_shader_file.parent / "lib" / "color.glsl").resolve()) in handler.dependencies
    assert str((sample_shader_file.parent / "lib").resolve()) in handler.directories


def test_watch_handler_failed_rebuild(tmp_path):
    """Test that a failing rebuild is reported, not raised."""
    shader = tmp_path / "broken.frag"
    shader.write_text('@include "missing.glsl"\n')

    handler = ShaderChangeHandler(shader, tmp_path / "out.frag", "glsl", None, None, False)

    assert not handler.rebuild()
    assert not (tmp_path / "out.frag").exists()


def test_undecodable_include_exits_with_error(tmp_path):
    """Test that an include that is not valid UTF-8 fails the command cleanly."""
    (tmp_path / "bad.glsl").write_bytes(b"float \xff\xfe;")
    shader = tmp_path / "main.frag"
    shader.write_text('@include "bad.glsl"\nvoid main(){}')

    result = runner.invoke(app, ["minify", str(shader)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)


def test_watch_handler_undecodable_shader(tmp_path):
    """Test that a shader that is not valid UTF-8 fails the rebuild without raising."""
    shader = tmp_path / "main.frag"
    shader.write_bytes(b"float \xff\xfe;")

    handler = ShaderChangeHandler(shader, tmp_path / "out.frag", "glsl", None, None, False)

    assert not handler.rebuild()
    assert not (tmp_path / "out.frag").exists()
