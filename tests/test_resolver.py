"""Tests for the include resolvers."""

import pytest

from glsl_minify.resolver import FileSystemResolver, MemoryResolver


@pytest.fixture
def include_tree(tmp_path):
    """Create a small directory tree of shader files."""
    (tmp_path / "src").mkdir()
    (tmp_path / "lib").mkdir()
    (tmp_path / "src" / "local.glsl").write_text("float local;")
    (tmp_path / "lib" / "shared.glsl").write_text("float shared;")
    return tmp_path


def test_file_system_relative_to_base(include_tree):
    """Test that relative names resolve against the base directory."""
    resolver = FileSystemResolver()

    result = resolver.resolve_and_read("local.glsl", str(include_tree / "src"))

    assert result.contents == "float local;"
    assert result.path == str((include_tree / "src" / "local.glsl").resolve())


def test_file_system_include_paths(include_tree):
    """Test that include paths are searched after the base directory."""
    resolver = FileSystemResolver(include_paths=[include_tree / "lib"])

    result = resolver.resolve_and_read("shared.glsl", str(include_tree / "src"))

    assert result.contents == "float shared;"


def test_file_system_absolute_path(include_tree):
    """Test that absolute names are read as-is."""
    path = include_tree / "lib" / "shared.glsl"

    result = FileSystemResolver().resolve_and_read(str(path), "/nonexistent")

    assert result.contents == "float shared;"


def test_file_system_missing(include_tree):
    """Test that a missing file raises FileNotFoundError."""
    resolver = FileSystemResolver(include_paths=[include_tree / "lib"])

    with pytest.raises(FileNotFoundError, match="missing.glsl"):
        resolver.resolve_and_read("missing.glsl", str(include_tree / "src"))
    assert resolver.dependencies == []


def test_file_system_dependencies_are_unique(include_tree):
    """Test that reading a file twice records it once."""
    resolver = FileSystemResolver()
    base = str(include_tree / "src")

    resolver.resolve_and_read("local.glsl", base)
    resolver.resolve_and_read("local.glsl", base)

    assert resolver.dependencies == [str((include_tree / "src" / "local.glsl").resolve())]


def test_memory_resolver_joins_base_directory():
    """Test that virtual files resolve relative to the base directory."""
    resolver = MemoryResolver({"a/b/c.glsl": "c;"})

    result = resolver.resolve_and_read("../b/c.glsl", "a/b")

    assert result.path == "a/b/c.glsl"
    assert result.contents == "c;"


def test_memory_resolver_missing():
    """Test that an unknown virtual file raises FileNotFoundError."""
    resolver = MemoryResolver()

    with pytest.raises(FileNotFoundError):
        resolver.resolve_and_read("x.glsl")
    assert resolver.requests == ["x.glsl"]
