"""URL path resolution tests."""

import errno
import os
from pathlib import Path

import pytest

from mdserve.resolver import ResolverOptions, resolve


def test_resolves_root_to_index(docs_root: Path):
    assert resolve("/", docs_root) == docs_root / "index.md"


def test_root_without_index_is_not_found(docs_root: Path):
    """Other files in the folder never stand in for a missing index."""
    assert resolve("/", docs_root / "no-index") is None


def test_returns_absolute_path_for_relative_root(docs_root: Path, monkeypatch):
    monkeypatch.chdir(docs_root.parent)
    found = resolve("/new", "docs")
    assert found is not None
    assert found.is_absolute()
    assert found == docs_root / "new.md"


@pytest.mark.parametrize("url_path", [None, "", "new", "sub/test"])
def test_invalid_input_is_not_found(docs_root: Path, url_path):
    assert resolve(url_path, docs_root) is None


@pytest.mark.parametrize(
    "url_path, expected",
    [
        ("/new", "new.md"),
        ("/test%20space", "test space.md"),
        ("/test-space", "test space.md"),
        ("/test-no-yml", "test-no-yml.md"),
        ("/sub/test", "sub/test.md"),
        ("/space-in-name/test", "space in name/test.md"),
        ("/space-in-name/sub/more-spaces", "space in name/sub/more spaces.md"),
        ("/space-in-name/sub/with-dash", "space in name/sub/with-dash.md"),
        ("/sub/", "sub/index.md"),
    ],
)
def test_resolves_default_conventions(docs_root: Path, url_path: str, expected: str):
    assert resolve(url_path, docs_root) == docs_root / expected


@pytest.mark.parametrize("url_path", ["/space-in-name/sub/bogus-file", "/test/", "/foo-bar"])
def test_unknown_paths_are_not_found(docs_root: Path, url_path: str):
    assert resolve(url_path, docs_root) is None


def test_trailing_slash_matches_default_page(docs_root: Path):
    assert resolve("/sub/", docs_root) == resolve("/sub/index", docs_root)


def test_encoded_literal_and_slug_forms_agree(tmp_path: Path, make_tree):
    root = make_tree(tmp_path, {"a b.md": "# a b\n"})
    expected = root / "a b.md"
    assert resolve("/a%20b", root) == expected
    assert resolve("/a b", root) == expected
    assert resolve("/a-b", root) == expected


def test_literal_name_wins_over_space_variant(tmp_path: Path, make_tree):
    root = make_tree(tmp_path, {"with-dash.md": "literal", "with dash.md": "spaced"})
    assert resolve("/with-dash", root) == root / "with-dash.md"


def test_segment_walk_prefers_literal_folder(tmp_path: Path, make_tree):
    root = make_tree(
        tmp_path,
        {
            "my-dir/the page.md": "literal folder",
            "my dir/other.md": "spaced folder",
        },
    )
    assert resolve("/my-dir/the-page", root) == root / "my-dir" / "the page.md"


def test_unmatched_segment_aborts_walk(tmp_path: Path, make_tree):
    """A later segment must not match directly under an ancestor folder."""
    root = make_tree(tmp_path, {"b.md": "# b\n", "a/c.md": "# c\n"})
    assert resolve("/missing/b", root) is None
    assert resolve("/a/missing/c", root) is None


def test_directory_named_like_document_is_not_a_match(tmp_path: Path):
    (tmp_path / "folder.md").mkdir()
    assert resolve("/folder", tmp_path) is None


def test_is_idempotent(docs_root: Path):
    first = resolve("/space-in-name/sub/more-spaces", docs_root)
    second = resolve("/space-in-name/sub/more-spaces", docs_root)
    assert first == second == docs_root / "space in name" / "sub" / "more spaces.md"


# === Options ===

def test_file_extension_option(docs_root: Path):
    found = resolve("/new", docs_root, ResolverOptions(file_extension="markdown"))
    assert found == docs_root / "new.markdown"


def test_file_extension_is_normalised():
    assert ResolverOptions(file_extension="markdown").file_extension == ".markdown"
    assert ResolverOptions(file_extension=".md").file_extension == ".md"


def test_default_page_name_option(docs_root: Path):
    found = resolve("/sub/", docs_root, ResolverOptions(default_page_name="default"))
    assert found == docs_root / "sub" / "default.md"

    found = resolve("/sub/", docs_root, ResolverOptions(default_page_name="custom"))
    assert found == docs_root / "sub" / "custom.md"


def test_all_options(docs_root: Path):
    options = ResolverOptions(default_page_name="custom", file_extension="foo")
    assert resolve("/sub/", docs_root, options) == docs_root / "sub" / "custom.foo"


def test_default_page_only_in_sub_folder(tmp_path: Path, make_tree):
    root = make_tree(tmp_path, {"sub/default.md": "# default\n"})
    assert resolve("/sub/", root, ResolverOptions(default_page_name="default")) == root / "sub" / "default.md"
    assert resolve("/sub/", root) is None


def test_use_extension_in_url(docs_root: Path):
    options = ResolverOptions(use_extension_in_url=True)
    assert resolve("/test-use-extension.md", docs_root, options) == docs_root / "test-use-extension.md"
    # Extensionless URLs still resolve the usual way
    assert resolve("/new", docs_root, options) == docs_root / "new.md"


def test_use_extension_in_url_skips_fallbacks(tmp_path: Path, make_tree):
    root = make_tree(tmp_path, {"a b.md": "# a b\n"})
    assert resolve("/a-b.md", root, ResolverOptions(use_extension_in_url=True)) is None


def test_extension_in_url_without_option_appends_extension(docs_root: Path):
    assert resolve("/test-use-extension.md", docs_root) is None


# === Safety ===

@pytest.mark.parametrize("url_path", ["/../outside", "/%2e%2e/outside", "/sub/../../outside", "/..%2Foutside"])
def test_never_escapes_root(tmp_path: Path, make_tree, url_path: str):
    make_tree(tmp_path, {"outside.md": "# outside\n", "docs/index.md": "# docs\n"})
    assert resolve(url_path, tmp_path / "docs") is None


def test_encoded_absolute_path_stays_under_root(tmp_path: Path, make_tree):
    make_tree(tmp_path, {"outside.md": "# outside\n", "docs/index.md": "# docs\n"})
    outside = str(tmp_path / "outside").lstrip("/")
    assert resolve(f"/%2F{outside}", tmp_path / "docs") is None


def test_nul_byte_is_not_found(docs_root: Path):
    assert resolve("/new%00", docs_root) is None


def test_overlong_name_is_not_found(docs_root: Path):
    assert resolve("/" + "a" * 1000, docs_root) is None


def test_probe_errors_propagate(docs_root: Path, monkeypatch):
    """Permission problems are environment faults, not missing documents."""

    def denied(path, *args, **kwargs):
        raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))

    monkeypatch.setattr("mdserve.resolver.os.stat", denied)

    with pytest.raises(PermissionError):
        resolve("/new", docs_root)
