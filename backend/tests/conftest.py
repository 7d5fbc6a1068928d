"""Shared fixtures: a documents tree laid out like a small site."""

from pathlib import Path

import pytest

from mdserve import config


TEST_MD = """title: Hello World
draft: false
---

# Hello World

Some names:

- Larry
- Curly
- Moe
"""

TEST_JEKYLL_MD = """---
title: Hello World
tags: [intro, demo]
---

# Hello World

- Larry
- Curly
- Moe
"""

TEST_NO_YML_MD = """# No front matter

Some names:

- Larry
- Curly
- Moe
"""

DOCUMENTS = {
    "index.md": "# Home\n",
    "new.md": "# New\n",
    "new.markdown": "# New, markdown extension\n",
    "test.md": TEST_MD,
    "test-jekyll.md": TEST_JEKYLL_MD,
    "test-no-yml.md": TEST_NO_YML_MD,
    "test space.md": "# Test space\n",
    "test-use-extension.md": "# Literal file name\n",
    "sub/index.md": "# Sub index\n",
    "sub/test.md": "# Sub test\n",
    "sub/default.md": "# Sub default\n",
    "sub/custom.md": "# Sub custom\n",
    "sub/custom.foo": "# Sub custom foo\n",
    "space in name/test.md": "# Space in name\n",
    "space in name/sub/more spaces.md": "# More spaces\n",
    "space in name/sub/with-dash.md": "# With dash\n",
    "no-index/readme.md": "# Not an index\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files (and their folders) under root."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Documents directory populated with DOCUMENTS."""
    return write_tree(tmp_path / "docs", DOCUMENTS)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop the cached settings singleton around every test."""
    config._settings = None
    yield
    config._settings = None


@pytest.fixture
def make_tree():
    """Factory building an ad-hoc documents tree: make_tree(root, {relative: content})."""
    return write_tree
