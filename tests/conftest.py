"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from focuslint.sinks import CollectingSink

ACCESSIBLE_PAGE = """<!doctype html>
<html>
<body>
  <a class="sr-only" href="#main" tabindex="0" style="outline: 2px solid">Skip to main content</a>
  <nav>
    <a href="/" tabindex="1" style="outline: 2px solid">Home</a>
    <button tabindex="2" style="border: 1px solid">Menu</button>
  </nav>
  <main id="main">
    <div role="dialog" tabindex="3">
      <button tabindex="4" style="outline: 1px dotted">Close</button>
    </div>
  </main>
</body>
</html>
"""

BROKEN_PAGE = """<!doctype html>
<html>
<body>
  <button tabindex="2" style="color: red">Menu</button>
  <a class="sr-only" href="#main">Skip to main content</a>
  <input type="text" tabindex="1">
  <div role="dialog">Are you sure?</div>
</body>
</html>
"""


@pytest.fixture
def sink() -> CollectingSink:
    """An in-memory diagnostics sink."""
    return CollectingSink()


@pytest.fixture
def accessible_page() -> str:
    """Markup that satisfies every focus rule."""
    return ACCESSIBLE_PAGE


@pytest.fixture
def broken_page() -> str:
    """Markup that violates every focus rule."""
    return BROKEN_PAGE


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    """A directory with one passing and one failing page, plus a non-markup file."""
    root = tmp_path / "site"
    (root / "nested").mkdir(parents=True)
    (root / "index.html").write_text(ACCESSIBLE_PAGE, encoding="utf-8")
    (root / "nested" / "broken.htm").write_text(BROKEN_PAGE, encoding="utf-8")
    (root / "notes.txt").write_text("<button>ignored</button>", encoding="utf-8")
    return root
