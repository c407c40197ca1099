"""
Pytest fixtures and configuration for Content Quality Validator tests.
"""

from pathlib import Path
from typing import Any, Callable, Optional

import pytest
import yaml

from content_quality.registry import clear_uniqueness_cache


def build_mdx(frontmatter: Optional[dict[str, Any]] = None, body: str = "") -> str:
    """Render an MDX document from a frontmatter mapping and body."""
    if frontmatter is None:
        return body
    raw = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    return f"---\n{raw}---\n{body}"


def distinct_words(prefix: str, count: int) -> str:
    """Generate `count` distinct words, e.g. "leeds0 leeds1 ...", for n-gram tests."""
    return " ".join(f"{prefix}{i}" for i in range(count))


@pytest.fixture(autouse=True)
def fresh_uniqueness_index():
    """Each test starts with an empty uniqueness index."""
    clear_uniqueness_cache()
    yield
    clear_uniqueness_cache()


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create an empty content directory with services/ and locations/."""
    root = tmp_path / "content"
    (root / "services").mkdir(parents=True)
    (root / "locations").mkdir(parents=True)
    return root


@pytest.fixture
def write_mdx(content_dir: Path) -> Callable[..., Path]:
    """Write an MDX file into a content collection and return its path."""
    def _write(
        collection: str,
        name: str,
        frontmatter: Optional[dict[str, Any]] = None,
        body: str = "",
    ) -> Path:
        path = content_dir / collection / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(build_mdx(frontmatter, body), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def service_frontmatter() -> dict[str, Any]:
    """Frontmatter for a typical service page."""
    return {
        "title": "Scaffold Hire",
        "seoTitle": "Scaffold Hire in Yorkshire | Safe, Certified Scaffolding",
        "description": (
            "Professional scaffold hire for domestic and commercial projects across Yorkshire. "
            "Fully insured, TG20 compliant crews. Call us today for a free quote!"
        ),
        "keywords": ["scaffolding", "scaffold hire", "access scaffolding", "temporary roofs"],
        "hero": {
            "heading": "Scaffold hire you can rely on",
            "subheading": "Certified scaffolding teams for every type of building project.",
        },
        "about": {
            "whatIs": (
                "Scaffolding is a temporary structure that gives workers safe access to "
                "buildings while they are built, repaired or cleaned."
            ),
            "keyPoints": [
                "Every scaffolding structure is inspected before handover.",
                "Our crews hold current CISRS cards.",
            ],
        },
        "faqs": [
            {
                "question": "How long can I keep the scaffolding?",
                "answer": "Hire periods are flexible and most projects keep scaffolding for four to eight weeks.",
            },
        ],
    }
