"""
Content loading for MDX files.

This module handles:
- Splitting an MDX document into YAML frontmatter and prose body
- Parsing content files into ParsedContent
- Discovering content files under content/services and content/locations
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

import yaml

from .models import ContentType, ParsedContent

logger = logging.getLogger(__name__)


class ContentLoadError(Exception):
    """Raised when a content file cannot be found or parsed."""
    pass


# Content collections scanned by a full run, in discovery order
CONTENT_COLLECTIONS = ("services", "locations")

CONTENT_EXTENSION = ".mdx"

# Frontmatter block: opening "---" on the first line, closing "---" on its own line
_FRONTMATTER_RE = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def split_frontmatter(text: str) -> tuple[str, str]:
    """
    Split an MDX document into raw frontmatter and body.

    Args:
        text: Full file content.

    Returns:
        Tuple of (frontmatter_yaml, body). frontmatter_yaml is empty when
        the document has no frontmatter block, in which case the whole
        text is the body.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return "", text
    return match.group(1), text[match.end():]


def parse_frontmatter(raw: str, source: str = "<string>") -> dict:
    """
    Parse a YAML frontmatter block into a mapping.

    Args:
        raw: YAML text between the "---" delimiters.
        source: Name used in error messages.

    Returns:
        Frontmatter mapping (empty when the block is empty).

    Raises:
        ContentLoadError: If the YAML is malformed or not a mapping.
    """
    if not raw.strip():
        return {}

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ContentLoadError(f"Malformed frontmatter in {source}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ContentLoadError(
            f"Frontmatter in {source} must be a mapping, got {type(data).__name__}"
        )
    return data


def parse_content(text: str, file_path: str) -> ParsedContent:
    """
    Parse MDX text into ParsedContent.

    Args:
        text: Full MDX document.
        file_path: Path the document belongs to. Used as the result key
            and to derive the content type.

    Returns:
        ParsedContent for the document.
    """
    raw_frontmatter, body = split_frontmatter(text)
    frontmatter = parse_frontmatter(raw_frontmatter, source=file_path)

    return ParsedContent(
        file_path=file_path,
        file_name=Path(file_path).name,
        type=ContentType.from_path(file_path),
        frontmatter=frontmatter,
        body=body,
    )


def parse_content_file(file_path: Union[str, Path]) -> ParsedContent:
    """
    Read and parse an MDX content file.

    Raises:
        ContentLoadError: If the file cannot be read or its frontmatter
            is malformed.
    """
    path = Path(file_path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ContentLoadError(f"Could not read {file_path}: {e}")

    return parse_content(text, str(file_path))


def get_mdx_files(dir_path: Union[str, Path]) -> list[str]:
    """
    List MDX files directly inside a directory, sorted by name.

    A missing directory yields no files.
    """
    path = Path(dir_path)
    if not path.is_dir():
        logger.debug(f"Content directory not found, skipping: {path}")
        return []

    return [
        str(entry)
        for entry in sorted(path.iterdir())
        if entry.is_file() and entry.suffix == CONTENT_EXTENSION
    ]


def discover_content_files(
    content_dir: Union[str, Path],
    file: Optional[str] = None,
) -> list[str]:
    """
    Resolve the files for a validation run.

    Args:
        content_dir: Root content directory holding services/ and locations/.
        file: Optional single file. Relative paths resolve against the
            current working directory.

    Returns:
        File paths in discovery order: services first, then locations.

    Raises:
        ContentLoadError: If an explicit file does not exist.
    """
    if file:
        full_path = Path(file)
        if not full_path.is_absolute():
            full_path = Path.cwd() / full_path
        if not full_path.exists():
            raise ContentLoadError(f"File not found: {file}")
        return [str(full_path)]

    root = Path(content_dir)
    files: list[str] = []
    for collection in CONTENT_COLLECTIONS:
        files.extend(get_mdx_files(root / collection))
    return files
