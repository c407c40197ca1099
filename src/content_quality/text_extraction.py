"""
Human-readable text extraction from MDX frontmatter.

Frontmatter carries most of the marketing copy in this content model
(hero, about, FAQs, specialist cards), so validators analyze it together
with the body. The frontmatter shape is loose: every extractor skips
missing or ill-typed fields instead of failing.
"""

from typing import Any, Mapping, Optional

# "about" list fields holding prose items
ABOUT_LIST_FIELDS = ("whenNeeded", "whatAchieve", "keyPoints")

HERO_TEXT_FIELDS = ("heading", "subheading", "description", "title")


def get_text(data: Any, key: str) -> Optional[str]:
    """Return data[key] when data is a mapping and the value is a string."""
    if not isinstance(data, Mapping):
        return None
    value = data.get(key)
    return value if isinstance(value, str) else None


def get_mapping(data: Any, key: str) -> Optional[Mapping]:
    """Return data[key] when it is a mapping."""
    if not isinstance(data, Mapping):
        return None
    value = data.get(key)
    return value if isinstance(value, Mapping) else None


def get_list(data: Any, key: str) -> list:
    """Return data[key] when it is a list, else an empty list."""
    if not isinstance(data, Mapping):
        return []
    value = data.get(key)
    return value if isinstance(value, list) else []


def _collect_text_parts(frontmatter: Mapping, include_titles: bool) -> list[str]:
    parts: list[str] = []

    def add(value: Optional[str]) -> None:
        if value is not None:
            parts.append(value)

    add(get_text(frontmatter, "description"))

    hero = get_mapping(frontmatter, "hero")
    for key in HERO_TEXT_FIELDS:
        add(get_text(hero, key))

    about = get_mapping(frontmatter, "about")
    add(get_text(about, "whatIs"))
    for key in ABOUT_LIST_FIELDS:
        for item in get_list(about, key):
            if isinstance(item, str):
                parts.append(item)

    for faq in get_list(frontmatter, "faqs"):
        add(get_text(faq, "question"))
        add(get_text(faq, "answer"))

    # Specialist cards only appear on location pages
    specialists = get_mapping(frontmatter, "specialists")
    if include_titles:
        add(get_text(specialists, "title"))
    add(get_text(specialists, "description"))
    for card in get_list(specialists, "cards"):
        if include_titles:
            add(get_text(card, "title"))
        add(get_text(card, "description"))

    return parts


def extract_readable_text(frontmatter: Mapping) -> str:
    """
    Extract the prose fields of a frontmatter mapping.

    Covers description, hero heading/subheading/description/title, the
    "about" narrative and its list items, FAQ question/answer pairs and
    specialist descriptions.

    Args:
        frontmatter: Parsed frontmatter mapping.

    Returns:
        The fields joined with single spaces.
    """
    return " ".join(_collect_text_parts(frontmatter, include_titles=False))


def extract_uniqueness_text(frontmatter: Mapping) -> str:
    """Like extract_readable_text, plus specialist section and card titles."""
    return " ".join(_collect_text_parts(frontmatter, include_titles=True))


def combine_with_body(frontmatter_text: str, body: str) -> str:
    """Join extracted frontmatter text with the document body."""
    return frontmatter_text + " " + body
