"""
SEO metrics analysis module.

Rule-based checks, each independent of the others:
- SEO_001: SEO title length (50-60 chars)
- SEO_002: Description length (150-160 chars)
- SEO_003: Primary keyword density (1-3%)
- SEO_004: Description contains a call-to-action (informational)
- SEO_005: Keywords array has 3-10 entries
"""

import re
import time
from typing import Any, Mapping

from .models import ParsedContent, Severity, ValidationIssue, ValidationResult, ValidatorConfig
from .text_extraction import combine_with_body, extract_readable_text, get_text

# Phrases that indicate a call-to-action
CTA_PATTERNS = [
    re.compile(r"\bfree\s+quote", re.IGNORECASE),
    re.compile(r"\bget\s+a?\s*quote", re.IGNORECASE),
    re.compile(r"\bcontact\s+us", re.IGNORECASE),
    re.compile(r"\bcall\s+(us|now|today)", re.IGNORECASE),
    re.compile(r"\bbook\s+(now|today|online)", re.IGNORECASE),
    re.compile(r"\brequest\s+a?\s*(quote|consultation)", re.IGNORECASE),
    re.compile(r"\blearn\s+more", re.IGNORECASE),
    re.compile(r"\bget\s+started", re.IGNORECASE),
    re.compile(r"\bschedule\s+a?\s*(call|consultation)", re.IGNORECASE),
    re.compile(r"\b(24/7|24\s*hours)", re.IGNORECASE),
    re.compile(r"\bfree\s+(consultation|estimate|survey)", re.IGNORECASE),
]

_NON_LETTER_RE = re.compile(r"[^a-zA-Z\s]")


def contains_cta(text: str) -> bool:
    """Check if text contains a call-to-action phrase."""
    return any(pattern.search(text) for pattern in CTA_PATTERNS)


def count_keyword_occurrences(text: str, keyword: str) -> int:
    """
    Count whole-word, case-insensitive occurrences of a keyword.

    Args:
        text: Text to search.
        keyword: Keyword or phrase. Regex metacharacters are escaped.

    Returns:
        Number of matches.
    """
    if not keyword:
        return 0
    pattern = re.compile(r"\b" + re.escape(keyword.lower()) + r"\b", re.IGNORECASE)
    return len(pattern.findall(text.lower()))


def count_words(text: str) -> int:
    """Count words, treating every non-letter as a separator."""
    return len(_NON_LETTER_RE.sub(" ", text).split())


def calculate_keyword_density(text: str, keyword: str) -> tuple[float, int, int]:
    """
    Calculate keyword density as a percentage of total words.

    Returns:
        Tuple of (density_percent, occurrences, total_words).
    """
    total_words = count_words(text)
    occurrences = count_keyword_occurrences(text, keyword)
    density = (occurrences / total_words) * 100 if total_words > 0 else 0.0
    return density, occurrences, total_words


def get_keywords(frontmatter: Mapping[str, Any]) -> list[str]:
    """Return the string entries of the frontmatter keywords list."""
    keywords = frontmatter.get("keywords")
    if not isinstance(keywords, list):
        return []
    return [kw for kw in keywords if isinstance(kw, str)]


class SeoValidator:
    """Checks title/description length, keyword density and CTA presence."""

    name = "seo"
    description = (
        "Checks SEO quality including title/description length, "
        "keyword density, and CTA presence"
    )

    def validate(self, content: ParsedContent, config: ValidatorConfig) -> ValidationResult:
        start = time.perf_counter()
        issues: list[ValidationIssue] = []
        frontmatter = content.frontmatter

        title_min = config.threshold("titleLengthMin", 50)
        title_max = config.threshold("titleLengthMax", 60)
        desc_min = config.threshold("descriptionLengthMin", 150)
        desc_max = config.threshold("descriptionLengthMax", 160)
        density_min = config.threshold("keywordDensityMin", 1)
        density_max = config.threshold("keywordDensityMax", 3)
        count_min = config.threshold("keywordsCountMin", 3)
        count_max = config.threshold("keywordsCountMax", 10)

        # SEO_001: title length
        seo_title = get_text(frontmatter, "seoTitle") or get_text(frontmatter, "title") or ""
        title_length = len(seo_title)
        title_details = {"currentLength": title_length, "targetMin": title_min, "targetMax": title_max}
        title_message = f"SEO title is {title_length} characters (target: {title_min:g}-{title_max:g})"

        if title_length < title_min:
            issues.append(ValidationIssue(
                severity=config.severity,
                code="SEO_001",
                message=title_message,
                field="seoTitle",
                suggestion=(
                    f"Add {title_min - title_length:g} more characters "
                    "to optimize for search results display."
                ),
                score=title_length,
                details=title_details,
            ))
        elif title_length > title_max:
            issues.append(ValidationIssue(
                severity=config.severity,
                code="SEO_001",
                message=title_message,
                field="seoTitle",
                suggestion=(
                    f"Remove {title_length - title_max:g} characters "
                    "to prevent truncation in search results."
                ),
                score=title_length,
                details=title_details,
            ))

        # SEO_002: description length, only when a description exists
        description = get_text(frontmatter, "description") or ""
        description_length = len(description)
        desc_details = {"currentLength": description_length, "targetMin": desc_min, "targetMax": desc_max}
        desc_message = f"Description is {description_length} characters (optimal: {desc_min:g}-{desc_max:g})"

        if description_length > 0:
            if description_length < desc_min:
                issues.append(ValidationIssue(
                    severity=config.severity,
                    code="SEO_002",
                    message=desc_message,
                    field="description",
                    suggestion=(
                        f"Add {desc_min - description_length:g} more characters "
                        "to maximize search result visibility."
                    ),
                    score=description_length,
                    details=desc_details,
                ))
            elif description_length > desc_max:
                issues.append(ValidationIssue(
                    severity=config.severity,
                    code="SEO_002",
                    message=desc_message,
                    field="description",
                    suggestion=(
                        f"Trim {description_length - desc_max:g} characters "
                        "to prevent truncation in search results."
                    ),
                    score=description_length,
                    details=desc_details,
                ))

        # SEO_003: primary keyword density
        keywords = get_keywords(frontmatter)
        primary_keyword = keywords[0] if keywords else ""
        keyword_density = 0.0

        if primary_keyword:
            all_text = combine_with_body(extract_readable_text(frontmatter), content.body)
            keyword_density, occurrences, total_words = calculate_keyword_density(
                all_text, primary_keyword
            )
            density_details = {
                "keyword": primary_keyword,
                "occurrences": occurrences,
                "totalWords": total_words,
                "density": keyword_density,
                "targetMin": density_min,
                "targetMax": density_max,
            }
            density_message = (
                f'Primary keyword "{primary_keyword}" density is {keyword_density:.2f}% '
                f"(target: {density_min:g}-{density_max:g}%)"
            )

            if keyword_density < density_min:
                issues.append(ValidationIssue(
                    severity=config.severity,
                    code="SEO_003",
                    message=density_message,
                    field="keywords[0]",
                    suggestion="Use the primary keyword more frequently in headings, description, and content.",
                    score=keyword_density,
                    details=density_details,
                ))
            elif keyword_density > density_max:
                issues.append(ValidationIssue(
                    severity=config.severity,
                    code="SEO_003",
                    message=f"{density_message}, keyword is too dense",
                    field="keywords[0]",
                    suggestion="Reduce keyword usage to avoid appearing spammy. Use synonyms and related terms.",
                    score=keyword_density,
                    details=density_details,
                ))

        # SEO_004: CTA in description (recommendation, never blocking)
        has_cta = contains_cta(description)
        if description and not has_cta:
            issues.append(ValidationIssue(
                severity=Severity.INFO,
                code="SEO_004",
                message="Description does not contain a clear call-to-action",
                field="description",
                suggestion=(
                    'Add a CTA like "Free quotes", "Contact us today", or "24/7 service" '
                    "to improve click-through rate."
                ),
                details={"description": description},
            ))

        # SEO_005: keyword count
        keyword_count = len(keywords)
        count_details = {"currentCount": keyword_count, "targetMin": count_min, "targetMax": count_max}

        if keyword_count < count_min:
            issues.append(ValidationIssue(
                severity=config.severity,
                code="SEO_005",
                message=f"Only {keyword_count} keywords provided (recommended: {count_min:g}-{count_max:g})",
                field="keywords",
                suggestion=f"Add {count_min - keyword_count:g} more relevant keywords for better SEO coverage.",
                score=keyword_count,
                details=count_details,
            ))
        elif keyword_count > count_max:
            # Too many keywords is less critical
            issues.append(ValidationIssue(
                severity=Severity.INFO,
                code="SEO_005",
                message=f"{keyword_count} keywords provided (recommended: {count_min:g}-{count_max:g})",
                field="keywords",
                suggestion=f"Consider trimming to the {count_max:g} most important keywords.",
                score=keyword_count,
                details=count_details,
            ))

        return ValidationResult(
            file=content.file_path,
            type=content.type,
            validator=self.name,
            issues=issues,
            metrics={
                "titleLength": title_length,
                "descriptionLength": description_length,
                "keywordCount": keyword_count,
                "keywordDensity": keyword_density,
                "hasCTA": 1 if has_cta else 0,
            },
            duration=(time.perf_counter() - start) * 1000,
        )
