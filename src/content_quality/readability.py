"""
Readability analysis module.

Rule-based readability checks:
- Flesch-Kincaid Grade Level (READ_001, target 8-12)
- Flesch Reading Ease (READ_002, target 60-70)
- Average sentence length (READ_003, target 15-20 words)
- Complex word percentage, words with more than 3 syllables (READ_004, target <10%)

Syllables are estimated with a vowel-group heuristic, not a dictionary.
"""

import re
import time
from dataclasses import dataclass

from .models import ParsedContent, ValidationIssue, ValidationResult, ValidatorConfig
from .text_extraction import combine_with_body, extract_readable_text

VOWELS = "aeiouy"

# A word with more syllables than this counts as complex
COMPLEX_WORD_SYLLABLES = 3

_NON_LETTER_RE = re.compile(r"[^a-z]")
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+")
_WORD_STRIP_RE = re.compile(r"[^a-zA-Z\s'-]")
_LETTER_RE = re.compile(r"[a-zA-Z]")


@dataclass
class ReadabilityStats:
    """Readability statistics for a block of text."""
    flesch_reading_ease: float
    flesch_kincaid_grade: float
    avg_sentence_length: float
    complex_word_percent: float
    total_words: int
    total_sentences: int
    total_syllables: int
    complex_word_count: int


def count_syllables(word: str) -> int:
    """
    Estimate the number of syllables in a word.

    Counts vowel groups, then corrects for a silent trailing "e" and for
    "-ious"/"-eous" endings. Any word with letters has at least one syllable.

    Args:
        word: A single word. Non-letters are ignored.

    Returns:
        Syllable estimate, 0 for a word without letters.
    """
    normalized = _NON_LETTER_RE.sub("", word.lower())

    if not normalized:
        return 0
    if len(normalized) <= 2:
        return 1

    syllables = 0
    prev_was_vowel = False
    for char in normalized:
        is_vowel = char in VOWELS
        if is_vowel and not prev_was_vowel:
            syllables += 1
        prev_was_vowel = is_vowel

    # Silent e, except in longer "-le" words like "table"
    if normalized.endswith("e") and syllables > 1:
        if not normalized.endswith("le") or len(normalized) <= 3:
            syllables -= 1

    # "-ious" / "-eous" read as two syllables
    if normalized.endswith(("ious", "eous")):
        syllables += 1

    return max(1, syllables)


def split_into_sentences(text: str) -> list[str]:
    """Split text on sentence-ending punctuation, dropping fragments without letters."""
    sentences = (s.strip() for s in _SENTENCE_BREAK_RE.split(text))
    return [s for s in sentences if s and _LETTER_RE.search(s)]


def split_into_words(text: str) -> list[str]:
    """Split text into words, keeping apostrophes and hyphens inside words."""
    cleaned = _WORD_STRIP_RE.sub(" ", text)
    return [w for w in cleaned.split() if _LETTER_RE.search(w)]


def flesch_reading_ease(total_words: int, total_sentences: int, total_syllables: int) -> float:
    """
    Calculate the Flesch Reading Ease score, clamped to 0-100.

    206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
    """
    if total_words == 0 or total_sentences == 0:
        return 0.0

    avg_sentence_length = total_words / total_sentences
    avg_syllables_per_word = total_syllables / total_words
    score = 206.835 - 1.015 * avg_sentence_length - 84.6 * avg_syllables_per_word

    return max(0.0, min(100.0, score))


def flesch_kincaid_grade(total_words: int, total_sentences: int, total_syllables: int) -> float:
    """
    Calculate the Flesch-Kincaid Grade Level, clamped to 0-20.

    0.39 * (words / sentences) + 11.8 * (syllables / words) - 15.59
    """
    if total_words == 0 or total_sentences == 0:
        return 0.0

    avg_sentence_length = total_words / total_sentences
    avg_syllables_per_word = total_syllables / total_words
    grade = 0.39 * avg_sentence_length + 11.8 * avg_syllables_per_word - 15.59

    return max(0.0, min(20.0, grade))


def analyze_readability(text: str) -> ReadabilityStats:
    """
    Compute readability statistics for text.

    Text without any sentence still counts as one sentence so the
    averages stay defined; word and syllable counts are as measured.
    """
    words = split_into_words(text)
    total_sentences = max(1, len(split_into_sentences(text)))

    total_syllables = 0
    complex_word_count = 0
    for word in words:
        syllables = count_syllables(word)
        total_syllables += syllables
        if syllables > COMPLEX_WORD_SYLLABLES:
            complex_word_count += 1

    total_words = len(words)
    complex_word_percent = (complex_word_count / total_words) * 100 if total_words else 0.0

    return ReadabilityStats(
        flesch_reading_ease=flesch_reading_ease(total_words, total_sentences, total_syllables),
        flesch_kincaid_grade=flesch_kincaid_grade(total_words, total_sentences, total_syllables),
        avg_sentence_length=total_words / total_sentences,
        complex_word_percent=complex_word_percent,
        total_words=total_words,
        total_sentences=total_sentences,
        total_syllables=total_syllables,
        complex_word_count=complex_word_count,
    )


class ReadabilityValidator:
    """Checks Flesch-Kincaid metrics, sentence length and complex words."""

    name = "readability"
    description = (
        "Checks content readability using Flesch-Kincaid metrics, "
        "sentence length, and complex word analysis"
    )

    def validate(self, content: ParsedContent, config: ValidatorConfig) -> ValidationResult:
        start = time.perf_counter()
        issues: list[ValidationIssue] = []

        ease_min = config.threshold("fleschReadingEaseMin", 60)
        ease_max = config.threshold("fleschReadingEaseMax", 70)
        grade_min = config.threshold("fleschKincaidGradeMin", 8)
        grade_max = config.threshold("fleschKincaidGradeMax", 12)
        length_min = config.threshold("avgSentenceLengthMin", 15)
        length_max = config.threshold("avgSentenceLengthMax", 20)
        complex_max = config.threshold("complexWordPercentMax", 10)

        full_text = combine_with_body(extract_readable_text(content.frontmatter), content.body)
        stats = analyze_readability(full_text)

        grade = stats.flesch_kincaid_grade
        if grade < grade_min or grade > grade_max:
            issues.append(ValidationIssue(
                severity=config.severity,
                code="READ_001",
                message=f"Flesch-Kincaid Grade Level is {grade:.1f} (target: {grade_min:g}-{grade_max:g})",
                suggestion=(
                    "Content may be too simple. Consider adding more detailed technical information."
                    if grade < grade_min
                    else "Content may be too complex. Consider using simpler words and shorter sentences."
                ),
                score=grade,
                details={"gradeLevel": grade, "targetMin": grade_min, "targetMax": grade_max},
            ))

        ease = stats.flesch_reading_ease
        if ease < ease_min or ease > ease_max:
            issues.append(ValidationIssue(
                severity=config.severity,
                code="READ_002",
                message=f"Flesch Reading Ease score is {ease:.1f} (target: {ease_min:g}-{ease_max:g})",
                suggestion=(
                    "Content is difficult to read. Simplify sentence structure and word choice."
                    if ease < ease_min
                    else "Content might be oversimplified. Consider adding more substance."
                ),
                score=ease,
                details={"readingEase": ease, "targetMin": ease_min, "targetMax": ease_max},
            ))

        avg_length = stats.avg_sentence_length
        if avg_length < length_min or avg_length > length_max:
            issues.append(ValidationIssue(
                severity=config.severity,
                code="READ_003",
                message=(
                    f"Average sentence length is {avg_length:.1f} words "
                    f"(target: {length_min:g}-{length_max:g})"
                ),
                suggestion=(
                    "Sentences are too short. Consider combining related ideas."
                    if avg_length < length_min
                    else "Sentences are too long. Break complex sentences into shorter ones."
                ),
                score=avg_length,
                details={
                    "avgLength": avg_length,
                    "targetMin": length_min,
                    "targetMax": length_max,
                    "totalSentences": stats.total_sentences,
                    "totalWords": stats.total_words,
                },
            ))

        complex_percent = stats.complex_word_percent
        if complex_percent > complex_max:
            issues.append(ValidationIssue(
                severity=config.severity,
                code="READ_004",
                message=f"Complex word percentage is {complex_percent:.1f}% (target: <{complex_max:g}%)",
                suggestion="Too many complex words (>3 syllables). Replace some with simpler alternatives.",
                score=complex_percent,
                details={
                    "complexPercent": complex_percent,
                    "complexWordCount": stats.complex_word_count,
                    "totalWords": stats.total_words,
                    "targetMax": complex_max,
                },
            ))

        return ValidationResult(
            file=content.file_path,
            type=content.type,
            validator=self.name,
            issues=issues,
            metrics={
                "fleschReadingEase": stats.flesch_reading_ease,
                "fleschKincaidGrade": stats.flesch_kincaid_grade,
                "avgSentenceLength": stats.avg_sentence_length,
                "complexWordPercent": stats.complex_word_percent,
                "totalWords": stats.total_words,
                "totalSentences": stats.total_sentences,
                "totalSyllables": stats.total_syllables,
            },
            duration=(time.perf_counter() - start) * 1000,
        )
