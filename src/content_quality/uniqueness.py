"""
Content uniqueness and boilerplate detection.

Compares each file against the files already seen in the current run:
- UNIQ_001: 3-gram Jaccard similarity with another file of the same type
  at or above the similarity threshold
- UNIQ_002: phrases repeated across several files (templated boilerplate)

This is the only validator with cross-document state. The state lives in
a UniquenessIndex, which must be reset at the start of every corpus run;
results depend on the order files are recorded in.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .models import ContentType, ParsedContent, Severity, ValidationIssue, ValidationResult, ValidatorConfig
from .text_extraction import combine_with_body, extract_uniqueness_text

logger = logging.getLogger(__name__)

NGRAM_SIZE = 3

# Number of similar files / boilerplate phrases cited in an issue
MAX_REPORTED_SIMILAR = 3
MAX_REPORTED_PHRASES = 5

_NORMALIZE_RE = re.compile(r"[^a-z0-9\s]")

# Phrases too generic to count as boilerplate
GENERIC_PHRASE_PATTERNS = [
    re.compile(r"^(the|a|an|and|or|but|in|on|at|to|for)\s"),
    re.compile(r"\s(the|a|an|and|or|but)\s"),
    re.compile(r"^we (are|have|provide|offer)"),
    re.compile(r"^our (team|service|company)"),
    re.compile(r"^contact us"),
    re.compile(r"^free quote"),
]


def normalize_words(text: str) -> list[str]:
    """Lowercase, replace punctuation with spaces and split into words."""
    return _NORMALIZE_RE.sub(" ", text.lower()).split()


def generate_ngrams(words: list[str], n: int = NGRAM_SIZE) -> set[str]:
    """Build the set of word n-grams for a normalized word list."""
    return {" ".join(words[i:i + n]) for i in range(len(words) - n + 1)}


def jaccard_similarity(set_a: set[str], set_b: set[str]) -> float:
    """
    Calculate Jaccard similarity between two sets.

    Returns:
        Value between 0 (no overlap) and 1 (identical). Two empty sets
        score 0.
    """
    if not set_a and not set_b:
        return 0.0
    intersection = len(set_a & set_b)
    union = len(set_a) + len(set_b) - intersection
    return intersection / union if union > 0 else 0.0


def is_generic_phrase(phrase: str) -> bool:
    """Check if a phrase is too generic to be considered boilerplate."""
    return any(pattern.search(phrase) for pattern in GENERIC_PHRASE_PATTERNS)


def iter_phrases(words: list[str], length: int) -> list[str]:
    """Return the non-generic contiguous phrases of a given word length, in order."""
    phrases: list[str] = []
    if length < 1:
        return phrases
    for i in range(len(words) - length + 1):
        phrase = " ".join(words[i:i + length])
        if not is_generic_phrase(phrase):
            phrases.append(phrase)
    return phrases


@dataclass
class SimilarFile:
    """A previously recorded file that is too similar to the current one."""
    file: str
    file_name: str
    similarity: float  # Percent


@dataclass
class UniquenessFindings:
    """Outcome of recording one file in the index."""
    ngram_count: int
    similar_files: list[SimilarFile] = field(default_factory=list)
    boilerplate_phrases: list[str] = field(default_factory=list)

    @property
    def max_similarity(self) -> float:
        return self.similar_files[0].similarity if self.similar_files else 0.0


@dataclass
class _IndexedFile:
    content_type: ContentType
    words: list[str]
    fingerprint: set[str]


class UniquenessIndex:
    """
    Accumulates fingerprints of the files seen in one corpus run.

    Each call to record_and_compare compares a file against everything
    recorded before it, then keeps it for the files that follow.
    """

    def __init__(self) -> None:
        self._files: dict[str, _IndexedFile] = {}
        # phrase length -> phrase -> ids of files containing it
        self._phrase_files: dict[int, dict[str, set[str]]] = {}

    @property
    def size(self) -> int:
        """Number of files recorded since the last reset."""
        return len(self._files)

    def reset(self) -> None:
        """Forget every recorded file."""
        self._files.clear()
        self._phrase_files.clear()

    def record_and_compare(
        self,
        file_id: str,
        content_type: ContentType,
        text: str,
        similarity_threshold: float = 70,
        boilerplate_min_occurrences: int = 3,
        boilerplate_min_phrase_length: int = 5,
    ) -> UniquenessFindings:
        """
        Record a file and compare it with the files recorded so far.

        Args:
            file_id: Unique file key (its path). Recording the same id
                again replaces the earlier entry.
            content_type: Only files of the same type are compared.
            text: Extracted text of the file.
            similarity_threshold: Similarity percent at or above which a
                recorded file is reported.
            boilerplate_min_occurrences: Minimum number of recorded files
                (current one included) a phrase must appear in.
            boilerplate_min_phrase_length: Phrase length in words.

        Returns:
            UniquenessFindings for the file.
        """
        words = normalize_words(text)
        fingerprint = generate_ngrams(words)

        if file_id in self._files:
            self._unindex_phrases(file_id)
        self._files[file_id] = _IndexedFile(content_type, words, fingerprint)
        for length, index in self._phrase_files.items():
            self._index_phrases(file_id, words, length, index)

        similar_files = []
        for other_id, other in self._files.items():
            if other_id == file_id or other.content_type != content_type:
                continue
            similarity = jaccard_similarity(fingerprint, other.fingerprint) * 100
            if similarity >= similarity_threshold:
                similar_files.append(SimilarFile(
                    file=other_id,
                    file_name=Path(other_id).name,
                    similarity=similarity,
                ))
        similar_files.sort(key=lambda s: s.similarity, reverse=True)

        boilerplate: list[str] = []
        if self.size >= boilerplate_min_occurrences:
            boilerplate = self._find_boilerplate(
                words, int(boilerplate_min_phrase_length), boilerplate_min_occurrences
            )

        return UniquenessFindings(
            ngram_count=len(fingerprint),
            similar_files=similar_files,
            boilerplate_phrases=boilerplate,
        )

    def _find_boilerplate(self, words: list[str], length: int, min_occurrences: float) -> list[str]:
        index = self._phrase_files.get(length)
        if index is None:
            index = {}
            for file_id, indexed in self._files.items():
                self._index_phrases(file_id, indexed.words, length, index)
            self._phrase_files[length] = index

        # Index order is the order phrases were first seen across the corpus
        current = set(iter_phrases(words, length))
        return [
            phrase
            for phrase, files in index.items()
            if len(files) >= min_occurrences and phrase in current
        ]

    @staticmethod
    def _index_phrases(file_id: str, words: list[str], length: int, index: dict[str, set[str]]) -> None:
        for phrase in iter_phrases(words, length):
            index.setdefault(phrase, set()).add(file_id)

    def _unindex_phrases(self, file_id: str) -> None:
        for index in self._phrase_files.values():
            for files in index.values():
                files.discard(file_id)


class UniquenessValidator:
    """Checks content uniqueness using n-gram fingerprinting and Jaccard similarity."""

    name = "uniqueness"
    description = "Checks content uniqueness using n-gram fingerprinting and Jaccard similarity"

    def __init__(self, index: Optional[UniquenessIndex] = None) -> None:
        self.index = index if index is not None else UniquenessIndex()

    def reset(self) -> None:
        """Clear cross-file state before a new corpus run."""
        self.index.reset()

    def validate(self, content: ParsedContent, config: ValidatorConfig) -> ValidationResult:
        start = time.perf_counter()
        issues: list[ValidationIssue] = []

        similarity_threshold = config.threshold("similarityThreshold", 70)
        min_occurrences = config.threshold("boilerplateMinOccurrences", 3)
        min_phrase_length = config.threshold("boilerplateMinPhraseLength", 5)

        full_text = combine_with_body(extract_uniqueness_text(content.frontmatter), content.body)
        findings = self.index.record_and_compare(
            content.file_path,
            content.type,
            full_text,
            similarity_threshold=similarity_threshold,
            boilerplate_min_occurrences=min_occurrences,
            boilerplate_min_phrase_length=min_phrase_length,
        )

        if findings.similar_files:
            top_similar = findings.similar_files[:MAX_REPORTED_SIMILAR]
            logger.debug(
                f"{content.file_name} is {top_similar[0].similarity:.1f}% similar to {top_similar[0].file_name}"
            )
            issues.append(ValidationIssue(
                severity=config.severity,
                code="UNIQ_001",
                message=f"Content is {top_similar[0].similarity:.1f}% similar to {top_similar[0].file_name}",
                suggestion=(
                    "Add more unique content specific to this page. "
                    "Differentiate headings, descriptions, and key points."
                ),
                score=top_similar[0].similarity,
                details={
                    "similarFiles": [
                        {"file": s.file_name, "similarity": s.similarity} for s in top_similar
                    ],
                    "threshold": similarity_threshold,
                },
            ))

        if findings.boilerplate_phrases:
            # Boilerplate is informational
            issues.append(ValidationIssue(
                severity=Severity.INFO,
                code="UNIQ_002",
                message=f"Found {len(findings.boilerplate_phrases)} potential boilerplate phrase(s)",
                suggestion="Consider rephrasing repeated content to improve uniqueness and SEO value.",
                details={
                    "boilerplatePhrases": findings.boilerplate_phrases[:MAX_REPORTED_PHRASES],
                    "totalFound": len(findings.boilerplate_phrases),
                },
            ))

        return ValidationResult(
            file=content.file_path,
            type=content.type,
            validator=self.name,
            issues=issues,
            metrics={
                "ngramCount": findings.ngram_count,
                "similarFilesCount": len(findings.similar_files),
                "maxSimilarity": findings.max_similarity,
            },
            duration=(time.perf_counter() - start) * 1000,
        )
