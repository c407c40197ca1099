"""
Validation runner.

Orchestrates the registered validators over a content corpus:

1. Discover MDX files (content/services, then content/locations) or a
   single explicit file
2. Reset cross-file validator state once for the run
3. Parse and validate each file in discovery order
4. Fold the per-file results into AggregatedResults

Files are processed strictly in order because the uniqueness validator
compares each file against the ones validated before it.
"""

import logging
import time
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from .config import merge_config
from .content_loader import discover_content_files, parse_content_file
from .models import (
    AggregatedResults,
    ParsedContent,
    RunnerOptions,
    Severity,
    ValidationResult,
)
from .registry import get_validator, get_validator_names, reset_validators

logger = logging.getLogger(__name__)


def run_validator(
    content: ParsedContent,
    validator_name: str,
    config: Optional[Mapping[str, Any]] = None,
) -> Optional[ValidationResult]:
    """
    Run a single validator on parsed content.

    Args:
        content: Parsed content file.
        validator_name: Registered validator name.
        config: Partial config override merged over the validator defaults.

    Returns:
        The validation result, or None if the validator is unknown or
        disabled.
    """
    validator = get_validator(validator_name)
    if validator is None:
        logger.warning(f'Validator "{validator_name}" not found')
        return None

    merged = merge_config(validator_name, config)
    if not merged.enabled:
        logger.debug(f"Validator {validator_name} disabled, skipping {content.file_name}")
        return None

    return validator.validate(content, merged)


def validate_content(
    content: ParsedContent,
    options: Optional[RunnerOptions] = None,
) -> list[ValidationResult]:
    """Run the requested validators (or all of them) on parsed content."""
    options = options or RunnerOptions()
    names = options.validators or get_validator_names()

    results = []
    for name in names:
        result = run_validator(content, name, options.configs.get(name))
        if result is not None:
            results.append(result)
    return results


def validate_file(
    file_path: Union[str, Path],
    options: Optional[RunnerOptions] = None,
) -> list[ValidationResult]:
    """
    Parse one content file and run validators on it.

    Raises:
        ContentLoadError: If the file cannot be read or parsed.
    """
    content = parse_content_file(file_path)
    return validate_content(content, options)


class ResultAggregator:
    """Tallies per-file results into run totals."""

    def __init__(self) -> None:
        self.results = AggregatedResults()

    def add(self, file_path: str, file_results: list[ValidationResult]) -> None:
        totals = self.results
        totals.results[file_path] = file_results
        totals.total_files += 1

        has_error = False
        has_warning = False
        for result in file_results:
            for issue in result.issues:
                if issue.severity == Severity.ERROR:
                    totals.total_errors += 1
                    has_error = True
                elif issue.severity == Severity.WARNING:
                    totals.total_warnings += 1
                    has_warning = True
                else:
                    totals.total_info += 1

        # A file lands in exactly one bucket: error > warning > passed
        if has_error:
            totals.error_files += 1
        elif has_warning:
            totals.warning_files += 1
        else:
            totals.passed_files += 1


def run_validators(
    content_dir: Union[str, Path],
    options: Optional[RunnerOptions] = None,
) -> AggregatedResults:
    """
    Run validators on every content file.

    Args:
        content_dir: Directory holding services/ and locations/. Missing
            subdirectories contribute no files.
        options: Run options (validator subset, single file, overrides).

    Returns:
        AggregatedResults for the run. Duration is wall-clock milliseconds.

    Raises:
        ContentLoadError: If an explicit file is missing or any file
            cannot be parsed.
    """
    start = time.perf_counter()
    options = options or RunnerOptions()

    files = discover_content_files(content_dir, options.file)
    logger.info(f"Validating {len(files)} content file(s) from {content_dir}")

    # Fresh cross-file comparison for every run
    reset_validators()

    aggregator = ResultAggregator()
    for file_path in files:
        file_start = time.perf_counter()
        aggregator.add(file_path, validate_file(file_path, options))
        logger.debug(f"Validated {file_path} in {(time.perf_counter() - file_start) * 1000:.1f}ms")

    return _finish(aggregator, start)


def validate_contents(
    contents: Iterable[ParsedContent],
    options: Optional[RunnerOptions] = None,
) -> AggregatedResults:
    """
    Run validators on already-parsed documents, in the given order.

    Same semantics as run_validators, without filesystem discovery.
    """
    start = time.perf_counter()
    options = options or RunnerOptions()

    reset_validators()

    aggregator = ResultAggregator()
    for content in contents:
        aggregator.add(content.file_path, validate_content(content, options))

    return _finish(aggregator, start)


def _finish(aggregator: ResultAggregator, start: float) -> AggregatedResults:
    results = aggregator.results
    results.duration = (time.perf_counter() - start) * 1000
    logger.info(
        f"Validation finished: {results.total_files} files, "
        f"{results.total_errors} errors, {results.total_warnings} warnings, "
        f"{results.total_info} info ({results.duration:.0f}ms)"
    )
    return results
