"""
Content Quality Validator

Rule-based quality checks for MDX marketing content:
- Readability (Flesch-Kincaid grade, reading ease, sentence length, complex words)
- SEO (title/description length, keyword density, keyword count, CTA presence)
- Uniqueness (n-gram similarity across pages, repeated boilerplate phrases)
"""

__version__ = "1.0.0"
__author__ = "Content Quality Validator Team"

from .config import (
    ConfigError,
    DEFAULT_CONFIGS,
    get_default_config,
    load_config_file,
    merge_config,
)

from .models import (
    AggregatedResults,
    ContentType,
    ParsedContent,
    RunnerOptions,
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidatorConfig,
)

from .content_loader import (
    ContentLoadError,
    discover_content_files,
    get_mdx_files,
    parse_content,
    parse_content_file,
)

from .text_extraction import (
    extract_readable_text,
    extract_uniqueness_text,
)

# Validators
from .readability import (
    ReadabilityValidator,
    analyze_readability,
    count_syllables,
)

from .seo import (
    SeoValidator,
    calculate_keyword_density,
    contains_cta,
)

from .uniqueness import (
    UniquenessIndex,
    UniquenessValidator,
    jaccard_similarity,
)

from .registry import (
    Validator,
    clear_uniqueness_cache,
    get_uniqueness_cache_size,
    get_validator,
    get_validator_names,
    get_validators,
    register_validator,
    reset_validators,
    unregister_validator,
)

from .runner import (
    run_validator,
    run_validators,
    validate_content,
    validate_contents,
    validate_file,
)

__all__ = [
    # Configuration
    "ConfigError",
    "DEFAULT_CONFIGS",
    "get_default_config",
    "load_config_file",
    "merge_config",
    # Models
    "AggregatedResults",
    "ContentType",
    "ParsedContent",
    "RunnerOptions",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "ValidatorConfig",
    # Content loading
    "ContentLoadError",
    "discover_content_files",
    "get_mdx_files",
    "parse_content",
    "parse_content_file",
    "extract_readable_text",
    "extract_uniqueness_text",
    # Validators
    "ReadabilityValidator",
    "analyze_readability",
    "count_syllables",
    "SeoValidator",
    "calculate_keyword_density",
    "contains_cta",
    "UniquenessIndex",
    "UniquenessValidator",
    "jaccard_similarity",
    # Registry
    "Validator",
    "clear_uniqueness_cache",
    "get_uniqueness_cache_size",
    "get_validator",
    "get_validator_names",
    "get_validators",
    "register_validator",
    "reset_validators",
    "unregister_validator",
    # Runner
    "run_validator",
    "run_validators",
    "validate_content",
    "validate_contents",
    "validate_file",
]
