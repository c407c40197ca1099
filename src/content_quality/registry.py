"""
Validator registry.

Validators conform to the Validator protocol (name, description,
validate). Built-in validators are registered once at import time;
additional validators register through register_validator.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import ParsedContent, ValidationResult, ValidatorConfig
from .readability import ReadabilityValidator
from .seo import SeoValidator
from .uniqueness import UniquenessValidator


@runtime_checkable
class Validator(Protocol):
    """Capability shared by every content validator."""

    name: str
    description: str

    def validate(self, content: ParsedContent, config: ValidatorConfig) -> ValidationResult:
        """Run validation on parsed content."""
        ...


_registry: dict[str, Validator] = {}


def register_validator(validator: Validator) -> Validator:
    """
    Add a validator to the registry under its name.

    Raises:
        ValueError: If another validator already uses the name.
    """
    existing = _registry.get(validator.name)
    if existing is not None and existing is not validator:
        raise ValueError(f"Validator '{validator.name}' is already registered")
    _registry[validator.name] = validator
    return validator


def unregister_validator(name: str) -> None:
    """Remove a validator from the registry, if present."""
    _registry.pop(name, None)


def get_validator(name: str) -> Optional[Validator]:
    """Get a registered validator by name."""
    return _registry.get(name)


def get_validator_names() -> list[str]:
    """Get all registered validator names, in registration order."""
    return list(_registry)


def get_validators() -> list[Validator]:
    """Get all registered validators, in registration order."""
    return list(_registry.values())


def reset_validators() -> None:
    """Clear the cross-file state of every validator that keeps any."""
    for validator in _registry.values():
        reset = getattr(validator, "reset", None)
        if callable(reset):
            reset()


def clear_uniqueness_cache() -> None:
    """Clear the uniqueness validator's fingerprint index."""
    validator = _registry.get(uniqueness_validator.name)
    if isinstance(validator, UniquenessValidator):
        validator.reset()


def get_uniqueness_cache_size() -> int:
    """Number of files recorded in the uniqueness index since the last reset."""
    validator = _registry.get(uniqueness_validator.name)
    if isinstance(validator, UniquenessValidator):
        return validator.index.size
    return 0


readability_validator = register_validator(ReadabilityValidator())
seo_validator = register_validator(SeoValidator())
uniqueness_validator = register_validator(UniquenessValidator())
