"""Tests for the validator registry and validation runner."""

from pathlib import Path

import pytest

from content_quality.content_loader import ContentLoadError, parse_content
from content_quality.models import (
    ParsedContent,
    RunnerOptions,
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidatorConfig,
)
from content_quality.registry import (
    Validator,
    get_validator,
    get_validator_names,
    get_validators,
    register_validator,
    unregister_validator,
)
from content_quality.runner import (
    ResultAggregator,
    run_validator,
    run_validators,
    validate_content,
    validate_contents,
    validate_file,
)


class AlwaysFailsValidator:
    """Test validator that raises one error per file."""

    name = "always-fails"
    description = "Raises an error for every file"

    def validate(self, content: ParsedContent, config: ValidatorConfig) -> ValidationResult:
        return ValidationResult(
            file=content.file_path,
            type=content.type,
            validator=self.name,
            issues=[ValidationIssue(severity=Severity.ERROR, code="TEST_001", message="Always fails")],
        )


@pytest.fixture
def failing_validator():
    validator = register_validator(AlwaysFailsValidator())
    yield validator
    unregister_validator(validator.name)


def strip_durations(data: dict) -> dict:
    """Drop timing fields so two runs can be compared."""
    data["summary"].pop("duration")
    for file_results in data["results"].values():
        for result in file_results:
            result.pop("duration")
    return data


@pytest.fixture
def mixed_corpus(write_mdx, service_frontmatter):
    """Two services and two locations with a mix of issues."""
    write_mdx("services", "scaffold-hire.mdx", service_frontmatter, "Scaffolding keeps crews safe at height.")
    write_mdx("services", "roofing.mdx", {"title": "Roofing", "keywords": ["roofing"]}, "Short.")
    write_mdx("locations", "leeds.mdx", {"title": "Scaffolding in Leeds", "description": "Scaffolding in Leeds."})
    write_mdx("locations", "york.mdx", {"title": "Scaffolding in York"}, "Temporary roofs and access towers.")


class TestRegistry:
    """Tests for validator registration and lookup."""

    def test_builtin_validators(self):
        """Built-in validators are registered in order."""
        assert get_validator_names() == ["readability", "seo", "uniqueness"]
        assert all(isinstance(v, Validator) for v in get_validators())

    def test_unknown_validator(self):
        """Unknown names return None."""
        assert get_validator("spelling") is None

    def test_register_and_unregister(self, failing_validator):
        """Custom validators join the registry by name."""
        assert get_validator("always-fails") is failing_validator
        assert get_validator_names()[-1] == "always-fails"

    def test_duplicate_name_rejected(self):
        """A second validator cannot take an existing name."""
        class Impostor(AlwaysFailsValidator):
            name = "seo"

        with pytest.raises(ValueError, match="already registered"):
            register_validator(Impostor())


class TestRunValidator:
    """Tests for running one validator."""

    def test_unknown_returns_none(self, caplog):
        """An unknown validator is skipped with a warning."""
        content = parse_content("Body", "content/services/a.mdx")
        assert run_validator(content, "spelling") is None
        assert 'Validator "spelling" not found' in caplog.text

    def test_disabled_returns_none(self):
        """A disabled validator is a silent no-op."""
        content = parse_content("Body", "content/services/a.mdx")
        assert run_validator(content, "seo", {"enabled": False}) is None

    def test_threshold_override_merged(self):
        """Overriding one threshold keeps the others."""
        short_title = parse_content("---\nseoTitle: Scaffold hire in Leeds\n---\n", "content/services/a.mdx")
        long_title = parse_content(f"---\nseoTitle: {'x' * 70}\n---\n", "content/services/b.mdx")
        override = {"thresholds": {"titleLengthMin": 10}}

        short_codes = [i.code for i in run_validator(short_title, "seo", override).issues]
        long_codes = [i.code for i in run_validator(long_title, "seo", override).issues]

        assert "SEO_001" not in short_codes
        assert "SEO_001" in long_codes

    def test_severity_override(self):
        """The configured severity applies to the validator's issues."""
        content = parse_content("---\nseoTitle: Short\n---\n", "content/services/a.mdx")
        result = run_validator(content, "seo", {"severity": "error"})

        title_issue = next(i for i in result.issues if i.code == "SEO_001")
        assert title_issue.severity == Severity.ERROR
        assert not result.passed


class TestValidateContent:
    """Tests for validating one file."""

    def test_runs_all_validators_in_order(self):
        """Without a subset, every validator runs in registry order."""
        content = parse_content("Body text.", "content/services/a.mdx")
        results = validate_content(content)
        assert [r.validator for r in results] == ["readability", "seo", "uniqueness"]

    def test_runs_requested_subset(self):
        """Only requested validators run."""
        content = parse_content("Body text.", "content/services/a.mdx")
        results = validate_content(content, RunnerOptions(validators=["seo"]))
        assert [r.validator for r in results] == ["seo"]

    def test_disabled_validator_omitted(self):
        """Disabled validators contribute no result."""
        content = parse_content("Body text.", "content/services/a.mdx")
        options = RunnerOptions(configs={"readability": {"enabled": False}})
        assert [r.validator for r in validate_content(content, options)] == ["seo", "uniqueness"]

    def test_validate_file(self, write_mdx):
        """validate_file parses and validates a file on disk."""
        path = write_mdx("services", "a.mdx", {"title": "Hire"}, "Body text.")
        results = validate_file(path, RunnerOptions(validators=["readability"]))
        assert results[0].file == str(path)


class TestResultAggregator:
    """Tests for run totals."""

    def test_file_buckets(self):
        """Each file lands in exactly one bucket: error, warning or passed."""
        def result(*severities):
            return ValidationResult(
                file="f",
                type=parse_content("", "content/services/f.mdx").type,
                validator="v",
                issues=[ValidationIssue(severity=s, code="X", message="x") for s in severities],
            )

        aggregator = ResultAggregator()
        aggregator.add("error.mdx", [result(Severity.ERROR, Severity.WARNING), result(Severity.INFO)])
        aggregator.add("warning.mdx", [result(Severity.WARNING), result(Severity.INFO)])
        aggregator.add("info.mdx", [result(Severity.INFO)])
        aggregator.add("clean.mdx", [result()])
        totals = aggregator.results

        assert totals.total_files == 4
        assert totals.error_files == 1
        assert totals.warning_files == 1
        assert totals.passed_files == 2
        assert (totals.total_errors, totals.total_warnings, totals.total_info) == (1, 2, 3)
        assert not totals.passed


class TestRunValidators:
    """Tests for whole-corpus runs."""

    def test_partition_invariant(self, content_dir: Path, mixed_corpus):
        """passed + warning + error files always equals total files."""
        results = run_validators(content_dir)

        assert results.total_files == 4
        assert results.passed_files + results.warning_files + results.error_files == results.total_files
        for file_results in results.results.values():
            has_error = any(i.severity == Severity.ERROR for r in file_results for i in r.issues)
            assert all(r.passed for r in file_results) is not has_error

    def test_warnings_do_not_fail_run(self, content_dir: Path, mixed_corpus):
        """With default warning severity the run passes."""
        results = run_validators(content_dir)
        assert results.total_warnings > 0
        assert results.total_errors == 0
        assert results.passed

    def test_errors_fail_run(self, content_dir: Path, mixed_corpus):
        """Error severity issues fail the run."""
        options = RunnerOptions(configs={"seo": {"severity": "error"}})
        results = run_validators(content_dir, options)
        assert results.total_errors > 0
        assert results.error_files > 0
        assert not results.passed

    def test_deterministic(self, content_dir: Path, mixed_corpus):
        """Two runs over the same files give identical results apart from timing."""
        first = strip_durations(run_validators(content_dir).to_dict())
        second = strip_durations(run_validators(content_dir).to_dict())
        assert first == second

    def test_discovery_order(self, content_dir: Path, mixed_corpus):
        """Services are validated before locations."""
        results = run_validators(content_dir)
        names = [Path(p).name for p in results.results]
        assert names == ["roofing.mdx", "scaffold-hire.mdx", "leeds.mdx", "york.mdx"]

    def test_missing_content_directory(self, tmp_path: Path):
        """A missing content directory is an empty, passing run."""
        results = run_validators(tmp_path / "missing")
        assert results.total_files == 0
        assert results.passed
        assert results.results == {}

    def test_single_file(self, content_dir: Path, mixed_corpus):
        """--file restricts the run to one file."""
        target = content_dir / "locations" / "york.mdx"
        results = run_validators(content_dir, RunnerOptions(file=str(target)))
        assert list(results.results) == [str(target)]

    def test_missing_single_file(self, content_dir: Path):
        """A missing explicit file fails before any validator runs."""
        with pytest.raises(ContentLoadError, match="File not found"):
            run_validators(content_dir, RunnerOptions(file="missing.mdx"))

    def test_malformed_frontmatter_propagates(self, content_dir: Path, mixed_corpus):
        """A file with broken frontmatter fails the whole run."""
        (content_dir / "locations" / "broken.mdx").write_text("---\ntitle: [unclosed\n---\nBody")
        with pytest.raises(ContentLoadError, match="Malformed frontmatter"):
            run_validators(content_dir)

    def test_custom_validator_error(self, content_dir: Path, mixed_corpus, failing_validator):
        """Registered validators take part in runs."""
        results = run_validators(content_dir, RunnerOptions(validators=["always-fails"]))
        assert results.total_errors == 4
        assert results.error_files == 4
        assert not results.passed


class TestValidateContents:
    """Tests for in-memory batches."""

    def test_order_preserved(self):
        """Documents are validated and reported in the given order."""
        docs = [
            parse_content("Body one.", "content/locations/z.mdx"),
            parse_content("Body two.", "content/locations/a.mdx"),
        ]
        results = validate_contents(docs, RunnerOptions(validators=["readability"]))
        assert list(results.results) == ["content/locations/z.mdx", "content/locations/a.mdx"]
        assert results.duration >= 0

    def test_duplicate_detected_in_batch(self):
        """Uniqueness compares later documents with earlier ones."""
        text = "---\nabout:\n  whatIs: " + " ".join(f"word{i}" for i in range(60)) + "\n---\n"
        docs = [
            parse_content(text, "content/locations/a.mdx"),
            parse_content(text, "content/locations/b.mdx"),
        ]
        results = validate_contents(docs, RunnerOptions(validators=["uniqueness"]))
        second = results.results["content/locations/b.mdx"][0]
        assert [i.code for i in second.issues] == ["UNIQ_001"]
