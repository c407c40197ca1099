"""
FastAPI wrapper for the Content Quality Validator - Vercel Serverless Function.

This module exposes the validators as a REST API so content editors and
preview deployments can check documents without a local checkout.
"""

import threading
from collections import Counter
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from content_quality import __version__
from content_quality.config import ConfigError, get_default_config, merge_config
from content_quality.content_loader import ContentLoadError, parse_content
from content_quality.models import RunnerOptions
from content_quality.registry import get_validator_names, get_validators
from content_quality.runner import validate_contents

app = FastAPI(
    title="Content Quality Validator API",
    description="Readability, SEO and uniqueness checks for MDX content",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class DocumentInput(BaseModel):
    """Single MDX document to validate."""
    path: str = Field(..., description="Content path, e.g. content/locations/leeds.mdx")
    content: str = Field(..., description="Full MDX text including frontmatter")


class ValidateRequest(BaseModel):
    """Request model for a validation run.

    Documents are validated in the order given; uniqueness compares each
    document with the ones before it.
    """
    documents: list[DocumentInput] = Field(..., min_length=1)
    validators: Optional[list[str]] = Field(
        None,
        description="Validator names to run. Omit to run all validators.",
    )
    configs: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Per-validator overrides: enabled, severity, thresholds.",
    )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class ValidatorInfo(BaseModel):
    """A registered validator and its default configuration."""
    name: str
    description: str
    default_config: dict[str, Any]


class ValidatorsResponse(BaseModel):
    """Registered validators."""
    validators: list[ValidatorInfo]


@app.get("/", response_class=HTMLResponse)
async def root():
    """Landing page."""
    return HTMLResponse(
        content="<h1>Content Quality Validator API</h1><p>Visit <a href='/docs'>/docs</a> for API documentation.</p>"
    )


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@app.get("/api/validators", response_model=ValidatorsResponse)
async def list_validators():
    """List registered validators with their default configuration."""
    return ValidatorsResponse(
        validators=[
            ValidatorInfo(
                name=validator.name,
                description=validator.description,
                default_config=get_default_config(validator.name).to_dict(),
            )
            for validator in get_validators()
        ]
    )


# Validation runs share one uniqueness index; serialize them
_validation_lock = threading.Lock()


@app.post("/api/validate")
def validate(request: ValidateRequest):
    """
    Validate a batch of MDX documents.

    Runs in FastAPI's threadpool so large batches do not block the event
    loop. Returns the same {summary, results} shape as the CLI's --json
    output.
    """
    available = get_validator_names()
    requested = request.validators or []
    unknown = [name for name in requested if name not in available]
    if unknown:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown validator(s): {', '.join(unknown)}. Available validators: {', '.join(available)}",
        )

    try:
        for name, override in request.configs.items():
            merge_config(name, override)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))

    path_counts = Counter(doc.path for doc in request.documents)
    duplicates = sorted(path for path, count in path_counts.items() if count > 1)
    if duplicates:
        raise HTTPException(
            status_code=422,
            detail=f"Duplicate document path(s): {', '.join(duplicates)}",
        )

    try:
        contents = [parse_content(doc.content, doc.path) for doc in request.documents]
    except ContentLoadError as e:
        raise HTTPException(status_code=422, detail=str(e))

    options = RunnerOptions(
        validators=requested or None,
        output_format="json",
        configs=request.configs,
    )

    with _validation_lock:
        results = validate_contents(contents, options)
    return results.to_dict()


@app.get("/api/info")
async def api_info():
    """Get API information and usage instructions."""
    return {
        "name": "Content Quality Validator API",
        "version": __version__,
        "description": "Rule-based readability, SEO and uniqueness checks for MDX content",
        "endpoints": {
            "GET /": "Landing page",
            "GET /api/health": "Health check",
            "GET /api/validators": "List validators and their default configuration",
            "POST /api/validate": "Validate a batch of MDX documents",
            "GET /api/info": "This endpoint",
        },
        "documentation": "/docs",
        "openapi": "/openapi.json",
    }
