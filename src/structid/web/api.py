"""
FastAPI application exposing structid over HTTP.

Endpoints:
- GET  /          service banner
- GET  /health    liveness probe
- POST /generate  one or more identifiers (always from the cryptographic source)
- POST /validate  boolean verdict, never an error for bad identifiers
- POST /format    grouped display form
- POST /normalize separators and foreign characters stripped
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field, ValidationError

from .. import __version__
from ..charset import Charset
from ..checksums import Algorithm
from ..config import FormatOptions, GenerateOptions, ValidateOptions
from ..engine import format_id, generate_id, normalize_id_for_charset, validate_id
from ..errors import StructIdError

logger = logging.getLogger(__name__)

MAX_BATCH = 100


# Pydantic models for API requests/responses
class ShapeRequest(BaseModel):
    """Shape options shared by generation and validation."""
    groups: Optional[int] = None
    group_size: Optional[int] = None
    total_length: Optional[int] = None
    charset: Optional[Charset] = None
    algorithm: Optional[Algorithm] = None
    pattern: Optional[str] = None

    def options(self) -> dict:
        """Only the shape fields that were actually sent."""
        return self.model_dump(include=set(ShapeRequest.model_fields), exclude_none=True)


class GenerateRequest(ShapeRequest):
    separator: Optional[str] = None
    count: int = Field(default=1, ge=1, le=MAX_BATCH)


class GenerateResponse(BaseModel):
    ids: List[str]


class ValidateRequest(ShapeRequest):
    id: str


class ValidateResponse(BaseModel):
    valid: bool


class FormatRequest(BaseModel):
    id: str
    groups: Optional[int] = None
    group_size: Optional[int] = None
    separator: Optional[str] = None
    charset: Optional[Charset] = None


class NormalizeRequest(BaseModel):
    id: str
    charset: Charset = "numeric"


class IdResponse(BaseModel):
    id: str


# FastAPI app configuration
app = FastAPI(
    title="structid API",
    description="Generate and validate short structured identifiers",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


def _bad_request(err: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err))


@app.get("/")
async def root():
    return {"message": "structid API", "version": __version__}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "structid-api"}


@app.post("/generate", response_model=GenerateResponse)
async def generate(request: GenerateRequest) -> GenerateResponse:
    """Generate ``count`` identifiers with the cryptographic random source."""
    data = request.options()
    if request.separator is not None:
        data["separator"] = request.separator
    try:
        opts = GenerateOptions(use_crypto=True, **data)
        ids = [generate_id(opts) for _ in range(request.count)]
    except (StructIdError, ValidationError) as e:
        logger.info("Rejected generate request: %s", e)
        raise _bad_request(e)
    return GenerateResponse(ids=ids)


@app.post("/validate", response_model=ValidateResponse)
async def validate(request: ValidateRequest) -> ValidateResponse:
    try:
        opts = ValidateOptions(**request.options())
    except ValidationError as e:
        raise _bad_request(e)
    return ValidateResponse(valid=validate_id(request.id, opts))


@app.post("/format", response_model=IdResponse)
async def format_identifier(request: FormatRequest) -> IdResponse:
    data = request.model_dump(exclude_none=True, exclude={"id"})
    try:
        return IdResponse(id=format_id(request.id, FormatOptions(**data)))
    except (StructIdError, ValidationError) as e:
        raise _bad_request(e)


@app.post("/normalize", response_model=IdResponse)
async def normalize(request: NormalizeRequest) -> IdResponse:
    return IdResponse(id=normalize_id_for_charset(request.id, request.charset))
