"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bacon_ipsum.services.generation import (
    MAX_PARAGRAPHS,
    MIN_PARAGRAPHS,
    GenerationRequest,
    MeatType,
)
from bacon_ipsum.services.rendering import BlockContent


# ============================================================
# Generation Schemas
# ============================================================

class GenerateRequest(BaseModel):
    """Schema for a generation request.

    Strict types: ``"3"`` is not a paragraph count and ``1`` is not a boolean.
    """

    model_config = ConfigDict(strict=True)

    type: MeatType = Field(default=MeatType.ALL_MEAT, strict=False)
    paras: int = Field(default=3, ge=MIN_PARAGRAPHS, le=MAX_PARAGRAPHS)
    start_with_lorem: bool = True

    def to_generation_request(self) -> GenerationRequest:
        return GenerationRequest.from_params(self.type.value, self.paras, self.start_with_lorem)


class GenerateResponse(BaseModel):
    """Schema for generated paragraphs."""

    success: bool = True
    data: list[str]
    cached: bool
    html: str = Field(description="Paragraphs wrapped in <p> elements")


class BlockContentPayload(BaseModel):
    """Schema for the saved attributes of one block."""

    model_config = ConfigDict(strict=True)

    type: MeatType = Field(default=MeatType.ALL_MEAT, strict=False)
    paras: int = Field(default=3, ge=MIN_PARAGRAPHS, le=MAX_PARAGRAPHS)
    start_with_lorem: bool = True
    content_html: str = Field(default="", max_length=100_000)

    def to_block(self) -> BlockContent:
        return BlockContent(
            type=self.type,
            paras=self.paras,
            start_with_lorem=self.start_with_lorem,
            content_html=self.content_html,
        )


class RenderResponse(BaseModel):
    """Schema for rendered block markup."""

    html: str


# ============================================================
# Block Metadata Schemas
# ============================================================

class BlockAttribute(BaseModel):
    """Schema for one block attribute definition."""

    type: str
    default: Any = None
    enum: list[str] | None = None
    minimum: int | None = None
    maximum: int | None = None


class BlockMetadata(BaseModel):
    """Schema for block registration metadata consumed by the editor."""

    name: str
    title: str
    description: str
    category: str
    keywords: list[str]
    attributes: dict[str, BlockAttribute]
    generate_endpoint: str
    version: str


# ============================================================
# Common Response Schemas
# ============================================================

class DeleteResponse(BaseModel):
    """Schema for delete operation response."""

    success: bool = True
    message: str
    deleted_count: int | None = None


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    error: dict[str, Any] = Field(
        ...,
        json_schema_extra={"example": {"message": "Error description", "details": {}}},
    )


# ============================================================
# Health Check Schemas
# ============================================================

class ServiceHealth(BaseModel):
    """Schema for individual service health."""

    status: str = Field(..., pattern=r"^(healthy|unhealthy|degraded)$")
    latency_ms: float | None = None
    details: dict[str, Any] | None = None


class HealthResponse(BaseModel):
    """Schema for health check response."""

    status: str = Field(..., pattern=r"^(healthy|unhealthy|degraded)$")
    timestamp: datetime
    version: str
    services: dict[str, ServiceHealth]
