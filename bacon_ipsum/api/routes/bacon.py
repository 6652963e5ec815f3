"""Bacon ipsum block endpoints."""

from fastapi import APIRouter, Query

from bacon_ipsum.api.deps import AppSettings, CanEditPosts, CanManageOptions, Generator
from bacon_ipsum.api.schemas import (
    BlockAttribute,
    BlockContentPayload,
    BlockMetadata,
    DeleteResponse,
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    RenderResponse,
)
from bacon_ipsum.core.logging import get_logger
from bacon_ipsum.services.generation import (
    MAX_PARAGRAPHS,
    MIN_PARAGRAPHS,
    GenerationRequest,
    MeatType,
)
from bacon_ipsum.services.rendering import BLOCK_NAME, render_block, to_html

logger = get_logger(__name__)
router = APIRouter(prefix="/bacon-ipsum", tags=["Bacon Ipsum"])

GENERATE_PATH = "/api/v1/bacon-ipsum/generate"


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Generate bacon ipsum paragraphs",
    dependencies=[CanEditPosts],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        403: {"model": ErrorResponse, "description": "Missing edit_posts capability"},
        422: {"model": ErrorResponse, "description": "Invalid parameters"},
        502: {"model": ErrorResponse, "description": "Bacon ipsum API failure"},
    },
)
async def generate(
    request: GenerateRequest,
    generator: Generator,
) -> GenerateResponse:
    """
    Generate placeholder paragraphs.

    - **type**: `all-meat` or `meat-and-filler`
    - **paras**: number of paragraphs, 1-10
    - **start_with_lorem**: start with "Bacon ipsum dolor amet"

    Identical requests are served from a one-hour cache; `cached` tells
    which path was taken.
    """
    result = await generator.generate(request.to_generation_request())

    return GenerateResponse(
        data=result.paragraphs,
        cached=result.cached,
        html=to_html(result.paragraphs),
    )


@router.post(
    "/render",
    response_model=RenderResponse,
    summary="Render saved block markup",
    dependencies=[CanEditPosts],
)
async def render(block: BlockContentPayload) -> RenderResponse:
    """Render the front-end markup for a block's saved content."""
    return RenderResponse(html=render_block(block.to_block()))


@router.get(
    "/block",
    response_model=BlockMetadata,
    summary="Block registration metadata",
)
async def block_metadata(settings: AppSettings) -> BlockMetadata:
    """Attribute schema and defaults the editor registers the block with."""
    return BlockMetadata(
        name=BLOCK_NAME,
        title="Bacon Ipsum",
        description=(
            "Generate meaty lorem ipsum placeholder text from baconipsum.com. "
            "Content is editable after generation."
        ),
        category="text",
        keywords=["lorem", "ipsum", "placeholder", "bacon", "meat", "dummy", "text"],
        attributes={
            "type": BlockAttribute(
                type="string",
                default=MeatType.ALL_MEAT.value,
                enum=[m.value for m in MeatType],
            ),
            "paras": BlockAttribute(
                type="number",
                default=3,
                minimum=MIN_PARAGRAPHS,
                maximum=MAX_PARAGRAPHS,
            ),
            "startWithLorem": BlockAttribute(type="boolean", default=True),
            "content": BlockAttribute(type="string", default=""),
        },
        generate_endpoint=GENERATE_PATH,
        version=settings.app_version,
    )


@router.delete(
    "/cache",
    response_model=DeleteResponse,
    summary="Flush cached generations",
    dependencies=[CanManageOptions],
)
async def flush_cache(generator: Generator) -> DeleteResponse:
    """Remove every cached generation. Saved block content is unaffected."""
    count = await generator.flush_cache()

    return DeleteResponse(
        success=True,
        message=f"Flushed {count} cached generation(s)",
        deleted_count=count,
    )


@router.delete(
    "/cache/entry",
    response_model=DeleteResponse,
    summary="Drop one cached generation",
    dependencies=[CanEditPosts],
    responses={422: {"model": ErrorResponse, "description": "Invalid parameters"}},
)
async def invalidate_entry(
    generator: Generator,
    type: str = Query(..., description="all-meat or meat-and-filler"),
    paras: int = Query(...),
    start_with_lorem: bool = Query(...),
) -> DeleteResponse:
    """Forget the cached paragraphs for one parameter set so the next generate refetches."""
    request = GenerationRequest.from_params(type, paras, start_with_lorem)
    deleted = await generator.invalidate(request)

    return DeleteResponse(
        success=True,
        message="Cache entry removed" if deleted else "No cache entry to remove",
        deleted_count=1 if deleted else 0,
    )
