"""API routes implementation.

Service errors are not caught here; ``ErrorHandlingMiddleware`` turns them
into ``{StatusCode, Message}`` responses.
"""

from fastapi import APIRouter, Request, Response, status

from .schemas import (
    ShortUrlRequest,
    PathRequest,
    ShortUrlResponse,
    ErrorResponse,
)

router = APIRouter()


def _cache_for_reads(request: Request, response: Response) -> None:
    """Mark a read response as publicly cacheable for the configured window."""
    seconds = request.app.state.config.response_cache_seconds
    response.headers["Cache-Control"] = f"public, max-age={seconds}"


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=ShortUrlResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid destination or path"},
        409: {"model": ErrorResponse, "description": "Path already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
        503: {"model": ErrorResponse, "description": "No unique path could be generated"},
    },
    summary="Create short URL",
    description="Create a short URL. A random path is generated when none is given.",
)
async def create_short_url(request: Request, response: Response, body: ShortUrlRequest):
    """Create a short URL."""
    service = request.app.state.service

    short_url = await service.create_short_url(
        destination=body.destination,
        path=body.path,
    )

    response.headers["Location"] = f"/{short_url.path}"
    return ShortUrlResponse.from_entity(short_url)


@router.post(
    "/get-path",
    response_model=ShortUrlResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Path not found"},
    },
    summary="Get short URL by path",
    description="Look up the destination stored for a path.",
)
async def get_by_path(request: Request, response: Response, body: PathRequest):
    """Resolve a path sent in the request body."""
    service = request.app.state.service

    short_url = await service.get_by_path(body.path)

    _cache_for_reads(request, response)
    return ShortUrlResponse.from_entity(short_url)


@router.get(
    "/{path}",
    response_model=ShortUrlResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Path not found"},
    },
    summary="Resolve short URL",
    description="Look up the destination stored for the path in the URL.",
)
async def resolve_path(request: Request, response: Response, path: str):
    """Resolve a path taken from the URL."""
    service = request.app.state.service

    short_url = await service.get_by_path(path)

    _cache_for_reads(request, response)
    return ShortUrlResponse.from_entity(short_url)


@router.delete(
    "/{path}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Path not found"},
    },
    summary="Delete short URL",
)
async def delete_short_url(request: Request, path: str):
    """Delete a short URL."""
    service = request.app.state.service

    await service.delete_short_url(path)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
