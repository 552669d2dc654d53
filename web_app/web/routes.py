"""Web interface routes implementation.

Every page talks to the API through ``request.app.state.api_client``; form
actions redirect back to the home view with a flash message.
"""

import os
from typing import Optional

from fastapi import APIRouter, Request, Form, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from shortener.common.links import build_short_url, resolve_base_url, resolve_path_prefix
from shortener.common.validators import is_valid_path
from .api_client import APIClientError, UNEXPECTED_ERROR_MESSAGE
from .flash import set_flash, read_flash, clear_flash

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)

NOT_FOUND_MESSAGE = "URL not found."


def _path_prefix_from_request(request: Request) -> str:
    return resolve_path_prefix(request.headers, request.app.state.config.path_prefix)


def _short_url_for(request: Request, path: str) -> str:
    base_url = resolve_base_url(
        headers=request.headers,
        fallback_base_url=request.app.state.config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return build_short_url(path, base_url, _path_prefix_from_request(request))


def _redirect_home(
    request: Request,
    info: Optional[str] = None,
    error: Optional[str] = None,
) -> RedirectResponse:
    response = RedirectResponse(
        url=f"{_path_prefix_from_request(request)}/",
        status_code=status.HTTP_303_SEE_OTHER,
    )
    set_flash(response, info=info, error=error)
    return response


def _error_message(e: APIClientError) -> str:
    return NOT_FOUND_MESSAGE if e.not_found else e.message


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the homepage with any message left by the previous action."""
    messages = read_flash(request)
    response = templates.TemplateResponse(
        request,
        "index.html",
        {
            "prefix": _path_prefix_from_request(request),
            "info_message": messages.get("InfoMessage"),
            "error_message": messages.get("ErrorMessage"),
        },
    )
    clear_flash(request, response)
    return response


@router.post("/shorturl/create", include_in_schema=False)
async def create_short_url_web(
    request: Request,
    destination: str = Form("", alias="Destination"),
    path: Optional[str] = Form(None, alias="Path"),
):
    """Handle form submission to create short URL."""
    api_client = request.app.state.api_client
    config = request.app.state.config

    destination = destination.strip()
    if not destination:
        return _redirect_home(request, error="You must complete the destination URL.")

    # Empty path means "generate one"
    path = path.strip() if path and path.strip() else None
    if path:
        is_valid, error = is_valid_path(path, max_length=config.max_path_length)
        if not is_valid:
            return _redirect_home(request, error=error)

    try:
        created = await api_client.create(destination=destination, path=path)
    except APIClientError as e:
        return _redirect_home(request, error=e.message)

    short_url = _short_url_for(request, created["Path"])
    return _redirect_home(request, info=f"URL have been shortened correctly: {short_url}")


@router.post("/shorturl/details", include_in_schema=False)
async def short_url_details_web(
    request: Request,
    path: Optional[str] = Form(None, alias="Path"),
):
    """Show where a path points."""
    api_client = request.app.state.api_client

    if not path or not path.strip():
        return _redirect_home(request, error="You must complete URL path.")

    try:
        found = await api_client.get_by_path(path.strip())
    except APIClientError as e:
        return _redirect_home(request, error=_error_message(e))

    short_url = _short_url_for(request, found["Path"])
    return _redirect_home(request, info=f"{short_url} redirects to {found['Destination']}")


@router.post("/shorturl/delete", include_in_schema=False)
async def delete_short_url_web(
    request: Request,
    path: Optional[str] = Form(None, alias="Path"),
):
    """Look the path up, then delete it."""
    api_client = request.app.state.api_client

    if not path or not path.strip():
        return _redirect_home(request, error="You must complete URL path.")

    try:
        found = await api_client.get_by_path(path.strip())
        await api_client.delete(found["Path"])
    except APIClientError as e:
        return _redirect_home(request, error=_error_message(e))

    return _redirect_home(request, info="URL have been deleted correctly.")


@router.get("/{path}", include_in_schema=False)
async def redirect_to_url(request: Request, path: str):
    """Redirect to the destination, or show an error page."""
    api_client = request.app.state.api_client

    try:
        found = await api_client.resolve(path)
    except APIClientError as e:
        status_code = status.HTTP_404_NOT_FOUND if e.not_found else status.HTTP_502_BAD_GATEWAY
        message = NOT_FOUND_MESSAGE if e.not_found else UNEXPECTED_ERROR_MESSAGE
        return templates.TemplateResponse(
            request,
            "error.html",
            {
                "prefix": _path_prefix_from_request(request),
                "error_message": message,
            },
            status_code=status_code,
        )

    # Temporary redirect
    return RedirectResponse(url=found["Destination"], status_code=status.HTTP_302_FOUND)
