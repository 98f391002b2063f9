"""Mapping of catalog outcomes to HTML responses."""

from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from jersey_store.services.outcomes import Forbidden, NotFound, Outcome, Redirect, Unavailable

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    """Render a template with the store-wide context merged in."""
    settings = request.app.state.settings
    page: dict[str, Any] = {"store_title": settings.STORE_TITLE, "title": settings.STORE_TITLE}
    page.update(context or {})
    return templates.TemplateResponse(request, name, page, status_code=status_code)


def render_not_found(request: Request, title: str = "Page Not Found", message: str | None = None) -> HTMLResponse:
    return render(
        request,
        "404.html",
        {"title": title, "message": message or "The page you are looking for does not exist."},
        status_code=status.HTTP_404_NOT_FOUND,
    )


def render_server_error(request: Request, message: str = "Something went wrong on the server.") -> HTMLResponse:
    return render(
        request,
        "error.html",
        {"title": "Server Error", "message": message},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def respond(request: Request, outcome: Outcome) -> Response:
    """
    Response for every outcome that does not render a page of its own.

    Args:
        request: Current request
        outcome: Redirect, NotFound, Forbidden or Unavailable

    Returns:
        303 redirect, or a rendered 404 / 403 / 500 page
    """
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.location, status_code=status.HTTP_303_SEE_OTHER)
    if isinstance(outcome, NotFound):
        return render_not_found(request, title="Jersey Not Found", message=outcome.message)
    if isinstance(outcome, Forbidden):
        return render(
            request,
            "error.html",
            {"title": "Forbidden", "message": outcome.message},
            status_code=status.HTTP_403_FORBIDDEN,
        )
    if isinstance(outcome, Unavailable):
        return render_server_error(request, outcome.message)
    raise TypeError(f"No default response for outcome {outcome!r}")
