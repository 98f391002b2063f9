"""Jersey routes - catalog pages and admin form."""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import Response

from jersey_store.api.presentation import render, respond
from jersey_store.services.catalog_service import CatalogService
from jersey_store.services.outcomes import Ok, ValidationFailed

router = APIRouter()


def get_catalog_service(request: Request) -> CatalogService:
    """Catalog service built for this application in ``create_app``."""
    return request.app.state.catalog_service


async def read_fields(request: Request) -> dict[str, Any]:
    """Submitted fields from a form post or a JSON body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _admin_form(
    request: Request,
    *,
    jersey_id: str | None,
    values: dict[str, str],
    errors: dict[str, str] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    return render(
        request,
        "admin.html",
        {
            "title": "Admin - Manage Jerseys",
            "jersey_id": jersey_id,
            "values": values,
            "errors": errors or {},
        },
        status_code=status_code,
    )


def _rejected_form(request: Request, outcome: ValidationFailed) -> Response:
    return _admin_form(
        request,
        jersey_id=outcome.jersey_id,
        values=outcome.submitted,
        errors=outcome.errors,
        status_code=422,
    )


@router.get("/", name="list_jerseys")
async def list_jerseys(
    request: Request, service: CatalogService = Depends(get_catalog_service)
) -> Response:
    """Homepage with every jersey, newest first."""
    outcome = await service.list_jerseys()
    if isinstance(outcome, Ok):
        return render(request, "home.html", {"jerseys": outcome.data})
    return respond(request, outcome)


@router.get("/jersey/{jersey_id}", name="jersey_detail")
async def jersey_detail(
    jersey_id: str, request: Request, service: CatalogService = Depends(get_catalog_service)
) -> Response:
    """Detail page for one jersey."""
    outcome = await service.get_jersey_detail(jersey_id)
    if isinstance(outcome, Ok):
        jersey = outcome.data
        return render(
            request,
            "detail.html",
            {"title": f"{jersey.team} - {jersey.country}", "jersey": jersey},
        )
    return respond(request, outcome)


@router.get("/admin", name="admin_form")
async def admin_form(
    request: Request,
    jersey_id: str | None = Query(None, alias="id", description="Jersey to edit"),
    service: CatalogService = Depends(get_catalog_service),
) -> Response:
    """Add form, or edit form when ``?id=`` names an existing jersey."""
    outcome = await service.show_admin_form(jersey_id)
    if isinstance(outcome, Ok):
        jersey = outcome.data
        return _admin_form(
            request,
            jersey_id=jersey.id if jersey else None,
            values=jersey.as_form() if jersey else {},
        )
    return respond(request, outcome)


@router.post("/admin", name="create_jersey")
async def create_jersey(
    request: Request, service: CatalogService = Depends(get_catalog_service)
) -> Response:
    """Create a jersey from the admin form."""
    outcome = await service.create_jersey(await read_fields(request))
    if isinstance(outcome, ValidationFailed):
        return _rejected_form(request, outcome)
    return respond(request, outcome)


@router.put("/admin/{jersey_id}", name="update_jersey")
async def update_jersey(
    jersey_id: str, request: Request, service: CatalogService = Depends(get_catalog_service)
) -> Response:
    """Replace an existing jersey from the admin form."""
    outcome = await service.update_jersey(jersey_id, await read_fields(request))
    if isinstance(outcome, ValidationFailed):
        return _rejected_form(request, outcome)
    return respond(request, outcome)


@router.delete("/admin/{jersey_id}", name="delete_jersey")
async def delete_jersey(
    jersey_id: str, request: Request, service: CatalogService = Depends(get_catalog_service)
) -> Response:
    """Delete a jersey."""
    outcome = await service.delete_jersey(jersey_id)
    return respond(request, outcome)
