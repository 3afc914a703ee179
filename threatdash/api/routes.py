"""Route classification lookup for the external auth layer."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from threatdash.models.routes import RouteClass, RouteTable

router = APIRouter(prefix="/api/v1/routes", tags=["routes"])


class RouteClassificationResponse(BaseModel):
    path: str
    classification: RouteClass
    login_redirect: str


def get_route_table(request: Request) -> RouteTable:
    """Get route table from app state."""
    table = getattr(request.app.state, "route_table", None)
    if table is None:
        raise HTTPException(status_code=503, detail="Route table is not configured")
    return table


@router.get("/classify", response_model=RouteClassificationResponse)
async def classify_route(
    route_table: Annotated[RouteTable, Depends(get_route_table)],
    path: str = Query(min_length=1),
) -> RouteClassificationResponse:
    """Classify a path as public, auth-entry or protected."""
    if not path.startswith("/"):
        raise HTTPException(status_code=422, detail="Path must start with '/'")
    return RouteClassificationResponse(
        path=path,
        classification=route_table.classify(path),
        login_redirect=route_table.default_login_redirect,
    )
