from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from fastapi import APIRouter, Depends


# Error responses the request log routes can produce
DEFAULT_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"description": "Bad Request"},
    500: {"description": "Internal Server Error"},
}


def create_router(
    *,
    name: Optional[str] = None,
    dependencies: Optional[Sequence[Depends]] = None,
    default_responses: Optional[Dict[int, Dict[str, Any]]] = None,
) -> APIRouter:
    """Create an APIRouter with the shared error responses.

    Args:
        name: Optional logical name for the router.
        dependencies: Optional dependencies applied to all routes in the router.
        default_responses: Optional map to override default error responses.

    Returns:
        Configured APIRouter instance.
    """
    router = APIRouter(
        dependencies=list(dependencies) if dependencies else None,
        responses=(default_responses or DEFAULT_ERROR_RESPONSES),
    )
    if name:
        setattr(router, "name", name)
    return router
