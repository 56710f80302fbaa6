from collections.abc import MutableMapping
from datetime import datetime
from math import ceil
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Match, Route

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return the current local time as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime(DATE_FORMAT)


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` records ``limit`` at a time."""
    return ceil(total / limit) if limit else 0


def page_offset(page: int, limit: int) -> int:
    """Offset of the first record on a 1-based ``page``."""
    return (page - 1) * limit


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    summary = None
    for route in routes:
        is_api_route = type(route) is APIRoute
        is_route = type(route) is Route
        if is_api_route and route.matches(scope)[0] == Match.FULL:
            summary = route.summary
            break
        if is_route and route.matches(scope)[0] == Match.FULL:
            summary = route.name
            break

    return summary
