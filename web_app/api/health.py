"""Health check endpoints (/hc full report, /liveness self only)."""

import time
from datetime import timedelta
from typing import Awaitable, Callable, Dict, List, Tuple

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from .schemas import HealthEntry, HealthReport

router = APIRouter()

HEALTHY = "Healthy"
UNHEALTHY = "Unhealthy"


def _format_duration(seconds: float) -> str:
    return str(timedelta(seconds=seconds))


async def _run_check(
    check: Callable[[], Awaitable[bool]],
    description: str,
    tags: List[str],
) -> HealthEntry:
    start = time.perf_counter()
    healthy = await check()
    return HealthEntry(
        status=HEALTHY if healthy else UNHEALTHY,
        description=description if healthy else f"{description} check failed",
        duration=_format_duration(time.perf_counter() - start),
        tags=tags,
    )


async def _self_check() -> bool:
    return True


def _report(entries: Dict[str, HealthEntry], started: float) -> JSONResponse:
    healthy = all(e.status == HEALTHY for e in entries.values())
    report = HealthReport(
        status=HEALTHY if healthy else UNHEALTHY,
        total_duration=_format_duration(time.perf_counter() - started),
        entries=entries,
    )
    return JSONResponse(
        content=report.model_dump(by_alias=True),
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def _checks(request: Request) -> List[Tuple[str, Callable[[], Awaitable[bool]], str, List[str]]]:
    service = request.app.state.service
    checks = [
        ("self", _self_check, "This service is healthy", ["self"]),
        ("apidb-check", service.db.health_check, "Database", ["apidb"]),
    ]
    if service.cache is not None and service.cache.configured:
        checks.append(("cache-check", service.cache.ping, "Redis cache", ["cache"]))
    return checks


@router.get("/hc", response_model=HealthReport, summary="Full health check")
async def health_check(request: Request):
    """Run every registered check (service, database, cache)."""
    started = time.perf_counter()
    entries = {}
    for name, check, description, tags in _checks(request):
        entries[name] = await _run_check(check, description, tags)
    return _report(entries, started)


@router.get("/liveness", response_model=HealthReport, summary="Liveness probe")
async def liveness(request: Request):
    """Only the self check; never touches the database."""
    started = time.perf_counter()
    entries = {"self": await _run_check(_self_check, "This service is healthy", ["self"])}
    return _report(entries, started)
