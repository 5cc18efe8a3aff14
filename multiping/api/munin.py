from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from multiping.config import get_settings
from multiping.errors import ConfigurationError
from multiping.services import ping_monitor
from multiping.services.reporter import format_config, format_values

router = APIRouter()


def _as_text(lines) -> str:
    return "".join(f"{line}\n" for line in lines)


@router.get("/config", response_class=PlainTextResponse, summary="Munin graph metadata")
async def munin_config() -> str:
    """Return the graph metadata block for all configured hosts."""
    settings = get_settings()
    return _as_text(
        format_config(
            settings.hosts,
            title=settings.graph_title,
            category=settings.graph_category,
            times=settings.ping_times,
        )
    )


@router.get("/fetch", response_class=PlainTextResponse, summary="Munin values")
async def munin_fetch() -> str:
    """
    Ping all configured hosts and return one value line per host.

    The snapshot used for field ordering is updated after the body is built.
    Without any configured host, a HTTP 503 Service Unavailable is returned.
    """
    settings = get_settings()
    try:
        run = await ping_monitor.collect_ping_run(settings)
    except ConfigurationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    body = _as_text(format_values(run.order, run.results))
    ping_monitor.persist_run(run, settings)
    return body
