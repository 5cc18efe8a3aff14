from typing import List

from fastapi import APIRouter, HTTPException

from multiping.config import get_settings
from multiping.errors import ConfigurationError
from multiping.models.probe import ProbeResult
from multiping.services import ping_monitor

router = APIRouter()


@router.get(
    "/status",
    response_model=List[ProbeResult],
    summary="Ping status",
)
async def ping_status() -> List[ProbeResult]:
    """
    Return latency information for all configured hosts, in emission order.

    Hosts are taken from Settings.hosts (env var MULTIPING_HOSTS).
    """
    settings = get_settings()
    try:
        run = await ping_monitor.collect_ping_run(settings)
    except ConfigurationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    ping_monitor.persist_run(run, settings)
    return run.ordered_results()
