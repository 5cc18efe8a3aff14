import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from multiping.config import Settings, get_settings
from multiping.errors import ConfigurationError, UnparseableOutput
from multiping.models.probe import PingRun, ProbeResult, ProbeStatus
from multiping.services import result_store
from multiping.services.ordering import resolve_emission_order
from multiping.services.ping_args import build_ping_args
from multiping.services.summary_parser import SummaryParser

logger = logging.getLogger(__name__)


@dataclass
class ProbeHandle:
    """
    One ping process, tagged with the host it targets.

    `process` is None if the ping binary could not be started at all; in that
    case `error` says why.
    """

    host: str
    args: List[str]
    process: Optional[asyncio.subprocess.Process] = None
    parser: SummaryParser = field(default_factory=SummaryParser)
    returncode: Optional[int] = None
    error: Optional[str] = None


def _failed(host: str, error: str) -> ProbeResult:
    return ProbeResult(
        host=host,
        status=ProbeStatus.FAILED,
        latency_ms=0.0,
        error=error,
    )


async def launch_probe(host: str, settings: Settings) -> ProbeHandle:
    """
    Start pinging a single host and return immediately.

    Spawning errors (e.g. ping binary missing) are kept on the handle instead
    of being raised, so that they end up as a failed result for this host.
    """
    args = build_ping_args(
        host,
        times=settings.ping_times,
        timeout=settings.ping_timeout,
        os_family=settings.os_family,
        command=settings.ping_command,
    )
    handle = ProbeHandle(host=host, args=args)
    logger.debug("Starting probe: %s", " ".join(args))

    try:
        handle.process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except OSError as exc:
        logger.warning("Could not start %s for %s: %s", args[0], host, exc)
        handle.error = f"could not start {args[0]}: {exc}"

    return handle


async def collect_output(handle: ProbeHandle) -> None:
    """Feed the process output to the parser line by line, then wait for exit."""
    if handle.process is None:
        return

    stdout = handle.process.stdout
    while True:
        line = await stdout.readline()
        if not line:
            break
        handle.parser.feed(line)

    # stdout is drained before we look at the exit status, so the parser has
    # seen everything the process printed.
    handle.returncode = await handle.process.wait()


def complete_probe(host: str, returncode: int, candidate: Optional[float]) -> ProbeResult:
    """
    Turn a finished ping into its final result.

    Raises UnparseableOutput if ping reported success without a summary line.
    """
    if returncode != 0:
        return _failed(host, f"ping failed with return code {returncode}")

    if candidate is None:
        raise UnparseableOutput(host)

    return ProbeResult(
        host=host,
        status=ProbeStatus.SUCCEEDED,
        latency_ms=candidate,
        error=None,
    )


async def _probe_host(host: str, settings: Settings, results: Dict[str, ProbeResult]) -> None:
    handle = await launch_probe(host, settings)
    if handle.process is None:
        results[host] = _failed(host, handle.error or "ping could not be started")
        return

    await collect_output(handle)

    try:
        results[host] = complete_probe(handle.host, handle.returncode, handle.parser.candidate)
    except UnparseableOutput as exc:
        logger.error("%s (argv: %s)", exc, " ".join(handle.args))
        results[host] = ProbeResult(
            host=host,
            status=ProbeStatus.UNPARSEABLE,
            latency_ms=None,
            error=str(exc),
        )

    logger.debug("Probe result for %s: %s", host, results[host])


async def run_probes(hosts: Sequence[str], settings: Settings) -> Dict[str, ProbeResult]:
    """
    Ping all hosts concurrently and return one result per host.

    The returned mapping follows the order of `hosts`. One host failing, in
    whatever way, never affects the others.
    """
    if not hosts:
        raise ConfigurationError("No hosts configured; set MULTIPING_HOSTS")

    results: Dict[str, ProbeResult] = {}
    outcomes = await asyncio.gather(
        *(_probe_host(host, settings, results) for host in hosts),
        return_exceptions=True,
    )

    for host, outcome in zip(hosts, outcomes):
        if outcome is None:
            continue
        if not isinstance(outcome, Exception):
            raise outcome
        logger.error("Probe for %s failed unexpectedly", host, exc_info=outcome)
        results[host] = _failed(host, str(outcome))

    return {host: results[host] for host in hosts}


async def collect_ping_run(settings: Optional[Settings] = None) -> PingRun:
    """
    Run one measurement round for all configured hosts.

    The previous snapshot is read before any probe starts and only used to
    pick the emission order. Persisting the new results is left to the caller
    (see persist_run), after the values have been reported.
    """
    settings = settings or get_settings()
    hosts = list(settings.hosts)
    if not hosts:
        raise ConfigurationError("No hosts configured; set MULTIPING_HOSTS")

    snapshot = result_store.load_snapshot(settings.state_file)
    results = await run_probes(hosts, settings)
    order = resolve_emission_order(hosts, snapshot)

    return PingRun(hosts=hosts, order=order, results=results)


def persist_run(run: PingRun, settings: Optional[Settings] = None) -> bool:
    settings = settings or get_settings()
    return result_store.save_snapshot(settings.state_file, run.results)
