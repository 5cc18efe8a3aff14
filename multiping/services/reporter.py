from typing import List, Mapping, Sequence

from multiping.models.probe import ProbeResult
from multiping.services.fieldnames import field_name

# Munin's marker for "no value this run"
UNKNOWN_VALUE = "U"


def format_value(result: ProbeResult) -> str:
    if result.latency_ms is None:
        return UNKNOWN_VALUE
    return f"{result.latency_ms:.6f}"


def format_values(order: Sequence[str], results: Mapping[str, ProbeResult]) -> List[str]:
    """One '<field>.value <value>' line per host, in emission order."""
    return [f"{field_name(host)}.value {format_value(results[host])}" for host in order]


def format_config(
    hosts: Sequence[str],
    *,
    title: str,
    category: str,
    times: int,
) -> List[str]:
    """Graph metadata lines for the collector's 'config' request."""
    lines = [
        f"graph_title {title}",
        "graph_args --base 1000 -l 0",
        "graph_vlabel milliseconds",
        f"graph_category {category}",
        f"graph_info Average ping times (over {times} pings)",
    ]
    for host in hosts:
        name = field_name(host)
        lines.append(f"{name}.label {host}")
        lines.append(f"{name}.info Average ping time over {times} pings for {host}")
        lines.append(f"{name}.draw LINE2")
    return lines
