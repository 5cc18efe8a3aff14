from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProbeStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    UNPARSEABLE = "unparseable"


class ProbeResult(BaseModel):
    """Final outcome of pinging a single host during one run."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(
        ...,
        description="Hostname or IP as configured, e.g. gw.local or 192.168.178.1",
    )
    status: ProbeStatus = Field(
        ...,
        description="succeeded, failed (unreachable or timed out) or unparseable",
    )
    latency_ms: Optional[float] = Field(
        None,
        ge=0.0,
        description="Average roundtrip time in milliseconds; 0.0 on failure, None if unparseable.",
    )
    error: Optional[str] = Field(
        None,
        description="Optional error message if the probe did not succeed.",
    )


class PingRun(BaseModel):
    """All results of one run together with the order they are reported in."""

    hosts: List[str] = Field(..., description="Configured hosts, in configured order")
    order: List[str] = Field(..., description="Emission order chosen for this run")
    results: Dict[str, ProbeResult] = Field(..., description="Result per host")

    def ordered_results(self) -> List[ProbeResult]:
        return [self.results[host] for host in self.order]
