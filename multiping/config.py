from typing import List
from pydantic import BaseModel, Field, field_validator
import os
import sys
from functools import lru_cache
from pathlib import Path

from multiping.services.ping_args import normalize_os_family

_STATE_FILE_NAME = "multiping.state"


def _default_state_file() -> Path:
    # Munin hands plugins a writable state directory via MUNIN_PLUGSTATE
    state_dir = os.getenv("MUNIN_PLUGSTATE")
    if state_dir:
        return Path(state_dir) / _STATE_FILE_NAME
    return Path(_STATE_FILE_NAME)


class Settings(BaseModel):
    hosts: List[str] = Field(
        default_factory=list,
        description="Hosts to ping, in configured order, e.g. ['gw.local', '1.1.1.1']",
    )
    ping_times: int = Field(
        default=3,
        ge=1,
        description="Number of echo requests per host and run",
    )
    ping_timeout: int = Field(
        default=10,
        ge=1,
        description="Timeout in seconds handed to the ping tool",
    )
    graph_title: str = Field(
        default="Ping times",
        description="Graph title advertised to the collector",
    )
    graph_category: str = Field(
        default="network",
        description="Graph category advertised to the collector",
    )
    os_family: str = Field(
        default_factory=lambda: normalize_os_family(sys.platform),
        description="Key into the ping argument table, e.g. 'default' or 'windows'",
    )
    ping_command: str = Field(
        default="ping",
        description="Name or path of the ping binary",
    )
    state_file: Path = Field(
        default_factory=_default_state_file,
        description="Where the previous run's results are kept for field ordering",
    )

    @field_validator("hosts")
    @classmethod
    def _drop_duplicate_hosts(cls, hosts: List[str]) -> List[str]:
        # a host is its own identity within a run; keep the first occurrence
        return list(dict.fromkeys(hosts))

    @classmethod
    def from_env(cls) -> "Settings":
        raw_hosts = os.getenv("MULTIPING_HOSTS", "")
        values = {"hosts": raw_hosts.split()}

        env_fields = {
            "ping_times": "MULTIPING_PING_TIMES",
            "ping_timeout": "MULTIPING_PING_TIMEOUT",
            "graph_title": "MULTIPING_TITLE",
            "graph_category": "MULTIPING_CATEGORY",
            "ping_command": "MULTIPING_PING_COMMAND",
            "state_file": "MULTIPING_STATE_FILE",
        }
        for field_name, env_name in env_fields.items():
            raw = os.getenv(env_name)
            if raw:
                values[field_name] = raw

        raw_family = os.getenv("MULTIPING_OS_FAMILY")
        if raw_family:
            values["os_family"] = normalize_os_family(raw_family)

        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
