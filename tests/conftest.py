import asyncio

import pytest

from multiping.config import Settings


class FakeStream:
    def __init__(self, output: str):
        self._lines = [line.encode() for line in output.splitlines(keepends=True)]

    async def readline(self) -> bytes:
        # yield to the loop like a real pipe would
        await asyncio.sleep(0)
        if self._lines:
            return self._lines.pop(0)
        return b""


class FakeProcess:
    def __init__(self, host, output, returncode, events):
        self.host = host
        self.stdout = FakeStream(output)
        self.returncode = None
        self._returncode = returncode
        self._events = events

    async def wait(self) -> int:
        await asyncio.sleep(0)
        self._events.append(("exit", self.host))
        self.returncode = self._returncode
        return self._returncode


class FakePing:
    """
    Stand-in for asyncio.create_subprocess_exec.

    Every host answers with the output/return code registered for it; hosts
    without a registration behave like an unreachable host.
    """

    def __init__(self):
        self.behaviour = {}
        self.calls = []
        self.events = []

    def reply(self, host, output, returncode=0):
        self.behaviour[host] = (output, returncode)

    def refuse(self, host, exc):
        self.behaviour[host] = exc

    async def create_subprocess_exec(self, *args, **kwargs):
        host = args[-1]
        self.calls.append(list(args))
        self.events.append(("start", host))
        behaviour = self.behaviour.get(host, ("", 1))
        if isinstance(behaviour, BaseException):
            raise behaviour
        output, returncode = behaviour
        return FakeProcess(host, output, returncode, self.events)


def linux_ping_output(host: str, avg: float) -> str:
    return (
        f"PING {host} (192.0.2.10) 56(84) bytes of data.\n"
        f"64 bytes from 192.0.2.10: icmp_seq=1 ttl=57 time={avg} ms\n"
        "\n"
        f"--- {host} ping statistics ---\n"
        "3 packets transmitted, 3 received, 0% packet loss, time 2003ms\n"
        f"rtt min/avg/max/mdev = {avg - 0.5:.3f}/{avg:.3f}/{avg + 0.5:.3f}/0.200 ms\n"
    )


@pytest.fixture
def fake_ping(monkeypatch):
    fake = FakePing()
    monkeypatch.setattr(
        "multiping.services.ping_monitor.asyncio.create_subprocess_exec",
        fake.create_subprocess_exec,
    )
    return fake


@pytest.fixture
def ping_output():
    return linux_ping_output


@pytest.fixture
def make_settings(tmp_path):
    def _make(hosts, **overrides):
        values = {
            "hosts": hosts,
            "ping_times": 3,
            "ping_timeout": 5,
            "os_family": "default",
            "state_file": tmp_path / "multiping.state",
        }
        values.update(overrides)
        return Settings(**values)

    return _make
