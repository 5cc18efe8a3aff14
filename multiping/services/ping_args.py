from typing import Callable, Dict, List

# (times, timeout) -> option list placed between the command and the host
ArgStrategy = Callable[[int, int], List[str]]

# Payload size sent by the Windows ping tool, matching the Unix default of 56 bytes
_WINDOWS_PACKET_SIZE = 56


def _windows_args(times: int, timeout: int) -> List[str]:
    return ["-n", str(times), "-l", str(_WINDOWS_PACKET_SIZE)]


def _default_args(times: int, timeout: int) -> List[str]:
    return ["-c", str(times), "-W", str(timeout)]


PING_ARG_STRATEGIES: Dict[str, ArgStrategy] = {
    "windows": _windows_args,
    "cygwin": _windows_args,
    "default": _default_args,
}


def normalize_os_family(platform: str) -> str:
    """
    Map a sys.platform style name onto a key of PING_ARG_STRATEGIES.

    Values that are already table keys pass through unchanged; anything
    unknown falls back to 'default'.
    """
    name = platform.strip().lower()
    if name in PING_ARG_STRATEGIES:
        return name
    if name.startswith("win"):
        return "windows"
    if name.startswith("cygwin") or name.startswith("msys"):
        return "cygwin"
    return "default"


def register_strategy(os_family: str, strategy: ArgStrategy) -> None:
    PING_ARG_STRATEGIES[os_family.lower()] = strategy


def build_ping_args(
    host: str,
    *,
    times: int,
    timeout: int,
    os_family: str = "default",
    command: str = "ping",
) -> List[str]:
    """Return the full argv for pinging one host on the given OS family."""
    strategy = PING_ARG_STRATEGIES.get(os_family, PING_ARG_STRATEGIES["default"])
    return [command, *strategy(times, timeout), host]
