import re
from typing import Optional, Union

# "rtt min/avg/max/mdev = 7.218/7.255/7.293/0.030 ms" and friends: we only
# rely on the "= min/avg/max[/var]" part, the wording in front varies by tool.
SUMMARY_PATTERN = re.compile(
    r"=\s*(?P<min>\d+(?:\.\d+)?)"
    r"/(?P<avg>\d+(?:\.\d+)?)"
    r"/(?P<max>\d+(?:\.\d+)?)"
    r"(?:/(?P<var>\d+(?:\.\d+)?))?"
)


def parse_summary_line(line: str) -> Optional[float]:
    """
    Return the average round-trip time from a ping summary line.

    Returns None if the line does not contain a min/avg/max[/var] summary.
    """
    match = SUMMARY_PATTERN.search(line)
    if not match:
        return None
    return float(match.group("avg"))


class SummaryParser:
    """Scans one ping process's output, line by line, for its summary."""

    def __init__(self) -> None:
        self.candidate: Optional[float] = None

    def feed(self, line: Union[str, bytes]) -> Optional[float]:
        if isinstance(line, bytes):
            line = line.decode(errors="replace")
        if self.candidate is None:
            self.candidate = parse_summary_line(line)
        return self.candidate
