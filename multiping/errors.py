class MultipingError(RuntimeError):
    """Base class for all errors raised by multiping."""


class ConfigurationError(MultipingError):
    """The configuration cannot be used for a run (e.g. no hosts configured)."""


class UnparseableOutput(MultipingError):
    """
    ping exited with status 0 but printed no min/avg/max summary line.

    This points at a change in the ping tool's output format rather than at an
    unreachable host, so it is reported separately from ordinary failures.
    """

    def __init__(self, host: str) -> None:
        super().__init__(f"ping for {host} exited successfully but no summary line was found")
        self.host = host


class PersistenceWarning(UserWarning):
    """The result snapshot could not be written; output was still delivered."""
