import json
import logging
import os
import tempfile
import warnings
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from multiping.errors import PersistenceWarning
from multiping.models.probe import ProbeResult

logger = logging.getLogger(__name__)


def load_snapshot(path: Union[str, Path]) -> Optional[Dict[str, float]]:
    """
    Read the previous run's host -> value mapping.

    Returns None if there is no usable snapshot. A missing file is the normal
    first-run case; an unreadable or malformed file is logged and otherwise
    treated the same way, since the snapshot only influences field order.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning("Could not read snapshot %s: %s", path, exc)
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed snapshot %s: %s", path, exc)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring snapshot %s: expected a JSON object", path)
        return None

    snapshot: Dict[str, float] = {}
    for host, value in data.items():
        try:
            snapshot[str(host)] = float(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring snapshot %s: bad value for %r", path, host)
            return None
    return snapshot


def snapshot_from_results(results: Mapping[str, ProbeResult]) -> Dict[str, float]:
    # Unparseable hosts have no value; 0.0 keeps them in the snapshot so the
    # host set still matches on the next run.
    return {
        host: result.latency_ms if result.latency_ms is not None else 0.0
        for host, result in results.items()
    }


def save_snapshot(path: Union[str, Path], results: Mapping[str, ProbeResult]) -> bool:
    """
    Replace the snapshot at `path` with this run's results.

    The data is written to a temporary file next to the target and moved into
    place, so readers see either the old or the new snapshot. Failures are
    reported as PersistenceWarning and never raised: by the time we persist,
    the values have already been printed.
    """
    path = Path(path)
    payload = json.dumps(snapshot_from_results(results), indent=2)

    tmp_name: Optional[str] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        message = f"Could not write snapshot {path}: {exc}"
        logger.warning(message)
        warnings.warn(message, PersistenceWarning, stacklevel=2)
        return False

    logger.debug("Wrote snapshot for %d hosts to %s", len(results), path)
    return True
