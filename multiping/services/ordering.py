import logging
from typing import List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


def resolve_emission_order(
    hosts: Sequence[str],
    snapshot: Optional[Mapping[str, float]],
) -> List[str]:
    """
    Decide the order in which host values are printed for this run.

    If the previous run's snapshot covers exactly the configured hosts, its
    hosts are returned sorted by stored value, highest first. The sort is
    stable, so hosts with equal values keep the order they were stored in.
    In every other case (no snapshot, empty snapshot, hosts added, removed or
    swapped) the configured order is used.
    """
    if snapshot and set(snapshot) == set(hosts) and len(snapshot) == len(hosts):
        return sorted(snapshot, key=lambda host: snapshot[host], reverse=True)

    if snapshot:
        logger.debug(
            "Snapshot hosts differ from configured hosts, using configured order"
        )
    return list(hosts)
