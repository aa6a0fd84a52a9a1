"""
Batch queries fanned out over a thread pool.

Geometries are only read during a query, so any number of queries can run
at once. Results are combined with order-independent reductions.
"""

import concurrent.futures
from fractions import Fraction
from typing import Iterable

from v3d.core.logging import get_logger
from v3d.engine import dispatch
from v3d.geometry.base import Geometry

logger = get_logger(__name__)


def intersects_any(
    geometry: Geometry, others: Iterable[Geometry], max_workers: int | None = None
) -> bool:
    """
    True if ``geometry`` intersects at least one of ``others``.

    Args:
        geometry: Query geometry
        others: Geometries to test against
        max_workers: Thread pool size, ``None`` for the executor default

    Returns:
        False for an empty batch
    """
    others = list(others)
    found = False
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(dispatch.intersects, geometry, other) for other in others]
        for future in concurrent.futures.as_completed(futures):
            if future.result():
                found = True
                for pending in futures:
                    pending.cancel()
                break
    logger.debug("batch_intersects_any", size=len(others), result=found)
    return found


def intersects_all(
    geometry: Geometry, others: Iterable[Geometry], max_workers: int | None = None
) -> bool:
    """True if ``geometry`` intersects every one of ``others``. True for an empty batch."""
    others = list(others)
    result = True
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(dispatch.intersects, geometry, other) for other in others]
        for future in concurrent.futures.as_completed(futures):
            if not future.result():
                result = False
                for pending in futures:
                    pending.cancel()
                break
    logger.debug("batch_intersects_all", size=len(others), result=result)
    return result


def min_distance_squared(
    geometry: Geometry, others: Iterable[Geometry], max_workers: int | None = None
) -> Fraction:
    """
    Smallest exact squared distance from ``geometry`` to any of ``others``.

    Raises:
        ValueError: If ``others`` is empty
    """
    others = list(others)
    if not others:
        raise ValueError("min_distance_squared needs at least one geometry")
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(dispatch.get_distance_squared, geometry, other) for other in others
        ]
        return min(future.result() for future in concurrent.futures.as_completed(futures))
