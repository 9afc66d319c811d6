"""
Space expansion with concurrent campaign resolution.

A space lookup yields the ids of its campaigns; each campaign is then resolved
on its own worker thread and the successes are merged into one result set.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from contextvars import copy_context
from typing import Dict, Optional

import structlog

from ..core.exceptions import RemoteQueryError
from ..core.models import ItemRecord, ResultSet
from ..data.galxe_client import GalxeQueryClient
from .resolver import ItemResolver

logger = structlog.get_logger(__name__)


class CollectionExpander:
    """
    Expands a space into the campaigns that resolved for an address.

    Failure policy:
    - the space lookup failing is fatal and propagates ``RemoteQueryError``
      before any campaign is queried
    - a single campaign failing is logged and left out of the result

    The result keeps the order in which the space listed its campaigns,
    regardless of the order the workers finish in.
    """

    def __init__(
        self,
        client: GalxeQueryClient,
        resolver: ItemResolver,
        max_workers: Optional[int] = None,
    ) -> None:
        """
        Args:
            client: Query client used for the space lookup
            resolver: Resolver invoked once per campaign
            max_workers: Cap on concurrent workers; ``None`` runs one per campaign
        """
        self._client = client
        self._resolver = resolver
        self._max_workers = max_workers

    def expand(self, space_id: int, address: str) -> ResultSet:
        """Resolve every campaign of ``space_id`` for ``address``."""
        listing = self._client.fetch_space(space_id)
        member_ids = listing.member_ids

        logger.info(
            "Space campaigns listed",
            space_id=space_id,
            space_name=listing.name,
            campaigns=len(member_ids),
            total_count=listing.campaigns.total_count,
        )

        if not member_ids:
            return ()

        resolved: Dict[int, ItemRecord] = {}
        lock = threading.Lock()

        def resolve_member(position: int, campaign_id: str) -> None:
            record = self._resolver.resolve(campaign_id, address)
            with lock:
                resolved[position] = record

        workers = len(member_ids)
        if self._max_workers is not None:
            workers = min(workers, self._max_workers)

        failed = 0
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="galxe-fanout") as executor:
            # Each task runs in a copy of the caller's context so log lines keep
            # the request's correlation id.
            futures = {
                executor.submit(copy_context().run, resolve_member, position, campaign_id): campaign_id
                for position, campaign_id in enumerate(member_ids)
            }

            # Join barrier: every submitted task is drained exactly once here.
            for future in as_completed(futures):
                campaign_id = futures[future]
                try:
                    future.result()
                except RemoteQueryError as e:
                    failed += 1
                    logger.warning(
                        "Dropping campaign that failed to resolve",
                        space_id=space_id,
                        campaign_id=campaign_id,
                        error=e.message,
                    )

        logger.info(
            "Space expansion completed",
            space_id=space_id,
            resolved=len(resolved),
            failed=failed,
            total=len(member_ids),
        )

        return tuple(resolved[position] for position in sorted(resolved))
