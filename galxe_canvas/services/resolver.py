"""Single campaign resolution."""

from __future__ import annotations

import structlog

from ..core.models import ItemRecord
from ..data.galxe_client import GalxeQueryClient

logger = structlog.get_logger(__name__)


class ItemResolver:
    """
    Resolves one campaign id for one wallet address.

    Holds no mutable state, so a single instance can be called from every
    fan-out worker at once.
    """

    def __init__(self, client: GalxeQueryClient) -> None:
        self._client = client

    def resolve(self, campaign_id: str, address: str) -> ItemRecord:
        """Return the campaign record or raise ``RemoteQueryError``."""
        record = self._client.fetch_campaign(campaign_id, address)
        logger.debug(
            "Campaign resolved",
            campaign_id=record.id,
            is_nft_holder=record.is_nft_holder,
            claimed_times=record.claimed_times,
        )
        return record
