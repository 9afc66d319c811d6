"""
Galxe GraphQL client.

Posts GraphQL documents to the Galxe query endpoint and decodes the two
entities the canvas needs: a campaign as seen by one wallet address, and the
campaign list of a space. Every failure surfaces as ``RemoteQueryError``.
"""

from typing import Any, Dict, Optional

import httpx
import structlog
from httpx import HTTPStatusError, TimeoutException
from pydantic import ValidationError

from galxe_canvas import __version__
from galxe_canvas.core.config import DEFAULT_GRAPHQL_ENDPOINT, Settings
from galxe_canvas.core.exceptions import RemoteQueryError
from galxe_canvas.core.models import ItemRecord, SpaceListing
from galxe_canvas.utils.performance import track_performance

logger = structlog.get_logger(__name__)

CAMPAIGN_QUERY = """
query CampaignForAddress($id: ID!, $address: String!) {
  campaign(id: $id) {
    id
    name
    status
    space {
      id
      name
      isVerified
    }
    nftCore {
      id
      name
      symbol
      contractAddress
      chain
    }
    isNFTHolder(address: $address)
    claimedTimes(address: $address)
  }
}
"""

SPACE_CAMPAIGNS_QUERY = """
query SpaceCampaigns($id: Int!) {
  space(id: $id) {
    id
    name
    campaigns(input: { spaceId: $id }) {
      totalCount
      list {
        id
      }
    }
  }
}
"""


class GalxeQueryClient:
    """
    Thin GraphQL client over ``httpx.Client``.

    One instance is opened per submission and shared by the fan-out workers;
    it keeps no state beyond the connection pool.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_GRAPHQL_ENDPOINT,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": f"galxe-canvas/{__version__}",
            },
            follow_redirects=True,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "GalxeQueryClient":
        return cls(endpoint=settings.graphql_endpoint, timeout=settings.request_timeout, **kwargs)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "GalxeQueryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def execute(self, operation: str, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run one GraphQL document and return its ``data`` object.

        Args:
            operation: Short name used in logs and error messages
            query: GraphQL document
            variables: Variables for the document

        Returns:
            The ``data`` member of the response

        Raises:
            RemoteQueryError: On transport, HTTP, GraphQL or decode errors
        """
        logger.debug("Sending GraphQL query", operation=operation, variables=variables)

        try:
            response = self.client.post(self.endpoint, json={"query": query, "variables": variables})
            response.raise_for_status()
            body = response.json()

        except HTTPStatusError as e:
            logger.error(
                "Galxe API HTTP error",
                operation=operation,
                status_code=e.response.status_code,
                response_text=e.response.text[:500],
            )
            raise RemoteQueryError(
                operation,
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                details={"response_text": e.response.text[:500]},
            ) from e

        except TimeoutException as e:
            logger.error("Galxe API timeout", operation=operation, error=str(e))
            raise RemoteQueryError(operation, f"request timed out: {e}") from e

        except httpx.HTTPError as e:
            logger.error("Galxe API transport error", operation=operation, error=str(e))
            raise RemoteQueryError(operation, f"transport error: {e}") from e

        except httpx.InvalidURL as e:
            logger.error("Galxe API endpoint is not a valid URL", operation=operation, error=str(e))
            raise RemoteQueryError(operation, f"invalid endpoint: {e}") from e

        except ValueError as e:
            logger.error("Galxe API returned invalid JSON", operation=operation, error=str(e))
            raise RemoteQueryError(operation, "response was not valid JSON") from e

        if not isinstance(body, dict):
            raise RemoteQueryError(operation, "unexpected response shape")

        errors = body.get("errors")
        if errors:
            messages = [str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors]
            logger.error("Galxe API GraphQL errors", operation=operation, errors=messages)
            raise RemoteQueryError(operation, "; ".join(messages), details={"errors": errors})

        data = body.get("data")
        if not isinstance(data, dict):
            raise RemoteQueryError(operation, "response carried no data")
        return data

    @track_performance("galxe_campaign")
    def fetch_campaign(self, campaign_id: str, address: str) -> ItemRecord:
        """Return a campaign with holder flag and claim count for ``address``."""
        data = self.execute("campaign", CAMPAIGN_QUERY, {"id": campaign_id, "address": address})
        payload = data.get("campaign")
        if payload is None:
            raise RemoteQueryError("campaign", f"campaign {campaign_id} not found")

        try:
            return ItemRecord.model_validate(payload)
        except ValidationError as e:
            logger.error("Campaign decode failed", campaign_id=campaign_id, error=str(e))
            raise RemoteQueryError("campaign", f"could not decode campaign {campaign_id}") from e

    @track_performance("galxe_space")
    def fetch_space(self, space_id: int) -> SpaceListing:
        """Return a space and the ids of its campaigns."""
        data = self.execute("space", SPACE_CAMPAIGNS_QUERY, {"id": space_id})
        payload = data.get("space")
        if payload is None:
            raise RemoteQueryError("space", f"space {space_id} not found")

        try:
            return SpaceListing.model_validate(payload)
        except ValidationError as e:
            logger.error("Space decode failed", space_id=space_id, error=str(e))
            raise RemoteQueryError("space", f"could not decode space {space_id}") from e
