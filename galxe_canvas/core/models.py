"""
Data models and type definitions for the Galxe canvas service.

Covers the inbound widget payload, the decoded GraphQL entities, the canvas
component tree returned to the widget host and the tagged submission outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


class FailureKind(str, Enum):
    """Tags carried by every failure a submission can produce."""

    MISSING_ADDRESS = "MissingAddress"
    MISSING_TARGET = "MissingTarget"
    MALFORMED_TARGET = "MalformedTarget"
    INVALID_PAYLOAD = "InvalidPayload"
    REMOTE_QUERY_FAILED = "RemoteQueryFailed"
    ENCODING_FAILED = "EncodingFailed"


class SubmissionTarget(str, Enum):
    """Which resolution path a validated submission takes."""

    CAMPAIGN = "campaign"
    SPACE = "space"


class PipelineState(str, Enum):
    """States a submission passes through on its way to a response."""

    RECEIVED = "received"
    VALIDATED = "validated"
    REJECTED = "rejected"
    RESOLVING = "resolving"
    RENDERED = "rendered"
    FAILED = "failed"
    RESPONDED = "responded"


# Inbound payload


class SubmissionInput(BaseModel):
    """Form values the widget sends with a submit action."""

    address: str = Field(default="")
    campaign_id: Optional[str] = Field(default=None, alias="campaignId")
    space_id: Optional[Union[StrictInt, StrictStr]] = Field(default=None, alias="spaceId")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("address", mode="before")
    @classmethod
    def parse_address(cls, v):
        """Treat a null address like an empty one."""
        return "" if v is None else v

    @field_validator("campaign_id", mode="before")
    @classmethod
    def parse_campaign_id(cls, v):
        """Accept numeric campaign ids from the widget."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("space_id", mode="before")
    @classmethod
    def parse_space_id(cls, v):
        """Pass non-integer scalars through as text so they fail as malformed."""
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, float):
            return repr(v)
        return v


class SubmitPayload(BaseModel):
    """Envelope posted by the widget host to ``/submit``."""

    conversation_id: Optional[int] = None
    inbox_app_id: Optional[int] = None
    admin_id: Optional[int] = None
    app_id: Optional[str] = None
    user_id: Optional[str] = None
    component_id: Optional[str] = None
    input_values: SubmissionInput = Field(default_factory=SubmissionInput)
    current_canvas: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True, extra="ignore")


# Galxe entities


class _GalxeEntity(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class SpaceSummary(_GalxeEntity):
    """Owning space of a campaign."""

    id: str = ""
    name: Optional[str] = None
    is_verified: bool = Field(default=False, alias="isVerified")


class NftCore(_GalxeEntity):
    """NFT contract a campaign mints from."""

    id: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None
    contract_address: Optional[str] = Field(default=None, alias="contractAddress")
    chain: Optional[str] = None


class ItemRecord(_GalxeEntity):
    """Resolved campaign data for one wallet address."""

    id: str
    name: Optional[str] = None
    status: Optional[str] = None
    space: Optional[SpaceSummary] = None
    nft_core: Optional[NftCore] = Field(default=None, alias="nftCore")
    is_nft_holder: bool = Field(default=False, alias="isNFTHolder")
    claimed_times: int = Field(default=0, alias="claimedTimes")

    @field_validator("is_nft_holder", mode="before")
    @classmethod
    def parse_holder(cls, v):
        return False if v is None else v

    @field_validator("claimed_times", mode="before")
    @classmethod
    def parse_claimed_times(cls, v):
        return 0 if v is None else v


class CampaignRef(_GalxeEntity):
    id: str


class CampaignPage(_GalxeEntity):
    total_count: int = Field(default=0, alias="totalCount")
    items: List[CampaignRef] = Field(default_factory=list, alias="list")

    @field_validator("items", mode="before")
    @classmethod
    def parse_items(cls, v):
        return v or []


class SpaceListing(_GalxeEntity):
    """A space together with the ids of its campaigns."""

    id: str
    name: Optional[str] = None
    campaigns: CampaignPage = Field(default_factory=CampaignPage)

    @property
    def member_ids(self) -> List[str]:
        """Campaign ids in the order the query service returned them."""
        return [ref.id for ref in self.campaigns.items]


ResultSet = Tuple[ItemRecord, ...]


# Canvas component tree


class Action(BaseModel):
    type: str

    model_config = ConfigDict(frozen=True)


class Option(BaseModel):
    type: str
    id: str
    text: str

    model_config = ConfigDict(frozen=True)


class Component(BaseModel):
    """One node of the canvas the widget host renders."""

    type: str
    text: Optional[str] = None
    style: Optional[str] = None
    id: Optional[str] = None
    label: Optional[str] = None
    placeholder: Optional[str] = None
    size: Optional[str] = None
    action: Optional[Action] = None
    options: Optional[List[Option]] = None

    model_config = ConfigDict(frozen=True)


class Content(BaseModel):
    components: List[Component] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Canvas(BaseModel):
    content: Content

    model_config = ConfigDict(frozen=True)


class CanvasResponse(BaseModel):
    """Response envelope shared by ``/init`` and ``/submit``."""

    canvas: Canvas

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_components(cls, components: List[Component]) -> "CanvasResponse":
        return cls(canvas=Canvas(content=Content(components=list(components))))


# Submission outcomes


@dataclass(frozen=True)
class RenderedSuccess:
    """Records resolved and rendered with the query-again trailer."""

    components: Tuple[Component, ...]
    record_count: int
    target: SubmissionTarget

    is_error = False

    def envelope(self) -> CanvasResponse:
        return CanvasResponse.from_components(list(self.components))


@dataclass(frozen=True)
class RenderedError:
    """A failure rendered as an error canvas with the refresh button."""

    components: Tuple[Component, ...]
    failure_kind: Optional[FailureKind]
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    is_error = True

    def envelope(self) -> CanvasResponse:
        return CanvasResponse.from_components(list(self.components))


SubmissionOutcome = Union[RenderedSuccess, RenderedError]
