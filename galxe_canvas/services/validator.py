"""Submission validation, run before any network call."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from ..core.exceptions import MalformedTargetError, MissingAddressError, MissingTargetError
from ..core.models import SubmissionInput, SubmissionTarget

SPACE_ID_PATTERN = re.compile(r"^[+-]?[0-9]+\Z")


@dataclass(frozen=True)
class ValidatedSubmission:
    """Normalised submission; ``space_id`` is 0 when no space was given."""

    address: str
    campaign_id: Optional[str]
    space_id: int

    @property
    def target(self) -> SubmissionTarget:
        # Campaign wins when both identifiers are present.
        if self.campaign_id:
            return SubmissionTarget.CAMPAIGN
        return SubmissionTarget.SPACE


def parse_space_id(value: Union[int, str, None]) -> int:
    """Parse a space id into a non-negative int; absent or blank becomes 0."""
    if value is None:
        return 0

    if isinstance(value, bool):
        raise MalformedTargetError(f"Space id must be a number, got {value!r}")

    if isinstance(value, int):
        space_id = value
    else:
        text = value.strip()
        if not text:
            return 0
        if not SPACE_ID_PATTERN.match(text):
            raise MalformedTargetError(
                f"Space id must be a number, got {text!r}", details={"space_id": text}
            )
        space_id = int(text)

    if space_id < 0:
        raise MalformedTargetError(
            f"Space id must be positive, got {space_id}", details={"space_id": space_id}
        )
    return space_id


def validate_submission(submission: SubmissionInput) -> ValidatedSubmission:
    """
    Check a submission and normalise its identifiers.

    Rules are applied in order: the address must be present, a space id must
    be numeric, and then at least one of campaign id or non-zero space id must
    be set.

    Raises:
        MissingAddressError: No wallet address
        MalformedTargetError: Space id is not a non-negative integer
        MissingTargetError: Neither a campaign nor a space was supplied
    """
    address = submission.address.strip()
    if not address:
        raise MissingAddressError("User address is required")

    space_id = parse_space_id(submission.space_id)
    campaign_id = (submission.campaign_id or "").strip() or None

    if not campaign_id and space_id == 0:
        raise MissingTargetError("Space id or campaign id is required")

    return ValidatedSubmission(address=address, campaign_id=campaign_id, space_id=space_id)
