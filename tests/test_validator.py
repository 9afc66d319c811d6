"""Validate submission checks that run before any network call."""

import pytest

from galxe_canvas.core.exceptions import (
    MalformedTargetError,
    MissingAddressError,
    MissingTargetError,
)
from galxe_canvas.core.models import FailureKind, SubmissionInput, SubmissionTarget
from galxe_canvas.services.validator import parse_space_id, validate_submission
from tests.sample_data import ADDRESS


class TestValidateSubmission:
    """Rules are applied in order: address, space id format, target present."""

    @pytest.mark.parametrize(
        "values",
        [
            {"address": ""},
            {"address": "   ", "campaignId": "GCcamp1"},
            {"address": "", "spaceId": "42"},
            {"address": "", "spaceId": "not-a-number", "campaignId": "GCcamp1"},
            {"campaignId": "GCcamp1"},
        ],
    )
    def test_missing_address_wins_over_everything(self, values):
        with pytest.raises(MissingAddressError) as exc_info:
            validate_submission(SubmissionInput.model_validate(values))
        assert exc_info.value.kind is FailureKind.MISSING_ADDRESS

    @pytest.mark.parametrize(
        "values",
        [
            {},
            {"campaignId": ""},
            {"campaignId": "  "},
            {"spaceId": ""},
            {"spaceId": "0"},
            {"spaceId": 0},
            {"campaignId": "", "spaceId": "0"},
        ],
    )
    def test_missing_target(self, values):
        with pytest.raises(MissingTargetError) as exc_info:
            validate_submission(SubmissionInput(address=ADDRESS, **_by_alias(values)))
        assert exc_info.value.kind is FailureKind.MISSING_TARGET

    @pytest.mark.parametrize("space_id", ["abc", "12abc", "-3", -3, "1.5"])
    def test_malformed_space_id(self, space_id):
        with pytest.raises(MalformedTargetError) as exc_info:
            validate_submission(SubmissionInput(address=ADDRESS, space_id=space_id))
        assert exc_info.value.kind is FailureKind.MALFORMED_TARGET

    def test_malformed_space_id_rejected_even_with_campaign(self):
        submission = SubmissionInput(address=ADDRESS, campaign_id="GCcamp1", space_id="oops")
        with pytest.raises(MalformedTargetError):
            validate_submission(submission)

    def test_campaign_submission(self):
        validated = validate_submission(
            SubmissionInput(address=f"  {ADDRESS} ", campaign_id=" GCcamp1 ")
        )
        assert validated.address == ADDRESS
        assert validated.campaign_id == "GCcamp1"
        assert validated.space_id == 0
        assert validated.target is SubmissionTarget.CAMPAIGN

    def test_space_submission(self):
        validated = validate_submission(SubmissionInput(address=ADDRESS, space_id=" 42 "))
        assert validated.campaign_id is None
        assert validated.space_id == 42
        assert validated.target is SubmissionTarget.SPACE

    def test_campaign_takes_precedence_over_space(self):
        validated = validate_submission(
            SubmissionInput(address=ADDRESS, campaign_id="GCcamp1", space_id="42")
        )
        assert validated.target is SubmissionTarget.CAMPAIGN
        assert validated.space_id == 42

    @pytest.mark.parametrize(
        "space_id", ["true", "false", "1.0", "\"4_2\"", "\"\\uff14\\uff12\"", "\"\\u0664\\u0662\""]
    )
    def test_malformed_space_id_from_json_payload(self, space_id):
        submission = SubmissionInput.model_validate_json(
            f'{{"address": "{ADDRESS}", "spaceId": {space_id}}}'
        )
        with pytest.raises(MalformedTargetError) as exc_info:
            validate_submission(submission)
        assert exc_info.value.kind is FailureKind.MALFORMED_TARGET

    def test_numeric_identifiers_from_payload(self):
        submission = SubmissionInput.model_validate(
            {"address": ADDRESS, "campaignId": 123, "spaceId": 42}
        )
        validated = validate_submission(submission)
        assert validated.campaign_id == "123"
        assert validated.space_id == 42


class TestParseSpaceId:
    @pytest.mark.parametrize(
        "value,expected",
        [(None, 0), ("", 0), ("  ", 0), ("0", 0), ("7", 7), (" 42", 42), (42, 42)],
    )
    def test_parses(self, value, expected):
        assert parse_space_id(value) == expected

    def test_bool_is_not_a_space_id(self):
        with pytest.raises(MalformedTargetError):
            parse_space_id(True)

    @pytest.mark.parametrize("text", ["4_2", "\uff14\uff12", "\u0664\u0662", "1e3", "0x2a"])
    def test_only_ascii_digits(self, text):
        with pytest.raises(MalformedTargetError):
            parse_space_id(text)


def _by_alias(values):
    names = {"campaignId": "campaign_id", "spaceId": "space_id"}
    return {names[key]: value for key, value in values.items()}
