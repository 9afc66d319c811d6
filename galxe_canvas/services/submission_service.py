"""Submission orchestration: validate, resolve, render."""

from __future__ import annotations

from typing import Callable, Optional, Union

import structlog
from pydantic import ValidationError

from ..core.config import Settings
from ..core.exceptions import InvalidPayloadError, RemoteQueryError, SubmissionError
from ..core.models import (
    PipelineState,
    RenderedError,
    RenderedSuccess,
    ResultSet,
    SubmissionInput,
    SubmissionOutcome,
    SubmissionTarget,
    SubmitPayload,
)
from ..data.galxe_client import GalxeQueryClient
from .expander import CollectionExpander
from .render_service import render_error, render_success
from .resolver import ItemResolver
from .validator import ValidatedSubmission, validate_submission

logger = structlog.get_logger(__name__)

ClientFactory = Callable[[], GalxeQueryClient]


class SubmissionService:
    """
    Turns one widget submission into a rendered outcome.

    Flow: received -> validated -> resolving -> rendered -> responded, with
    rejected (validation) and failed (remote query) branching to an error
    canvas. A query client is opened per submission and closed before the
    outcome is returned; nothing is kept between submissions.
    """

    def __init__(self, settings: Settings, client_factory: Optional[ClientFactory] = None) -> None:
        self._settings = settings
        self._client_factory = client_factory or (lambda: GalxeQueryClient.from_settings(settings))

    def handle_payload(self, body: Union[bytes, str]) -> SubmissionOutcome:
        """Decode a raw ``/submit`` body and handle it."""
        try:
            payload = SubmitPayload.model_validate_json(body)
        except ValidationError as e:
            first = e.errors()[0]["msg"] if e.errors() else str(e)
            failure = InvalidPayloadError(
                f"Invalid request body: {first}", details={"error_count": e.error_count()}
            )
            logger.warning("Submission payload could not be decoded", error=first)
            return self._reject(failure)

        logger.info(
            "Submission received",
            conversation_id=payload.conversation_id,
            component_id=payload.component_id,
            app_id=payload.app_id,
        )
        return self.handle(payload.input_values)

    def handle(self, submission: SubmissionInput) -> SubmissionOutcome:
        """Validate, resolve and render one submission."""
        self._transition(PipelineState.RECEIVED)

        try:
            validated = validate_submission(submission)
        except SubmissionError as e:
            return self._reject(e)

        self._transition(
            PipelineState.VALIDATED,
            target=validated.target.value,
            campaign_id=validated.campaign_id,
            space_id=validated.space_id or None,
        )

        try:
            self._transition(PipelineState.RESOLVING)
            records = self._resolve(validated)
        except RemoteQueryError as e:
            logger.error(
                "Submission resolution failed",
                operation=e.operation,
                error=e.message,
                status_code=e.status_code,
            )
            self._transition(PipelineState.FAILED, failure_kind=e.kind.value)
            outcome = RenderedError(
                components=tuple(render_error(e)),
                failure_kind=e.kind,
                message=e.message,
                details=e.details,
            )
            self._transition(PipelineState.RESPONDED)
            return outcome

        outcome = RenderedSuccess(
            components=tuple(render_success(records)),
            record_count=len(records),
            target=validated.target,
        )
        self._transition(PipelineState.RENDERED, records=len(records))
        self._transition(PipelineState.RESPONDED)
        return outcome

    def _resolve(self, validated: ValidatedSubmission) -> ResultSet:
        with self._client_factory() as client:
            resolver = ItemResolver(client)
            if validated.target is SubmissionTarget.CAMPAIGN:
                return (resolver.resolve(validated.campaign_id, validated.address),)

            expander = CollectionExpander(
                client, resolver, max_workers=self._settings.fanout_max_workers
            )
            return expander.expand(validated.space_id, validated.address)

    def _reject(self, failure: SubmissionError) -> RenderedError:
        logger.warning(
            "Submission rejected",
            failure_kind=failure.kind.value,
            error=failure.message,
        )
        self._transition(PipelineState.REJECTED, failure_kind=failure.kind.value)
        outcome = RenderedError(
            components=tuple(render_error(failure)),
            failure_kind=failure.kind,
            message=failure.message,
            details=failure.details,
        )
        self._transition(PipelineState.RESPONDED)
        return outcome

    @staticmethod
    def _transition(state: PipelineState, **fields) -> None:
        logger.debug("Submission state", state=state.value, **fields)
