"""
Submission pipeline services.

Validation, campaign resolution, space expansion, rendering and the
orchestrator that ties them together.
"""

from .expander import CollectionExpander
from .resolver import ItemResolver
from .submission_service import SubmissionService
from .validator import ValidatedSubmission, validate_submission

__all__ = [
    "CollectionExpander",
    "ItemResolver",
    "SubmissionService",
    "ValidatedSubmission",
    "validate_submission",
]
