"""
Render service for canvas component trees.

Turns resolved campaigns, failures and the static form into the component
lists the widget host renders. Everything here is pure data transformation.
"""

from typing import Iterable, List, Optional

from galxe_canvas.core.exceptions import GalxeCanvasError
from galxe_canvas.core.models import Action, Component, ItemRecord

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"

# Action types understood by the widget host
ACTION_SUBMIT = "submit"
ACTION_INIT = "init"

INITIAL_FORM = (
    Component(type="text", text="*Check address Galxe nft balance*", style="header"),
    Component(type="spacer", size="s"),
    Component(type="input", id="address", label="User Address", placeholder="0x..."),
    Component(type="spacer", size="s"),
    Component(type="input", id="campaignId", label="campaign Id"),
    Component(type="text", text="*Or*", style="paragraph"),
    Component(type="input", id="spaceId", label="Space Id"),
    Component(type="spacer", size="s"),
    Component(
        type="button",
        id="query-address",
        label="Check Address Balance",
        style="primary",
        action=Action(type=ACTION_SUBMIT),
    ),
)


def initial_components() -> List[Component]:
    """Return the form shown when the widget is first opened."""
    return list(INITIAL_FORM)


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def render_record(record: ItemRecord) -> List[Component]:
    """Render one campaign as its block of read-only text nodes."""
    return [
        Component(type="text", text=f"Campaign ID: {record.id}", style="header"),
        Component(type="text", text=f"Name: {record.name or ''}", style="paragraph"),
        Component(
            type="text",
            text=f"Is NFT Holder: {format_bool(record.is_nft_holder)}",
            style="paragraph",
        ),
        Component(type="text", text=f"Claimed Times: {record.claimed_times}", style="paragraph"),
    ]


def render_records(records: Iterable[ItemRecord]) -> List[Component]:
    """Render campaign blocks in the order given."""
    components: List[Component] = []
    for record in records:
        components.extend(render_record(record))
    return components


def query_again_button() -> Component:
    """Trailer that re-submits the current form values."""
    return Component(
        type="button",
        id="query-again",
        label="Query Again",
        style="primary",
        action=Action(type=ACTION_SUBMIT),
    )


def render_success(records: Iterable[ItemRecord]) -> List[Component]:
    """Render campaign blocks followed by the query-again trailer."""
    components = render_records(records)
    components.append(query_again_button())
    return components


def error_message(failure: Optional[BaseException]) -> str:
    if failure is None:
        return UNKNOWN_ERROR_MESSAGE
    if isinstance(failure, GalxeCanvasError):
        message = failure.message
    else:
        message = str(failure)
    return message or UNKNOWN_ERROR_MESSAGE


def render_error(failure: Optional[BaseException] = None) -> List[Component]:
    """
    Render a failure as an error canvas.

    The refresh button re-initialises the form (``init``) rather than
    re-submitting it, so the user starts over with a clean canvas.
    """
    return [
        Component(type="text", text=f"Error: {error_message(failure)}", style="header"),
        Component(type="spacer", size="s"),
        Component(
            type="button",
            id="refresh-button",
            label="Refresh",
            style="primary",
            action=Action(type=ACTION_INIT),
        ),
    ]
