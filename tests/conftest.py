"""Configure pytest fixtures and environment for the Galxe canvas tests."""

import pytest

from galxe_canvas.core.config import Settings
from tests.sample_data import FakeGalxeClient, campaign_payload, space_payload


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def fake_client():
    """Client knowing one campaign and one space of five campaigns."""
    campaigns = {
        "GCcamp1": campaign_payload("GCcamp1", name="Genesis Pass", holder=True, claimed=2),
    }
    for index in range(1, 6):
        campaign_id = f"GCspace{index}"
        campaigns[campaign_id] = campaign_payload(campaign_id, name=f"Quest {index}", claimed=index)
    spaces = {
        42: space_payload(42, [f"GCspace{index}" for index in range(1, 6)]),
        7: space_payload(7, []),
    }
    return FakeGalxeClient(campaigns=campaigns, spaces=spaces)
