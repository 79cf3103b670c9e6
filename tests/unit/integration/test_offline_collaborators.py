"""Tests for the offline stand-ins of the remote collaborators."""

import pytest

from typecore.integration import OfflineApiClient, OfflineConfiguration, get_funbox, get_funboxes


@pytest.mark.asyncio
async def test_every_request_is_offline():
    client = OfflineApiClient()

    for method, path in [("GET", "/results"), ("POST", "/results"), ("GET", "/users/personalBests")]:
        response = await client.request(method, path)
        assert response.status == 503
        assert response.body == {"message": "Offline mode"}
        assert response.ok is False

    rank = await client.get_leaderboard_rank("time", "15", "english")
    assert rank.status == 503


@pytest.mark.asyncio
async def test_configuration_gate_is_settled():
    configuration = OfflineConfiguration()

    assert await configuration.wait_ready() is True
    assert await configuration.wait_ready() is True


def test_funbox_lookup():
    assert get_funbox("mirrored").difficulty_level == 3
    assert get_funbox("nospace").can_get_pb is False
    assert get_funbox("does_not_exist") is None
    assert [fb.name for fb in get_funboxes(["tts", "nope", "memory"])] == ["tts", "memory"]
