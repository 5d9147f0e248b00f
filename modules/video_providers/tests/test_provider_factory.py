"""
Tests for provider selection.
"""
import pytest

from shared.errors import ValidationError
from modules.video_providers import factory
from modules.video_providers.factory import get_provider
from modules.video_providers.fal_provider import FalVideoProvider
from modules.video_providers.replicate_provider import ReplicateVideoProvider


@pytest.fixture(autouse=True)
def clear_provider_cache():
    factory._providers.clear()
    yield
    factory._providers.clear()


def test_get_provider_by_name():
    assert isinstance(get_provider("fal"), FalVideoProvider)
    assert isinstance(get_provider("replicate"), ReplicateVideoProvider)


def test_get_provider_is_case_insensitive():
    assert isinstance(get_provider("Replicate"), ReplicateVideoProvider)


def test_get_provider_defaults_to_configured_provider(monkeypatch):
    monkeypatch.setattr(factory.settings, "default_video_provider", "replicate")

    assert isinstance(get_provider(None), ReplicateVideoProvider)


def test_get_provider_reuses_adapter():
    assert get_provider("fal") is get_provider("fal")


def test_get_provider_rejects_unknown_name():
    with pytest.raises(ValidationError, match="Unknown video provider 'xai'"):
        get_provider("xai")
