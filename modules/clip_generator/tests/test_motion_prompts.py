"""
Tests for motion prompt templates.
"""
from shared.models.video import MusicTrack
from modules.clip_generator.motion_prompts import (
    build_audio_prompt,
    get_motion_prompt,
    resolve_room_label,
)


def test_resolve_room_label_prefers_explicit_label():
    assert resolve_room_label("living-room", "Sunny lounge") == "Sunny lounge"


def test_resolve_room_label_replaces_dashes():
    assert resolve_room_label("dining-room") == "dining room"


def test_resolve_room_label_without_type():
    assert resolve_room_label(None) == "room"


def test_get_motion_prompt_uses_room_template():
    prompt = get_motion_prompt("kitchen")

    assert "tracking shot" in prompt
    assert "kitchen" in prompt


def test_get_motion_prompt_inserts_label():
    assert "Chef's kitchen" in get_motion_prompt("kitchen", "Chef's kitchen")


def test_get_motion_prompt_unknown_room_falls_back():
    prompt = get_motion_prompt("wine-cellar")

    assert prompt.startswith("Slow cinematic camera movement through the wine cellar")


def test_build_audio_prompt_with_track():
    track = MusicTrack(id="t1", name="Sunrise", mood="upbeat", category="acoustic")

    assert build_audio_prompt(track, "kitchen") == (
        'Background audio: upbeat acoustic music inspired by "Sunrise". '
        "Ambient environmental sounds of a kitchen."
    )


def test_build_audio_prompt_track_without_mood():
    track = MusicTrack(id="t1", name="Nocturne", category="piano")

    assert build_audio_prompt(track, "bedroom").startswith(
        'Background audio: piano music inspired by "Nocturne".'
    )


def test_build_audio_prompt_without_track():
    assert build_audio_prompt(None, "living room") == (
        "Background cinematic ambient music. Ambient environmental sounds of a living room."
    )
