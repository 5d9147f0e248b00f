"""
Camera-motion prompt templates for listing clips.
"""

from __future__ import annotations

from typing import Dict, Optional

from shared.models.video import MusicTrack

DEFAULT_NEGATIVE_PROMPT = (
    "blur, distort, low quality, warped walls, bent lines, morphing furniture, "
    "people, text, watermark, flicker, jitter"
)

# {label} is replaced with the resolved room label
ROOM_MOTION_PROMPTS: Dict[str, str] = {
    "living-room": (
        "Slow cinematic dolly forward through the {label}, smooth steady camera, "
        "soft natural light, inviting atmosphere"
    ),
    "bedroom": (
        "Gentle slow pan across the {label}, calm and serene, warm soft lighting, "
        "steady camera movement"
    ),
    "kitchen": (
        "Smooth lateral tracking shot along the {label}, highlighting countertops and finishes, "
        "bright clean light"
    ),
    "bathroom": (
        "Slow push-in on the {label}, elegant details, clean reflections, "
        "steady camera"
    ),
    "dining-room": (
        "Slow orbit around the table in the {label}, warm ambient light, "
        "smooth cinematic motion"
    ),
    "office": (
        "Slow dolly forward into the {label}, focused and tidy workspace, "
        "natural daylight, steady camera"
    ),
    "exterior": (
        "Slow aerial-style rise revealing the {label} facade, golden hour light, "
        "smooth cinematic movement"
    ),
    "garden": (
        "Gentle tracking shot through the {label}, leaves moving softly in the breeze, "
        "natural sunlight"
    ),
    "terrace": (
        "Slow pan across the {label} toward the view, open sky, "
        "soft breeze, smooth camera"
    ),
    "hallway": (
        "Smooth glide down the {label}, leading lines, balanced lighting, "
        "steady forward motion"
    ),
}

DEFAULT_MOTION_PROMPT = (
    "Slow cinematic camera movement through the {label}, smooth and steady, "
    "natural lighting, real estate showcase"
)


def resolve_room_label(room_type: Optional[str], room_label: Optional[str] = None) -> str:
    """Human label for a room: explicit label, else room type with dashes as spaces."""
    if room_label:
        return room_label
    if room_type:
        return room_type.replace("-", " ")
    return "room"


def get_motion_prompt(room_type: Optional[str], room_label: Optional[str] = None) -> str:
    """
    Build the camera-motion prompt for a room.

    Unknown or missing room types fall back to a generic walkthrough prompt.
    """
    label = resolve_room_label(room_type, room_label)
    template = ROOM_MOTION_PROMPTS.get(room_type or "", DEFAULT_MOTION_PROMPT)
    return template.format(label=label)


def build_audio_prompt(track: Optional[MusicTrack], room_label: str) -> str:
    """
    Audio clause appended to the motion prompt when native audio is on.

    Example:
        'Background audio: upbeat acoustic music inspired by "Sunrise". '
        'Ambient environmental sounds of a kitchen.'
    """
    if track:
        mood = f"{track.mood} " if track.mood else ""
        category = track.category or "instrumental"
        audio = f'Background audio: {mood}{category} music inspired by "{track.name}".'
    else:
        audio = "Background cinematic ambient music."
    return f"{audio} Ambient environmental sounds of a {room_label}."
