"""
Cost estimation for project video generation.

Simple formula: clip_count * unit_cost, doubled when native audio is on.
"""
from decimal import Decimal, ROUND_HALF_UP

from shared.models.video import DEFAULT_CLIP_DURATION

# Kling Pro pricing per generated second
COST_PER_SECOND_USD = Decimal("0.07")

# One default-length clip (5s)
CLIP_UNIT_COST_USD = COST_PER_SECOND_USD * DEFAULT_CLIP_DURATION

# Native audio doubles the per-clip price
AUDIO_COST_MULTIPLIER = Decimal("2")


def calculate_video_cost(clip_count: int, generate_audio: bool = False) -> Decimal:
    """
    Estimate the provider cost for a number of clips.

    Args:
        clip_count: Number of clips
        generate_audio: Whether native audio is generated

    Returns:
        Cost in USD as Decimal

    Raises:
        ValueError: If clip_count is negative
    """
    if clip_count < 0:
        raise ValueError(f"Invalid clip count: {clip_count}")

    unit_cost = CLIP_UNIT_COST_USD
    if generate_audio:
        unit_cost *= AUDIO_COST_MULTIPLIER
    return unit_cost * clip_count


def cost_to_cents(cost: Decimal) -> int:
    """Convert a USD amount to integer cents, rounding half up."""
    return int((cost * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
