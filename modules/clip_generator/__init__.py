"""
Clip generator module.

One listing photo (plus optional end frame) in, one stored clip out.
"""

from modules.clip_generator.generator import generate_clip

__all__ = ["generate_clip"]
