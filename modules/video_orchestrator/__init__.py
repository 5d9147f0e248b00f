"""
Video orchestrator module.

Project-level clip fan-out, aggregation and compilation handoff.
"""

from modules.video_orchestrator.process import start_generation

__all__ = ["start_generation"]
