"""
Video provider configuration.

Model identifiers, polling cadence and timeouts for each provider adapter.
These stay inside the adapters; the orchestrator never sees them.
"""
import os
from typing import Dict, Any

# fal.ai: Kling v2.6 Pro image-to-video, resolved through queue subscription
FAL_KLING_MODEL = os.getenv("FAL_KLING_MODEL", "fal-ai/kling-video/v2.6/pro/image-to-video")

# Upper bound for a single subscribe call (queue wait + generation)
FAL_SUBSCRIBE_TIMEOUT_SECONDS = float(os.getenv("FAL_SUBSCRIBE_TIMEOUT_SECONDS", "600"))

# Replicate: Kling v2.1 image-to-video, submit then poll
REPLICATE_KLING_MODEL = os.getenv("REPLICATE_KLING_MODEL", "kwaivgi/kling-v2.1")

# Fixed polling interval and maximum wait for Replicate predictions
REPLICATE_POLL_INTERVAL_SECONDS = float(os.getenv("REPLICATE_POLL_INTERVAL_SECONDS", "5"))
REPLICATE_MAX_WAIT_SECONDS = float(os.getenv("REPLICATE_MAX_WAIT_SECONDS", "600"))

# Terminal prediction states on Replicate
REPLICATE_TERMINAL_STATUSES = ("succeeded", "failed", "canceled")

PROVIDER_CONFIGS: Dict[str, Dict[str, Any]] = {
    "fal": {
        "supports_audio": True,
    },
    "replicate": {
        "supports_audio": False,
        # Tail frames require pro mode on Kling v2.1
        "mode": os.getenv("REPLICATE_KLING_MODE", "pro"),
    },
}

SUPPORTED_PROVIDERS = tuple(PROVIDER_CONFIGS.keys())
