"""
Compilation handoff.

Enqueues a compile-video job for the downstream compilation worker (Redis
list as queue). Completion of the job is not observed here.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Optional

from shared.config import settings
from shared.logging import get_logger
from shared.redis_client import RedisClient, get_redis_client

logger = get_logger("video_orchestrator.compilation")

COMPILE_TASK = "compile-video"

# Job payload lifetime for the worker to pick up
JOB_TTL_SECONDS = 3600


class CompilationQueue:
    """Producer side of the compilation queue."""

    def __init__(self, redis_client: Optional[RedisClient] = None, queue_name: Optional[str] = None):
        self._redis = redis_client
        self.queue_name = queue_name or settings.queue_name

    @property
    def redis(self) -> RedisClient:
        if self._redis is None:
            self._redis = get_redis_client()
        return self._redis

    async def trigger(self, project_id: str) -> str:
        """
        Hand a project off to compilation.

        Args:
            project_id: Video project ID

        Returns:
            Run ID identifying the enqueued job

        Raises:
            Exception: Any Redis failure, unchanged
        """
        run_id = f"run_{uuid.uuid4().hex}"
        job_data = {
            "run_id": run_id,
            "task": COMPILE_TASK,
            "video_project_id": project_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        job_json = json.dumps(job_data).encode("utf-8")

        try:
            # decode_responses=False on the client, payloads go in as bytes
            await self.redis.client.lpush(f"{self.queue_name}:queue", job_json)
            await self.redis.client.set(f"{self.queue_name}:job:{run_id}", job_json, ex=JOB_TTL_SECONDS)
        except Exception as e:
            logger.error("Failed to enqueue compilation", exc_info=e, extra={"run_id": run_id})
            raise

        logger.info("Compilation triggered", extra={"run_id": run_id, "queue": self.queue_name})
        return run_id
