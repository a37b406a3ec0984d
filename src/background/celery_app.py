"""
Celery application configuration and setup.
"""

from celery import Celery

from src.config.settings import settings

BROKER_URL = settings.CELERY_BROKER_URL or settings.REDIS_URL
RESULT_BACKEND = settings.CELERY_RESULT_BACKEND or settings.REDIS_URL

celery_app = Celery(
    "land_clearing_proposals",
    broker=BROKER_URL,
    backend=RESULT_BACKEND,
    include=["src.background.tasks.expire_proposals"],
)

celery_app.conf.update(
    # Task routing
    task_routes={
        "expire_due_proposals_task": {"queue": "maintenance"},
    },
    # Worker configuration
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    # Task configuration
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=3600,
    task_default_queue="default",
    # Beat scheduler configuration
    beat_schedule={
        "expire-due-proposals": {
            "task": "expire_due_proposals_task",
            "schedule": float(settings.EXPIRY_SWEEP_INTERVAL_SECONDS),
            "options": {"queue": "maintenance"},
        },
    },
    # Task time limits
    task_soft_time_limit=120,
    task_time_limit=180,
    # Logging is configured by the application
    worker_hijack_root_logger=False,
)

if __name__ == "__main__":
    celery_app.start()
