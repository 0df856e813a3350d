from celery import Celery

from immoauto.core.config import get_settings

settings = get_settings()

celery_app = Celery(
    "immoauto",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["immoauto.workers.tasks"],
)
celery_app.conf.update(
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    task_ignore_result=True,
)
