import multiprocessing
import os

from task_api.config import settings

# Gunicorn configuration file
# Run with: gunicorn -c gunicorn_conf.py task_api.main:app

bind = os.getenv("BIND", "0.0.0.0:8000")

# (2 x num_cores) + 1 unless overridden. Only one worker runs the digest
# scheduler; the rest skip it via the file lock in task_api.main.
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

timeout = 120
keepalive = 5

accesslog = "-"
errorlog = "-"
loglevel = settings.LOG_LEVEL.lower()

name = "task_api"
reload = not settings.is_production
