"""
Gunicorn production config for the tour admin dashboard

Every value can be overridden from the environment (or .env):
  GUNICORN_BIND, GUNICORN_WORKERS, GUNICORN_WORKER_CONNECTIONS,
  GUNICORN_MAX_REQUESTS, GUNICORN_MAX_REQUESTS_JITTER, GUNICORN_TIMEOUT,
  GUNICORN_KEEPALIVE, GUNICORN_GRACEFUL_TIMEOUT, GUNICORN_LOG_LEVEL

Run with: gunicorn -c gunicorn_conf.py tour_admin.main:app
"""
import multiprocessing
import os

bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")

# (2 x cores) + 1; the in-memory TTL cache is per worker, set REDIS_URL to share it
workers = int(os.getenv("GUNICORN_WORKERS", (2 * multiprocessing.cpu_count()) + 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = int(os.getenv("GUNICORN_WORKER_CONNECTIONS", 1000))

max_requests = int(os.getenv("GUNICORN_MAX_REQUESTS", 1000))
max_requests_jitter = int(os.getenv("GUNICORN_MAX_REQUESTS_JITTER", 50))

# uploads to the backend may take up to UPLOAD_TIMEOUT (60s)
timeout = int(os.getenv("GUNICORN_TIMEOUT", 90))
keepalive = int(os.getenv("GUNICORN_KEEPALIVE", 5))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", 30))

preload_app = True

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

proc_name = "tour-admin-dashboard"


def on_starting(server):
    server.log.info(f"Starting tour admin dashboard with {workers} workers")


def worker_int(worker):
    worker.log.info(f"Worker {worker.pid} received SIGINT/SIGQUIT")


def on_exit(server):
    server.log.info("Tour admin dashboard shutting down")
