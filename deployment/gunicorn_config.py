"""
Gunicorn Configuration for the Retirement Planner
Production WSGI server settings (single household, served behind nginx)
"""
import os

# Server Socket
bind = os.environ.get('GUNICORN_BIND', '127.0.0.1:8000')
backlog = 512

# Worker Processes
# The default rate limiter stores counters in memory, so a small worker
# count keeps limits roughly per-process accurate.
workers = int(os.environ.get('GUNICORN_WORKERS', 2))
worker_class = 'sync'
max_requests = 1000
max_requests_jitter = 50
timeout = 60
keepalive = 5

# Logging
_log_dir = os.environ.get('LOG_DIR', 'logs')
accesslog = os.path.join(_log_dir, 'gunicorn_access.log')
errorlog = os.path.join(_log_dir, 'gunicorn_error.log')
loglevel = 'info'
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

# Process Naming
proc_name = 'retirement-planner'

# Server Mechanics
daemon = False
umask = 0o007

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def when_ready(server):
    """Called when the server is ready"""
    server.log.info("Retirement Planner ready, spawning %s workers", workers)


def worker_abort(worker):
    """Called when a worker fails to boot or times out"""
    worker.log.info("worker received SIGABRT signal")
