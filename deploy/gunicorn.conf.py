"""
Gunicorn Configuration

Settings for running the LearnQuest API behind gunicorn:
    gunicorn -c deploy/gunicorn.conf.py learnquest.main:app

The JSON store has no cross-process locking, so there is exactly one worker.
"""
import os

# Server socket
bind = f"{os.environ.get('HOST', '0.0.0.0')}:{os.environ.get('PORT', '4000')}"
backlog = 256

# Worker processes
workers = 1
worker_class = "uvicorn.workers.UvicornWorker"
timeout = 120
keepalive = 5

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

# Process naming
proc_name = "learnquest"

# Server mechanics
daemon = False

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def when_ready(server):
    """Called just after the server is started."""
    server.log.info(f"LearnQuest ready on {bind}")
