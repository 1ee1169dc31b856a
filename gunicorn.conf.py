# Gunicorn configuration file for the Ruscles backend
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:5001")
backlog = 2048

# Worker processes
workers = int(os.getenv("GUNICORN_WORKERS", "4"))
worker_class = "sync"
worker_connections = 1000
timeout = 30
keepalive = 2

# Restart workers after this many requests, to help prevent memory leaks
max_requests = 1000
max_requests_jitter = 50

preload_app = True

# Logging
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "ruscles_backend"

# Server mechanics
daemon = False
tmp_upload_dir = None
