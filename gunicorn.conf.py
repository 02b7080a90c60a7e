"""
Admin Dashboard - Gunicorn WSGI Server Configuration

Thread-based workers; each worker releases the persistence gateway's
database connections on exit.
"""

import multiprocessing
import os
import logging

# =============================================================================
# ENVIRONMENT DETECTION
# =============================================================================

IS_PRODUCTION = os.getenv("PRODUCTION") == "true"

# Configure logging early
logging.basicConfig(
    level=logging.INFO if IS_PRODUCTION else logging.DEBUG,
    format='[%(asctime)s] %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# =============================================================================
# SERVER BINDING
# =============================================================================

PORT = int(os.getenv("PORT", 8000))
bind = [f"0.0.0.0:{PORT}"]
wsgi_app = "admindash.wsgi:application"


# =============================================================================
# WORKERS
# =============================================================================

workers = int(os.getenv("WEB_CONCURRENCY", min((multiprocessing.cpu_count() * 2) + 1, 9)))
worker_class = "gthread"  # Thread-based workers for Django
threads = int(os.getenv("GUNICORN_THREADS", 4))

max_requests = int(os.getenv("GUNICORN_MAX_REQUESTS", 1000))
max_requests_jitter = int(os.getenv("GUNICORN_MAX_REQUESTS_JITTER", 100))


# =============================================================================
# TIMEOUT & RESOURCE LIMITS
# =============================================================================

timeout = 60
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", 10))
keepalive = 5

# Profile images are at most 5MB; the body limit itself is Django's.
limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190


# =============================================================================
# PROXY & LOGGING
# =============================================================================

forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "*")
if IS_PRODUCTION:
    secure_scheme_headers = {
        "X-FORWARDED-PROTO": "https",
    }

accesslog = "-"
errorlog = "-"
loglevel = "info" if IS_PRODUCTION else "debug"
capture_output = True

access_log_format = (
    '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s '
    '"%(f)s" "%(a)s" response_time=%(D)s_us worker_id=%(p)s'
)

proc_name = "admindash"


# =============================================================================
# HOOKS
# =============================================================================

def when_ready(server):
    logger.info(f"Gunicorn ready at {server.address} with {workers} workers")


def worker_exit(server, worker):
    """
    Called in the worker just after it exits.
    Releases the gateway's connections for this process.
    """
    try:
        from django.apps import apps
        if apps.ready:
            apps.get_app_config("invoices").gateway.close()
            logger.info(f"Worker {worker.pid}: persistence gateway closed")
    except Exception as e:
        logger.warning(f"Worker {worker.pid}: failed to close persistence gateway: {e}")


def on_exit(server):
    logger.info("Gunicorn shutting down gracefully...")
