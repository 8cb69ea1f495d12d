"""
Service context extraction for log lines.

Identifies the running process as `<service>@<env>:<instance>` so lines
from several API replicas can be told apart.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'event-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers expose a short hostname, local runs fall back to the PID
    instance = os.getenv('HOSTNAME') or socket.gethostname()
    if not instance or deploy_env == 'local_dev':
        instance = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance[:12]}'
