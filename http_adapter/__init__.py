"""
HTTP endpoints exposed to the process supervisor.
"""

from http_adapter.health_server import HealthServer

__all__ = [
    'HealthServer'
]
