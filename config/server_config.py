"""
Health check server configuration settings.
"""

import os
from dataclasses import dataclass
from config.base_config import BaseConfig

@dataclass
class ServerConfig(BaseConfig):
    """Health server settings loaded from environment variables"""
    health_host: str = os.getenv("HEALTH_HOST", "0.0.0.0")
    health_port: int = int(os.getenv("PORT", "8080"))
