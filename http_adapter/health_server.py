"""
Liveness endpoint for the hosting platform.
"""

import logging
from typing import Optional
from aiohttp import web

logger = logging.getLogger(__name__)

class HealthServer:
    """Answers ``GET /health`` with ``OK`` as soon as the port is bound

    The reply does not depend on storage or the Telegram connection: the
    platform has to see the process alive while the slower startup stages
    are still running.
    """

    def __init__(self, host: str = "0.0.0.0", port: int = 8080):
        self.host = host
        self.port = port
        self.runner: Optional[web.AppRunner] = None

    def create_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/health", self.handle_health)
        return app

    async def handle_health(self, request: web.Request) -> web.Response:
        return web.Response(text="OK")

    async def start(self) -> None:
        """Bind the port and start answering health checks"""
        self.runner = web.AppRunner(self.create_app(), access_log=None)
        await self.runner.setup()
        site = web.TCPSite(self.runner, self.host, self.port)
        await site.start()
        # Port 0 asks the OS for a free port
        if self.port == 0 and self.runner.addresses:
            self.port = self.runner.addresses[0][1]
        logger.info(f"Health check server running on port {self.port}")

    async def stop(self) -> None:
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
            logger.info("Health check server stopped")
