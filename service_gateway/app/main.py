"""
Storefront gateway service.
"""

from typing import Dict, Optional

import httpx
from fastapi import Request

from shared.base_service import BaseService
from shared.config import GatewayConfig
from service_gateway.app.adapters.upstream_client import UpstreamClient
from service_gateway.app.domain.credentials import CredentialChecker
from service_gateway.app.domain.front_door import FrontDoor, FrontDoorMiddleware
from service_gateway.app.domain.translators import AuthTranslator, CatalogTranslator, OrderTranslator


class GatewayService(BaseService):
    """Backend-for-frontend gateway implementation."""

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        upstream_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.front_door = FrontDoor()
        super().__init__("gateway", config)

        self.upstream_client = UpstreamClient(
            self.config.upstream_base_url,
            metrics=self.metrics,
            transport=upstream_transport,
        )
        self.credential_checker = CredentialChecker(self.config.auth_passkey, metrics=self.metrics)

        self.auth_translator = AuthTranslator(self.credential_checker)
        self.catalog_translator = CatalogTranslator(self.upstream_client)
        self.order_translator = OrderTranslator(self.upstream_client)

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.upstream_client.close()

        self._setup_gateway_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    def _setup_middleware(self):
        """Install the front door inside the request timing middleware."""
        self.app.add_middleware(FrontDoorMiddleware, front_door=self.front_door, metrics=self.metrics)
        super()._setup_middleware()

    def _error_headers(self, request: Request) -> Dict[str, str]:
        # Unexpected errors skip the front door, so CORS is added here
        accepted = self.front_door.accepted_method(request.url.path)
        return self.front_door.cors_headers(accepted) if accepted else {}

    def _setup_gateway_routes(self):
        """Set up the client-facing routes."""
        self.front_door.register("/auth", "POST")
        self.front_door.register("/products", "GET")
        self.front_door.register("/order", "POST")

        @self.app.post("/auth")
        async def authenticate(request: Request):
            """Compare the submitted passkey with the configured one."""
            return await self.auth_translator.handle(await request.body())

        @self.app.get("/products")
        async def list_products():
            """Relay the upstream product catalog."""
            return await self.catalog_translator.handle()

        @self.app.post("/order")
        async def place_order(request: Request):
            """Forward an order to the upstream service."""
            return await self.order_translator.handle(await request.body())


def create_app(config: Optional[GatewayConfig] = None, upstream_transport: Optional[httpx.AsyncBaseTransport] = None):
    """Create FastAPI application."""
    service = GatewayService(config, upstream_transport=upstream_transport)
    return service.app


if __name__ == "__main__":
    service = GatewayService()
    service.run()
