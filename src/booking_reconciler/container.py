"""
Dependency injection container for booking reconciliation components
"""

from typing import Any, Dict, Optional

import structlog

from .clients.reservation_api_client import ReservationAPIClient
from .config import config
from .interfaces.reservation_api import ReservationAPIInterface
from .services import (
    BatchOrchestrator,
    IdentityFallbackRetriever,
    Reconciler,
    ResultsLog,
    TokenAcquirer,
)

logger = structlog.get_logger()


class ServiceContainer:
    """
    Holds the shared reservation API client and the services built on it
    for the lifetime of the application.
    """

    def __init__(self):
        self._singletons: Dict[str, Any] = {}
        self._initialized = False

    async def initialize(self, client: Optional[ReservationAPIInterface] = None):
        """Initialize all services and their dependencies"""
        if self._initialized:
            return

        logger.info("Initializing service container")

        client = client or ReservationAPIClient()
        results_log = ResultsLog()

        self._singletons["reservation_client"] = client
        self._singletons["results_log"] = results_log
        self._singletons["orchestrator"] = BatchOrchestrator(
            client,
            token_acquirer=TokenAcquirer(client),
            retriever=IdentityFallbackRetriever(client),
            reconciler=Reconciler(config.reconciliation.timezone),
            results_log=results_log,
            identities=config.reservation_api.identities,
        )

        self._initialized = True
        logger.info(
            "Service container initialized successfully",
            identities=len(config.reservation_api.identities),
            results_log=str(results_log.path) if results_log.enabled else None,
        )

    async def cleanup(self):
        """Release the HTTP client and reset the container"""
        client = self._singletons.get("reservation_client")
        if client is not None:
            await client.close()

        self._singletons.clear()
        self._initialized = False
        logger.info("Service container cleaned up")

    def is_initialized(self) -> bool:
        return self._initialized

    def get_orchestrator(self) -> BatchOrchestrator:
        """Get the batch orchestrator"""
        if not self._initialized:
            raise RuntimeError("Service container not initialized")
        return self._singletons["orchestrator"]

    def list_services(self) -> Dict[str, str]:
        """List registered services by type name"""
        return {name: type(service).__name__ for name, service in self._singletons.items()}


# Global container instance
container = ServiceContainer()
