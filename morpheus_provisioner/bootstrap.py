"""Application bootstrap: configuration, logging and wiring."""

from __future__ import annotations

from typing import Optional

from morpheus_provisioner.application.provisioning.orchestrator import ProvisionOrchestrator
from morpheus_provisioner.config.manager import ConfigurationManager
from morpheus_provisioner.config.schemas import ClientConfig, LoggingConfig, ProvisioningConfig
from morpheus_provisioner.infrastructure.logging.logger import get_logger, setup_logging
from morpheus_provisioner.infrastructure.morpheus.client import MorpheusClient


class Application:
    """Application context holding the configured client and orchestrator."""

    def __init__(self, config_path: Optional[str] = None,
                 config_manager: Optional[ConfigurationManager] = None) -> None:
        self.config_path = config_path
        self._config_manager = config_manager or ConfigurationManager(config_path)
        self._client: Optional[MorpheusClient] = None
        self._orchestrator: Optional[ProvisionOrchestrator] = None
        self.logger = get_logger(__name__)

    def initialize(self, log_level: Optional[str] = None) -> None:
        """Load configuration, set up logging and build the collaborators."""
        logging_config = self._config_manager.get_typed(LoggingConfig)
        if log_level:
            logging_config = logging_config.model_copy(update={"level": log_level.upper()})
        setup_logging(logging_config)

        client_config = self._config_manager.get_typed(ClientConfig)
        self._client = MorpheusClient.from_config(client_config)
        self._orchestrator = ProvisionOrchestrator(
            self._client,
            config=self._config_manager.get_typed(ProvisioningConfig),
        )
        self.logger.info("Application initialized", url=client_config.url)

    @property
    def orchestrator(self) -> ProvisionOrchestrator:
        if self._orchestrator is None:
            self.initialize()
        return self._orchestrator

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._orchestrator = None

    def __enter__(self) -> Application:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


def create_application(config_path: Optional[str] = None,
                       log_level: Optional[str] = None) -> Application:
    """Create and initialize an application."""
    app = Application(config_path)
    app.initialize(log_level=log_level)
    return app
