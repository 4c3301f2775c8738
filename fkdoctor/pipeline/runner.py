"""
Diagnosis Runner

One stateless pass from a pasted migration error to the remediation prompt:
- Extract the constraint name with the LLM (before any database I/O)
- Open the SSH tunnel and the pooled MySQL connector
- Build the diagnostic context and render the prompt
- Release the connector and the tunnel exactly once, on every exit path
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from fkdoctor.config import Settings
from fkdoctor.connectors.base import BaseConnector
from fkdoctor.connectors.mysql import MySQLConnector
from fkdoctor.connectors.tunnel import SSHTunnel
from fkdoctor.diagnostics.builder import DiagnosticContextBuilder
from fkdoctor.diagnostics.inspector import SchemaInspector
from fkdoctor.extraction import ConstraintNameExtractor
from fkdoctor.llm.base import BaseLLMProvider
from fkdoctor.llm.openai import OpenAIProvider

logger = logging.getLogger(__name__)

TunnelFactory = Callable[[Settings], SSHTunnel]
ConnectorFactory = Callable[[Settings, str, int], BaseConnector]


def create_tunnel(settings: Settings) -> SSHTunnel:
    """SSH tunnel from the SSH gateway to the configured database endpoint."""
    return SSHTunnel(
        ssh_host=settings.ssh.host,
        ssh_port=settings.ssh.port,
        username=settings.ssh.username,
        private_key_path=settings.ssh.private_key_path,
        passphrase=settings.ssh.passphrase.get_secret_value(),
        remote_host=settings.database.host,
        remote_port=settings.database.port,
    )


def create_connector(settings: Settings, host: str, port: int) -> BaseConnector:
    """MySQL connector pointed at the local end of the tunnel."""
    return MySQLConnector(
        host=host,
        port=port,
        database=settings.database.name,
        user=settings.database.user,
        password=settings.database.password.get_secret_value(),
        pool_size=settings.database.pool_size,
        timeout=settings.database.connection_timeout,
    )


def create_provider(settings: Settings) -> BaseLLMProvider:
    return OpenAIProvider(
        api_key=settings.llm.api_key.get_secret_value(),
        model=settings.llm.model,
        temperature=settings.llm.temperature,
        timeout=settings.llm.timeout,
    )


class DiagnosisRunner:
    """
    Runs one diagnosis against the configured database.

    Usage:
        runner = DiagnosisRunner(load_settings())
        prompt = await runner.run(error_message)
    """

    def __init__(
        self,
        settings: Settings,
        provider: BaseLLMProvider | None = None,
        tunnel_factory: TunnelFactory = create_tunnel,
        connector_factory: ConnectorFactory = create_connector,
    ) -> None:
        self.settings = settings
        self.provider = provider or create_provider(settings)
        self._tunnel_factory = tunnel_factory
        self._connector_factory = connector_factory

    async def run(self, error_message: str) -> str:
        """
        Produce the remediation prompt for ``error_message``.

        Raises:
            TransportError: If the SSH tunnel cannot be opened
            ConnectionError: If the database pool cannot be created
            ConstraintNotFoundError: If the extracted name matches no foreign key
            QueryError: If an inspection query fails
        """
        start_time = time.perf_counter()
        constraint_name = await ConstraintNameExtractor(self.provider).extract(error_message)

        tunnel = self._tunnel_factory(self.settings)
        try:
            host, port = await tunnel.open()
            logger.debug("SSH connection established")

            connector = self._connector_factory(self.settings, host, port)
            try:
                await connector.connect()
                logger.debug("Successfully connected to the database over SSH")

                inspector = SchemaInspector(connector, self.settings.database.name)
                prompt = await DiagnosticContextBuilder(inspector).generate_prompt(
                    error_message, constraint_name
                )
            finally:
                await connector.close()
        finally:
            await tunnel.close()

        logger.info(
            "Diagnosis completed",
            extra={
                "constraint_name": constraint_name,
                "duration_ms": (time.perf_counter() - start_time) * 1000,
            },
        )
        return prompt
