"""
SSH Tunnel

Forwards the remote database port to a local ephemeral port over SSH using
sshtunnel (paramiko). The MySQL connector then connects to the local end.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from sshtunnel import BaseSSHTunnelForwarderError, SSHTunnelForwarder

logger = logging.getLogger(__name__)

# Passing our own logger keeps sshtunnel from installing its console handler.
FORWARDER_LOGGER = "sshtunnel.SSHTunnelForwarder"


class TransportError(Exception):
    """Error establishing the SSH tunnel to the database host."""

    pass


class SSHTunnel:
    """
    Local port forward to a database reachable from an SSH server.

    Usage:
        tunnel = SSHTunnel(ssh_host="bastion", ssh_port=22, ...)
        try:
            local_host, local_port = await tunnel.open()
            ...
        finally:
            await tunnel.close()
    """

    def __init__(
        self,
        ssh_host: str,
        ssh_port: int,
        username: str,
        private_key_path: Path,
        passphrase: str,
        remote_host: str,
        remote_port: int,
        local_host: str = "127.0.0.1",
    ) -> None:
        self.ssh_host = ssh_host
        self.ssh_port = ssh_port
        self.username = username
        self.private_key_path = private_key_path
        self.passphrase = passphrase
        self.remote_host = remote_host
        self.remote_port = remote_port
        self.local_host = local_host

        self._forwarder: SSHTunnelForwarder | None = None

    async def open(self) -> tuple[str, int]:
        """
        Start the forwarder.

        Returns:
            (host, port) of the local end of the tunnel

        Raises:
            TransportError: If the SSH connection or the forward fails
        """
        if self._forwarder is not None and self._forwarder.is_active:
            return self.local_host, self._forwarder.local_bind_port

        try:
            self._forwarder = SSHTunnelForwarder(
                (self.ssh_host, self.ssh_port),
                ssh_username=self.username,
                ssh_pkey=str(self.private_key_path),
                ssh_private_key_password=self.passphrase,
                remote_bind_address=(self.remote_host, self.remote_port),
                local_bind_address=(self.local_host, 0),
                logger=logging.getLogger(FORWARDER_LOGGER),
            )
            await asyncio.to_thread(self._forwarder.start)
        except BaseSSHTunnelForwarderError as exc:
            logger.debug(f"SSH tunnel failed: {exc}")
            raise TransportError(
                f"Failed to open SSH tunnel to {self.ssh_host}:{self.ssh_port}: {exc}"
            ) from exc
        except Exception as exc:
            # paramiko key and socket errors surface here
            logger.debug(f"SSH tunnel failed: {exc}")
            raise TransportError(f"SSH tunnel error: {exc}") from exc

        local_port = self._forwarder.local_bind_port
        logger.debug(
            "SSH tunnel established",
            extra={
                "ssh_host": self.ssh_host,
                "remote": f"{self.remote_host}:{self.remote_port}",
                "local_port": local_port,
            },
        )
        return self.local_host, local_port

    async def close(self) -> None:
        """Stop the forwarder. Safe to call if open() failed or never ran."""
        forwarder, self._forwarder = self._forwarder, None
        if forwarder is None:
            return
        await asyncio.to_thread(forwarder.stop)
        logger.debug("SSH tunnel closed")

    @property
    def is_open(self) -> bool:
        return self._forwarder is not None and self._forwarder.is_active
