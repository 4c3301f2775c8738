"""
Database Connectors Module

Provides the async query-execution handle and the SSH transport it runs over.

Available Components:
    - BaseConnector: Abstract base class
    - MySQLConnector: Pooled MySQL connector (mysql-connector-python)
    - SSHTunnel: Local port forward over SSH (sshtunnel)

Usage:
    from fkdoctor.connectors import MySQLConnector, SSHTunnel

    tunnel = SSHTunnel(ssh_host="bastion", ssh_port=22, ...)
    host, port = await tunnel.open()
    connector = MySQLConnector(host=host, port=port, database="mautic", ...)
    await connector.connect()
"""

from fkdoctor.connectors.base import (
    BaseConnector,
    ConnectionError,
    ConnectorError,
    QueryError,
    QueryResult,
)
from fkdoctor.connectors.mysql import MySQLConnector
from fkdoctor.connectors.tunnel import SSHTunnel, TransportError

__all__ = [
    "BaseConnector",
    "MySQLConnector",
    "SSHTunnel",
    "QueryResult",
    "ConnectorError",
    "ConnectionError",
    "QueryError",
    "TransportError",
]
