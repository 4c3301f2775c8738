"""
Pipeline package for fkdoctor.

Contains the runner that owns the tunnel and connector lifecycle for one diagnosis.
"""

from fkdoctor.pipeline.runner import DiagnosisRunner, create_connector, create_tunnel

__all__ = ["DiagnosisRunner", "create_connector", "create_tunnel"]
