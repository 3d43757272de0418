"""Cluster API access used by the cloner."""

from .client import EVERYTHING, ClientOptions, ClusterClient, ClusterError, ClusterHandle

__all__ = [
    "EVERYTHING",
    "ClientOptions",
    "ClusterClient",
    "ClusterError",
    "ClusterHandle",
]
