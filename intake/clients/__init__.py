# Clients module - remote insurance platform
from .root_client import RemoteClaimClient, RootClaimClient

__all__ = ["RemoteClaimClient", "RootClaimClient"]
