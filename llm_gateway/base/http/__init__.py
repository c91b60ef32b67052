"""HTTP utilities package: pooled httpx clients and proxy resolution."""

from .client import close_all_clients, get_httpx_client, resolve_proxy

__all__ = ["get_httpx_client", "close_all_clients", "resolve_proxy"]
