"""Clients for HTTP services outside this process."""

from authdemo.infrastructure.external.admin_proxy_http import HttpAdminProxy

__all__ = ["HttpAdminProxy"]
