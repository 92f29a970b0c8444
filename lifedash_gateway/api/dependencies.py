"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from lifedash_gateway.infrastructure.clients.nessie import NessieClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_nessie_client() -> NessieClient:
    """Provide banking sandbox client instance"""
    return NessieClient()
