"""Transports for talking to management controllers."""

from redpower.remote.base import Transport, TransportError, TransportResponse
from redpower.remote.https import HTTPSTransport

__all__ = ["HTTPSTransport", "Transport", "TransportError", "TransportResponse"]
