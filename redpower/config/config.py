#!/usr/bin/env python3
"""Configuration classes for redpower.

This module contains the connection and run configuration dataclasses
passed from the command line into the power controller.
"""

from dataclasses import dataclass, field
from enum import Enum


DEFAULT_TIMEOUT = 30


class TrustMode(Enum):
    """TLS certificate trust policy for BMC connections."""

    VERIFY = "verify"
    SKIP_VERIFY = "skip-verify"


@dataclass(frozen=True)
class Target:
    """Connection parameters for a single BMC.

    Attributes:
        host: BMC address and optional port (host or host:port)
        user: BMC username
        password: BMC password
        trust_mode: Certificate validation policy (full verification by default)
        timeout: Per-request timeout in seconds
    """

    host: str
    user: str
    password: str = field(repr=False)
    trust_mode: TrustMode = TrustMode.VERIFY
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host must not be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def verify_tls(self) -> bool:
        return self.trust_mode is TrustMode.VERIFY

    @property
    def base_url(self) -> str:
        return f"https://{self.host}/"


@dataclass(frozen=True)
class RunConfig:
    """Settings for a single redpower invocation.

    Attributes:
        target: BMC connection parameters
        debug: Expose raw response bodies of failed requests
        quiet: Suppress everything except results and errors
        ignore_conflict: Treat HTTP 409 on a power action as success
    """

    target: Target
    debug: bool = False
    quiet: bool = False
    ignore_conflict: bool = False
