"""Configuration module for redpower.

This module contains configuration classes for BMC connections.
"""

from redpower.config.config import DEFAULT_TIMEOUT, RunConfig, Target, TrustMode


__all__ = ["DEFAULT_TIMEOUT", "RunConfig", "Target", "TrustMode"]
