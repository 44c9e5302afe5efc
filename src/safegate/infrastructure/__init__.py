"""
Infrastructure Layer - Security check runner and secret detection.
"""

from safegate.infrastructure.secret_rules import (
    DEFAULT_RULES,
    SecretDetector,
    SecretRule,
    mask_secret,
)
from safegate.infrastructure.security_check import SecurityCheckRunner

__all__ = [
    # Security check
    "SecurityCheckRunner",
    # Secret detection
    "SecretRule",
    "SecretDetector",
    "DEFAULT_RULES",
    "mask_secret",
]
