"""
Service Layer - ServicesContainer and factory.
"""

from safegate.services.container import ServicesContainer, create_services

__all__ = [
    "ServicesContainer",
    "create_services",
]
