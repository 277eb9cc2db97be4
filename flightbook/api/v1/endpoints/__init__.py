"""
API endpoints module
"""

from . import flights, health, passengers, payment, seats

__all__ = [
    "flights",
    "health",
    "passengers",
    "payment",
    "seats"
]
