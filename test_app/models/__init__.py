"""
Models used by the model reflector test suite.
"""

from .base import TimestampedModel
from .comment import Comment
from .customer import Customer
from .mixins import Archivable, Auditable, HasReference
from .order import Order
from .profile import CustomerProfile
from .shipment import Shipment
from .tag import Tag
from .vehicle import Vehicle
from .vehicle.car import Car
from .vehicle.truck import Truck

__all__ = [
    "Archivable",
    "Auditable",
    "Car",
    "Comment",
    "Customer",
    "CustomerProfile",
    "HasReference",
    "Order",
    "Shipment",
    "Tag",
    "TimestampedModel",
    "Truck",
    "Vehicle",
]
