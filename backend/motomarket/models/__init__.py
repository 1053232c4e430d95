from motomarket.models.motorcycle import Motorcycle, MotorcycleImage
from motomarket.models.user import User

__all__ = [
    "Motorcycle",
    "MotorcycleImage",
    "User",
]
