"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import SignInSchema, SignUpSchema, TokenResponseSchema
from .common import InsertedIdSchema, PageQuerySchema
from .motorcycle import MotorcycleCreateSchema, MotorcycleImageSchema, MotorcycleSchema
from .user import UserSchema, UserUpdateSchema

__all__ = [
    "SignInSchema",
    "SignUpSchema",
    "TokenResponseSchema",
    "InsertedIdSchema",
    "PageQuerySchema",
    "MotorcycleCreateSchema",
    "MotorcycleImageSchema",
    "MotorcycleSchema",
    "UserSchema",
    "UserUpdateSchema",
]
