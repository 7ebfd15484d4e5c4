"""
Users module - Credential store for accounts and roles.
"""

from campus_revival.modules.users.models import User, UserRole
from campus_revival.modules.users.repository import UserRepository

__all__ = ["User", "UserRole", "UserRepository"]
