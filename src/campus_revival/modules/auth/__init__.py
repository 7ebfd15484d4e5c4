"""Authentication module."""

from campus_revival.modules.auth.router import router
from campus_revival.modules.auth.schemas import AuthResponse, LoginRequest, RegisterRequest

__all__ = ["router", "AuthResponse", "LoginRequest", "RegisterRequest"]
