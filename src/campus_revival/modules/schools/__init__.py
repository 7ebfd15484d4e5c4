"""
Schools module - Registry of schools available for adoption.
"""

from campus_revival.modules.schools.models import School
from campus_revival.modules.schools.repository import SchoolRepository

__all__ = ["School", "SchoolRepository"]
