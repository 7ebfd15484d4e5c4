"""
Journal module - Standalone prayer journal entries.
"""

from campus_revival.modules.journal.models import JournalEntry

__all__ = ["JournalEntry"]
