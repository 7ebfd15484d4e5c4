"""
Adoptions module - Ledger of which user adopted which school.
"""

from campus_revival.modules.adoptions.models import Adoption, AdoptionJournalEntry

__all__ = ["Adoption", "AdoptionJournalEntry"]
