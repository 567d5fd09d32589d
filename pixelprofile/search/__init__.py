"""
Profile Search Module

Iterative line refinement on top of a profile model's windowed search.
"""

from pixelprofile.search.models import SearchResult
from pixelprofile.search.profile_search import ProfileSearch

__all__ = ["SearchResult", "ProfileSearch"]
