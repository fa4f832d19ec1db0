"""
app/matching package marker.
"""

from app.matching.levenshtein import levenshtein_distance, similarity

__all__ = [
    "levenshtein_distance",
    "similarity",
]
