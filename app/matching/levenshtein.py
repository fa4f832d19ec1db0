"""
app/matching/levenshtein.py

Edit distance and normalized similarity used for near-duplicate hints.
"""

from __future__ import annotations


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic Levenshtein distance with unit costs and no transpositions.

    The full (len(b) + 1) x (len(a) + 1) matrix is built with ``a`` as the
    longer string.
    """

    if len(b) > len(a):
        a, b = b, a

    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for j in range(len(a) + 1):
        matrix[0][j] = j
    for i in range(len(b) + 1):
        matrix[i][0] = i

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            cost = 0 if b[i - 1] == a[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j - 1] + cost,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j] + 1,
            )

    return matrix[len(b)][len(a)]


def similarity(a: str, b: str) -> float:
    """
    Return ``1 - distance / max(len(a), len(b))``; two empty strings score 1.0.
    """

    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest
