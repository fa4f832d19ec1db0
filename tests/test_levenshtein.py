"""
tests/test_levenshtein.py

Pure unit tests for edit distance and normalized similarity.
"""

from __future__ import annotations

import pytest

from app.matching.levenshtein import levenshtein_distance, similarity


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("", "", 0),
        ("abc", "", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("CIM-001", "CIM-002", 1),
        ("ab", "ba", 2),
    ],
)
def test_known_distances(a: str, b: str, expected: int) -> None:
    assert levenshtein_distance(a, b) == expected


@pytest.mark.parametrize(
    ("a", "b"),
    [
        ("kitten", "sitting"),
        ("MURO DE BLOCK", "MURO BLOCK 15"),
        ("", "EST-001"),
    ],
)
def test_distance_is_symmetric(a: str, b: str) -> None:
    assert levenshtein_distance(a, b) == levenshtein_distance(b, a)


def test_identical_strings() -> None:
    assert levenshtein_distance("EXCAVACIÓN", "EXCAVACIÓN") == 0
    assert similarity("EXCAVACIÓN", "EXCAVACIÓN") == 1.0


def test_similarity_is_normalized_by_longest_string() -> None:
    assert similarity("CIM-0012", "CIM-001") == pytest.approx(1 - 1 / 8)
    assert similarity("abc", "xyz") == 0.0


def test_similarity_of_two_empty_strings() -> None:
    assert similarity("", "") == 1.0
