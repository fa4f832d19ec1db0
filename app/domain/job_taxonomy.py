"""
app/domain/job_taxonomy.py

Lookup tables that classify a job by the prefix of its job_id.

The category table and the concept table are independent: every prefix
with a concept also has a category, but ELE, HID, GAS and CLI only have a
category and resolve to the generic concept.
"""

from __future__ import annotations

DEFAULT_CATEGORY = "General"
DEFAULT_CONCEPT_ID = "concepto-general"

CATEGORY_BY_PREFIX: dict[str, str] = {
    "CIM": "Cimentación",
    "EST": "Estructura",
    "ALB": "Albañilería",
    "INS": "Instalaciones",
    "ACB": "Acabados",
    "URB": "Urbanización",
    "ELE": "Eléctrico",
    "HID": "Hidráulico",
    "GAS": "Gas",
    "CLI": "Climatización",
}

CONCEPT_ID_BY_PREFIX: dict[str, str] = {
    "CIM": "cimentacion-principal",
    "EST": "estructura-principal",
    "ALB": "albanileria-general",
    "INS": "instalaciones-generales",
    "ACB": "acabados-finales",
    "URB": "urbanizacion-exterior",
}

VALID_UNITS: tuple[str, ...] = (
    "M3",
    "M2",
    "ML",
    "PZA",
    "TON",
    "KG",
    "LT",
    "GL",
    "JGO",
    "LOT",
    "SRV",
)

VALID_CATEGORY_PREFIXES: tuple[str, ...] = tuple(CATEGORY_BY_PREFIX)


def job_prefix(job_id: str) -> str:
    """
    Return the text before the first '-' of a job_id.
    """

    return job_id.split("-", 1)[0]


def category_for(job_id: str) -> str:
    return CATEGORY_BY_PREFIX.get(job_prefix(job_id), DEFAULT_CATEGORY)


def concept_id_for(job_id: str) -> str:
    return CONCEPT_ID_BY_PREFIX.get(job_prefix(job_id), DEFAULT_CONCEPT_ID)
