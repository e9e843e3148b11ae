"""
String similarity for resolving free-text material names.

Similarity is normalized Levenshtein distance. Matching against the catalog is
case-insensitive and only accepts candidates strictly above the threshold.
"""

from typing import List, Optional, Tuple

from .material_catalog import MaterialCatalog, MaterialCatalogEntry

SIMILARITY_THRESHOLD = 0.85


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance (insert, delete, substitute all cost 1)."""
    rows = len(a) + 1
    cols = len(b) + 1
    grid = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        grid[i][0] = i
    for j in range(cols):
        grid[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            grid[i][j] = min(
                grid[i - 1][j] + 1,         # deletion
                grid[i][j - 1] + 1,         # insertion
                grid[i - 1][j - 1] + cost,  # substitution
            )

    return grid[-1][-1]


def similarity(a: str, b: str) -> float:
    """Return 1 - distance / longest length, in [0, 1]. Two empty strings are identical."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - edit_distance(a, b) / max_len


def find_best_match(
    text: str,
    catalog: MaterialCatalog,
    threshold: float = SIMILARITY_THRESHOLD
) -> Optional[MaterialCatalogEntry]:
    """
    Resolve free text to the most similar catalog entry.

    Args:
        text: Candidate material text from the document
        catalog: Catalog to search (entries are compared in catalog order)
        threshold: Minimum similarity; a candidate must score strictly above it

    Returns:
        The best entry, or None if nothing clears the threshold. Ties keep
        the entry seen first.
    """
    normalized = text.strip().lower()
    best: Optional[MaterialCatalogEntry] = None
    best_score = threshold

    for entry in catalog:
        score = similarity(normalized, entry.material_name.lower())
        if score > best_score:
            best = entry
            best_score = score

    return best


def rank_matches(
    text: str,
    catalog: MaterialCatalog,
    limit: int = 3
) -> List[Tuple[MaterialCatalogEntry, float]]:
    """Return the top catalog entries by similarity, best first (no threshold)."""
    normalized = text.strip().lower()
    scored = [
        (entry, similarity(normalized, entry.material_name.lower()))
        for entry in catalog
    ]
    # sort is stable, so catalog order breaks ties
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored[:limit]
