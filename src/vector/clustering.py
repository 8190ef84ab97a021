"""
Greedy single-linkage clustering of cards by cosine similarity.
One pass, seeded from the highest-magnitude vector; no merge or split afterwards.
"""

from typing import Dict, List, Sequence, Tuple

from .similarity import cosine_similarity, vector_magnitude

# Magnitudes of L2-normalized vectors differ only in floating point noise
MAGNITUDE_PRECISION = 12


def cluster_key(index: int) -> str:
    return f"cluster-{index}"


def _dedupe(items: Sequence[Tuple[str, Sequence[float]]]) -> List[Tuple[str, Sequence[float]]]:
    seen = set()
    unique = []
    for item_id, vector in items:
        if item_id in seen:
            continue
        seen.add(item_id)
        unique.append((item_id, vector))
    return unique


def cluster_cards(items: Sequence[Tuple[str, Sequence[float]]], threshold: float) -> Dict[str, List[str]]:
    """
    Partition (id, vector) pairs into clusters.

    Items are visited in descending vector magnitude (ties keep input order).
    Each unprocessed item seeds ``cluster-<n>`` and pulls in every other
    unprocessed item whose similarity to the seed is at least ``threshold``,
    most similar first. Items with no close neighbor become singletons.

    Args:
        items: (id, vector) pairs; repeated ids keep their first occurrence
        threshold: Minimum similarity to the seed for membership

    Returns:
        Ordered mapping of cluster id to member ids, seed first
    """
    clusters: Dict[str, List[str]] = {}
    if not items:
        return clusters

    unique_items = _dedupe(items)
    ordered = sorted(
        unique_items,
        key=lambda item: -round(vector_magnitude(item[1]), MAGNITUDE_PRECISION)
    )

    processed = set()
    index = 0
    for seed_id, seed_vector in ordered:
        if seed_id in processed:
            continue

        members = [seed_id]
        processed.add(seed_id)

        candidates = []
        for other_id, other_vector in unique_items:
            if other_id in processed:
                continue
            score = cosine_similarity(seed_vector, other_vector)
            if score >= threshold:
                candidates.append((other_id, score))

        # sorted() is stable, so equal scores keep input order
        for other_id, _ in sorted(candidates, key=lambda candidate: -candidate[1]):
            members.append(other_id)
            processed.add(other_id)

        clusters[cluster_key(index)] = members
        index += 1

    return clusters
