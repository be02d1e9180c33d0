"""
Similarity functions (cosine)
"""

import numpy as np
from typing import List


def cosine_distances(
    query_vector: List[float],
    candidate_vectors: List[List[float]]
) -> List[float]:
    """
    Cosine distance (1 - cosine similarity) from one query to many candidates (vectorized).

    Matches pgvector's `<=>` operator, so in-process ranking agrees with the
    PostgreSQL backend. Zero vectors get distance 1.0.

    Args:
        query_vector: Query embedding, shape [d]
        candidate_vectors: Candidate embeddings, shape [N, d]

    Returns:
        N distances in candidate order
    """
    if not candidate_vectors:
        return []

    query_arr = np.asarray(query_vector, dtype=float)        # Shape: [d]
    cand_arr = np.asarray(candidate_vectors, dtype=float)    # Shape: [N, d]

    query_norm = np.linalg.norm(query_arr)
    cand_norms = np.linalg.norm(cand_arr, axis=1)            # Shape: [N]

    dots = cand_arr @ query_arr
    denom = cand_norms * query_norm
    similarities = np.divide(dots, denom, out=np.zeros_like(dots), where=denom != 0)

    return [float(1.0 - s) for s in similarities]
