from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import torch


def sample_neighbors(
    candidates: Iterable[int],
    k: Optional[int],
    generator: Optional[torch.Generator] = None,
) -> List[int]:
    """
    Uniform sample of at most k distinct candidates, without replacement.
    k=None keeps every candidate.
    """
    pool = sorted(candidates)
    if k is None or len(pool) <= k:
        return pool
    perm = torch.randperm(len(pool), generator=generator)[:k]
    return [pool[i] for i in perm.tolist()]


def unique_union(targets: Sequence[int], sampled: Sequence[Sequence[int]]) -> List[int]:
    """Targets first, then sampled neighbors, each node kept once in first-seen order."""
    seen = set()
    union: List[int] = []
    for group in [targets, *sampled]:
        for u in group:
            if u not in seen:
                seen.add(u)
                union.append(u)
    return union


def index_map(nodes: Sequence[int]) -> Dict[int, int]:
    return {u: i for i, u in enumerate(nodes)}


def flatten_groups(groups: Sequence[Sequence[int]], u2i: Dict[int, int]) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Flatten per-target node groups into (row, segment) index tensors.

    row[j] is the position of the j-th grouped node in the union,
    segment[j] is the position of the group (target) it belongs to.
    """
    rows = [u2i[v] for group in groups for v in group]
    segs = [i for i, group in enumerate(groups) for _ in group]
    return (
        torch.tensor(rows, dtype=torch.long),
        torch.tensor(segs, dtype=torch.long),
    )
