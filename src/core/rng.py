# core/rng.py
import random
from typing import Optional

import numpy as np

SEED_MASK = (1 << 64) - 1


def task_rng(seed: Optional[int], task_index: int) -> random.Random:
    """
    Returns a private generator for one render task.

    With a fixed seed the stream depends only on (seed, task_index), so the
    image does not change with worker count or completion order. With
    seed=None the generator is seeded from OS entropy.
    """
    if seed is None:
        return random.Random()
    # SeedSequence only takes non-negative entropy; negative seeds wrap to 64 bits
    state = np.random.SeedSequence([seed & SEED_MASK, task_index]).generate_state(2, dtype=np.uint64)
    return random.Random((int(state[0]) << 64) | int(state[1]))
