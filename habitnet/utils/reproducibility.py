"""Reproducibility utilities: seeds and random generators."""

import os
import random

import numpy as np
import torch


def set_seeds(seed: int):
    """Set random seeds for reproducibility across all backends."""
    os.environ['PYTHONHASHSEED'] = str(seed)
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)


def make_generator(seed: int | None = None) -> torch.Generator:
    """Create a CPU ``torch.Generator``.

    With ``seed=None`` the generator is seeded non-deterministically, so
    callers that do not care about reproducibility still get independent
    streams.
    """
    gen = torch.Generator()
    if seed is None:
        gen.seed()
    else:
        gen.manual_seed(seed)
    return gen
