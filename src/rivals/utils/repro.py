from __future__ import annotations

import os
import random

import numpy as np


def seed_everything(seed: int) -> np.random.Generator:
    """Seed the global generators and return a fresh numpy generator for the game."""
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)
    return np.random.default_rng(seed)


def make_rng(seed: int | None = None) -> np.random.Generator:
    return np.random.default_rng(seed)
