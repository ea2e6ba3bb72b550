import random


def make_rng(seed=None):
    return random.Random(seed)


def rand_range(rng, low, high):
    """Uniform float in [low, high)."""
    return low + rng.random() * (high - low)
