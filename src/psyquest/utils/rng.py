"""
rng.py
------

Random number utilities for psyquest.

Observer simulation and posterior sampling take explicit JAX PRNG keys and
never touch global random state. Functions that need randomness accept
either a key or an integer seed; ``as_key`` normalizes the two.

Examples
--------
>>> from psyquest.utils.rng import as_key, seed, split
>>> key = seed(0)
>>> key, subkey = split(key)
>>> as_key(7).shape
(2,)
"""

from __future__ import annotations

import jax
import jax.random as jr


def seed(seed_value: int) -> jax.Array:
    """
    Create a new PRNG key from an integer seed.

    Parameters
    ----------
    seed_value : int
        Seed for random number generation.

    Returns
    -------
    jax.Array
        New PRNG key.
    """
    return jr.PRNGKey(seed_value)


def as_key(key_or_seed) -> jax.Array:
    """Return ``key_or_seed`` as a PRNG key, seeding it if it is an int."""
    if isinstance(key_or_seed, bool):
        raise TypeError("a PRNG seed must be an int, not bool")
    if isinstance(key_or_seed, int):
        return seed(key_or_seed)
    return key_or_seed


def split(key: jax.Array, num: int = 2) -> jax.Array:
    """
    Split a PRNG key into ``num`` independent keys.

    The result unpacks like a tuple: ``key, subkey = split(key)``.
    """
    return jr.split(key, num=num)
