"""
Shared fixtures for integration tests.
"""

import pytest
import random


@pytest.fixture
def rng():
    """The random generator shared by a whole run, seeded for reproducibility."""
    return random.Random(42)


@pytest.fixture
def trait_fitness():
    """
    Fitness function rewarding a genome whose trait is close to 5.
    The maximum fitness, 10.0, is reached when the trait hits the target.
    """
    def _fitness(genome, target=5.0):
        return 10.0 / (1.0 + abs(genome.trait - target))
    return _fitness
