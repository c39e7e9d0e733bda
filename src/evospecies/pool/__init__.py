"""
NEAT Pool Package

This package contains classes for managing populations and species in the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Modules:
    species:    Species representation, fitness sharing and reproduction
    population: Species bookkeeping and the generation step

Exported Classes:
    Species:    A cluster of genetically similar organisms
    Population: The organisms and species of the current generation
"""

from evospecies.pool.species    import Species
from evospecies.pool.population import Population

__all__ = [
    'Species',
    'Population',
]
