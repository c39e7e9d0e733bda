"""
evospecies - speciation and reproduction for NEAT (NeuroEvolution of Augmenting Topologies).

This package implements the part of NEAT that turns a scored population into the
next generation: organisms are grouped into species, their fitness is shared
within the species and penalized when the species stagnates, each species is
granted a number of offspring, and the offspring are produced by cloning,
mutation and crossover.

Genomes are not implemented here: any class deriving from 'Genome' and providing
its genetic operators can be bred.

Main components:
- genotype:  The Genome contract
- phenotype: The Organism wrapping a genome with its fitness and status
- pool:      Species and Population
- run:       Configuration

Example:
    >>> import random
    >>> from evospecies import Config, Organism, Population
    >>> config     = Config("config.ini")
    >>> population = Population(config, [Organism(0.0, MyGenome(), 0) for _ in range(config.population_size)])
    >>> rng = random.Random(42)
    >>> for generation in range(1, 101):
    ...     for organism in population.organisms:
    ...         organism.fitness = evaluate(organism.genome)
    ...     population.epoch(generation, rng)
"""

__version__ = "0.1.0"

from evospecies.errors             import EmptySpeciesReproductionError, InvalidRemovalError
from evospecies.genotype.genome    import Genome, MutatorType
from evospecies.phenotype.organism import Organism
from evospecies.pool.population    import Population
from evospecies.pool.species       import Species
from evospecies.run.config         import Config

__all__ = [
    "Config",
    "EmptySpeciesReproductionError",
    "Genome",
    "InvalidRemovalError",
    "MutatorType",
    "Organism",
    "Population",
    "Species",
]
