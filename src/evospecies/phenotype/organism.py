"""
NEAT Organism Module

This module implements the Organism class, the unit of selection handled by
the species reproduction engine.

Classes:
    Organism: A genome together with its fitness and reproduction status
"""

from itertools import count
from typing    import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from evospecies.genotype import Genome

class Organism:
    """
    An organism in the NEAT population.

    You can regard an organism as a thin wrapper around its genome, to which it
    adds a unique ID, a fitness, and the flags that the reproduction process
    reads and writes from one generation to the next.

    The organism only knows the ID of its species (species_id), never the
    Species object itself: the Species owns the membership list, the Population
    owns the Species.

    Public Attributes:
        ID:                           Globally unique identifier for this organism
        genome:                       The genome encoding this organism
        fitness:                      Fitness, modified in place by fitness sharing and penalties
        original_fitness:             Fitness before it was adjusted by the species
        expected_offspring:           Share of the next generation (fractional)
        generation:                   Generation in which this organism was born
        species_id:                   ID of the species the organism belongs to (None if unassigned)
        is_champion:                  Best organism of its species
        to_eliminate:                 Ranked too low to be a parent
        super_champ_offspring:        Number of guaranteed clones still owed to this champion
        is_population_champion:       Best organism of the whole population
        is_population_champion_child: Last clone of the population champion
        highest_fitness:              Best fitness inherited from the population champion
        mutation_struct_baby:         Born from a structural mutation
        mate_baby:                    Born from crossover
    """

    _id_generator = count(0)

    def __init__(self, fitness: float, genome: 'Genome', generation: int):
        """
        Parameters:
            fitness:    the initial fitness (0.0 for a newborn)
            genome:     the Genome encoding this organism, owned exclusively by it
            generation: the generation in which the organism is born
        """
        self.ID        : int      = next(Organism._id_generator)
        self.genome    : 'Genome' = genome
        self.generation: int      = generation

        self.fitness           : float = fitness
        self.original_fitness  : float = fitness
        self.expected_offspring: float = 0.0

        self.species_id: Optional[int] = None

        # Reproduction status
        self.is_champion : bool = False
        self.to_eliminate: bool = False

        self.super_champ_offspring       : int   = 0
        self.is_population_champion      : bool  = False
        self.is_population_champion_child: bool  = False
        self.highest_fitness             : float = 0.0

        # How this organism came to be
        self.mutation_struct_baby: bool = False
        self.mate_baby           : bool = False

    def __str__(self):
        flags = []
        if self.is_champion:
            flags.append("champion")
        if self.to_eliminate:
            flags.append("eliminate")
        if self.is_population_champion:
            flags.append("population champion")
        flags_str = f" [{', '.join(flags)}]" if flags else ""
        return (f"Organism #{self.ID}, fitness={self.fitness:.4f}, "
                f"original_fitness={self.original_fitness:.4f}, generation={self.generation}{flags_str}")

    def __repr__(self):
        return f"Organism(fitness={self.fitness!r}, genome={self.genome!r}, generation={self.generation!r})"
