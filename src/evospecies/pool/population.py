"""
NEAT Population Module

This module implements the Population class, the context object shared by all
species while they reproduce. The population owns the list of species, issues
species IDs, and drives a complete generation (epoch) around the species
reproduction engine.

Classes:
    Population: The organisms and species of the current generation
"""

import autograd.numpy as np  # type: ignore
import logging
from typing import Iterable, TYPE_CHECKING

from evospecies.phenotype.organism import Organism
from evospecies.pool.species       import Species
from evospecies.run.config         import Config
if TYPE_CHECKING:
    from random import Random

logger = logging.getLogger(__name__)

class Population:
    """
    A population of evolving organisms, partitioned into species.

    Species read the population while reproducing (to find compatible species
    for their offspring) and register new species through create_species().
    They never hold on to it between calls.

    Public Attributes:
        organisms:       All organisms of the current generation
        species:         All species, in order of creation
        last_species_id: The last species ID issued
        population_size: The configured number of organisms per generation

    Public Methods:
        next_species_id():          Issue a new species ID
        create_species(organism):   Found a new species with a single organism
        get_species(species_id):    Look a species up by its ID
        speciate():                 Place all unassigned organisms into species
        get_fittest_organism():     The organism with the highest original fitness
        epoch(generation, rng):     Replace the organisms by the next generation
    """

    def __init__(self, config: Config, organisms: Iterable[Organism] = ()):
        """
        Initialize the population with the given organisms and split them into species.

        Parameters:
            config:    stores configuration parameters
            organisms: the organisms of the first generation
        """
        self._config = config

        self.organisms      : list[Organism]     = list(organisms)
        self.species        : list[Species]      = []
        self._species_by_id : dict[int, Species] = {}
        self.last_species_id: int                = 0
        self.population_size: int                = config.population_size

        self.speciate()

    def next_species_id(self) -> int:
        self.last_species_id += 1
        return self.last_species_id

    def create_species(self, organism: Organism) -> Species:
        """
        Create a novel species with a fresh ID, whose only member is the given organism.
        """
        species = Species(self.next_species_id(), novel=True)
        species.add_organism(organism)
        self.species.append(species)
        self._species_by_id[species.id] = species
        logger.debug("Created species %d for organism %d", species.id, organism.ID)
        return species

    def get_species(self, species_id: int) -> Species:
        """
        Return the species with the given ID. Raises a KeyError if there is none.
        """
        return self._species_by_id[species_id]

    def speciate(self) -> None:
        """
        Assign every organism that does not belong to a species yet.
        Organisms join the first species whose first organism is compatible, as offspring do.
        """
        for organism in self.organisms:
            if organism.species_id is None:
                Species.assign_to_species(organism, self, self._config)

    def get_fittest_organism(self) -> Organism | None:
        """
        Return the organism with the highest original fitness, or None if the population is empty.
        """
        if not self.organisms:
            return None
        return max(self.organisms, key=lambda o: o.original_fitness)

    def epoch(self, generation: int, rng: 'Random') -> list[Species]:
        """
        Create the next generation.

        It is assumed that the fitness of every organism has already been evaluated.

        The generation step:
        1. Every species adjusts the fitness of its organisms and ranks them.
        2. Each organism gets a share of the next generation proportional to its
           adjusted fitness relative to the population average.
        3. Species are ranked by the original fitness of their champion and count
           their offspring in that order, passing the fractional skim along.
        4. Offspring lost to rounding are given to the species with the largest quota.
        5. Organisms marked for elimination are removed, the species reproduce,
           and then all parents are removed.
        6. Empty species disappear, the surviving species age (novel species
           instead lose their novelty).

        Parameters:
            generation: the generation the offspring are born in
            rng:        the random generator shared by the whole run

        Returns:
            The species that reproduced, best first
        """
        if not self.organisms:
            raise RuntimeError("Cannot create a new generation from an empty population")

        total_organisms = len(self.organisms)

        for species in self.species:
            species.adjust_fitness(self._config)
            species.compute_avg_fitness()
            species.compute_max_fitness()

        # Each organism's share of the next generation
        overall_average = float(np.mean([o.fitness for o in self.organisms]))
        for organism in self.organisms:
            if overall_average > 0.0:
                organism.expected_offspring = organism.fitness / overall_average
            else:
                organism.expected_offspring = 1.0

        sorted_species = sorted((s for s in self.species if s.organisms),
                                key=lambda s: s.organisms[0].original_fitness, reverse=True)

        skim           = 0.0
        total_expected = 0
        for species in sorted_species:
            skim = species.count_offspring(skim)
            total_expected += species.expected_offspring

        # Floating point errors can lose an offspring. If more than one
        # is missing, the population has collapsed: the best species gets
        # all the offspring.
        if total_expected < total_organisms:
            best_species = max(sorted_species, key=lambda s: s.expected_offspring)
            best_species.expected_offspring += 1
            total_expected += 1
            if total_expected < total_organisms:
                logger.warning("Population collapsed, species %d gets all %d offspring",
                               sorted_species[0].id, total_organisms)
                for species in sorted_species:
                    species.expected_offspring = 0
                sorted_species[0].expected_offspring = total_organisms

        logger.debug("Generation %d offspring: %s", generation,
                     {s.id: s.expected_offspring for s in sorted_species})

        champion = self.get_fittest_organism()
        for organism in self.organisms:
            organism.is_population_champion = False
        champion.is_population_champion = True

        # Only organisms ranked high enough are allowed to be parents
        parents = []
        for organism in self.organisms:
            if organism.to_eliminate:
                self.get_species(organism.species_id).remove_organism(organism)
            else:
                parents.append(organism)

        offspring = []
        for species in sorted_species:
            offspring.extend(species.reproduce(generation, self, sorted_species, self._config, rng))

        for organism in parents:
            self.get_species(organism.species_id).remove_organism(organism)

        self.species        = [s for s in self.species if s.organisms]
        self._species_by_id = {s.id: s for s in self.species}
        for species in self.species:
            if species.is_novel:
                species.is_novel = False
            else:
                species.age += 1

        self.organisms = offspring

        # Error check: every offspring must have been placed into a species
        assigned_count = sum(len(s.organisms) for s in self.species)
        assert assigned_count == len(self.organisms), "Lost organisms during reproduction!"

        return sorted_species

    def __str__(self):
        return '\n'.join(str(species) for species in self.species)
