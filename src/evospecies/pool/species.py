"""
NEAT Species Module

This module implements the Species class for the NEAT algorithm.
A species represents a cluster of genetically similar organisms
that compete primarily within their own niche.

Classes:
    Species: A cluster of organisms with fitness sharing and reproduction
"""

import autograd.numpy as np  # type: ignore
import logging
import math
import warnings
from typing import TYPE_CHECKING

from evospecies.errors             import EmptySpeciesReproductionError, InvalidRemovalError
from evospecies.genotype.genome    import MutatorType
from evospecies.phenotype.organism import Organism
from evospecies.run.config         import Config
if TYPE_CHECKING:
    from random import Random
    from evospecies.genotype        import Genome
    from evospecies.pool.population import Population

logger = logging.getLogger(__name__)

# How many times we look for a mate in a different species before giving up
INTERSPECIES_MATE_TRIES = 5

# Fitness multiplier for species past their drop-off age
STAGNATION_PENALTY = 0.01

# Species up to this age get their fitness multiplied by 'age_significance'
YOUTH_AGE = 10

class Species:
    """
    A species representing a cluster of genetically similar organisms in NEAT.

    In NEAT, the population is divided into species based on genetic similarity,
    allowing different evolutionary niches to develop independently. Organisms
    share the fitness of their species (explicit fitness sharing), so that a
    species cannot take over the population merely because it is large, and
    young species get time to optimize their structure before competing.

    Each generation the species goes through the following steps, driven by the
    Population:
    1. adjust_fitness():  penalize stagnation, boost youth, share fitness, rank
                          the organisms and mark the champion and the organisms
                          too weak to be parents
    2. count_offspring(): turn the organisms' fractional offspring shares into an
                          integer quota, carrying the remainder to the next species
    3. reproduce():       create the offspring and place them into species

    Public Attributes:
        id:                      Unique species identifier
        age:                     Number of generations this species has existed (starts at 1)
        is_novel:                True during the first generation of the species
        avg_fitness:             Average fitness of the organisms
        max_fitness:             Highest fitness among the organisms
        max_fitness_ever:        Highest original fitness ever achieved by this species
        age_of_last_improvement: Age at which max_fitness_ever last improved
        expected_offspring:      Number of offspring to produce this generation
        organisms:               The organisms in the species, best first after adjust_fitness()

    Public Methods:
        add_organism(organism):    Add an organism to the species
        remove_organism(organism): Remove an organism from the species
        adjust_fitness(config):    Fitness sharing, penalties and parent selection
        compute_avg_fitness():     Compute and store the average fitness
        compute_max_fitness():     Compute and store the highest fitness
        count_offspring(skim):     Compute the offspring quota
        reproduce(...):            Create the offspring for the next generation
        last_improved():           Generations since the last improvement
        find_champion():           Organism with the highest fitness
    """

    def __init__(self, species_id: int, novel: bool = False):
        """
        Parameters:
            species_id: unique species identifier
            novel:      whether the species is novel, i.e. is spared from aging in its first generation
        """
        self.id      : int  = species_id
        self.age     : int  = 1
        self.is_novel: bool = novel

        self.avg_fitness     : float = 0.0
        self.max_fitness     : float = 0.0
        self.max_fitness_ever: float = 0.0

        self.age_of_last_improvement: int = 0
        self.expected_offspring     : int = 0

        self.organisms: list[Organism] = []

    def add_organism(self, organism: Organism) -> None:
        """
        Add an organism to this species and point the organism to it.
        Adding an organism twice raises a ValueError.
        """
        if any(o is organism for o in self.organisms):
            raise ValueError(f"Organism {organism.ID} already belongs to species {self.id}")
        self.organisms.append(organism)
        organism.species_id = self.id

    def remove_organism(self, organism: Organism) -> None:
        """
        Remove an organism from this species.

        Raises:
            InvalidRemovalError: if the organism is not in this species (the species is left unchanged)
        """
        for index, o in enumerate(self.organisms):
            if o is organism:
                del self.organisms[index]
                organism.species_id = None
                return
        raise InvalidRemovalError(self.id, organism.ID)

    def adjust_fitness(self, config: Config) -> None:
        """
        Adjust the fitness of all organisms in the species, then rank them.

        The fitness of each organism is:
        - divided by 100 if the species is past its drop-off age
        - multiplied by 'age_significance' if the species is young
        - clamped to a small positive value if negative
        - divided by the number of organisms in the species (fitness sharing)

        The fitness before adjustment is saved in 'original_fitness'. The organisms
        are then sorted best first, the first one is marked as the species champion,
        and those ranked beyond 'survival_threshold' are marked for elimination.

        Configuration parameters used:
            - drop_off_age:       generations without improvement before the stagnation penalty
            - age_significance:   fitness multiplier for young species
            - survival_threshold: fraction of the species allowed to reproduce
        """
        if not self.organisms:
            return

        age_debt = (self.age - self.age_of_last_improvement + 1) - config.drop_off_age
        if age_debt == 0:
            age_debt = 1

        size = len(self.organisms)
        for organism in self.organisms:
            organism.original_fitness = organism.fitness
            organism.is_champion      = False
            organism.to_eliminate     = False

            # Inherited from the reference NEAT algorithm: the penalty applies whenever
            # the debt is positive, which (since a zero debt is forced to 1) includes
            # species that are exactly at their drop-off age.
            if age_debt >= 1:
                organism.fitness *= STAGNATION_PENALTY

            if self.age <= YOUTH_AGE:
                organism.fitness *= config.age_significance

            if organism.fitness < 0.0:
                organism.fitness = 0.0001

            organism.fitness /= size

        # Stable sort: organisms with equal fitness keep their relative order
        self.organisms.sort(key=lambda o: o.fitness, reverse=True)

        champion = self.organisms[0]
        if champion.original_fitness > self.max_fitness_ever:
            self.age_of_last_improvement = self.age
            self.max_fitness_ever        = champion.original_fitness

        # Adding 1.0 ensures that at least one organism survives
        num_parents = int(math.floor(config.survival_threshold * size + 1.0))

        champion.is_champion = True
        for organism in self.organisms[num_parents:]:
            organism.to_eliminate = True

    def compute_avg_fitness(self) -> float:
        """
        Compute, store and return the average fitness of the organisms.
        """
        if not self.organisms:
            self.avg_fitness = 0.0
        else:
            self.avg_fitness = float(np.mean([o.fitness for o in self.organisms]))
        return self.avg_fitness

    def compute_max_fitness(self) -> float:
        """
        Compute, store and return the highest fitness of the organisms (never below 0.0).
        """
        self.max_fitness = max([o.fitness for o in self.organisms], default=0.0)
        self.max_fitness = max(self.max_fitness, 0.0)
        return self.max_fitness

    def count_offspring(self, skim: float) -> float:
        """
        Compute the number of offspring of the whole species.

        Each organism carries a fractional share of the next generation in
        'expected_offspring'. The integer parts are summed directly; the fractional
        parts are accumulated in 'skim' and converted to a whole offspring each time
        they add up to 1. The skim left over is handed to the next species, which
        keeps the population size constant across rounding.

        Parameters:
            skim: fractional offspring left over by the previously counted species

        Returns:
            The fractional offspring left over after counting this species
        """
        self.expected_offspring = 0
        for organism in self.organisms:
            int_part  = math.floor(organism.expected_offspring)
            frac_part = math.fmod(organism.expected_offspring, 1.0)

            self.expected_offspring += int(int_part)

            skim += frac_part
            if skim >= 1.0:
                skim_int_part = math.floor(skim)
                self.expected_offspring += int(skim_int_part)
                skim -= skim_int_part

        return skim

    def reproduce(self,
                  generation    : int,
                  population    : 'Population',
                  sorted_species: list['Species'],
                  config        : Config,
                  rng           : 'Random') -> list[Organism]:
        """
        Create 'expected_offspring' new organisms and place them into species.

        Every offspring is produced by the first applicable of:
        1. Superchampion cloning: while the champion still owes clones
           ('super_champ_offspring' > 0), clone it. All but the last clone get
           their weights mutated (or, one time in five, a new link).
        2. Champion cloning: species with more than 5 offspring keep one exact
           copy of their champion.
        3. Mutation only: with probability 'mutate_only_prob', or always when the
           species has a single organism, mutate a copy of a random parent.
        4. Mating: cross a random parent with a second parent from this species or,
           with probability 'interspecies_mate_rate', with the champion of another
           species, then mutate the child unless the mate-only gate stops it.

        Each offspring is then added to the first species in the population whose
        first organism is within 'compatibility_threshold'; if there is none, it
        founds a new species.

        All random decisions are drawn from 'rng', in a fixed order, so that a run
        is reproducible given the seed.

        Parameters:
            generation:     the generation the offspring are born in
            population:     the population, which receives any new species
            sorted_species: all species, best first (used for interspecies mating)
            config:         stores configuration parameters
            rng:            the random generator shared by the whole run

        Returns:
            The offspring, in order of creation

        Raises:
            EmptySpeciesReproductionError: if offspring are expected but the species has no organisms
        """
        if self.expected_offspring > 0 and not self.organisms:
            raise EmptySpeciesReproductionError(self.id, self.expected_offspring)

        if self.expected_offspring > config.population_size:
            warnings.warn(f"Species {self.id} expects {self.expected_offspring} offspring, "
                          f"more than the population size {config.population_size}")

        # Offspring assigned to this species during the loop are appended after
        # the parents, so only the first 'pool_size' organisms are ever picked.
        pool_size = len(self.organisms)
        champion  = self.organisms[0] if self.organisms else None

        champion_cloned = False
        offspring       = []

        for count in range(self.expected_offspring):
            mutation_struct_baby = False
            mate_baby            = False

            if champion.super_champ_offspring > 0:
                new_genome = champion.genome.duplicate(count)

                # All superchamp clones but the last one get mutated
                if champion.super_champ_offspring > 1:
                    if rng.random() < 0.8 or config.mutate_add_link_prob == 0.0:
                        new_genome.mutate_link_weights(config.weight_mut_power, 1.0, MutatorType.GAUSSIAN)
                    else:
                        new_genome.genesis(generation)
                        new_genome.mutate_add_link(population, config.new_link_tries)
                        mutation_struct_baby = True

                baby = Organism(0.0, new_genome, generation)

                if champion.super_champ_offspring == 1 and champion.is_population_champion:
                    baby.is_population_champion_child = True
                    baby.highest_fitness              = champion.original_fitness

                champion.super_champ_offspring -= 1

            elif not champion_cloned and self.expected_offspring > 5:
                new_genome      = champion.genome.duplicate(count)
                baby            = Organism(0.0, new_genome, generation)
                champion_cloned = True

            elif rng.random() < config.mutate_only_prob or pool_size == 1:
                mom        = self.organisms[rng.randrange(pool_size)]
                new_genome = mom.genome.duplicate(count)

                mutation_struct_baby = self._mutate(new_genome, generation, population, config, rng)
                baby = Organism(0.0, new_genome, generation)

            else:
                mom = self.organisms[rng.randrange(pool_size)]
                if rng.random() > config.interspecies_mate_rate:
                    dad = self.organisms[rng.randrange(pool_size)]
                else:
                    dad = self._pick_interspecies_mate(sorted_species, rng)

                new_genome = self._crossover(mom, dad, count, config, rng)
                mate_baby  = True

                # Mutate the child, always if both parents carry the same genome
                if (rng.random() > config.mate_only_prob or
                        dad.genome.genome_id == mom.genome.genome_id or
                        dad.genome.compatibility(mom.genome) == 0.0):
                    mutation_struct_baby = self._mutate(new_genome, generation, population, config, rng)

                baby = Organism(0.0, new_genome, generation)

            baby.mutation_struct_baby = mutation_struct_baby
            baby.mate_baby            = mate_baby

            self.assign_to_species(baby, population, config)
            offspring.append(baby)

        logger.debug("Species %d produced %d offspring", self.id, len(offspring))
        return offspring

    def _mutate(self, genome: 'Genome', generation: int, population: 'Population',
                config: Config, rng: 'Random') -> bool:
        """
        Apply exactly one kind of mutation to a genome: add a node, else add a link,
        else all the non-structural mutations.

        Returns:
            True if a structural mutation was applied
        """
        if rng.random() < config.mutate_add_node_prob:
            genome.mutate_add_node(population)
            return True
        if rng.random() < config.mutate_add_link_prob:
            # The phenotype is needed to check the new link for recurrency
            genome.genesis(generation)
            genome.mutate_add_link(population, config.new_link_tries)
            return True
        genome.mutate_all_nonstructural(config)
        return False

    def _pick_interspecies_mate(self, sorted_species: list['Species'], rng: 'Random') -> Organism:
        """
        Pick the champion of another species, tending towards the better species.
        Gives up after a few draws, in which case our own champion is returned.
        """
        other = self
        tries = 0
        while other is self and tries < INTERSPECIES_MATE_TRIES and sorted_species:
            rand_mult = rng.gauss(0.0, 1.0) / 4.0
            if rand_mult > 1.0:
                rand_mult = 1.0
            index = int(math.floor(rand_mult * (len(sorted_species) - 1.0) + 0.5))
            index = min(max(index, 0), len(sorted_species) - 1)
            other = sorted_species[index]
            tries += 1

        if not other.organisms:
            other = self
        return other.organisms[0]

    def _crossover(self, mom: Organism, dad: Organism, count: int,
                   config: Config, rng: 'Random') -> 'Genome':
        """
        Create a child genome with one of the three crossover operators.

        The operator is chosen by a cascade of independent draws: multipoint with
        probability 'mate_multipoint_prob', otherwise multipoint-average with
        probability avg / (avg + singlepoint), otherwise singlepoint. The thresholds
        are deliberately not normalized to a single categorical draw.
        """
        if rng.random() < config.mate_multipoint_prob:
            return mom.genome.mate_multipoint(dad.genome, count, mom.original_fitness, dad.original_fitness)

        avg_and_single = config.mate_multipoint_avg_prob + config.mate_singlepoint_prob
        avg_threshold  = config.mate_multipoint_avg_prob / avg_and_single if avg_and_single > 0.0 else 0.0
        if rng.random() < avg_threshold:
            return mom.genome.mate_multipoint_avg(dad.genome, count, mom.original_fitness, dad.original_fitness)

        return mom.genome.mate_singlepoint(dad.genome, count)

    @staticmethod
    def assign_to_species(baby: Organism, population: 'Population', config: Config) -> 'Species':
        """
        Add an offspring to the first compatible species, or to a new species.
        Compatibility is measured against the first organism of each species.
        """
        for species in population.species:
            if not species.organisms:
                continue
            distance = baby.genome.compatibility(species.organisms[0].genome)
            if distance < config.compatibility_threshold:
                species.add_organism(baby)
                return species

        return population.create_species(baby)

    def last_improved(self) -> int:
        """
        Number of generations since the species last improved.
        """
        return self.age - self.age_of_last_improvement

    def size(self) -> int:
        """Number of organisms in the species."""
        return len(self.organisms)

    def __len__(self):
        return len(self.organisms)

    def find_champion(self) -> Organism | None:
        """
        Return the organism with the highest (positive) fitness, or None if there is none.
        """
        best_fitness = 0.0
        champion     = None
        for organism in self.organisms:
            if organism.fitness > best_fitness:
                best_fitness = organism.fitness
                champion     = organism
        return champion

    def __str__(self):
        header = (f"Species #{self.id}, age={self.age}, avg_fitness={self.avg_fitness:.3f}, "
                  f"max_fitness={self.max_fitness:.3f}, max_fitness_ever={self.max_fitness_ever:.3f}, "
                  f"expected_offspring={self.expected_offspring}, "
                  f"age_of_last_improvement={self.age_of_last_improvement}\n"
                  f"Has {len(self.organisms)} Organisms\n")
        return header + ''.join(f"{organism}\n" for organism in self.organisms)
