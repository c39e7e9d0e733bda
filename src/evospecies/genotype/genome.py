"""
NEAT Genome Module

This module defines the contract that a genome must honour to be bred by the
species reproduction engine. The engine never looks inside a genome: it only
duplicates, mutates, crosses over and compares genomes through the methods
declared here. Concrete encodings (node and connection genes, innovation
numbers, the actual compatibility formula) live outside this package.

Classes:
    MutatorType: How connection weights are perturbed
    Genome:      Abstract base class for genomes bred by a Species
"""

from abc    import ABC, abstractmethod
from enum   import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from evospecies.pool.population import Population
    from evospecies.run.config      import Config

class MutatorType(Enum):
    """
    Distribution used when perturbing connection weights.
    """
    GAUSSIAN      = 0
    GOLD_GAUSSIAN = 1

class Genome(ABC):
    """
    The evolvable encoding of a neural network, as seen by the reproduction engine.

    Subclasses provide the genetic operators. The species reproduction procedure
    decides *which* operator is applied to *which* parents; the genome decides
    *how* the operator works.

    Public Attributes:
        genome_id: Identifier of this genome. Two parents sharing a genome_id are
                   treated as the same genome when deciding whether to mutate
                   a mated offspring.

    Public Methods:
        duplicate(offspring_index):                         Exact copy with a new ID
        compatibility(other):                               Distance to another genome
        mutate_add_node(population):                        Split a connection with a new node
        mutate_add_link(population, max_tries):             Add a new connection
        mutate_link_weights(power, rate, mutator_type):     Perturb connection weights
        mutate_all_nonstructural(config):                   All non-topological mutations
        mate_multipoint(other, offspring_index, f1, f2):     Multipoint crossover
        mate_multipoint_avg(other, offspring_index, f1, f2): Multipoint crossover, averaging weights
        mate_singlepoint(other, offspring_index):            Singlepoint crossover
        genesis(generation):                                Build the phenotype
    """

    genome_id: int

    @abstractmethod
    def duplicate(self, offspring_index: int) -> 'Genome':
        """
        Return an exact copy of this genome, identified by 'offspring_index'.
        """

    @abstractmethod
    def compatibility(self, other: 'Genome') -> float:
        """
        Return the compatibility distance between this genome and 'other'.
        A distance of 0.0 means the two genomes are identical for speciation purposes.
        """

    @abstractmethod
    def mutate_add_node(self, population: 'Population') -> bool:
        """
        Add a new node by splitting an existing connection.
        The population is passed so that the innovation can be shared across the generation.

        Returns:
            True if the genome was changed
        """

    @abstractmethod
    def mutate_add_link(self, population: 'Population', max_tries: int) -> bool:
        """
        Add a new connection between existing nodes, trying at most 'max_tries' node pairs.
        Requires the phenotype to have been built with genesis() to test for recurrency.

        Returns:
            True if the genome was changed
        """

    @abstractmethod
    def mutate_link_weights(self, power: float, rate: float, mutator_type: MutatorType) -> None:
        """
        Perturb the connection weights.

        Parameters:
            power:        magnitude of the perturbation
            rate:         fraction of the connections affected
            mutator_type: distribution of the perturbation
        """

    @abstractmethod
    def mutate_all_nonstructural(self, config: 'Config') -> None:
        """
        Apply all non-topological mutations (weight perturbation, enable/disable toggles,
        re-enabling genes), each with the rate found in the configuration.
        """

    @abstractmethod
    def mate_multipoint(self, other: 'Genome', offspring_index: int,
                        fitness1: float, fitness2: float) -> 'Genome':
        """
        Multipoint crossover: matching genes are picked at random from either parent,
        disjoint and excess genes are inherited from the fitter one.
        """

    @abstractmethod
    def mate_multipoint_avg(self, other: 'Genome', offspring_index: int,
                            fitness1: float, fitness2: float) -> 'Genome':
        """
        Multipoint crossover where the weights of matching genes are averaged.
        """

    @abstractmethod
    def mate_singlepoint(self, other: 'Genome', offspring_index: int) -> 'Genome':
        """
        Singlepoint crossover: genes are taken from one parent up to a random
        crossing point and from the other afterwards.
        """

    @abstractmethod
    def genesis(self, generation: int) -> Any:
        """
        Build the phenotype (network) encoded by this genome.
        """
