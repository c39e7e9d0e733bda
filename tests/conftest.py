"""Pytest configuration and shared fixtures."""

import pytest
import sys
from itertools import count
from pathlib import Path

# Add the source directory to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir / 'src'))

from evospecies.genotype.genome    import Genome
from evospecies.phenotype.organism import Organism
from evospecies.run.config         import Config


class StubGenome(Genome):
    """
    Minimal genome used by the tests.

    The whole genome is a single number, 'trait'. The compatibility distance is
    the absolute difference between traits, so tests decide which species an
    offspring joins by choosing traits. Every operator applied to the genome
    is recorded in 'operations'.
    """

    _id_generator = count(0)

    def __init__(self, trait: float = 0.0):
        self.genome_id  = next(StubGenome._id_generator)
        self.trait      = trait
        self.operations = []

    def duplicate(self, offspring_index):
        return StubGenome(self.trait)

    def compatibility(self, other):
        return abs(self.trait - other.trait)

    def mutate_add_node(self, population):
        self.operations.append(('mutate_add_node',))
        self.trait += 1.0
        return True

    def mutate_add_link(self, population, max_tries):
        self.operations.append(('mutate_add_link', max_tries))
        self.trait += 0.5
        return True

    def mutate_link_weights(self, power, rate, mutator_type):
        self.operations.append(('mutate_link_weights', power, rate, mutator_type))

    def mutate_all_nonstructural(self, config):
        self.operations.append(('mutate_all_nonstructural',))
        self.trait += 0.1

    def mate_multipoint(self, other, offspring_index, fitness1, fitness2):
        child = StubGenome((self.trait + other.trait) / 2)
        child.operations.append(('mate_multipoint', self.genome_id, other.genome_id, fitness1, fitness2))
        return child

    def mate_multipoint_avg(self, other, offspring_index, fitness1, fitness2):
        child = StubGenome((self.trait + other.trait) / 2)
        child.operations.append(('mate_multipoint_avg', self.genome_id, other.genome_id, fitness1, fitness2))
        return child

    def mate_singlepoint(self, other, offspring_index):
        child = StubGenome(self.trait)
        child.operations.append(('mate_singlepoint', self.genome_id, other.genome_id))
        return child

    def genesis(self, generation):
        self.operations.append(('genesis', generation))
        return None

    def operation_names(self):
        return [op[0] for op in self.operations]


class ScriptedRandom:
    """
    Random generator replaying a recorded sequence of draws.

    Each kind of draw has its own queue. Running out of a queue fails the test,
    which also checks that no more draws are made than expected.
    """

    def __init__(self, random=(), randrange=(), gauss=()):
        self._random    = list(random)
        self._randrange = list(randrange)
        self._gauss     = list(gauss)
        self.calls      = []

    def random(self):
        assert self._random, "unexpected call to random()"
        self.calls.append('random')
        return self._random.pop(0)

    def randrange(self, n):
        assert self._randrange, "unexpected call to randrange()"
        value = self._randrange.pop(0)
        assert 0 <= value < n, f"scripted randrange value {value} outside [0, {n})"
        self.calls.append('randrange')
        return value

    def gauss(self, mu, sigma):
        assert self._gauss, "unexpected call to gauss()"
        self.calls.append('gauss')
        return self._gauss.pop(0)

    def exhausted(self):
        return not (self._random or self._randrange or self._gauss)


@pytest.fixture(autouse=True)
def reset_id_generators():
    """Reset the Organism and StubGenome ID generators before each test."""
    Organism._id_generator   = count(0)
    StubGenome._id_generator = count(0)
    yield
    Organism._id_generator   = count(0)
    StubGenome._id_generator = count(0)


@pytest.fixture
def config():
    """Provide a default configuration for testing."""
    return Config()


@pytest.fixture
def make_organism():
    """Factory creating an organism with a StubGenome of the given trait."""
    def _make(fitness=0.0, trait=0.0, generation=0):
        return Organism(fitness, StubGenome(trait), generation)
    return _make


@pytest.fixture
def scripted_rng():
    """Factory creating a ScriptedRandom."""
    return ScriptedRandom
