"""
Unit tests for evospecies.genotype.genome module.
"""

import pytest

from evospecies.genotype.genome import Genome, MutatorType


class TestGenomeContract:
    """Test the Genome abstract base class."""

    def test_genome_cannot_be_instantiated(self):
        """Test that Genome is abstract."""
        with pytest.raises(TypeError):
            Genome()

    def test_incomplete_subclass_cannot_be_instantiated(self):
        """Test that every genetic operator must be provided."""
        class HalfGenome(Genome):
            def duplicate(self, offspring_index):
                return self

            def compatibility(self, other):
                return 0.0

        with pytest.raises(TypeError):
            HalfGenome()

    def test_abstract_methods(self):
        """Test the operators a genome must provide."""
        assert Genome.__abstractmethods__ == {
            'duplicate',
            'compatibility',
            'mutate_add_node',
            'mutate_add_link',
            'mutate_link_weights',
            'mutate_all_nonstructural',
            'mate_multipoint',
            'mate_multipoint_avg',
            'mate_singlepoint',
            'genesis',
        }

    def test_stub_genome_duplicate_is_independent(self, make_organism):
        """Test that the test genome satisfies the contract."""
        genome = make_organism(trait=1.5).genome

        copy = genome.duplicate(0)

        assert isinstance(copy, Genome)
        assert copy is not genome
        assert copy.genome_id != genome.genome_id
        assert genome.compatibility(copy) == 0.0


class TestMutatorType:
    """Test the MutatorType enumeration."""

    def test_members(self):
        assert [m.name for m in MutatorType] == ['GAUSSIAN', 'GOLD_GAUSSIAN']
