"""
Unit tests for evospecies.phenotype.organism module.
"""

import pytest

from evospecies.phenotype.organism import Organism


class TestOrganismInit:
    """Test Organism.__init__ method."""

    def test_ids_are_unique_and_increasing(self, make_organism):
        """Test that each organism receives the next ID."""
        organisms = [make_organism() for _ in range(3)]

        assert [o.ID for o in organisms] == [0, 1, 2]

    def test_init_sets_genome_fitness_and_generation(self, make_organism):
        """Test the basic attributes."""
        organism = make_organism(fitness=4.5, trait=2.0, generation=7)

        assert organism.fitness == 4.5
        assert organism.original_fitness == 4.5
        assert organism.generation == 7
        assert organism.genome.trait == 2.0

    def test_init_clears_status_flags(self, make_organism):
        """Test that a newborn has no reproduction status."""
        organism = make_organism()

        assert organism.species_id is None
        assert organism.expected_offspring == 0.0
        assert not organism.is_champion
        assert not organism.to_eliminate
        assert organism.super_champ_offspring == 0
        assert not organism.is_population_champion
        assert not organism.is_population_champion_child
        assert organism.highest_fitness == 0.0
        assert not organism.mutation_struct_baby
        assert not organism.mate_baby


class TestOrganismStr:
    """Test Organism string rendering."""

    def test_str_shows_fitness(self, make_organism):
        organism = make_organism(fitness=1.5)

        assert str(organism).startswith("Organism #0, fitness=1.5000")

    def test_str_shows_flags(self, make_organism):
        organism = make_organism()
        organism.is_champion  = True
        organism.to_eliminate = True

        assert "[champion, eliminate]" in str(organism)

    def test_repr(self, make_organism):
        organism = make_organism(fitness=2.0, generation=3)

        assert repr(organism).startswith("Organism(fitness=2.0, genome=")
        assert repr(organism).endswith("generation=3)")
