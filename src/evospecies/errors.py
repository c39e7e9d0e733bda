"""
NEAT Errors Module

Exceptions raised when the species bookkeeping detects that an upstream
invariant has already been broken (for example a species list that is out of
sync with the population). They are never retried: the generation step that
raised them must be aborted.

Classes:
    InvalidRemovalError:           Removing an organism that is not in the species
    EmptySpeciesReproductionError: Asking an empty species to produce offspring
"""


class InvalidRemovalError(ValueError):
    """
    Raised when trying to remove an organism that does not belong to a species.
    """

    def __init__(self, species_id: int, organism_id: int):
        super().__init__(f"Attempt to remove nonexistent organism {organism_id} from species {species_id}")
        self.species_id  = species_id
        self.organism_id = organism_id


class EmptySpeciesReproductionError(RuntimeError):
    """
    Raised when a species with a positive offspring quota has no organisms to breed from.
    """

    def __init__(self, species_id: int, expected_offspring: int):
        super().__init__(f"Attempt to reproduce {expected_offspring} offspring out of empty species {species_id}")
        self.species_id         = species_id
        self.expected_offspring = expected_offspring
