"""
NEAT Phenotype Package

Modules:
    organism: Organism class

Exported Classes:
    Organism: A genome together with its fitness and reproduction status
"""

from evospecies.phenotype.organism import Organism

__all__ = ['Organism']
