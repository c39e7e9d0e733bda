"""
NEAT Genotype Package

This package declares what the reproduction engine expects from a genome.
The genetic encoding itself (node and connection genes, innovation numbers)
is provided by the user of the package.

Modules:
    genome: MutatorType enumeration and Genome abstract base class

Exported Classes:
    MutatorType: Distribution used to perturb connection weights
    Genome:      Abstract base class for genomes bred by a Species
"""

from evospecies.genotype.genome import Genome, MutatorType

__all__ = ['Genome',
           'MutatorType']
