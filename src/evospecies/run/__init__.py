"""
NEAT Run Package

Modules:
    config: Config class, parsed from an INI file
"""

from evospecies.run.config import Config

__all__ = ['Config']
