"""
topic-sync: synchronize hierarchical topic trees with a remote catalog.
"""

from pyrollup import rollup

from . import core
from .core import *  # noqa

__all__ = rollup(core)

__canonical_children__ = [
    "core",
]
