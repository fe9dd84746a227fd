"""
Synchronization of topic trees: existence resolution, request building and
partitioning of large trees into bounded batches.
"""

from pyrollup import rollup

from . import batching, model, operations, resolver, sync
from .batching import *  # noqa
from .model import *  # noqa
from .operations import *  # noqa
from .resolver import *  # noqa
from .sync import *  # noqa

__all__ = rollup(
    model,
    operations,
    resolver,
    batching,
    sync,
)
