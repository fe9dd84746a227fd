"""
This module implements synchronization of topic trees with the catalog.
"""

from pyrollup import rollup

from . import client, exceptions, session, topic, types
from .client import *  # noqa
from .exceptions import *  # noqa
from .session import *  # noqa
from .topic import *  # noqa
from .types import *  # noqa

__all__ = rollup(
    session,
    client,
    topic,
    types,
    exceptions,
)

__canonical_children__ = [
    "session",
    "client",
    "topic",
    "types",
    "exceptions",
]
