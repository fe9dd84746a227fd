"""
Partitioning of topic trees into requests of bounded size.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ..exceptions import PartitionError
from .model import TopicNode

__all__ = [
    "DEFAULT_MAX_BATCH_SIZE",
    "Partition",
    "count_nodes",
    "partition",
]

DEFAULT_MAX_BATCH_SIZE = 100
"""
Maximum number of topics embedded in a single request, including the topic
being created or updated.
"""


@dataclass(frozen=True)
class Partition:
    """
    Result of partitioning a topic: children to embed in the topic's own
    request and child subtrees to send separately once the topic exists.
    """

    inline_children: list[TopicNode] | None
    """
    Children to embed in the request. `None` if the topic declares no
    children, empty if all of them are deferred.
    """

    deferred: list[TopicNode] = field(default_factory=list)
    """
    Child subtrees to create afterward, in declared order.
    """


def count_nodes(node: TopicNode) -> int:
    """
    Count this topic along with all its descendants.
    """
    return sum(1 for _ in node.walk())


def partition(node: TopicNode, max_batch_size: int) -> Partition:
    """
    Decide which of a topic's descendants are embedded in its request.

    If the subtree rooted at this topic fits within `max_batch_size`, it's
    embedded as a whole. Otherwise the topic is sent without children and
    each child is deferred, to be partitioned in turn when it's created.
    A non-positive `max_batch_size` defers all children.
    """
    if node.children is None:
        return Partition(inline_children=None)

    if max_batch_size > 0 and count_nodes(node) <= max_batch_size:
        result = Partition(inline_children=list(node.children))
    else:
        result = Partition(inline_children=[], deferred=list(node.children))

    _check_partition(result, max_batch_size)
    return result


def _check_partition(result: Partition, max_batch_size: int):
    """
    Ensure the request built from this partition is within the ceiling.
    """
    assert result.inline_children is not None

    if not result.inline_children:
        return

    # include the topic itself
    count = 1 + sum(count_nodes(c) for c in result.inline_children)

    if count > max_batch_size:
        raise PartitionError(count, max_batch_size)
