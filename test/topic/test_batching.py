from pytest import raises

from topic_sync import *
from topic_sync.core.topic import batching


def test_count(build_children):
    node = TopicNode(
        name="Root",
        children=[
            TopicNode(name="Child 1", children=build_children(3)),
            TopicNode(name="Child 2"),
        ],
    )

    assert count_nodes(node) == 6
    assert count_nodes(TopicNode(name="Leaf")) == 1


def test_no_children():
    result = partition(TopicNode(name="Leaf"), 100)

    assert result.inline_children is None
    assert result.deferred == []

    result = partition(TopicNode(name="Leaf", children=[]), 100)

    assert result.inline_children == []
    assert result.deferred == []


def test_fits(build_children):
    children = build_children(99)
    result = partition(TopicNode(name="Root", children=children), 100)

    assert result.inline_children == children
    assert result.deferred == []


def test_exceeds(build_children):
    # 100 children plus the root itself exceed the ceiling
    children = build_children(100)
    result = partition(TopicNode(name="Root", children=children), 100)

    assert result.inline_children == []
    assert result.deferred == children


def test_exceeds_nested(build_children):
    child1 = TopicNode(name="Child 1", children=build_children(100))
    child2 = TopicNode(name="Child 2", children=build_children(50))

    result = partition(TopicNode(name="Root", children=[child1, child2]), 100)

    assert result.inline_children == []
    assert result.deferred == [child1, child2]

    # each deferred child is partitioned in turn
    result1 = partition(child1, 100)
    assert result1.inline_children == []
    assert len(result1.deferred) == 100

    result2 = partition(child2, 100)
    assert result2.inline_children == child2.children
    assert result2.deferred == []


def test_non_positive(build_children):
    children = build_children(2)

    for max_batch_size in [0, -1]:
        result = partition(
            TopicNode(name="Root", children=children), max_batch_size
        )
        assert result.inline_children == []
        assert result.deferred == children


def test_preserves_order(build_children):
    children = build_children(5)
    result = partition(TopicNode(name="Root", children=children), 3)

    assert [c.name for c in result.deferred] == [
        f"Some Child {i + 1}" for i in range(5)
    ]


def test_partition_violation(build_children):
    oversized = Partition(inline_children=build_children(5))

    with raises(PartitionError) as exc_info:
        batching._check_partition(oversized, 3)

    assert exc_info.value.count == 6
    assert exc_info.value.max_batch_size == 3
