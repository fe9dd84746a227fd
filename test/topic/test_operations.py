import re

from topic_sync import *
from topic_sync.core.topic.operations import CREATE_QUERY, UPDATE_QUERY


def _strip(query: str) -> str:
    return re.sub(r"\s", "", query)


def test_create_query():
    request = build_create(
        TopicNode(name="Some Topic "), language="en", tenant_id="123"
    )

    assert request.kind is OperationKind.CREATE
    assert _strip(request.query) == _strip(
        """
        mutation CREATE_TOPIC($language: String!, $input: CreateTopicInput!) {
            topic {
                create(language: $language, input: $input) {
                    id
                }
            }
        }
        """
    )
    assert request.variables == {
        "language": "en",
        "input": {"tenantId": "123", "name": "Some Topic "},
    }


def test_create_with_children():
    node = TopicNode(
        name="Some Topic",
        children=[
            TopicNode(
                name="Some child 1",
                children=[TopicNode(name="Some grandchild 1")],
            ),
            TopicNode(name="Some child 2"),
        ],
    )

    request = build_create(
        node, language="en", tenant_id="123", children=node.children
    )

    assert request.variables == {
        "language": "en",
        "input": {
            "tenantId": "123",
            "name": "Some Topic",
            "children": [
                {
                    "name": "Some child 1",
                    "children": [{"name": "Some grandchild 1"}],
                },
                {"name": "Some child 2"},
            ],
        },
    }
    assert request.topic_count == 4


def test_create_omits_id_and_stale_fields():
    # children carry ids and parent ids which must not be sent inline
    node = TopicNode(
        id="some-topic-id",
        name="Some Topic",
        pathIdentifier="some-path-identifier",
        parentId="stale-parent-id",
        children=[
            TopicNode(
                id="child-id",
                name="Some child",
                parent_id="some-topic-id",
                path_identifier="some-child",
            )
        ],
    )

    request = build_create(
        node,
        language="en",
        tenant_id="123",
        parent_id="some-parent-id",
        children=node.children,
    )

    input_ = request.variables["input"]

    assert "id" not in request.variables
    assert input_ == {
        "tenantId": "123",
        "name": "Some Topic",
        "parentId": "some-parent-id",
        "pathIdentifier": "some-path-identifier",
        "children": [
            {"name": "Some child", "pathIdentifier": "some-child"},
        ],
    }


def test_create_deferred_children():
    node = TopicNode(name="Some Topic", children=[TopicNode(name="Child")])

    request = build_create(node, language="en", tenant_id="123", children=[])
    assert request.variables["input"]["children"] == []

    # children omitted when not passed
    request = build_create(node, language="en", tenant_id="123")
    assert "children" not in request.variables["input"]


def test_update():
    node = TopicNode(
        id="some-topic-id",
        name="Some Topic",
        path_identifier="some-path-identifier",
    )

    request = build_update(
        "some-topic-id", node, language="en", parent_id="some-parent-id"
    )

    assert request.kind is OperationKind.UPDATE
    assert request.query == UPDATE_QUERY
    assert request.variables == {
        "id": "some-topic-id",
        "language": "en",
        "input": {
            "name": "Some Topic",
            "parentId": "some-parent-id",
            "pathIdentifier": "some-path-identifier",
        },
    }


def test_get():
    request = build_get("some-topic-id", "en")

    assert request.kind is OperationKind.GET
    assert request.variables == {"id": "some-topic-id", "language": "en"}
    assert request.topic_count == 0


def test_idempotent():
    node = TopicNode(
        name="Some Topic",
        children=[TopicNode(name="Child", path_identifier="child")],
    )

    def build() -> OperationRequest:
        return build_create(
            node,
            language="en",
            tenant_id="123",
            parent_id="p",
            children=node.children,
        )

    request1 = build()
    request2 = build()

    assert request1 == request2
    assert request1 is not request2
    assert request1.query == CREATE_QUERY


def test_does_not_mutate_node():
    node = TopicNode(name="Some Topic", children=[TopicNode(name="Child")])
    before = node.model_dump()

    request = build_create(
        node, language="en", tenant_id="123", children=node.children
    )
    request.variables["input"]["children"].append({"name": "Other"})

    assert node.model_dump() == before


def test_summary():
    node = TopicNode(name="Some Topic", children=[TopicNode(name="Child")])

    request = build_create(
        node,
        language="en",
        tenant_id="123",
        parent_id="p",
        children=node.children,
    )
    assert "name='Some Topic'" in request.str_summary
    assert "parent_id='p'" in request.str_summary
    assert "inline=1" in request.str_summary

    assert "id='x'" in build_get("x", "en").str_summary
