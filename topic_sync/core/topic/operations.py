"""
Builders of remote operations on topics. These functions perform no I/O;
they only produce {obj}`OperationRequest` objects which are executed by the
synchronizer.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from ..types import OperationKind
from .model import TopicNode

__all__ = [
    "OperationRequest",
    "build_get",
    "build_create",
    "build_update",
]

GET_QUERY = """
query GET_TOPIC($id: ID!, $language: String!) {
    topic {
        get(id: $id, language: $language) {
            id
            name
            pathIdentifier
            parentId
        }
    }
}
"""

CREATE_QUERY = """
mutation CREATE_TOPIC($language: String!, $input: CreateTopicInput!) {
    topic {
        create(language: $language, input: $input) {
            id
        }
    }
}
"""

UPDATE_QUERY = """
mutation UPDATE_TOPIC($id: ID!, $language: String!, $input: UpdateTopicInput!) {
    topic {
        update(id: $id, language: $language, input: $input) {
            id
        }
    }
}
"""


class OperationRequest(BaseModel):
    """
    Fully-formed remote call, ready for execution.
    """

    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    query: str
    variables: dict[str, Any]

    @property
    def topic_count(self) -> int:
        """
        Number of topics created or updated by this request, including
        inline children.
        """
        input_ = self.variables.get("input")
        return 0 if input_ is None else _count_payload(input_)

    @property
    def str_summary(self) -> str:
        """
        One-line description for display.
        """
        input_ = self.variables.get("input")

        if input_ is None:
            return f"{self.kind} id='{self.variables['id']}'"

        parts = [f"name='{input_['name']}'"]

        if self.kind is OperationKind.UPDATE:
            parts.insert(0, f"id='{self.variables['id']}'")
        if "parentId" in input_:
            parts.append(f"parent_id='{input_['parentId']}'")
        if "children" in input_:
            parts.append(f"inline={self.topic_count - 1}")

        return f"{self.kind} {', '.join(parts)}"


def build_get(topic_id: str, language: str) -> OperationRequest:
    """
    Build lookup of an existing topic.
    """
    return OperationRequest(
        kind=OperationKind.GET,
        query=GET_QUERY,
        variables={
            "id": topic_id,
            "language": language,
        },
    )


def build_create(
    node: TopicNode,
    *,
    language: str,
    tenant_id: str,
    parent_id: str | None = None,
    children: list[TopicNode] | None = None,
) -> OperationRequest:
    """
    Build creation of a topic.

    :param node: Topic to create; its `id` is never sent
    :param language: Language of the topic's translatable fields
    :param tenant_id: Tenant in which to create the topic
    :param parent_id: Effective parent id, omitted if `None`
    :param children: Children to embed in this request, omitted if `None`
    """
    input_: dict[str, Any] = {
        "tenantId": tenant_id,
        "name": node.name,
    }

    if parent_id is not None:
        input_["parentId"] = parent_id

    _populate_input(input_, node, children)

    return OperationRequest(
        kind=OperationKind.CREATE,
        query=CREATE_QUERY,
        variables={
            "language": language,
            "input": input_,
        },
    )


def build_update(
    remote_id: str,
    node: TopicNode,
    *,
    language: str,
    parent_id: str | None = None,
    children: list[TopicNode] | None = None,
) -> OperationRequest:
    """
    Build update of an existing topic. The id is passed as a top-level
    variable and never as part of the input.
    """
    input_: dict[str, Any] = {
        "name": node.name,
    }

    if parent_id is not None:
        input_["parentId"] = parent_id

    _populate_input(input_, node, children)

    return OperationRequest(
        kind=OperationKind.UPDATE,
        query=UPDATE_QUERY,
        variables={
            "id": remote_id,
            "language": language,
            "input": input_,
        },
    )


def _populate_input(
    input_: dict[str, Any],
    node: TopicNode,
    children: list[TopicNode] | None,
):
    if node.path_identifier is not None:
        input_["pathIdentifier"] = node.path_identifier

    if children is not None:
        input_["children"] = [_child_payload(child) for child in children]


def _child_payload(node: TopicNode) -> dict[str, Any]:
    """
    Get payload of a child embedded in its parent's request. The parent is
    implied by nesting.
    """
    payload: dict[str, Any] = {"name": node.name}
    _populate_input(payload, node, node.children)
    return payload


def _count_payload(payload: dict[str, Any]) -> int:
    return 1 + sum(_count_payload(c) for c in payload.get("children", []))
