"""
Topic tree models.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generator

import pydantic
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..exceptions import ValidationError, _assert_validate

__all__ = [
    "TopicNode",
    "ResolvedTopic",
    "TenantContext",
    "validate_tree",
]


class TopicNode(BaseModel):
    """
    A topic to synchronize, along with its children.

    Nodes are immutable once constructed; the synchronizer only derives
    request payloads from them. Fields may be passed by their snake_case
    names or by the camelCase names used by the API.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str | None = Field(default=None, min_length=1)
    """
    Identifier of an existing topic. If set, the topic is looked up and
    updated if it exists.
    """

    name: str = Field(min_length=1)

    path_identifier: str | None = Field(
        default=None,
        validation_alias=AliasChoices("path_identifier", "pathIdentifier"),
    )

    parent_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("parent_id", "parentId"),
    )

    children: list[TopicNode] | None = None
    """
    Ordered children. `None` if not declared, which is distinct from an
    empty list.
    """

    def walk(self) -> Generator[TopicNode, None, None]:
        """
        Yield this topic and all descendants in depth-first, declared order.
        """
        stack: list[TopicNode] = [self]

        while stack:
            node = stack.pop()
            yield node

            if node.children:
                stack.extend(reversed(node.children))

    @property
    def str_summary(self) -> str:
        id_str = f", id='{self.id}'" if self.id else ""
        return f"Topic(name='{self.name}'{id_str})"


@dataclass(frozen=True)
class ResolvedTopic:
    """
    Topic whose existence in the catalog has been determined.
    """

    node: TopicNode

    remote_id: str | None
    """Id of the existing topic, or `None` if it must be created."""

    parent_id: str | None
    """
    Effective parent id. For topics created beneath a newly created parent,
    this is the id returned by the catalog rather than the input's value.
    """

    @property
    def exists(self) -> bool:
        return self.remote_id is not None


class TenantContext(BaseModel):
    """
    Tenant for which topics are synchronized.
    """

    model_config = ConfigDict(frozen=True)

    tenant_id: str = Field(min_length=1)
    tenant_identifier: str | None = None


def validate_tree(tree: TopicNode | Mapping[str, Any]) -> TopicNode:
    """
    Coerce tree to a {obj}`TopicNode` and check all nodes, raising
    {obj}`ValidationError` with a list of errors if any are found.
    """
    if isinstance(tree, Mapping):
        try:
            tree = TopicNode.model_validate(tree)
        except pydantic.ValidationError as e:
            raise ValidationError(
                [
                    f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                    for err in e.errors()
                ]
            ) from e

    if not isinstance(tree, TopicNode):
        raise ValidationError([f"Not a topic: {tree!r}"])

    errors: list[str] = []

    # nodes created via model_construct() bypass field validation
    for node in tree.walk():
        _assert_validate(
            isinstance(node.name, str) and len(node.name) > 0,
            errors,
            f"{node.str_summary}: name must not be empty",
        )
        _assert_validate(
            node.id is None or len(node.id) > 0,
            errors,
            f"{node.str_summary}: id must not be empty",
        )

    if errors:
        raise ValidationError(errors)

    return tree
