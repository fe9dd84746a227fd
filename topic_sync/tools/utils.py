"""
Utilities for generic tool-related functionality.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from ..core import (
    Executor,
    OperationRequest,
    Session,
    TopicNode,
    synchronize,
    validate_tree,
)
from .yaml_model import load_yaml_mapping

__all__ = [
    "PlanningExecutor",
    "load_tree",
    "commit_tree",
]


class PlanningExecutor(Executor):
    """
    Forwards read-only queries to another executor and simulates mutations,
    returning placeholder ids for created topics. Used to plan the operations
    a synchronization would perform without changing the catalog.
    """

    _client: Executor
    _created_count: int

    def __init__(self, client: Executor):
        self._client = client
        self._created_count = 0

    def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        if query.lstrip().startswith("query"):
            return self._client.execute(query, variables)

        if "id" in variables:
            return {"topic": {"update": {"id": variables["id"]}}}

        self._created_count += 1
        return {"topic": {"create": {"id": f"<new-{self._created_count}>"}}}


def load_tree(file: Path) -> TopicNode:
    """
    Load topic tree from .yaml or .json file.
    """
    return validate_tree(load_yaml_mapping(file))


def commit_tree(
    session: Session,
    console: Console,
    tree: TopicNode,
    *,
    dry_run: bool = False,
    yes: bool = False,
) -> list[OperationRequest] | None:
    """
    Print a summary of planned operations and handle flags, then synchronize
    the tree.

    :returns: Executed operations, or `None` if not committed
    """
    planned = synchronize(
        PlanningExecutor(session.client),
        tree,
        session.language,
        session.tenant,
        max_batch_size=session.max_batch_size,
        logger=session.logger,
    )

    session.logger.info("Planned operations:")
    console.print(
        "\n".join(f"    {request.str_summary}" for request in planned)
    )
    console.print(f"Summary: {_get_summary(planned)}")

    if dry_run:
        return None

    if not yes:
        if not typer.confirm("Proceed with synchronizing topics?"):
            return None

    calls = session.sync_topic(tree)

    session.logger.info(
        f"Synchronized '{tree.name}': {_get_summary(calls)}"
    )

    return calls


def _get_summary(requests: list[OperationRequest]) -> str:
    topics = sum(r.topic_count for r in requests)
    return f"{len(requests)} operations, {topics} topics"
