"""
Synchronization of topic trees with the catalog.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from logging import Logger
from typing import TYPE_CHECKING, Any

from ..exceptions import PartitionError, SyncError, TransportError
from ..types import OperationKind
from ..utils import get_path
from .batching import DEFAULT_MAX_BATCH_SIZE, Partition, partition
from .model import ResolvedTopic, TenantContext, TopicNode, validate_tree
from .operations import OperationRequest, build_create, build_update
from .resolver import resolve_existing

if TYPE_CHECKING:
    from ..client import Executor

__all__ = [
    "Synchronizer",
    "synchronize",
]


class Synchronizer:
    """
    Reconciles a topic tree with the catalog, one call at a time.

    The root topic is looked up if it has an id and updated if found,
    otherwise it's created. Descendants which don't fit in the root's request
    are created afterward in depth-first order, each beneath the id returned
    when its parent was created.

    Each instance owns the state of a single run; use a new instance per
    tree.
    """

    calls: list[OperationRequest]
    """Operations executed so far, in order."""

    _client: Executor
    _language: str
    _tenant: TenantContext
    _max_batch_size: int
    _logger: Logger

    def __init__(
        self,
        client: Executor,
        language: str,
        tenant: TenantContext,
        *,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
        logger: Logger | None = None,
    ):
        self.calls = []
        self._client = client
        self._language = language
        self._tenant = tenant
        self._max_batch_size = max_batch_size
        self._logger = logger or logging.getLogger()

    def run(self, tree: TopicNode | Mapping[str, Any]) -> list[OperationRequest]:
        """
        Synchronize tree and return the executed operations in order.

        :raises ValidationError: Tree is malformed; no calls were made
        :raises SyncError: A call failed; carries the calls made until then
        :raises RuntimeError: Instance was already run
        """
        if self.calls:
            raise RuntimeError("Synchronizer instances are single-use")

        root = validate_tree(tree)

        try:
            self._sync(root)
        except PartitionError:
            raise
        except Exception as e:
            self._logger.error(
                f"Failed to synchronize {root.str_summary} after {len(self.calls)} calls: {e}"
            )
            raise SyncError(list(self.calls), e) from e

        self._logger.debug(
            f"Synchronized {root.str_summary}: {self._get_summary()}"
        )

        return list(self.calls)

    def _sync(self, root: TopicNode):
        remote_id: str | None = None

        if root.id is not None:
            existing = resolve_existing(
                self._client,
                root.id,
                self._language,
                logger=self._logger,
                on_request=self.calls.append,
            )
            if existing is not None:
                remote_id = existing.id

        # worklist of topics whose parent already exists; popped in
        # depth-first order with siblings in declared order
        worklist: list[ResolvedTopic] = [
            ResolvedTopic(node=root, remote_id=remote_id, parent_id=root.parent_id)
        ]

        while worklist:
            topic = worklist.pop()
            result = partition(topic.node, self._max_batch_size)

            topic_id = self._execute(self._build(topic, result))

            worklist.extend(
                ResolvedTopic(node=child, remote_id=None, parent_id=topic_id)
                for child in reversed(result.deferred)
            )

    def _build(self, topic: ResolvedTopic, result: Partition) -> OperationRequest:
        if topic.exists:
            assert topic.remote_id is not None
            return build_update(
                topic.remote_id,
                topic.node,
                language=self._language,
                parent_id=topic.parent_id,
                children=result.inline_children,
            )

        return build_create(
            topic.node,
            language=self._language,
            tenant_id=self._tenant.tenant_id,
            parent_id=topic.parent_id,
            children=result.inline_children,
        )

    def _execute(self, request: OperationRequest) -> str:
        """
        Execute request and return id of the created or updated topic.
        """
        self._logger.debug(f"Executing: {request.str_summary}")

        response = self._client.execute(request.query, request.variables)
        self.calls.append(request)

        if request.kind is OperationKind.UPDATE:
            return request.variables["id"]

        topic_id = get_path(response, "topic", "create", "id")

        if not isinstance(topic_id, str) or not topic_id:
            raise TransportError(
                f"Create response did not contain an id: {response}"
            )

        return topic_id

    def _get_summary(self) -> str:
        """
        Return a brief summary of how many operations of each kind were
        executed.
        """
        counts = {kind: 0 for kind in OperationKind}

        for request in self.calls:
            counts[request.kind] += 1

        gets = counts[OperationKind.GET]
        creates = counts[OperationKind.CREATE]
        updates = counts[OperationKind.UPDATE]

        return f"(get/create/update) {gets}/{creates}/{updates}"


def synchronize(
    client: Executor,
    tree: TopicNode | Mapping[str, Any],
    language: str,
    tenant: TenantContext,
    *,
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
    logger: Logger | None = None,
) -> list[OperationRequest]:
    """
    Synchronize a topic tree with the catalog.

    :param client: Transport used to execute operations
    :param tree: Root topic, or a mapping which validates as one
    :param language: Language of the topics' translatable fields
    :param tenant: Tenant in which topics are created
    :param max_batch_size: Maximum number of topics in a single request
    :param logger: Logger to use, or `None` to use default logger

    :returns: Executed operations, in order
    """
    return Synchronizer(
        client,
        language,
        tenant,
        max_batch_size=max_batch_size,
        logger=logger,
    ).run(tree)
