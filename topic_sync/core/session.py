"""
Implementation of session functionality.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from logging import Logger
from typing import Any

from .client import ApiClient, Executor
from .topic.batching import DEFAULT_MAX_BATCH_SIZE
from .topic.model import TenantContext, TopicNode
from .topic.operations import OperationRequest
from .topic.resolver import ExistingTopic, resolve_existing
from .topic.sync import synchronize

__all__ = ["Session"]


class Session:
    """
    Interface to the catalog for a given tenant and language.

    Example usage:
    ```
    with Session(client, TenantContext(tenant_id="...")) as session:
        calls = session.sync_topic(tree)
    ```
    """

    _client: Executor
    """
    Transport used to execute operations.
    """

    _tenant: TenantContext
    """
    Tenant in which topics are created.
    """

    _language: str
    """
    Language of topics' translatable fields.
    """

    _max_batch_size: int
    """
    Maximum number of topics embedded in a single request.
    """

    _logger: Logger
    """
    Logger to use.
    """

    def __init__(
        self,
        client: Executor,
        tenant: TenantContext,
        *,
        language: str = "en",
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
        logger: Logger | None = None,
    ):
        """
        :param client: Transport used to execute operations
        :param tenant: Tenant in which topics are created
        :param language: Language of topics' translatable fields
        :param max_batch_size: Maximum number of topics in a single request
        :param logger: Logger to use, or `None` to use default logger
        """
        self._client = client
        self._tenant = tenant
        self._language = language
        self._max_batch_size = max_batch_size
        self._logger = logger or logging.getLogger()

    def __enter__(self):
        self._logger.debug(f"Entering context: {self}")
        return self

    def __exit__(self, exc_type, exc_val, traceback):
        if exc_type:
            self._logger.error(f"Exiting context with error: {self}")
        else:
            self._logger.debug(f"Exiting context: {self}")

        self.close()

    def __str__(self) -> str:
        return f"Session(tenant_id='{self._tenant.tenant_id}', language='{self._language}')"

    @property
    def client(self) -> Executor:
        """
        Transport used internally and exposed for manual low-level
        operations.
        """
        return self._client

    @property
    def tenant(self) -> TenantContext:
        return self._tenant

    @property
    def language(self) -> str:
        return self._language

    @property
    def max_batch_size(self) -> int:
        return self._max_batch_size

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def host(self) -> str | None:
        """
        API endpoint, if the transport is an {obj}`ApiClient`.
        """
        if isinstance(self._client, ApiClient):
            return self._client.api_url
        return None

    def sync_topic(
        self, tree: TopicNode | Mapping[str, Any]
    ) -> list[OperationRequest]:
        """
        Create or update the provided topic tree.

        :param tree: Root topic, or a mapping which validates as one

        :returns: Executed operations, in order
        """
        return synchronize(
            self._client,
            tree,
            self._language,
            self._tenant,
            max_batch_size=self._max_batch_size,
            logger=self._logger,
        )

    def lookup_topic(self, topic_id: str) -> ExistingTopic | None:
        """
        Get topic by id, or `None` if it doesn't exist.
        """
        return resolve_existing(
            self._client, topic_id, self._language, logger=self._logger
        )

    def close(self):
        """
        Release resources held by the transport, if applicable.
        """
        if isinstance(self._client, ApiClient):
            self._client.close()
