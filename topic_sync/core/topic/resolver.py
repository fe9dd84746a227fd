"""
Lookup of existing topics.
"""
from __future__ import annotations

import logging
from logging import Logger
from typing import TYPE_CHECKING, Callable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..exceptions import TransportError
from ..utils import get_path
from .operations import OperationRequest, build_get

if TYPE_CHECKING:
    from ..client import Executor

__all__ = [
    "ExistingTopic",
    "resolve_existing",
]


class ExistingTopic(BaseModel):
    """
    Topic as it exists in the catalog.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str | None = None
    path_identifier: str | None = Field(
        default=None,
        validation_alias=AliasChoices("path_identifier", "pathIdentifier"),
    )
    parent_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("parent_id", "parentId"),
    )


def resolve_existing(
    client: Executor,
    topic_id: str,
    language: str,
    *,
    logger: Logger | None = None,
    on_request: Callable[[OperationRequest], None] | None = None,
) -> ExistingTopic | None:
    """
    Look up a topic by id.

    Absence of the topic is a normal outcome and is reported as `None`;
    failures of the transport are propagated.

    :param client: Transport used to execute the lookup
    :param topic_id: Id of topic to look up
    :param language: Language in which to get the topic
    :param logger: Logger to use, or `None` to use default logger
    :param on_request: Invoked with the lookup request once it succeeds

    :returns: Existing topic, or `None` if not found
    """
    logger = logger or logging.getLogger()

    if not topic_id:
        raise ValueError("Topic id must not be empty")

    request = build_get(topic_id, language)
    response = client.execute(request.query, request.variables)

    if on_request is not None:
        on_request(request)

    topic = get_path(response, "topic", "get")

    if topic is None:
        logger.debug(f"Topic not found: id='{topic_id}'")
        return None

    if not isinstance(topic, dict) or "id" not in topic:
        raise TransportError(f"Malformed lookup response for id='{topic_id}'")

    existing = ExistingTopic.model_validate(topic)
    logger.debug(f"Found existing topic: id='{existing.id}'")

    return existing
