"""
Operations on topic trees.
"""
from __future__ import annotations

from pathlib import Path

import yaml
from click import BadParameter
from typer import Argument, Context, Exit, Option

from ...core import SyncError, TransportError, ValidationError
from ..utils import commit_tree, load_tree
from ._utils import MainTyper, console, get_root_context, logger, lookup_param

app = MainTyper(
    "topic",
    help="Operations on topics",
)


@app.command()
def sync(
    ctx: Context,
    file: Path = Argument(
        help=".yaml or .json file containing topic tree",
        dir_okay=False,
    ),
    language: str
    | None = Option(
        None,
        help="Language of topic names, overriding configured language",
    ),
    max_batch_size: int
    | None = Option(
        None,
        help="Maximum number of topics per request, overriding configured value",
        min=1,
    ),
    dry_run: bool = Option(
        False,
        "--dry-run",
        help="Only log planned operations",
    ),
    yes: bool = Option(
        False,
        "-y",
        "--yes",
        help="Don't ask for confirmation before synchronizing",
    ),
):
    """
    Create or update topic tree from file
    """
    if not file.is_file():
        raise BadParameter(
            f"file does not exist: {file}",
            ctx=ctx,
            param=lookup_param(ctx, "file"),
        )

    try:
        tree = load_tree(file)
    except ValidationError as e:
        raise BadParameter(
            f"invalid topic tree in '{file}':\n" + "\n".join(e.errors),
            ctx=ctx,
            param=lookup_param(ctx, "file"),
        )
    except (ValueError, yaml.YAMLError) as e:
        raise BadParameter(
            f"failed to load '{file}': {e}",
            ctx=ctx,
            param=lookup_param(ctx, "file"),
        )

    root_context = get_root_context(ctx)

    with root_context.create_session(
        language=language, max_batch_size=max_batch_size
    ) as session:
        try:
            commit_tree(session, console, tree, dry_run=dry_run, yes=yes)
        except SyncError as e:
            logger.error(
                f"Synchronization failed after {len(e.calls)} operations: {e.error}"
            )
            raise Exit(code=1)


@app.command()
def lookup(
    ctx: Context,
    topic_id: str = Argument(
        help="Id of topic to look up",
    ),
    language: str
    | None = Option(
        None,
        help="Language of topic, overriding configured language",
    ),
):
    """
    Look up topic by id
    """
    root_context = get_root_context(ctx)

    with root_context.create_session(language=language) as session:
        try:
            topic = session.lookup_topic(topic_id)
        except TransportError as e:
            logger.error(f"Lookup failed: {e}")
            raise Exit(code=1)

    if topic is None:
        logger.warning(f"Topic not found: id='{topic_id}'")
        raise Exit(code=1)

    console.print_json(topic.model_dump_json(exclude_none=True))
