"""
Entry point of `topic-sync` CLI.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import dotenv
import yaml
from click.exceptions import BadParameter, MissingParameter
from pydantic import ValidationError
from typer import Context, Exit, Option

from ...core import Session
from ..config import Config, InstanceConfig
from . import topic
from ._utils import MainTyper, logger, lookup_param, parse_headers

app = MainTyper(
    "topic-sync",
    help="Topic tree synchronization toolkit",
)


@app.callback()
def main(
    ctx: Context,
    api_url: str
    | None = Option(
        None,
        help="GraphQL endpoint of the catalog API",
        envvar="TOPIC_SYNC_API_URL",
    ),
    tenant_id: str
    | None = Option(
        None,
        help="Tenant id in which to create topics",
        envvar="TOPIC_SYNC_TENANT_ID",
    ),
    tenant_identifier: str
    | None = Option(
        None,
        help="Tenant identifier",
        envvar="TOPIC_SYNC_TENANT_IDENTIFIER",
    ),
    header: list[str]
    | None = Option(
        None,
        "--header",
        "-H",
        help="Header to send with each request, e.g. 'X-Access-Token: abc'; may be repeated",
    ),
    instance_name: str
    | None = Option(
        None,
        "--instance",
        help="Instance name as configured in .yaml",
        envvar="TOPIC_SYNC_INSTANCE",
    ),
    config_file: Path = Option(
        "topic-sync.yaml",
        help=".yaml file containing instance info, only applicable with --instance",
        envvar="TOPIC_SYNC_CONFIG_FILE",
        dir_okay=False,
    ),
):
    # load environment variables from .env file if it exists
    dotenv.load_dotenv(Path(".env").resolve())

    if instance_name:
        root_context = RootContext.from_config(
            ctx=ctx, instance_name=instance_name, config_file=config_file
        )
    else:
        if not (api_url and tenant_id):
            raise MissingParameter(
                message="either --api-url and --tenant-id or --instance must be provided",
                ctx=ctx,
                param_hint=["api-url", "tenant-id", "instance"],
                param_type="option",
            )

        try:
            instance = InstanceConfig(
                api_url=api_url,
                tenant_id=tenant_id,
                tenant_identifier=tenant_identifier,
                headers=parse_headers(ctx, header or []),
            )
        except ValidationError as e:
            raise BadParameter(
                f"invalid connection info: {e}",
                ctx=ctx,
                param=lookup_param(ctx, "api_url"),
            )

        root_context = RootContext(
            ctx=ctx,
            instance=instance,
            from_file=False,
        )

    ctx.obj = root_context


app.add_typer(topic.app)


def run():
    app()


@dataclass(kw_only=True)
class RootContext:
    ctx: Context
    instance: InstanceConfig
    from_file: bool

    @classmethod
    def from_config(
        cls,
        *,
        ctx: Context,
        instance_name: str,
        config_file: Path,
    ) -> RootContext:
        # ensure config file exists
        if not config_file.is_file():
            raise BadParameter(
                message=f"file does not exist: {config_file}",
                ctx=ctx,
                param=lookup_param(ctx, "config_file"),
            )

        # get config from file
        try:
            config = Config.load_yaml(config_file)
        except (ValueError, ValidationError, yaml.YAMLError) as e:
            raise BadParameter(
                f"failed to load config file '{config_file}': {e}",
                ctx=ctx,
                param=lookup_param(ctx, "config_file"),
            )

        # get instance from config
        instance = config.instances.get(instance_name)
        if not instance:
            raise BadParameter(
                f"instance '{instance_name}' not found in '{config_file}'",
                ctx=ctx,
                param=lookup_param(ctx, "instance_name"),
            )

        return RootContext(ctx=ctx, instance=instance, from_file=True)

    def create_session(
        self,
        *,
        language: str | None = None,
        max_batch_size: int | None = None,
    ) -> Session:
        try:
            return self.instance.create_session(
                logger=logger,
                language=language,
                max_batch_size=max_batch_size,
            )
        except Exception as e:
            logger.error(f"Failed to create session: {e}")
            raise Exit(code=1)


if __name__ == "__main__":
    app()
