import logging
from pathlib import Path

import pydantic
from pytest import raises

from topic_sync import *
from topic_sync.tools.config import Config, InstanceConfig
from topic_sync.tools.utils import PlanningExecutor, load_tree

API_URL = "https://api.example.com/graphql"


def test_load(tmp_path: Path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"""
instances:
  production:
    api_url: {API_URL}
    tenant_id: some-tenant-id
    tenant_identifier: some-tenant
    headers:
      X-Access-Token: abc
    max_batch_size: 50
"""
    )

    config = Config.load_yaml(config_path)
    instance = config.instances["production"]

    assert instance.language == "en"
    assert instance.max_batch_size == 50
    assert instance.tenant == TenantContext(
        tenant_id="some-tenant-id", tenant_identifier="some-tenant"
    )

    session = instance.create_session(
        logger=logging.getLogger(), language="fr"
    )

    assert session.host == API_URL
    assert session.language == "fr"
    assert session.max_batch_size == 50

    session.close()


def test_round_trip(tmp_path: Path):
    config_path = tmp_path / "config.yaml"

    config = Config(
        instances={
            "a": InstanceConfig(api_url=API_URL, tenant_id="t"),
        }
    )
    config.dump_yaml(config_path)

    assert Config.load_yaml(config_path) == config


def test_invalid():
    with raises(pydantic.ValidationError):
        InstanceConfig(api_url="localhost", tenant_id="t")

    with raises(pydantic.ValidationError):
        InstanceConfig(api_url=API_URL, tenant_id="")

    with raises(pydantic.ValidationError):
        InstanceConfig(api_url=API_URL, tenant_id="t", max_batch_size=0)


def test_load_tree(tmp_path: Path):
    path = tmp_path / "tree.yaml"
    path.write_text(
        """
name: Root
path_identifier: root
children:
  - name: Child
    pathIdentifier: child
"""
    )

    tree = load_tree(path)

    assert tree.path_identifier == "root"
    assert tree.children == [TopicNode(name="Child", path_identifier="child")]


def test_planning_executor(client):
    client.responses.append({"topic": {"get": {"id": "x"}}})
    planner = PlanningExecutor(client)

    assert planner.execute(build_get("x", "en").query, {"id": "x"}) == {
        "topic": {"get": {"id": "x"}}
    }

    request = build_create(TopicNode(name="A"), language="en", tenant_id="t")
    assert planner.execute(request.query, request.variables) == {
        "topic": {"create": {"id": "<new-1>"}}
    }

    request = build_update("y", TopicNode(name="A"), language="en")
    assert planner.execute(request.query, request.variables) == {
        "topic": {"update": {"id": "y"}}
    }

    # only the lookup reached the client
    assert len(client.calls) == 1
