import json

import pytest
import yaml

from graphql_prepare.errors import ConfigNotFoundError, ConfigurationMissingError
from graphql_prepare.graphql_config import GraphQLConfig, find_config_path

DOCUMENT = {
    "projects": {
        "app": {"schemaPath": "app.graphql", "extensions": {"prepare-bundle": "out/app.graphql"}},
        "db": {"schemaPath": "db/schema.graphql"},
    }
}


def test_find_config_path_in_parent(tmp_path, write_config):
    config_path = write_config(tmp_path, DOCUMENT)
    nested = tmp_path / "src" / "nested"
    nested.mkdir(parents=True)
    assert find_config_path(nested) == config_path.resolve()


def test_find_config_path_missing(tmp_path):
    with pytest.raises(ConfigNotFoundError):
        find_config_path(tmp_path)


def test_load_from_working_directory(tmp_path, monkeypatch, write_config):
    write_config(tmp_path, DOCUMENT)
    monkeypatch.chdir(tmp_path)
    config = GraphQLConfig.load()
    assert config.config_path == (tmp_path / ".graphqlconfig").resolve()


def test_get_projects_in_file_order(tmp_path, write_config):
    config = GraphQLConfig.load(write_config(tmp_path, DOCUMENT))
    projects = config.get_projects()
    assert list(projects) == ["app", "db"]
    assert projects["db"].schema_path == str(tmp_path.resolve() / "db" / "schema.graphql")
    assert projects["app"].extensions == {"prepare-bundle": "out/app.graphql"}


def test_get_projects_without_projects_section(tmp_path, write_config):
    config = GraphQLConfig.load(write_config(tmp_path, {"schemaPath": "schema.graphql"}))
    assert config.get_projects() is None
    assert config.get_project_config().schema_path.endswith("schema.graphql")


def test_get_unknown_project(tmp_path, write_config):
    config = GraphQLConfig.load(write_config(tmp_path, DOCUMENT))
    with pytest.raises(ConfigurationMissingError, match="'web' is not a valid project name"):
        config.get_project_config("web")


def test_project_without_schema_or_extensions(tmp_path, write_config):
    config = GraphQLConfig.load(write_config(tmp_path, {"projects": {"empty": {}}}))
    project = config.get_project_config("empty")
    assert project.schema_path is None
    project.extensions["prepare-bundle"] = "out.graphql"
    assert project.config == {"extensions": {"prepare-bundle": "out.graphql"}}


def test_invalid_config_file(tmp_path):
    path = tmp_path / ".graphqlconfig"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigNotFoundError, match="is not valid"):
        GraphQLConfig.load(path)


def test_save_config_json(tmp_path, write_config):
    path = write_config(tmp_path, DOCUMENT)
    config = GraphQLConfig.load(path)
    project = config.get_project_config("db")
    project.extensions["prepare-bundle"] = "out/db.graphql"
    config.save_config(project.config, "db")

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["projects"]["db"]["extensions"] == {"prepare-bundle": "out/db.graphql"}
    assert saved["projects"]["app"] == DOCUMENT["projects"]["app"]


def test_load_and_save_yaml(tmp_path):
    path = tmp_path / ".graphqlconfig.yml"
    path.write_text(yaml.safe_dump(DOCUMENT), encoding="utf-8")
    config = GraphQLConfig.load(path)
    assert list(config.get_projects()) == ["app", "db"]

    config.save_config({"schemaPath": "web.graphql"}, "web")
    saved = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert saved["projects"]["web"] == {"schemaPath": "web.graphql"}
