import json
import os
import tempfile

import pytest
import yaml

from tastyharvest.config_reader import ConfigReader


@pytest.fixture
def config_reader():
    return ConfigReader()


@pytest.fixture
def source_data():
    return {"url": "https://api.example.com/items/", "limit_pages": 2}


@pytest.fixture
def json_file(source_data):
    with tempfile.NamedTemporaryFile(suffix=".json", mode="w", delete=False) as f:
        json.dump(source_data, f)
        path = f.name
    yield path
    os.unlink(path)


@pytest.fixture
def yaml_file(source_data):
    with tempfile.NamedTemporaryFile(suffix=".yaml", mode="w", delete=False) as f:
        yaml.dump(source_data, f)
        path = f.name
    yield path
    os.unlink(path)


def test_read_json(config_reader, json_file, source_data):
    """Test reading from a JSON file."""
    assert config_reader.read(json_file) == source_data


def test_read_yaml(config_reader, yaml_file, source_data):
    """Test reading from a YAML file."""
    assert config_reader.read(yaml_file) == source_data


def test_read_invalid_extension(config_reader):
    """Test that reading a file with invalid extension raises an error."""
    with tempfile.NamedTemporaryFile(suffix=".txt") as f:
        with pytest.raises(ValueError) as excinfo:
            config_reader.read(f.name)
    assert "Unsupported extension" in str(excinfo.value)


def test_resolves_environment_variables(config_reader, tmp_path, monkeypatch):
    monkeypatch.setenv("AHJO_HOST", "ahjo.example.com")
    path = tmp_path / "source.yml"
    path.write_text("url: https://${AHJO_HOST}/items/\ntoken: ${UNSET_TOKEN_VAR}\n")

    data = config_reader.read(str(path))

    assert data["url"] == "https://ahjo.example.com/items/"
    assert data["token"] == "${UNSET_TOKEN_VAR}"


def test_loads_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("TASTY_TEST_HOST", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("TASTY_TEST_HOST=env.example.com\n")
    path = tmp_path / "source.json"
    path.write_text('{"url": "https://${TASTY_TEST_HOST}/"}')

    try:
        data = ConfigReader(env_file=env_file).read(str(path))
    finally:
        os.environ.pop("TASTY_TEST_HOST", None)

    assert data == {"url": "https://env.example.com/"}


def test_read_rejects_non_mapping(config_reader, tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")

    with pytest.raises(ValueError):
        config_reader.read(str(path))
