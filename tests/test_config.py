"""Tests for GovReadyfile loading and runtime settings."""

import os

import pytest

from govready.utils.config import (
    Config,
    load_project_config,
    render_project_file,
    DEFAULT_CONTENT_PATH,
)
from govready.utils.exceptions import ConfigMissing, ConfigIncomplete


def _write(path, text):
    path.write_text(text)
    return str(path)


def test_load_complete_file(project_file):
    project = load_project_config(str(project_file))
    assert project.api_version == "0.1.0"
    assert project.scan_dir == "scans"
    assert project.default_profile == "test"
    assert project.cpe_dictionary_path == "/x/cpe.xml"


def test_last_occurrence_wins(tmp_path):
    path = _write(tmp_path / "GovReadyfile", (
        "API_VERSION = 0.1.0\n"
        "SCAN_DIR = scans\n"
        "PROFILE = first\n"
        "CPE = /x/cpe.xml\n"
        "PROFILE = second\n"
    ))
    assert load_project_config(path).default_profile == "second"


def test_comments_blank_lines_and_lines_without_equals_are_skipped(tmp_path):
    path = _write(tmp_path / "GovReadyfile", (
        "# PROFILE = commented-out\n"
        "\n"
        "   # indented comment\n"
        "just some words\n"
        "API_VERSION=0.2.0\n"
        "SCAN_DIR = out\n"
        "PROFILE = stig-rhel6-server-upstream\n"
        "CPE = /usr/share/cpe.xml\n"
    ))
    project = load_project_config(path)
    assert project.api_version == "0.2.0"
    assert project.scan_dir == "out"
    assert project.default_profile == "stig-rhel6-server-upstream"


def test_values_are_not_interpolated_or_executed(tmp_path):
    path = _write(tmp_path / "GovReadyfile", (
        "API_VERSION = 0.1.0\n"
        "SCAN_DIR = ${HOME}/scans\n"
        "PROFILE = $(rm -rf /)\n"
        "CPE = /x/cpe.xml\n"
    ))
    project = load_project_config(path)
    assert project.scan_dir == "${HOME}/scans"
    assert project.default_profile == "$(rm -rf /)"


def test_unknown_keys_are_ignored(tmp_path):
    path = _write(tmp_path / "GovReadyfile", (
        "API_VERSION = 0.1.0\n"
        "SCAN_DIR = scans\n"
        "PROFILE = test\n"
        "CPE = /x/cpe.xml\n"
        "EXTRA = surprise\n"
    ))
    project = load_project_config(path)
    assert not hasattr(project, "extra")
    assert set(project.to_dict()) == {
        "api_version", "scan_dir", "default_profile", "cpe_dictionary_path",
    }


def test_missing_file_raises_config_missing(tmp_path):
    with pytest.raises(ConfigMissing):
        load_project_config(str(tmp_path / "GovReadyfile"))


@pytest.mark.parametrize("content", ["", "\n\n   \n"])
def test_empty_file_raises_config_missing(tmp_path, content):
    path = _write(tmp_path / "GovReadyfile", content)
    with pytest.raises(ConfigMissing):
        load_project_config(path)


@pytest.mark.parametrize("missing", ["API_VERSION", "SCAN_DIR", "PROFILE", "CPE"])
def test_missing_key_raises_config_incomplete(tmp_path, missing):
    lines = {
        "API_VERSION": "0.1.0",
        "SCAN_DIR": "scans",
        "PROFILE": "test",
        "CPE": "/x/cpe.xml",
    }
    del lines[missing]
    path = _write(tmp_path / "GovReadyfile",
                  "".join(f"{k} = {v}\n" for k, v in lines.items()))
    with pytest.raises(ConfigIncomplete) as excinfo:
        load_project_config(path)
    assert excinfo.value.missing_keys == [missing]


def test_blank_value_counts_as_missing(tmp_path):
    path = _write(tmp_path / "GovReadyfile", (
        "API_VERSION = 0.1.0\n"
        "SCAN_DIR =\n"
        "PROFILE = test\n"
        "CPE = /x/cpe.xml\n"
    ))
    with pytest.raises(ConfigIncomplete) as excinfo:
        load_project_config(path)
    assert "SCAN_DIR" in excinfo.value.missing_keys


def test_project_config_is_immutable(project_file):
    project = load_project_config(str(project_file))
    with pytest.raises(AttributeError):
        project.scan_dir = "elsewhere"


def test_rendered_default_file_loads(tmp_path):
    path = _write(tmp_path / "GovReadyfile", render_project_file())
    project = load_project_config(path)
    assert project.scan_dir == "scans"
    assert project.default_profile == "test"


def test_from_env_reads_overrides(project_dir, monkeypatch):
    monkeypatch.setenv("GOVREADY_DEBUG", "true")
    monkeypatch.setenv("GOVREADY_CONFIG", "custom.cfg")
    monkeypatch.setenv("GOVREADY_CONTENT", "/opt/content.xml")
    config = Config.from_env()
    assert config.debug is True
    assert config.project_file == "custom.cfg"
    assert config.content_path == "/opt/content.xml"


def test_from_env_reads_env_file(project_dir):
    (project_dir / "settings.env").write_text("GOVREADY_ENGINE=/opt/bin/oscap\n")
    try:
        config = Config.from_env("settings.env")
    finally:
        # load_dotenv writes straight into os.environ
        os.environ.pop("GOVREADY_ENGINE", None)
    assert config.engine == "/opt/bin/oscap"
    assert config.content_path == DEFAULT_CONTENT_PATH


def test_validate():
    config = Config()
    assert config.validate() == (True, None)
    config.engine = ""
    is_valid, error = config.validate()
    assert not is_valid
    assert "engine" in error


def test_quotes_are_kept_as_written(tmp_path):
    path = _write(tmp_path / "GovReadyfile", (
        "API_VERSION = 0.1.0\n"
        "SCAN_DIR = 'scans'\n"
        "PROFILE = \"stig\"\n"
        "CPE = /x/cpe.xml\n"
    ))
    project = load_project_config(path)
    assert project.default_profile == '"stig"'
    assert project.scan_dir == "'scans'"


def test_hash_inside_value_is_kept(tmp_path):
    path = _write(tmp_path / "GovReadyfile", (
        "API_VERSION = 0.1.0\n"
        "SCAN_DIR = scans\n"
        "PROFILE = test\n"
        "CPE = /opt/content #2/cpe.xml\n"
    ))
    assert load_project_config(path).cpe_dictionary_path == "/opt/content #2/cpe.xml"


def test_unclosed_quote_does_not_swallow_following_lines(tmp_path):
    path = _write(tmp_path / "GovReadyfile", (
        "API_VERSION = \"0.1.0\n"
        "SCAN_DIR = scans\n"
        "PROFILE = \"test\"\n"
        "CPE = /x/cpe.xml\n"
    ))
    project = load_project_config(path)
    assert project.api_version == '"0.1.0'
    assert project.scan_dir == "scans"
    assert project.default_profile == '"test"'
    assert project.cpe_dictionary_path == "/x/cpe.xml"


def test_only_first_equals_splits(tmp_path):
    path = _write(tmp_path / "GovReadyfile", (
        "API_VERSION = 0.1.0\n"
        "SCAN_DIR = scans\n"
        "PROFILE = a=b\n"
        "CPE = /x/cpe.xml\n"
    ))
    assert load_project_config(path).default_profile == "a=b"
