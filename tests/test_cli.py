"""Test the command line interface with an in-memory store."""

import pytest
from typer.testing import CliRunner

from azblob_getter import cli
from azblob_getter.cli import app
from tests.fixtures.sample_blobs import blob_url


@pytest.fixture
def runner():
    """Create a CliRunner for in-process testing."""
    return CliRunner()


@pytest.fixture
def cli_getter(make_getter, monkeypatch):
    """Route CLI commands to a getter backed by the in-memory store."""
    seen_settings = []

    def _make(settings):
        seen_settings.append(settings)
        return make_getter(**settings.model_dump())

    monkeypatch.setattr(cli, "make_getter", _make)
    return seen_settings


class TestModeCommand:

    def test_dir(self, runner, cli_getter):
        result = runner.invoke(app, ["mode", blob_url("folder")])
        assert result.exit_code == 0
        assert result.stdout.strip() == "dir"

    def test_file(self, runner, cli_getter):
        result = runner.invoke(app, ["mode", blob_url("collision/foo")])
        assert result.exit_code == 0
        assert result.stdout.strip() == "file"

    def test_invalid_address(self, runner, cli_getter):
        result = runner.invoke(app, ["mode", "https://acct.store.example.com/onlycontainer"])
        assert result.exit_code == 1


class TestGetCommand:

    def test_directory(self, runner, cli_getter, tmp_path):
        dst = tmp_path / "out"
        result = runner.invoke(app, ["get", blob_url("folder"), str(dst)])

        assert result.exit_code == 0
        assert "2 file(s)" in result.stdout
        assert (dst / "main.tf").read_bytes() == b"# Main"
        assert (dst / "subfolder" / "sub.tf").read_bytes() == b"# Sub"

    def test_file(self, runner, cli_getter, tmp_path):
        dst = tmp_path / "main.tf"
        result = runner.invoke(app, ["get", blob_url("folder/main.tf"), str(dst)])

        assert result.exit_code == 0
        assert dst.read_bytes() == b"# Main"

    def test_not_found(self, runner, cli_getter, tmp_path):
        dst = tmp_path / "404.tf"
        result = runner.invoke(app, ["get", blob_url("folder/404.tf"), str(dst)])

        assert result.exit_code == 1
        assert not dst.exists()


class TestGetFileCommand:

    def test_download(self, runner, cli_getter, tmp_path):
        dst = tmp_path / "sub.tf"
        result = runner.invoke(app, ["get-file", blob_url("folder/subfolder/sub.tf"), str(dst)])

        assert result.exit_code == 0
        assert dst.read_bytes() == b"# Sub"

    def test_not_found(self, runner, cli_getter, tmp_path):
        result = runner.invoke(app, ["get-file", blob_url("folder/404.tf"), str(tmp_path / "x")])
        assert result.exit_code == 1


class TestGlobalOptions:

    def test_config_file_reaches_getter(self, runner, cli_getter, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("page_size: 1\n")

        result = runner.invoke(app, ["--config", str(config), "mode", blob_url("folder")])

        assert result.exit_code == 0
        assert cli_getter[0].page_size == 1

    def test_missing_config_file(self, runner, cli_getter, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "missing.yaml"), "mode", blob_url("folder")])
        assert result.exit_code == 1
        assert cli_getter == []

    def test_verbose(self, runner, cli_getter):
        result = runner.invoke(app, ["--verbose", "mode", blob_url("folder")])
        assert result.exit_code == 0
