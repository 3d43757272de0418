import tempfile
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from src.cloner import cli
from src.cloner.config import CloneSettings
from tests.cluster_fakes import FakeCluster, make_object


@pytest.fixture()
def clusters(monkeypatch):
    built = {
        "http://source": FakeCluster(
            services={"default": [make_object("kubernetes", "default"), make_object("web", "default")]},
            controllers={"default": [make_object("web-rc", "default")]},
            namespaces=["default"],
        ),
        "http://sink": FakeCluster(),
    }
    seen = []

    def factory(endpoint: str, settings: CloneSettings) -> FakeCluster:
        seen.append(settings)
        if endpoint not in built:
            raise ValueError(endpoint)
        return built[endpoint]

    monkeypatch.setattr(cli, "default_client_factory", factory)
    built["settings"] = seen
    return built


def test_single_namespace_run_prints_summary(clusters) -> None:
    result = CliRunner().invoke(
        cli.app, ["--source", "http://source", "--sink", "http://sink", "--namespace", "default"]
    )
    assert result.exit_code == 0, result.output
    assert "Cloned 1 service(s) and 1 replication controller(s)" in result.output
    assert clusters["http://sink"].created_names("create_service") == ["web"]


def test_failed_create_exits_non_zero(clusters) -> None:
    clusters["http://sink"].fail_create = {"web"}
    result = CliRunner().invoke(
        cli.app,
        ["--source", "http://source", "--sink", "http://sink", "--namespace", "default", "--rollback"],
    )
    assert result.exit_code == 1
    assert clusters["http://sink"].created_names("create_replication_controller") == []


def test_continue_on_error_underscore_alias(clusters) -> None:
    clusters["http://sink"].fail_create = {"web"}
    result = CliRunner().invoke(
        cli.app,
        ["--source", "http://source", "--sink", "http://sink", "-n", "default", "--continue_on_error"],
    )
    assert result.exit_code == 0, result.output
    assert "1 failure(s)" in result.output
    assert clusters["settings"][0].continue_on_error is True


def test_missing_endpoints_abort_silently(clusters) -> None:
    result = CliRunner().invoke(cli.app, ["--namespace", "default"])
    assert result.exit_code == 0
    assert "Cloned" not in result.output
    assert clusters["http://sink"].calls == []


def test_config_file_supplies_endpoints_and_extra_namespaces(clusters) -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        path = Path(tmp_dir) / "cloner.yaml"
        path.write_text(
            yaml.safe_dump({"source": "http://source", "sink": "http://sink", "extra_namespaces": []}),
            encoding="utf-8",
        )
        result = CliRunner().invoke(cli.app, ["--config", str(path)])
    assert result.exit_code == 0, result.output
    assert [c[1] for c in clusters["http://source"].calls if c[0] == "list_services"] == ["default"]


def test_invalid_config_is_a_usage_error(clusters) -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        path = Path(tmp_dir) / "cloner.yaml"
        path.write_text("just a string\n", encoding="utf-8")
        result = CliRunner().invoke(cli.app, ["--config", str(path)])
    assert result.exit_code == 2


@pytest.mark.parametrize("content", ["source: 8080\n", "retries: lots\n"])
def test_wrongly_typed_config_is_a_usage_error(clusters, content: str) -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        path = Path(tmp_dir) / "cloner.yaml"
        path.write_text(content, encoding="utf-8")
        result = CliRunner().invoke(cli.app, ["--config", str(path)])
    assert result.exit_code == 2
    assert clusters["settings"] == []
