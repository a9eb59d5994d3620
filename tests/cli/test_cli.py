"""Tests for the restohub CLI: commands run against a tmp data dir."""

import json

import pytest
from typer.testing import CliRunner

from restohub import __version__
from restohub.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    monkeypatch.setenv("RESTOHUB_LOG_LEVEL", "ERROR")


@pytest.fixture()
def data_dir(tmp_path):
    return tmp_path / "hub"


@pytest.fixture()
def invoke(data_dir):
    def _invoke(*args: str):
        return runner.invoke(app, [*args, "--data-dir", str(data_dir)])

    return _invoke


@pytest.fixture()
def menu_file(tmp_path, menu_payload):
    path = tmp_path / "menu.json"
    path.write_text(json.dumps(menu_payload), encoding="utf-8")
    return path


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestRootCommands:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_ingest_and_normalize(self, invoke, menu_file, data_dir):
        staged = _json(invoke("ingest", "menu", str(menu_file), "--org", "org-1", "--json"))
        assert staged["source"] == "menu"
        assert (data_dir / "staging.json").exists()

        summary = _json(invoke("normalize", "--org", "org-1", "--json"))
        assert summary["menuItemsUpserted"] == 2

    def test_ingest_dry_run(self, invoke, menu_file, data_dir):
        assert _json(invoke("ingest", "menu", str(menu_file), "--dry-run", "--json")) == {
            "source": "menu",
            "dryRun": True,
        }
        assert not (data_dir / "staging.json").exists()

    def test_ingest_unknown_source(self, invoke, menu_file):
        result = invoke("ingest", "pos", str(menu_file))
        assert result.exit_code == 1

    def test_ingest_failure_as_json(self, invoke, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"restaurantId": "r1", "items": []}', encoding="utf-8")
        result = invoke("ingest", "menu", str(bad), "--json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"]["code"] == "VALIDATION_FAILED"

    def test_ingest_invalid_json_file(self, invoke, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        assert invoke("ingest", "menu", str(bad)).exit_code == 1


class TestProductAndSpaceCommands:
    @pytest.fixture()
    def product_id(self, invoke, menu_file):
        _json(invoke("ingest", "menu", str(menu_file), "--json"))
        _json(invoke("normalize", "--json"))
        product = _json(invoke("products", "build", "menu", "r1", "--org", "org-producer", "--json"))
        return product["id"]

    def test_build_with_pii_policy(self, invoke):
        product = _json(invoke("products", "build", "menu", "r1", "--policy", '{"pii": true}', "--json"))
        assert product["policy"]["pii"] is False
        assert product["createdByOrg"] == "anonymous"

    def test_build_bad_policy_json(self, invoke):
        assert invoke("products", "build", "menu", "r1", "--policy", "{").exit_code == 1

    def test_list_and_get(self, invoke, product_id):
        [listed] = _json(invoke("products", "list", "--json"))
        assert listed["id"] == product_id
        assert _json(invoke("products", "get", product_id, "--json"))["id"] == product_id

    def test_list_table(self, invoke, product_id):
        result = invoke("products", "list")
        assert result.exit_code == 0
        assert "Data Products" in result.stdout

    def test_publish_consume_audit(self, invoke, product_id):
        published = _json(invoke("spaces", "publish", "gaiax-mock", product_id, "--org", "org-producer", "--json"))
        assert published == {"space": "gaiax", "productId": product_id}

        consumed = _json(invoke(
            "spaces", "consume", "gaiax", product_id,
            "--purpose", "discovery", "--org", "org-dest", "--roles", "destination", "--json",
        ))
        assert len(consumed["payload"]) == 2

        denied = invoke(
            "spaces", "consume", "gaiax", product_id,
            "--purpose", "marketing", "--org", "org-dest", "--roles", "destination", "--json",
        )
        assert denied.exit_code == 1
        assert json.loads(denied.stdout)["error"]["code"] == "ACCESS_DENIED"

        events = _json(invoke("audit", "list", "--action", "consume", "--json"))
        assert [e["decision"] for e in events] == ["allow", "deny"]

    def test_list_published(self, invoke, product_id):
        invoke("spaces", "publish", "segittur", product_id)
        [listed] = _json(invoke("spaces", "list", "segittur", "--json"))
        assert listed["id"] == product_id


class TestDebugCommands:
    def test_staging_and_canonical(self, invoke, menu_file):
        invoke("ingest", "menu", str(menu_file), "--org", "org-1")
        invoke("normalize")

        staging = _json(invoke("debug", "staging", "menu", "--json"))
        assert staging["count"] == 1

        canonical = _json(invoke("debug", "canonical", "menu", "--restaurant", "r1", "--json"))
        assert [i["name"] for i in canonical["items"]] == ["Tortilla", "Gazpacho"]

    def test_unknown_kind(self, invoke):
        assert invoke("debug", "canonical", "reviews").exit_code == 1
