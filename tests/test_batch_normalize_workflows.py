"""
Tests for the batch workflow normalization script.
"""

import json

import pytest

import batch_normalize_workflows as batch


@pytest.fixture
def workflow_dir(tmp_path):
    input_dir = tmp_path / "workflows"
    input_dir.mkdir()
    (input_dir / "legacy.json").write_text(json.dumps({
        "name": "Legacy",
        "nodes": [
            {"name": "Webhook", "type": "nodes-base.webhook"},
            {"name": "Agent", "type": "nodes-langchain.agent"},
            {"name": "Slack", "type": "n8n-nodes-base.slack"},
        ],
        "connections": {},
    }))
    (input_dir / "clean.json").write_text(json.dumps({
        "name": "Clean",
        "nodes": [{"name": "Set", "type": "n8n-nodes-base.set"}],
    }))
    (input_dir / "export.json").write_text(json.dumps([
        {"name": "A", "nodes": [{"type": "nodes-base.set"}]},
        {"name": "B", "nodes": [{"type": "nodes-base.if"}, {"type": "nodes-base.code"}]},
    ]))
    return input_dir


def test_count_changed_nodes():
    before = {"nodes": [{"type": "nodes-base.set"}, {"type": "n8n-nodes-base.if"}]}
    after = {"nodes": [{"type": "n8n-nodes-base.set"}, {"type": "n8n-nodes-base.if"}]}
    assert batch.count_changed_nodes(before, after) == 1
    assert batch.count_changed_nodes(None, after) == 0
    assert batch.count_changed_nodes({"nodes": None}, {"nodes": None}) == 0


def test_normalize_workflow_data_list():
    data = [{"nodes": [{"type": "nodes-base.set"}]}, {"nodes": [{"type": "nodes-base.if"}]}]
    normalized, changed = batch.normalize_workflow_data(data)
    assert changed == 2
    assert normalized[1]["nodes"][0]["type"] == "n8n-nodes-base.if"


def test_process_directory_to_output(workflow_dir, tmp_path):
    output_dir = tmp_path / "out"
    summary = batch.process_directory(workflow_dir, output_dir=output_dir)

    assert summary["total_files"] == 3
    assert sorted(summary["changed_files"]) == ["export.json", "legacy.json"]
    assert summary["changed_nodes"] == 5
    assert summary["errors"] == {}

    legacy = json.loads((output_dir / "legacy.json").read_text())
    assert [node["type"] for node in legacy["nodes"]] == [
        "n8n-nodes-base.webhook",
        "@n8n/n8n-nodes-langchain.agent",
        "n8n-nodes-base.slack",
    ]
    # input untouched
    original = json.loads((workflow_dir / "legacy.json").read_text())
    assert original["nodes"][0]["type"] == "nodes-base.webhook"


def test_process_directory_in_place(workflow_dir):
    batch.process_directory(workflow_dir)
    export = json.loads((workflow_dir / "export.json").read_text())
    assert export[1]["nodes"][1]["type"] == "n8n-nodes-base.code"


def test_process_directory_check_only_writes_nothing(workflow_dir):
    before = (workflow_dir / "legacy.json").read_text()
    summary = batch.process_directory(workflow_dir, check_only=True)
    assert "legacy.json" in summary["changed_files"]
    assert (workflow_dir / "legacy.json").read_text() == before


def test_process_directory_records_invalid_json(workflow_dir, tmp_path):
    (workflow_dir / "broken.json").write_text("{not json")
    summary = batch.process_directory(workflow_dir, output_dir=tmp_path / "out")
    assert list(summary["errors"]) == ["broken.json"]
    assert summary["total_files"] == 4


def test_process_directory_skips_invalid_utf8_and_continues(tmp_path):
    input_dir = tmp_path / "workflows"
    input_dir.mkdir()
    (input_dir / "bad.json").write_bytes(b'{"nodes": "\xff\xfe"}')
    (input_dir / "ok.json").write_text(json.dumps({"nodes": [{"type": "nodes-base.set"}]}))
    output_dir = tmp_path / "out"

    summary = batch.process_directory(input_dir, output_dir=output_dir)

    assert list(summary["errors"]) == ["bad.json"]
    assert summary["changed_files"] == ["ok.json"]
    ok = json.loads((output_dir / "ok.json").read_text())
    assert ok["nodes"][0]["type"] == "n8n-nodes-base.set"


def test_process_directory_records_write_failure_and_continues(workflow_dir, tmp_path):
    output_dir = tmp_path / "out"
    output_dir.mkdir()
    # a directory where the output file should go makes open() fail
    (output_dir / "clean.json").mkdir()

    summary = batch.process_directory(workflow_dir, output_dir=output_dir)

    assert list(summary["errors"]) == ["clean.json"]
    assert (output_dir / "export.json").exists()
    assert (output_dir / "legacy.json").exists()


def test_process_directory_in_place_leaves_unchanged_files_alone(workflow_dir):
    compact = json.dumps({"name": "Clean", "nodes": [{"type": "n8n-nodes-base.set"}]}, separators=(",", ":"))
    (workflow_dir / "clean.json").write_text(compact)

    batch.process_directory(workflow_dir)

    assert (workflow_dir / "clean.json").read_text() == compact


def test_process_directory_output_dir_copies_unchanged_files(workflow_dir, tmp_path):
    output_dir = tmp_path / "out"
    batch.process_directory(workflow_dir, output_dir=output_dir)
    clean = json.loads((output_dir / "clean.json").read_text())
    assert clean["nodes"][0]["type"] == "n8n-nodes-base.set"


def test_main_check_exit_codes(workflow_dir, tmp_path):
    assert batch.main([str(workflow_dir), "--check"]) == 1

    clean_dir = tmp_path / "clean"
    clean_dir.mkdir()
    (clean_dir / "ok.json").write_text(json.dumps({"nodes": [{"type": "n8n-nodes-base.set"}]}))
    assert batch.main([str(clean_dir), "--check"]) == 0


def test_main_missing_directory(tmp_path):
    assert batch.main([str(tmp_path / "missing"), "--check"]) == 2


def test_main_requires_a_destination(workflow_dir):
    with pytest.raises(SystemExit):
        batch.main([str(workflow_dir)])
