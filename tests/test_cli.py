"""Tests for the command-line interface."""

import json

import pytest

from sprintboard.cli import main
from sprintboard.io.csv_codec import parse_csv

EXPORT = (
    "Summary,Issue key,Issue id,Status,Priority,Assignee,Team,Original Estimate,"
    "Inward issue link (Depends),Inward issue link (Finish to Start)\n"
    "Schema,OPS-1,1,Open,High,Alice,Core,144000,,\n"
    "Migration,OPS-2,2,Open,Medium,Alice,Core,180000,OPS-1,\n"
    "Cleanup,OPS-3,3,Open,Low,,Edge,,OPS-2,\n"
)


@pytest.fixture
def board(tmp_path):
    tasks = tmp_path / "tasks.csv"
    tasks.write_text(EXPORT, encoding="utf-8")
    cfg = tmp_path / "board.yaml"
    cfg.write_text(
        f"tasks_path: tasks.csv\n"
        f"db_url: sqlite:///{tmp_path / 'board.db'}\n"
        f"sprint_length_days: 7\n"
    )
    return tmp_path, str(cfg)


def test_init_db(board):
    root, cfg = board
    main(["--config", cfg, "init-db"])
    assert (root / "board.db").exists()


def test_capacity_and_fields(board, capsys):
    _, cfg = board
    main(["--config", cfg, "capacity", "--set", "Alice=60", "Bob=40"])
    main(["--config", cfg, "fields", "--set", "Team, Sprint"])
    out = capsys.readouterr().out
    assert "Alice: 60h" in out
    assert "Bob: 40h" in out
    assert "Team" in out


def test_capacity_rejects_bad_entry(board):
    _, cfg = board
    with pytest.raises(SystemExit):
        main(["--config", cfg, "capacity", "--set", "Alice"])


def test_show_prints_plan(board, capsys):
    _, cfg = board
    main(["--config", cfg, "fields", "--set", "Team"])
    main(["--config", cfg, "show"])
    out = capsys.readouterr().out
    assert "Project OPS: 3 issues" in out
    assert "Team=Core" in out
    assert "Sprint 1 (2026-02-15 .. 2026-02-21)" in out


def test_replan_saves(board, capsys):
    root, cfg = board
    before = (root / "tasks.csv").read_text()
    main(["--config", cfg, "replan", "--dry-run"])
    assert (root / "tasks.csv").read_text() == before

    main(["--config", cfg, "replan"])
    out = capsys.readouterr().out
    assert "[OK] Planned 3 of 3 issues" in out
    saved = parse_csv((root / "tasks.csv").read_text())
    assert [r[6] for r in saved.rows] == ["Core", "Core", "Edge"]
    assert saved.rows[1][8] == "1"
    assert saved.rows[1][9] == "1"


def test_export_and_import_json(board):
    root, cfg = board
    out = root / "state.json"
    main(["--config", cfg, "export-json", "--out", str(out)])
    payload = json.loads(out.read_text())
    assert payload["projectKey"] == "OPS"
    assert [i["id"] for i in payload["issues"]] == [1, 2, 3]

    payload["issues"] = [i for i in payload["issues"] if i["id"] != 3]
    payload["issues"][0]["title"] = "Schema v2"
    out.write_text(json.dumps(payload))
    main(["--config", cfg, "import-json", "--from", str(out)])

    saved = parse_csv((root / "tasks.csv").read_text())
    assert [r[2] for r in saved.rows] == ["1", "2"]
    assert saved.rows[0][0] == "Schema v2"
    assert saved.rows[0][6] == "Core"


def test_import_json_rejects_bad_payload(board, capsys):
    root, cfg = board
    bad = root / "bad.json"
    bad.write_text('{"issues": [{"id": "x"}]}')
    with pytest.raises(SystemExit) as e:
        main(["--config", cfg, "import-json", "--from", str(bad)])
    assert e.value.code == 1
    assert "[ERROR]" in capsys.readouterr().out
    assert (root / "tasks.csv").read_text() == EXPORT
