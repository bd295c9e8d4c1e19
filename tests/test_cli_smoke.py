from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


def _run_json(tmp_path: Path, args: list[str], env: dict[str, str] | None = None) -> dict:
    out = tmp_path / "out" / "report.json"
    res = runner.invoke(app, [*args, "--out", str(out)], env=env)
    assert res.exit_code == 0, res.output
    return json.loads(out.read_text())


def _rel(data: dict, root: Path) -> list[str]:
    return [Path(e["path"]).relative_to(root).as_posix() for e in data["entries"]]


def test_cli_displays_table_and_total(sample_tree: Path) -> None:
    res = runner.invoke(app, [str(sample_tree)])
    assert res.exit_code == 0
    out = res.stdout
    assert "Scanning:" in out
    assert "Top Space Hogs" in out
    assert "b.txt" in out and "c.txt" in out and "d.txt" in out
    assert "Total size:" in out
    assert "1 kB" in out


def test_cli_prefers_children_over_ancestors(sample_tree: Path, tmp_path: Path) -> None:
    data = _run_json(tmp_path, [str(sample_tree)])
    assert _rel(data, sample_tree) == ["a/b.txt", "a/c.txt", "d.txt"]
    assert [e["size"] for e in data["entries"]] == [500, 300, 200]
    assert data["total_size"] == 1000
    assert data["error_count"] == 0


def test_cli_min_size_keeps_total(sample_tree: Path, tmp_path: Path) -> None:
    data = _run_json(tmp_path, [str(sample_tree), "--min-size", "400"])
    assert _rel(data, sample_tree) == ["a/b.txt"]
    assert data["total_size"] == 1000


def test_cli_depth_and_limit(sample_tree: Path, tmp_path: Path) -> None:
    data = _run_json(tmp_path, [str(sample_tree), "-d", "1", "-n", "1"])
    assert _rel(data, sample_tree) == ["a"]
    assert data["entries"][0]["kind"] == "directory"


def test_cli_limit_zero_is_empty(sample_tree: Path, tmp_path: Path) -> None:
    data = _run_json(tmp_path, [str(sample_tree), "--limit", "0"])
    assert data["entries"] == []
    assert data["total_size"] == 1000


def test_cli_defaults_to_current_directory(sample_tree: Path, monkeypatch) -> None:
    monkeypatch.chdir(sample_tree)
    res = runner.invoke(app, [])
    assert res.exit_code == 0
    assert "b.txt" in res.stdout


def test_cli_missing_path_fails(tmp_path: Path) -> None:
    res = runner.invoke(app, [str(tmp_path / "does-not-exist")])
    assert res.exit_code == 1
    assert "Top Space Hogs" not in res.stdout


def test_cli_bad_min_size_fails_before_scanning(sample_tree: Path) -> None:
    res = runner.invoke(app, [str(sample_tree), "--min-size", "xyz"])
    assert res.exit_code == 1
    assert "Scanning:" not in res.stdout


def test_cli_config_file_supplies_defaults(sample_tree: Path, tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("limit: 1\nexclude: [b.txt]\n", encoding="utf-8")

    data = _run_json(tmp_path, [str(sample_tree), "--config", str(cfg)])
    assert _rel(data, sample_tree) == ["a/c.txt"]
    assert data["total_size"] == 500

    # Flags override the config file
    data = _run_json(tmp_path, [str(sample_tree), "--config", str(cfg), "-n", "5", "--exclude", ""])
    assert _rel(data, sample_tree) == ["a/b.txt", "a/c.txt", "d.txt"]


def test_cli_config_from_environment(sample_tree: Path, tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.json"
    cfg.write_text('{"min_size": "250"}', encoding="utf-8")

    data = _run_json(tmp_path, [str(sample_tree)], env={"SPACEHOGS_CONFIG": str(cfg)})
    assert _rel(data, sample_tree) == ["a/b.txt", "a/c.txt"]


def test_cli_invalid_config_fails(sample_tree: Path, tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("limit: lots\n", encoding="utf-8")
    res = runner.invoke(app, [str(sample_tree), "--config", str(cfg)])
    assert res.exit_code == 1


def test_cli_workers_match_single_thread(sample_tree: Path, tmp_path: Path) -> None:
    single = _run_json(tmp_path, [str(sample_tree)])
    multi = _run_json(tmp_path, [str(sample_tree), "--workers", "3"])
    assert multi["entries"] == single["entries"]


def test_cli_reports_scan_errors_but_exits_zero(sample_tree: Path, monkeypatch) -> None:
    import os

    locked = sample_tree / "a"
    real_scandir = os.scandir

    def _scandir(path):
        if Path(path) == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", _scandir)

    res = runner.invoke(app, [str(sample_tree)])
    assert res.exit_code == 0
    assert "Warning: 1 errors encountered (permission denied, etc)" in res.output
    assert "200 B" in res.output


def test_cli_clean_scan_has_no_error_line(sample_tree: Path) -> None:
    res = runner.invoke(app, [str(sample_tree)])
    assert res.exit_code == 0
    assert "Warning" not in res.output
