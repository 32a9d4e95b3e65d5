"""Tests for the CLI module."""

import json

from click.testing import CliRunner
from conftest import make_content

from email_sorter import constants
from email_sorter.cli import cli, configure_logging
from email_sorter.scanner import EmailSorter


def test_cli_help():
    """CLI --help should work and show commands."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "sort" in result.output
    assert "check" in result.output
    assert "config" in result.output


def test_cli_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_sort_writes_report(mail_dir, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"delete_senders": ["spam@example.com"]}))

    runner = CliRunner()
    result = runner.invoke(cli, ["sort", str(mail_dir), "--config", str(config_path), "-o", "out.json"])
    assert result.exit_code == 0, result.output
    assert "Total emails analyzed: 3" in result.output

    data = json.loads((mail_dir / "out.json").read_text(encoding="utf-8"))
    assert data["summary"]["categories"] == {"delete": 1, "summarize": 1, "keep": 1}


def test_sort_no_save_and_csv(mail_dir, tmp_path):
    csv_path = tmp_path / "records.csv"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "sort",
            str(mail_dir),
            "--config",
            str(tmp_path / "missing.json"),
            "--no-save",
            "--csv",
            str(csv_path),
            "--show",
        ],
    )
    assert result.exit_code == 0, result.output
    assert not (mail_dir / constants.DEFAULT_REPORT_NAME).exists()
    assert csv_path.read_text(encoding="utf-8").startswith("file,category")


def test_sort_missing_directory(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["sort", str(tmp_path / "nope"), "--config", str(tmp_path / "c.json")])
    assert result.exit_code != 0
    assert "Directory not found" in result.output


def test_sort_bad_config(mail_dir, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("{broken")
    runner = CliRunner()
    result = runner.invoke(cli, ["sort", str(mail_dir), "--config", str(config_path)])
    assert result.exit_code != 0
    assert "Invalid JSON" in result.output


def test_check_single_file(tmp_path):
    path = tmp_path / "mail.md"
    path.write_text(make_content(subject="Weekly Newsletter", **{"from": "news@site.com"}), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["check", str(path), "--config", str(tmp_path / "c.json")])
    assert result.exit_code == 0, result.output
    assert "newsletter" in result.output
    assert "delete" in result.output


def test_check_non_record(tmp_path):
    path = tmp_path / "plain.md"
    path.write_text("Nothing structured in this file.")
    runner = CliRunner()
    result = runner.invoke(cli, ["check", str(path), "--config", str(tmp_path / "c.json")])
    assert result.exit_code != 0
    assert "not a classifiable" in result.output


def test_config_init_and_show(tmp_path, monkeypatch):
    monkeypatch.setattr(constants, "SORT_CONFIG_PATH", tmp_path / "sort_config.json")

    runner = CliRunner()
    result = runner.invoke(cli, ["config", "init"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "sort_config.json").exists()

    result = runner.invoke(cli, ["config", "init"])
    assert result.exit_code != 0
    assert "already exists" in result.output

    result = runner.invoke(cli, ["config", "init", "--force"])
    assert result.exit_code == 0

    result = runner.invoke(cli, ["config", "show"])
    assert result.exit_code == 0
    shown = json.loads(result.stdout)
    assert shown["recent_threshold_days"] == 30
    assert shown["type_weights"]["newsletter"] == -2


def test_sort_show_lists_each_category(mail_dir, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"delete_senders": ["spam@example.com"]}))

    runner = CliRunner()
    result = runner.invoke(cli, ["sort", str(mail_dir), "--config", str(config_path), "--no-save", "--show"])
    assert result.exit_code == 0, result.output
    assert "To delete (1)" in result.output
    assert "To summarize (1)" in result.output
    assert "To keep (1)" in result.output
    assert result.output.index("To delete (1)") < result.output.index("Email Sorting Summary")


def test_sort_with_impossible_date(mail_dir, tmp_path):
    (mail_dir / "baddate.md").write_text(
        make_content(subject="Hello", date="2024-02-30", **{"from": "someone@example.org"}),
        encoding="utf-8",
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["sort", str(mail_dir), "--config", str(tmp_path / "c.json"), "--no-save"])
    assert result.exit_code == 0, result.output
    assert "Total emails analyzed: 4" in result.output


def test_configure_logging_routes_events_to_stderr(mail_dir, capsys):
    configure_logging(0)
    EmailSorter(mail_dir).sort_emails(show_progress=False)
    captured = capsys.readouterr()
    assert "scan_started" not in captured.out + captured.err

    configure_logging(1)
    EmailSorter(mail_dir).sort_emails(show_progress=False)
    captured = capsys.readouterr()
    assert "scan_started" in captured.err
    assert "scan_started" not in captured.out
