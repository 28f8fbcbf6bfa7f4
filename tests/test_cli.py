import json

from typer.testing import CliRunner

from iphits.cli import app

runner = CliRunner()

LOG_LINES = [
    "1.1.1.1 2024-01-10 10:00:00",
    "9.9.9.9 2024-02-10 10:00:00",
    "1.1.1.1 2024-01-20 12:30:00",
]


def test_end_to_end(write_log, tmp_path):
    log_path = write_log(LOG_LINES)
    out = tmp_path / "hits.txt"
    result = runner.invoke(app, [
        "--file-log", str(log_path),
        "--file-output", str(out),
        "--time-start", "01.01.2024",
        "--time-end", "31.01.2024",
    ])
    assert result.exit_code == 0, result.output
    assert "Analysis completed" in result.output
    assert out.read_text() == "1.1.1.1: 2\n"


def test_config_file_with_cli_override(write_log, tmp_path):
    log_path = write_log(LOG_LINES)
    out = tmp_path / "hits.txt"
    config = tmp_path / "config.json"
    config.write_text(json.dumps({
        "file-log": str(log_path),
        "file-output": str(out),
        "time-start": "01.01.2024",
        "time-end": "31.01.2024",
    }))
    result = runner.invoke(app, [
        "--config-file", str(config),
        "--time-end", "28.02.2024",
    ])
    assert result.exit_code == 0, result.output
    assert out.read_text() == "1.1.1.1: 2\n9.9.9.9: 1\n"


def test_missing_time_end_everywhere(write_log, tmp_path):
    out = tmp_path / "hits.txt"
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"time-start": "01.01.2024"}))
    result = runner.invoke(app, [
        "--config-file", str(config),
        "--file-log", str(write_log(LOG_LINES)),
        "--file-output", str(out),
    ])
    assert result.exit_code == 1
    assert "Required parameters are missing" in result.output
    assert "time-end" in result.output
    assert not out.exists()


def test_bad_config_file(tmp_path):
    config = tmp_path / "config.json"
    config.write_text("{not json")
    result = runner.invoke(app, ["--config-file", str(config)])
    assert result.exit_code == 1
    assert "Error reading config file" in result.output


def test_option_without_value_is_usage_error():
    result = runner.invoke(app, ["--time-start"])
    assert result.exit_code == 2


def test_stray_positional_is_usage_error():
    result = runner.invoke(app, ["access.log"])
    assert result.exit_code == 2


def test_output_write_failure(write_log, tmp_path):
    result = runner.invoke(app, [
        "--file-log", str(write_log(LOG_LINES)),
        "--file-output", str(tmp_path),
        "--time-start", "01.01.2024",
        "--time-end", "31.01.2024",
    ])
    assert result.exit_code == 1
    assert "Error writing output file" in result.output


def test_unknown_key_is_accepted(write_log, tmp_path):
    out = tmp_path / "hits.txt"
    result = runner.invoke(app, [
        "--file-log", str(write_log(LOG_LINES)),
        "--comment", "january",
        "--file-output", str(out),
        "--time-start", "01.01.2024",
        "--time-end", "31.01.2024",
    ])
    assert result.exit_code == 0, result.output
    assert out.read_text() == "1.1.1.1: 2\n"


def test_unknown_key_without_value_is_usage_error():
    result = runner.invoke(app, ["--time-start", "01.01.2024", "--comment"])
    assert result.exit_code == 2
