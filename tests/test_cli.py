from datetime import date

from typer.testing import CliRunner

import cli.main as cli_main
from core.domain.errors import InvalidRange, NoCredentialFound
from core.domain.models import FetchResult, FetchStatus

runner = CliRunner()


def test_rejects_dates_before_service_start(tmp_path, monkeypatch):
    called = []
    monkeypatch.setattr(cli_main, "run_pipeline", lambda *a, **k: called.append(a))

    result = runner.invoke(cli_main.app, ["fetch", "2011-03-31", "--dest", str(tmp_path)])

    assert result.exit_code == 2
    assert called == []


def test_rejects_malformed_dates(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_main, "run_pipeline", lambda *a, **k: None)
    result = runner.invoke(cli_main.app, ["fetch", "01/02/2023", "--dest", str(tmp_path)])
    assert result.exit_code == 2


def test_passes_options_to_pipeline(tmp_path, monkeypatch):
    captured = {}

    def fake_run(request, settings, hooks):
        captured["request"] = request
        hooks.result(FetchResult(day=date(2023, 1, 2), status=FetchStatus.SAVED, path=tmp_path / "x.pdf"))

    monkeypatch.setattr(cli_main, "run_pipeline", fake_run)

    result = runner.invoke(
        cli_main.app,
        ["fetch", "2023-01-01", "2023-01-07", "-t", "tok", "-d", str(tmp_path), "--skip-sunday"],
    )

    assert result.exit_code == 0, result.output
    request = captured["request"]
    assert request.start == date(2023, 1, 1)
    assert request.end == date(2023, 1, 7)
    assert request.token == "tok"
    assert request.dest == tmp_path
    assert request.skip_sunday is True
    assert "2023-01-02" in result.output


def test_fatal_errors_exit_with_code_1(tmp_path, monkeypatch):
    def fake_run(request, settings, hooks):
        raise InvalidRange(date(2023, 1, 5), date(2023, 1, 2))

    monkeypatch.setattr(cli_main, "run_pipeline", fake_run)

    result = runner.invoke(cli_main.app, ["fetch", "2023-01-05", "2023-01-02", "-d", str(tmp_path), "-q"])

    assert result.exit_code == 1
    assert "Invalid start/end date" in result.output


def test_missing_credential_message(tmp_path, monkeypatch):
    def fake_run(request, settings, hooks):
        raise NoCredentialFound("NYT-S", ["firefox", "chrome"])

    monkeypatch.setattr(cli_main, "run_pipeline", fake_run)

    result = runner.invoke(cli_main.app, ["fetch", "-d", str(tmp_path), "-q"])

    assert result.exit_code == 1
    assert "failed to find NYT-S cookie" in result.output


def test_unwritable_destination_exits_with_code_1(tmp_path):
    blocker = tmp_path / "occupied"
    blocker.write_text("not a directory")

    result = runner.invoke(cli_main.app, ["fetch", "2023-01-01", "2023-01-01", "-t", "tok", "-d", str(blocker), "-q"])

    assert result.exit_code == 1
    assert "File exists" in result.output
