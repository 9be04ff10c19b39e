from core.config import AppSettings, write_user_env_vars


def test_defaults(monkeypatch):
    for key in ("XWORD_PDF_TOKEN", "XWORD_PDF_REQUEST_DELAY_SECONDS", "XWORD_PDF_BROWSERS"):
        monkeypatch.delenv(key, raising=False)
    settings = AppSettings(_env_file=None)
    assert settings.base_url == "https://www.nytimes.com"
    assert settings.cookie_name == "NYT-S"
    assert settings.request_delay_seconds == 1.0
    assert settings.preview_bytes == 255
    assert settings.browsers == ["firefox", "chrome", "brave", "safari"]
    assert settings.token is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("XWORD_PDF_REQUEST_DELAY_SECONDS", "2.5")
    monkeypatch.setenv("XWORD_PDF_BROWSERS", '["chrome"]')
    settings = AppSettings(_env_file=None)
    assert settings.request_delay_seconds == 2.5
    assert settings.browsers == ["chrome"]


def test_write_user_env_vars_merges(tmp_path, monkeypatch):
    monkeypatch.delenv("XWORD_PDF_TOKEN", raising=False)
    env_path = tmp_path / "cfg" / ".env"

    write_user_env_vars({"XWORD_PDF_BASE_URL": "https://mirror.example"}, env_path=env_path)
    write_user_env_vars({"XWORD_PDF_TOKEN": "secret"}, env_path=env_path)

    text = env_path.read_text(encoding="utf-8")
    assert "XWORD_PDF_BASE_URL=https://mirror.example" in text
    assert "XWORD_PDF_TOKEN=secret" in text

    settings = AppSettings(_env_file=env_path)
    assert settings.token == "secret"
    assert settings.base_url == "https://mirror.example"


def test_write_user_env_vars_replaces_existing_key(tmp_path):
    env_path = tmp_path / ".env"

    write_user_env_vars({"XWORD_PDF_TOKEN": "old"}, env_path=env_path)
    write_user_env_vars({"XWORD_PDF_TOKEN": "new"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert [line for line in lines if line.startswith("XWORD_PDF_TOKEN=")] == ["XWORD_PDF_TOKEN=new"]
