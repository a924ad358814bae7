from pathlib import Path

from config import DEFAULT_PORT, Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("TODO_TASKS_FILE", "TODO_HOST", "TODO_PORT", "TODO_LOG_LEVEL", "TODO_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)

    assert get_settings(load_env_file=False) == Settings()


def test_values_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("TODO_TASKS_FILE", str(tmp_path / "mine.json"))
    monkeypatch.setenv("TODO_HOST", "127.0.0.1")
    monkeypatch.setenv("TODO_PORT", "9001")
    monkeypatch.setenv("TODO_LOG_LEVEL", "debug")
    monkeypatch.setenv("TODO_LOG_FILE", str(tmp_path / "todo.log"))

    settings = get_settings(load_env_file=False)

    assert settings.tasks_file == tmp_path / "mine.json"
    assert settings.host == "127.0.0.1"
    assert settings.port == 9001
    assert settings.log_level == "DEBUG"
    assert settings.log_file == tmp_path / "todo.log"


def test_invalid_port_falls_back(monkeypatch):
    monkeypatch.setenv("TODO_PORT", "eighty")
    assert get_settings(load_env_file=False).port == DEFAULT_PORT


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    # set then delete so monkeypatch removes what load_dotenv writes on teardown
    monkeypatch.setenv("TODO_TASKS_FILE", "placeholder.json")
    monkeypatch.delenv("TODO_TASKS_FILE")
    (tmp_path / ".env").write_text("TODO_TASKS_FILE=from-dotenv.json\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    settings = get_settings()

    assert settings.tasks_file == Path("from-dotenv.json")
