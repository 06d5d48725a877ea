from pathlib import Path

from riskon.config import ROOT, load_settings


def test_defaults_from_repo_yaml(monkeypatch):
    for k in ("RISKON_CONFIG", "RISKON_DATA_PATH", "RISKON_PORT", "RISKON_HOST"):
        monkeypatch.delenv(k, raising=False)
    s = load_settings()
    assert s.port == 3000
    assert s.data_path == ROOT / "data" / "applicants.json"
    assert s.data_path.exists()
    assert s.analyze_delay_seconds == 2.0
    assert s.cors_origins == ["*"]


def test_yaml_and_env_overrides(tmp_path, monkeypatch):
    cfg = tmp_path / "riskon.yaml"
    cfg.write_text(
        "data_path: /tmp/x.json\nserver:\n  port: 8080\nanalysis:\n  delay_seconds: 0.5\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("RISKON_DATA_PATH", raising=False)
    monkeypatch.setenv("RISKON_PORT", "9090")
    monkeypatch.setenv("RISKON_API_BASE_URL", "http://riskon.test/api")
    s = load_settings(cfg)
    assert s.data_path == Path("/tmp/x.json")
    assert s.analyze_delay_seconds == 0.5
    assert s.port == 9090
    assert s.api_base_url == "http://riskon.test/api"


def test_missing_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("RISKON_PORT", raising=False)
    s = load_settings(tmp_path / "nope.yaml")
    assert s.port == 3000
    assert s.typewriter_interval == 0.015
