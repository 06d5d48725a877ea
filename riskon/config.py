from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import os

import yaml

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG = ROOT / "config" / "riskon.yaml"


@dataclass
class Settings:
    data_path: Path = ROOT / "data" / "applicants.json"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    analyze_delay_seconds: float = 2.0

    # presentation client
    api_base_url: str = "http://localhost:3000/api"
    request_timeout: float = 10.0
    typewriter_interval: float = 0.015

    log_level: str = "INFO"


def _resolve(p: str | Path) -> Path:
    path = Path(p)
    return path if path.is_absolute() else ROOT / path


def load_settings(path: Optional[Path] = None) -> Settings:
    """YAML 설정 파일을 읽고 RISKON_* 환경변수로 덮어쓴다."""
    path = path or Path(os.getenv("RISKON_CONFIG", DEFAULT_CONFIG))
    cfg: Dict[str, Any] = {}
    if path.exists():
        cfg = yaml.safe_load(path.read_text(encoding="utf-8")) or {}

    server = cfg.get("server", {})
    analysis = cfg.get("analysis", {})
    client = cfg.get("client", {})
    defaults = Settings()

    s = Settings(
        data_path=_resolve(cfg.get("data_path", defaults.data_path)),
        host=server.get("host", defaults.host),
        port=int(server.get("port", defaults.port)),
        cors_origins=list(server.get("cors_origins", defaults.cors_origins)),
        analyze_delay_seconds=float(
            analysis.get("delay_seconds", defaults.analyze_delay_seconds)
        ),
        api_base_url=client.get("api_base_url", defaults.api_base_url),
        request_timeout=float(client.get("request_timeout", defaults.request_timeout)),
        typewriter_interval=float(
            client.get("typewriter_interval", defaults.typewriter_interval)
        ),
        log_level=cfg.get("logging", {}).get("level", defaults.log_level),
    )

    # env overrides
    if os.getenv("RISKON_DATA_PATH"):
        s.data_path = _resolve(os.environ["RISKON_DATA_PATH"])
    s.host = os.getenv("RISKON_HOST", s.host)
    s.port = int(os.getenv("RISKON_PORT", s.port))
    s.api_base_url = os.getenv("RISKON_API_BASE_URL", s.api_base_url)
    s.log_level = os.getenv("RISKON_LOG_LEVEL", s.log_level)
    return s
