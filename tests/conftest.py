# tests/conftest.py
import json
import os
import sys
from pathlib import Path
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from riskon.app.main import app, get_settings, get_store  # noqa: E402
from riskon.config import Settings  # noqa: E402
from riskon.store import ApplicantStore  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def set_project_root_and_path():
    """프로젝트 루트를 작업 디렉토리로 변경 (sys.path는 모듈 로드 시 추가)."""
    os.chdir(ROOT)  # pytest 실행 위치 무관


SAMPLE = {
    "A001": {
        "personal": {"name": "Meera Rao", "dob": "1990-01-01", "gender": "Female"},
        "history": [
            {"Month_Offset": 1, "Predicted_Prob_Default": 0.1234, "Risk_Category": "Low"},
            {"Month_Offset": 0, "Predicted_Prob_Default": 0.5, "Risk_Category": "Medium"},
        ],
        "geminiSummary": "Low risk, steady payer.",
        "riskDrivers": ["On-time payments"],
    },
    "B002": {
        "personal": {"name": "Kabir Das", "dob": "1985-05-05", "gender": "Male"},
        "history": [
            {"Month_Offset": 0, "Predicted_Prob_Default": 0.2, "Risk_Category": "Low"},
            {"Month_Offset": 2, "Predicted_Prob_Default": 0.81, "Risk_Category": "High"},
            {"Month_Offset": 1, "Predicted_Prob_Default": 0.4, "Risk_Category": "Medium"},
        ],
        "geminiSummary": "Deteriorating profile.",
    },
    "C003": {
        "personal": {"name": "Zoya Khan", "dob": "1999-09-09", "gender": "Female"},
        "history": [
            {"Month_Offset": 3, "Predicted_Prob_Default": 0.02, "Risk_Category": "Low"},
            {"Month_Offset": 3, "Predicted_Prob_Default": 0.99, "Risk_Category": "High"},
        ],
        "geminiSummary": "Tie on the latest month.",
        "riskDrivers": [],
    },
}


@pytest.fixture
def sample_data():
    return json.loads(json.dumps(SAMPLE))


@pytest.fixture
def data_file(tmp_path, sample_data):
    p = tmp_path / "applicants.json"
    p.write_text(json.dumps(sample_data), encoding="utf-8")
    return p


@pytest.fixture
def store(data_file):
    return ApplicantStore.from_json(data_file)


@pytest.fixture
def test_settings(data_file):
    return Settings(data_path=data_file, analyze_delay_seconds=0.0)


@pytest.fixture
def make_client(test_settings):
    """주어진 데이터로 앱 의존성을 덮어쓴 TestClient 생성."""

    def _make(data=None):
        s = ApplicantStore(data if data is not None else SAMPLE)
        app.dependency_overrides[get_store] = lambda: s
        app.dependency_overrides[get_settings] = lambda: test_settings
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client()
