from __future__ import annotations
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Any, List, Optional
import math

from .store import ApplicantStore, Record

LOW_THRESHOLD = 0.3
HIGH_THRESHOLD = 0.7

PROB_FLOOR = 0.05
PROB_CEIL = 0.98

BASE_INCOME = 50000
BASE_LOAN = 20000

# 데모용 고정값 (계산하지 않음)
AVG_ASSESSMENT_TIME = "2.8s"
MODEL_ACCURACY = "93.4%"

DEFAULT_DRIVERS = ["No specific drivers identified."]


# ---------------------------
# Data classes
# ---------------------------
@dataclass
class SimulationResult:
    simulated_prob: float
    risk_category: str  # "Low" | "Medium" | "High"

    def to_dict(self) -> Dict[str, Any]:
        return {"simulatedProb": self.simulated_prob, "riskCategory": self.risk_category}


@dataclass
class HistoryPoint:
    month_offset: int
    label: str
    pd_percent: float


# ---------------------------
# Utils
# ---------------------------
def latest_record(history: List[Dict[str, Any]]) -> Dict[str, Any]:
    # Month_Offset 최대값, 동률이면 먼저 나온 항목 유지
    latest = history[0]
    for current in history[1:]:
        if current["Month_Offset"] > latest["Month_Offset"]:
            latest = current
    return latest


def risk_category(prob: float) -> str:
    if prob < LOW_THRESHOLD:
        return "Low"
    if prob < HIGH_THRESHOLD:
        return "Medium"
    return "High"


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def percent_label(prob: float) -> str:
    # JS toFixed(2)와 동일: 정확한 이진값 기준 half-up
    return str(Decimal(prob * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def clamp(x: float, lo: float, hi: float) -> float:
    return min(max(x, lo), hi)


# ---------------------------
# Core calculations
# ---------------------------
def compute_kpis(store: ApplicantStore) -> Dict[str, Any]:
    high_risk = sum(
        1
        for _, rec in store.items()
        if latest_record(rec["history"])["Risk_Category"] == "High"
    )
    return {
        "applicationsToday": len(store),  # 전체 건수를 'today'로 표시
        "highRiskAlerts": high_risk,
        "avgAssessmentTime": AVG_ASSESSMENT_TIME,
        "modelAccuracy": MODEL_ACCURACY,
    }


def applicant_summaries(store: ApplicantStore) -> List[Dict[str, Any]]:
    out = []
    for applicant_id, rec in store.items():
        latest = latest_record(rec["history"])
        out.append(
            {
                "id": applicant_id,
                "name": rec["personal"]["name"],
                "riskCategory": latest["Risk_Category"],
                "riskPercentage": percent_label(latest["Predicted_Prob_Default"]),
            }
        )
    return out


def analysis_for(record: Record) -> Dict[str, Any]:
    return {
        "summary": record["geminiSummary"],
        "drivers": record.get("riskDrivers") or list(DEFAULT_DRIVERS),
    }


def simulate(
    base_prob: float, income: Optional[float], loan_amount: Optional[float]
) -> SimulationResult:
    """
    What-if placeholder. The formula has no financial meaning; it only makes
    the sliders move the score. Falsy inputs (None, 0) fall back to the base
    income/loan.
    """
    income_factor = BASE_INCOME / (income or BASE_INCOME)
    loan_factor = (loan_amount or BASE_LOAN) / BASE_LOAN
    prob = clamp(base_prob * income_factor * loan_factor, PROB_FLOOR, PROB_CEIL)
    return SimulationResult(simulated_prob=prob, risk_category=risk_category(prob))


def simulate_for(
    record: Record, income: Optional[float], loan_amount: Optional[float]
) -> SimulationResult:
    base = latest_record(record["history"])["Predicted_Prob_Default"]
    return simulate(base, income, loan_amount)


def cibil_equivalent(prob: float) -> int:
    # PD -> 300~900 구간선형 매핑 (0.15 이하 가산, 0.70 초과 급감)
    if prob <= 0.15:
        score = 780 + (1 - prob / 0.15) * 120
    elif prob <= 0.70:
        score = 650 + (1 - (prob - 0.15) / 0.55) * 130
    else:
        score = 300 + (1 - (prob - 0.70) / 0.30) * 350
    return round_half_up(score)


def history_series(history: List[Dict[str, Any]]) -> List[HistoryPoint]:
    ordered = sorted(history, key=lambda h: h["Month_Offset"])
    return [
        HistoryPoint(
            month_offset=h["Month_Offset"],
            label=f"Month {h['Month_Offset']}",
            pd_percent=h["Predicted_Prob_Default"] * 100,
        )
        for h in ordered
    ]
