# Display helpers shared by the dashboard controller and the Streamlit UI.
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

MODEL_VERSION = "v2.3-alpha"

DASHBOARD_ERROR = "Failed to load data. Is the backend server running?"
NO_APPLICANTS = "No applicants found."

ANALYSIS_IDLE = "Generate Quick Summary"
ANALYSIS_PENDING = "Analyzing..."
ANALYSIS_FAILED = "Analysis Failed. Try Again."


@dataclass
class KpiCard:
    label: str
    value: Any
    css_class: Optional[str] = None


@dataclass
class ApplicantCard:
    id: str
    name: str
    id_label: str
    risk_label: str
    category: str
    css_class: str


@dataclass
class SliderSpec:
    label: str
    min: int
    max: int
    step: int
    default: int


INCOME_SLIDER = SliderSpec("Annual Income", 20000, 200000, 1000, 50000)
LOAN_SLIDER = SliderSpec("Loan Amount", 5000, 100000, 500, 20000)


def risk_class(category: str) -> str:
    return f"risk-{category.lower()}"


def money(amount: float) -> str:
    return f"${amount:,.0f}"


def kpi_cards(kpis: Dict[str, Any]) -> List[KpiCard]:
    return [
        KpiCard("Applications Today", kpis["applicationsToday"]),
        KpiCard("High-Risk Alerts", kpis["highRiskAlerts"], "risk-high"),
        KpiCard("Avg. Assessment Time", kpis["avgAssessmentTime"]),
        KpiCard("Model Accuracy", kpis["modelAccuracy"], "risk-low"),
    ]


def applicant_cards(rows: List[Dict[str, Any]]) -> List[ApplicantCard]:
    return [
        ApplicantCard(
            id=r["id"],
            name=r["name"],
            id_label=f"Applicant ID: {r['id']}",
            risk_label=f"{r['riskPercentage']}%",
            category=r["riskCategory"],
            css_class=risk_class(r["riskCategory"]),
        )
        for r in rows
    ]


def report_header(refreshed: datetime) -> str:
    stamp = refreshed.strftime("%d/%m/%Y, %I:%M:%S %p")
    return f"Data Refreshed: {stamp} | Using Model {MODEL_VERSION}"
