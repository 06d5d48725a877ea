from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Optional
import asyncio
import logging

from ..risk_engine import (
    HistoryPoint,
    cibil_equivalent,
    history_series,
    latest_record,
)
from .api import RiskonAPIError, RiskonClient
from .typewriter import DEFAULT_INTERVAL, atypewriter
from .views import (
    ANALYSIS_FAILED,
    ANALYSIS_IDLE,
    ANALYSIS_PENDING,
    DASHBOARD_ERROR,
    INCOME_SLIDER,
    LOAN_SLIDER,
    KpiCard,
    kpi_cards,
    report_header,
    risk_class,
)

logger = logging.getLogger(__name__)


class View(str, Enum):
    HERO = "hero"
    DASHBOARD = "dashboard"
    REPORT = "report"


@dataclass
class AnalysisState:
    label: str = ANALYSIS_IDLE
    pending: bool = False
    button_visible: bool = True
    drivers: List[str] = field(default_factory=list)
    summary: str = ""

    @property
    def done(self) -> bool:
        return not self.button_visible


@dataclass
class ReportView:
    applicant_id: str
    record: Dict[str, Any]
    score: int
    score_class: str
    series: List[HistoryPoint]
    header: str
    income: float = INCOME_SLIDER.default
    loan_amount: float = LOAN_SLIDER.default
    analysis: AnalysisState = field(default_factory=AnalysisState)

    @property
    def personal(self) -> Dict[str, Any]:
        return self.record["personal"]


def build_report(
    applicant_id: str, record: Dict[str, Any], refreshed: Optional[datetime] = None
) -> ReportView:
    latest = latest_record(record["history"])
    return ReportView(
        applicant_id=applicant_id,
        record=record,
        score=cibil_equivalent(latest["Predicted_Prob_Default"]),
        score_class=risk_class(latest["Risk_Category"]),
        series=history_series(record["history"]),
        header=report_header(refreshed or datetime.now()),
    )


class DashboardController:
    """
    hero -> workspace(dashboard <-> report).

    Report loads, simulations and analyses carry a ticket; a response that
    arrives after its ticket was superseded (navigation, newer slider input)
    is dropped instead of overwriting the current report.
    """

    def __init__(
        self,
        client: Optional[RiskonClient] = None,
        typewriter_interval: float = DEFAULT_INTERVAL,
    ):
        self.client = client
        self.typewriter_interval = typewriter_interval
        self.view = View.HERO
        self.kpis: List[KpiCard] = []
        self.applicants_cache: List[Dict[str, Any]] = []
        self.visible: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self.report: Optional[ReportView] = None
        self._report_seq = 0
        self._sim_seq = 0

    # ---------------------------
    # Navigation
    # ---------------------------
    async def launch(self) -> None:
        if self.view is not View.HERO:
            return
        self.view = View.DASHBOARD
        await self.load_dashboard()

    async def load_dashboard(self) -> None:
        self.error = None
        kpis, rows = await asyncio.gather(
            self.client.kpis(), self.client.applicants(), return_exceptions=True
        )
        failures = [r for r in (kpis, rows) if isinstance(r, BaseException)]
        if failures:
            for e in failures:
                logger.error("Failed to load dashboard data: %s", e)
            self.kpis, self.applicants_cache, self.visible = [], [], []
            self.error = DASHBOARD_ERROR
            return
        self.kpis = kpi_cards(kpis)
        self.applicants_cache = rows
        self.visible = list(rows)

    def filter_applicants(self, query: str) -> List[Dict[str, Any]]:
        q = query.lower()
        self.visible = [
            a
            for a in self.applicants_cache
            if q in a["name"].lower() or q in str(a["id"]).lower()
        ]
        return self.visible

    async def open_report(self, applicant_id: str) -> bool:
        self._report_seq += 1
        ticket = self._report_seq
        try:
            record = await self.client.applicant(applicant_id)
        except RiskonAPIError as e:
            logger.error("Failed to load applicant %s: %s", applicant_id, e)
            return False
        if ticket != self._report_seq:
            logger.debug("Dropping stale report for %s", applicant_id)
            return False
        self.report = build_report(applicant_id, record)
        self.view = View.REPORT
        return True

    def back(self) -> None:
        self._report_seq += 1
        self.report = None
        self.view = View.DASHBOARD

    # ---------------------------
    # Report actions
    # ---------------------------
    async def simulate(self, income: float, loan_amount: float) -> None:
        report = self.report
        if report is None:
            return
        report.income, report.loan_amount = income, loan_amount
        self._sim_seq += 1
        ticket = (self._report_seq, self._sim_seq)
        try:
            result = await self.client.simulate(report.applicant_id, income, loan_amount)
        except RiskonAPIError as e:
            logger.error("Simulation failed: %s", e)
            return
        if ticket != (self._report_seq, self._sim_seq):
            logger.debug("Dropping stale simulation for %s", report.applicant_id)
            return
        report.score = cibil_equivalent(result["simulatedProb"])
        report.score_class = risk_class(result["riskCategory"])

    async def analyze(self) -> None:
        report = self.report
        if report is None or report.analysis.pending:
            return
        state = report.analysis
        state.pending, state.label = True, ANALYSIS_PENDING
        ticket = self._report_seq
        try:
            result = await self.client.analyze(report.applicant_id)
        except RiskonAPIError as e:
            logger.error("Analysis failed: %s", e)
            state.pending, state.label = False, ANALYSIS_FAILED
            return
        state.pending = False
        if ticket != self._report_seq:
            return
        state.button_visible = False
        state.drivers = list(result["drivers"])
        state.summary = result["summary"]

    def reveal_summary(self) -> AsyncIterator[str]:
        summary = self.report.analysis.summary if self.report else ""
        return atypewriter(summary, self.typewriter_interval)
