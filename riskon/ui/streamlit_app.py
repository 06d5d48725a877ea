# riskon/ui/streamlit_app.py
# streamlit run riskon/ui/streamlit_app.py
import asyncio

import pandas as pd
import streamlit as st

from riskon.client.api import RiskonClient
from riskon.client.dashboard import DashboardController, View
from riskon.client.views import (
    INCOME_SLIDER,
    LOAN_SLIDER,
    NO_APPLICANTS,
    applicant_cards,
    money,
)
from riskon.config import load_settings
from riskon.log import setup_logging

st.set_page_config(page_title="RISKON", layout="wide")

st.markdown(
    """
    <style>
        .risk-low { color: #22c55e; }
        .risk-medium { color: #f59e0b; }
        .risk-high { color: #ef4444; }
        .score-value { font-size: 56px; font-weight: 800; }
    </style>
    """,
    unsafe_allow_html=True,
)

# ------------------ Session ------------------
settings = load_settings()

if "ctrl" not in st.session_state:
    setup_logging(settings.log_level)
    st.session_state.ctrl = DashboardController(
        typewriter_interval=settings.typewriter_interval
    )

ctrl: DashboardController = st.session_state.ctrl


def run(action):
    """Run one controller action with a client that is closed afterwards."""

    async def _go():
        async with RiskonClient(settings.api_base_url, timeout=settings.request_timeout) as client:
            ctrl.client = client
            return await action()

    return asyncio.run(_go())


# ------------------ Hero ------------------
def render_hero():
    st.markdown("<h1 style='font-size:64px;font-weight:800;'>RISKON</h1>", unsafe_allow_html=True)
    st.caption("Credit risk intelligence, one applicant at a time.")
    if st.button("Launch Workspace", type="primary"):
        run(ctrl.launch)
        st.rerun()


# ------------------ Dashboard ------------------
def render_dashboard():
    st.title("RISKON")
    cols = st.columns(4)
    for col, card in zip(cols, ctrl.kpis):
        col.metric(card.label, card.value)

    query = st.text_input("Search by name or ID", key="search")
    rows = ctrl.filter_applicants(query) if ctrl.applicants_cache else ctrl.visible

    if ctrl.error:
        st.markdown(f"<p class='risk-high'>{ctrl.error}</p>", unsafe_allow_html=True)
        return
    if not rows:
        st.write(NO_APPLICANTS)
        return

    for card in applicant_cards(rows):
        left, right = st.columns([3, 1])
        with left:
            if st.button(card.name, key=f"open-{card.id}"):
                if run(lambda: ctrl.open_report(card.id)):
                    st.rerun()
            st.caption(card.id_label)
        with right:
            st.markdown(
                f"<span class='{card.css_class}'><b>{card.risk_label}</b><br>{card.category}</span>",
                unsafe_allow_html=True,
            )


# ------------------ Report ------------------
def render_report():
    report = ctrl.report
    if st.button("← Back to Dashboard"):
        ctrl.back()
        st.rerun()
    st.caption(report.header)

    details, score = st.columns(2)
    with details:
        st.subheader("Applicant Details")
        st.write(f"**Name:** {report.personal['name']}")
        st.write(f"**Date of Birth:** {report.personal['dob']}")
        st.write(f"**Gender:** {report.personal['gender']}")
        st.write(f"**ID:** {report.applicant_id}")

    st.subheader("Risk History")
    df = pd.DataFrame(
        {"Probability of Default (%)": [p.pd_percent for p in report.series]},
        index=[p.label for p in report.series],
    )
    st.line_chart(df)

    st.subheader('"What-If" Scenario')
    income = st.slider(
        INCOME_SLIDER.label,
        INCOME_SLIDER.min, INCOME_SLIDER.max, INCOME_SLIDER.default, INCOME_SLIDER.step,
        format="$%d", key=f"income-{report.applicant_id}",
    )
    loan = st.slider(
        LOAN_SLIDER.label,
        LOAN_SLIDER.min, LOAN_SLIDER.max, LOAN_SLIDER.default, LOAN_SLIDER.step,
        format="$%d", key=f"loan-{report.applicant_id}",
    )
    if (income, loan) != (report.income, report.loan_amount):
        run(lambda: ctrl.simulate(income, loan))
    st.caption(f"{INCOME_SLIDER.label}: {money(report.income)} · {LOAN_SLIDER.label}: {money(report.loan_amount)}")

    # 슬라이더 반영 후 점수 표시
    with score:
        st.subheader("RISKON Score")
        st.markdown(
            f"<div class='score-value {report.score_class}'>{report.score}</div>"
            "<div>CIBIL Equivalent</div>",
            unsafe_allow_html=True,
        )

    st.subheader("AI-Powered Analysis")
    state = report.analysis
    if state.button_visible:
        if st.button(state.label, disabled=state.pending, key="analyze"):
            with st.spinner("Analyzing..."):
                run(ctrl.analyze)
            st.session_state.typed = False
            st.rerun()
        return

    st.markdown("#### Quick Summary")
    placeholder = st.empty()
    # drivers는 즉시 표시, 요약은 타자 효과로 채움
    st.markdown("#### Key Risk Drivers")
    for d in state.drivers:
        st.markdown(f"- {d}")

    if st.session_state.get("typed"):
        placeholder.write(state.summary)
    else:
        run(lambda: type_summary(placeholder))
        st.session_state.typed = True


async def type_summary(placeholder):
    async for shown in ctrl.reveal_summary():
        placeholder.write(shown)


if ctrl.view is View.HERO:
    render_hero()
elif ctrl.view is View.REPORT and ctrl.report is not None:
    render_report()
else:
    render_dashboard()
