"""EV VCU Telemetry Dashboard.

Interactive monitoring dashboard built with Streamlit and Plotly.
Shows live metric cards, telemetry trend charts, battery pack balance,
the fault log, and the diagnostic digest handed to the assistant.

Launch with::

    streamlit run dashboard/app.py
"""

from __future__ import annotations

import plotly.graph_objects as go
import streamlit as st

from vcu_engine.config import load_history_limits, load_thresholds
from vcu_engine.core.faults import FaultEvaluator
from vcu_engine.core.session import TelemetrySession
from vcu_engine.core.simulator import TelemetrySimulator
from vcu_engine.core.status import pack_status, snapshot_statuses
from vcu_engine.core.summary import (
    SYSTEM_PROMPT,
    build_telemetry_summary,
    compose_diagnostic_prompt,
)
from vcu_engine.data_export.frames import faults_to_frame, snapshots_to_frame

_STATUS_COLOURS: dict[str, str] = {
    "normal": "#22c55e",
    "warning": "#f59e0b",
    "critical": "#ef4444",
}

_QUICK_PROMPTS: list[str] = [
    "Analyze the current system health and predict potential faults",
    "Are there any battery pack imbalances that need attention?",
    "What is the thermal risk assessment for the motor system?",
    "Is the current draw within safe limits for extended operation?",
    "Predict the remaining range based on current consumption patterns",
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _new_session(seed: int) -> TelemetrySession:
    """Build and seed a session from the on-disk profile."""
    session = TelemetrySession(
        simulator=TelemetrySimulator(seed=seed),
        evaluator=FaultEvaluator(load_thresholds()),
        limits=load_history_limits(),
    )
    session.seed()
    return session


def _trend_chart(df, columns: list[tuple[str, str]], title: str) -> go.Figure:
    fig = go.Figure()
    for column, colour in columns:
        fig.add_trace(
            go.Scatter(
                x=df["timestamp"],
                y=df[column],
                mode="lines",
                name=column,
                line=dict(color=colour),
            )
        )
    fig.update_layout(title=title, height=300, margin=dict(t=40, b=20))
    return fig


# ---------------------------------------------------------------------------
# Streamlit app
# ---------------------------------------------------------------------------


def main() -> None:  # noqa: C901
    """Entry point for the Streamlit dashboard."""
    st.set_page_config(page_title="EV VCU Telemetry", layout="wide")
    st.title("EV VCU Telemetry Dashboard")

    # ── Sidebar ──────────────────────────────────────────────────────────
    st.sidebar.header("Simulation")

    seed: int = int(st.sidebar.number_input("Seed", min_value=0, value=7, step=1))
    if "session" not in st.session_state or st.sidebar.button("Restart session"):
        st.session_state["session"] = _new_session(seed)
    session: TelemetrySession = st.session_state["session"]
    store = session.store

    streaming: bool = st.sidebar.toggle("Streaming", value=store.streaming)
    store.set_streaming(streaming)

    advance: int = st.sidebar.slider(
        "Ticks per advance", min_value=1, max_value=120, value=10
    )
    if st.sidebar.button("Advance"):
        session.run(advance)
    if st.sidebar.button("Clear history"):
        store.clear()

    st.sidebar.markdown("---")
    st.sidebar.caption(f"Simulator tick: {session.simulator.tick}")

    latest = store.latest
    if latest is None:
        st.info('No telemetry yet. Press "Advance" to stream new readings.')
        return

    # ── Section 1: Metric cards ──────────────────────────────────────────
    st.header("1 -- Overview")

    statuses = snapshot_statuses(latest)
    cards = [
        ("Voltage", f"{latest.voltage:.1f} V", statuses["voltage"]),
        ("Current", f"{latest.current:.1f} A", statuses["current"]),
        ("Speed", f"{latest.velocity:.1f} km/h", "normal"),
        ("Acceleration", f"{latest.acceleration:.2f} m/s²", statuses["acceleration"]),
        ("Temperature", f"{latest.temperature:.1f} °C", statuses["temperature"]),
        ("SoC", f"{latest.soc:.1f} %", statuses["soc"]),
    ]
    for col, (label, value, status) in zip(st.columns(len(cards)), cards):
        col.metric(label, value)
        col.markdown(
            f"<span style='color:{_STATUS_COLOURS[status]}'>{status.title()}</span>",
            unsafe_allow_html=True,
        )
    st.caption(f"Power: {latest.power:.1f} kW -- Pack avg: {latest.pack_average():.1f} V")

    # ── Section 2: Trends ────────────────────────────────────────────────
    st.header("2 -- Telemetry Trends")

    df = snapshots_to_frame(store.history)
    col_a, col_b = st.columns(2)
    with col_a:
        st.plotly_chart(
            _trend_chart(df, [("voltage", "#3b82f6")], "Bus Voltage (V)"),
            use_container_width=True,
        )
        st.plotly_chart(
            _trend_chart(df, [("temperature", "#ef4444")], "Temperature (°C)"),
            use_container_width=True,
        )
    with col_b:
        st.plotly_chart(
            _trend_chart(
                df, [("current", "#f59e0b"), ("power", "#a855f7")], "Current / Power"
            ),
            use_container_width=True,
        )
        st.plotly_chart(
            _trend_chart(df, [("velocity", "#22c55e")], "Speed (km/h)"),
            use_container_width=True,
        )

    # ── Section 3: Battery packs ─────────────────────────────────────────
    st.header("3 -- Battery Packs")

    pack_avg = latest.pack_average()
    pack_names = [f"Pack {i + 1}" for i in range(len(latest.battery_packs))]
    pack_states = [pack_status(v - pack_avg) for v in latest.battery_packs]

    fig_packs = go.Figure(
        go.Bar(
            x=pack_names,
            y=list(latest.battery_packs),
            marker_color=[_STATUS_COLOURS[s] for s in pack_states],
        )
    )
    fig_packs.add_hline(y=pack_avg, line_dash="dash", annotation_text="average")
    fig_packs.update_layout(
        title="Pack Voltages", yaxis_title="Voltage (V)", height=350
    )

    col_p1, col_p2 = st.columns([2, 1])
    col_p1.plotly_chart(fig_packs, use_container_width=True)
    with col_p2:
        imbalance = max(latest.battery_packs) - min(latest.battery_packs)
        st.metric("Pack Average", f"{pack_avg:.2f} V")
        st.metric("Max Imbalance", f"{imbalance:.2f} V")
        for name, volts, status in zip(pack_names, latest.battery_packs, pack_states):
            st.write(f"**{name}**: {volts:.2f} V ({status})")

    # ── Section 4: Fault log ─────────────────────────────────────────────
    st.header("4 -- Fault Log")

    faults = store.faults
    if not faults:
        st.write("No faults recorded.")
    else:
        st.dataframe(
            faults_to_frame(faults)[["timestamp", "severity", "system", "message"]],
            use_container_width=True,
            hide_index=True,
        )

    # ── Section 5: Diagnostics digest ────────────────────────────────────
    st.header("5 -- Diagnostics")

    limits = store.limits
    summary = build_telemetry_summary(
        store.history,
        faults,
        window=limits.summary_window,
        fault_count=limits.summary_fault_count,
    )
    question: str = st.selectbox("Question", options=_QUICK_PROMPTS, index=0)
    with st.expander("System prompt"):
        st.code(SYSTEM_PROMPT, language="text")
    st.code(compose_diagnostic_prompt(question, summary), language="text")

    # ── Footer ───────────────────────────────────────────────────────────
    st.markdown("---")
    st.caption(
        "EV VCU Telemetry Engine -- readings are synthetic. "
        "Core engine is not modified by this dashboard."
    )


if __name__ == "__main__":
    main()
