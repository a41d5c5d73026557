# app.py

import logging

from dotenv import load_dotenv

load_dotenv()  # ← Must precede any import depending on .env

import pandas as pd
import streamlit as st

from core import config
from core.budget import summarize
from core.errors import GenerationFailed, GenerationInProgress
from core.models import TripPreferences
from core.pipeline import generate_itinerary, modify_itinerary
from core.session import PlannerSession
from services import currency as cur
from services.maps import map_link
from services.rates import RateCache
from services.storage import PlanStore, export_plan

logging.basicConfig(level=config.LOG_LEVEL)

INTERESTS = ["Waterfalls", "Culture", "Adventure", "Nature", "Heritage", "Food", "Photography"]

# ──────────────────────────────────────────────────────────────────────────────
# 0. Streamlit configuration
# ──────────────────────────────────────────────────────────────────────────────
st.set_page_config(page_title="AI Itinerary Planner", layout="wide")

# ──────────────────────────────────────────────────────────────────────────────
# 1. session_state initialisation (once per browser session)
# ──────────────────────────────────────────────────────────────────────────────
if "planner" not in st.session_state:
    store = PlanStore()
    rates = RateCache()
    rates.refresh()                     # single fetch per session
    st.session_state.store = store
    st.session_state.rates = rates
    st.session_state.planner = PlannerSession(store.load_preferences())

store: PlanStore = st.session_state.store
rates: RateCache = st.session_state.rates
planner: PlannerSession = st.session_state.planner
prefs = planner.preferences

# ──────────────────────────────────────────────────────────────────────────────
# 2. Input form
# ──────────────────────────────────────────────────────────────────────────────
with st.form("trip_form"):
    st.markdown("## 🧭 AI Itinerary Planner")
    duration_input = st.number_input("Duration (days)", min_value=1, value=prefs.duration, step=1)
    interests_input = st.multiselect(
        "Interests", INTERESTS + sorted(prefs.interests - set(INTERESTS)),
        default=sorted(prefs.interests),
    )
    budget_input = st.number_input(
        f"Total budget ({config.BASE_CURRENCY})",
        min_value=0.0,
        value=float(prefs.budget),
        step=500.0,
    )
    group_input = st.number_input("Group size", min_value=1, value=prefs.group_size, step=1)
    start_input = st.text_input("Starting location", prefs.start_location)
    stops_input = st.text_area(
        "Custom stops (one per line, in order)", "\n".join(prefs.custom_stops), height=80
    )
    submitted = st.form_submit_button("Generate itinerary", disabled=planner.busy)

# ──────────────────────────────────────────────────────────────────────────────
# 3. On form submission
# ──────────────────────────────────────────────────────────────────────────────
if submitted:
    planner.preferences = TripPreferences(
        duration=int(duration_input),
        interests=set(interests_input),
        budget=budget_input,
        group_size=int(group_input),
        start_location=start_input.strip(),
        custom_stops=[s.strip() for s in stops_input.splitlines() if s.strip()],
    )
    store.save_preferences(planner.preferences)
    try:
        with st.spinner("🤖 Generating itinerary with Gemini…"):
            itin_obj = generate_itinerary(planner)
        if itin_obj is not None:
            st.success("✅ Itinerary generated.")
    except GenerationInProgress:
        st.warning("⏳ A generation is already running.")
    except GenerationFailed:
        pass  # planner.error_message is shown below

# ──────────────────────────────────────────────────────────────────────────────
# 4. Display error message if needed
# ──────────────────────────────────────────────────────────────────────────────
if planner.error_message:
    st.error(f"🛑 {planner.error_message}")

# ──────────────────────────────────────────────────────────────────────────────
# 5. Sidebar: display currency + saved plans
# ──────────────────────────────────────────────────────────────────────────────
st.sidebar.markdown("## 💱 Display currency")
code = st.sidebar.selectbox("Currency", rates.codes, index=rates.codes.index(config.BASE_CURRENCY))
if not rates.outcome or not rates.outcome.live:
    st.sidebar.caption("Offline exchange rates in use.")

saved = store.load_saved_plans()
st.sidebar.markdown("---")
st.sidebar.markdown(f"## 💾 Saved plans ({len(saved)})")
for i, plan in enumerate(saved, start=1):
    st.sidebar.write(f"Plan {i}: {len(plan.days)} days, {cur.display(plan.trip_total, code, rates)}")

# ──────────────────────────────────────────────────────────────────────────────
# 6. If an itinerary exists, display it + budget + actions
# ──────────────────────────────────────────────────────────────────────────────
itin = planner.itinerary
if itin:
    summary = summarize(itin, planner.preferences.budget)

    st.subheader("🗓️ Proposed itinerary")
    for d in itin.days:
        with st.expander(f"Day {d.day} — {cur.display(d.day_total, code, rates)}", expanded=True):
            for a in d.activities:
                st.markdown(
                    f"**{a.time_of_day.value}:** {a.name or '_Unnamed stop_'}  "
                    f"({cur.display(a.estimated_cost, code, rates)})  "
                    f"[📍 Map]({map_link(a.name)})"
                )
                if a.description:
                    st.caption(a.description)

    # 6.1 Budget
    st.markdown("---")
    st.subheader("💰 Budget")
    st.progress(summary.percent_used / 100, text=f"{summary.percent_used}% of budget used")
    c1, c2, c3 = st.columns(3)
    c1.metric("Trip total", cur.display(summary.trip_total, code, rates))
    c2.metric("Budget", cur.display(summary.budget, code, rates))
    c3.metric("Remaining", cur.display(summary.remaining, code, rates))
    if summary.over_budget:
        st.warning("⚠️ This plan is over your budget.")

    df = pd.DataFrame(
        [
            {
                "Day": d.day,
                "Time": a.time_of_day.value,
                "Activity": a.name,
                "Cost": cur.display(a.estimated_cost, code, rates),
            }
            for d in itin.days
            for a in d.activities
        ]
    )
    st.dataframe(df, hide_index=True, use_container_width=True)

    # 6.2 Save / export
    st.markdown("---")
    col_save, col_export, col_clear = st.columns(3)
    if col_save.button("💾 Save plan"):
        count = store.append_saved_plan(itin)
        st.success(f"Saved ({count} plans).")
    col_export.download_button(
        "📥 Download itinerary (JSON)",
        export_plan(itin),
        file_name=config.EXPORT_FILE_NAME,
        mime="application/json",
    )
    if col_clear.button("🗑️ Clear"):
        planner.clear()
        st.rerun()

    # 6.3 Chatbot for interactive modifications
    st.markdown("---")
    st.subheader("💬 Modify itinerary")
    with st.form("modify_form"):
        mod_request = st.text_area(
            'Example: "Replace the evening of day 2 with a tribal food tour."',
            key="mod_text",
            height=100,
        )
        apply_mod = st.form_submit_button("Apply modification", disabled=planner.busy)
    if apply_mod and mod_request:
        try:
            with st.spinner("🔄 Applying your request…"):
                modify_itinerary(planner, mod_request)
            st.rerun()
        except GenerationFailed:
            st.error(f"🛑 {planner.error_message}")
