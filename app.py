# app.py
# Run:
#   streamlit run app.py
#
# Notes:
# - The habit list lives in HabitStore (app_utils/store.py); the page only keeps
#   the id of the selected habit and resolves it again on every rerun.
# - Button keys carry the habit id so the same widgets can repeat per habit.

import logging

import matplotlib.pyplot as plt
import streamlit as st

from app_utils.days import today
from app_utils.plots import calendar_strip, weekly_completions_chart
from app_utils.storage import KeyValueStorage
from app_utils.store import HabitStore
from features.habits import DEFAULT_HABITS, is_completed, resolve_selection
from features.insights import (
    completion_window,
    habit_summary,
    today_progress,
    window_frame,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

WINDOW_DAYS = 30

# =========================
# 0) APP CONFIG + THEME
# =========================
st.set_page_config(page_title="Habit Tracker", layout="wide", page_icon="✅")

CUSTOM_CSS = """
<style>
.block-container {padding-top: 1.2rem; padding-bottom: 2rem; max-width: 1200px;}
h1, h2, h3 {letter-spacing: -0.02em;}
.card {
  border: 1px solid rgba(0,0,0,0.06);
  background: rgba(255,255,255,0.6);
  border-radius: 14px;
  padding: 14px 16px;
  box-shadow: 0 8px 24px rgba(0,0,0,0.06);
}
.small {opacity: 0.85; font-size: 0.92rem;}
.badge {
  display:inline-block;
  padding: 4px 10px;
  border-radius: 999px;
  background: rgba(147, 51, 234, 0.12);
  border: 1px solid rgba(147, 51, 234, 0.35);
  font-size: 0.85rem;
}
</style>
"""
st.markdown(CUSTOM_CSS, unsafe_allow_html=True)


# =========================
# 1) STORE (one storage per process, one store per session)
# =========================
@st.cache_resource
def get_storage():
    storage = KeyValueStorage()
    storage.init_db()
    return storage


def get_store():
    if "store" not in st.session_state:
        st.session_state["store"] = HabitStore(get_storage())
    store = st.session_state["store"]
    if not store.ready:
        with st.spinner("Loading..."):
            store.load()
    return store


# =========================
# 2) UI BLOCKS
# =========================
def stat_card(label, value, unit):
    st.markdown(f"""
    <div class="card">
      <div class="small">{label}</div>
      <div style="font-size:1.8rem;"><b>{value}</b></div>
      <div class="small">{unit}</div>
    </div>
    """, unsafe_allow_html=True)


def add_habit_form(store):
    with st.form("add_habit", clear_on_submit=True):
        c1, c2 = st.columns([4, 1])
        with c1:
            name = st.text_input("New habit", placeholder="Enter a new habit...", label_visibility="collapsed")
        with c2:
            submitted = st.form_submit_button("Add", use_container_width=True)
    if submitted:
        if store.add_habit(name):
            st.success(f"Added {name.strip()}.")
        else:
            st.info("Give the habit a name first.")

    with st.expander("Quick add"):
        qcols = st.columns(3)
        for i, suggestion in enumerate(DEFAULT_HABITS):
            if qcols[i % 3].button(suggestion, key=f"quick_{i}"):
                store.add_habit(suggestion)
                st.rerun()


def habit_list(store, day):
    st.subheader("Today's Habits")
    habits = store.habits
    if not habits:
        st.info("No habits yet. Add one to get started!")
        return

    st.progress(today_progress(habits, day), text=f"{day:%A, %d %b}")

    for habit in habits:
        hid = habit["id"]
        done = is_completed(habit, day)
        summary = habit_summary(habit, day)
        c1, c2, c3 = st.columns([0.6, 4, 0.6])
        with c1:
            if st.button("✅" if done else "⬜", key=f"toggle_{hid}"):
                store.toggle_completion(hid, day)
                st.rerun()
        with c2:
            if st.button(habit["name"], key=f"select_{hid}", use_container_width=True):
                st.session_state["selected_habit_id"] = hid
            st.caption(f"🔥 {summary['streak']} day streak")
        with c3:
            if st.button("🗑️", key=f"delete_{hid}"):
                store.delete_habit(hid)
                st.rerun()


def stats_panel(store, day):
    st.subheader("Statistics")
    selected = resolve_selection(store.habits, st.session_state.get("selected_habit_id"))
    if selected is None:
        st.session_state.pop("selected_habit_id", None)
        st.info("Select a habit to view statistics")
        return

    summary = habit_summary(selected, day)
    st.markdown(f"### {selected['name']}")

    c1, c2 = st.columns(2)
    with c1:
        stat_card("Current Streak", summary["streak"], "days")
    with c2:
        stat_card("Total", summary["total"], "completions")
    stat_card("Success Rate", f"{summary['success_rate']}%", "since you started")
    st.caption(f"Best streak: {summary['best_streak']} days · last 7 days: {summary['last_7_days']}")

    window = completion_window(selected, WINDOW_DAYS, day)
    strip = calendar_strip(window, title=f"Last {WINDOW_DAYS} Days")
    st.pyplot(strip)
    plt.close(strip)

    fig = weekly_completions_chart(window_frame(selected, WINDOW_DAYS, day))
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)


# =========================
# 3) PAGE
# =========================
st.title("Habit Tracker")

store = get_store()
day = today()

add_habit_form(store)

left, right = st.columns(2)
with left:
    habit_list(store, day)
with right:
    stats_panel(store, day)
