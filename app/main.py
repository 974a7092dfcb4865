"""
Streamlit Frontend for LifeHub

Presentation only: every page reads the current Store, renders views
computed by lifehub.aggregates, and sends changes back as intents
through the session. No page edits the Store itself.

Dark mode and quick-add staging amounts are UI state and live in
st.session_state, never in the Store.
"""

from datetime import date

import streamlit as st

from lifehub.aggregates import (
    budget_status,
    emergency_fund_status,
    habit_summary,
    month_key,
    open_tasks,
    overdue_tasks,
    reading_by_status,
    spend_by_category,
    totals,
)
from lifehub.config import get_settings
from lifehub.errors import LifeHubError
from lifehub.models import (
    DEFAULT_CATEGORIES,
    Habit,
    LifeArea,
    MealType,
    Mood,
    ReadingStatus,
    Recurrence,
    TransactionKind,
)
from lifehub.services import backup_filename, csv_filename, to_csv, to_json_backup
from lifehub.session import LifeHubSession, create_session


st.set_page_config(
    page_title="LifeHub",
    page_icon="💫",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Dark mode is UI state only; it is applied by restyling the page.
DARK_THEME_CSS = """
<style>
    .stApp, [data-testid="stSidebar"] {
        background-color: #0f172a;
        color: #e2e8f0;
    }
    .stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label {
        color: #e2e8f0;
    }
</style>
"""

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@st.cache_resource
def get_session() -> LifeHubSession:
    """One session per server process."""
    return create_session()


def money(amount: float) -> str:
    symbol = get_settings().tracker.currency_symbol
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def submit(session: LifeHubSession, intent: str, *args, **kwargs) -> bool:
    """Apply an intent and show any rejection to the user."""
    try:
        session.apply(intent, *args, **kwargs)
    except LifeHubError as e:
        st.error(str(e))
        return False
    return True


def main():
    session = get_session()
    today = session.mutator.today()

    if "quick_amounts" not in st.session_state:
        st.session_state.quick_amounts = {}

    st.sidebar.title("💫 LifeHub")
    st.sidebar.caption(f"Budgets + Categories • {month_key(today)}")
    if st.sidebar.toggle("Dark mode", value=True, key="dark_mode"):
        st.markdown(DARK_THEME_CSS, unsafe_allow_html=True)

    # Bound to the Store, so it follows whatever was saved last.
    night_shift = st.sidebar.toggle("Night shift mode", value=session.store.night_shift_mode)
    if night_shift != session.store.night_shift_mode:
        if submit(session, "set_night_shift_mode", night_shift):
            st.rerun()
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["Home", "Finance", "Budgets", "Health", "Diet", "Plan", "Reading", "Notes"],
        index=0,
        key="page",
    )

    st.sidebar.markdown("---")
    st.sidebar.download_button(
        "Export backup",
        data=to_json_backup(session.store),
        file_name=backup_filename(today),
        mime="application/json",
    )
    st.sidebar.download_button(
        "Export CSV",
        data=to_csv(session.store),
        file_name=csv_filename(today),
        mime="text/csv",
    )

    pages = {
        "Home": render_home_page,
        "Finance": render_finance_page,
        "Budgets": render_budgets_page,
        "Health": render_health_page,
        "Diet": render_diet_page,
        "Plan": render_plan_page,
        "Reading": render_reading_page,
        "Notes": render_notes_page,
    }
    pages[page](session, today)


def render_home_page(session: LifeHubSession, today: date):
    store = session.store
    fund = emergency_fund_status(store)
    cash = totals(store)

    left, right = st.columns(2)
    with left:
        st.subheader("Emergency Fund")
        st.caption(store.emergency_fund_name)
        st.metric("Balance", f"{money(fund.balance)} / {money(fund.target)}")
        st.progress(fund.progress_pct / 100)
        if fund.achieved:
            st.success("🎉 Six months secured!")

        delta = st.number_input("Adjust (e.g., 50 or -20)", value=0.0, step=10.0)
        if st.button("Apply"):
            if submit(session, "adjust_emergency_fund_balance", delta):
                st.rerun()

        baseline = st.number_input(
            "Monthly expenses baseline",
            value=float(store.monthly_expense_baseline),
            min_value=0.0,
            step=50.0,
        )
        if baseline != store.monthly_expense_baseline:
            if submit(session, "set_monthly_expense_baseline", baseline):
                st.rerun()
        st.caption(f"Six months target: **{money(fund.six_month_target)}**")

    with right:
        st.subheader("Net cash (all transactions)")
        st.metric("Net", money(cash.net))
        st.caption(f"Income {money(cash.income)} • Spend {money(cash.expense)}")

        summary = habit_summary(store)
        st.subheader("This week")
        st.write(
            f"Gym {summary.gym_days}/7 • Swim {summary.swim_days}/7 • "
            f"Called family {summary.call_family_days}/7 • Water {summary.water_total}"
        )


def render_finance_page(session: LifeHubSession, today: date):
    store = session.store
    key = month_key(today)
    spent = spend_by_category(store, key)

    left, right = st.columns(2)
    with left:
        st.subheader("Add transaction")
        with st.form("add_transaction", clear_on_submit=True):
            when = st.date_input("Date", value=today)
            kind = st.selectbox("Type", [k.value for k in TransactionKind], index=1)
            category = st.selectbox("Category", list(DEFAULT_CATEGORIES))
            amount = st.number_input("Amount", min_value=0.0, step=0.01)
            note = st.text_input("Note (optional)")
            if st.form_submit_button("Add"):
                if submit(session, "add_transaction", when, kind, category, amount, note or None):
                    st.rerun()

        st.subheader("Recent")
        for t in store.transactions[:20]:
            cols = st.columns([2, 2, 3, 2, 1])
            cols[0].write(t.date.isoformat())
            cols[1].write(t.kind.value)
            cols[2].write(t.category)
            cols[3].write(money(t.amount))
            if cols[4].button("✕", key=f"del-{t.id}"):
                if submit(session, "remove_transaction", t.id):
                    st.rerun()

    with right:
        st.subheader(f"Quick add · {key}")
        staging = st.session_state.quick_amounts
        for category in DEFAULT_CATEGORIES:
            cols = st.columns([3, 3, 2, 4])
            cols[0].write(category)
            staging[category] = cols[1].number_input(
                category,
                min_value=0.0,
                value=float(staging.get(category, 0)),
                key=f"quick-{category}",
                label_visibility="collapsed",
            )
            if cols[2].button("Add", key=f"quick-add-{category}"):
                try:
                    st.session_state.quick_amounts = session.quick_add_category_expense(
                        category, staging[category], staging
                    )
                except LifeHubError as e:
                    st.error(str(e))
                else:
                    # The widget keeps its own value; drop it so the reset shows.
                    st.session_state.pop(f"quick-{category}", None)
                    st.rerun()
            cols[3].caption(
                f"{money(spent.get(category, 0))} / {money(store.budgets.get(category, 0))}"
            )


def render_budgets_page(session: LifeHubSession, today: date):
    store = session.store
    key = month_key(today)

    left, right = st.columns(2)
    with left:
        st.subheader(f"This month · {key}")
        for line in budget_status(store, key).values():
            marker = "🔴" if line.over else "🟢"
            st.write(f"{marker} {line.category}: {money(line.spent)} / {money(line.target)}")
            st.progress(line.progress_pct / 100)

    with right:
        st.subheader("Set / change budgets")
        for category in DEFAULT_CATEGORIES:
            current = float(store.budgets.get(category, 0))
            value = st.number_input(category, min_value=0.0, value=current, step=5.0)
            if value != current:
                if submit(session, "set_budget", category, value):
                    st.rerun()
        st.caption("Tip: Budgets are monthly. The bar turns red if you go over.")

        st.subheader("Emergency fund")
        name = st.text_input("Name", value=store.emergency_fund_name)
        target = st.number_input(
            "Target", min_value=0.0, value=float(store.emergency_fund_target), step=100.0
        )
        if st.button("Save fund settings"):
            if submit(session, "set_emergency_fund_name", name) and submit(
                session, "set_emergency_fund_target", target
            ):
                st.rerun()


def render_health_page(session: LifeHubSession, today: date):
    with st.form("add_health", clear_on_submit=True):
        when = st.date_input("Date", value=today)
        weight = st.number_input("Weight (kg)", min_value=0.0, value=None)
        sleep = st.number_input("Sleep (hrs)", min_value=0.0, value=None)
        steps = st.number_input("Steps", min_value=0, value=None, step=100)
        mood = st.selectbox("Mood", [None] + [m.value for m in Mood])
        if st.form_submit_button("Log"):
            if submit(session, "add_health_entry", when, weight, sleep, steps, mood):
                st.rerun()

    for entry in session.store.health[:30]:
        st.write(
            f"{entry.date} • {entry.weight_kg or '-'} kg • {entry.sleep_hrs or '-'} h • "
            f"{entry.steps or '-'} steps {entry.mood.value if entry.mood else ''}"
        )


def render_diet_page(session: LifeHubSession, today: date):
    with st.form("add_meal", clear_on_submit=True):
        when = st.date_input("Date", value=today)
        meal_type = st.selectbox("Meal", [m.value for m in MealType])
        name = st.text_input("What")
        calories = st.number_input("Calories", min_value=0.0, value=None)
        if st.form_submit_button("Add"):
            if submit(session, "add_meal", when, meal_type, name, calories):
                st.rerun()

    for meal in session.store.meals[:30]:
        st.write(f"{meal.date} • {meal.meal_type.value} • {meal.name} • {meal.calories or '-'} kcal")


def render_plan_page(session: LifeHubSession, today: date):
    store = session.store
    left, right = st.columns(2)
    with left:
        st.subheader("Tasks")
        with st.form("add_task", clear_on_submit=True):
            title = st.text_input("Title")
            due = st.date_input("Due", value=None)
            recur = st.selectbox("Repeats", [r.value for r in Recurrence])
            area = st.selectbox("Area", [None] + [a.value for a in LifeArea])
            if st.form_submit_button("Add"):
                if submit(session, "add_task", title, due, recur, area):
                    st.rerun()

        overdue = {t.id for t in overdue_tasks(store, today)}
        for task in open_tasks(store):
            label = f"{task.title} ({task.due or 'no date'})"
            if task.id in overdue:
                label = f"⚠️ {label}"
            cols = st.columns([5, 1])
            cols[0].write(label)
            # A button fires once per click; recurring tasks stay open after it.
            if cols[1].button("Done", key=f"done-{task.id}"):
                if submit(session, "toggle_task", task.id):
                    st.rerun()

    with right:
        habits = store.weekly_habits
        st.subheader(f"Week of {habits.week_start}")
        if st.button("Start new week"):
            if submit(session, "start_new_week"):
                st.rerun()
        fields = {Habit.GYM: habits.gym, Habit.SWIM: habits.swim, Habit.CALL_FAMILY: habits.call_family}
        for habit, days in fields.items():
            cols = st.columns(8)
            cols[0].write(habit.value)
            for day, done in enumerate(days):
                if cols[day + 1].checkbox(DAY_NAMES[day], value=done, key=f"{habit.value}-{day}") != done:
                    if submit(session, "toggle_habit", habit.value, day):
                        st.rerun()
        cols = st.columns(8)
        cols[0].write("water")
        for day, count in enumerate(habits.water):
            value = cols[day + 1].number_input(
                DAY_NAMES[day], min_value=0, value=count, step=1, key=f"water-{day}"
            )
            if value != count:
                if submit(session, "set_water", day, int(value)):
                    st.rerun()


def render_reading_page(session: LifeHubSession, today: date):
    with st.form("add_reading", clear_on_submit=True):
        title = st.text_input("Title")
        if st.form_submit_button("Add to list"):
            if submit(session, "add_reading_item", title):
                st.rerun()

    statuses = [s.value for s in ReadingStatus]
    for status, items in reading_by_status(session.store).items():
        st.subheader(status.value.capitalize())
        for item in items:
            choice = st.selectbox(
                item.title, statuses, index=statuses.index(status.value), key=f"read-{item.id}"
            )
            if choice != status.value:
                if submit(session, "set_reading_status", item.id, choice):
                    st.rerun()


def render_notes_page(session: LifeHubSession, today: date):
    with st.form("add_note", clear_on_submit=True):
        text = st.text_area("Note")
        pinned = st.checkbox("Pin")
        if st.form_submit_button("Save"):
            if submit(session, "add_note", text, pinned):
                st.rerun()

    notes = sorted(session.store.notes, key=lambda n: not n.pinned)
    for note in notes:
        st.markdown(f"{'📌 ' if note.pinned else ''}{note.text}")
        cols = st.columns(2)
        if cols[0].button("Pin" if not note.pinned else "Unpin", key=f"pin-{note.id}"):
            if submit(session, "toggle_note_pin", note.id):
                st.rerun()
        if cols[1].button("Delete", key=f"del-note-{note.id}"):
            if submit(session, "remove_note", note.id):
                st.rerun()


if __name__ == "__main__":
    main()
