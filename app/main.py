import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date

import streamlit as st

from tracker.aggregates import format_category
from tracker.charts import category_chart, monthly_chart
from tracker.config import Config
from tracker.domain import EXPENSE_CATEGORIES, INCOME_CATEGORIES, BudgetLevel, Kind
from tracker.errors import NotFoundError, ValidationError
from tracker.events import describe
from tracker.export import export_csv, export_filename
from tracker.filters import filter_by_category
from tracker.logger import setup_logger
from tracker.services import DashboardService
from tracker.storage import JsonFileSlot
from tracker.store import Store
from tracker.transforms import to_frame

st.set_page_config(page_title="Money Tracker", layout="wide")

if "store" not in st.session_state:
    logger = setup_logger(level=Config.LOG_LEVEL)
    Config.validate()
    logger.info("Starting Money Tracker with data file %s", Config.DATA_PATH)
    st.session_state.store = Store(JsonFileSlot(Config.DATA_PATH))
    st.session_state.store.bus.subscribe_all(
        lambda event: st.session_state.setdefault("notices", []).append(describe(event))
    )

store: Store = st.session_state.store
for notice in st.session_state.pop("notices", []):
    st.toast(notice)
service = DashboardService(months_back=Config.MONTHS_BACK)
today = date.today()

LEVEL_ICONS = {BudgetLevel.OK: "🟢", BudgetLevel.WARNING: "🟠", BudgetLevel.OVER: "🔴"}


def category_options(kind: Kind) -> tuple[str, ...]:
    return EXPENSE_CATEGORIES if kind == Kind.EXPENSE else INCOME_CATEGORIES


def transaction_form(key: str, defaults=None) -> dict | None:
    kind = st.radio(
        "Type",
        [Kind.EXPENSE, Kind.INCOME],
        index=0 if defaults is None or defaults.kind == Kind.EXPENSE else 1,
        format_func=lambda k: k.value.title(),
        horizontal=True,
        key=f"{key}_kind",
    )
    options = category_options(kind)
    with st.form(key, clear_on_submit=defaults is None):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input(
                "Amount ($)",
                min_value=0.0,
                step=1.0,
                format="%.2f",
                value=float(defaults.amount) if defaults else 0.0,
            )
            tx_date = st.date_input("Date", value=defaults.date if defaults else today)
        with col2:
            category = st.selectbox(
                "Category",
                options,
                index=options.index(defaults.category) if defaults and defaults.category in options else 0,
                format_func=format_category,
            )
            description = st.text_input("Description", value=defaults.description if defaults else "")
        if not st.form_submit_button("Save"):
            return None
    return {
        "kind": kind,
        "amount": f"{amount:.2f}",
        "category": category,
        "description": description,
        "date": tx_date,
    }


st.sidebar.markdown("### 💰 Money Tracker")
menu = st.sidebar.radio("Menu", ["🏠 Dashboard", "📊 Analytics"])

st.sidebar.markdown("---")
with st.sidebar.form("budget_form"):
    budget_input = st.number_input("Monthly budget ($)", min_value=0.0, step=50.0, value=float(store.budget))
    if st.form_submit_button("Save budget"):
        try:
            store.set_budget(budget_input)
            st.rerun()
        except ValidationError as e:
            st.error(e.message)

category_filter = st.sidebar.selectbox(
    "Filter by category",
    [""] + list(EXPENSE_CATEGORIES) + list(INCOME_CATEGORIES),
    format_func=lambda c: format_category(c) if c else "All categories",
)

report = service.snapshot(store.transactions, store.budget, today, category_filter or None)["result"]

if menu == "🏠 Dashboard":
    st.title("🏠 Dashboard")

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Total Income", f"${report['total_income']:,.2f}")
    with k2:
        st.metric("Total Expenses", f"${report['total_expense']:,.2f}")
    with k3:
        st.metric("Balance", f"${report['total_income'] - report['total_expense']:,.2f}")

    st.subheader("🎯 Monthly Budget")
    status = report["budget_status"]
    b1, b2, b3 = st.columns(3)
    b1.metric("Budget", f"${report['budget']:,.2f}")
    b2.metric("Spent this month", f"${report['month_spent']:,.2f}")
    b3.metric("Remaining", f"${status.remaining:,.2f}")
    st.progress(float(status.display_percent) / 100, text=f"{LEVEL_ICONS[status.level]} {status.display_percent:.0f}%")

    st.subheader("➕ Add Transaction")
    fields = transaction_form("add_form")
    if fields is not None:
        try:
            store.add(fields)
            st.rerun()
        except ValidationError as e:
            st.error(e.message)

    st.subheader("🧾 Transactions")
    rows = report["rows"]
    if not rows:
        st.info(
            "No transactions found in this category."
            if category_filter
            else "No transactions yet. Add your first transaction to get started!"
        )
    else:
        df = to_frame(rows)
        df["category"] = df["category"].map(format_category)
        st.dataframe(df.drop(columns=["id"]), use_container_width=True, hide_index=True)

        labels = {t.id: f"{t.date} · {t.description} · ${t.amount:,.2f}" for t in rows}
        selected_id = st.selectbox("Select a transaction", list(labels), format_func=labels.get)
        edit_col, delete_col = st.columns(2)
        with edit_col:
            with st.expander("✏️ Edit"):
                try:
                    current = store.get(selected_id)
                except NotFoundError:
                    current = None
                if current is not None:
                    fields = transaction_form(f"edit_form_{selected_id}", defaults=current)
                    if fields is not None:
                        try:
                            store.update(selected_id, fields)
                            st.rerun()
                        except (ValidationError, NotFoundError) as e:
                            st.error(str(e))
        with delete_col:
            if st.button("🗑 Delete", key=f"delete_{selected_id}"):
                store.remove(selected_id)
                st.rerun()

        visible = filter_by_category(store.transactions, category_filter or None)
        st.download_button(
            "⬇️ Export CSV",
            export_csv(visible),
            file_name=export_filename(today),
            mime="text/csv",
        )

elif menu == "📊 Analytics":
    st.title("📊 Analytics")

    view = st.radio("Chart", ["Monthly", "By category"], horizontal=True)
    if view == "Monthly":
        st.plotly_chart(monthly_chart(report["series"]), use_container_width=True)
    elif report["breakdown"]:
        st.plotly_chart(category_chart(report["breakdown"]), use_container_width=True)
    else:
        st.info("No expenses recorded this month")

    i1, i2 = st.columns(2)
    with i1:
        st.markdown("**Top income source**")
        if report["top_income"]:
            name, amount = report["top_income"]
            st.write(f"{format_category(name)}: ${amount:,.2f}")
        else:
            st.write("No income recorded this month")
    with i2:
        st.markdown("**Top expense category**")
        if report["top_expense"]:
            name, amount = report["top_expense"]
            st.write(f"{format_category(name)}: ${amount:,.2f}")
        else:
            st.write("No expenses recorded this month")
