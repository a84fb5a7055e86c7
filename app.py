"""
PocketLedger - Streamlit Application
Personal income/expense tracker with monthly history and expense breakdown.
"""

import streamlit as st
import pandas as pd
import plotly.express as px
import logging
from datetime import date
from dotenv import load_dotenv

from config import configure_logging
from db_engine import init_db
from services import (
    AuthError,
    AuthService,
    CURRENCY_SYMBOLS,
    EditSession,
    PreferencesService,
    SqlRecordStore,
    TrackerService,
    TransactionDraft,
    TransactionType,
    TypeFilter,
    categories_for,
    format_money,
    friendly_auth_message,
    month_label,
    shift_month,
)

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()
configure_logging()

# Configure Streamlit page
st.set_page_config(
    page_title="PocketLedger - Expense Tracker",
    page_icon="💰",
    layout="wide"
)

# Initialize database
init_db()

DARK_THEME_CSS = """
<style>
    .stApp { background-color: #0f172a; color: #e2e8f0; }
    .stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label { color: #e2e8f0; }
</style>
"""


# ==================== SESSION STATE ====================
def _init_session_state():
    today = date.today()
    defaults = {
        "user": None,
        "store": None,
        "tracker": None,
        "edit_session": EditSession.idle(),
        "selected_year": today.year,
        "selected_month": today.month,
        "type_filter": TypeFilter.ALL.value,
        "form_error": "",
        "history_error": "",
        "form_type": TransactionType.EXPENSE.value,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value
    if st.session_state.store is None:
        st.session_state.store = SqlRecordStore()


def _reset_form():
    """Clear the transaction form back to a fresh expense."""
    st.session_state.form_type = TransactionType.EXPENSE.value
    st.session_state.form_text = ""
    st.session_state.form_amount = ""
    st.session_state.form_date = date.today()
    st.session_state.form_category = categories_for(TransactionType.EXPENSE)[0]
    st.session_state.form_error = ""


def _start_tracking(user):
    st.session_state.user = user
    tracker = TrackerService(st.session_state.store, user.id)
    error = tracker.start()
    if error:
        st.error(error.message)
    st.session_state.tracker = tracker
    st.session_state.edit_session = EditSession.idle()


def _logout():
    if st.session_state.tracker is not None:
        st.session_state.tracker.stop()
    st.session_state.tracker = None
    st.session_state.user = None
    st.session_state.edit_session = EditSession.idle()
    _reset_form()


# ==================== AUTH ====================
def render_auth():
    """Render the login / sign-up form."""
    st.title("💰 PocketLedger")

    is_login = st.radio("Account", ["Login", "Sign Up"], horizontal=True) == "Login"
    st.caption("Log in to track your expenses" if is_login else "Sign up to get started")

    with st.form("auth_form"):
        email = st.text_input("Email Address")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login" if is_login else "Sign Up", use_container_width=True)

        if submitted:
            try:
                if is_login:
                    user = AuthService.sign_in(email, password)
                else:
                    user = AuthService.sign_up(email, password)
            except AuthError as e:
                st.error(friendly_auth_message(e))
                return
            _start_tracking(user)
            st.rerun()


# ==================== CALLBACKS ====================
# Widget-backed session keys may only change before the widgets render,
# so every action that touches the form runs as an on_click callback.
def _on_submit():
    tracker = st.session_state.tracker
    draft = TransactionDraft(
        text=st.session_state.form_text,
        amount=st.session_state.form_amount,
        type=st.session_state.form_type,
        category=st.session_state.form_category,
        date=st.session_state.form_date
    )
    outcome = tracker.submit(draft, st.session_state.edit_session)
    st.session_state.edit_session = outcome.session
    if outcome.ok:
        _reset_form()
    else:
        st.session_state.form_error = outcome.error.message


def _on_cancel_edit():
    st.session_state.edit_session = TrackerService.cancel_edit(st.session_state.edit_session)
    _reset_form()


def _on_edit(record_id: str):
    tracker = st.session_state.tracker
    session, draft = tracker.begin_edit(record_id, st.session_state.edit_session)
    if draft is None:
        return
    st.session_state.edit_session = session
    st.session_state.form_type = draft.type
    st.session_state.form_text = draft.text
    st.session_state.form_amount = str(draft.amount)
    st.session_state.form_date = draft.date
    st.session_state.form_category = draft.category
    st.session_state.form_error = ""


def _on_delete(record_id: str):
    outcome = st.session_state.tracker.delete(record_id)
    st.session_state.history_error = "" if outcome.ok else outcome.error.message
    if outcome.ok and st.session_state.edit_session.editing_id == record_id:
        _on_cancel_edit()


def _on_move_month(offset: int):
    year, month = shift_month(st.session_state.selected_year, st.session_state.selected_month, offset)
    st.session_state.selected_year = year
    st.session_state.selected_month = month


def _on_type_change():
    categories = categories_for(st.session_state.form_type)
    if st.session_state.form_category not in categories:
        st.session_state.form_category = categories[0]


# ==================== SIDEBAR ====================
def render_sidebar(prefs):
    """Render the sidebar with theme, currency and logout."""
    user = st.session_state.user
    st.sidebar.title("⚙️ Settings")
    st.sidebar.caption(user.email)

    theme_label = "🌙 Dark mode" if prefs.theme == "light" else "☀️ Light mode"
    if st.sidebar.button(theme_label, use_container_width=True):
        PreferencesService.toggle_theme(user.id)
        st.rerun()

    codes = list(CURRENCY_SYMBOLS.keys())
    selected = st.sidebar.selectbox(
        "Currency",
        codes,
        index=codes.index(prefs.currency_code),
        format_func=lambda code: f"{code} ({CURRENCY_SYMBOLS[code]})"
    )
    if selected != prefs.currency_code:
        PreferencesService.set_currency_code(user.id, selected)
        st.rerun()

    st.sidebar.button("🚪 Logout", use_container_width=True, on_click=_logout)


# ==================== MAIN CONTENT ====================
def render_transaction_form():
    """Render the add/edit transaction form."""
    session = st.session_state.edit_session

    st.subheader("✏️ Edit Transaction" if session.is_editing else "➕ Add New Transaction")

    st.radio(
        "Type",
        [TransactionType.EXPENSE.value, TransactionType.INCOME.value],
        format_func=str.title,
        horizontal=True,
        key="form_type",
        on_change=_on_type_change
    )

    with st.form("transaction_form"):
        st.text_input("Description", key="form_text")
        st.text_input("Amount", key="form_amount")
        st.date_input("Date", key="form_date")
        st.selectbox("Category", list(categories_for(st.session_state.form_type)), key="form_category")

        if st.session_state.form_error:
            st.error(st.session_state.form_error)

        st.form_submit_button(
            "Update Transaction" if session.is_editing else "Add Transaction",
            use_container_width=True,
            on_click=_on_submit
        )

    if session.is_editing:
        st.button("Cancel Edit", use_container_width=True, on_click=_on_cancel_edit)


def render_summary(view, symbol):
    """Render income, expense and balance over all transactions."""
    st.subheader("📊 Summary")
    summary = view.summary
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Income", format_money(summary.total_income, symbol))
    with col2:
        st.metric("Expense", format_money(summary.total_expense, symbol))
    with col3:
        st.metric("Balance", format_money(summary.total_balance, symbol))


def render_expense_chart(view, symbol):
    """Render the expense breakdown doughnut for the selected month."""
    if not view.category_breakdown:
        st.info("No expenses for this month.")
        return

    df = pd.DataFrame(
        [{"Category": category, "Amount": float(total)} for category, total in view.category_breakdown.items()]
    )
    fig = px.pie(df, values="Amount", names="Category", hole=0.5,
                 title=f"Expense Breakdown ({symbol})")
    fig.update_traces(textposition="inside", textinfo="percent+label")
    st.plotly_chart(fig, use_container_width=True)


def render_history(view, symbol):
    """Render month navigation, type filter and the transaction list."""
    st.subheader("📜 Transaction History")

    nav1, nav2, nav3, filter_col = st.columns([1, 3, 1, 4])
    with nav1:
        st.button("◀", key="prev_month", on_click=_on_move_month, args=(-1,))
    with nav2:
        st.markdown(f"**{month_label(view.year, view.month)}**")
    with nav3:
        st.button("▶", key="next_month", on_click=_on_move_month, args=(1,))
    with filter_col:
        st.radio(
            "Filter",
            [f.value for f in TypeFilter],
            format_func=str.title,
            horizontal=True,
            key="type_filter",
            label_visibility="collapsed"
        )

    if st.session_state.history_error:
        st.error(st.session_state.history_error)

    if view.is_empty:
        st.info("No transactions for this month.")
        return

    for record in view.records:
        icon = "🔻" if record.is_expense else "🔺"
        col1, col2, col3, col4 = st.columns([5, 2, 1, 1])
        with col1:
            st.markdown(f"{icon} **{record.text}**  \n{record.category} • {record.date.strftime('%x')}")
        with col2:
            st.markdown(f"**{format_money(record.amount, symbol, signed=True)}**")
        with col3:
            st.button("✏️", key=f"edit_{record.id}", on_click=_on_edit, args=(record.id,))
        with col4:
            st.button("🗑️", key=f"delete_{record.id}", on_click=_on_delete, args=(record.id,))


# ==================== MAIN APP ====================
def main():
    """Main application entry point."""
    _init_session_state()

    if st.session_state.user is None:
        render_auth()
        return

    if "form_text" not in st.session_state:
        _reset_form()

    user = st.session_state.user
    prefs = PreferencesService.load(user.id)
    if prefs.theme == "dark":
        st.markdown(DARK_THEME_CSS, unsafe_allow_html=True)

    render_sidebar(prefs)

    view = st.session_state.tracker.view(
        st.session_state.selected_year,
        st.session_state.selected_month,
        st.session_state.type_filter
    )
    symbol = prefs.currency_symbol

    st.title("💰 PocketLedger")

    left, right = st.columns([1, 2])
    with left:
        render_transaction_form()
        render_summary(view, symbol)
        render_expense_chart(view, symbol)
    with right:
        render_history(view, symbol)


if __name__ == "__main__":
    main()
