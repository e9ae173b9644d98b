"""
Streamlit Frontend for Expense Tracker

Run with:
    streamlit run app/main.py

DESIGN PRINCIPLES:
1. One screen: the list, its controls and the add form
2. The list re-renders from the store after every command
3. The category filter only changes what is shown
4. Nothing is saved until the user presses Save
"""

import streamlit as st

from expense_tracker.models.expense import CATEGORY_FILTER_OPTIONS, ExpenseCategory
from expense_tracker.orchestrator import AddExpenseFlow, ExpenseListFlow, create_app_components


# Page configuration
st.set_page_config(
    page_title="Expenses",
    page_icon="💸",
    layout="centered",
)


@st.cache_resource
def get_components():
    """Get or create application components (cached for the process)."""
    return create_app_components()


def main():
    """Main application entry point."""
    _, list_flow, add_flow, audit_logger = get_components()

    # The filter choice lives in the session, not in the store
    if "category_filter" not in st.session_state:
        st.session_state.category_filter = list_flow.selected_category
    list_flow.select_category(st.session_state.category_filter)

    st.title("Expenses")

    render_controls(list_flow)
    render_expense_list(list_flow)
    render_add_form(add_flow)

    with st.sidebar.expander("Recent activity"):
        for event in audit_logger.recent_events(limit=10):
            st.caption(f"{event.timestamp:%H:%M:%S} · {event.description}")


def render_controls(list_flow: ExpenseListFlow):
    """Render the sort buttons and the category filter."""
    col1, col2, col3 = st.columns(3)

    with col1:
        if st.button("Sort Asc"):
            list_flow.sort(ascending=True)
            st.rerun()

    with col2:
        if st.button("Sort Desc"):
            list_flow.sort(ascending=False)
            st.rerun()

    with col3:
        st.selectbox(
            "Filter by Category",
            options=list(CATEGORY_FILTER_OPTIONS),
            key="category_filter",
        )

    st.caption(list_flow.filter_label())


def render_expense_list(list_flow: ExpenseListFlow):
    """Render the (filtered) expense list with a delete button per row."""
    expenses = list_flow.visible_expenses()

    if not expenses:
        st.info("No expenses to show. Add one below.")
        return

    for position, expense in enumerate(expenses):
        col1, col2, col3 = st.columns([6, 3, 1])
        with col1:
            st.markdown(f"**{expense.name or '(no name)'}**  \n{expense.category}")
        with col2:
            st.markdown(list_flow.format_amount(expense.amount))
        with col3:
            if st.button("🗑", key=f"delete-{expense.id}", help="Delete"):
                list_flow.delete_visible([position])
                st.rerun()

    st.markdown("---")
    st.markdown(f"**Total:** {list_flow.format_amount(list_flow.total())}")


def render_add_form(add_flow: AddExpenseFlow):
    """Render the add-expense form."""
    categories = [category.value for category in ExpenseCategory]

    with st.form("add_expense", clear_on_submit=False):
        st.subheader("New Expense")
        name = st.text_input("Expense Name", value=add_flow.draft.name)
        amount_text = st.text_input("Expense Amount", value=add_flow.draft.amount_text)
        category = st.selectbox(
            "Category",
            options=categories,
            index=categories.index(add_flow.draft.category)
            if add_flow.draft.category in categories else 0,
        )

        col1, col2 = st.columns(2)
        with col1:
            saved = st.form_submit_button("Save", type="primary")
        with col2:
            cancelled = st.form_submit_button("Cancel")

    if cancelled:
        add_flow.cancel()
        st.rerun()

    if saved:
        add_flow.update_draft(name=name, amount_text=amount_text, category=category)
        result = add_flow.save()
        if result.is_valid:
            st.rerun()
        for message in result.messages_for("amount") + result.messages_for("category"):
            st.error(message)


if __name__ == "__main__":
    main()
