import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date

import pandas as pd
import streamlit as st

from app.charts import expense_share_pie, income_expense_bar
from ledger import settings
from ledger.domain import EXPENSE, INCOME, FilterCriteria, TransactionDraft
from ledger.filters import PERIODS
from ledger.formatting import format_currency, format_date
from ledger.functional import validate_draft
from ledger.reports import build_dashboard
from ledger.storage import load_dark_mode, open_store, save_dark_mode
from ledger.transforms import (
    add_transaction,
    load_transactions_or_seed,
    next_id,
    remove_transaction,
    replace_transaction,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

st.set_page_config(page_title=settings.APP_NAME, layout="wide")

if "store" not in st.session_state:
    st.session_state.store = open_store(settings.STORAGE_PATH)
store = st.session_state.store

if "transactions" not in st.session_state:
    st.session_state.transactions = load_transactions_or_seed(store)
if "dark_mode" not in st.session_state:
    st.session_state.dark_mode = load_dark_mode(store)
if "editing_id" not in st.session_state:
    st.session_state.editing_id = None


def commit(transactions):
    st.session_state.transactions = transactions
    store.save_transactions(transactions)


# ---- sidebar: preferences ----
dark_mode = st.sidebar.toggle("🌙 Modo escuro", value=st.session_state.dark_mode)
if dark_mode != st.session_state.dark_mode:
    st.session_state.dark_mode = dark_mode
    save_dark_mode(store, dark_mode)

if dark_mode:
    st.markdown(
        "<style>.stApp { background-color: #111827; color: #f9fafb; }</style>",
        unsafe_allow_html=True,
    )

st.sidebar.markdown("---")
confirm_clear = st.sidebar.checkbox("Confirmo que quero apagar tudo")
if st.sidebar.button("🗑 Limpar Dados", disabled=not confirm_clear):
    store.clear_all()
    st.session_state.transactions = ()
    st.session_state.dark_mode = False
    st.session_state.editing_id = None
    logger.info("All data cleared by user")
    st.rerun()

st.title(f"💼 {settings.APP_NAME}")

# ---- filters ----
col_search, col_period = st.columns([3, 1])
with col_search:
    search_term = st.text_input("Buscar transações...", value="")
with col_period:
    default_period = settings.DEFAULT_PERIOD if settings.DEFAULT_PERIOD in PERIODS else "all"
    period = st.selectbox(
        "Período",
        options=list(PERIODS),
        index=PERIODS.index(default_period),
        format_func=lambda p: settings.PERIOD_LABELS.get(p, p),
    )

view = build_dashboard(st.session_state.transactions, FilterCriteria(search_term, period))
report = view.report

# ---- summary cards ----
k1, k2, k3, k4 = st.columns(4)
with k1:
    st.metric("Saldo Atual", format_currency(report.balance))
with k2:
    st.metric("Receitas", format_currency(report.total_income))
with k3:
    st.metric("Despesas", format_currency(report.total_expense))
with k4:
    if report.highest_expense:
        st.metric("Maior Gasto", format_currency(report.highest_expense.amount))
        st.caption(report.highest_expense.category)
    else:
        st.metric("Maior Gasto", "N/A")
if report.dominant_category:
    st.caption(
        f"Categoria dominante: **{report.dominant_category.category}** "
        f"({format_currency(report.dominant_category.total)})"
    )

# ---- charts ----
c1, c2 = st.columns(2)
with c1:
    st.subheader("Gastos por Categoria")
    st.plotly_chart(expense_share_pie(view.shares, dark_mode), use_container_width=True)
with c2:
    st.subheader("Receitas vs Despesas")
    st.plotly_chart(income_expense_bar(view.breakdown, dark_mode), use_container_width=True)

# ---- transactions table ----
st.subheader("🧾 Transações")
if view.transactions:
    table = pd.DataFrame([
        {
            "ID": t.id,
            "Data": format_date(t.occurred_on),
            "Descrição": t.description,
            "Categoria": t.category,
            "Tipo": settings.KIND_LABELS[t.kind],
            "Valor": format_currency(t.amount),
        }
        for t in view.transactions
    ])
    st.dataframe(table, use_container_width=True, hide_index=True)
    csv = pd.DataFrame([t.serialize() for t in view.transactions]).to_csv(index=False)
    st.download_button("⬇ Baixar CSV", csv, file_name="transacoes.csv", mime="text/csv")

    by_id = {t.id: t for t in view.transactions}
    col_pick, col_edit, col_delete = st.columns([3, 1, 1])
    with col_pick:
        selected_id = st.selectbox(
            "Transação",
            options=list(by_id),
            format_func=lambda i: f"#{i} · {by_id[i].description} · {format_currency(by_id[i].amount)}",
        )
    with col_edit:
        if st.button("✏️ Editar"):
            st.session_state.editing_id = selected_id
            st.rerun()
    with col_delete:
        confirm_delete = st.checkbox("Confirmar exclusão")
        if st.button("🗑 Excluir", disabled=not confirm_delete):
            commit(remove_transaction(st.session_state.transactions, selected_id))
            if st.session_state.editing_id == selected_id:
                st.session_state.editing_id = None
            st.rerun()
else:
    st.info("Nenhuma transação encontrada")

# ---- add / edit form ----
editing_id = st.session_state.editing_id
editing = next((t for t in st.session_state.transactions if t.id == editing_id), None)
draft = TransactionDraft.from_transaction(editing) if editing else TransactionDraft(date=date.today().isoformat())

st.divider()
st.subheader("✏️ Editar Transação" if editing else "➕ Nova Transação")

# outside the form so the category list follows the chosen kind
kind = st.radio(
    "Tipo",
    options=[EXPENSE, INCOME],
    index=[EXPENSE, INCOME].index(draft.kind),
    format_func=lambda k: settings.KIND_LABELS[k],
    horizontal=True,
)
category_options = settings.INCOME_CATEGORIES if kind == INCOME else settings.EXPENSE_CATEGORIES

with st.form("transaction_form", clear_on_submit=True):
    col1, col2 = st.columns(2)
    with col1:
        amount = st.text_input("Valor (R$)", value=draft.amount)
        tx_date = st.date_input("Data", value=date.fromisoformat(draft.date))
    with col2:
        category = st.selectbox(
            "Categoria",
            options=category_options,
            index=category_options.index(draft.category) if draft.category in category_options else 0,
        )
        description = st.text_input("Descrição", value=draft.description)
    submitted = st.form_submit_button("Salvar" if editing else "Adicionar")

if submitted:
    submitted_draft = TransactionDraft(
        kind=kind,
        amount=amount,
        category=category,
        description=description,
        date=tx_date.isoformat(),
    )
    tx_id = editing.id if editing else next_id(st.session_state.transactions)
    result = validate_draft(submitted_draft, tx_id)
    if result.is_left():
        st.error(f"❌ {result.get_error()['message']}")
    else:
        if editing:
            commit(replace_transaction(st.session_state.transactions, editing.id, submitted_draft))
        else:
            commit(add_transaction(st.session_state.transactions, submitted_draft))
        st.session_state.editing_id = None
        st.rerun()

if editing and st.button("Cancelar edição"):
    st.session_state.editing_id = None
    st.rerun()
