import logging
from datetime import datetime
from decimal import Decimal

import pytest

from ledger.domain import FilterCriteria, TransactionDraft, TransactionParseError
from ledger.filters import filter_and_sort
from ledger.storage import MemoryStore, UnavailableStore
from ledger.transforms import (
    SEED_RECORDS,
    add_transaction,
    default_transactions,
    load_transactions_or_seed,
    next_id,
    remove_transaction,
    replace_transaction,
)


def make_draft(**kwargs):
    base = dict(kind="expense", amount="35,90", category="Saúde",
                description="Farmácia", date="2025-11-07")
    base.update(kwargs)
    return TransactionDraft(**base)


def test_seed_has_six_fixed_records():
    seed = default_transactions()
    assert [t.id for t in seed] == [1, 2, 3, 4, 5, 6]
    assert sum(1 for t in seed if t.is_income) == 2
    assert sum(1 for t in seed if t.is_expense) == 4
    assert len({t.category for t in seed}) == 6
    assert {t.occurred_on.month for t in seed} == {11}
    assert len(SEED_RECORDS) == 6


def test_next_id():
    assert next_id(()) == 1
    seed = default_transactions()
    assert next_id(seed) == 7
    assert next_id(remove_transaction(seed, 3)) == 7
    assert next_id(seed[:1] + seed[4:5]) == 6


def test_add_transaction_assigns_next_id_and_keeps_input():
    seed = default_transactions()
    updated = add_transaction(seed, make_draft())
    assert len(seed) == 6
    assert len(updated) == 7
    added = updated[-1]
    assert added.id == 7
    assert added.amount == Decimal("35.90")
    assert added.occurred_on == datetime(2025, 11, 7)


def test_add_transaction_to_empty_collection():
    updated = add_transaction((), make_draft())
    assert [t.id for t in updated] == [1]


def test_add_transaction_rejects_unparseable_draft():
    with pytest.raises(TransactionParseError) as exc:
        add_transaction(default_transactions(), make_draft(amount="trinta"))
    assert exc.value.field == "amount"


def test_replace_transaction_keeps_id_and_position():
    seed = default_transactions()
    updated = replace_transaction(
        seed, 2, make_draft(kind="income", amount="1300", category="Outros", description="Reembolso")
    )
    assert [t.id for t in updated] == [1, 2, 3, 4, 5, 6]
    replaced = updated[1]
    assert replaced.kind == "income"
    assert replaced.amount == 1300
    assert seed[1].kind == "expense"
    assert seed[1].amount == 1200


def test_replace_unknown_id_changes_nothing():
    seed = default_transactions()
    assert replace_transaction(seed, 99, make_draft()) == seed


def test_replace_rejects_unparseable_draft():
    with pytest.raises(TransactionParseError):
        replace_transaction(default_transactions(), 1, make_draft(date="31/12/2025"))


def test_remove_transaction():
    seed = default_transactions()
    updated = remove_transaction(seed, 4)
    assert [t.id for t in updated] == [1, 2, 3, 5, 6]
    assert remove_transaction(seed, 99) == seed


def test_load_falls_back_to_seed_without_stored_data():
    assert load_transactions_or_seed(MemoryStore()) == default_transactions()
    assert load_transactions_or_seed(UnavailableStore()) == default_transactions()
    assert load_transactions_or_seed(MemoryStore({"transactions": []})) == default_transactions()


def test_load_reads_stored_records():
    store = MemoryStore()
    trans = add_transaction((), make_draft())
    store.save_transactions(trans)
    assert load_transactions_or_seed(store) == trans


def test_load_skips_unreadable_records(caplog):
    store = MemoryStore({"transactions": [
        {"id": 1, "kind": "income", "amount": 10, "category": "Outros", "description": "", "date": "2025-01-01"},
        {"id": 2, "kind": "expense", "amount": "dez", "category": "Outros", "description": "", "date": "2025-01-01"},
        {"id": 3, "kind": "expense", "amount": 10, "category": "Lazer", "description": 123, "date": "2025-11-01"},
        {"id": 4.5, "kind": "expense", "amount": 10, "category": "Lazer", "description": "", "date": "2025-11-01"},
        "not a record",
    ]})
    with caplog.at_level(logging.WARNING, logger="ledger.transforms"):
        loaded = load_transactions_or_seed(store)
    assert [t.id for t in loaded] == [1]
    assert "Skipping unreadable stored record" in caplog.text


def test_load_uses_seed_when_nothing_is_readable():
    store = MemoryStore({"transactions": [{"id": "x"}]})
    assert load_transactions_or_seed(store) == default_transactions()


def test_loaded_records_can_be_searched():
    store = MemoryStore({"transactions": [
        {"id": 1, "kind": "expense", "amount": 10, "category": "Lazer", "description": 123, "date": "2025-11-01"},
        {"id": 2, "kind": "expense", "amount": 20, "category": "Lazer", "description": None, "date": "2025-11-02"},
        {"id": 3, "kind": "expense", "amount": 30, "category": "Lazer", "description": "Cinema", "date": "2025-11-03"},
    ]})
    loaded = load_transactions_or_seed(store)
    assert [t.id for t in loaded] == [2, 3]
    result = filter_and_sort(loaded, FilterCriteria(search_term="cin"))
    assert [t.id for t in result] == [3]


def test_add_transaction_rejects_non_text_description():
    with pytest.raises(TransactionParseError) as exc:
        add_transaction((), make_draft(description=42))
    assert exc.value.field == "description"
