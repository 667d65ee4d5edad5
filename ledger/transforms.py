import logging
from typing import Tuple

from ledger.domain import Transaction, TransactionDraft, TransactionParseError, create_transaction
from ledger.storage import TransactionStore

logger = logging.getLogger(__name__)

# Shown on first use and whenever storage has nothing to offer.
SEED_RECORDS = (
    {"id": 1, "kind": "income", "amount": 5000, "category": "Salário", "description": "Salário mensal", "date": "2025-11-01"},
    {"id": 2, "kind": "expense", "amount": 1200, "category": "Moradia", "description": "Aluguel", "date": "2025-11-05"},
    {"id": 3, "kind": "expense", "amount": 450, "category": "Alimentação", "description": "Supermercado", "date": "2025-11-06"},
    {"id": 4, "kind": "expense", "amount": 200, "category": "Transporte", "description": "Combustível", "date": "2025-11-04"},
    {"id": 5, "kind": "income", "amount": 800, "category": "Freelance", "description": "Projeto web", "date": "2025-11-03"},
    {"id": 6, "kind": "expense", "amount": 150, "category": "Lazer", "description": "Cinema e jantar", "date": "2025-11-02"},
)


def default_transactions() -> Tuple[Transaction, ...]:
    return tuple(Transaction.deserialize(r) for r in SEED_RECORDS)


def load_transactions_or_seed(store: TransactionStore) -> Tuple[Transaction, ...]:
    """Stored transactions, or the seed data when storage has none.

    Records that no longer parse are skipped and logged.
    """
    records = store.load_transactions()
    if not records:
        logger.info("No stored transactions, using seed data")
        return default_transactions()

    loaded = []
    for record in records:
        try:
            loaded.append(Transaction.deserialize(record))
        except (TransactionParseError, AttributeError) as e:
            logger.warning(f"Skipping unreadable stored record {record!r}: {e}")

    if not loaded:
        logger.warning("No stored record could be read, using seed data")
        return default_transactions()
    return tuple(loaded)


def next_id(trans: Tuple[Transaction, ...]) -> int:
    return max((t.id for t in trans), default=0) + 1


def _build(draft: TransactionDraft, tx_id: int) -> Transaction:
    return create_transaction(
        tx_id, draft.kind, draft.amount, draft.category, draft.description, draft.date
    )


def add_transaction(
    trans: Tuple[Transaction, ...], draft: TransactionDraft
) -> Tuple[Transaction, ...]:
    return tuple(trans) + (_build(draft, next_id(trans)),)


def replace_transaction(
    trans: Tuple[Transaction, ...], tx_id: int, draft: TransactionDraft
) -> Tuple[Transaction, ...]:
    if not any(t.id == tx_id for t in trans):
        return tuple(trans)
    replacement = _build(draft, tx_id)
    return tuple(replacement if t.id == tx_id else t for t in trans)


def remove_transaction(
    trans: Tuple[Transaction, ...], tx_id: int
) -> Tuple[Transaction, ...]:
    return tuple(t for t in trans if t.id != tx_id)
