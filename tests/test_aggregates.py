from decimal import Decimal

import pytest

from ledger.aggregates import (
    balance,
    dominant_category,
    expense_shares_by_category,
    group_by_category,
    highest_expense,
    total_expense,
    total_income,
)
from ledger.domain import CategoryBreakdown, CategoryShare, DominantCategory, create_transaction
from ledger.transforms import default_transactions


def make_tx(id, kind, amount, category, when="2025-11-01"):
    return create_transaction(id, kind, amount, category, "", when)


SAMPLES = [
    (),
    (make_tx(1, "income", "100", "Salário"),),
    (make_tx(1, "expense", "0.10", "Lazer"), make_tx(2, "expense", "0.20", "Lazer")),
    (
        make_tx(1, "income", "1000.55", "Salário"),
        make_tx(2, "expense", "300.10", "Moradia"),
        make_tx(3, "income", "99.99", "Freelance"),
        make_tx(4, "expense", "1500", "Saúde"),
    ),
    default_transactions(),
]


@pytest.mark.parametrize("trans", SAMPLES)
def test_balance_is_income_minus_expense(trans):
    assert balance(trans) == total_income(trans) - total_expense(trans)


def test_empty_input_gives_zero_and_none():
    assert balance([]) == 0
    assert total_income([]) == 0
    assert total_expense([]) == 0
    assert highest_expense([]) is None
    assert dominant_category([]) is None
    assert group_by_category([]) == ()
    assert expense_shares_by_category([]) == ()


def test_income_only_has_no_expense_results():
    trans = [make_tx(1, "income", "10", "Salário")]
    assert highest_expense(trans) is None
    assert dominant_category(trans) is None
    assert expense_shares_by_category(trans) == ()


def test_balance_accepts_generators():
    trans = default_transactions()
    assert balance(t for t in trans) == Decimal("3800")


def test_highest_expense_first_occurrence_wins_ties():
    trans = [
        make_tx(1, "income", "900", "Salário"),
        make_tx(2, "expense", "300", "Moradia"),
        make_tx(3, "expense", "300", "Lazer"),
        make_tx(4, "expense", "100", "Saúde"),
    ]
    assert highest_expense(trans).id == 2


def test_dominant_category_sums_per_category():
    trans = [
        make_tx(1, "expense", "500", "Moradia"),
        make_tx(2, "expense", "300", "Lazer"),
        make_tx(3, "expense", "300", "Lazer"),
        make_tx(4, "income", "5000", "Salário"),
    ]
    assert dominant_category(trans) == DominantCategory(category="Lazer", total=Decimal("600"))


def test_dominant_category_first_seen_wins_ties():
    trans = [
        make_tx(1, "expense", "200", "Transporte"),
        make_tx(2, "expense", "150", "Lazer"),
        make_tx(3, "expense", "50", "Lazer"),
    ]
    assert dominant_category(trans).category == "Transporte"


def test_group_by_category_keeps_first_seen_order():
    trans = [
        make_tx(1, "expense", "50", "Outros"),
        make_tx(2, "income", "200", "Outros"),
        make_tx(3, "income", "1000", "Salário"),
        make_tx(4, "expense", "25", "Outros"),
    ]
    assert group_by_category(trans) == (
        CategoryBreakdown(category="Outros", income_total=Decimal("200"), expense_total=Decimal("75")),
        CategoryBreakdown(category="Salário", income_total=Decimal("1000"), expense_total=Decimal("0")),
    )


@pytest.mark.parametrize("trans", SAMPLES)
def test_group_by_category_is_complete(trans):
    groups = group_by_category(trans)
    assert {g.category for g in groups} == {t.category for t in trans}
    assert len(groups) == len({t.category for t in trans})
    assert sum((g.income_total + g.expense_total for g in groups), Decimal("0")) == (
        total_income(trans) + total_expense(trans)
    )


def test_expense_shares_skip_income_and_zero_totals():
    trans = [
        make_tx(1, "income", "5000", "Salário"),
        make_tx(2, "expense", "0", "Educação"),
        make_tx(3, "expense", "120", "Saúde"),
        make_tx(4, "expense", "30", "Saúde"),
        make_tx(5, "expense", "80", "Lazer"),
    ]
    assert expense_shares_by_category(trans) == (
        CategoryShare(category="Saúde", amount=Decimal("150")),
        CategoryShare(category="Lazer", amount=Decimal("80")),
    )


def test_seed_aggregates():
    trans = default_transactions()
    assert total_income(trans) == 5800
    assert total_expense(trans) == 2000
    assert balance(trans) == 3800
    assert highest_expense(trans).amount == 1200
    assert highest_expense(trans).category == "Moradia"
    assert dominant_category(trans) == DominantCategory(category="Moradia", total=Decimal("1200"))
