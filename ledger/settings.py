"""
Configuration settings for the finance dashboard.
Reads environment variables (optionally from a .env file) and holds the
presentation constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# Storage: an empty LEDGER_STORAGE_PATH disables persistence
STORAGE_PATH = os.getenv("LEDGER_STORAGE_PATH", str(PROJECT_ROOT / "data" / "ledger.json"))

LOG_LEVEL = os.getenv("LEDGER_LOG_LEVEL", "INFO").upper()
DEFAULT_PERIOD = os.getenv("LEDGER_DEFAULT_PERIOD", "month")

APP_NAME = os.getenv("APP_NAME", "Finanças Pessoais")

# Category choices offered by the transaction form
INCOME_CATEGORIES = ["Salário", "Freelance", "Investimentos", "Outros"]
EXPENSE_CATEGORIES = ["Moradia", "Alimentação", "Transporte", "Lazer", "Saúde", "Educação", "Outros"]

PERIOD_LABELS = {
    "all": "Todos",
    "day": "Hoje",
    "week": "Semana",
    "today-relative-week": "Últimos 7 dias",
    "month": "Mês",
    "year": "Ano",
}

KIND_LABELS = {
    "income": "Receita",
    "expense": "Despesa",
}

THEME_COLORS = {
    "income": "#3b82f6",
    "expense": "#ef4444",
    "positive": "#22c55e",
    "negative": "#ef4444",
}

# Pie slice colors, cycled
CHART_COLORS = ["#3b82f6", "#8b5cf6", "#ec4899", "#f59e0b", "#10b981", "#ef4444", "#06b6d4"]

CHART_CONFIG = {
    "height": 300,
    "margin": {"l": 10, "r": 10, "t": 30, "b": 10},
}
