"""Reference data seeded into every new database."""

from fintrack.domain.entities import (
    ACCOUNT_TRANSFER_IN,
    EXPENSE,
    INCOME,
    REIMBURSEMENT,
    TRANSFER,
)

# (code, name, symbol, is_base)
DEFAULT_CURRENCIES = [
    ("JPY", "Japanese Yen", "¥", True),
    ("USD", "US Dollar", "$", False),
    ("EUR", "Euro", "€", False),
    ("MXN", "Mexican Peso", "$", False),
]

# (name, description)
DEFAULT_TRANSACTION_TYPES = [
    (EXPENSE, "Money spent"),
    (INCOME, "Money received"),
    (TRANSFER, "Money sent to another party"),
    (REIMBURSEMENT, "Money paid back for an earlier expense"),
    (ACCOUNT_TRANSFER_IN, "Money moved in from one of your own accounts (recorded only, balance unchanged)"),
]
