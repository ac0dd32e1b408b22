from datetime import datetime

LONG_DATE = "LL"
NUMERIC_DATE = "DD/MM/YYYY"


def format_date(value: datetime, pattern: str) -> str:
    """
    Render a date for display in emails.

    ``LL`` gives the long form (``October 9, 2026``), ``DD/MM/YYYY`` the
    numeric one (``09/10/2026``).
    """
    if pattern == LONG_DATE:
        return f"{value:%B} {value.day}, {value.year}"
    if pattern == NUMERIC_DATE:
        return value.strftime("%d/%m/%Y")
    raise ValueError(f"Unsupported date pattern: {pattern}")
