"""
Preparation of caller-supplied records for the analytics core.
"""

from typing import Any, Iterable, List, Mapping, Sequence

import pandas as pd
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from project_analytics.models.analytics import ExpenseRecord, HistoricalPoint
from project_analytics.utils.exceptions import ValidationError
from project_analytics.utils.validators import to_naive_utc


def history_from_records(records: Iterable[Any]) -> List[HistoricalPoint]:
    """
    Convert raw history records into ordinal ``HistoricalPoint`` values.

    Each record supplies ``amount``, or ``value`` when ``amount`` is absent.
    Indices follow input order; any ``date`` on the record is ignored.
    """
    points = []
    for index, record in enumerate(records):
        if isinstance(record, BaseModel):
            record = record.model_dump()
        if not isinstance(record, Mapping):
            raise ValidationError(
                "Invalid history record",
                details=[f"Record {index} is not a mapping"]
            )

        amount = record.get("amount")
        if amount is None:
            amount = record.get("value")
        if amount is None:
            raise ValidationError(
                "Invalid history record",
                details=[f"Record {index} has neither 'amount' nor 'value'"]
            )

        try:
            points.append(HistoricalPoint(index=index, amount=amount))
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid history record",
                details=[f"Record {index}: {error['msg']}" for error in e.errors()]
            )

    return points


def aggregate_expenses(expenses: Sequence[ExpenseRecord], frequency: str = "MS") -> List[HistoricalPoint]:
    """
    Total dated expenses per calendar period, oldest first.

    Periods between the first and last expense with no spend are kept as
    zero so the ordinal index stays evenly spaced.
    """
    if not expenses:
        return []

    undated = [str(expense.id) for expense in expenses if expense.date is None]
    if undated:
        raise ValidationError(
            "Expenses must be dated to aggregate by period",
            details=[f"Undated expense IDs: {', '.join(undated)}"]
        )

    df = pd.DataFrame({
        "date": pd.to_datetime([to_naive_utc(expense.date) for expense in expenses]),
        "amount": [expense.amount for expense in expenses],
    })
    df.set_index("date", inplace=True)
    df.sort_index(inplace=True)

    try:
        totals = df["amount"].resample(frequency).sum()
    except ValueError as e:
        raise ValidationError("Invalid aggregation frequency", details=[str(e)])

    return [
        HistoricalPoint(index=index, amount=float(total))
        for index, total in enumerate(totals.tolist())
    ]
