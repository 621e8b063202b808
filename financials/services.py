from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Tuple

from clearance.services import format_money, percentage
from .models import FeeRecord, Payment

ZERO = Decimal("0")


def _line(record: FeeRecord) -> Dict[str, Any]:
    amount = record.amount or ZERO
    if record.status == "paid":
        balance = ZERO
    elif record.balance_due is None:
        balance = amount
    else:
        balance = record.balance_due
    paid = max(amount - balance, ZERO)
    return {
        "id": record.id,
        "category": record.get_category_display() if record.category else "",
        "description": record.description or record.get_category_display() or "Fee",
        "total": amount,
        "paid": paid,
        "balance": balance,
        "status": record.status,
        "percent_paid": percentage(paid, amount),
        "due_date": record.due_date,
    }


def fee_statement(student) -> Dict[str, Any]:
    """Fee lines grouped by term, newest term first, plus payment history."""
    terms: Dict[Tuple[str, int], Dict[str, Any]] = {}
    records = FeeRecord.objects.filter(student=student).order_by(
        "-academic_year", "-semester", "id"
    )
    for record in records:
        key = (record.academic_year, record.semester)
        term = terms.setdefault(
            key,
            {
                "academic_year": record.academic_year,
                "semester": record.semester,
                "lines": [],
                "total": ZERO,
                "paid": ZERO,
                "balance": ZERO,
            },
        )
        line = _line(record)
        term["lines"].append(line)
        term["total"] += line["total"]
        term["paid"] += line["paid"]
        term["balance"] += line["balance"]

    summaries: List[Dict[str, Any]] = []
    for term in terms.values():
        term["percent_paid"] = percentage(term["paid"], term["total"])
        term["balance_label"] = format_money(term["balance"])
        summaries.append(term)

    payments = [
        {
            "date": p.paid_at,
            "description": p.description,
            "amount": p.amount,
            "method": p.method,
            "receipt": p.receipt_number,
        }
        for p in Payment.objects.filter(student=student).order_by("-paid_at", "-id")
    ]
    outstanding = sum((t["balance"] for t in summaries), ZERO)
    return {
        "terms": summaries,
        "payments": payments,
        "outstanding": outstanding,
        "outstanding_label": format_money(outstanding),
    }
