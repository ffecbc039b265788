from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional
import itertools
import uuid


class PaymentStatus(str, Enum):
    UPCOMING = "upcoming"
    OVERDUE = "overdue"
    COMPLETED = "completed"
    DELETED = "deleted"


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    builtin_icon: Optional[str] = None


@dataclass(frozen=True)
class Payment:
    id: str
    title: str
    amount: float
    due_date: date
    status: PaymentStatus = PaymentStatus.UPCOMING
    category_id: Optional[str] = None
    series_id: Optional[str] = None   # set when generated by a recurring series

    def amount_label(self, currency: str = "₽") -> str:
        return f"{self.amount:,.2f} {currency}".replace(",", " ")

    def status_on(self, today: date) -> PaymentStatus:
        """Upcoming payments past their due date read as overdue."""
        if self.status is PaymentStatus.UPCOMING and self.due_date < today:
            return PaymentStatus.OVERDUE
        return self.status


# --- demo fixtures ------------------------------------------------------------

_CATEGORY_NAMES = [
    ("Housing", "home"), ("Utilities", "bolt"), ("Groceries", "cart"), ("Transport", "car"),
    ("Health", "heart"), ("Education", "book"), ("Subscriptions", "play"), ("Insurance", "shield"),
    ("Phone", "phone"), ("Internet", "wifi"), ("Gifts", "gift"), ("Pets", "paw"),
    ("Travel", "plane"), ("Taxes", "receipt"), ("Loans", "bank"), ("Savings", "piggy"),
    ("Clothes", "shirt"), ("Sports", "ball"), ("Charity", "hand"), ("Other", None),
]

_TITLES = ["Rent", "Electricity", "Water", "Gym", "Streaming", "Mobile plan", "Car loan",
           "Home internet", "Insurance", "Daycare", "Music", "Cloud storage"]


def sample_categories(n: int = 20) -> List[Category]:
    return [Category(id=str(uuid.uuid4()), name=name, builtin_icon=icon)
            for name, icon in _CATEGORY_NAMES[:max(0, n)]]


def sample_payments(n: int = 50, *, start: Optional[date] = None,
                    categories: Optional[List[Category]] = None) -> List[Payment]:
    start = start or date.today()
    cats = itertools.cycle(categories or [None])
    out: List[Payment] = []
    for i in range(max(0, n)):
        cat = next(cats)
        due = start + timedelta(days=(i - 5) * 3)
        status = PaymentStatus.COMPLETED if i % 7 == 3 else PaymentStatus.UPCOMING
        out.append(Payment(
            id=str(uuid.uuid4()),
            title=f"{_TITLES[i % len(_TITLES)]} #{i + 1}",
            amount=round(250.0 + (i * 137.5) % 9000, 2),
            due_date=due,
            status=status,
            category_id=cat.id if cat else None,
        ))
    return out
