"""Domain model entities for cashpanel.

These are pure data classes representing business concepts, independent of
database schema and of the fiscal API's wire format. Derived values such as
monthly metrics or fiscal diagnoses are recomputed on demand and never stored.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from cashpanel.utils.amount_parser import parse_brl_amount
from cashpanel.utils.date_parser import parse_br_date


class EntryKind(str, Enum):
    """Direction of a ledger entry."""

    REVENUE = "revenue"
    EXPENSE = "expense"


class EntryStatus(str, Enum):
    """Whether money has already moved for an entry."""

    SETTLED = "settled"
    PENDING = "pending"


class RepetitionMode(str, Enum):
    """How a single draft is expanded into ledger entries."""

    NONE = "none"
    INSTALLMENT = "installment"
    RECURRING = "recurring"


@dataclass(frozen=True)
class Installment:
    """Position of an entry inside an installment series (1-based)."""

    index: int
    total: int


@dataclass(frozen=True)
class LedgerEntry:
    """Ledger entry (transaction) domain entity."""

    id: int
    description: str
    category: str
    kind: EntryKind
    amount: Decimal
    date: date
    status: EntryStatus
    installment: Optional[Installment] = None
    is_recurring: bool = False
    series_id: Optional[str] = None
    expected_amount: Optional[Decimal] = None

    @property
    def is_series(self) -> bool:
        return self.installment is not None or self.is_recurring

    @property
    def series_type(self) -> RepetitionMode:
        if self.installment is not None:
            return RepetitionMode.INSTALLMENT
        if self.is_recurring:
            return RepetitionMode.RECURRING
        return RepetitionMode.NONE

    @property
    def signed_amount(self) -> Decimal:
        """Amount with revenue positive and expense negative."""
        return self.amount if self.kind == EntryKind.REVENUE else -self.amount


@dataclass(frozen=True)
class SeriesRequest:
    """Input of the recurrence expander: one draft plus a repetition mode."""

    description: str
    category: str
    kind: EntryKind
    amount: Decimal
    date: date
    status: EntryStatus = EntryStatus.PENDING
    repetition_mode: RepetitionMode = RepetitionMode.NONE
    count: int = 1


@dataclass(frozen=True)
class MonthlyMetrics:
    """Realized and projected cash figures for one period."""

    realized_balance: Decimal
    pending_receivable: Decimal
    pending_payable: Decimal
    projected_balance: Decimal
    overdue_amount: Decimal
    upcoming_amount: Decimal

    @classmethod
    def zero(cls) -> "MonthlyMetrics":
        return cls(*(Decimal("0"),) * 6)


@dataclass(frozen=True)
class LiquidityForecast:
    """Result of the day-by-day negative balance search."""

    is_projected_negative: bool
    days_until_negative: Optional[int] = None


class GuideStatus(str, Enum):
    """Derived status of a DAS guide."""

    PAID = "paid"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"
    PENDING = "pending"


class DeclarationStatus(str, Enum):
    """Derived status of a DASN annual declaration."""

    FILED = "filed"
    NOT_APPLICABLE = "not-applicable"
    PENDING = "pending"


class FiscalStatus(str, Enum):
    REGULAR = "regular"
    IRREGULAR = "irregular"


@dataclass(frozen=True)
class FiscalGuideRecord:
    """Monthly DAS guide as reported by the fiscal data source.

    Money fields keep the source's Brazilian-formatted strings; use
    ``total_amount`` for arithmetic.
    """

    year: Optional[int]
    period: str
    principal: str
    fine: str
    interest: str
    total: str
    due_date: str
    raw_status: str
    status: GuideStatus

    @property
    def total_amount(self) -> Decimal:
        if not self.total:
            return Decimal("0")
        return parse_brl_amount(self.total)

    @property
    def due(self) -> Optional[date]:
        return parse_br_date(self.due_date)


@dataclass(frozen=True)
class AnnualDeclarationRecord:
    """DASN annual declaration as reported by the fiscal data source."""

    year: Optional[int]
    filed_date: Optional[str]
    raw_status: str
    status: DeclarationStatus


@dataclass(frozen=True)
class FiscalDiagnosis:
    """Normalized fiscal situation of a business."""

    guides: tuple[FiscalGuideRecord, ...]
    declarations: tuple[AnnualDeclarationRecord, ...]
    total_estimated_debt: Decimal
    pending_declaration_count: int
    overall_status: FiscalStatus
    is_estimated: bool
    estimated_months: dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible primitives (for caching)."""
        return {
            "guides": [
                {
                    "year": g.year,
                    "period": g.period,
                    "principal": g.principal,
                    "fine": g.fine,
                    "interest": g.interest,
                    "total": g.total,
                    "due_date": g.due_date,
                    "raw_status": g.raw_status,
                    "status": g.status.value,
                }
                for g in self.guides
            ],
            "declarations": [
                {
                    "year": d.year,
                    "filed_date": d.filed_date,
                    "raw_status": d.raw_status,
                    "status": d.status.value,
                }
                for d in self.declarations
            ],
            "total_estimated_debt": str(self.total_estimated_debt),
            "pending_declaration_count": self.pending_declaration_count,
            "overall_status": self.overall_status.value,
            "is_estimated": self.is_estimated,
            "estimated_months": {str(k): v for k, v in self.estimated_months.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FiscalDiagnosis":
        """Rebuild a diagnosis produced by ``to_dict``."""
        guides = tuple(
            FiscalGuideRecord(
                year=g["year"],
                period=g["period"],
                principal=g["principal"],
                fine=g["fine"],
                interest=g["interest"],
                total=g["total"],
                due_date=g["due_date"],
                raw_status=g["raw_status"],
                status=GuideStatus(g["status"]),
            )
            for g in data["guides"]
        )
        declarations = tuple(
            AnnualDeclarationRecord(
                year=d["year"],
                filed_date=d["filed_date"],
                raw_status=d["raw_status"],
                status=DeclarationStatus(d["status"]),
            )
            for d in data["declarations"]
        )
        return cls(
            guides=guides,
            declarations=declarations,
            total_estimated_debt=Decimal(data["total_estimated_debt"]),
            pending_declaration_count=data["pending_declaration_count"],
            overall_status=FiscalStatus(data["overall_status"]),
            is_estimated=data["is_estimated"],
            estimated_months={
                int(k): v for k, v in data.get("estimated_months", {}).items()
            },
        )


class AlertTarget(str, Enum):
    """Logical screen an alert navigates to."""

    FISCAL = "fiscal"
    CALENDAR = "calendar"
    CASHFLOW = "cashflow"
    DASHBOARD = "dashboard"


@dataclass(frozen=True)
class Alert:
    """Actionable dashboard alert."""

    key: str
    title: str
    description: str
    target: AlertTarget
    severity: str


@dataclass(frozen=True)
class PendingCounts:
    """Number of pending items already late and due soon."""

    overdue: int
    upcoming: int
