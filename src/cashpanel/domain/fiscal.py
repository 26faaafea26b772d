"""Fiscal diagnostic normalizer for DAS guides and DASN declarations.

The fiscal data source answers with loosely structured JSON. The payload may
be a list of ``{"sucesso": ..., "resultado": {...}}`` wrappers, a single
wrapper, or the bare result, and the guide/declaration lists may sit under
``dAS.anos``/``dASN.anos`` or a flat ``anos`` key. ``SHAPE_MATCHERS`` are
tried in order until one locates the lists.

Money values arrive as Brazilian-formatted strings ("1.234,56") and due dates
as "dd/mm/yyyy".
"""

import json
import logging
import unicodedata
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional

from cashpanel.domain.entities import (
    AnnualDeclarationRecord,
    DeclarationStatus,
    FiscalDiagnosis,
    FiscalGuideRecord,
    FiscalStatus,
    GuideStatus,
)
from cashpanel.domain.errors import MalformedFiscalPayload, unrecognized_fiscal_payload
from cashpanel.utils.amount_parser import format_brl, parse_brl_amount
from cashpanel.utils.date_parser import parse_br_date

logger = logging.getLogger(__name__)

# Estimated value of one monthly DAS guide when none is on file
AVERAGE_GUIDE_VALUE = Decimal("75.00")

SETTLEMENT_MARKERS = ("liquidado", "pago")

RawLists = tuple[list[Any], list[Any]]


def _strip_accents(text: str) -> str:
    return "".join(
        c for c in unicodedata.normalize("NFKD", text) if not unicodedata.combining(c)
    )


def _anos(node: Any) -> Optional[list[Any]]:
    if isinstance(node, dict) and isinstance(node.get("anos"), list):
        return node["anos"]
    return None


def _match_result(result: Any) -> Optional[RawLists]:
    """Locate the guide and declaration lists inside a bare result object."""
    if not isinstance(result, dict):
        return None
    guides = _anos(result.get("dAS"))
    declarations = _anos(result.get("dASN"))
    if guides is not None or declarations is not None:
        return guides or [], declarations or []
    has_known_keys = "dAS" in result or "dASN" in result or "identificacao" in result
    if has_known_keys and _anos(result) is None:
        return [], []
    return None


def match_wrapper_list(raw: Any) -> Optional[RawLists]:
    """``[{"sucesso": true, "resultado": {...}}]``"""
    if isinstance(raw, list) and raw and isinstance(raw[0], dict) and "resultado" in raw[0]:
        return _match_result(raw[0]["resultado"])
    return None


def match_result_list(raw: Any) -> Optional[RawLists]:
    """``[{"dAS": ..., "dASN": ...}]``"""
    if isinstance(raw, list) and raw:
        return _match_result(raw[0])
    return None


def match_wrapper(raw: Any) -> Optional[RawLists]:
    """``{"sucesso": true, "resultado": {...}}``"""
    if isinstance(raw, dict) and "resultado" in raw:
        return _match_result(raw["resultado"])
    return None


def match_result(raw: Any) -> Optional[RawLists]:
    """``{"dAS": {"anos": [...]}, "dASN": {"anos": [...]}}``"""
    return _match_result(raw)


GUIDE_KEYS = ("principal", "total", "vencimento")
DECLARATION_KEYS = ("dataApresentacao", "status")


def _split_flat_rows(rows: list[Any]) -> RawLists:
    """Split one mixed ``anos`` list into guide rows and declaration rows."""
    guides = []
    declarations = []
    for row in rows:
        if not isinstance(row, dict):
            # parse_guide reports it
            guides.append(row)
        elif any(key in row for key in GUIDE_KEYS):
            guides.append(row)
        elif any(key in row for key in DECLARATION_KEYS):
            declarations.append(row)
        else:
            logger.warning("Skipping fiscal row with neither guide nor declaration fields: %r", row)
    return guides, declarations


def match_flat_years(raw: Any) -> Optional[RawLists]:
    """``{"anos": [...]}`` holding guides and declarations in one list.

    The list is also accepted when wrapped like the other shapes:
    ``[{"resultado": {"anos": [...]}}]``, ``[{"anos": [...]}]`` and
    ``{"resultado": {"anos": [...]}}``.
    """
    if isinstance(raw, list) and raw:
        raw = raw[0]
    if isinstance(raw, dict):
        node = raw.get("resultado", raw)
        rows = _anos(node)
        if rows is not None:
            return _split_flat_rows(rows)
    return None


SHAPE_MATCHERS: tuple[Callable[[Any], Optional[RawLists]], ...] = (
    match_wrapper_list,
    match_result_list,
    match_wrapper,
    match_result,
    match_flat_years,
)


def locate_lists(raw: Any) -> RawLists:
    """Run the shape matchers in order and return the first match.

    Raises:
        MalformedFiscalPayload: If no matcher recognizes the payload
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise MalformedFiscalPayload(f"Fiscal payload is not valid JSON: {e}")

    for matcher in SHAPE_MATCHERS:
        found = matcher(raw)
        if found is not None:
            logger.debug("Fiscal payload matched by %s", matcher.__name__)
            return found

    raise MalformedFiscalPayload(unrecognized_fiscal_payload(type(raw).__name__))


def _text(row: dict[str, Any], key: str) -> str:
    value = row.get(key)
    return "" if value is None else str(value).strip()


def _money(row: dict[str, Any], key: str) -> str:
    """Money field as Brazilian-formatted text.

    Numeric JSON values are rendered as "1234,56" so they parse like the
    source's strings.
    """
    value = row.get(key)
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return format_brl(Decimal(str(value)), symbol=False)
    return _text(row, key)


def _is_zero_or_empty(amount_text: str) -> bool:
    if not amount_text:
        return True
    try:
        return parse_brl_amount(amount_text) == 0
    except ValueError:
        return False


def _year(value: Any) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def guide_status(raw_status: str, due_date: str, reference_date: date) -> GuideStatus:
    """Derive a guide status from its source situation and due date."""
    situation = raw_status.lower()
    if any(marker in situation for marker in SETTLEMENT_MARKERS):
        return GuideStatus.PAID
    due = parse_br_date(due_date)
    if due is None:
        return GuideStatus.PENDING
    return GuideStatus.OVERDUE if due < reference_date else GuideStatus.UPCOMING


def declaration_status(raw_status: str, filed_date: Optional[str]) -> DeclarationStatus:
    """Derive a declaration status from its source status and filing date."""
    normalized = _strip_accents(raw_status).lower()
    if filed_date or normalized == "regular":
        return DeclarationStatus.FILED
    if "nao optante" in normalized:
        return DeclarationStatus.NOT_APPLICABLE
    return DeclarationStatus.PENDING


def parse_guide(row: Any, reference_date: date) -> Optional[FiscalGuideRecord]:
    """Build a guide record, or None for placeholder and malformed rows."""
    if not isinstance(row, dict):
        logger.warning("Skipping guide row that is not an object: %r", row)
        return None

    principal = _money(row, "principal")
    total = _money(row, "total")
    if _is_zero_or_empty(principal) and _is_zero_or_empty(total):
        return None

    if total:
        try:
            parse_brl_amount(total)
        except ValueError:
            logger.warning("Skipping guide with unparsable total %r", total)
            return None

    raw_status = _text(row, "situacao")
    due_date = _text(row, "vencimento")
    return FiscalGuideRecord(
        year=_year(row.get("ano")),
        period=_text(row, "periodo"),
        principal=principal,
        fine=_money(row, "multa"),
        interest=_money(row, "juros"),
        total=total,
        due_date=due_date,
        raw_status=raw_status,
        status=guide_status(raw_status, due_date, reference_date),
    )


def parse_declaration(row: Any) -> Optional[AnnualDeclarationRecord]:
    if not isinstance(row, dict):
        logger.warning("Skipping declaration row that is not an object: %r", row)
        return None
    filed_date = _text(row, "dataApresentacao") or None
    raw_status = _text(row, "status")
    return AnnualDeclarationRecord(
        year=_year(row.get("ano")),
        filed_date=filed_date,
        raw_status=raw_status,
        status=declaration_status(raw_status, filed_date),
    )


def sort_guides(guides: list[FiscalGuideRecord]) -> list[FiscalGuideRecord]:
    """Most recent due date first.

    Guides without a parsable due date keep their position; the dated guides
    are sorted among the remaining slots.
    """
    dated = [g for g in guides if g.due is not None]
    dated.sort(key=lambda g: g.due, reverse=True)
    ordered = iter(dated)
    return [next(ordered) if g.due is not None else g for g in guides]


def estimation_years(
    guides: list[FiscalGuideRecord],
    declarations: list[AnnualDeclarationRecord],
    current_year: int,
) -> list[int]:
    """Years whose missing guides should be estimated."""
    guide_years = {g.year for g in guides}
    pending_years = {
        d.year
        for d in declarations
        if d.status == DeclarationStatus.PENDING and d.year is not None
    }

    years = set()
    for year in sorted(pending_years):
        if year >= current_year:
            continue
        if year in guide_years:
            logger.info(
                "Pending declaration for %s but guides are on file; not estimating",
                year,
            )
            continue
        years.add(year)

    # Current-year guides are withheld until last year's declaration is filed
    if current_year - 1 in pending_years and current_year not in guide_years:
        years.add(current_year)

    return sorted(years)


def normalize(
    raw: Any,
    reference_date: date,
    *,
    average_guide_value: Decimal = AVERAGE_GUIDE_VALUE,
) -> FiscalDiagnosis:
    """Normalize a fiscal payload into a FiscalDiagnosis.

    Args:
        raw: Decoded JSON (or JSON text) from the fiscal data source
        reference_date: Date guides are compared against ("today")
        average_guide_value: Value assumed for each estimated missing guide

    Returns:
        FiscalDiagnosis

    Raises:
        MalformedFiscalPayload: If no guide/declaration structure is found
    """
    raw_guides, raw_declarations = locate_lists(raw)
    logger.info(
        "Fiscal payload has %d guide rows and %d declaration rows",
        len(raw_guides),
        len(raw_declarations),
    )

    guides = [g for g in (parse_guide(r, reference_date) for r in raw_guides) if g]
    guides = sort_guides(guides)
    declarations = [d for d in (parse_declaration(r) for r in raw_declarations) if d]

    total_debt = sum(
        (g.total_amount for g in guides if g.status == GuideStatus.OVERDUE),
        Decimal("0"),
    )
    pending_count = sum(1 for d in declarations if d.status == DeclarationStatus.PENDING)

    current_year = reference_date.year
    estimated_months: dict[int, int] = {}
    for year in estimation_years(guides, declarations, current_year):
        if year < current_year:
            months = 12
        else:
            on_file = sum(1 for g in guides if g.year == year)
            months = max(0, reference_date.month - on_file)
        if months > 0:
            estimated_months[year] = months
            total_debt += average_guide_value * months
            logger.info("Estimated %d missing guide(s) for %s", months, year)

    irregular = total_debt > 0 or pending_count > 0
    return FiscalDiagnosis(
        guides=tuple(guides),
        declarations=tuple(declarations),
        total_estimated_debt=total_debt,
        pending_declaration_count=pending_count,
        overall_status=FiscalStatus.IRREGULAR if irregular else FiscalStatus.REGULAR,
        is_estimated=bool(estimated_months),
        estimated_months=estimated_months,
    )


def upcoming_guides(
    diagnosis: FiscalDiagnosis, reference_date: date, window_days: int
) -> list[FiscalGuideRecord]:
    """Upcoming guides due within ``window_days`` of the reference date."""
    result = []
    for guide in diagnosis.guides:
        if guide.status != GuideStatus.UPCOMING or guide.due is None:
            continue
        if 0 <= (guide.due - reference_date).days <= window_days:
            result.append(guide)
    return result
