from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Iterator, Optional, Tuple

from sqlalchemy import and_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from ..config import (
    CLASSIFICATION_LIST_ID,
    MEMBER_CLASSIFICATION,
    NON_VOTING_CLASS_IDS,
    PAYMENT,
    REPORT_HEADING_GAP,
    REPORT_MEMBER_INDENT,
    REPORT_TOP_Y,
)
from ..models import Family, ListOption, Person, Pledge, list_settings
from .cursor import PageWriter, ReportCursor, maybe_break, write_line
from .fiscal import donation_window, fiscal_year_label
from .render_pdf import open_pdf

logger = logging.getLogger(__name__)

TOTAL_LABEL = "Number of Voting Members"


class DataAccessError(RuntimeError):
    """A record fetch failed while generating a report. Never retried."""


@dataclass(frozen=True)
class Member:
    first_name: str
    last_name: str
    classification: str = MEMBER_CLASSIFICATION

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class VotingFamily:
    id: int
    name: str
    members: Tuple[Member, ...] = ()


@dataclass(frozen=True)
class VotingMemberFilter:
    fiscal_year_id: int
    required_donation_years: int = 0


@dataclass(frozen=True)
class ReportOutput:
    content: bytes
    filename: str
    as_attachment: bool
    member_count: int
    page_count: int


def _fetch_all(session: Session, statement, what: str) -> list:
    try:
        return list(session.exec(statement).all())
    except SQLAlchemyError as exc:
        raise DataAccessError(f"Could not load {what}") from exc


def _has_payment_between(session: Session, fam_id: int, start: date, end: date) -> bool:
    statement = select(func.count(Pledge.id)).where(
        Pledge.fam_id == fam_id,
        Pledge.pledge_or_payment == PAYMENT,
        Pledge.pledge_date >= start,
        Pledge.pledge_date < end,
    )
    rows = _fetch_all(session, statement, f"payments for family {fam_id}")
    return bool(rows) and rows[0] > 0


def _voting_members(session: Session, fam_id: int) -> Tuple[Member, ...]:
    statement = (
        select(Person.first_name, Person.last_name, ListOption.option_name)
        .join(
            ListOption,
            and_(
                Person.cls_id == ListOption.option_id,
                ListOption.list_id == CLASSIFICATION_LIST_ID,
            ),
        )
        .where(
            Person.fam_id == fam_id,
            ListOption.option_name == MEMBER_CLASSIFICATION,
            col(Person.cls_id).not_in(NON_VOTING_CLASS_IDS),
        )
        .order_by(Person.id)
    )
    rows = _fetch_all(session, statement, f"members of family {fam_id}")
    return tuple(Member(first, last, cls_name) for first, last, cls_name in rows)


def select_voting_families(
    session: Session,
    voting_filter: VotingMemberFilter,
    fy_month: int,
) -> Iterator[VotingFamily]:
    """
    Yield families in name order, each with its voting members only.

    With ``required_donation_years > 0`` a family must also have at least one
    payment inside the donation window to appear at all.
    """
    window: Optional[Tuple[date, date]] = None
    if voting_filter.required_donation_years > 0:
        window = donation_window(
            voting_filter.fiscal_year_id,
            voting_filter.required_donation_years,
            fy_month,
        )
        logger.info("Donation window for FY %s: %s to %s", voting_filter.fiscal_year_id, *window)

    families = _fetch_all(session, select(Family).order_by(Family.name), "families")
    for family in families:
        if window is not None and not _has_payment_between(session, family.id, *window):
            continue
        yield VotingFamily(family.id, family.name, _voting_members(session, family.id))


def write_voting_members(
    writer: PageWriter,
    families: Iterable[VotingFamily],
    left_x: float,
    cursor: Optional[ReportCursor] = None,
) -> Tuple[int, ReportCursor]:
    if cursor is None:
        cursor = ReportCursor(y=REPORT_TOP_Y + REPORT_HEADING_GAP)
    count = 0
    for family in families:
        # The family name sits on the same row as its first member.
        cursor = write_line(writer, cursor, family.name, left_x, advance=False)
        if not family.members:
            cursor = cursor.advance()
        for member in family.members:
            cursor = write_line(writer, cursor, member.full_name, left_x + REPORT_MEMBER_INDENT)
            cursor = maybe_break(writer, cursor)
            count += 1
        cursor = maybe_break(writer, cursor)

    cursor = cursor.advance()
    cursor = write_line(writer, cursor, f"{TOTAL_LABEL}: {count}", left_x)
    return count, cursor


def report_filename(now: datetime, date_format: str) -> str:
    return f"VotingMembers{now.strftime(date_format)}.pdf"


def build_voting_members_report(
    session: Session,
    voting_filter: VotingMemberFilter,
    now: Optional[datetime] = None,
) -> ReportOutput:
    try:
        settings = list_settings(session)
    except SQLAlchemyError as exc:
        raise DataAccessError("Could not load system settings") from exc
    fy_month = int(settings["iFYMonth"])
    left_x = float(settings["leftX"])
    heading = f"Voting members {fiscal_year_label(voting_filter.fiscal_year_id, fy_month)}"

    buffer, writer = open_pdf(settings["sPaperFormat"], heading)
    writer.write_at(left_x, REPORT_TOP_Y, heading)
    families = select_voting_families(session, voting_filter, fy_month)
    count, _ = write_voting_members(writer, families, left_x)
    writer.finish()

    logger.info(
        "Voting members report FY %s: %s members on %s pages",
        voting_filter.fiscal_year_id,
        count,
        writer.page_count,
    )
    return ReportOutput(
        content=buffer.getvalue(),
        filename=report_filename(now or datetime.now(), settings["sDateFilenameFormat"]),
        as_attachment=int(settings["iPDFOutputType"]) == 1,
        member_count=count,
        page_count=writer.page_count,
    )
