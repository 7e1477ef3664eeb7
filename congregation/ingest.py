from __future__ import annotations

import csv
import logging
from datetime import date
from pathlib import Path
from typing import Dict, List

from sqlmodel import select

from . import config
from .models import Family, ListOption, Person, Pledge, get_session, init_db

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"family", "first_name", "last_name", "classification"}

# Classification options shipped with a fresh install; ids 6 and 7 never vote.
DEFAULT_CLASSIFICATIONS: Dict[int, str] = {
    1: "Member",
    2: "Regular Attender",
    3: "Guest",
    5: "Non-Attender",
    6: "Non-Attender (staff)",
    7: "Deceased",
}


def load_rows(csv_path: Path) -> List[dict]:
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")
    with csv_path.open("r", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            raise ValueError("CSV has no header")
        missing = REQUIRED_COLUMNS - set(reader.fieldnames)
        if missing:
            raise ValueError(f"CSV missing columns: {', '.join(sorted(missing))}")
        rows = [row for row in reader if any((value or "").strip() for value in row.values())]
    if not rows:
        raise ValueError("CSV has no data rows")
    return rows


def ensure_classifications() -> Dict[str, int]:
    """Seed the classification list if empty and return name -> option id."""
    init_db()
    with get_session() as session:
        statement = select(ListOption).where(ListOption.list_id == config.CLASSIFICATION_LIST_ID)
        options = list(session.exec(statement))
        if not options:
            options = [
                ListOption(list_id=config.CLASSIFICATION_LIST_ID, option_id=option_id, option_name=name)
                for option_id, name in DEFAULT_CLASSIFICATIONS.items()
            ]
            session.add_all(options)
            session.commit()
        return {option.option_name: option.option_id for option in options}


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid payment date: {value}") from exc


def ingest_members(csv_path: Path) -> List[Family]:
    """
    Import families and people from a CSV export.

    One row per person. An optional ``last_payment`` column (ISO date) records
    a payment for the person's family on that day.
    """
    rows = load_rows(csv_path)
    class_ids = ensure_classifications()
    families: Dict[str, Family] = {}
    with get_session() as session:
        for row in rows:
            family_name = row["family"].strip()
            first = row["first_name"].strip()
            last = row["last_name"].strip()
            classification = row["classification"].strip()
            if not family_name or not first:
                raise ValueError("CSV rows must include family and first_name")
            if classification not in class_ids:
                raise ValueError(f"Unknown classification: {classification}")

            family = families.get(family_name)
            if family is None:
                family = Family(name=family_name)
                session.add(family)
                session.flush()
                families[family_name] = family

            session.add(Person(fam_id=family.id, first_name=first, last_name=last, cls_id=class_ids[classification]))
            paid_on = (row.get("last_payment") or "").strip()
            if paid_on:
                session.add(Pledge(fam_id=family.id, pledge_date=_parse_date(paid_on), pledge_or_payment=config.PAYMENT))
        session.commit()
    logger.info("Imported %s rows into %s families", len(rows), len(families))
    return list(families.values())
