from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Field, SQLModel, Session, create_engine, select

from . import config


class Family(SQLModel, table=True):
    __tablename__ = "family_fam"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)


class ListOption(SQLModel, table=True):
    """One option of a configurable list; list 1 holds person classifications."""

    __tablename__ = "list_lst"

    list_id: int = Field(primary_key=True)
    option_id: int = Field(primary_key=True)
    option_name: str


class Person(SQLModel, table=True):
    __tablename__ = "person_per"

    id: Optional[int] = Field(default=None, primary_key=True)
    fam_id: Optional[int] = Field(default=None, foreign_key="family_fam.id", index=True)
    first_name: str
    last_name: str
    cls_id: int = 0


class Pledge(SQLModel, table=True):
    __tablename__ = "pledge_plg"

    id: Optional[int] = Field(default=None, primary_key=True)
    fam_id: int = Field(foreign_key="family_fam.id", index=True)
    pledge_date: date
    amount: float = 0.0
    pledge_or_payment: str = config.PAYMENT


class SystemSetting(SQLModel, table=True):
    __tablename__ = "config_cfg"

    name: str = Field(primary_key=True)
    value: str


engine = create_engine(f"sqlite:///{config.DB_PATH}")


def reset_engine() -> None:
    global engine
    engine = create_engine(f"sqlite:///{config.DB_PATH}")


def init_db() -> None:
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    return Session(engine, expire_on_commit=False)


def get_setting(session: Session, name: str) -> str:
    row = session.get(SystemSetting, name)
    if row is not None:
        return row.value
    if name not in config.SYSTEM_CONFIG_DEFAULTS:
        raise KeyError(f"Unknown system setting: {name}")
    return config.SYSTEM_CONFIG_DEFAULTS[name]


def set_setting(session: Session, name: str, value: str) -> None:
    row = session.get(SystemSetting, name)
    if row is None:
        row = SystemSetting(name=name, value=str(value))
    else:
        row.value = str(value)
    session.add(row)
    session.commit()


def list_settings(session: Session) -> dict[str, str]:
    settings = dict(config.SYSTEM_CONFIG_DEFAULTS)
    for row in session.exec(select(SystemSetting)):
        settings[row.name] = row.value
    return settings
