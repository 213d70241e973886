"""SQLAlchemy table definitions for the dashboard database."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    MetaData,
    Numeric,
    String,
    Table,
    insert,
    update,
)

from src.application.ports.database import DatabaseEnginePort

metadata = MetaData()

MONEY = Numeric(14, 2, asdecimal=True)

clients_table = Table(
    "clients",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("external_id", String(128), index=True),
    Column("name", String(255), nullable=False),
    Column("balance", MONEY, nullable=False, default=0),
    Column("active", Boolean, nullable=False, default=True),
    Column("updated_at", DateTime(timezone=True)),
)

investments_table = Table(
    "investments",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("description", String(255), nullable=False, default=""),
    Column("amount", MONEY, nullable=False),
    Column("effective_date", Date, nullable=False, index=True),
    Column("created_at", DateTime(timezone=True)),
)

payments_table = Table(
    "payments",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("client_id", String(64), ForeignKey("clients.id")),
    Column("amount", MONEY, nullable=False),
    Column("effective_date", Date, nullable=False, index=True),
    Column("ingested_at", DateTime(timezone=True)),
)

sales_table = Table(
    "sales",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("client_id", String(64), ForeignKey("clients.id")),
    Column("amount", MONEY, nullable=False),
    Column("effective_date", Date, nullable=False, index=True),
    Column("ingested_at", DateTime(timezone=True)),
)

expenses_table = Table(
    "expenses",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("description", String(255), nullable=False, default=""),
    Column("amount", MONEY, nullable=False),
    Column("effective_date", Date, nullable=False, index=True),
    Column("confirmed", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True)),
)


def upsert_row(conn, table: Table, values: dict) -> None:
    """Update the row sharing ``values["id"]`` or insert it."""
    row_id = values["id"]
    changes = {key: value for key, value in values.items() if key != "id"}
    result = conn.execute(
        update(table).where(table.c.id == row_id).values(**changes)
    )
    if result.rowcount == 0:
        conn.execute(insert(table).values(**values))


def prepare_schema(db_port: DatabaseEnginePort) -> None:
    """Create every dashboard table that does not exist yet."""
    engine = db_port.get_engine()
    metadata.create_all(engine)


__all__ = [
    "metadata",
    "clients_table",
    "investments_table",
    "payments_table",
    "sales_table",
    "expenses_table",
    "prepare_schema",
    "upsert_row",
]
