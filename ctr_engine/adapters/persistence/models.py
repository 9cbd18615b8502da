"""SQLAlchemy table definitions — one row per physical counter key."""

from sqlalchemy import BigInteger, Column, MetaData, String, Table

metadata = MetaData()

COUNTER_KEY_COLUMN = "k"
COUNTER_VALUE_COLUMN = "v"


def counters_table(name: str) -> Table:
    """Return the counters table called *name*, defining it on first use."""
    if name in metadata.tables:
        return metadata.tables[name]
    return Table(
        name,
        metadata,
        Column(COUNTER_KEY_COLUMN, String(512), primary_key=True),
        Column(COUNTER_VALUE_COLUMN, BigInteger, nullable=False, default=0),
    )
