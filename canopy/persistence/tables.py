"""SQLAlchemy table definitions for Canopy."""

from sqlalchemy import BigInteger, Column, MetaData, String, Table, Text

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# SNAPSHOTS TABLE (one row per storage slot)
# ============================================================================
snapshots_table = Table(
    "snapshots",
    metadata,
    Column("key", String(255), primary_key=True),
    Column("data", Text, nullable=False),
    Column("updated_at", BigInteger, nullable=False),  # epoch milliseconds
)
