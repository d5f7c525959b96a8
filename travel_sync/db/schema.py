# travel_sync/db/schema.py

from sqlalchemy import MetaData, Table, Column, Text

metadata = MetaData()

# Layout matches databases written by the previous Node server
users = Table(
    "users",
    metadata,
    Column("user_id", Text, primary_key=True),
    Column("paris_data", Text, nullable=True),
    Column("london_data", Text, nullable=True),
    Column("updated_at", Text, nullable=True),
)
