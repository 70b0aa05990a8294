"""
Table definitions for the OAuth2 store

Table names are configurable, so tables are built per store instance on
their own MetaData instead of on a shared declarative base.
"""
from sqlalchemy import (
    BigInteger, Column, Integer, MetaData, SmallInteger, String, Table, Text
)

IDENTIFIER_LENGTH = 512


def build_token_table(name: str, metadata: MetaData) -> Table:
    """OAuth token records keyed by code, access and refresh"""
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("expired_at", BigInteger, nullable=False, index=True),
        Column("code", String(IDENTIFIER_LENGTH), nullable=False, default="", index=True),
        Column("access", String(IDENTIFIER_LENGTH), nullable=False, default="", index=True),
        Column("refresh", String(IDENTIFIER_LENGTH), nullable=False, default="", index=True),
        # Number of identifiers not yet revoked; zero marks the row reclaimable
        Column("live_keys", SmallInteger, nullable=False),
        Column("data", Text, nullable=False),
    )


def build_client_table(name: str, metadata: MetaData) -> Table:
    """OAuth client credentials"""
    return Table(
        name,
        metadata,
        Column("id", String(255), primary_key=True),
        Column("secret", String(IDENTIFIER_LENGTH), nullable=False, default=""),
        Column("domain", String(IDENTIFIER_LENGTH), nullable=False, default=""),
        Column("data", Text, nullable=False),
    )
