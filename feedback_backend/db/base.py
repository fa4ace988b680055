"""Declarative base shared by all ORM models."""

from sqlalchemy import Text
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Unbounded text. MySQL's plain TEXT stops at 64 KiB.
LONG_TEXT = Text().with_variant(mysql.LONGTEXT(), "mysql")
