"""Global enums — stored as their string value in the database."""

from enum import Enum


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"
