"""Typed statement parameters for prepared statement execution.

Each constructor tags the caller's value with its Avatica wire type. Values
are passed through as given; range and format are the caller's concern.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, assert_never

from pydantic import BaseModel, ConfigDict


class ParameterType(StrEnum):
    """Wire type names understood by the Avatica server."""

    STRING = "STRING"
    CHARACTER = "CHARACTER"
    BYTE_STRING = "BYTE_STRING"
    NULL = "NULL"
    PRIMITIVE_BOOLEAN = "PRIMITIVE_BOOLEAN"
    BOOLEAN = "BOOLEAN"
    NUMBER = "NUMBER"
    BIG_DECIMAL = "BIG_DECIMAL"
    PRIMITIVE_BYTE = "PRIMITIVE_BYTE"
    PRIMITIVE_SHORT = "PRIMITIVE_SHORT"
    PRIMITIVE_INT = "PRIMITIVE_INT"
    PRIMITIVE_LONG = "PRIMITIVE_LONG"
    PRIMITIVE_FLOAT = "PRIMITIVE_FLOAT"
    PRIMITIVE_DOUBLE = "PRIMITIVE_DOUBLE"
    BYTE = "BYTE"
    SHORT = "SHORT"
    INT = "INT"
    LONG = "LONG"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    JAVA_SQL_TIME = "JAVA_SQL_TIME"
    JAVA_SQL_DATE = "JAVA_SQL_DATE"
    JAVA_SQL_TIMESTAMP = "JAVA_SQL_TIMESTAMP"
    JAVA_UTIL_DATE = "JAVA_UTIL_DATE"


def coerce_value(param_type: ParameterType, value: Any) -> Any:
    """Coerce a raw value for the given wire type.

    Boolean types keep only an exact True; NULL always sends None.
    """
    match param_type:
        case ParameterType.PRIMITIVE_BOOLEAN | ParameterType.BOOLEAN:
            return value is True
        case ParameterType.NULL:
            return None
        case (
            ParameterType.STRING
            | ParameterType.CHARACTER
            | ParameterType.BYTE_STRING
            | ParameterType.NUMBER
            | ParameterType.BIG_DECIMAL
            | ParameterType.PRIMITIVE_BYTE
            | ParameterType.PRIMITIVE_SHORT
            | ParameterType.PRIMITIVE_INT
            | ParameterType.PRIMITIVE_LONG
            | ParameterType.PRIMITIVE_FLOAT
            | ParameterType.PRIMITIVE_DOUBLE
            | ParameterType.BYTE
            | ParameterType.SHORT
            | ParameterType.INT
            | ParameterType.LONG
            | ParameterType.FLOAT
            | ParameterType.DOUBLE
            | ParameterType.JAVA_SQL_TIME
            | ParameterType.JAVA_SQL_DATE
            | ParameterType.JAVA_SQL_TIMESTAMP
            | ParameterType.JAVA_UTIL_DATE
        ):
            return value
        case _:
            assert_never(param_type)


class StatementParameter(BaseModel):
    """Positional parameter for Connection.execute().

    Use the classmethod constructors rather than building one directly.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: ParameterType
    value: Any = None

    @classmethod
    def of(cls, param_type: ParameterType, value: Any = None) -> StatementParameter:
        return cls(type=param_type, value=coerce_value(param_type, value))

    def to_wire(self) -> dict[str, Any]:
        return {"type": self.type.value, "value": self.value}

    @classmethod
    def string(cls, value: str) -> StatementParameter:
        return cls.of(ParameterType.STRING, value)

    @classmethod
    def char(cls, value: str) -> StatementParameter:
        return cls.of(ParameterType.CHARACTER, value)

    @classmethod
    def encoded(cls, value: str) -> StatementParameter:
        """Pre-encoded byte string (base64 text)."""
        return cls.of(ParameterType.BYTE_STRING, value)

    @classmethod
    def null(cls) -> StatementParameter:
        return cls.of(ParameterType.NULL)

    @classmethod
    def primitive_boolean(cls, value: Any) -> StatementParameter:
        return cls.of(ParameterType.PRIMITIVE_BOOLEAN, value)

    @classmethod
    def boolean(cls, value: Any) -> StatementParameter:
        return cls.of(ParameterType.BOOLEAN, value)

    @classmethod
    def number(cls, value: Any) -> StatementParameter:
        return cls.of(ParameterType.NUMBER, value)

    @classmethod
    def big_decimal(cls, value: Any) -> StatementParameter:
        return cls.of(ParameterType.BIG_DECIMAL, value)

    @classmethod
    def primitive_byte(cls, value: int) -> StatementParameter:
        return cls.of(ParameterType.PRIMITIVE_BYTE, value)

    @classmethod
    def primitive_short(cls, value: int) -> StatementParameter:
        return cls.of(ParameterType.PRIMITIVE_SHORT, value)

    @classmethod
    def primitive_int(cls, value: int) -> StatementParameter:
        return cls.of(ParameterType.PRIMITIVE_INT, value)

    @classmethod
    def primitive_long(cls, value: int) -> StatementParameter:
        return cls.of(ParameterType.PRIMITIVE_LONG, value)

    @classmethod
    def primitive_float(cls, value: float) -> StatementParameter:
        return cls.of(ParameterType.PRIMITIVE_FLOAT, value)

    @classmethod
    def primitive_double(cls, value: float) -> StatementParameter:
        return cls.of(ParameterType.PRIMITIVE_DOUBLE, value)

    @classmethod
    def byte(cls, value: int) -> StatementParameter:
        return cls.of(ParameterType.BYTE, value)

    @classmethod
    def short(cls, value: int) -> StatementParameter:
        return cls.of(ParameterType.SHORT, value)

    @classmethod
    def int_(cls, value: int) -> StatementParameter:
        return cls.of(ParameterType.INT, value)

    @classmethod
    def long(cls, value: int) -> StatementParameter:
        return cls.of(ParameterType.LONG, value)

    @classmethod
    def float_(cls, value: float) -> StatementParameter:
        return cls.of(ParameterType.FLOAT, value)

    @classmethod
    def double(cls, value: float) -> StatementParameter:
        return cls.of(ParameterType.DOUBLE, value)

    @classmethod
    def sql_time(cls, value: int) -> StatementParameter:
        """Milliseconds since midnight."""
        return cls.of(ParameterType.JAVA_SQL_TIME, value)

    @classmethod
    def sql_date(cls, value: int) -> StatementParameter:
        """Days since the epoch."""
        return cls.of(ParameterType.JAVA_SQL_DATE, value)

    @classmethod
    def sql_timestamp(cls, value: int) -> StatementParameter:
        """Milliseconds since the epoch."""
        return cls.of(ParameterType.JAVA_SQL_TIMESTAMP, value)

    @classmethod
    def java_date(cls, value: int) -> StatementParameter:
        """Milliseconds since the epoch."""
        return cls.of(ParameterType.JAVA_UTIL_DATE, value)
