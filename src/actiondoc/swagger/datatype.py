"""Swagger data types of native classes and example values derived from comments.

The table maps a class name to the Swagger ``type``/``format`` pair and to a
converter that turns an ``e.g.`` example found in the field comment into a
value of that type. Date and time classes always have an example: the
comment's value or a fixed default date (2000-01-01) rendered with the
field's ``JsonDatePattern`` or the standard pattern.

Comment examples are recognised in three shapes::

    /** product name e.g. "Dockside Stage" */   -> "Dockside Stage"
    /** product ids e.g. [1, 2, null] */        -> ["1", "2", None]
    /** stock e.g. 30 */                        -> "30"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from actiondoc.exceptions import DefaultValueError
from actiondoc.models import ClassType, TypeDocMeta

_DEFAULT_DATETIME = datetime(2000, 1, 1)

DEFAULT_DATE_PATTERN = "yyyy-MM-dd"
DEFAULT_DATETIME_PATTERN = "yyyy-MM-dd'T'HH:mm:ss.SSS"
DEFAULT_TIME_PATTERN = "HH:mm:ss.SSS"

VOID_TYPE_NAMES = frozenset({"void", "java.lang.Void"})

NATIVE_TYPE_NAMES = frozenset({
    "void",
    "boolean",
    "byte",
    "int",
    "long",
    "float",
    "double",
    "java.lang.Void",
    "java.lang.Byte",
    "java.lang.Boolean",
    "java.lang.Integer",
    "java.lang.Long",
    "java.lang.Float",
    "java.lang.Double",
    "java.lang.String",
    "java.util.Map",
    "byte[]",
    "java.lang.Byte[]",
    "java.util.Date",
    "java.time.LocalDate",
    "java.time.LocalDateTime",
    "java.time.LocalTime",
    "org.lastaflute.web.ruts.multipart.MultipartFormFile",
})
"""Classes documented as leaves: never expanded into definitions."""

Converter = Callable[[TypeDocMeta, Any], Any]


@dataclass(frozen=True)
class SwaggerDataType:
    """A Swagger type/format pair with its example converter."""

    type: str
    format: Optional[str]
    converter: Converter

    def convert(self, meta: TypeDocMeta, value: Any) -> Any:  # noqa: ANN401
        """Convert an example *value* for the property *meta*.

        Raises:
            DefaultValueError: If the value does not fit the type.
        """
        try:
            return self.converter(meta, value)
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise DefaultValueError(
                "Failed to parse the swagger default value in the comment: "
                f"property={meta.name}, type={meta.type.name}, "
                f"comment={meta.comment!r}, value={value!r}"
            ) from exc


# --- Converters ---


def _to_boolean(meta: TypeDocMeta, value: Any) -> Optional[bool]:  # noqa: ANN401
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "t", "1", "yes", "y", "on"):
        return True
    if text in ("false", "f", "0", "no", "n", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _integer(low: int, high: int) -> Converter:
    def convert(meta: TypeDocMeta, value: Any) -> Optional[int]:  # noqa: ANN401
        if value is None:
            return None
        number = int(str(value).strip().replace(",", ""))
        if not low <= number <= high:
            raise ValueError(f"out of range: {number}")
        return number

    return convert


def _to_float(meta: TypeDocMeta, value: Any) -> Optional[float]:  # noqa: ANN401
    if value is None:
        return None
    return float(str(value).strip().replace(",", ""))


def _to_decimal(meta: TypeDocMeta, value: Any) -> Optional[float | int]:  # noqa: ANN401
    if value is None:
        return None
    try:
        number = Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal: {value!r}") from exc
    if number == number.to_integral_value():
        return int(number)
    return float(number)


def _as_is(meta: TypeDocMeta, value: Any) -> Any:  # noqa: ANN401
    return value


def _temporal(standard_pattern: str) -> Converter:
    def convert(meta: TypeDocMeta, value: Any) -> Any:  # noqa: ANN401
        if value is not None:
            return value
        return format_java_pattern(date_pattern_of(meta) or standard_pattern, _DEFAULT_DATETIME)

    return convert


_BYTE = _integer(-128, 127)
_INT = _integer(-(2**31), 2**31 - 1)
_LONG = _integer(-(2**63), 2**63 - 1)

_DATA_TYPES: dict[str, SwaggerDataType] = {
    "boolean": SwaggerDataType("boolean", None, _to_boolean),
    "byte": SwaggerDataType("byte", None, _BYTE),
    "int": SwaggerDataType("integer", "int32", _INT),
    "long": SwaggerDataType("integer", "int64", _LONG),
    "float": SwaggerDataType("integer", "float", _to_float),
    "double": SwaggerDataType("integer", "double", _to_float),
    "java.lang.Boolean": SwaggerDataType("boolean", None, _to_boolean),
    "java.lang.Byte": SwaggerDataType("byte", None, _BYTE),
    "java.lang.Integer": SwaggerDataType("integer", "int32", _INT),
    "java.lang.Long": SwaggerDataType("integer", "int64", _LONG),
    "java.lang.Float": SwaggerDataType("number", "float", _to_float),
    "java.lang.Double": SwaggerDataType("number", "double", _to_float),
    "java.math.BigDecimal": SwaggerDataType("integer", "double", _to_decimal),
    "java.lang.String": SwaggerDataType("string", None, _as_is),
    "byte[]": SwaggerDataType("string", "byte", _as_is),
    "java.lang.Byte[]": SwaggerDataType("string", "byte", _as_is),
    "java.util.Date": SwaggerDataType("string", "date", _temporal(DEFAULT_DATE_PATTERN)),
    "java.time.LocalDate": SwaggerDataType("string", "date", _temporal(DEFAULT_DATE_PATTERN)),
    "java.time.LocalDateTime": SwaggerDataType(
        "string", "date-time", _temporal(DEFAULT_DATETIME_PATTERN)
    ),
    "java.time.LocalTime": SwaggerDataType("string", None, _temporal(DEFAULT_TIME_PATTERN)),
    "org.lastaflute.web.ruts.multipart.MultipartFormFile": SwaggerDataType("file", None, _as_is),
}

# hand-written metadata may use simple names such as "String" or "LocalDate"
_DATA_TYPES_BY_SIMPLE_NAME: dict[str, SwaggerDataType] = {
    name.rsplit(".", 1)[-1]: data_type
    for name, data_type in _DATA_TYPES.items()
    if "." in name
}


def lookup_data_type(cls: Optional[ClassType]) -> Optional[SwaggerDataType]:
    """Return the Swagger data type of *cls*, or ``None`` for non-native classes."""
    if cls is None:
        return None
    found = _DATA_TYPES.get(cls.name)
    if found is None:
        found = _DATA_TYPES_BY_SIMPLE_NAME.get(cls.name)
    return found


def is_native(cls: ClassType) -> bool:
    """Whether *cls* is documented as a leaf type."""
    if cls.name in NATIVE_TYPE_NAMES:
        return True
    return lookup_data_type(cls) is not None


def is_void(cls: Optional[ClassType]) -> bool:
    return cls is not None and (cls.name in VOID_TYPE_NAMES or cls.name == "Void")


# --- Comment examples ---

_EXAMPLE_TOKEN = re.compile(r" e\.g\. ([^ ]+)")


def example_from_comment(comment: Optional[str]) -> Any:  # noqa: ANN401
    """Extract the ``e.g.`` example written in a field comment.

    Returns:
        A string, a list of strings (``None`` for ``null`` elements), or
        ``None`` when the comment has no example.
    """
    if not comment:
        return None
    line = re.sub(r"\r?\n", " ", comment)
    if ' e.g. "' in line:
        rear = line.split(' e.g. "', 1)[1]
        return rear.split('"', 1)[0]
    if " e.g. [" in line:
        rear = line.split(" e.g. [", 1)[1]
        body = rear.split("]", 1)[0]
        return [_unquote(item) for item in re.split(r", *", body)]
    match = _EXAMPLE_TOKEN.search(line)
    if match:
        value = match.group(1)
        return None if value == "null" else value
    return None


def _unquote(item: str) -> Optional[str]:
    if len(item) >= 2 and item.startswith('"') and item.endswith('"'):
        return item[1:-1]
    return None if item == "null" else item


# --- Date patterns ---


def date_pattern_of(meta: TypeDocMeta) -> Optional[str]:
    """Return the ``JsonDatePattern`` value attached to *meta*, if any."""
    for anno in meta.annotations:
        if anno.simple_name == "JsonDatePattern":
            value = anno.get("value")
            if value:
                return str(value)
    return None


_PATTERN_TOKEN = re.compile(r"'[^']*'|y+|M+|d+|H+|h+|m+|s+|S+|a")


def format_java_pattern(pattern: str, moment: datetime) -> str:
    """Render *moment* with a ``DateTimeFormatter``-style *pattern*.

    Supports the letters used by date patterns in practice (``y M d H h m s
    S a``) and quoted literals.
    """

    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        letter = token[0]
        width = len(token)
        if letter == "'":
            return token[1:-1] if width > 2 else "'"
        if letter == "y":
            year = moment.year % 100 if width == 2 else moment.year
            return str(year).zfill(width)
        if letter == "M":
            return str(moment.month).zfill(width)
        if letter == "d":
            return str(moment.day).zfill(width)
        if letter == "H":
            return str(moment.hour).zfill(width)
        if letter == "h":
            return str(moment.hour % 12 or 12).zfill(width)
        if letter == "m":
            return str(moment.minute).zfill(width)
        if letter == "s":
            return str(moment.second).zfill(width)
        if letter == "S":
            return str(moment.microsecond).zfill(6)[:width].ljust(width, "0")
        return "AM" if moment.hour < 12 else "PM"

    return _PATTERN_TOKEN.sub(replace, pattern)
