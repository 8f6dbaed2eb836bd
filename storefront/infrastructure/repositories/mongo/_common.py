"""
Helpers compartidos por los repositorios Mongo.

- run_store_op: centraliza logging + traducción PyMongoError -> DatabaseError.
- address_to_doc / address_from_doc: mapping del sub-documento de dirección.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, TypeVar

from pymongo.errors import PyMongoError

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....identity.users import Address

T = TypeVar("T")


def run_store_op(
    op: Callable[[], T], *, log_msg: str, log_extra: dict[str, object]
) -> T:
    try:
        return op()
    except PyMongoError as exc:
        logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
        raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc


def address_to_doc(address: Address | None) -> dict[str, Any] | None:
    if address is None:
        return None
    return {
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "zip_code": address.zip_code,
        "country": address.country,
    }


def address_from_doc(doc: Mapping[str, Any] | None) -> Address | None:
    if not doc:
        return None
    return Address(
        street=doc.get("street"),
        city=doc.get("city"),
        state=doc.get("state"),
        zip_code=doc.get("zip_code"),
        country=doc.get("country"),
    )
