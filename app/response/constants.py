"""Status code enumerations and the message catalog registry."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from enum import IntEnum
from functools import lru_cache
from types import MappingProxyType

from app.core.exceptions import MessageKeyNotFound
from app.core.exceptions import RegistryConfigurationError


class SuccessCode(IntEnum):
    OK = 1000
    USER_GET = 1100
    USER_LIST = 1101
    USER_CREATE = 1102
    USER_UPDATE = 1103
    USER_DELETE = 1104


class ErrorCode(IntEnum):
    GENERAL_ERROR = 5000
    VALIDATION_FAILED = 5001
    NOT_FOUND = 5002
    USER_NOT_FOUND = 5100
    USER_EXIST = 5101
    USER_EMAIL_EXIST = 5102
    USER_MOBILE_NUMBER_EXIST = 5103
    USER_ROLE_NOT_FOUND = 5104


class StatusKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class MessageCatalogEntry:
    """One status code bound to its localization message key."""

    kind: StatusKind
    status_code: int
    status: str
    message_key: str


def _entry(code: SuccessCode | ErrorCode, message_key: str) -> MessageCatalogEntry:
    kind = StatusKind.SUCCESS if isinstance(code, SuccessCode) else StatusKind.ERROR
    return MessageCatalogEntry(kind=kind, status_code=int(code), status=code.name, message_key=message_key)


MESSAGE_CATALOG: tuple[MessageCatalogEntry, ...] = (
    _entry(SuccessCode.OK, "response.success.ok"),
    _entry(SuccessCode.USER_GET, "user.get.success"),
    _entry(SuccessCode.USER_LIST, "user.findAll.success"),
    _entry(SuccessCode.USER_CREATE, "user.create.success"),
    _entry(SuccessCode.USER_UPDATE, "user.update.success"),
    _entry(SuccessCode.USER_DELETE, "user.delete.success"),
    _entry(ErrorCode.GENERAL_ERROR, "response.error.general"),
    _entry(ErrorCode.VALIDATION_FAILED, "request.validationError"),
    _entry(ErrorCode.NOT_FOUND, "response.error.notFound"),
    _entry(ErrorCode.USER_NOT_FOUND, "user.error.notFound"),
    _entry(ErrorCode.USER_EXIST, "user.error.exist"),
    _entry(ErrorCode.USER_EMAIL_EXIST, "user.error.emailExist"),
    _entry(ErrorCode.USER_MOBILE_NUMBER_EXIST, "user.error.mobileNumberExist"),
    _entry(ErrorCode.USER_ROLE_NOT_FOUND, "user.error.roleNotFound"),
)


class StatusCodeRegistry:
    """Read-only lookup from status code to catalog entry.

    The two enumerations are checked for overlapping integer values and the
    catalog is checked for exactly one entry per declared code when the
    registry is built, so a bad table fails at startup rather than on the
    first request that happens to hit it.
    """

    def __init__(
        self,
        entries: Iterable[MessageCatalogEntry],
        *,
        success_codes: type[IntEnum] = SuccessCode,
        error_codes: type[IntEnum] = ErrorCode,
    ) -> None:
        self._success_codes = success_codes
        self._error_codes = error_codes

        declared: dict[int, StatusKind] = {int(code): StatusKind.SUCCESS for code in success_codes}
        for code in error_codes:
            if int(code) in declared:
                raise RegistryConfigurationError(
                    f"Status code {int(code)} is declared as both success and error"
                )
            declared[int(code)] = StatusKind.ERROR

        table: dict[int, MessageCatalogEntry] = {}
        for entry in entries:
            kind = declared.get(entry.status_code)
            if kind is None:
                raise RegistryConfigurationError(
                    f"Catalog entry {entry.status!r} uses undeclared status code {entry.status_code}"
                )
            if kind is not entry.kind:
                raise RegistryConfigurationError(
                    f"Catalog entry {entry.status!r} is tagged {entry.kind.value} but code "
                    f"{entry.status_code} is a {kind.value} code"
                )
            if entry.status_code in table:
                raise RegistryConfigurationError(f"Duplicate catalog entry for status code {entry.status_code}")
            table[entry.status_code] = entry

        missing = sorted(set(declared) - set(table))
        if missing:
            raise RegistryConfigurationError(f"Status codes without catalog entry: {missing}")

        self._table = MappingProxyType(table)

    def lookup(self, code: int) -> MessageCatalogEntry:
        """Return the catalog entry for ``code`` or raise ``MessageKeyNotFound``."""
        if isinstance(code, bool) or not isinstance(code, int):
            raise MessageKeyNotFound(code)
        entry = self._table.get(int(code))
        if entry is None:
            raise MessageKeyNotFound(code)
        return entry

    def kind_of(self, code: int) -> StatusKind:
        return self.lookup(code).kind

    def entries(self) -> tuple[MessageCatalogEntry, ...]:
        return tuple(self._table.values())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, int) and not isinstance(code, bool) and int(code) in self._table

    def __len__(self) -> int:
        return len(self._table)


@lru_cache(maxsize=1)
def get_status_registry() -> StatusCodeRegistry:
    """Build the process-wide status code registry."""
    return StatusCodeRegistry(MESSAGE_CATALOG)
