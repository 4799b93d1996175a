"""Storage of companies owned by users."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass, field
from uuid import UUID


class CompanyRepositoryError(Exception):
    """A company could not be stored or retrieved."""

    message = "Company repository error"

    def __str__(self) -> str:
        return self.message


class CompanyNotFound(CompanyRepositoryError):
    message = "Company not found"


class CompanyInternalError(CompanyRepositoryError):
    message = "Internal server error"


class CompanyConflict(CompanyRepositoryError):
    message = "Duplicate company"


class CompanyUuidError(CompanyRepositoryError):
    message = "Uuid convert error"


class CompanyDeleteFailed(CompanyRepositoryError):
    message = "Delete failed"


class CompanyUpdateFailed(CompanyRepositoryError):
    message = "Update failed"


@dataclass
class CreateCompanyRequest:
    """Fields for a new company."""

    name: str
    description: str


@dataclass
class UpdateCompanyRequest:
    """Fields to change on a company; None leaves a field as it is."""

    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class CreatedId:
    """The identifier of a newly created record."""

    id_created: UUID


@dataclass(frozen=True)
class CompanyEntry:
    """A company as shown to its owner."""

    id: UUID
    name: str
    description: str
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class CompanyList:
    """All companies of one owner."""

    total: int
    companies: list[CompanyEntry] = field(default_factory=list)


@dataclass(frozen=True)
class CompanyUpdate:
    """A company after an update."""

    id: UUID
    name: str
    description: str
    updated_at: str


_SELECT_COLUMNS = "id, name, description, created_at, updated_at"


def _to_uuid(raw: bytes) -> UUID:
    try:
        return UUID(bytes=bytes(raw))
    except (TypeError, ValueError) as exc:
        raise CompanyUuidError() from exc


def _text(value: object) -> str:
    return "" if value is None else str(value)


def _entry(row) -> CompanyEntry:
    raw_id, name, description, created_at, updated_at = tuple(row)
    return CompanyEntry(
        id=_to_uuid(raw_id),
        name=name,
        description=description,
        created_at=_text(created_at),
        updated_at=_text(updated_at),
    )


class CompanyRepository:
    """Companies stored in a database connection, scoped by owner."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def _find(self, user_id: UUID, company_id: UUID):
        try:
            return self._connection.execute(
                f'SELECT {_SELECT_COLUMNS} FROM "Company" WHERE id = ? AND user_id = ?',
                (company_id.bytes, user_id.bytes),
            ).fetchone()
        except sqlite3.Error as exc:
            raise CompanyInternalError() from exc

    def create_company(self, user_id: UUID, company_data: CreateCompanyRequest) -> CreatedId:
        """Store a new company owned by the user and return its id."""
        company_id = uuid.uuid4()
        try:
            with self._connection:
                self._connection.execute(
                    'INSERT INTO "Company" (id, name, description, user_id) '
                    "VALUES (?, ?, ?, ?)",
                    (
                        company_id.bytes,
                        company_data.name,
                        company_data.description,
                        user_id.bytes,
                    ),
                )
        except sqlite3.Error as exc:
            raise CompanyInternalError() from exc
        return CreatedId(id_created=company_id)

    def get_company(self, user_id: UUID, company_id: UUID) -> CompanyEntry:
        """The user's company with the given id."""
        row = self._find(user_id, company_id)
        if row is None:
            raise CompanyNotFound()
        return _entry(row)

    def get_companies(self, user_id: UUID) -> CompanyList:
        """Every company owned by the user."""
        try:
            rows = self._connection.execute(
                f'SELECT {_SELECT_COLUMNS} FROM "Company" WHERE user_id = ?',
                (user_id.bytes,),
            ).fetchall()
        except sqlite3.Error as exc:
            raise CompanyInternalError() from exc
        companies = [_entry(row) for row in rows]
        return CompanyList(total=len(companies), companies=companies)

    def update_company(
        self,
        user_id: UUID,
        company_id: UUID,
        company_data: UpdateCompanyRequest,
    ) -> CompanyUpdate:
        """Change the given fields of the user's company."""
        current = self._find(user_id, company_id)
        if current is None:
            raise CompanyNotFound()
        _, name, description, _, _ = tuple(current)
        if company_data.name is not None:
            name = company_data.name
        if company_data.description is not None:
            description = company_data.description
        try:
            with self._connection:
                self._connection.execute(
                    'UPDATE "Company" SET name = ?, description = ? WHERE id = ?',
                    (name, description, company_id.bytes),
                )
            row = self._connection.execute(
                'SELECT id, name, description, updated_at FROM "Company" WHERE id = ?',
                (company_id.bytes,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise CompanyUpdateFailed() from exc
        if row is None:
            raise CompanyUpdateFailed()
        raw_id, name, description, updated_at = tuple(row)
        return CompanyUpdate(
            id=_to_uuid(raw_id),
            name=name,
            description=description,
            updated_at=_text(updated_at),
        )

    def delete_company(self, user_id: UUID, company_id: UUID) -> None:
        """Remove the user's company."""
        if self._find(user_id, company_id) is None:
            raise CompanyNotFound()
        try:
            with self._connection:
                self._connection.execute(
                    'DELETE FROM "Company" WHERE id = ?', (company_id.bytes,)
                )
        except sqlite3.Error as exc:
            raise CompanyDeleteFailed() from exc