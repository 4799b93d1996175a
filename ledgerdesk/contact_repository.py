"""Storage of contacts owned by users."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass, field
from uuid import UUID

from ledgerdesk.company_repository import CreatedId


class ContactRepositoryError(Exception):
    """A contact could not be stored or retrieved."""

    message = "Contact repository error"

    def __str__(self) -> str:
        return self.message


class ContactNotFound(ContactRepositoryError):
    message = "Contact not found"


class ContactInternalError(ContactRepositoryError):
    message = "Internal server error"


class ContactUnauthorized(ContactRepositoryError):
    message = "Duplicate contact"


@dataclass
class CreateContactRequest:
    """Fields for a new contact."""

    name: str
    company_id: UUID
    contact_type_id: UUID | None = None


@dataclass
class UpdateContactRequest:
    """Fields to change on a contact; None leaves a field as it is."""

    name: str | None = None
    contact_type_id: UUID | None = None


@dataclass(frozen=True)
class ContactEntry:
    """A contact as shown to its owner."""

    id: UUID
    name: str
    company_id: UUID
    user_id: UUID
    contact_type_id: UUID
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class ContactList:
    """All contacts of one owner."""

    total: int
    contacts: list[ContactEntry] = field(default_factory=list)


@dataclass(frozen=True)
class ContactUpdate:
    """A contact after an update."""

    id: UUID
    name: str
    company_id: UUID
    updated_at: str


_SELECT_COLUMNS = "id, name, company_id, user_id, contact_type_id, created_at, updated_at"


def _to_uuid(raw: bytes) -> UUID:
    try:
        return UUID(bytes=bytes(raw))
    except (TypeError, ValueError) as exc:
        raise ContactInternalError() from exc


def _text(value: object) -> str:
    return "" if value is None else str(value)


def _entry(row) -> ContactEntry:
    raw_id, name, company_id, user_id, contact_type_id, created_at, updated_at = tuple(row)
    return ContactEntry(
        id=_to_uuid(raw_id),
        name=name,
        company_id=_to_uuid(company_id),
        user_id=_to_uuid(user_id),
        contact_type_id=_to_uuid(contact_type_id),
        created_at=_text(created_at),
        updated_at=_text(updated_at),
    )


class ContactRepository:
    """Contacts stored in a database connection, scoped by owner."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def _find(self, user_id: UUID, contact_id: UUID):
        try:
            return self._connection.execute(
                f'SELECT {_SELECT_COLUMNS} FROM "Contact" WHERE id = ? AND user_id = ?',
                (contact_id.bytes, user_id.bytes),
            ).fetchone()
        except sqlite3.Error as exc:
            raise ContactInternalError() from exc

    def create_contact(self, user_id: UUID, contact_data: CreateContactRequest) -> CreatedId:
        """Store a new contact owned by the user and return its id."""
        contact_id = uuid.uuid4()
        columns = ["id", "company_id", "name", "user_id"]
        values: list[object] = [
            contact_id.bytes,
            contact_data.company_id.bytes,
            contact_data.name,
            user_id.bytes,
        ]
        if contact_data.contact_type_id is not None:
            columns.append("contact_type_id")
            values.append(contact_data.contact_type_id.bytes)
        placeholders = ", ".join("?" for _ in columns)
        try:
            with self._connection:
                self._connection.execute(
                    f'INSERT INTO "Contact" ({", ".join(columns)}) VALUES ({placeholders})',
                    values,
                )
        except sqlite3.Error as exc:
            raise ContactInternalError() from exc
        return CreatedId(id_created=contact_id)

    def get_contact(self, user_id: UUID, contact_id: UUID) -> ContactEntry:
        """The user's contact with the given id."""
        row = self._find(user_id, contact_id)
        if row is None:
            raise ContactNotFound()
        return _entry(row)

    def get_contacts(self, user_id: UUID) -> ContactList:
        """Every contact owned by the user."""
        try:
            rows = self._connection.execute(
                f'SELECT {_SELECT_COLUMNS} FROM "Contact" WHERE user_id = ?',
                (user_id.bytes,),
            ).fetchall()
        except sqlite3.Error as exc:
            raise ContactInternalError() from exc
        contacts = [_entry(row) for row in rows]
        return ContactList(total=len(contacts), contacts=contacts)

    def update_contact(
        self,
        user_id: UUID,
        contact_id: UUID,
        contact_data: UpdateContactRequest,
    ) -> ContactUpdate:
        """Change the given fields of the user's contact."""
        current = self._find(user_id, contact_id)
        if current is None:
            raise ContactNotFound()
        _, name, _, _, contact_type_id, _, _ = tuple(current)
        if contact_data.contact_type_id is not None:
            contact_type_id = contact_data.contact_type_id.bytes
        if contact_data.name is not None:
            name = contact_data.name
        try:
            with self._connection:
                self._connection.execute(
                    'UPDATE "Contact" SET name = ?, contact_type_id = ? WHERE id = ?',
                    (name, contact_type_id, contact_id.bytes),
                )
            row = self._connection.execute(
                'SELECT id, name, company_id, updated_at FROM "Contact" WHERE id = ?',
                (contact_id.bytes,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise ContactInternalError() from exc
        if row is None:
            raise ContactInternalError()
        raw_id, name, company_id, updated_at = tuple(row)
        return ContactUpdate(
            id=_to_uuid(raw_id),
            name=name,
            company_id=_to_uuid(company_id),
            updated_at=_text(updated_at),
        )

    def delete_contact(self, user_id: UUID, contact_id: UUID) -> None:
        """Remove the user's contact."""
        if self._find(user_id, contact_id) is None:
            raise ContactNotFound()
        try:
            with self._connection:
                self._connection.execute(
                    'DELETE FROM "Contact" WHERE id = ?', (contact_id.bytes,)
                )
        except sqlite3.Error as exc:
            raise ContactInternalError() from exc