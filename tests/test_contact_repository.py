import uuid

import pytest

from ledgerdesk.contact_repository import (
    ContactInternalError,
    ContactNotFound,
    ContactRepository,
    ContactUnauthorized,
    CreateContactRequest,
    UpdateContactRequest,
)
from ledgerdesk.database import connect
from ledgerdesk.schema import migrate_up


def _add_user(connection, name):
    user_id = uuid.uuid4()
    with connection:
        connection.execute(
            'INSERT INTO "User" (id, username, first_name, last_name, email, password_hash) '
            "VALUES (?, ?, ?, ?, ?, ?)",
            (user_id.bytes, name, name, name, f"{name}" + "@example.com", "placeholder"),
        )
    return user_id


def _add_contact_type(connection, name):
    type_id = uuid.uuid4()
    with connection:
        connection.execute(
            'INSERT INTO "ContactType" (id, name, description) VALUES (?, ?, ?)',
            (type_id.bytes, name, name),
        )
    return type_id


@pytest.fixture
def connection():
    conn = connect(":memory:")
    migrate_up(conn)
    yield conn
    conn.close()


@pytest.fixture
def repo(connection):
    return ContactRepository(connection)


@pytest.fixture
def owner(connection):
    return _add_user(connection, "alice")


@pytest.fixture
def customer_type(connection):
    return _add_contact_type(connection, "customer")


def test_create_then_get_round_trip(repo, owner, customer_type):
    company_id = uuid.uuid4()
    created = repo.create_contact(owner, CreateContactRequest("Jane", company_id, customer_type))
    entry = repo.get_contact(owner, created.id_created)
    assert entry.id == created.id_created
    assert entry.name == "Jane"
    assert entry.company_id == company_id
    assert entry.user_id == owner
    assert entry.contact_type_id == customer_type
    assert entry.created_at


def test_create_without_contact_type_fails(repo, owner):
    with pytest.raises(ContactInternalError):
        repo.create_contact(owner, CreateContactRequest("Jane", uuid.uuid4()))


def test_create_with_unknown_contact_type_fails(repo, owner):
    with pytest.raises(ContactInternalError):
        repo.create_contact(owner, CreateContactRequest("Jane", uuid.uuid4(), uuid.uuid4()))


def test_get_by_other_user_is_not_found(repo, owner, customer_type, connection):
    other = _add_user(connection, "bob")
    created = repo.create_contact(owner, CreateContactRequest("Jane", uuid.uuid4(), customer_type))
    with pytest.raises(ContactNotFound):
        repo.get_contact(other, created.id_created)


def test_list_contacts_per_owner(repo, owner, customer_type, connection):
    other = _add_user(connection, "bob")
    repo.create_contact(owner, CreateContactRequest("Jane", uuid.uuid4(), customer_type))
    repo.create_contact(owner, CreateContactRequest("John", uuid.uuid4(), customer_type))
    repo.create_contact(other, CreateContactRequest("Zed", uuid.uuid4(), customer_type))
    listing = repo.get_contacts(owner)
    assert listing.total == len(listing.contacts) == 2
    assert {c.name for c in listing.contacts} == {"Jane", "John"}
    assert repo.get_contacts(uuid.uuid4()).total == 0


def test_update_name_and_type(repo, owner, customer_type, connection):
    supplier_type = _add_contact_type(connection, "supplier")
    company_id = uuid.uuid4()
    created = repo.create_contact(owner, CreateContactRequest("Jane", company_id, customer_type))
    updated = repo.update_contact(
        owner, created.id_created, UpdateContactRequest(name="Janet", contact_type_id=supplier_type)
    )
    assert updated.id == created.id_created
    assert updated.name == "Janet"
    assert updated.company_id == company_id
    assert repo.get_contact(owner, created.id_created).contact_type_id == supplier_type


def test_update_keeps_unset_fields(repo, owner, customer_type):
    created = repo.create_contact(owner, CreateContactRequest("Jane", uuid.uuid4(), customer_type))
    repo.update_contact(owner, created.id_created, UpdateContactRequest(name="Janet"))
    assert repo.get_contact(owner, created.id_created).contact_type_id == customer_type


def test_update_to_unknown_type_fails(repo, owner, customer_type):
    created = repo.create_contact(owner, CreateContactRequest("Jane", uuid.uuid4(), customer_type))
    with pytest.raises(ContactInternalError):
        repo.update_contact(
            owner, created.id_created, UpdateContactRequest(contact_type_id=uuid.uuid4())
        )


def test_update_unknown_contact(repo, owner):
    with pytest.raises(ContactNotFound):
        repo.update_contact(owner, uuid.uuid4(), UpdateContactRequest(name="X"))


def test_delete_removes_contact(repo, owner, customer_type):
    created = repo.create_contact(owner, CreateContactRequest("Jane", uuid.uuid4(), customer_type))
    repo.delete_contact(owner, created.id_created)
    with pytest.raises(ContactNotFound):
        repo.get_contact(owner, created.id_created)
    with pytest.raises(ContactNotFound):
        repo.delete_contact(owner, created.id_created)


def test_error_messages():
    assert str(ContactNotFound()) == "Contact not found"
    assert str(ContactUnauthorized()) == "Duplicate contact"
    assert str(ContactInternalError()) == "Internal server error"