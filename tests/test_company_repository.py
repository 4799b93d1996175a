import uuid

import pytest

from ledgerdesk.company_repository import (
    CompanyInternalError,
    CompanyList,
    CompanyNotFound,
    CompanyRepository,
    CompanyUpdateFailed,
    CreateCompanyRequest,
    UpdateCompanyRequest,
)
from ledgerdesk.database import connect
from ledgerdesk.schema import migrate_up


def _add_user(connection, name):
    user_id = uuid.uuid4()
    with connection:
        connection.execute(
            'INSERT INTO "User" (id, username, first_name, last_name, email, password_hash) '
            "VALUES (?, ?, ?, ?, ?, ?)",
            (user_id.bytes, name, name, name, f"{name} @ example.com".replace(" ", ""), "placeholder"),
        )
    return user_id


@pytest.fixture
def connection():
    conn = connect(":memory:")
    migrate_up(conn)
    yield conn
    conn.close()


@pytest.fixture
def repo(connection):
    return CompanyRepository(connection)


@pytest.fixture
def owner(connection):
    return _add_user(connection, "alice")


def test_create_then_get_round_trip(repo, owner):
    created = repo.create_company(owner, CreateCompanyRequest("Acme", "Widgets"))
    entry = repo.get_company(owner, created.id_created)
    assert entry.id == created.id_created
    assert entry.name == "Acme"
    assert entry.description == "Widgets"
    assert entry.created_at
    assert entry.updated_at


def test_get_by_other_user_is_not_found(repo, owner, connection):
    other = _add_user(connection, "bob")
    created = repo.create_company(owner, CreateCompanyRequest("Acme", "Widgets"))
    with pytest.raises(CompanyNotFound):
        repo.get_company(other, created.id_created)


def test_get_unknown_company(repo, owner):
    with pytest.raises(CompanyNotFound):
        repo.get_company(owner, uuid.uuid4())


def test_list_companies_per_owner(repo, owner, connection):
    other = _add_user(connection, "bob")
    repo.create_company(owner, CreateCompanyRequest("Acme", "Widgets"))
    repo.create_company(owner, CreateCompanyRequest("Globex", "Gadgets"))
    repo.create_company(other, CreateCompanyRequest("Initech", "Software"))
    listing = repo.get_companies(owner)
    assert listing.total == len(listing.companies) == 2
    assert {c.name for c in listing.companies} == {"Acme", "Globex"}


def test_list_is_empty_for_user_without_companies(repo, owner):
    assert repo.get_companies(owner) == CompanyList(total=0, companies=[])


def test_update_only_given_fields(repo, owner):
    created = repo.create_company(owner, CreateCompanyRequest("Acme", "Widgets"))
    updated = repo.update_company(owner, created.id_created, UpdateCompanyRequest(name="Acme Ltd"))
    assert updated.id == created.id_created
    assert updated.name == "Acme Ltd"
    assert updated.description == "Widgets"
    assert repo.get_company(owner, created.id_created).name == "Acme Ltd"


def test_update_unknown_company(repo, owner):
    with pytest.raises(CompanyNotFound):
        repo.update_company(owner, uuid.uuid4(), UpdateCompanyRequest(name="X"))


def test_update_to_taken_name_fails(repo, owner):
    repo.create_company(owner, CreateCompanyRequest("Acme", "Widgets"))
    second = repo.create_company(owner, CreateCompanyRequest("Globex", "Gadgets"))
    with pytest.raises(CompanyUpdateFailed):
        repo.update_company(owner, second.id_created, UpdateCompanyRequest(name="Acme"))


def test_duplicate_name_on_create_is_internal_error(repo, owner):
    repo.create_company(owner, CreateCompanyRequest("Acme", "Widgets"))
    with pytest.raises(CompanyInternalError):
        repo.create_company(owner, CreateCompanyRequest("Acme", "Other"))


def test_create_for_missing_user_is_internal_error(repo):
    with pytest.raises(CompanyInternalError):
        repo.create_company(uuid.uuid4(), CreateCompanyRequest("Acme", "Widgets"))


def test_delete_removes_company(repo, owner):
    created = repo.create_company(owner, CreateCompanyRequest("Acme", "Widgets"))
    repo.delete_company(owner, created.id_created)
    with pytest.raises(CompanyNotFound):
        repo.get_company(owner, created.id_created)
    with pytest.raises(CompanyNotFound):
        repo.delete_company(owner, created.id_created)


def test_closed_connection_is_internal_error(connection, owner):
    repo = CompanyRepository(connection)
    connection.close()
    with pytest.raises(CompanyInternalError):
        repo.get_companies(owner)


def test_error_messages():
    assert str(CompanyNotFound()) == "Company not found"
    assert str(CompanyUpdateFailed()) == "Update failed"