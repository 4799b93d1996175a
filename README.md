# ledgerdesk

ledgerdesk is the backend of a double-entry bookkeeping service. It keeps
its tables (users, companies, contact types, contacts and contact details)
in a SQLite database file and serves a JSON API for companies, protected by
HS512-signed bearer tokens.

## Running the server

The package installs one command:

```
ledgerdesk --help
```

Options:

| Option         | Default                                            | Meaning                          |
|----------------|----------------------------------------------------|----------------------------------|
| `--database`   | `$LEDGERDESK_DATABASE`, else `ledgerdesk.db`       | path of the SQLite database file |
| `--host`       | `127.0.0.1`                                        | address to listen on             |
| `--port`       | `8000`                                             | port to listen on                |
| `--secret-key` | `$JWT_SECRET_KEY`, else empty                      | key for verifying access tokens  |

On start-up the command applies every pending schema migration to the
database, logs the names of those it applied, and then serves the API with
Flask's built-in server. If the database cannot be opened or migrated it
prints the error to standard error and exits with status 1.

## The HTTP API

Every response carries permissive CORS headers
(`Access-Control-Allow-Origin: *`, methods `GET, POST, PUT, DELETE, OPTIONS`,
`Access-Control-Allow-Headers: *`, `Access-Control-Allow-Credentials: true`),
and any `OPTIONS` request under `/v1/` is answered with an empty body.

| Method | Path                          | Purpose                                   |
|--------|-------------------------------|-------------------------------------------|
| GET    | `/v1/check/server_status`     | report that the server is up              |
| GET    | `/v1/check/database_status`   | report whether a database connection opens |
| POST   | `/v1/company/`                | create a company                          |
| GET    | `/v1/company/`                | list the caller's companies               |
| GET    | `/v1/company/<company_id>`    | show one of the caller's companies        |
| PUT    | `/v1/company/<company_id>`    | change a company's name or description    |
| DELETE | `/v1/company/<company_id>`    | delete one of the caller's companies      |

The company routes need a header such as `Authorization: Bearer token`,
where the token is one issued by `ledgerdesk.tokens.generate_jwt` with the
server's secret key and whose subject is a UUID. A missing or malformed
header, or a token that does not verify, is answered with status 401.

Request bodies are JSON objects. Creating a company needs non-empty string
fields `name` and `description` (empty ones give 400, a missing body or
non-string fields give 422). An update may carry either field; absent
fields are left as they are.

Successful answers look like

```json
{"status": "success", "message": "Company created", "data": {"id_created": "..."}}
```

(listing, viewing and deleting omit `message`), and failures like

```json
{"status": 404, "message": "Company not found"}
```

sent with the same HTTP status as the `status` field. A company id that is
not a UUID gives 400 on `DELETE` and 500 on `GET` and `PUT`. When no
database connection can be opened, `database_status` answers
`{"status": 200, "message": "Database is not running"}` with HTTP status 200.

## Using the package from Python

Build the application around your own connection factory:

```python
from ledgerdesk.app import create_app
from ledgerdesk.database import connect
from ledgerdesk.schema import migrate_up

connection = connect("ledger.db")
migrate_up(connection)
connection.close()

app = create_app(lambda: connect("ledger.db"), "secret")
```

`ledgerdesk.server.build_app(database, secret_key)` does the same in one
call. `connect` opens a SQLite file with foreign keys enforced and rows
addressable by column name.

Migrations live in `ledgerdesk.schema`: `migrations()` lists them in order,
`migrate_up` applies the pending ones, `migrate_down` rolls back the applied
ones newest first, and `applied_migrations` names those already applied.

Storage is available directly through `CompanyRepository` in
`ledgerdesk.company_repository` and `ContactRepository` in
`ledgerdesk.contact_repository`. Both take a connection, scope every record
by its owner's UUID, and raise subclasses of `CompanyRepositoryError` or
`ContactRepositoryError`; `ledgerdesk.app.error_response` turns a company
error into the `ApiErrorResponse` the API sends.

Issue and check tokens:

```python
from ledgerdesk.tokens import generate_jwt, decode_jwt

signed = generate_jwt("1b4e28ba-2fa1-11d2-883f-0016d3cca427", "alice", secret_key="secret", expiration=3600)
claims = decode_jwt(signed.token, secret_key="secret")
```

An empty secret or a zero expiration raises `TokenConfigError`; a token
that cannot be verified (bad signature, expired beyond a 60-second leeway,
missing claims) raises `TokenDecodeError`.

Check a sign-up request:

```python
from ledgerdesk.validation import CreateUserRequest, check_create_user

check_create_user(request)  # raises EmptyFieldError, FieldLengthError or InvalidEmailError
```

Lengths are counted in UTF-8 bytes: username 3–15, first and last name
3–20, password 6–15; the e-mail must contain `@`.

`ledgerdesk.database.DatabaseConfig.from_env` reads `DB_USERNAME`,
`DB_PASSWORD`, `DB_HOST`, `DB_PORT` and `DB_DATABASE_NAME`, and
`DatabaseConfig.url()` formats them as a `mysql://` URL.

## What the package does not do

- It has no sign-up or sign-in endpoints and no password hashing. Rows in
  the `User` table, which companies and contacts refer to, must be written
  by other means; tokens are issued only by calling `generate_jwt`.
- Contacts, contact types and contact details have tables, and contacts a
  repository, but none of them have HTTP routes.
- It does not connect to a MySQL server: `DatabaseConfig` only describes
  such settings, and all storage goes to SQLite files.