[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ledgerdesk"
version = "0.1.0"
description = "Backend service for double-entry bookkeeping: companies and contacts stored in SQLite behind a token-protected JSON API"
requires-python = ">=3.10"
keywords = ["accounting", "double-entry", "bookkeeping", "ledger", "rest-api", "flask", "jwt", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Office/Business :: Financial :: Accounting",
]
dependencies = [
    "flask",
    "pyjwt",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ledgerdesk = "ledgerdesk.server:main"

[tool.hatch.build.targets.wheel]
packages = ["ledgerdesk"]

[tool.pytest.ini_options]
addopts = "-ra"
