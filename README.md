# configcenter

A small configuration center service. It stores **module groups** and the
**modules** that belong to them (configuration payloads with a validity
window and an enabled flag), and provides a Flask application with two
endpoints that clients call to check for updates and to filter
configuration ids.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

`configcenter.dbinit.load_config()` reads `config/config.yaml` from the
working directory by default:

```yaml
server:
  port: 8080
database:
  host: localhost
  port: 3306
  user: user
  password: password
  dbname: configdb
```

Missing keys take empty or zero defaults. A file that cannot be read, is not
valid YAML, or has values of the wrong kind raises `ConfigError`.
`parse_config(text)` does the same for YAML text already in memory.

`database_url(config)` turns the `database` section into a
`mysql+pymysql://…?charset=utf8mb4` SQLAlchemy URL. That driver is not
installed with this package; install `pymysql` yourself to connect to MySQL
this way. The database named by `dbname` must exist beforehand.

`init_db(config_path, url)` connects (raising `ConnectionError` if it cannot)
and creates any missing tables (raising `RuntimeError` if that fails), then
returns the SQLAlchemy engine. Passing `url` skips the configuration file.
`migrate(engine)` only creates the tables.

## Command line

```
configcenter [--config PATH] [--database-url URL]
```

This initialises the database (from `config/config.yaml`, another file given
with `--config`, or any SQLAlchemy URL given with `--database-url`), then
inserts and reads back a sample module group (with the fixed id 20) and a
group holding one module, printing what it finds. It exits with status 1 if
the database cannot be initialised, 0 otherwise. Run it against a fresh
database: on a second run the fixed id 20 already exists and the insert
failure is printed.

```
configcenter --database-url sqlite:///configcenter.db
```

## Library use

```python
from sqlalchemy import create_engine

from configcenter.dbinit import migrate
from configcenter.model import Module, ModuleGroup
from configcenter.repository import get_config_repository

engine = create_engine("sqlite:///configcenter.db")
migrate(engine)

with get_config_repository(engine) as repo:
    group = ModuleGroup(name="clients", description="client settings")
    repo.insert_module_group(group)
    print(repo.query_module_group_by_id(group.id).name)
    print(repo.query_modules_by_group_id(group.id))
```

`ConfigRepository` offers:

- `query_module_groups()`, `query_module_group_by_id(group_id)` (raises
  `NotFoundError` when no group has that id) and
  `query_modules_by_group_id(group_id)`;
- `insert_module_group(group)` and `insert_module(module)`, which fill in the
  object's `id`;
- `update_module(module)`, which saves every field and inserts the module if
  it has no id yet;
- `delete_module(module_id)` and `delete_module_group(group_id)`, which do
  nothing when the id is absent;
- `close()`, also called on leaving a `with` block, which disposes of the
  engine's pooled connections.

## HTTP endpoints

`configcenter.handler.create_app()` returns a Flask application with:

- `POST /check_update` — body `{"version": ..., "platform": ...}`; answers
  with `code`, `message`, `full_cdn_url` and `diff_cdn_url`.
- `POST /filter_ids` — body `{"version", "platform", "channel", "user_id"}`;
  answers with `matched_ids_map`.

Body keys are matched case-insensitively and unknown keys are ignored. A body
that is not valid JSON, is not an object, or has a non-string value for a
known field gets status 400 and `{"error": "Invalid request"}`.

The same answers are available without HTTP through `check_update(request)`
and `filter_ids(request)`, which take `CheckUpdateRequest` /
`FilterIdsRequest` and return `CheckUpdateResponse` / `FilterIdsResponse`.

## What it does not do

- The endpoints return fixed answers: `check_update` always reports code 0
  with two example download URLs, and `filter_ids` always returns the same
  two ids. Neither consults the stored module groups or modules.
- No command starts an HTTP server. The `server.port` setting is read but not
  used; serve the application from `create_app()` with a WSGI server of your
  choice.