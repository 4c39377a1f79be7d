"""Command that initialises the database and exercises the repository."""

import argparse
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from .dbinit import DEFAULT_CONFIG_PATH, ConfigError, init_db
from .model import Module, ModuleGroup
from .repository import NotFoundError, get_config_repository


def _one_year_later(moment: datetime) -> datetime:
    try:
        return moment.replace(year=moment.year + 1)
    except ValueError:  # 29 February rolls over to 1 March
        return moment.replace(year=moment.year + 1, month=3, day=1)


def insert_and_query_module_group(repo):
    """Insert a fixed module group and read it back; return it, or None on failure."""
    group = ModuleGroup(id=20, name="test group", description="desc")
    try:
        step = "InsertModuleGroup"
        repo.insert_module_group(group)
        step = "QueryModuleGroupByID"
        got = repo.query_module_group_by_id(group.id)
    except (NotFoundError, SQLAlchemyError) as exc:
        print(f"{step} failed: {exc}")
        return None
    if got.name != group.name:
        print(f"expected name {group.name}, got {got.name}")
    return got


def insert_and_query_module(repo):
    """Insert a group with one module and list its modules; None on failure."""
    group = ModuleGroup(name="g", description="d")
    now = datetime.now()
    try:
        step = "InsertModuleGroup"
        repo.insert_module_group(group)
        step = "InsertModule"
        repo.insert_module(
            Module(group_id=group.id, name="mod1", content="content",
                   valid_from=now, valid_to=_one_year_later(now), enabled=True)
        )
        step = "QueryModulesByGroupID"
        modules = repo.query_modules_by_group_id(group.id)
    except SQLAlchemyError as exc:
        print(f"{step} failed: {exc}")
        return None
    if modules:
        print(f"Found {len(modules)} modules for group {group.name}.")
    else:
        print("No modules found for the group.")
    return modules


def main(argv=None) -> int:
    """Run the service self-check and return an exit status."""
    parser = argparse.ArgumentParser(prog="configcenter")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--database-url", default=None)
    args = parser.parse_args(argv)

    print("Config Center Service started.")
    try:
        engine = init_db(args.config, args.database_url)
    except (ConfigError, ConnectionError, RuntimeError) as exc:
        print(f"Database initialization failed: {exc}")
        return 1
    print("Database connection established and migrations completed successfully.")
    with get_config_repository(engine) as repo:
        insert_and_query_module_group(repo)
        insert_and_query_module(repo)
    print("Test completed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())