"""Data access for module groups and modules."""

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .model import Module, ModuleGroup


class NotFoundError(LookupError):
    """Raised when a requested record does not exist."""


class ConfigRepository:
    """Reads and writes configuration records through a database engine."""

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("Database connection is not initialized")
        self._engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    @property
    def engine(self) -> Engine:
        """The underlying database engine."""
        return self._engine

    def query_module_groups(self) -> list[ModuleGroup]:
        """Return every module group."""
        with self._sessions() as session:
            return list(session.scalars(select(ModuleGroup)))

    def query_module_group_by_id(self, group_id: int) -> ModuleGroup:
        """Return the module group with the given id, or raise NotFoundError."""
        with self._sessions() as session:
            group = session.get(ModuleGroup, group_id)
        if group is None:
            raise NotFoundError(f"module group {group_id} not found")
        return group

    def query_modules_by_group_id(self, group_id: int) -> list[Module]:
        """Return all modules belonging to the given group."""
        with self._sessions() as session:
            return list(session.scalars(select(Module).where(Module.group_id == group_id)))

    def insert_module_group(self, group: ModuleGroup) -> None:
        """Insert a module group; its id is filled in afterwards."""
        with self._sessions.begin() as session:
            session.add(group)

    def insert_module(self, module: Module) -> None:
        """Insert a module; its id is filled in afterwards."""
        with self._sessions.begin() as session:
            session.add(module)

    def update_module(self, module: Module) -> None:
        """Save every field of a module, inserting it if it has no id yet."""
        with self._sessions.begin() as session:
            merged = session.merge(module)
            session.flush()
            if module.id is None:
                module.id = merged.id
            if module.created_at is None:
                module.created_at = merged.created_at

    def delete_module(self, module_id: int) -> None:
        """Delete the module with the given id, if any."""
        with self._sessions.begin() as session:
            session.execute(delete(Module).where(Module.id == module_id))

    def delete_module_group(self, group_id: int) -> None:
        """Delete the module group with the given id, if any."""
        with self._sessions.begin() as session:
            session.execute(delete(ModuleGroup).where(ModuleGroup.id == group_id))

    def close(self) -> None:
        """Release the engine's pooled connections."""
        self._engine.dispose()

    def __enter__(self) -> "ConfigRepository":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def get_config_repository(engine: Engine) -> ConfigRepository:
    """Return a repository bound to the given engine."""
    return ConfigRepository(engine)