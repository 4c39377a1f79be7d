from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError

from configcenter.model import Base, Module, ModuleGroup
from configcenter.repository import (
    ConfigRepository,
    NotFoundError,
    get_config_repository,
)


@pytest.fixture
def repo(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(engine)
    repository = get_config_repository(engine)
    yield repository
    repository.close()


def _module(group_id, name="mod1"):
    now = datetime.now()
    return Module(
        group_id=group_id,
        name=name,
        content="content",
        valid_from=now,
        valid_to=now + timedelta(hours=24),
        enabled=True,
        created_at=now,
    )


def test_insert_and_query_module_group(repo):
    group = ModuleGroup(name="test group", description="desc", created_at=datetime.now())
    repo.insert_module_group(group)
    got = repo.query_module_group_by_id(group.id)
    assert got.name == group.name


def test_insert_and_query_module(repo):
    group = ModuleGroup(name="g", description="d", created_at=datetime.now())
    repo.insert_module_group(group)
    repo.insert_module(_module(group.id))
    modules = repo.query_modules_by_group_id(group.id)
    assert len(modules) == 1
    assert modules[0].name == "mod1"


def test_update_and_delete_module(repo):
    group = ModuleGroup(name="g", description="d", created_at=datetime.now())
    repo.insert_module_group(group)
    module = _module(group.id)
    repo.insert_module(module)
    module.name = "mod2"
    repo.update_module(module)
    got = repo.query_modules_by_group_id(group.id)
    assert got[0].name == "mod2"
    repo.delete_module(module.id)
    assert repo.query_modules_by_group_id(group.id) == []


def test_query_missing_group_raises(repo):
    with pytest.raises(NotFoundError):
        repo.query_module_group_by_id(12345)


def test_query_module_groups_lists_all(repo):
    for name in ("a", "b", "c"):
        repo.insert_module_group(ModuleGroup(name=name, description=""))
    assert sorted(group.name for group in repo.query_module_groups()) == ["a", "b", "c"]


def test_delete_module_group(repo):
    group = ModuleGroup(name="g", description="d")
    repo.insert_module_group(group)
    repo.delete_module_group(group.id)
    with pytest.raises(NotFoundError):
        repo.query_module_group_by_id(group.id)


def test_delete_missing_module_is_silent(repo):
    repo.delete_module(999)
    assert repo.query_modules_by_group_id(1) == []


def test_modules_filtered_by_group(repo):
    first = ModuleGroup(name="one")
    second = ModuleGroup(name="two")
    repo.insert_module_group(first)
    repo.insert_module_group(second)
    repo.insert_module(_module(first.id, "x"))
    repo.insert_module(_module(second.id, "y"))
    assert [m.name for m in repo.query_modules_by_group_id(second.id)] == ["y"]


def test_update_module_without_id_inserts(repo):
    module = _module(7, "fresh")
    repo.update_module(module)
    stored = repo.query_modules_by_group_id(7)
    assert [m.id for m in stored] == [module.id]


def test_duplicate_group_id_raises(repo):
    repo.insert_module_group(ModuleGroup(id=20, name="a"))
    with pytest.raises(IntegrityError):
        repo.insert_module_group(ModuleGroup(id=20, name="b"))


def test_context_manager_returns_repository(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'ctx.db'}")
    Base.metadata.create_all(engine)
    with ConfigRepository(engine) as repository:
        repository.insert_module_group(ModuleGroup(name="ctx"))
        assert [g.name for g in repository.query_module_groups()] == ["ctx"]


def test_none_engine_rejected():
    with pytest.raises(ValueError):
        ConfigRepository(None)