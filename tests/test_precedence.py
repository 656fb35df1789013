import unittest

from litewire import Container


class DB: ...


class AnotherDB(DB): ...


class Repo:
    def __init__(self, db: DB):
        self.db = db


class Service:
    def __init__(self, repo: Repo):
        self.repo = repo


class TestResolutionPrecedence(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()

    def test_autowires_annotation_when_parameter_name_is_bound(self):
        # Parameters are resolved by their annotation only, never by name.
        self.cont.bind("db", lambda _: AnotherDB())

        obj = self.cont.get(Repo)

        assert type(obj.db) is DB

    def test_type_binding_replaces_autowiring_for_dependency(self):
        self.cont.bind(DB, lambda _: AnotherDB())

        obj = self.cont.get(Repo)

        assert type(obj.db) is AnotherDB

    def test_bare_name_binding_replaces_autowiring_for_dependency(self):
        self.cont.bind("DB", lambda _: AnotherDB())

        obj = self.cont.get(Service)

        assert type(obj.repo.db) is AnotherDB

    def test_binding_for_intermediate_dependency_short_circuits_its_subgraph(self):
        calls = []

        def make_repo(c):
            calls.append("repo")
            return Repo(AnotherDB())

        self.cont.bind(Repo, make_repo)

        obj = self.cont.get(Service)

        assert calls == ["repo"]
        assert type(obj.repo.db) is AnotherDB

    def test_factory_is_called_on_every_resolution(self):
        calls = []

        def make_db(c):
            calls.append("db")
            return DB()

        self.cont.bind(DB, make_db)

        first = self.cont.get(Repo)
        second = self.cont.get(Repo)

        assert calls == ["db", "db"]
        assert first.db is not second.db

    def test_later_binding_is_used_by_subsequent_resolutions(self):
        self.cont.bind(DB, lambda _: DB())
        before = self.cont.get(Repo)

        self.cont.bind(DB, lambda _: AnotherDB())
        after = self.cont.get(Repo)

        assert type(before.db) is DB
        assert type(after.db) is AnotherDB

    def test_factory_may_autowire_the_class_it_is_bound_to(self):
        def decorate(c):
            repo = c.resolve(Repo)
            repo.decorated = True
            return repo

        self.cont.bind(Repo, decorate)

        obj = self.cont.get(Service)

        assert obj.repo.decorated is True
        assert type(obj.repo.db) is DB
