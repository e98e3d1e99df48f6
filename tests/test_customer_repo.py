"""
Tests for repositories/customer_repo.py -- CRUD against an in-memory clientes table.
"""

import psycopg2
import pytest

from models.customer import Customer
from repositories.customer_repo import CustomerRepository


@pytest.fixture
def repo(pool_manager):
    return CustomerRepository(pool_manager)


@pytest.fixture
def store(repo, pool_manager, fake_pool_cls):
    pool_manager.open()
    return fake_pool_cls.instances[0].store


class TestInsertAndList:

    def test_round_trip_assigns_id(self, repo):
        assert repo.insert_customer(Customer(nome="Ana", idade=30, uf="SP")) is None

        customers = repo.list_customers()
        assert len(customers) == 1
        ana = customers[0]
        assert (ana.nome, ana.idade, ana.uf) == ("Ana", 30, "SP")
        assert isinstance(ana.id, int)

    def test_optional_fields_may_be_null(self, repo):
        repo.insert_customer(Customer(nome="Bruno"))
        bruno = repo.list_customers()[0]
        assert bruno.idade is None
        assert bruno.uf is None

    def test_list_is_ordered_by_id(self, repo):
        for nome in ("Ana", "Bruno", "Carla"):
            repo.insert_customer(Customer(nome=nome))
        ids = [c.id for c in repo.list_customers()]
        assert ids == sorted(ids)

    def test_list_empty_table(self, repo):
        assert repo.list_customers() == []

    def test_insert_binds_parameters(self, repo):
        hostile = "x'); DROP TABLE clientes; --"
        repo.insert_customer(Customer(nome=hostile, idade=1, uf="RJ"))
        assert repo.list_customers()[0].nome == hostile


class TestGet:

    def test_returns_single_match_in_a_list(self, repo, store):
        repo.insert_customer(Customer(nome="Ana", idade=30, uf="SP"))
        found = repo.get_customer(1)
        assert found == [Customer(id=1, nome="Ana", idade=30, uf="SP")]

    def test_missing_id_returns_empty_list(self, repo):
        assert repo.get_customer(999) == []


class TestUpdateAndReplace:

    def test_update_overwrites_all_fields(self, repo, store):
        repo.insert_customer(Customer(nome="Ana", idade=30, uf="SP"))
        assert repo.update_customer(1, Customer(nome="Ana Paula", idade=None, uf="MG")) == 1
        assert repo.get_customer(1) == [Customer(id=1, nome="Ana Paula", idade=None, uf="MG")]

    def test_update_and_replace_are_equivalent(self, repo, store):
        repo.insert_customer(Customer(nome="Ana", idade=30, uf="SP"))
        repo.insert_customer(Customer(nome="Ana", idade=30, uf="SP"))
        change = Customer(nome="Beatriz", idade=41, uf="BA")

        repo.update_customer(1, change)
        repo.replace_customer(2, change)

        first, second = repo.list_customers()
        assert (first.nome, first.idade, first.uf) == (second.nome, second.idade, second.uf)

    def test_update_missing_id_affects_nothing(self, repo):
        assert repo.update_customer(42, Customer(nome="Ghost")) == 0
        assert repo.replace_customer(42, Customer(nome="Ghost")) == 0


class TestDelete:

    def test_delete_then_get_is_empty(self, repo, store):
        repo.insert_customer(Customer(nome="Ana", idade=30, uf="SP"))
        assert repo.delete_customer(1) == 1
        assert repo.get_customer(1) == []

    def test_delete_missing_id_is_not_an_error(self, repo):
        assert repo.delete_customer(7) == 0


class TestConnectionHygiene:
    """Every operation returns its connection, whether it succeeds or raises."""

    def test_successful_calls_release(self, repo, pool_manager):
        before = pool_manager.in_use
        repo.insert_customer(Customer(nome="Ana"))
        repo.list_customers()
        repo.get_customer(1)
        repo.update_customer(1, Customer(nome="Ana B"))
        repo.replace_customer(1, Customer(nome="Ana C"))
        repo.delete_customer(1)
        assert pool_manager.in_use == before

    def test_failed_insert_rolls_back_and_releases(self, repo, pool_manager, fake_pool_cls):
        pool_manager.open()
        before = pool_manager.in_use
        with pytest.raises(ValueError):
            repo.insert_customer(Customer(nome=None))
        assert pool_manager.in_use == before
        assert fake_pool_cls.instances[0].checked_out == []

    def test_many_operations_never_exhaust_the_pool(self, repo, pool_manager):
        for i in range(20):
            repo.insert_customer(Customer(nome=f"c{i}"))
        assert len(repo.list_customers()) == 20
        assert pool_manager.in_use == 0

    def test_failed_write_is_rolled_back(self, repo, pool_manager, fake_pool_cls, monkeypatch):
        from tests.fakes import FakeConnection

        connections = []
        original = FakeConnection.rollback

        def tracking_rollback(self):
            connections.append(self)
            original(self)

        monkeypatch.setattr(FakeConnection, "rollback", tracking_rollback)
        with pytest.raises(ValueError):
            repo.insert_customer(Customer(nome=None))
        assert len(connections) == 1

    @pytest.mark.parametrize(
        "operation",
        [
            lambda repo: repo.list_customers(),
            lambda repo: repo.get_customer(1),
            lambda repo: repo.insert_customer(Customer(nome="Ana", idade=30, uf="SP")),
            lambda repo: repo.update_customer(1, Customer(nome="Ana", idade=31, uf="SP")),
            lambda repo: repo.replace_customer(1, Customer(nome="Ana", idade=31, uf="SP")),
            lambda repo: repo.delete_customer(1),
        ],
        ids=["list", "get", "insert", "update", "replace", "delete"],
    )
    def test_driver_error_propagates_and_releases(self, operation, repo, pool_manager, fake_pool_cls):
        pool_manager.open()
        fake = fake_pool_cls.instances[0]
        fake.fail_on = lambda statement: "clientes" in statement
        fake.error = psycopg2.DataError("invalid input syntax for type integer")
        before = pool_manager.in_use

        with pytest.raises(psycopg2.DataError) as excinfo:
            operation(repo)

        assert excinfo.value is fake.error
        assert pool_manager.in_use == before
        assert fake.checked_out == []


class TestCustomer:

    def test_str_shows_all_fields(self):
        assert str(Customer(id=3, nome="Ana", idade=30, uf="SP")) == "#3 Ana (30) SP"

    def test_str_marks_missing_optional_fields(self):
        assert str(Customer(id=4, nome="Bruno")) == "#4 Bruno (-) --"

    def test_str_keeps_zero_age(self):
        assert str(Customer(id=5, nome="Bebê", idade=0, uf="RJ")) == "#5 Bebê (0) RJ"
