from decimal import Decimal

from sqlalchemy.dialects import mysql, sqlite
from sqlalchemy.schema import CreateTable

from cashbook.database import session_scope
from cashbook.models import Category, TransactionType
from cashbook.repositories import CategoryRepository, TransactionRepository


def add_transaction(session, title, type_, value, category):
    transactions = TransactionRepository(session)
    transaction = transactions.create(
        title=title, type=type_, value=Decimal(value), category=category
    )
    transactions.save(transaction)
    return transaction


def test_balance_of_empty_store_is_zero(session_factory):
    with session_scope(session_factory) as session:
        balance = TransactionRepository(session).get_balance()

    assert balance.income == Decimal("0.00")
    assert balance.outcome == Decimal("0.00")
    assert balance.total == Decimal("0.00")


def test_balance_sums_each_type(session_factory):
    with session_scope(session_factory) as session:
        categories = CategoryRepository(session)
        job = categories.create("Job")
        food = categories.create("Food")
        categories.save([job, food])

        add_transaction(session, "Salary", TransactionType.INCOME, "5000", job)
        add_transaction(session, "Bonus", TransactionType.INCOME, "250.50", job)
        add_transaction(session, "Groceries", TransactionType.OUTCOME, "120.25", food)
        add_transaction(session, "Dinner", TransactionType.OUTCOME, "80", food)

    with session_scope(session_factory) as session:
        balance = TransactionRepository(session).get_balance()

    assert balance.income == Decimal("5250.50")
    assert balance.outcome == Decimal("200.25")
    assert balance.total == balance.income - balance.outcome
    assert balance.total == Decimal("5050.25")


def test_find_by_title_is_exact(session_factory):
    with session_scope(session_factory) as session:
        categories = CategoryRepository(session)
        categories.save(categories.create("Food"))

    with session_scope(session_factory) as session:
        categories = CategoryRepository(session)
        assert categories.find_by_title("Food").title == "Food"
        assert categories.find_by_title("food") is None
        assert categories.find_by_title("Food ") is None


def test_find_by_titles(session_factory):
    with session_scope(session_factory) as session:
        categories = CategoryRepository(session)
        categories.save(categories.create_many(["Food", "Job", "Housing"]))

    with session_scope(session_factory) as session:
        categories = CategoryRepository(session)
        found = categories.find_by_titles(["Job", "Travel", "Food"])
        assert sorted(category.title for category in found) == ["Food", "Job"]
        assert categories.find_by_titles([]) == []


def test_create_does_not_persist_until_saved(session_factory, count_rows):
    with session_scope(session_factory) as session:
        category = CategoryRepository(session).create("Food")
        assert category.id is None

    assert count_rows(Category) == 0


def test_list_orders_categories_by_title(session_factory):
    with session_scope(session_factory) as session:
        categories = CategoryRepository(session)
        categories.save(categories.create_many(["Travel", "Food", "Job"]))

    with session_scope(session_factory) as session:
        titles = [category.title for category in CategoryRepository(session).list()]

    assert titles == ["Food", "Job", "Travel"]


def test_list_transactions_loads_category(session_factory):
    with session_scope(session_factory) as session:
        categories = CategoryRepository(session)
        job = categories.create("Job")
        categories.save(job)
        add_transaction(session, "Salary", TransactionType.INCOME, "10", job)

    with session_scope(session_factory) as session:
        listed = TransactionRepository(session).list()

    assert len(listed) == 1
    assert listed[0].category.title == "Job"
    assert listed[0].value == Decimal("10.00")


def test_find_by_title_ignores_titles_differing_in_case(session_factory):
    with session_scope(session_factory) as session:
        categories = CategoryRepository(session)
        categories.save(categories.create("Food"))

    with session_scope(session_factory) as session:
        assert CategoryRepository(session).find_by_titles(["food", "FOOD"]) == []


def test_category_title_uses_binary_collation_on_mysql():
    ddl = str(CreateTable(Category.__table__).compile(dialect=mysql.dialect()))

    assert "COLLATE utf8mb4_bin" in ddl


def test_category_title_has_no_collation_on_sqlite():
    ddl = str(CreateTable(Category.__table__).compile(dialect=sqlite.dialect()))

    assert "COLLATE" not in ddl
