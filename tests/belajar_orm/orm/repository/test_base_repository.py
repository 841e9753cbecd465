import pytest
from sqlalchemy import text
from sqlalchemy.orm import Session

from belajar_orm.exceptions import RecordNotFoundError
from belajar_orm.orm.repository.base import GenericRepository, column_values, create_repository, repository_context
from belajar_orm.orm.schema import GuestBook, Name, Todo, TodoRecord, User, UserLog, Wallet
from belajar_orm.orm.scopes import paginate


@pytest.fixture
def guest_books(db_session: Session) -> list[GuestBook]:
    entries = [GuestBook(name=f"Tamu {i}", email=f"tamu{i}@example.com", message=f"Pesan {i}") for i in range(1, 6)]
    db_session.add_all(entries)
    db_session.commit()
    return entries


@pytest.fixture
def guest_book_repository(db_session: Session) -> GenericRepository[GuestBook]:
    return GenericRepository(db_session, GuestBook)


@pytest.fixture
def user_repository(db_session: Session) -> GenericRepository[User]:
    return GenericRepository(db_session, User)


def test_add_and_get_by_id(db_session: Session, guest_book_repository):
    entry = guest_book_repository.add(GuestBook(name="Budi", email="budi@example.com", message="Halo"))
    db_session.flush()

    assert guest_book_repository.get_by_id(entry.id) is entry
    assert guest_book_repository.get_by_id(999) is None


def test_add_all_and_create_all(db_session: Session):
    repo = GenericRepository(db_session, UserLog)
    repo.add_all([UserLog(user_id="1", action="a"), UserLog(user_id="1", action="b")])

    assert repo.create_all([UserLog(user_id="2", action="c")]) == 1
    assert repo.count() == 3


def test_create_populates_generated_values(guest_book_repository):
    entry = guest_book_repository.create(GuestBook(name="Budi", email="budi@example.com", message="Halo"))

    assert entry.id is not None
    assert entry.created_at is not None
    assert entry.deleted_at is None


def test_get_or_raise(guest_books, guest_book_repository):
    assert guest_book_repository.get_or_raise(1).name == "Tamu 1"

    with pytest.raises(RecordNotFoundError, match="GuestBook with key '42' not found"):
        guest_book_repository.get_or_raise(42)


def test_get_all_with_limit_and_offset(guest_books, guest_book_repository):
    assert len(guest_book_repository.get_all()) == 5
    assert len(guest_book_repository.get_all(limit=2)) == 2
    assert len(guest_book_repository.get_all(limit=10, offset=3)) == 2


def test_first_last_take(seed_users, user_repository):
    first = user_repository.first()
    last = user_repository.last()
    taken = user_repository.take()

    assert first.id == "1"
    # string ids: "9" sorts last
    assert last.id == "9"
    assert taken is not None


def test_first_with_criteria(seed_users, user_repository):
    user = user_repository.first(User.password == "rahasia", User.first_name.like("User%"))

    assert user.id == "10"


def test_find_with_criteria_and_scopes(seed_users, user_repository):
    users = user_repository.find(User.password == "rahasia", scopes=(paginate(page=1, size=4),))

    assert len(users) == 4


def test_find_by_keyword_conditions(seed_users, user_repository):
    users = user_repository.find_by(first_name="User 5", password="rahasia")

    assert [u.id for u in users] == ["5"]


def test_save_inserts_then_updates(db_session: Session, seed_users, user_repository):
    saved = user_repository.save(User(id="99", password="rahasia", name=Name("Baru")))
    db_session.commit()
    assert saved.name.first_name == "Baru"

    user = user_repository.get_by_id("1")
    user.name = Name(first_name="Nathan", last_name=user.name.last_name)
    user_repository.save(user)
    db_session.commit()

    db_session.expire_all()
    assert user_repository.get_by_id("1").name == Name("Nathan", "", "Setiadi")
    assert user_repository.exists("99")


def test_update_columns_returns_rows_affected(db_session: Session, seed_users, user_repository):
    affected = user_repository.update_columns(
        {"middle_name": "", "last_name": "Morro"},
        User.id == "1",
    )

    assert affected == 1
    assert user_repository.get_by_id("1").last_name == "Morro"

    assert user_repository.update_columns({"password": "diubah"}, User.password == "rahasia") == 10


def test_update_columns_skips_soft_deleted(db_session: Session, seed_wallets):
    repo = GenericRepository(db_session, Wallet)
    repo.delete(repo.find(Wallet.user_id == "3")[0])

    assert repo.update_columns({"balance": 7}, Wallet.balance < 600_000) == 1


def test_delete_hard_deletes_plain_model(db_session: Session, seed_users, user_repository):
    user_repository.delete(user_repository.get_by_id("10"))
    db_session.commit()

    assert user_repository.get_by_id("10") is None
    assert db_session.execute(text("SELECT COUNT(*) FROM users WHERE id = '10'")).scalar_one() == 0


def test_delete_soft_deletes_when_supported(db_session: Session, guest_books, guest_book_repository):
    guest_book_repository.delete(guest_book_repository.get_by_id(1))
    db_session.commit()

    assert guest_book_repository.get_by_id(1) is None
    assert guest_book_repository.get_by_id_unscoped(1).is_deleted
    assert guest_book_repository.count() == 4


def test_delete_by_id(db_session: Session, guest_books, guest_book_repository):
    assert guest_book_repository.delete_by_id(2) is True
    assert guest_book_repository.delete_by_id(2) is False
    assert guest_book_repository.delete_by_id(999) is False


def test_delete_where(db_session: Session, seed_users, guest_books, user_repository, guest_book_repository):
    assert guest_book_repository.delete_where(GuestBook.name.in_(["Tamu 1", "Tamu 2"])) == 2
    assert guest_book_repository.count() == 3
    assert len(guest_book_repository.find_unscoped()) == 5

    assert user_repository.delete_where(User.id.in_(["8", "9", "404"])) == 2
    assert user_repository.count() == 8


def test_delete_where_nothing_matches(seed_users, user_repository):
    assert user_repository.delete_where(User.id == "404") == 0


def test_hard_delete_removes_soft_deletable_row(db_session: Session, guest_books, guest_book_repository):
    guest_book_repository.hard_delete(guest_book_repository.get_by_id(3))
    db_session.commit()

    assert guest_book_repository.get_by_id_unscoped(3) is None
    assert len(guest_book_repository.find_unscoped()) == 4


def test_count_with_criteria(guest_books, guest_book_repository):
    assert guest_book_repository.count() == 5
    assert guest_book_repository.count(GuestBook.name == "Tamu 3") == 1


def test_insert_values(db_session: Session):
    repo = GenericRepository(db_session, TodoRecord)

    assert repo.insert_values({"user_id": "1", "task": "Belajar"}) == 1
    assert repo.first().task == "Belajar"


def test_column_values_skips_relationships_and_unset_columns():
    user = User(id="1", password="rahasia", name=Name("Yonathan"), wallet=Wallet(balance=10))

    values = column_values(user)

    assert values["id"] == "1"
    assert values["first_name"] == "Yonathan"
    assert "wallet" not in values
    assert "created_at" not in values


def test_create_repository(db_session: Session):
    repo = create_repository(db_session, UserLog)

    assert isinstance(repo, GenericRepository)
    assert repo.model_cls is UserLog


def test_repository_context_commits(session_factory):
    with repository_context(session_factory, GuestBook) as (repo, uow):
        repo.add(GuestBook(name="Budi", email="budi@example.com", message="Halo"))
        uow.commit()

    with repository_context(session_factory, GuestBook) as (repo, _):
        assert repo.count() == 1


def test_repository_context_discards_uncommitted(session_factory):
    with repository_context(session_factory, GuestBook) as (repo, _):
        repo.add(GuestBook(name="Budi", email="budi@example.com", message="Halo"))

    with repository_context(session_factory, GuestBook) as (repo, _):
        assert repo.count() == 0


def test_save_revives_soft_deleted_row(db_session: Session):
    repo = GenericRepository(db_session, TodoRecord)
    record = repo.create(TodoRecord(user_id="1", task="a"))
    record_id = record.id
    repo.delete(record)
    db_session.commit()
    assert repo.get_by_id(record_id) is None

    saved = repo.save(TodoRecord(id=record_id, task="b"))
    db_session.commit()

    assert saved.id == record_id
    assert saved.deleted_at is None
    assert saved.user_id == "1"
    assert repo.get_by_id(record_id).task == "b"
    assert len(repo.find_unscoped()) == 1


def test_save_revives_flag_soft_deleted_row(db_session: Session):
    repo = GenericRepository(db_session, Todo)
    todo = repo.create(Todo(user_id="1", task="a"))
    todo_id = todo.id
    repo.delete(todo)
    db_session.commit()

    repo.save(Todo(id=todo_id, user_id="1", task="b"))
    db_session.commit()

    revived = repo.get_by_id(todo_id)
    assert revived is not None
    assert revived.deleted_at == 0
    assert revived.task == "b"


def test_save_keeps_deleted_state_of_loaded_entity(db_session: Session, guest_books, guest_book_repository):
    entry = guest_book_repository.get_by_id(1)
    guest_book_repository.delete(entry)
    db_session.commit()

    entry.message = "Diubah"
    guest_book_repository.save(entry)
    db_session.commit()

    assert guest_book_repository.get_by_id(1) is None
    assert guest_book_repository.get_by_id_unscoped(1).message == "Diubah"
