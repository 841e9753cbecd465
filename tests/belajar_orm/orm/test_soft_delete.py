from sqlalchemy import select, text
from sqlalchemy.orm import Session

from belajar_orm.orm.schema import Todo, TodoRecord, User, Wallet
from belajar_orm.orm.soft_delete import INCLUDE_DELETED, is_soft_deletable, live_criteria


def test_soft_deletable_models():
    assert is_soft_deletable(Wallet)
    assert is_soft_deletable(Todo)
    assert is_soft_deletable(TodoRecord)
    assert not is_soft_deletable(User)
    assert live_criteria(User) == []
    assert len(live_criteria(Wallet)) == 1


def test_timestamp_soft_delete_hides_row(db_session: Session):
    record = TodoRecord(user_id="1", task="Belajar ORM")
    db_session.add(record)
    db_session.flush()

    record.mark_deleted()
    db_session.commit()

    assert record.is_deleted
    assert db_session.execute(select(TodoRecord)).scalars().all() == []
    raw = db_session.execute(text("SELECT COUNT(*) FROM todo_records")).scalar_one()
    assert raw == 1


def test_flag_soft_delete_hides_row(db_session: Session):
    todo = Todo(user_id="1", task="Belajar ORM")
    db_session.add(todo)
    db_session.flush()
    assert not todo.is_deleted

    todo.mark_deleted()
    db_session.commit()

    assert todo.deleted_at > 0
    assert db_session.execute(select(Todo)).scalars().all() == []


def test_include_deleted_returns_soft_deleted_rows(db_session: Session):
    live = Todo(user_id="1", task="live")
    gone = Todo(user_id="1", task="gone")
    db_session.add_all([live, gone])
    db_session.flush()
    gone.mark_deleted()
    db_session.commit()

    stmt = select(Todo).order_by(Todo.id)
    scoped = db_session.execute(stmt).scalars().all()
    unscoped = db_session.execute(stmt.execution_options(**{INCLUDE_DELETED: True})).scalars().all()

    assert [t.task for t in scoped] == ["live"]
    assert [t.task for t in unscoped] == ["live", "gone"]


def test_soft_deleted_rows_hidden_from_relationship_loads(db_session: Session, seed_wallets):
    wallet = db_session.execute(select(Wallet).where(Wallet.user_id == "1")).scalar_one()
    wallet.mark_deleted()
    db_session.commit()
    db_session.expire_all()

    user = db_session.get(User, "1")

    assert user.wallet is None


def test_soft_deleted_rows_hidden_from_joins(db_session: Session, seed_wallets):
    wallet = db_session.execute(select(Wallet).where(Wallet.user_id == "2")).scalar_one()
    wallet.mark_deleted()
    db_session.commit()

    ids = db_session.execute(select(User.id).join(User.wallet).order_by(User.id)).scalars().all()

    assert ids == ["1", "3"]
