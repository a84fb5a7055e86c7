from datetime import date, timezone

from models import Transaction, User


def test_creation_timestamps_are_utc_aware():
    user = User(email="a@example.com", password_hash="x")
    transaction = Transaction(
        user_id=1,
        text="Lunch",
        amount_cents=-1250,
        type="expense",
        category="Food",
        transaction_date=date(2024, 1, 5),
    )

    assert user.created_at.tzinfo is timezone.utc
    assert transaction.created_at.tzinfo is timezone.utc


def test_user_with_aware_timestamp_can_be_stored(db):
    from repositories import UserRepository

    stored = UserRepository.add(email="a@example.com", password_hash="x")

    assert stored.id is not None
