"""
Transaction Repository - data access layer for Transaction model.
Optimized with optional session parameter for transaction reuse.
"""

from typing import Optional, List
from datetime import date
from sqlmodel import Session, select

from db_engine import get_engine
from models import Transaction


class TransactionRepository:
    """Repository for Transaction CRUD operations."""

    @staticmethod
    def add(
        user_id: int,
        text: str,
        amount_cents: int,
        transaction_type: str,
        category: str,
        transaction_date: date,
        session: Optional[Session] = None
    ) -> Transaction:
        """
        Add a new transaction to the database.

        Args:
            user_id: Owner of the transaction
            text: Description
            amount_cents: Signed amount in cents (negative for expense)
            transaction_type: 'expense' or 'income'
            category: Category name
            transaction_date: Date of the transaction
            session: Optional existing session for transaction reuse

        Returns:
            Created Transaction object
        """
        def _create_transaction(sess: Session) -> Transaction:
            transaction = Transaction(
                user_id=user_id,
                text=text,
                amount_cents=amount_cents,
                type=transaction_type,
                category=category,
                transaction_date=transaction_date
            )
            sess.add(transaction)
            sess.commit()
            sess.refresh(transaction)
            return transaction

        if session is not None:
            return _create_transaction(session)
        else:
            with Session(get_engine()) as session:
                return _create_transaction(session)

    @staticmethod
    def get_by_user(user_id: int, session: Optional[Session] = None) -> List[Transaction]:
        """
        Retrieve all transactions for a user, in creation order.

        Args:
            user_id: User ID to look up
            session: Optional existing session for transaction reuse

        Returns:
            List of Transaction objects
        """
        def _get_by_user(sess: Session) -> List[Transaction]:
            statement = (
                select(Transaction)
                .where(Transaction.user_id == user_id)
                .order_by(Transaction.created_at, Transaction.id)
            )
            results = sess.exec(statement)
            return list(results.all())

        if session is not None:
            return _get_by_user(session)
        else:
            with Session(get_engine()) as session:
                return _get_by_user(session)

    @staticmethod
    def get_by_id(transaction_id: int, session: Optional[Session] = None) -> Optional[Transaction]:
        """
        Retrieve a transaction by its ID.

        Args:
            transaction_id: Transaction ID to look up
            session: Optional existing session for transaction reuse

        Returns:
            Transaction object or None if not found
        """
        def _get_by_id(sess: Session) -> Optional[Transaction]:
            return sess.get(Transaction, transaction_id)

        if session is not None:
            return _get_by_id(session)
        else:
            with Session(get_engine()) as session:
                return _get_by_id(session)

    @staticmethod
    def update(
        transaction_id: int,
        user_id: int,
        text: str,
        amount_cents: int,
        transaction_type: str,
        category: str,
        transaction_date: date,
        session: Optional[Session] = None
    ) -> Optional[Transaction]:
        """
        Replace every mutable field of a user's transaction in one commit.

        Args:
            transaction_id: Transaction ID to update
            user_id: Owner; a transaction of another user is treated as missing
            text: New description
            amount_cents: New signed amount in cents
            transaction_type: New type
            category: New category
            transaction_date: New date
            session: Optional existing session for transaction reuse

        Returns:
            Updated Transaction object or None if not found
        """
        def _update(sess: Session) -> Optional[Transaction]:
            transaction = sess.get(Transaction, transaction_id)
            if transaction and transaction.user_id == user_id:
                transaction.text = text
                transaction.amount_cents = amount_cents
                transaction.type = transaction_type
                transaction.category = category
                transaction.transaction_date = transaction_date
                sess.add(transaction)
                sess.commit()
                sess.refresh(transaction)
                return transaction
            return None

        if session is not None:
            return _update(session)
        else:
            with Session(get_engine()) as session:
                return _update(session)

    @staticmethod
    def delete(transaction_id: int, user_id: int, session: Optional[Session] = None) -> bool:
        """
        Delete a user's transaction by its ID.

        Args:
            transaction_id: Transaction ID to delete
            user_id: Owner; a transaction of another user is left untouched
            session: Optional existing session for transaction reuse

        Returns:
            True if deleted, False if not found
        """
        def _delete(sess: Session) -> bool:
            try:
                transaction = sess.get(Transaction, transaction_id)
                if transaction and transaction.user_id == user_id:
                    sess.delete(transaction)
                    sess.commit()
                    return True
                return False
            except Exception as e:
                sess.rollback()
                raise e

        if session is not None:
            return _delete(session)
        else:
            with Session(get_engine()) as session:
                return _delete(session)
