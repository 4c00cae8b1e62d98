"""SQLAlchemy adapter – sessions, transactions, search and CRUD daos."""
from mp_dal.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from mp_dal.adapters.sqlalchemy.data_context import SqlAlchemyDataContext, SqlAlchemyTransaction
from mp_dal.adapters.sqlalchemy.errors import NoRowsAffectedError, StorageErrorClassifier
from mp_dal.adapters.sqlalchemy.query import SqlAlchemyQueryShape
from mp_dal.adapters.sqlalchemy.search_dao import SearchDao
from mp_dal.adapters.sqlalchemy.dao import Dao, MutateResult

__all__ = [
    "Dao",
    "MutateResult",
    "NoRowsAffectedError",
    "SearchDao",
    "SqlAlchemyDataContext",
    "SqlAlchemyQueryShape",
    "SqlAlchemySessionFactory",
    "SqlAlchemyTransaction",
    "StorageErrorClassifier",
]
