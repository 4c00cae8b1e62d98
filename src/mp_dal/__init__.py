"""
mp_dal – data-access layer with paginated search over joined entity graphs.

Import path convention::

    from mp_dal.kernel.errors import ValidationError
    from mp_dal.kernel.metadata import EntityRegistry, QueryShape
    from mp_dal.application.search import SearchService, parse_search_query
    from mp_dal.adapters.sqlalchemy import SearchDao, SqlAlchemyDataContext
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
