"""Application CRUD – service base class."""
from mp_dal.application.crud.service import CrudDaoPort, CrudService

__all__ = ["CrudDaoPort", "CrudService"]
