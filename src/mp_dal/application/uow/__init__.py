"""Application UnitOfWork – transaction port and decorator."""
from mp_dal.application.uow.manager import TransactionCoordinator
from mp_dal.application.uow.decorators import transactional

__all__ = ["TransactionCoordinator", "transactional"]
