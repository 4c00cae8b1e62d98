"""Testing support – sample entity graph and SQLite helpers.

Used by this package's own tests and handy for applications that want an
in-memory database wired the same way::

    engine = await create_engine_with_schema()
    session_factory = make_session_factory(engine)
    await seed_people(session_factory)
"""
from mp_dal.testing.models import (
    Base,
    Call,
    EmailAddress,
    Membership,
    Person,
    PhoneNumber,
    build_registry,
    create_engine_with_schema,
    make_session_factory,
    seed_people,
)

__all__ = [
    "Base",
    "Call",
    "EmailAddress",
    "Membership",
    "Person",
    "PhoneNumber",
    "build_registry",
    "create_engine_with_schema",
    "make_session_factory",
    "seed_people",
]
