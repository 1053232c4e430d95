"""Factory Boy helpers wired to the project's SQLAlchemy session."""

from __future__ import annotations

import factory
from motomarket.core.extensions import db


def _session():
    """Return the Flask-scoped session of the currently pushed app context."""
    return db.session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Base class configuring Factory Boy for the Flask-scoped session.

    Objects are committed, not just flushed: units of work start their own
    transactions and must not find one already open on the session.
    """

    class Meta:
        abstract = True
        sqlalchemy_session_factory = _session
        sqlalchemy_session_persistence = "commit"
