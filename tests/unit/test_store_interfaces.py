"""
The SQLAlchemy stores must provide every coroutine the services' Protocols declare.
"""
import inspect

import pytest

from interview_coach.data import DocumentStore, FeedbackStore, SessionStore
from interview_coach.data.interfaces import DocumentRepository, FeedbackRepository, SessionRepository


def protocol_methods(protocol):
    return {
        name
        for klass in protocol.__mro__
        if klass.__name__ not in ("Protocol", "Generic", "object")
        for name, member in vars(klass).items()
        if inspect.iscoroutinefunction(member)
    }


@pytest.mark.parametrize("store, protocol", [
    (DocumentStore, DocumentRepository),
    (SessionStore, SessionRepository),
    (FeedbackStore, FeedbackRepository),
])
def test_store_implements_protocol(store, protocol):
    expected = protocol_methods(protocol)
    assert expected, f"{protocol.__name__} declares no methods"

    for name in expected:
        implementation = getattr(store, name, None)
        assert inspect.iscoroutinefunction(implementation), f"{store.__name__}.{name} missing"
        declared = list(inspect.signature(getattr(protocol, name)).parameters)
        assert list(inspect.signature(implementation).parameters) == declared, f"{store.__name__}.{name} signature"


def test_document_repository_includes_reader_lookup():
    assert "find_by_user_and_type" in protocol_methods(DocumentRepository)
    assert {"create", "list_for_user", "save"} <= protocol_methods(SessionRepository)
