from apps.storefront.dtos import AuthSession
from apps.storefront.session import SessionContext


def test_new_context_is_anonymous():
    session = SessionContext()
    assert not session.is_authenticated
    assert session.snapshot() == AuthSession()


def test_start_and_clear_move_all_fields_together():
    session = SessionContext()
    session.start("tok", "crio.do", 5000)
    assert session.snapshot() == AuthSession(token="tok", username="crio.do", balance=5000)
    session.clear()
    assert session.snapshot() == AuthSession()


def test_snapshot_is_detached():
    session = SessionContext()
    session.start("tok", "crio.do", 5000)
    snap = session.snapshot()
    snap.token = "other"
    assert session.token == "tok"
