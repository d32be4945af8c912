import pytest
from sqlalchemy.exc import OperationalError

from carechat import history
from carechat.errors import BadRequest, PersistenceFailure
from carechat.history import fetch_messages
from carechat.llm import FALLBACK_REPLY
from carechat.pipeline import REFUSAL_REPLY, process_chat_message
from carechat.schemas import SessionUser


@pytest.fixture
def session_user(user):
    return SessionUser(user_id=user.id, username=user.username)


def test_in_domain_message_is_completed_and_persisted(db, session_user, gateway):
    reply = process_chat_message(db, session_user, "I have a headache and fever", gateway)

    assert reply == gateway.reply
    assert gateway.calls == ["I have a headache and fever"]
    assert [(m.role, m.content) for m in fetch_messages(db, session_user.user_id)] == [
        ("user", "I have a headache and fever"),
        ("assistant", gateway.reply),
    ]


def test_off_topic_message_is_refused_without_side_effects(db, session_user, gateway):
    before = len(fetch_messages(db, session_user.user_id))

    reply = process_chat_message(db, session_user, "What's the weather today", gateway)

    assert reply == REFUSAL_REPLY
    assert gateway.calls == []
    assert len(fetch_messages(db, session_user.user_id)) == before


@pytest.mark.parametrize("message", ["", "   ", "\n\t"])
def test_blank_message_is_bad_request(db, session_user, gateway, message):
    with pytest.raises(BadRequest):
        process_chat_message(db, session_user, message, gateway)
    assert gateway.calls == []


def test_fallback_reply_is_persisted(db, session_user, gateway):
    gateway.reply = FALLBACK_REPLY

    assert process_chat_message(db, session_user, "sprain", gateway) == FALLBACK_REPLY
    assert fetch_messages(db, session_user.user_id)[-1].content == FALLBACK_REPLY


def test_persistence_error_surfaces_after_completion(db, session_user, gateway, monkeypatch):
    def broken_append(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(history, "append_exchange", broken_append)

    with pytest.raises(PersistenceFailure):
        process_chat_message(db, session_user, "toothache", gateway)
    assert gateway.calls == ["toothache"]
