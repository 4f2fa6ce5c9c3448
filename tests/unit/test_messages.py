"""Unit tests for outbound message types."""

import json

from remote_bridge.protocol import MessageSubject, OutboundMessage, Reply


class TestReply:
    """Test Reply serialization."""

    def test_wire_shape(self):
        """Replies serialize with replyId."""
        reply = Reply(reply_id="r1", data="value")

        assert json.loads(reply.to_json()) == {"replyId": "r1", "data": "value"}

    def test_accepts_wire_name(self):
        """Replies can be built from wire field names."""
        reply = Reply.model_validate({"replyId": "r1", "data": ""})

        assert reply.reply_id == "r1"
        assert reply.data == ""

    def test_data_not_interpreted(self):
        """JSON text in data stays a string."""
        reply = Reply(reply_id="r1", data='{"a": 1}')

        assert json.loads(reply.to_json())["data"] == '{"a": 1}'


class TestOutboundMessage:
    """Test OutboundMessage."""

    def test_wire_shape(self):
        """Messages serialize as subject/data."""
        message = OutboundMessage(subject="status", data="ok")

        assert json.loads(message.to_json()) == {"subject": "status", "data": "ok"}
        assert message.is_error() is False

    def test_error_factory(self):
        """error() uses the reserved subject."""
        message = OutboundMessage.error("boom")

        assert message.subject == MessageSubject.ERROR.value
        assert message.is_error() is True
        assert json.loads(message.to_json()) == {"subject": "error", "data": "boom"}
