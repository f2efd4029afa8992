"""
Tests for the core Pydantic data models.

These models form the data contract between the controller, the composer
and the UI, so their validation and immutability are critical.
"""

from datetime import datetime

import pytest
from careerguide.models import (
    ASSISTANT_ROLE,
    KNOWN_STAGES,
    SYSTEM_ROLE,
    USER_ROLE,
    ChatTurn,
    CompletionOptions,
    ConversationState,
    Message,
    MessageMetadata,
    QuickAction,
    RoleCategory,
    Speaker,
    Stage,
)
from pydantic import ValidationError


class TestMessage:
    """Test Message validation and behavior."""

    def test_defaults(self):
        """Test a message gets an id, a timestamp and no quick actions."""
        msg = Message(speaker=Speaker.USER, text="Hello!")
        assert msg.id
        assert isinstance(msg.created_at, datetime)
        assert msg.created_at.tzinfo is not None
        assert msg.quick_actions == ()
        assert msg.metadata is None

    def test_speaker_accepts_string_values(self):
        """Test that enum values are accepted as plain strings."""
        msg = Message(speaker="agent", text="Hi there!")
        assert msg.speaker is Speaker.AGENT

    def test_invalid_speaker_rejected(self):
        """Test that unknown speakers are rejected."""
        with pytest.raises(ValidationError):
            Message(speaker="system", text="Nope")

    def test_message_is_frozen(self):
        """Test that messages cannot be mutated after creation."""
        msg = Message(speaker=Speaker.USER, text="Original")
        with pytest.raises(ValidationError):
            msg.text = "Modified"
        assert msg.text == "Original"

    def test_ids_are_unique_and_ordered(self):
        """Test that ids are unique and sort in creation order."""
        messages = [Message(speaker=Speaker.USER, text=str(i)) for i in range(20)]
        ids = [m.id for m in messages]
        assert len(set(ids)) == 20
        assert ids == sorted(ids)

    def test_quick_actions_are_a_tuple(self):
        """Test that quick actions are stored immutably."""
        msg = Message(
            speaker=Speaker.AGENT,
            text="Pick one",
            quick_actions=[QuickAction(label="A", token="a")],
        )
        assert isinstance(msg.quick_actions, tuple)
        assert msg.quick_actions[0].token == "a"

    def test_metadata_snapshot_is_frozen(self):
        """Test that metadata cannot be changed after creation."""
        meta = MessageMetadata(stage=Stage.OFFERED, role=RoleCategory.FINANCE)
        msg = Message(speaker=Speaker.AGENT, text="Congrats", metadata=meta)
        with pytest.raises(ValidationError):
            msg.metadata.stage = Stage.UNKNOWN

    def test_unicode_text(self):
        """Test Unicode content handling."""
        text = "Hello 世界! 🌍 مرحبا"
        assert Message(speaker=Speaker.USER, text=text).text == text


class TestConversationState:
    """Test ConversationState defaults and copying."""

    def test_initial_values(self):
        """Test the state starts unknown/general with no turns."""
        state = ConversationState()
        assert state.stage is Stage.UNKNOWN
        assert state.role is RoleCategory.GENERAL
        assert state.turns_since_start == 0
        assert state.freeform_context == {}

    def test_state_is_mutable(self):
        """Test that the controller can update state in place."""
        state = ConversationState()
        state.stage = Stage.EXPLORING
        state.turns_since_start += 1
        assert state.stage is Stage.EXPLORING
        assert state.turns_since_start == 1

    def test_freeform_context_not_shared(self):
        """Test that default dicts are independent across instances."""
        a = ConversationState()
        b = ConversationState()
        a.freeform_context["name"] = "Sam"
        assert b.freeform_context == {}

    def test_deep_copy_is_independent(self):
        """Test that a deep copy does not alias the context dict."""
        state = ConversationState(freeform_context={"name": "Sam"})
        copy = state.model_copy(deep=True)
        copy.freeform_context["name"] = "Alex"
        assert state.freeform_context["name"] == "Sam"


class TestEnums:
    """Test the closed stage and role sets."""

    def test_stage_values(self):
        assert {s.value for s in Stage} == {
            "exploring",
            "applied",
            "interviewing",
            "offered",
            "new_hire",
            "professional",
            "unknown",
        }

    def test_known_stages_exclude_unknown(self):
        assert Stage.UNKNOWN not in KNOWN_STAGES
        assert len(KNOWN_STAGES) == 6

    def test_role_values(self):
        assert len(RoleCategory) == 8
        assert RoleCategory("general") is RoleCategory.GENERAL


class TestChatTurn:
    """Test the completion-service turn shape."""

    def test_roles(self):
        for role in (USER_ROLE, ASSISTANT_ROLE, SYSTEM_ROLE):
            assert ChatTurn(role=role, content="x").role == role

    def test_invalid_role_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ChatTurn(role="agent", content="x")
        assert exc_info.value.errors()[0]["type"] == "literal_error"

    def test_serialization(self):
        """Test turns serialize to the OpenAI message shape."""
        turn = ChatTurn(role=USER_ROLE, content="Hello")
        assert turn.model_dump() == {"role": "user", "content": "Hello"}


class TestCompletionOptions:
    def test_defaults(self):
        options = CompletionOptions()
        assert options.temperature == 0.7
        assert options.max_tokens == 1000
        assert options.timeout == 25.0
