"""
Defines the core Pydantic data models for the career agent.

These models are the validated data contract between the controller, the
prompt composer, the completion service and the UI surface. Chat turns sent
to the completion service follow the OpenAI SDK message shape.
"""

import itertools
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# --- Constants ---
USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"
SYSTEM_ROLE = "system"
Role = Literal[USER_ROLE, ASSISTANT_ROLE, SYSTEM_ROLE]

STAGE_TOKEN_PREFIX = "stage_"
ROLE_TOKEN_PREFIX = "role_"
RETRY_TOKEN = "retry"


class Speaker(str, Enum):
    USER = "user"
    AGENT = "agent"


class Stage(str, Enum):
    """Where the user is in the hiring and employment lifecycle."""

    EXPLORING = "exploring"
    APPLIED = "applied"
    INTERVIEWING = "interviewing"
    OFFERED = "offered"
    NEW_HIRE = "new_hire"
    PROFESSIONAL = "professional"
    UNKNOWN = "unknown"


class RoleCategory(str, Enum):
    """The professional discipline the user is targeting."""

    SOFTWARE_ENGINEERING = "software_engineering"
    DATA_SCIENCE = "data_science"
    PRODUCT_MANAGEMENT = "product_management"
    OPERATIONS = "operations"
    DESIGN = "design"
    MARKETING = "marketing"
    FINANCE = "finance"
    GENERAL = "general"


KNOWN_STAGES = tuple(stage for stage in Stage if stage is not Stage.UNKNOWN)

_message_sequence = itertools.count(1)


def _next_message_id() -> str:
    return f"{next(_message_sequence):08d}-{uuid.uuid4().hex[:8]}"


# --- Models ---
class QuickAction(BaseModel):
    """A labelled one-tap reply offered alongside an agent message."""

    model_config = ConfigDict(frozen=True)

    label: str
    token: str


class MessageMetadata(BaseModel):
    """Stage and role in effect when a message was produced."""

    model_config = ConfigDict(frozen=True)

    stage: Stage
    role: RoleCategory


class Message(BaseModel):
    """One turn of the conversation as shown to the user.

    Messages are frozen: once appended to a history they cannot change.
    ``quick_actions`` is always present; an empty tuple means no actions are
    offered.
    """

    model_config = ConfigDict(frozen=True)

    speaker: Speaker
    text: str
    id: str = Field(default_factory=_next_message_id)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    quick_actions: Tuple[QuickAction, ...] = ()
    metadata: Optional[MessageMetadata] = None


class ConversationState(BaseModel):
    """The mutable session record owned by a single controller."""

    stage: Stage = Stage.UNKNOWN
    role: RoleCategory = RoleCategory.GENERAL
    turns_since_start: int = 0
    freeform_context: Dict[str, str] = Field(default_factory=dict)


class ChatTurn(BaseModel):
    """A role-tagged turn sent to the completion service."""

    role: Role
    content: str


class CompletionOptions(BaseModel):
    """Generation options for a single completion request.

    ``timeout`` is in seconds.
    """

    temperature: float = 0.7
    max_tokens: int = 1000
    timeout: float = 25.0
