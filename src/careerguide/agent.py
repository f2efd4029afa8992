"""The conversation controller for the career agent.

A ``CareerAgent`` owns one conversation: its message history and its
``ConversationState``. Each user turn is classified, composed into a prompt
and sent to the completion service. Completion failures never reach the
caller; the turn ends with a scripted fallback reply instead.
"""

import logging
import threading
from typing import Iterable, List, Optional, Union

from . import responses
from .classifier import classify
from .config import Settings
from .errors import CompletionError, InputError
from .llm import CompletionService, from_settings
from .models import (
    RETRY_TOKEN,
    ROLE_TOKEN_PREFIX,
    STAGE_TOKEN_PREFIX,
    CompletionOptions,
    ConversationState,
    Message,
    MessageMetadata,
    QuickAction,
    RoleCategory,
    Speaker,
    Stage,
)
from .prompts import compose

logger = logging.getLogger(__name__)

QUICK_ACTION_TURN_LIMIT = 2


def parse_stage_token(token: str) -> Optional[Stage]:
    """Returns the stage a ``stage_*`` token selects, or None."""
    if not token.startswith(STAGE_TOKEN_PREFIX):
        return None
    try:
        return Stage(token[len(STAGE_TOKEN_PREFIX) :])
    except ValueError:
        return None


def parse_role_token(token: str) -> Optional[RoleCategory]:
    """Returns the role a ``role_*`` token selects, or None."""
    if not token.startswith(ROLE_TOKEN_PREFIX):
        return None
    try:
        return RoleCategory(token[len(ROLE_TOKEN_PREFIX) :])
    except ValueError:
        return None


class CareerAgent:
    """Stateful controller for a single career-guidance conversation.

    Create one instance per conversation. Public operations hold an internal
    re-entrant lock, so overlapping calls from several threads run one after
    another and history appends never interleave.

    Parameters
    ----------
    llm : CompletionService, optional
        Backend used to generate replies. Defaults to the provider configured
        in the environment (see ``careerguide.config``).
    options : CompletionOptions, optional
        Generation options for every request. Defaults to the configured
        settings, or ``CompletionOptions()`` when ``llm`` is given.
    settings : Settings, optional
        Used to build the default ``llm`` and ``options``.
    """

    def __init__(
        self,
        llm: Optional[CompletionService] = None,
        options: Optional[CompletionOptions] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        if llm is None:
            settings = settings or Settings.from_env()
            llm = from_settings(settings)
        if options is None:
            options = settings.completion_options() if settings else CompletionOptions()

        self.llm = llm
        self.options = options
        self._lock = threading.RLock()
        self._history: List[Message] = []
        self._state = ConversationState()

    # --- Session lifecycle ---

    def start_session(self, display_name: Optional[str] = None) -> Message:
        """Starts a fresh conversation and returns the greeting."""
        with self._lock:
            self._reset()
            name = (display_name or "").strip() or None
            if name:
                self._state.freeform_context["name"] = name
            greeting = self._agent_message(
                responses.greeting_text(name), responses.STAGE_MENU
            )
            return self._append(greeting)

    def reset(self) -> None:
        """Clears history and state. Does not emit a greeting."""
        with self._lock:
            self._reset()

    # --- Turn processing ---

    def process_message(self, text: str) -> Optional[Message]:
        """Answers one user message.

        Returns the agent reply, or None when ``text`` is empty or only
        whitespace, in which case nothing is recorded.
        """
        with self._lock:
            return self._process(text)

    def handle_quick_action(self, token: str) -> Optional[Message]:
        """Handles a tapped quick action.

        ``stage_<stage>`` selects a stage and answers with a scripted welcome
        without calling the completion service. ``role_<role>`` selects a role
        and then sends the role's label as a normal message. ``retry`` resends
        the most recent user message. Any other token is sent as chat text.
        """
        with self._lock:
            token = token or ""
            stage = parse_stage_token(token)
            if stage is not None:
                return self._select_stage(stage)

            role = parse_role_token(token)
            if role is not None:
                self._state.role = role
                return self._process(responses.ROLE_LABELS[role])

            if token == RETRY_TOKEN:
                last_text = self._last_user_text()
                if last_text is not None:
                    return self._process(last_text)

            return self._process(token)

    # --- Explicit overrides ---

    def set_stage(self, stage: Union[Stage, str]) -> None:
        with self._lock:
            self._state.stage = Stage(stage)

    def set_role(self, role: Union[RoleCategory, str]) -> None:
        with self._lock:
            self._state.role = RoleCategory(role)

    # --- Read access ---

    def get_history(self) -> List[Message]:
        """Returns a copy of the history. Messages themselves are frozen."""
        with self._lock:
            return list(self._history)

    def get_state(self) -> ConversationState:
        """Returns a deep copy of the current state."""
        with self._lock:
            return self._state.model_copy(deep=True)

    # --- Internals ---

    def _reset(self) -> None:
        self._history = []
        self._state = ConversationState()

    def _process(self, text: str) -> Optional[Message]:
        try:
            text = self._require_text(text)
        except InputError:
            logger.debug("Ignoring empty user message")
            return None

        prior_history = list(self._history)
        self._append(Message(speaker=Speaker.USER, text=text, metadata=self._snapshot()))

        stage, role = classify(text, self._state.stage, self._state.role)
        if stage is not None:
            logger.debug("Classified stage as %s", stage.value)
            self._state.stage = stage
        if role is not None:
            logger.debug("Classified role as %s", role.value)
            self._state.role = role
        self._state.turns_since_start += 1

        turns = compose(self._state, prior_history, text)
        try:
            reply = self.llm.complete(turns, self.options)
        except CompletionError as e:
            logger.warning("Completion failed (%s): %s", type(e).__name__, e)
            return self._append_fallback()
        except Exception:
            logger.exception("Unexpected error from completion service")
            return self._append_fallback()

        if not isinstance(reply, str) or not reply.strip():
            logger.warning("Completion service returned no usable text")
            return self._append_fallback()

        return self._append(self._agent_message(reply, self._contextual_actions()))

    def _select_stage(self, stage: Stage) -> Message:
        self._state.stage = stage
        self._append(
            Message(
                speaker=Speaker.USER,
                text=responses.STAGE_STATEMENTS[stage],
                metadata=self._snapshot(),
            )
        )
        text, actions = responses.welcome_for(stage)
        return self._append(self._agent_message(text, actions))

    def _contextual_actions(self) -> Iterable[QuickAction]:
        if (
            self._state.stage == Stage.UNKNOWN
            and self._state.turns_since_start <= QUICK_ACTION_TURN_LIMIT
        ):
            return responses.STAGE_MENU
        return ()

    def _append_fallback(self) -> Message:
        return self._append(
            self._agent_message(responses.FALLBACK_TEXT, responses.FALLBACK_ACTIONS)
        )

    def _last_user_text(self) -> Optional[str]:
        for message in reversed(self._history):
            if message.speaker == Speaker.USER:
                return message.text
        return None

    def _agent_message(self, text: str, actions: Iterable[QuickAction]) -> Message:
        return Message(
            speaker=Speaker.AGENT,
            text=text,
            quick_actions=tuple(actions),
            metadata=self._snapshot(),
        )

    def _snapshot(self) -> MessageMetadata:
        return MessageMetadata(stage=self._state.stage, role=self._state.role)

    def _append(self, message: Message) -> Message:
        self._history.append(message)
        return message

    @staticmethod
    def _require_text(text: Optional[str]) -> str:
        if not isinstance(text, str) or not text.strip():
            raise InputError("Message text must not be empty.")
        return text
