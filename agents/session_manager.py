"""
Conversation session manager - ordered, append-only chat sessions
replayed as context for each new exchange
"""

import threading
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from models.chat import ChatMessage
from services.context_assembler import ContextAssembler
from services.knowledge_store import KnowledgeStore
from services.responders import ResponseStrategy
from utils.errors import InputError, PersistenceError

DEFAULT_HISTORY_LIMIT = 20
DEFAULT_MAX_VIEWS = 1000

IDLE = "idle"
AWAITING_RESPONSE = "awaiting_response"


def error_reply(reason: str) -> str:
    return f"Sorry, I encountered an error: {reason}. Please try again."


class ConversationSessionManager:
    """
    Orchestrates chat turns for any number of sessions.

    Each send appends the user turn to the caller's view immediately,
    replays the last `history_limit` persisted messages as context, and
    persists the user/assistant pair in one write. There is no
    per-session mutual exclusion: two concurrent sends for one session
    both complete, and their turns interleave in `created_at` order.

    The in-memory view keeps at most `history_limit` recent messages per
    session and at most `max_views` sessions; the least recently used
    idle session is evicted first. The store stays the record of truth.
    """

    def __init__(self, store: KnowledgeStore, assembler: ContextAssembler,
                 responder: ResponseStrategy, history_limit: int = DEFAULT_HISTORY_LIMIT,
                 max_views: int = DEFAULT_MAX_VIEWS):
        """
        Initialize the session manager

        Args:
            store: Knowledge store holding the candidate records and chat history
            assembler: Context assembler
            responder: Response strategy selected at startup
            history_limit: Maximum persisted messages replayed per turn
            max_views: Maximum sessions whose view is held in memory
        """
        self.store = store
        self.assembler = assembler
        self.responder = responder
        self.history_limit = history_limit
        self.max_views = max_views
        self._views: "OrderedDict[str, List[ChatMessage]]" = OrderedDict()
        self._in_flight: Dict[str, int] = {}
        self._lock = threading.Lock()

    def session_state(self, session_id: str) -> str:
        with self._lock:
            return AWAITING_RESPONSE if self._in_flight.get(session_id) else IDLE

    def get_messages(self, session_id: str) -> List[ChatMessage]:
        """The in-memory view of a session, oldest first"""
        with self._lock:
            return list(self._views.get(session_id, []))

    def clear_messages(self, session_id: str) -> None:
        """Reset the in-memory view. Persisted history is never deleted."""
        with self._lock:
            self._views.pop(session_id, None)

    def _append_to_view(self, message: ChatMessage) -> None:
        with self._lock:
            view = self._views.setdefault(message.session_id, [])
            view.append(message)
            # always keep at least the latest user/assistant pair
            del view[:-max(self.history_limit, 2)]
            self._views.move_to_end(message.session_id)
            self._evict_idle_views(keep=message.session_id)

    def _evict_idle_views(self, keep: str) -> None:
        # caller holds self._lock
        for session_id in list(self._views):
            if len(self._views) <= self.max_views:
                return
            if session_id != keep and not self._in_flight.get(session_id):
                del self._views[session_id]

    def _remove_from_view(self, *messages: ChatMessage) -> None:
        with self._lock:
            for message in messages:
                view = self._views.get(message.session_id, [])
                if message in view:
                    view.remove(message)
                if not view:
                    self._views.pop(message.session_id, None)

    def _set_in_flight(self, session_id: str, delta: int) -> None:
        with self._lock:
            count = self._in_flight.get(session_id, 0) + delta
            if count > 0:
                self._in_flight[session_id] = count
            else:
                self._in_flight.pop(session_id, None)

    @staticmethod
    def _timestamp_after(previous: datetime) -> datetime:
        now = datetime.now(timezone.utc)
        return now if now > previous else previous + timedelta(microseconds=1)

    def send_message(self, session_id: str, text: str,
                     on_user_turn: Optional[Callable[[ChatMessage], None]] = None) -> ChatMessage:
        """
        Run one chat exchange

        Args:
            session_id: Opaque session identifier
            text: Visitor message
            on_user_turn: Called with the user turn before the response strategy runs

        Returns:
            The assistant ChatMessage; on response failure its content explains the error

        Raises:
            InputError: blank session id or message
            PersistenceError: the store could not be read or written
        """
        if not session_id or not session_id.strip():
            raise InputError("session_id is required")
        if not text or not text.strip():
            raise InputError("message is required")

        user_message = ChatMessage(session_id=session_id, role="user", content=text)
        self._append_to_view(user_message)
        if on_user_turn is not None:
            on_user_turn(user_message)

        self._set_in_flight(session_id, 1)
        try:
            try:
                history = self.store.list_messages(session_id, self.history_limit)
                context = self.assembler.assemble_snapshot(self.store.load_snapshot())
            except PersistenceError:
                # nothing was persisted, so the view drops the turn too
                self._remove_from_view(user_message)
                raise

            turns = [m.as_turn() for m in history] + [user_message.as_turn()]
            try:
                reply = self.responder.respond(context.text, turns)
            except Exception as e:
                print(f"⚠️ Response strategy failed for session {session_id[:8]}: {str(e)}")
                reply = error_reply(str(e) or type(e).__name__)

            assistant_message = ChatMessage(
                session_id=session_id,
                role="assistant",
                content=reply,
                created_at=self._timestamp_after(user_message.created_at),
            )
            self._append_to_view(assistant_message)
            try:
                self.store.append_messages(session_id, [user_message, assistant_message])
            except PersistenceError:
                # neither turn was written, so neither stays in the view
                self._remove_from_view(user_message, assistant_message)
                raise
            return assistant_message
        finally:
            self._set_in_flight(session_id, -1)
