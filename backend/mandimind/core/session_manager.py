"""
Session manager for live negotiation sessions.

WHAT: In-memory registry of negotiation sessions with async counterpart replies
WHY: One place that owns "one pending reply per session" and stale-reply discarding
HOW: Lock-guarded cache of entries (snapshot + generation + pending flag),
     cosmetic asyncio delay between the user's offer and the counterpart's reply
"""

import asyncio
import random
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from .config import settings
from .negotiation_engine import NegotiationEngine, DEFAULT_NUDGE_STEP
from ..data.commodities import get_commodity_by_id
from ..models.negotiation import CoachingTip, NegotiationSession, Role
from ..utils.exceptions import ResponsePendingException, SessionNotFoundException
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SessionEntry:
    """Cache slot for one UI instance's session."""
    session: NegotiationSession
    generation: int = 0
    pending: bool = False
    last_touched: datetime = field(default_factory=datetime.utcnow)


class SessionManager:
    """
    Manage session lifecycle and the delayed counterpart replies.

    WHAT: Create/read/update/delete for sessions plus offer submission
    WHY: The engine is pure; something has to hold state between requests
    HOW: Dict of SessionEntry under a threading.Lock; generation counter per
         entry invalidates replies that were pending when the session reset
    """

    def __init__(
        self,
        engine: Optional[NegotiationEngine] = None,
        min_delay: Optional[float] = None,
        max_delay: Optional[float] = None,
        delay_rng: Optional[random.Random] = None,
    ):
        """Initialize session manager with in-memory cache."""
        self.engine = engine or NegotiationEngine()
        self.min_delay = settings.TYPING_DELAY_MIN_SECONDS if min_delay is None else min_delay
        self.max_delay = settings.TYPING_DELAY_MAX_SECONDS if max_delay is None else max_delay
        self.delay_rng = delay_rng or random.Random()
        self.active_sessions: Dict[str, SessionEntry] = {}
        self._cache_lock = threading.Lock()
        self._cleanup_thread: Optional[threading.Timer] = None

    # ----- background cleanup -----

    def start_cleanup_thread(self):
        """
        Start background timer for cache cleanup.

        WHAT: Periodic eviction of idle sessions
        WHY: Prevent memory growth from abandoned browser tabs
        HOW: threading.Timer re-armed every SESSION_CLEANUP_HOURS
        """
        def cleanup_task():
            self.cleanup_stale_sessions()
            self._schedule_cleanup(cleanup_task)

        self._schedule_cleanup(cleanup_task)
        logger.info(f"Started session cleanup thread (interval: {settings.SESSION_CLEANUP_HOURS}h)")

    def _schedule_cleanup(self, task: Callable[[], None]):
        self._cleanup_thread = threading.Timer(settings.SESSION_CLEANUP_HOURS * 3600, task)
        self._cleanup_thread.daemon = True
        self._cleanup_thread.start()

    def stop_cleanup_thread(self):
        if self._cleanup_thread is not None:
            self._cleanup_thread.cancel()
            self._cleanup_thread = None

    def cleanup_stale_sessions(self, now: Optional[datetime] = None) -> int:
        """
        Remove sessions idle longer than SESSION_TTL_MINUTES.

        Returns:
            Number of sessions evicted
        """
        now = now or datetime.utcnow()
        cutoff = now - timedelta(minutes=settings.SESSION_TTL_MINUTES)
        with self._cache_lock:
            stale = [
                session_id for session_id, entry in self.active_sessions.items()
                if entry.last_touched < cutoff and not entry.pending
            ]
            for session_id in stale:
                del self.active_sessions[session_id]
                logger.info(f"Cleaned up stale session: {session_id}")
        if stale:
            logger.info(f"Removed {len(stale)} stale sessions from cache")
        return len(stale)

    # ----- CRUD -----

    def create_session(self, language: Optional[str] = None) -> NegotiationSession:
        """Create a fresh session in the selecting state."""
        session = self.engine.new_session(language)
        with self._cache_lock:
            self.active_sessions[session.session_id] = SessionEntry(session=session)
        logger.info(f"Created session {session.session_id} (language={session.language})")
        return session

    def get_session(self, session_id: str) -> NegotiationSession:
        with self._cache_lock:
            return self._get_entry(session_id).session

    def is_pending(self, session_id: str) -> bool:
        with self._cache_lock:
            return self._get_entry(session_id).pending

    def delete_session(self, session_id: str) -> None:
        with self._cache_lock:
            if self.active_sessions.pop(session_id, None) is None:
                raise SessionNotFoundException(session_id)
        logger.info(f"Deleted session {session_id}")

    def session_count(self) -> int:
        with self._cache_lock:
            return len(self.active_sessions)

    def _get_entry(self, session_id: str) -> SessionEntry:
        # Caller holds _cache_lock
        entry = self.active_sessions.get(session_id)
        if entry is None:
            raise SessionNotFoundException(session_id)
        return entry

    def _update(self, session_id: str, transition: Callable[[NegotiationSession], NegotiationSession]) -> NegotiationSession:
        """Apply a synchronous engine transition under the lock."""
        with self._cache_lock:
            entry = self._get_entry(session_id)
            if entry.pending:
                raise ResponsePendingException(session_id)
            entry.session = transition(entry.session)
            entry.last_touched = datetime.utcnow()
            return entry.session

    # ----- synchronous transitions -----

    def choose_role(self, session_id: str, role: Role) -> NegotiationSession:
        return self._update(session_id, lambda s: self.engine.choose_role(s, role))

    def choose_commodity(self, session_id: str, commodity_id: str) -> NegotiationSession:
        commodity = get_commodity_by_id(commodity_id)
        return self._update(session_id, lambda s: self.engine.choose_commodity(s, commodity))

    def set_language(self, session_id: str, language: str) -> NegotiationSession:
        with self._cache_lock:
            entry = self._get_entry(session_id)
            entry.session = self.engine.change_language(entry.session, language)
            entry.last_touched = datetime.utcnow()
            return entry.session

    def reset_session(self, session_id: str) -> NegotiationSession:
        """
        Discard the negotiation and start over in selecting.

        Bumps the generation so a reply still pending for the old
        negotiation is dropped when it fires.
        """
        with self._cache_lock:
            entry = self._get_entry(session_id)
            entry.session = self.engine.reset(entry.session)
            entry.generation += 1
            entry.pending = False
            entry.last_touched = datetime.utcnow()
            return entry.session

    def coaching_tip(self, session_id: str) -> Optional[CoachingTip]:
        with self._cache_lock:
            session = self._get_entry(session_id).session
        return self.engine.coaching_tip(session)

    # ----- offers (async: cosmetic typing delay) -----

    async def submit_offer(self, session_id: str, raw_input: Optional[str]) -> NegotiationSession:
        """
        Submit typed input as an offer.

        Validation errors are raised before anything changes.
        """
        with self._cache_lock:
            session = self._get_entry(session_id).session
        price = self.engine.parse_offer(raw_input, session.language)
        return await self._exchange(session_id, lambda s: price)

    async def quick_split(self, session_id: str) -> NegotiationSession:
        return await self._exchange(session_id, self.engine.split_price)

    async def quick_accept(self, session_id: str) -> NegotiationSession:
        return await self._exchange(session_id, lambda s: s.counterpart_price)

    async def quick_nudge(self, session_id: str, amount: int = DEFAULT_NUDGE_STEP) -> NegotiationSession:
        return await self._exchange(session_id, lambda s: self.engine.nudge_price(s, amount))

    async def _exchange(
        self,
        session_id: str,
        price_for: Callable[[NegotiationSession], int],
    ) -> NegotiationSession:
        """
        Record the user's offer now, append the counterpart's reply after the delay.

        Returns the snapshot after the reply, or the current snapshot when the
        session was reset while the reply was pending.
        """
        with self._cache_lock:
            entry = self._get_entry(session_id)
            if entry.pending:
                raise ResponsePendingException(session_id)
            session = entry.session
            self.engine.require_active(session, "submit offer")
            price = self.engine.check_offer_price(price_for(session), session.language)
            entry.session = self.engine.record_user_offer(session, price)
            entry.pending = True
            entry.last_touched = datetime.utcnow()
            generation = entry.generation

        try:
            await self._typing_delay()
        except asyncio.CancelledError:
            self._release_pending(session_id, generation)
            raise

        with self._cache_lock:
            entry = self.active_sessions.get(session_id)
            if entry is None:
                logger.info(f"Discarding reply for deleted session {session_id}")
                raise SessionNotFoundException(session_id)
            if entry.generation != generation:
                logger.info(
                    f"Discarding stale reply for session {session_id} "
                    f"(generation {generation} != {entry.generation})"
                )
                return entry.session
            entry.session, _ = self.engine.apply_counterpart_reply(entry.session)
            entry.pending = False
            entry.last_touched = datetime.utcnow()
            return entry.session

    def _release_pending(self, session_id: str, generation: int):
        """
        Clear the pending flag after a cancelled exchange.

        The user's offer stays in the log without a reply; the next
        submission starts a new exchange from there.
        """
        with self._cache_lock:
            entry = self.active_sessions.get(session_id)
            if entry is not None and entry.generation == generation:
                entry.pending = False
                logger.info(f"Reply cancelled for session {session_id}; pending flag cleared")

    async def _typing_delay(self):
        if self.max_delay <= 0:
            # Still yield so a reset can interleave with the pending reply
            await asyncio.sleep(0)
            return
        await asyncio.sleep(self.delay_rng.uniform(self.min_delay, self.max_delay))


# Singleton instance
session_manager = SessionManager()
