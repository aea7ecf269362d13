#!/usr/bin/env python3
"""
Session Store Module

This module maps opaque session tokens to provider credentials. Sessions
are immutable once created and live only in process memory; a token issued
by one gateway process does not resolve on another.

@package XtreamGate
"""

# setup the imports
import asyncio, logging, secrets, time
from typing import Callable, Dict, Optional
from xtreamgate.models import ProviderCredentials, Session

# setup the logger
logger = logging.getLogger(__name__)

# bytes of randomness per token, 192 bits
TOKEN_BYTES = 24

"""
Token to credential mapping with lazy expiry

Owns the only mutable state in the gateway. Access is serialized with an
async lock so concurrent requests never see a half-written map.
"""
class SessionStore:

    """
    Initialize the SessionStore

    @param ttl: int Seconds a session stays valid
    @param clock: callable Returns the current epoch time in seconds
    """
    def __init__(self, ttl: int = 86400, clock: Callable[[], float] = time.time):

        # setup the internals
        self.ttl = ttl
        self.clock = clock
        self.sessions: Dict[str, Session] = {}
        self._lock = asyncio.Lock()

    """
    Create a new session

    Sweeps expired entries, then issues a fresh random token bound to the
    credentials.

    @param credentials: ProviderCredentials Validated provider credentials
    @return Session: The new session, holding its token and expiry
    """
    async def create(self, credentials: ProviderCredentials) -> Session:

        # make sure we have a lock
        async with self._lock:

            # clean up while we're here
            self._sweep_unlocked()

            # generate a token no live session holds
            token = secrets.token_urlsafe(TOKEN_BYTES)
            while token in self.sessions:
                token = secrets.token_urlsafe(TOKEN_BYTES)

            # hold the session
            session = Session(token=token, credentials=credentials, expires_at=self.clock() + self.ttl)
            self.sessions[token] = session

        # log it and return it
        logger.info(f"Created session for {credentials.server_url}, {len(self.sessions)} active")
        return session

    """
    Resolve a token to its session

    Unknown and expired tokens both come back as None.

    @param token: str Session token from the client
    @return Session or None: The live session, or None if invalid
    """
    async def resolve(self, token: Optional[str]) -> Optional[Session]:

        # nothing to look up
        if not token:
            return None

        # are we locked
        async with self._lock:
            session = self.sessions.get(token)

        # check the expiry on read, a sweep may not have happened yet
        if session is None or session.is_expired(self.clock()):
            return None

        # return it
        return session

    """
    Remove every expired session

    @return int: Number of sessions removed
    """
    async def sweep_expired(self) -> int:

        # make sure we have a lock
        async with self._lock:
            return self._sweep_unlocked()

    """
    Internal unlocked sweep
    Must only be called while holding self._lock.

    @return int: Number of sessions removed
    """
    def _sweep_unlocked(self) -> int:

        # find the expired tokens
        now = self.clock()
        expired = [token for token, session in self.sessions.items() if session.is_expired(now)]

        # and drop them
        for token in expired:
            del self.sessions[token]

        if expired:
            logger.debug(f"Swept {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self.sessions)
