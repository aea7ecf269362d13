"""
Session store tests.
Covers token issuance, expiry on read, and sweeping.
"""

import pytest

from xtreamgate.models import ProviderCredentials
from xtreamgate.services import SessionStore

DAY = 86400


class TestCreate:
    """Test session creation"""

    @pytest.mark.asyncio
    async def test_create_binds_token_to_credentials(self, store, credentials, clock):
        """A new session should hold the credentials and expire a day out"""
        session = await store.create(credentials)

        assert session.credentials == credentials
        assert session.expires_at == clock.now + DAY
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_tokens_are_unique_and_unguessable(self, store, credentials):
        """Tokens should never repeat and carry well over 128 bits"""
        tokens = {(await store.create(credentials)).token for _ in range(200)}

        assert len(tokens) == 200
        # 24 random bytes encode to 32 urlsafe characters
        assert all(len(token) >= 32 for token in tokens)

    @pytest.mark.asyncio
    async def test_create_sweeps_expired_sessions(self, store, credentials, clock):
        """Creating a session should drop ones that already expired"""
        await store.create(credentials)
        clock.advance(DAY)

        await store.create(credentials)

        assert len(store) == 1


class TestResolve:
    """Test token resolution"""

    @pytest.mark.asyncio
    async def test_resolves_until_expiry(self, store, credentials, clock):
        """Token should resolve for every time before its expiry"""
        session = await store.create(credentials)

        clock.advance(DAY - 1)
        resolved = await store.resolve(session.token)

        assert resolved is not None
        assert resolved.credentials == credentials

    @pytest.mark.asyncio
    async def test_invalid_at_and_after_expiry(self, store, credentials, clock):
        """Token should be invalid once its expiry is reached"""
        session = await store.create(credentials)

        clock.advance(DAY)
        assert await store.resolve(session.token) is None

        clock.advance(1)
        assert await store.resolve(session.token) is None

    @pytest.mark.asyncio
    async def test_expired_but_unswept_is_invalid(self, store, credentials, clock):
        """Expiry is checked on read, not only when sweeping"""
        session = await store.create(credentials)
        clock.advance(DAY + 60)

        assert len(store) == 1
        assert await store.resolve(session.token) is None

    @pytest.mark.asyncio
    async def test_unknown_and_empty_tokens(self, store):
        """Unknown, empty and missing tokens all resolve to None"""
        assert await store.resolve("nope") is None
        assert await store.resolve("") is None
        assert await store.resolve(None) is None


class TestSweep:
    """Test expired session sweeping"""

    @pytest.mark.asyncio
    async def test_sweep_keeps_live_sessions(self, clock):
        """Sweeping should only remove sessions that are past expiry"""
        store = SessionStore(ttl=100, clock=clock)
        old = await store.create(ProviderCredentials.from_input("http://a", "u", "p"))
        clock.advance(60)
        fresh = await store.create(ProviderCredentials.from_input("http://b", "u", "p"))
        clock.advance(50)

        removed = await store.sweep_expired()

        assert removed == 1
        assert await store.resolve(old.token) is None
        assert await store.resolve(fresh.token) is not None

    @pytest.mark.asyncio
    async def test_sweep_is_idempotent(self, store, credentials, clock):
        """Sweeping twice should leave the same state as sweeping once"""
        await store.create(credentials)
        clock.advance(DAY)

        assert await store.sweep_expired() == 1
        assert await store.sweep_expired() == 0
        assert len(store) == 0
