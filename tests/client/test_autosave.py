# tests/client/test_autosave.py
"""Tests for inkwell/client/autosave.py."""

from asyncio import CancelledError, Event, create_task, sleep
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ConnectError, Request

from inkwell.client import AutoSaveCoordinator, BlogApiClient, MemoryDeviceStorage, backup_key
from inkwell.errors import ApiError, ApiErrorKind
from inkwell.schemas import BlogDocument

NETWORK_ERROR = ApiError.from_transport_error(ConnectError("refused", request=Request("GET", "http://test")))
SERVER_ERROR = ApiError(ApiErrorKind.SERVER, "Server error. Please try again later.", 500)


def server_copy(document: BlogDocument, **overrides: Any) -> BlogDocument:
    return document.model_copy(update={"id": document.id or "srv1", **overrides})


@pytest.fixture
def fake_api() -> MagicMock:
    api = MagicMock(spec=BlogApiClient)
    api.storage = MemoryDeviceStorage()
    api.save_draft = AsyncMock(side_effect=server_copy)
    api.update_blog = AsyncMock(side_effect=server_copy)
    return api


class Harness:
    """Holds the edited document and records callbacks."""

    def __init__(self, api: MagicMock, document: BlogDocument | None = None, **kwargs: Any) -> None:
        self.document = document or BlogDocument()
        self.saved: list[BlogDocument] = []
        self.errors: list[Exception] = []
        self.coordinator = AutoSaveCoordinator(
            api,
            lambda: self.document,
            delay_ms=kwargs.pop("delay_ms", 10),
            on_success=self.saved.append,
            on_error=self.errors.append,
            **kwargs,
        )

    def edit(self, **changes: Any) -> None:
        self.document = self.document.model_copy(update=changes)
        self.coordinator.schedule()


class TestSkipping:
    """Saves that never reach the network."""

    async def test_empty_document_is_never_saved(self, fake_api: MagicMock) -> None:
        """Test that a document without title and content is never sent."""
        harness = Harness(fake_api)

        assert await harness.coordinator.save(force=True) is None
        harness.edit(tags=["only-tags"])
        await harness.coordinator.flush()

        fake_api.save_draft.assert_not_awaited()
        fake_api.update_blog.assert_not_awaited()

    async def test_identical_saves_hit_network_once(self, fake_api: MagicMock) -> None:
        """Test that unchanged title and content are only sent once."""
        harness = Harness(fake_api, BlogDocument(id="abc", title="A", content="<p>x</p>"))

        first = await harness.coordinator.save()
        second = await harness.coordinator.save()
        third = await harness.coordinator.save()

        assert first is not None
        assert second is None
        assert third is None
        fake_api.update_blog.assert_awaited_once()

    async def test_loaded_document_is_not_resaved(self, fake_api: MagicMock) -> None:
        """Test that priming with a loaded document suppresses the first save."""
        loaded = BlogDocument(id="abc", title="A", content="<p>x</p>")
        harness = Harness(fake_api, loaded)
        harness.coordinator.prime(loaded)

        assert await harness.coordinator.save() is None
        fake_api.update_blog.assert_not_awaited()

    async def test_forced_save_ignores_no_changes(self, fake_api: MagicMock) -> None:
        """Test that a forced save is sent even without changes."""
        loaded = BlogDocument(id="abc", title="A", content="<p>x</p>")
        harness = Harness(fake_api, loaded)
        harness.coordinator.prime(loaded)

        assert await harness.coordinator.save(force=True) is not None
        fake_api.update_blog.assert_awaited_once()


class TestDebounce:
    """Timer behaviour."""

    async def test_burst_of_edits_saves_once(self, fake_api: MagicMock) -> None:
        """Test that rapid edits collapse into one save of the latest text."""
        harness = Harness(fake_api, delay_ms=30)

        for text in ("H", "He", "Hel", "Hello"):
            harness.edit(title=text)
            await sleep(0.005)
        assert fake_api.save_draft.await_count == 0
        await harness.coordinator.flush()

        fake_api.save_draft.assert_awaited_once()
        assert fake_api.save_draft.await_args.args[0].title == "Hello"
        assert [doc.title for doc in harness.saved] == ["Hello"]

    async def test_cancel(self, fake_api: MagicMock) -> None:
        """Test that cancelling a pending timer prevents the save."""
        harness = Harness(fake_api)
        harness.edit(title="A")
        assert harness.coordinator.is_pending

        harness.coordinator.cancel()
        await sleep(0.03)

        assert not harness.coordinator.is_pending
        fake_api.save_draft.assert_not_awaited()


class TestSingleFlight:
    """At most one save runs at a time."""

    @pytest.fixture
    def gate(self, fake_api: MagicMock) -> Event:
        release = Event()

        async def slow_update(document: BlogDocument) -> BlogDocument:
            await release.wait()
            return server_copy(document)

        fake_api.update_blog.side_effect = slow_update
        return release

    async def test_automatic_save_dropped_while_saving(
        self,
        fake_api: MagicMock,
        gate: Event,
    ) -> None:
        """Test that an automatic save is dropped while another save runs."""
        harness = Harness(fake_api, BlogDocument(id="abc", title="A"))
        running = create_task(harness.coordinator.save())
        await sleep(0)
        assert harness.coordinator.is_saving

        harness.document = harness.document.model_copy(update={"title": "B"})
        assert await harness.coordinator.save() is None

        gate.set()
        await running
        fake_api.update_blog.assert_awaited_once()

    async def test_forced_save_waits_for_running_save(
        self,
        fake_api: MagicMock,
        gate: Event,
    ) -> None:
        """Test that a forced save runs after the running save, not beside it."""
        harness = Harness(fake_api, BlogDocument(id="abc", title="A"))
        running = create_task(harness.coordinator.save())
        await sleep(0)

        harness.document = harness.document.model_copy(update={"title": "B"})
        forced = create_task(harness.coordinator.save(force=True))
        await sleep(0)
        assert fake_api.update_blog.await_count == 1

        gate.set()
        await running
        result = await forced

        assert result is not None
        assert result.title == "B"
        assert fake_api.update_blog.await_count == 2

    async def test_new_edit_does_not_cancel_request_in_flight(
        self,
        fake_api: MagicMock,
    ) -> None:
        """Test that editing during a running auto-save only restarts the timer."""
        started = Event()
        release = Event()
        outcome: list[str] = []

        async def slow_update(document: BlogDocument) -> BlogDocument:
            started.set()
            try:
                await release.wait()
            except CancelledError:
                outcome.append("cancelled")
                raise
            outcome.append("completed")
            return server_copy(document)

        fake_api.update_blog.side_effect = slow_update
        harness = Harness(fake_api, BlogDocument(id="abc"))

        harness.edit(title="A")
        await started.wait()
        harness.edit(title="B")
        await sleep(0)
        release.set()
        await harness.coordinator.flush()

        assert outcome == ["completed", "completed"]
        assert [doc.title for doc in harness.saved] == ["A", "B"]

    async def test_exclusive_waits_for_running_save(
        self,
        fake_api: MagicMock,
        gate: Event,
    ) -> None:
        """Test that exclusive() holds off until the running save is done."""
        harness = Harness(fake_api, BlogDocument(id="abc", title="A"))
        saved_before_entry: list[int] = []

        async def outside_save() -> None:
            async with harness.coordinator.exclusive():
                saved_before_entry.append(len(harness.saved))

        running = create_task(harness.coordinator.save())
        await sleep(0)
        waiting = create_task(outside_save())
        await sleep(0)
        assert saved_before_entry == []

        gate.set()
        await running
        await waiting

        assert saved_before_entry == [1]


class TestOutcomes:
    """Success, soft and hard failures."""

    async def test_new_document_created(self, fake_api: MagicMock) -> None:
        """Test that a document without id is created through save_draft."""
        harness = Harness(fake_api, BlogDocument(title="A"))

        saved = await harness.coordinator.save()

        assert saved is not None
        assert saved.id == "srv1"
        fake_api.save_draft.assert_awaited_once()
        assert harness.coordinator.has_saved_once
        assert harness.coordinator.last_saved_title == "A"

    async def test_snapshot_cleared_after_success(self, fake_api: MagicMock) -> None:
        """Test that the backup snapshot exists during the request and is removed after."""
        seen: list[dict[str, Any] | None] = []

        async def update(document: BlogDocument) -> BlogDocument:
            seen.append(await fake_api.storage.get_item(backup_key("abc")))
            return server_copy(document)

        fake_api.update_blog.side_effect = update
        harness = Harness(fake_api, BlogDocument(id="abc", title="A"))

        await harness.coordinator.save()

        assert seen[0] is not None
        assert seen[0]["title"] == "A"
        assert await fake_api.storage.get_item(backup_key("abc")) is None

    async def test_optimistic_network_failure_on_existing(self, fake_api: MagicMock) -> None:
        """Test that a network failure is reported as a local save under optimistic policy."""
        fake_api.update_blog.side_effect = NETWORK_ERROR
        harness = Harness(fake_api, BlogDocument(id="abc", title="A"))

        local = await harness.coordinator.save()

        assert local is not None
        assert local.id == "abc"
        assert local.local_save is True
        assert local.updated_at is not None
        assert harness.saved == [local]
        assert harness.errors == []
        assert await fake_api.storage.get_item(backup_key("abc")) is not None
        assert harness.coordinator.has_changes(harness.document)

    async def test_optimistic_network_failure_on_new(self, fake_api: MagicMock) -> None:
        """Test that a new document saved locally gets a local_ id."""
        fake_api.save_draft.side_effect = NETWORK_ERROR
        harness = Harness(fake_api, BlogDocument(title="A"))

        local = await harness.coordinator.save()

        assert local is not None
        assert local.id is not None
        assert local.id.startswith("local_")
        assert local.id.removeprefix("local_").isdigit()
        assert local.local_save is True

    async def test_strict_network_failure(self, fake_api: MagicMock) -> None:
        """Test that strict policy surfaces network failures."""
        fake_api.update_blog.side_effect = NETWORK_ERROR
        harness = Harness(fake_api, BlogDocument(id="abc", title="A"), policy="strict")

        assert await harness.coordinator.save() is None
        assert harness.errors == [NETWORK_ERROR]
        assert harness.saved == []

    async def test_server_failure_retried_by_next_save(self, fake_api: MagicMock) -> None:
        """Test that a server failure keeps the markers so the next save retries."""
        fake_api.update_blog.side_effect = [SERVER_ERROR, server_copy(BlogDocument(id="abc", title="A"))]
        harness = Harness(fake_api, BlogDocument(id="abc", title="A"))

        assert await harness.coordinator.save() is None
        assert harness.errors == [SERVER_ERROR]
        assert harness.coordinator.last_saved_title == ""

        assert await harness.coordinator.save() is not None
        assert fake_api.update_blog.await_count == 2

    async def test_unexpected_error_in_timer_reaches_error_callback(
        self,
        fake_api: MagicMock,
    ) -> None:
        """Test that an unexpected error in an auto-save reaches the error callback."""
        boom = RuntimeError("boom")
        fake_api.save_draft.side_effect = boom
        harness = Harness(fake_api)

        harness.edit(title="A")
        await harness.coordinator.flush()

        assert harness.errors == [boom]
