"""Directory view: page lifecycle, search and the meeting-link editor."""

import asyncio

import pytest

from fakes import FakeBackend, ScriptedSessions, make_session
from ready_admin import DirectoryView, ModalClosed, ModalOpen, PageState, SessionPage
from ready_admin.view import UPDATE_FAILED_NOTICE


async def loaded(backend: FakeBackend, **kwargs):
    client = backend.client()
    view = client.directory(**kwargs)
    await view.load()
    return client, view


@pytest.mark.asyncio
async def test_load_keeps_only_well_formed_records():
    no_id = make_session("x")
    del no_id["_id"]
    backend = FakeBackend([make_session("a"), no_id, make_session("b", status=""), make_session("c")])
    client, view = await loaded(backend)

    assert view.page_state is PageState.READY
    assert view.error is None
    assert [r.id for r in view.records] == ["a", "c"]
    assert [r.id for r in view.visible] == ["a", "c"]
    assert view.paginator.total == 4
    await client.close()


@pytest.mark.asyncio
async def test_total_falls_back_to_validated_count():
    backend = FakeBackend([make_session("a"), make_session("b"), {"_id": "c"}])
    backend.omit_total = True
    client, view = await loaded(backend)
    assert view.paginator.total == 2
    await client.close()


@pytest.mark.asyncio
async def test_fetch_failure_shows_only_error():
    backend = FakeBackend([make_session("a")])
    client, view = await loaded(backend)
    assert view.records

    backend.list_status = 503
    await view.load()
    assert view.page_state is PageState.ERROR
    assert view.error == "Failed to fetch sessions"
    assert view.records == ()
    assert view.visible == ()

    backend.list_status = None
    await view.load()
    assert view.page_state is PageState.READY
    assert view.error is None
    await client.close()


@pytest.mark.asyncio
async def test_format_failure_message():
    backend = FakeBackend()
    backend.list_body = {"items": []}
    client, view = await loaded(backend)
    assert view.page_state is PageState.ERROR
    assert view.error == "Invalid response format"
    await client.close()


@pytest.mark.asyncio
async def test_search_never_hits_the_network():
    backend = FakeBackend([make_session("a", user="Anna"), make_session("b", user="Zed", listener="Alan Ray"),
                           make_session("c", user="Zed")])
    client, view = await loaded(backend)
    before = len(backend.requests)

    view.set_search("an")
    assert [r.id for r in view.visible] == ["a", "b"]
    view.set_search("")
    assert [r.id for r in view.visible] == ["a", "b", "c"]
    assert len(backend.requests) == before
    await client.close()


@pytest.mark.asyncio
async def test_search_is_scoped_to_loaded_page():
    sessions = [make_session(f"s{i}", user="Zed") for i in range(10)] + [make_session("s10", user="Anna")]
    backend = FakeBackend(sessions)
    client, view = await loaded(backend)

    view.set_search("anna")
    assert view.visible == ()

    await view.go_to(2)
    assert [r.id for r in view.visible] == ["s10"]
    assert all(r in view.records for r in view.visible)
    await client.close()


@pytest.mark.asyncio
async def test_every_page_change_fetches():
    backend = FakeBackend([make_session(f"s{i}") for i in range(25)])
    client, view = await loaded(backend, page_size=10)
    assert view.paginator.page_numbers() == [1, 2, 3]

    await view.go_to(3)
    await view.go_to(3)
    fetches = backend.requests_to("GET", "/sessions/platform/all")
    assert len(fetches) == 3
    assert fetches[-1].url.params["skip"] == "20"
    assert fetches[-1].url.params["limit"] == "10"
    assert [r.id for r in view.records] == ["s20", "s21", "s22", "s23", "s24"]
    await client.close()


@pytest.mark.asyncio
async def test_page_past_the_end_is_empty_not_an_error():
    backend = FakeBackend([make_session("a")])
    client, view = await loaded(backend)
    await view.go_to(7)
    assert view.page_state is PageState.READY
    assert view.records == ()
    assert view.paginator.total == 1
    await client.close()


@pytest.mark.asyncio
async def test_successful_update_patches_one_record_and_closes_editor():
    backend = FakeBackend([make_session("a"), make_session("b", link="https://old"), make_session("c")])
    client, view = await loaded(backend)
    before = view.records

    view.open_editor("b")
    assert view.modal == ModalOpen(target_id="b", draft="https://old")
    view.set_draft("https://meet.example.com/new")
    assert await view.submit_link() is True

    assert isinstance(view.modal, ModalClosed)
    assert [r.id for r in view.records] == ["a", "b", "c"]
    assert view.records[0] is before[0]
    assert view.records[2] is before[2]
    assert view.records[1].meeting_link == "https://meet.example.com/new"
    assert view.records[1].model_dump(exclude={"meeting_link"}) == before[1].model_dump(exclude={"meeting_link"})
    await client.close()


@pytest.mark.asyncio
async def test_failed_update_keeps_editor_and_records():
    backend = FakeBackend([make_session("a"), make_session("b")])
    client, view = await loaded(backend)
    before = view.records
    snapshot = [r.model_dump_json() for r in before]

    backend.patch_status = 500
    view.open_editor("a")
    view.set_draft("https://typed")
    assert await view.submit_link() is False

    assert view.records is before
    assert [r.model_dump_json() for r in view.records] == snapshot
    assert view.modal == ModalOpen(target_id="a", draft="https://typed")
    assert view.page_state is PageState.READY
    assert view.notice.text == UPDATE_FAILED_NOTICE
    await client.close()


@pytest.mark.asyncio
async def test_editor_seeds_empty_draft_and_cancel_discards():
    backend = FakeBackend([make_session("a")])
    client, view = await loaded(backend)
    view.open_editor("a")
    assert view.modal == ModalOpen(target_id="a", draft="")
    view.set_draft("https://half-typed")
    view.cancel_editor()
    assert isinstance(view.modal, ModalClosed)
    assert view.records[0].meeting_link is None
    assert await view.submit_link() is False
    assert backend.requests_to("PATCH", "/sessions/") == []
    await client.close()


@pytest.mark.asyncio
async def test_open_editor_for_unknown_record():
    backend = FakeBackend([make_session("a")])
    client, view = await loaded(backend)
    with pytest.raises(KeyError):
        view.open_editor("missing")
    with pytest.raises(RuntimeError):
        view.set_draft("x")
    await client.close()


def scripted_view(**kwargs) -> tuple[ScriptedSessions, DirectoryView]:
    sessions = ScriptedSessions()
    return sessions, DirectoryView(sessions, **kwargs)


async def settle():
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_superseded_page_response_is_discarded():
    sessions, view = scripted_view()
    first = asyncio.create_task(view.go_to(2))
    await settle()
    second = asyncio.create_task(view.go_to(3))
    await settle()
    assert [(page, size) for page, size, _ in sessions.fetches] == [(2, 10), (3, 10)]
    assert view.loading

    sessions.fetches[1][2].set_result(SessionPage(records=[make_session("p3")], total=30))
    await second
    sessions.fetches[0][2].set_result(SessionPage(records=[make_session("p2")], total=30))
    await first

    assert view.paginator.page == 3
    assert [r.id for r in view.records] == ["p3"]
    assert view.page_state is PageState.READY


@pytest.mark.asyncio
async def test_second_submit_while_pending_is_ignored():
    sessions, view = scripted_view()
    loading = asyncio.create_task(view.load())
    await settle()
    sessions.fetches[0][2].set_result(SessionPage(records=[make_session("a")], total=1))
    await loading

    view.open_editor("a")
    view.set_draft("https://one")
    pending = asyncio.create_task(view.submit_link())
    await settle()
    assert view.modal.submitting
    assert not view.modal.can_submit

    assert await view.submit_link() is False
    assert len(sessions.updates) == 1

    sessions.updates[0][2].set_result(None)
    assert await pending is True
    assert view.records[0].meeting_link == "https://one"
    assert isinstance(view.modal, ModalClosed)


@pytest.mark.asyncio
async def test_cancelled_editor_is_not_closed_again_by_late_success():
    sessions, view = scripted_view()
    loading = asyncio.create_task(view.load())
    await settle()
    sessions.fetches[0][2].set_result(SessionPage(records=[make_session("a"), make_session("b")], total=2))
    await loading

    view.open_editor("a")
    view.set_draft("https://a")
    pending = asyncio.create_task(view.submit_link())
    await settle()
    view.cancel_editor()
    view.open_editor("b")

    sessions.updates[0][2].set_result(None)
    assert await pending is True
    assert view.records[0].meeting_link == "https://a"
    assert view.modal == ModalOpen(target_id="b", draft="")


@pytest.mark.asyncio
async def test_responses_after_close_are_discarded():
    sessions, view = scripted_view()
    loading = asyncio.create_task(view.load())
    await settle()
    view.close()
    sessions.fetches[0][2].set_result(SessionPage(records=[make_session("a")], total=1))
    await loading
    assert view.records == ()
    assert view.closed
    with pytest.raises(RuntimeError):
        await view.load()


@pytest.mark.asyncio
async def test_notice_dismisses_itself():
    backend = FakeBackend([make_session("a")])
    client, view = await loaded(backend, notice_ttl=0.01)
    backend.patch_status = 500
    view.open_editor("a")
    await view.submit_link()
    assert view.notice is not None
    await asyncio.sleep(0.05)
    assert view.notice is None
    assert isinstance(view.modal, ModalOpen)
    await client.close()


@pytest.mark.asyncio
async def test_listeners_see_every_change():
    backend = FakeBackend([make_session("a")])
    client = backend.client()
    view = client.directory()
    states = []
    unsubscribe = view.subscribe(lambda v: states.append(v.page_state))
    await view.load()
    view.set_search("x")
    unsubscribe()
    view.set_search("")
    assert states == [PageState.LOADING, PageState.READY, PageState.READY]
    await client.close()


@pytest.mark.asyncio
async def test_async_context_manager_loads_and_closes():
    backend = FakeBackend([make_session("a")])
    client = backend.client()
    async with client.directory() as view:
        assert [r.id for r in view.records] == ["a"]
    assert view.closed
    assert view.records == ()
    await client.close()
