import logging

from inventory.services.compensation import CompensationStack


async def test_unwinds_newest_first():
    calls = []
    stack = CompensationStack()

    for name in ("room", "base price", "seasons"):
        async def undo(name=name):
            calls.append(name)
        stack.push(name, undo)

    assert len(stack) == 3
    assert await stack.unwind() == []
    assert calls == ["seasons", "base price", "room"]
    assert len(stack) == 0


async def test_failed_step_is_logged_and_skipped(caplog):
    calls = []
    log = logging.getLogger("tests.compensation")
    stack = CompensationStack(log=log)

    async def undo_room():
        calls.append("room")

    async def undo_prices():
        raise RuntimeError("store unavailable")

    stack.push("room", undo_room)
    stack.push("prices", undo_prices)

    with caplog.at_level(logging.ERROR, logger="tests.compensation"):
        failed = await stack.unwind()

    assert failed == ["prices"]
    assert calls == ["room"]
    assert "Rollback step failed (prices)" in caplog.text


async def test_clear_discards_pending_actions():
    calls = []
    stack = CompensationStack()

    async def undo():
        calls.append("x")

    stack.push("x", undo)
    stack.clear()
    assert await stack.unwind() == []
    assert calls == []
