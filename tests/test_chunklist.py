from fzcore.cache import ChunkCache
from fzcore.chunklist import ChunkList, count_items
from fzcore.constants import CHUNK_SIZE
from fzcore.item import Item


def _new_list():
    return ChunkList(ChunkCache(), lambda data: Item(data))


def test_chunk_list():
    cl = _new_list()

    snapshot, count, _ = cl.snapshot(0)
    assert snapshot == [] and count == 0

    cl.push("hello")
    cl.push("world")
    assert snapshot == []

    snapshot, count, _ = cl.snapshot(0)
    assert len(snapshot) == 1 and count == 2

    chunk1 = snapshot[0]
    assert chunk1.count == 2
    assert chunk1.items[0].text == "hello"
    assert chunk1.items[1].text == "world"
    assert not chunk1.is_full()

    for i in range(CHUNK_SIZE * 2):
        cl.push(f"item {i}")
    assert len(snapshot) == 1

    snapshot, count, _ = cl.snapshot(0)
    assert len(snapshot) == 3
    assert snapshot[0].is_full()
    assert snapshot[1].is_full()
    assert not snapshot[2].is_full()
    assert count == CHUNK_SIZE * 2 + 2
    assert snapshot[2].count == 2

    cl.push("hello")
    cl.push("world")
    assert snapshot[-1].count == 2


def test_chunk_list_tail():
    cl = _new_list()
    total = CHUNK_SIZE * 2 + CHUNK_SIZE // 2
    for i in range(total):
        cl.push(f"item {i}")

    def check(result, expected, should_change):
        snapshot, count, changed = result
        assert count == expected
        assert count_items(snapshot) == expected
        assert changed is should_change
        return snapshot

    check(cl.snapshot(0), total, False)

    tail = CHUNK_SIZE + CHUNK_SIZE // 2
    snapshot = check(cl.snapshot(tail), tail, True)
    assert snapshot[-1].items[-1].text == f"item {total - 1}"
    assert snapshot[0].items[0].text == f"item {total - tail}"
    check(cl.snapshot(tail), tail, False)
    check(cl.snapshot(0), tail, False)

    tail = CHUNK_SIZE // 2
    check(cl.snapshot(tail), tail, True)


def test_rejected_data_is_not_counted():
    cl = ChunkList(ChunkCache(), lambda data: Item(data) if data else None)
    assert cl.push("a") is True
    assert cl.push("") is False
    _, count, _ = cl.snapshot(0)
    assert count == 1


def test_clear():
    cl = _new_list()
    cl.push("a")
    cl.clear()
    snapshot, count, _ = cl.snapshot(0)
    assert snapshot == [] and count == 0