# tests/test_store.py
import threading

from productsvc.database import ProductStore, ReadWriteLock
from productsvc.models import ProductDetails


def make(sku="S", **kw):
    return ProductDetails(sku=sku, manufacturer="M", category_id=1, weight=1, **kw)


def test_get_missing():
    store = ProductStore()
    p, found = store.get(1)
    assert p is None
    assert found is False
    assert len(store) == 0
    assert 1 not in store


def test_put_keys_record_by_id():
    store = ProductStore()
    stored = store.put(5, make(product_id=123))
    assert stored.product_id == 5
    p, found = store.get(5)
    assert found
    assert p.product_id == 5
    assert 5 in store
    assert len(store) == 1


def test_callers_get_copies():
    store = ProductStore()
    original = make(sku="orig")
    returned = store.put(1, original)

    original.sku = "changed-input"
    returned.sku = "changed-return"
    p, _ = store.get(1)
    assert p.sku == "orig"

    p.sku = "changed-read"
    again, _ = store.get(1)
    assert again.sku == "orig"


def test_put_replaces_whole_record():
    store = ProductStore()
    store.put(1, make(sku="a", some_other_id=9))
    store.put(1, make(sku="b"))
    p, _ = store.get(1)
    assert p.sku == "b"
    assert p.some_other_id == 0
    assert len(store) == 1


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)
    errors = []

    def read():
        with lock.read_locked():
            try:
                both_inside.wait()
            except threading.BrokenBarrierError as e:
                errors.append(e)

    threads = [threading.Thread(target=read) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)
    assert errors == []


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    reader_in = threading.Event()
    release_reader = threading.Event()
    writer_done = threading.Event()

    def read():
        with lock.read_locked():
            reader_in.set()
            release_reader.wait(5)

    def write():
        with lock.write_locked():
            writer_done.set()

    r = threading.Thread(target=read)
    r.start()
    assert reader_in.wait(5)

    w = threading.Thread(target=write)
    w.start()
    assert not writer_done.wait(0.2)

    release_reader.set()
    assert writer_done.wait(5)
    r.join(5)
    w.join(5)


def test_concurrent_reads_see_whole_records():
    store = ProductStore()
    a = make(sku="A", some_other_id=1)
    b = ProductDetails(sku="B", manufacturer="N", category_id=2, weight=2, some_other_id=2)
    store.put(1, a)
    stop = threading.Event()
    torn = []

    def write():
        i = 0
        while not stop.is_set():
            store.put(1, a if i % 2 else b)
            i += 1

    def read():
        for _ in range(2000):
            p, _ = store.get(1)
            fields = (p.sku, p.manufacturer, p.category_id, p.weight, p.some_other_id)
            if fields not in (("A", "M", 1, 1, 1), ("B", "N", 2, 2, 2)):
                torn.append(fields)

    writers = [threading.Thread(target=write) for _ in range(2)]
    readers = [threading.Thread(target=read) for _ in range(4)]
    for t in writers + readers:
        t.start()
    for t in readers:
        t.join(30)
    stop.set()
    for t in writers:
        t.join(30)
    assert torn == []
