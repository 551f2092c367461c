# productsvc/database.py
import threading
from contextlib import contextmanager
from typing import Dict, Optional, Tuple

from productsvc.models import ProductDetails
from productsvc.utils.logging import get_logger

# This file holds the in-memory product store and its lock.

logger = get_logger(__name__)


class ReadWriteLock:
    """Many readers or one writer.

    Phases alternate: a waiting writer holds back newly arriving readers,
    and when a writer finishes, the readers already queued go in before
    the next writer. Neither side can starve the other.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_readers = 0
        self._waiting_writers = 0
        self._read_turn = False

    @contextmanager
    def read_locked(self):
        with self._cond:
            self._waiting_readers += 1
            while self._writer or (self._waiting_writers and not self._read_turn):
                self._cond.wait()
            self._waiting_readers -= 1
            self._readers += 1
            if self._waiting_readers == 0:
                self._read_turn = False
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self):
        with self._cond:
            self._waiting_writers += 1
            while self._writer or self._readers or self._read_turn:
                self._cond.wait()
            self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._read_turn = self._waiting_readers > 0
                self._cond.notify_all()


class ProductStore:
    """Thread-safe product_id -> ProductDetails mapping.

    Records go in and come out as copies; nothing outside the store ever
    holds a reference to what is stored.
    """

    def __init__(self):
        self._lock = ReadWriteLock()
        self._products: Dict[int, ProductDetails] = {}

    def get(self, product_id: int) -> Tuple[Optional[ProductDetails], bool]:
        with self._lock.read_locked():
            p = self._products.get(product_id)
        if p is None:
            return None, False
        return p.model_copy(), True

    def put(self, product_id: int, details: ProductDetails) -> ProductDetails:
        record = details.model_copy(update={"product_id": product_id})
        with self._lock.write_locked():
            replaced = product_id in self._products
            self._products[product_id] = record
        logger.debug("product %s %s", product_id, "replaced" if replaced else "inserted")
        return record.model_copy()

    def __len__(self):
        with self._lock.read_locked():
            return len(self._products)

    def __contains__(self, product_id):
        with self._lock.read_locked():
            return product_id in self._products
