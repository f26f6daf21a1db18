from typing import Generic, Iterable, Iterator, List, TypeVar
from altern.observability.logging import log_producer_exhausted
from altern.producer.base import InvariantViolation, Producer

T = TypeVar("T")

_DONE = object()

class ListInterleaver(Generic[T]):
    """
    任意個の Producer をラウンドロビンで辿るイテレーター。

    Producer は構築後・イテレーション中のどちらでも add() で追加できる。
    尽きた Producer はその場で取り除かれ、残りの Producer だけで巡回を続ける。
    """
    def __init__(self):
        self._producers: List[Producer[T]] = []
        self._current = 0
        self.capacity_hint = 0

    @classmethod
    def with_capacity(cls, capacity: int) -> "ListInterleaver[T]":
        # Python の list は事前確保できないため、ヒントとして保持するだけ
        interleaver = cls()
        interleaver.capacity_hint = capacity
        return interleaver

    def add(self, producer: Iterable[T]):
        self._producers.append(iter(producer))

    def add_and(self, producer: Iterable[T]) -> "ListInterleaver[T]":
        self.add(producer)
        return self

    @property
    def live_count(self) -> int:
        return len(self._producers)

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        producers = self._producers

        while producers:
            if not 0 <= self._current < len(producers):
                raise InvariantViolation(
                    f"current index {self._current} out of bounds for {len(producers)} producers"
                )

            value = next(producers[self._current], _DONE)
            if value is not _DONE:
                self._current = (self._current + 1) % len(producers)
                return value

            # Exhausted: shrink the cycle and retry from the same position
            del producers[self._current]
            log_producer_exhausted("list", self._current, len(producers))
            self._current %= max(len(producers), 1)

        raise StopIteration
