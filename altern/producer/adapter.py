from typing import Generic, Iterator, Sequence, TypeVar
from altern.producer.base import Bounds

T = TypeVar("T")

class SequenceProducer(Generic[T]):
    """
    Sequence (list, tuple, range, str ...) をラップし、
    先頭・末尾の両方から取り出せる、残り件数が正確に分かる Producer に適合させるアダプター
    """
    def __init__(self, sequence: Sequence[T]):
        self._sequence = sequence
        # [_front, _back) が未消費の範囲
        self._front = 0
        self._back = len(sequence)

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._front >= self._back:
            raise StopIteration
        value = self._sequence[self._front]
        self._front += 1
        return value

    def produce_previous(self) -> T:
        if self._front >= self._back:
            raise StopIteration
        self._back -= 1
        return self._sequence[self._back]

    def remaining_count(self) -> Bounds:
        n = self._back - self._front
        return (n, n)

    def __len__(self) -> int:
        return self._back - self._front

    def __length_hint__(self) -> int:
        return self._back - self._front

    def __reversed__(self) -> Iterator[T]:
        while self._front < self._back:
            yield self.produce_previous()
