from typing import Generic, Iterable, Iterator, Optional, TypeVar
from altern.observability.logging import log_producer_exhausted
from altern.producer.base import Bounds, Producer, exact_remaining, has_remaining_count, is_bidirectional

T = TypeVar("T")

_DONE = object()

class PairInterleaver(Generic[T]):
    """
    2つの Producer を交互に辿るイテレーター。

    left -> right -> left ... の順に1要素ずつ取り出し、片方が尽きたら残りの方だけを辿る。
    PairInterleaver 自身も Producer なので入れ子にできるが、入れ子の順序によって結果が変わる:

        Pair(Pair(A, B), Pair(C, D))  ->  A, C, B, D, ...
        Pair(Pair(A, C), Pair(B, D))  ->  A, B, C, D, ...

    4つ (2**k 個) を同じ段でフラットに巡回させたい場合は、後者のように隣接する要素を
    別の部分木に振り分けること (api.balanced_pair_tree 参照)。

    構築時に iter() した両側の capability を見て、以下のサブクラスのインスタンスを返す:
      - 両側が remaining_count を持つ -> SizedPairInterleaver
      - さらに両側が produce_previous を持つ -> BidirectionalPairInterleaver
    サブクラスを直接指定した場合、両側がその capability を持たなければ TypeError。
    """
    def __new__(cls, left: Iterable[T], right: Iterable[T]):
        left_it, right_it = iter(left), iter(right)

        capable = PairInterleaver
        if has_remaining_count(left_it) and has_remaining_count(right_it):
            if is_bidirectional(left_it) and is_bidirectional(right_it):
                capable = BidirectionalPairInterleaver
            else:
                capable = SizedPairInterleaver

        if cls is PairInterleaver:
            cls = capable
        elif not issubclass(capable, cls):
            raise TypeError(f"{cls.__name__} requires producers with matching capabilities")

        self = super().__new__(cls)
        self._left: Optional[Producer[T]] = left_it
        self._right: Optional[Producer[T]] = right_it
        self._next_is_left = True
        return self

    def __init__(self, left: Iterable[T], right: Iterable[T]):
        # State is set up in __new__ from the same iterators the capabilities were read from
        pass

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        left, right = self._left, self._right

        if left is not None and right is not None:
            # Flip even if the chosen side turns out to be empty
            take_left = self._next_is_left
            self._next_is_left = not take_left

            if take_left:
                value = next(left, _DONE)
                if value is _DONE:
                    self._drop_left()
                    return next(right)
            else:
                value = next(right, _DONE)
                if value is _DONE:
                    self._drop_right()
                    return next(left)
            return value

        if left is not None:
            return next(left)
        if right is not None:
            return next(right)
        raise StopIteration

    def altern_with(self, other: Iterable[T]) -> "PairInterleaver[T]":
        return PairInterleaver(self, other)

    def _drop_left(self):
        self._left = None
        log_producer_exhausted("pair", "left", 0 if self._right is None else 1)

    def _drop_right(self):
        self._right = None
        log_producer_exhausted("pair", "right", 0 if self._left is None else 1)


class SizedPairInterleaver(PairInterleaver[T]):
    def remaining_count(self) -> Bounds:
        left, right = self._left, self._right

        if left is None and right is None:
            return (0, 0)
        if left is None:
            return right.remaining_count()
        if right is None:
            return left.remaining_count()

        lower_left, upper_left = left.remaining_count()
        lower_right, upper_right = right.remaining_count()
        if upper_left is None or upper_right is None:
            upper = None
        else:
            upper = upper_left + upper_right
        return (lower_left + lower_right, upper)

    def __len__(self) -> int:
        lower, upper = self.remaining_count()
        if upper != lower:
            raise TypeError(f"remaining length is not exact: ({lower}, {upper})")
        return lower

    def __length_hint__(self) -> int:
        return self.remaining_count()[0]


class BidirectionalPairInterleaver(SizedPairInterleaver[T]):
    def produce_previous(self) -> T:
        """
        末尾から1要素取り出す。

        next() で既に消費した順序と矛盾しないよう、残り件数で取り出す側を決める。
        left 側の件数は「次が right の番」なら 1 を足して比較し、n_right >= n_left なら right の末尾を返す。
        カーソル (next_is_left) は変更しない。
        """
        left, right = self._left, self._right

        if left is None and right is None:
            raise StopIteration
        if left is None:
            return right.produce_previous()
        if right is None:
            return left.produce_previous()

        n_left = exact_remaining(left) + (0 if self._next_is_left else 1)
        n_right = exact_remaining(right)

        if n_right >= n_left:
            try:
                return right.produce_previous()
            except StopIteration:
                self._drop_right()
                raise
        try:
            return left.produce_previous()
        except StopIteration:
            self._drop_left()
            raise

    def __reversed__(self) -> Iterator[T]:
        while True:
            try:
                yield self.produce_previous()
            except StopIteration:
                return
