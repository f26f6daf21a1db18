from typing import Any, Iterator, Optional, Protocol, Tuple, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)

# (lower bound, upper bound or None when unknown)
Bounds = Tuple[int, Optional[int]]


class InvariantViolation(AssertionError):
    """
    内部状態の不整合。呼び出し側で回復すべきエラーではなく、バグを示す。
    """


@runtime_checkable
class Producer(Protocol[T_co]):
    def __next__(self) -> T_co:
        ...

    def __iter__(self) -> Iterator[T_co]:
        ...


@runtime_checkable
class SupportsRemainingCount(Protocol):
    def remaining_count(self) -> Bounds:
        """
        残り要素数を (下限, 上限 or None) で返す
        """
        ...


@runtime_checkable
class SupportsProducePrevious(Protocol[T_co]):
    def produce_previous(self) -> T_co:
        """
        末尾から1要素取り出す。尽きた場合は StopIteration
        """
        ...


def has_remaining_count(producer: Any) -> bool:
    return isinstance(producer, SupportsRemainingCount)


def is_bidirectional(producer: Any) -> bool:
    return isinstance(producer, SupportsProducePrevious)


def exact_remaining(producer: SupportsRemainingCount) -> int:
    lower, upper = producer.remaining_count()
    if upper != lower:
        raise InvariantViolation(
            f"exact remaining count required, got bounds ({lower}, {upper})"
        )
    return lower
