from typing import Iterable, Iterator, Optional, Protocol, Sequence, TypeVar
from altern.config import InterleaveConfig
from altern.interleaving.pair import PairInterleaver
from altern.interleaving.round_robin import ListInterleaver

T = TypeVar("T")

class Interleaver(Protocol[T]):
    def __iter__(self) -> Iterator[T]:
        ...

    def __next__(self) -> T:
        ...

def altern(*producers: Iterable[T]) -> ListInterleaver[T]:
    """
    固定個の Producer から ListInterleaver を作る。引数の順に全て追加してから返す。
    """
    interleaver: ListInterleaver[T] = ListInterleaver.with_capacity(len(producers))
    for producer in producers:
        interleaver.add(producer)
    return interleaver

def altern_with(left: Iterable[T], right: Iterable[T]) -> PairInterleaver[T]:
    return PairInterleaver(left, right)

def balanced_pair_tree(producers: Sequence[Iterable[T]]) -> Iterable[T]:
    """
    2**k 個の Producer から PairInterleaver の木を作る。

    各段で偶数番目と奇数番目を別の部分木に振り分けるため、
    結果は引数順のフラットなラウンドロビン (A, B, C, D, A, ...) になる。

    Raises:
        ValueError: Producer の数が 2 のべき乗でない場合
    """
    n = len(producers)
    if n == 0 or n & (n - 1):
        raise ValueError(f"balanced_pair_tree needs a power-of-two count of producers, got {n}")
    if n == 1:
        return producers[0]
    return PairInterleaver(
        balanced_pair_tree(producers[0::2]),
        balanced_pair_tree(producers[1::2]),
    )

def get_interleaver(
    method: Optional[str],
    producers: Sequence[Iterable[T]],
    config: Optional[InterleaveConfig] = None,
) -> Interleaver[T]:
    """
    Factory function to get the appropriate interleaving combinator.

    Args:
        method (Optional[str]): "round_robin" or "pairwise". None uses config.default_method
        producers: Producers to interleave, in round-robin order
        config (Optional[InterleaveConfig]): Defaults to InterleaveConfig()

    Returns:
        Interleaver: An iterator over the interleaved values.
    """
    if method is None:
        method = (config or InterleaveConfig()).default_method

    if method == "pairwise":
        return iter(balanced_pair_tree(producers))
    else:
        # Default or "round_robin"
        return altern(*producers)
