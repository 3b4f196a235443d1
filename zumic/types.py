"""Value types held by the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Union

from zumic.arc_bytes import ArcBytes
from zumic.quicklist import QuickList
from zumic.skip_list import SkipList
from zumic.smart_hash import SmartHash

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MAX = 2**64 - 1

DEFAULT_SEGMENT_SIZE = 16


@dataclass(frozen=True)
class StrValue:
    """Binary-safe string."""

    value: ArcBytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, ArcBytes):
            object.__setattr__(self, "value", ArcBytes(self.value))


@dataclass(frozen=True)
class IntValue:
    """Signed 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        if not _I64_MIN <= self.value <= _I64_MAX:
            raise OverflowError(f"{self.value} does not fit in a signed 64-bit integer")


@dataclass(frozen=True)
class FloatValue:
    """64-bit floating point number."""

    value: float


@dataclass(frozen=True)
class NullValue:
    """Marker for an absent or deleted value."""


@dataclass
class ListValue:
    """List of binary strings."""

    items: QuickList[ArcBytes] = field(
        default_factory=lambda: QuickList(DEFAULT_SEGMENT_SIZE)
    )


@dataclass
class HashValue:
    """Field-to-value map."""

    fields: SmartHash = field(default_factory=SmartHash)


@dataclass(eq=False)
class ZSetValue:
    """Sorted set: members mapped to scores, plus an index ordered by score."""

    dict: dict[ArcBytes, float] = field(default_factory=dict)
    sorted: SkipList[float, ArcBytes] = field(default_factory=SkipList)

    def add(self, member: Union[ArcBytes, str, bytes], score: float) -> None:
        """Set the score of ``member``, keeping both views in step."""
        member = member if isinstance(member, ArcBytes) else ArcBytes(member)
        score = float(score)
        old = self.dict.get(member)
        if old is not None and self.sorted.search(old) == member:
            self.sorted.remove(old)
        self.dict[member] = score
        self.sorted.insert(score, member)

    @classmethod
    def from_scores(
        cls,
        scores: Union[
            Mapping[Union[ArcBytes, str, bytes], float],
            Iterable[tuple[Union[ArcBytes, str, bytes], float]],
        ],
    ) -> "ZSetValue":
        """Build a sorted set from a mapping or from ``(member, score)`` pairs."""
        result = cls()
        pairs = scores.items() if isinstance(scores, Mapping) else scores
        for member, score in pairs:
            result.add(member, score)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZSetValue):
            return NotImplemented
        return self.dict == other.dict and self.sorted.to_pairs() == other.sorted.to_pairs()

    __hash__ = None  # type: ignore[assignment]


@dataclass
class SetValue:
    """Set of unique binary strings."""

    members: set[ArcBytes] = field(default_factory=set)


@dataclass
class HLL:
    """Registers of a HyperLogLog counter."""

    registers: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        if not isinstance(self.registers, bytearray):
            self.registers = bytearray(self.registers)


@dataclass
class HyperLogLogValue:
    """Approximate distinct counter."""

    hll: HLL = field(default_factory=HLL)


@dataclass
class StreamEntry:
    """One record of a stream: an id and named fields."""

    id: int
    data: dict[str, "Value"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0 <= self.id <= _U64_MAX:
            raise OverflowError(f"stream id {self.id} does not fit in 64 unsigned bits")


@dataclass
class StreamValue:
    """Ordered list of stream entries."""

    entries: list[StreamEntry] = field(default_factory=list)


Value = Union[
    StrValue,
    IntValue,
    FloatValue,
    NullValue,
    ListValue,
    HashValue,
    ZSetValue,
    SetValue,
    HyperLogLogValue,
    StreamValue,
]