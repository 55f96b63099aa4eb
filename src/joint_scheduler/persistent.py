"""Persistent (structurally shared) list and ordered map.

Updates return new values and share every untouched node with the old one.
Consing costs O(1) and a map update O(log n).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


class FpList(Generic[T]):
    """Immutable singly linked list. The head is the most recently consed item."""

    __slots__ = ("_head", "_tail", "_size")

    _EMPTY: FpList[Any]

    def __init__(self, head: T | None = None, tail: FpList[T] | None = None, size: int = 0):
        self._head = head
        self._tail = tail
        self._size = size

    @classmethod
    def empty(cls) -> FpList[T]:
        return cls._EMPTY

    @classmethod
    def singleton(cls, data: T) -> FpList[T]:
        return cls._EMPTY.cons(data)

    @classmethod
    def of(cls, *items: T) -> FpList[T]:
        """Build a list whose iteration order matches ``items``."""
        result: FpList[T] = cls._EMPTY
        for item in reversed(items):
            result = result.cons(item)
        return result

    def cons(self, data: T) -> FpList[T]:
        return FpList(data, self, self._size + 1)

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    @property
    def head(self) -> T:
        if self._size == 0:
            raise IndexError("head of empty FpList")
        return self._head  # type: ignore[return-value]

    @property
    def tail(self) -> FpList[T]:
        if self._size == 0:
            raise IndexError("tail of empty FpList")
        return self._tail  # type: ignore[return-value]

    def reverse(self) -> FpList[T]:
        result: FpList[T] = FpList._EMPTY
        for item in self:
            result = result.cons(item)
        return result

    def __iter__(self) -> Iterator[T]:
        node = self
        while node._size:
            yield node._head  # type: ignore[misc]
            node = node._tail  # type: ignore[assignment]

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, FpList) or len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"FpList({list(self)!r})"


FpList._EMPTY = FpList()


@dataclass(frozen=True, slots=True)
class _MapNode(Generic[K, V]):
    key: K
    value: V
    left: _MapNode[K, V] | None
    right: _MapNode[K, V] | None
    height: int
    size: int


def _height(node: _MapNode | None) -> int:
    return node.height if node is not None else 0


def _size(node: _MapNode | None) -> int:
    return node.size if node is not None else 0


def _make(key, value, left, right) -> _MapNode:
    return _MapNode(
        key, value, left, right,
        max(_height(left), _height(right)) + 1,
        _size(left) + _size(right) + 1,
    )


def _rotate_right(node: _MapNode) -> _MapNode:
    pivot = node.left
    return _make(pivot.key, pivot.value, pivot.left, _make(node.key, node.value, pivot.right, node.right))


def _rotate_left(node: _MapNode) -> _MapNode:
    pivot = node.right
    return _make(pivot.key, pivot.value, _make(node.key, node.value, node.left, pivot.left), pivot.right)


def _balance(key, value, left, right) -> _MapNode:
    node = _make(key, value, left, right)
    skew = _height(left) - _height(right)
    if skew > 1:
        if _height(left.left) < _height(left.right):
            node = _make(key, value, _rotate_left(left), right)
        return _rotate_right(node)
    if skew < -1:
        if _height(right.right) < _height(right.left):
            node = _make(key, value, left, _rotate_right(right))
        return _rotate_left(node)
    return node


def _insert(node: _MapNode | None, key, value) -> _MapNode:
    if node is None:
        return _make(key, value, None, None)
    if key < node.key:
        return _balance(node.key, node.value, _insert(node.left, key, value), node.right)
    if node.key < key:
        return _balance(node.key, node.value, node.left, _insert(node.right, key, value))
    return _make(key, value, node.left, node.right)


class FpMap(Generic[K, V]):
    """Immutable ordered map backed by a path-copying AVL tree."""

    __slots__ = ("_root",)

    _EMPTY: FpMap[Any, Any]

    def __init__(self, root: _MapNode[K, V] | None = None):
        self._root = root

    @classmethod
    def empty(cls) -> FpMap[K, V]:
        return cls._EMPTY

    @classmethod
    def singleton(cls, key: K, value: V) -> FpMap[K, V]:
        return cls._EMPTY.put(key, value)

    def put(self, key: K, value: V) -> FpMap[K, V]:
        return FpMap(_insert(self._root, key, value))

    def get(self, key: K, default: V | None = None) -> V | None:
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif node.key < key:
                node = node.right
            else:
                return node.value
        return default

    def __getitem__(self, key: K) -> V:
        sentinel = object()
        value = self.get(key, sentinel)  # type: ignore[arg-type]
        if value is sentinel:
            raise KeyError(key)
        return value  # type: ignore[return-value]

    def __contains__(self, key: object) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel  # type: ignore[arg-type]

    def items(self) -> Iterator[tuple[K, V]]:
        stack: list[_MapNode[K, V]] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key, node.value
            node = node.right

    def keys(self) -> Iterator[K]:
        return (key for key, _ in self.items())

    def __iter__(self) -> Iterator[K]:
        return self.keys()

    def __len__(self) -> int:
        return _size(self._root)

    def __bool__(self) -> bool:
        return self._root is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FpMap):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __hash__(self) -> int:
        return hash(tuple(self.items()))

    def __repr__(self) -> str:
        return f"FpMap({dict(self.items())!r})"


FpMap._EMPTY = FpMap()
