from __future__ import annotations

from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class _Node(Generic[T]):
	__slots__ = ("value", "next")

	def __init__(self, value: T):
		self.value = value
		self.next: Optional[_Node[T]] = None


class WorkQueue(Generic[T]):
	"""FIFO queue of pending work, linked from head to tail.

	Items are never deduplicated; callers decide what is worth enqueuing.
	"""

	def __init__(self):
		self._head: Optional[_Node[T]] = None
		self._tail: Optional[_Node[T]] = None
		self._size = 0

	def enqueue(self, item: T) -> None:
		node = _Node(item)
		if self._tail is None:
			self._head = node
		else:
			self._tail.next = node
		self._tail = node
		self._size += 1

	def dequeue(self) -> Optional[T]:
		"""Remove and return the oldest item, or None when the queue is empty."""
		if self._head is None:
			return None
		node = self._head
		self._head = node.next
		if self._head is None:
			self._tail = None
		self._size -= 1
		return node.value

	def is_empty(self) -> bool:
		return self._head is None

	def __len__(self) -> int:
		return self._size
