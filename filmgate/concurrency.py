"""
Admission gate for the shared catalog.

A counting limiter: at most ``capacity`` holders may be inside the search section
at once. Tasks enter through ``slot()`` so a slot is handed back on every exit path.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger

from .errors import GateConfigurationError, GateReleaseError, GateTimeoutError


class AdmissionGate:
	"""
	Counting semaphore with observable state.
	The available count stays within [0, capacity]; release wakes one waiter.
	"""

	def __init__(self, capacity: int) -> None:
		if isinstance(capacity, bool) or not isinstance(capacity, int):
			raise GateConfigurationError(f"Gate capacity must be an integer, got {capacity!r}")
		if capacity <= 0:
			raise GateConfigurationError(f"Gate capacity must be positive, got {capacity}")
		self._capacity = capacity
		self._available = capacity
		self._cond = threading.Condition(threading.Lock())
		self._waiting = 0
		self._peak_in_flight = 0
		self._acquires = 0
		self._releases = 0
		logger.debug(f"[Gate] Created with {capacity} slots")

	def acquire(self, timeout: Optional[float] = None) -> None:
		"""
		Block until a slot is free, then take it.
		With a timeout (seconds), raise GateTimeoutError if none frees in time.
		"""
		deadline = None if timeout is None else time.monotonic() + timeout
		with self._cond:
			self._waiting += 1
			try:
				while self._available == 0:
					if deadline is None:
						self._cond.wait()
						continue
					remaining = deadline - time.monotonic()
					if remaining <= 0:
						raise GateTimeoutError(f"No gate slot freed within {timeout:.3f}s")
					self._cond.wait(remaining)
			finally:
				self._waiting -= 1
			self._available -= 1
			self._acquires += 1
			in_flight = self._capacity - self._available
			if in_flight > self._peak_in_flight:
				self._peak_in_flight = in_flight

	def release(self) -> None:
		"""Return a slot and wake exactly one waiter."""
		with self._cond:
			if self._available >= self._capacity:
				raise GateReleaseError("Gate released more times than it was acquired")
			self._available += 1
			self._releases += 1
			self._cond.notify()

	@contextmanager
	def slot(self, timeout: Optional[float] = None) -> Iterator[AdmissionGate]:
		"""Hold one slot for the duration of the with-block."""
		self.acquire(timeout=timeout)
		try:
			yield self
		finally:
			self.release()

	@property
	def capacity(self) -> int:
		return self._capacity

	@property
	def available(self) -> int:
		with self._cond:
			return self._available

	@property
	def in_flight(self) -> int:
		with self._cond:
			return self._capacity - self._available

	@property
	def peak_in_flight(self) -> int:
		with self._cond:
			return self._peak_in_flight

	@property
	def waiting(self) -> int:
		with self._cond:
			return self._waiting

	@property
	def acquire_count(self) -> int:
		with self._cond:
			return self._acquires

	@property
	def release_count(self) -> int:
		with self._cond:
			return self._releases

	def __repr__(self) -> str:
		return f"AdmissionGate(capacity={self._capacity}, available={self.available})"
