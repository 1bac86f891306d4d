"""
Tests for the AdmissionGate: capacity checks, blocking, scoped release, and the holder bound.
"""

import sys
import threading
import time
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from filmgate.concurrency import AdmissionGate
from filmgate.errors import GateConfigurationError, GateReleaseError, GateTimeoutError


@pytest.mark.parametrize("capacity", [0, -1, True, 2.5, "5", None])
def test_invalid_capacity_rejected(capacity):
	with pytest.raises(GateConfigurationError):
		AdmissionGate(capacity)


def test_configuration_error_is_value_error():
	with pytest.raises(ValueError):
		AdmissionGate(0)


def test_acquire_and_release_counts():
	gate = AdmissionGate(2)
	gate.acquire()
	assert gate.available == 1 and gate.in_flight == 1
	gate.acquire()
	assert gate.available == 0
	gate.release()
	gate.release()
	assert gate.available == 2
	assert gate.acquire_count == 2 and gate.release_count == 2
	assert gate.peak_in_flight == 2


def test_release_without_acquire_raises():
	gate = AdmissionGate(1)
	with pytest.raises(GateReleaseError):
		gate.release()
	assert gate.available == 1


def test_slot_released_on_exception():
	gate = AdmissionGate(1)
	with pytest.raises(RuntimeError):
		with gate.slot():
			assert gate.available == 0
			raise RuntimeError("boom")
	assert gate.available == 1
	assert gate.acquire_count == gate.release_count == 1


def test_acquire_timeout_when_full():
	gate = AdmissionGate(1)
	gate.acquire()
	start = time.monotonic()
	with pytest.raises(GateTimeoutError):
		gate.acquire(timeout=0.05)
	assert time.monotonic() - start >= 0.04
	assert gate.available == 0
	assert gate.waiting == 0
	gate.release()
	assert gate.available == 1


def test_waiter_wakes_on_release():
	gate = AdmissionGate(1)
	gate.acquire()
	entered = threading.Event()

	def waiter():
		with gate.slot():
			entered.set()

	th = threading.Thread(target=waiter, daemon=True)
	th.start()
	assert not entered.wait(0.1)  # still blocked
	assert gate.waiting == 1
	gate.release()
	assert entered.wait(2.0)
	th.join(2.0)
	assert gate.available == 1


def test_holders_never_exceed_capacity():
	capacity = 5
	gate = AdmissionGate(capacity)
	lock = threading.Lock()
	active = 0
	max_active = 0

	def worker():
		nonlocal active, max_active
		with gate.slot():
			with lock:
				active += 1
				max_active = max(max_active, active)
			time.sleep(0.01)
			with lock:
				active -= 1

	threads = [threading.Thread(target=worker) for _ in range(25)]
	for th in threads:
		th.start()
	for th in threads:
		th.join(10.0)

	assert max_active <= capacity
	assert gate.peak_in_flight <= capacity
	assert gate.available == capacity
	assert gate.acquire_count == gate.release_count == 25
