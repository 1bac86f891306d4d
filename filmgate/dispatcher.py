"""
Search tasks and the dispatcher that runs them.

Each keyword becomes a SearchTask on its own thread. A task waits on the shared
AdmissionGate, searches the catalog, and writes its report through the shared
ReportSink. The dispatcher starts every thread first, then joins them all.
"""

from __future__ import annotations

import enum
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from loguru import logger

from .catalog import Catalog
from .concurrency import AdmissionGate
from .config import SearchConfig
from .errors import DispatchError
from .models import SearchOutcome, SearchRequest
from .report import ReportSink, format_report
from .search_engine import SearchEngine


class TaskState(str, enum.Enum):
	CREATED = "created"
	WAITING_FOR_SLOT = "waiting_for_slot"
	SEARCHING = "searching"
	REPORTING = "reporting"
	DONE = "done"
	FAILED = "failed"


StateObserver = Callable[["SearchTask", TaskState], None]


class SearchTask:
	"""
	One keyword request, run start to finish on a single thread.
	The gate slot is held from SEARCHING through REPORTING and is returned on every exit path.
	"""

	def __init__(
		self,
		request: SearchRequest,
		engine: SearchEngine,
		gate: AdmissionGate,
		sink: ReportSink,
		work_delay_s: float = 0.0,
		acquire_timeout_s: Optional[float] = None,
		observer: Optional[StateObserver] = None,
	) -> None:
		self.request = request
		self.engine = engine
		self.gate = gate
		self.sink = sink
		self.work_delay_s = work_delay_s
		self.acquire_timeout_s = acquire_timeout_s
		self.observer = observer
		self.state = TaskState.CREATED
		self.result: Optional[SearchOutcome] = None
		self.error: Optional[BaseException] = None

	@property
	def worker_id(self) -> int:
		return self.request.request_id

	@property
	def keyword(self) -> str:
		return self.request.keyword

	def _transition(self, state: TaskState) -> None:
		self.state = state
		logger.debug(f"[Task {self.worker_id}] -> {state.value}")
		if self.observer is not None:
			self.observer(self, state)

	def run(self) -> None:
		self._transition(TaskState.WAITING_FOR_SLOT)
		try:
			self.sink.status(f"[Worker {self.worker_id}] Waiting for DB slot... (keyword: {self.keyword})")
			with self.gate.slot(timeout=self.acquire_timeout_s):
				self._transition(TaskState.SEARCHING)
				self.sink.status(f"[Worker {self.worker_id}] Acquired DB slot. Starting search...")

				# Simulated load; no lock is held while sleeping
				if self.work_delay_s > 0:
					time.sleep(self.work_delay_s)

				outcome = self.engine.search(self.keyword)

				self._transition(TaskState.REPORTING)
				self.sink.emit(format_report(self.keyword, outcome.matches))
				self.sink.status(f"[Worker {self.worker_id}] Finished search. Releasing DB slot.")
				self.result = outcome
		except Exception as e:
			self.error = e
			logger.exception(f"[Task {self.worker_id}] Search for '{self.keyword}' failed: {e}")
			self._transition(TaskState.FAILED)
			return
		self._transition(TaskState.DONE)


@dataclass
class DispatchSummary:
	"""Outcome of one dispatcher run."""
	tasks: List[SearchTask] = field(default_factory=list)
	elapsed_s: float = 0.0

	@property
	def completed(self) -> List[SearchTask]:
		return [t for t in self.tasks if t.state is TaskState.DONE]

	@property
	def failed(self) -> List[SearchTask]:
		return [t for t in self.tasks if t.state is TaskState.FAILED]

	@property
	def all_done(self) -> bool:
		return all(t.state is TaskState.DONE for t in self.tasks)


class Dispatcher:
	"""
	Runs one SearchTask per keyword concurrently and waits for all of them.
	Gate and sink are owned by this dispatcher (or passed in), never module globals.
	"""

	def __init__(
		self,
		catalog: Catalog,
		gate: Optional[AdmissionGate] = None,
		sink: Optional[ReportSink] = None,
		config: Optional[SearchConfig] = None,
		engine: Optional[SearchEngine] = None,
		observer: Optional[StateObserver] = None,
		thread_factory: Callable[..., threading.Thread] = threading.Thread,
	) -> None:
		self.config = config or SearchConfig()
		self.catalog = catalog
		self.gate = gate if gate is not None else AdmissionGate(self.config.db_slots)
		self.sink = sink if sink is not None else ReportSink()
		self.engine = engine or SearchEngine(catalog, max_results=self.config.max_results)
		self.observer = observer
		self._thread_factory = thread_factory

	def build_tasks(self, keywords: Sequence[str]) -> List[SearchTask]:
		return [
			SearchTask(
				SearchRequest(keyword=keyword, request_id=i),
				engine=self.engine,
				gate=self.gate,
				sink=self.sink,
				work_delay_s=self.config.work_delay_s,
				acquire_timeout_s=self.config.acquire_timeout_s,
				observer=self.observer,
			)
			for i, keyword in enumerate(keywords, 1)
		]

	def run(self, keywords: Sequence[str]) -> DispatchSummary:
		"""Start a thread per keyword, join them all, and summarize."""
		tasks = self.build_tasks(keywords)
		logger.info(f"[Dispatcher] Launching {len(tasks)} searches with {self.gate.capacity} DB slots")
		start = time.perf_counter()

		threads: List[threading.Thread] = []
		for task in tasks:
			th = self._thread_factory(target=task.run, name=f"search-{task.worker_id}", daemon=True)
			try:
				th.start()
			except RuntimeError as e:
				logger.error(f"[Dispatcher] Could not start worker {task.worker_id}: {e}")
				for started in threads:
					started.join()
				raise DispatchError(f"Failed to start worker thread {task.worker_id}: {e}") from e
			threads.append(th)

		for th in threads:
			th.join()

		summary = DispatchSummary(tasks=tasks, elapsed_s=time.perf_counter() - start)
		logger.info(
			f"[Dispatcher] {len(summary.completed)} done, {len(summary.failed)} failed "
			f"in {summary.elapsed_s:.2f}s (peak in flight {self.gate.peak_in_flight})"
		)
		return summary
