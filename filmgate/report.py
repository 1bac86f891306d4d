"""
Report formatting and the serialized output sink.
Each report is written as one block under a lock so concurrent reports never interleave.
"""

import sys  # default output stream
import threading  # mutual exclusion for the shared stream
from typing import List, Optional, Sequence, TextIO, Union

from loguru import logger

from .models import MatchResult

RULE_HEAVY = '=' * 60  # opens and closes every report
RULE_LIGHT = '-' * 60  # separates the header from the rows
NO_MATCHES_LINE = '(No matches found)'


def format_report(keyword: str, ranked: Sequence[MatchResult]) -> List[str]:
	"""Build the lines of one keyword report, starting with a blank spacer line."""
	lines = [
		'',
		RULE_HEAVY,
		f'Keyword: "{keyword}" | Matches: {len(ranked)}',
		'Sorted by popularity rating (descending)',
		RULE_LIGHT,
	]
	if not ranked:
		lines.append(NO_MATCHES_LINE)
	for i, r in enumerate(ranked, 1):
		m = r.movie
		lines.append(f'{i:2d}) {m.title:<28} | {m.director:<18} | {m.release_date}  ({m.popularity_rating:.1f})')
	lines.append(RULE_HEAVY)
	return lines


class ReportSink:
	"""
	Shared output channel.
	emit() writes a whole multi-line block while holding the lock; nothing else is done under it.
	"""

	def __init__(self, stream: Optional[TextIO] = None):
		self._stream = stream  # None means "whatever sys.stdout is at write time"
		self._lock = threading.Lock()
		self._emitted = 0

	@property
	def stream(self) -> TextIO:
		return self._stream if self._stream is not None else sys.stdout

	@property
	def emitted_count(self) -> int:
		with self._lock:
			return self._emitted

	def emit(self, report: Union[str, Sequence[str]]) -> None:
		"""Write a report block atomically with respect to other emits."""
		text = report if isinstance(report, str) else '\n'.join(report)
		if not text.endswith('\n'):
			text += '\n'
		with self._lock:
			stream = self.stream
			stream.write(text)
			stream.flush()
			self._emitted += 1
		logger.trace(f"[Sink] Wrote block of {len(text.splitlines())} lines")

	def status(self, line: str) -> None:
		"""Single-line progress message, serialized with the reports."""
		self.emit(line)
