"""
Tests for report formatting and the serialized ReportSink.
"""

import io
import sys
import threading
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from filmgate.models import MatchResult, Movie
from filmgate.report import NO_MATCHES_LINE, RULE_HEAVY, RULE_LIGHT, ReportSink, format_report


def test_report_with_matches():
	dragon = Movie("How to Train Your Dragon", "Chris Sanders", "2010-03-26", 92.5, "A young Viking befriends a dragon.")
	heart = Movie("Dragonheart", "Rob Cohen", "1996-05-31", 71.0, "A knight teams up with a dragon.")
	lines = format_report("dragon", [MatchResult(0, dragon, 92.5), MatchResult(1, heart, 71.0)])
	assert lines == [
		"",
		RULE_HEAVY,
		'Keyword: "dragon" | Matches: 2',
		"Sorted by popularity rating (descending)",
		RULE_LIGHT,
		" 1) How to Train Your Dragon     | Chris Sanders      | 2010-03-26  (92.5)",
		" 2) Dragonheart                  | Rob Cohen          | 1996-05-31  (71.0)",
		RULE_HEAVY,
	]
	assert len(RULE_HEAVY) == 60 and set(RULE_HEAVY) == {"="}
	assert len(RULE_LIGHT) == 60 and set(RULE_LIGHT) == {"-"}


def test_report_without_matches():
	lines = format_report("zzz-nomatch", [])
	assert lines[2] == 'Keyword: "zzz-nomatch" | Matches: 0'
	assert lines[5] == NO_MATCHES_LINE == "(No matches found)"
	assert lines[-1] == RULE_HEAVY


def test_emit_accepts_text_or_lines():
	out = io.StringIO()
	sink = ReportSink(out)
	sink.emit(["a", "b"])
	sink.emit("c\n")
	sink.status("d")
	assert out.getvalue() == "a\nb\nc\nd\n"
	assert sink.emitted_count == 3


class _SlowStream(io.StringIO):
	"""Writes one line at a time and yields between lines, inviting interleaving."""

	def write(self, s):
		for line in s.splitlines(keepends=True):
			super().write(line)
			time.sleep(0)
		return len(s)


def test_concurrent_emits_never_interleave():
	out = _SlowStream()
	sink = ReportSink(out)
	block_len = 12

	def writer(tag):
		for _ in range(5):
			sink.emit([f"{tag}:{i}" for i in range(block_len)])

	threads = [threading.Thread(target=writer, args=(f"w{n}",)) for n in range(8)]
	for th in threads:
		th.start()
	for th in threads:
		th.join(10.0)

	lines = out.getvalue().splitlines()
	assert len(lines) == 8 * 5 * block_len
	for start in range(0, len(lines), block_len):
		block = lines[start:start + block_len]
		tag = block[0].split(":")[0]
		assert block == [f"{tag}:{i}" for i in range(block_len)]


def test_default_stream_is_stdout(capsys):
	ReportSink().emit("hello")
	assert capsys.readouterr().out == "hello\n"
