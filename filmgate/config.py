"""
Runtime configuration.
Defaults mirror the demo run; every field can be overridden from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .errors import GateConfigurationError

DEFAULT_KEYWORDS: Tuple[str, ...] = ("dragon", "magic", "war", "love", "space", "crime", "dream", "mystery")


def _env_int(name: str, default: int) -> int:
	v = os.getenv(name)
	return default if v is None or v.strip() == "" else int(v)


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
	v = os.getenv(name)
	return default if v is None or v.strip() == "" else float(v)


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
	v = os.getenv(name)
	return default if v is None or v.strip() == "" else v.strip()


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
	v = os.getenv(name)
	if v is None or v.strip() == "":
		return default
	return tuple(k.strip() for k in v.split(",") if k.strip())


@dataclass(frozen=True)
class SearchConfig:
	# Hard gate: concurrent catalog searches
	db_slots: int = 5

	# Simulated per-search load so the gate's effect is visible
	work_delay_ms: int = 200

	# Matches kept per keyword; extras are dropped
	max_results: int = 30

	# None blocks forever on the gate
	acquire_timeout_s: Optional[float] = None

	# JSONL catalog; None uses the built-in movies
	data_path: Optional[str] = None

	log_level: str = "INFO"
	keywords: Tuple[str, ...] = DEFAULT_KEYWORDS

	def __post_init__(self) -> None:
		if isinstance(self.db_slots, bool) or not isinstance(self.db_slots, int) or self.db_slots < 1:
			raise GateConfigurationError(f"db_slots must be a positive integer, got {self.db_slots!r}")
		if self.max_results < 0:
			raise ValueError(f"max_results cannot be negative, got {self.max_results}")
		if self.work_delay_ms < 0:
			raise ValueError(f"work_delay_ms cannot be negative, got {self.work_delay_ms}")
		if self.acquire_timeout_s is not None and self.acquire_timeout_s <= 0:
			raise ValueError(f"acquire_timeout_s must be positive when set, got {self.acquire_timeout_s}")

	@property
	def work_delay_s(self) -> float:
		return self.work_delay_ms / 1000.0

	def with_overrides(self, **changes) -> "SearchConfig":
		"""Copy with the given fields replaced; None values are ignored."""
		return replace(self, **{k: v for k, v in changes.items() if v is not None})

	@staticmethod
	def from_env() -> "SearchConfig":
		return SearchConfig(
			db_slots=_env_int("FILMGATE_DB_SLOTS", 5),
			work_delay_ms=_env_int("FILMGATE_WORK_DELAY_MS", 200),
			max_results=_env_int("FILMGATE_MAX_RESULTS", 30),
			acquire_timeout_s=_env_float("FILMGATE_ACQUIRE_TIMEOUT_S", None),
			data_path=_env_str("FILMGATE_DATA_PATH", None),
			log_level=_env_str("FILMGATE_LOG_LEVEL", "INFO") or "INFO",
			keywords=_env_list("FILMGATE_KEYWORDS", DEFAULT_KEYWORDS),
		)
