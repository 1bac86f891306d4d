"""
Exception types for the Film Search Gate.
Startup failures abort a whole run; per-task failures are recorded on the task.
"""


class FilmGateError(Exception):
	"""Base class for every error raised by this package."""


class GateConfigurationError(FilmGateError, ValueError):
	"""The admission gate (or the config feeding it) has an invalid capacity."""


class GateTimeoutError(FilmGateError, TimeoutError):
	"""No gate slot became available within the requested timeout."""


class GateReleaseError(FilmGateError, RuntimeError):
	"""A slot was released more times than it was acquired."""


class CatalogCapacityError(FilmGateError, ValueError):
	"""More movies were loaded than the catalog can hold."""


class DispatchError(FilmGateError, RuntimeError):
	"""A worker thread could not be started; the whole run is aborted."""
