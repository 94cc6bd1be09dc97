from __future__ import annotations

from dataclasses import dataclass, field

from colorlines.constants import INACTIVITY_TIMEOUT, TIMER_INTERVAL


@dataclass(slots=True)
class GameTimer:
	"""Play-time counter driven by explicit ``advance`` calls.

	The counter only runs while active. It pauses itself once no activity has
	been recorded for ``inactivity_timeout`` seconds and resumes on the next
	``record_activity``.
	"""

	interval: float = TIMER_INTERVAL
	inactivity_timeout: float | None = INACTIVITY_TIMEOUT
	seconds: int = 0
	active: bool = False

	_elapsed: float = field(init=False, default=0.0, repr=False)
	_idle: float = field(init=False, default=0.0, repr=False)

	def __post_init__(self) -> None:
		if self.interval <= 0.0:
			raise ValueError(f"interval must be positive, got {self.interval}")

	def start(self) -> None:
		self.active = True
		self._idle = 0.0

	def stop(self) -> None:
		self.active = False

	def reset(self) -> None:
		self.seconds = 0
		self.active = False
		self._elapsed = 0.0
		self._idle = 0.0

	def record_activity(self) -> None:
		self._idle = 0.0
		self.active = True

	def advance(self, dt: float) -> int:
		"""Move the clock forward by ``dt`` seconds; returns whole intervals added."""
		if not self.active or dt <= 0.0:
			return 0
		counted = float(dt)
		if self.inactivity_timeout is not None:
			previous_idle = self._idle
			self._idle += counted
			if self._idle >= self.inactivity_timeout:
				counted = max(0.0, self.inactivity_timeout - previous_idle)
				self.active = False
		self._elapsed += counted
		whole = int(self._elapsed // self.interval)
		if whole:
			self.seconds += whole
			self._elapsed -= whole * self.interval
		return whole
