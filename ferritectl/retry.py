from dataclasses import dataclass


@dataclass
class ReconnectPolicy:
    """
    Linear reconnect schedule used while establishing a session.

    Attempt ``n`` waits ``min(n * step, maximum)`` seconds. Once
    ``max_retries`` attempts have been handed out, ``next_delay`` returns
    ``None`` and the caller must give up.
    """

    step: float = 0.2
    maximum: float = 2.0
    max_retries: int = 3

    _attempts: int = 0

    def next_delay(self) -> float | None:
        if self._attempts >= self.max_retries:
            return None

        self._attempts += 1
        return min(self._attempts * self.step, self.maximum)

    @property
    def attempts(self) -> int:
        return self._attempts

    def reset(self):
        self._attempts = 0
