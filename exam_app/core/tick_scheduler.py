"""Qt timer that feeds once-per-second ticks into an exam."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from exam_app.constants.exam_constants import TICK_INTERVAL_MS


class QtTickScheduler(QObject):
    """Single recurring timer calling ``on_tick`` every interval until stopped.

    ``start`` and ``stop`` may be called from any thread: they are routed
    through signals so the timer is only touched on the thread owning it.
    """

    _start_requested = Signal()
    _stop_requested = Signal()

    def __init__(
        self,
        on_tick: Callable[[], None],
        interval_ms: int = TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._on_tick = on_tick
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._handle_timeout)
        self._start_requested.connect(self._start_timer)
        self._stop_requested.connect(self._stop_timer)

    def start(self) -> None:
        """(Re)start the countdown from a full interval."""
        self._start_requested.emit()

    def stop(self) -> None:
        self._stop_requested.emit()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def interval_ms(self) -> int:
        return self._timer.interval()

    @Slot()
    def _start_timer(self) -> None:
        self._timer.start()

    @Slot()
    def _stop_timer(self) -> None:
        self._timer.stop()

    @Slot()
    def _handle_timeout(self) -> None:
        self._on_tick()
