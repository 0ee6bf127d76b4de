"""Deferred draft triggers: the pick timer and paced CPU picks."""
import logging
import threading
from typing import Callable, Optional, Tuple
from puckdraft.models.draft import DraftState
from puckdraft.services import draft_config
from puckdraft.services.draft_service import DraftService
from puckdraft.services.errors import DraftError

logger = logging.getLogger(__name__)

TimerFactory = Callable[..., threading.Timer]


class DraftScheduler:
    """
    Feeds timer ticks and CPU picks into a DraftService.

    Each scheduled task is keyed to the pick index it was scheduled for.
    When it fires, DraftService drops it unless that pick is still current,
    so a task that lost a race never applies twice.
    """

    def __init__(
        self,
        draft_service: DraftService,
        cpu_delay: float = draft_config.CPU_PICK_DELAY_SECONDS,
        tick_interval: float = draft_config.TIMER_TICK_SECONDS,
        timer_factory: TimerFactory = threading.Timer
    ):
        self.draft_service = draft_service
        self.cpu_delay = cpu_delay
        self.tick_interval = tick_interval
        self.timer_factory = timer_factory

        self._lock = threading.Lock()
        self._running = False
        self._cpu_timer: Optional[threading.Timer] = None
        self._cpu_target: Optional[int] = None
        self._tick_timer: Optional[threading.Timer] = None
        self._tick_target: Optional[Tuple[int, int]] = None
        self._subscribed = False
        self.last_error: Optional[str] = None

    def start(self):
        """Begin reacting to state changes."""
        if not self._subscribed:
            self.draft_service.subscribe(self.on_state_change)
            self._subscribed = True
        with self._lock:
            self._running = True
        self.draft_service.replay(self.on_state_change)

    def shutdown(self):
        """Cancel anything pending and stop scheduling."""
        with self._lock:
            self._running = False
            self._cancel_cpu()
            self._cancel_tick()

    def on_state_change(self, state: DraftState):
        with self._lock:
            if not self._running:
                return
            if not state.is_draft_started:
                self.last_error = None
            self._schedule_cpu_pick(state)
            self._schedule_tick(state)

    @property
    def pending_cpu_pick(self) -> Optional[int]:
        """Pick index a CPU pick is scheduled for, if any."""
        return self._cpu_target if self._cpu_timer is not None else None

    @property
    def pending_tick(self) -> Optional[int]:
        return self._tick_target[0] if self._tick_timer is not None else None

    def _schedule_cpu_pick(self, state: DraftState):
        current_pick = state.current_pick()
        cpu_on_clock = (
            state.is_draft_started
            and not state.is_draft_complete
            and current_pick is not None
            and not current_pick.is_user_pick
            and not current_pick.is_filled
        )
        if not cpu_on_clock:
            self._cancel_cpu()
            return

        pick_index = state.current_pick_index
        if self._cpu_timer is not None and self._cpu_target == pick_index:
            return

        self._cancel_cpu()
        logger.debug("Scheduling CPU pick for index %d in %.1fs", pick_index, self.cpu_delay)
        self._cpu_target = pick_index
        self._cpu_timer = self._start_timer(self.cpu_delay, self._fire_cpu_pick, pick_index)

    def _schedule_tick(self, state: DraftState):
        settings = state.league_settings
        clock_running = (
            state.is_timer_active
            and not state.is_draft_complete
            and settings is not None
            and settings.draft_timer_seconds != 0
        )
        if not clock_running:
            self._cancel_tick()
            return

        target = (state.current_pick_index, state.pick_timer_remaining)
        if self._tick_timer is not None and self._tick_target == target:
            return

        self._cancel_tick()
        self._tick_target = target
        self._tick_timer = self._start_timer(self.tick_interval, self._fire_tick, state.current_pick_index)

    def _start_timer(self, delay: float, callback, pick_index: int) -> threading.Timer:
        timer = self.timer_factory(delay, callback, args=(pick_index,))
        timer.daemon = True
        timer.start()
        return timer

    def _fire_cpu_pick(self, pick_index: int):
        with self._lock:
            if self._cpu_target == pick_index:
                self._cpu_timer = None
                self._cpu_target = None
        try:
            self.draft_service.process_cpu_pick(expected_pick_index=pick_index)
        except DraftError as e:
            # The draft cannot advance; keep the reason for the API to report
            logger.exception("CPU pick failed at index %d", pick_index)
            self.last_error = str(e)
        except Exception:
            logger.exception("CPU pick failed at index %d", pick_index)
            raise

    def _fire_tick(self, pick_index: int):
        with self._lock:
            if self._tick_target is not None and self._tick_target[0] == pick_index:
                self._tick_timer = None
                self._tick_target = None
        try:
            self.draft_service.tick(expected_pick_index=pick_index)
        except DraftError as e:
            logger.exception("Pick timer tick failed at index %d", pick_index)
            self.last_error = str(e)
        except Exception:
            logger.exception("Pick timer tick failed at index %d", pick_index)
            raise

    def _cancel_cpu(self):
        if self._cpu_timer is not None:
            self._cpu_timer.cancel()
        self._cpu_timer = None
        self._cpu_target = None

    def _cancel_tick(self):
        if self._tick_timer is not None:
            self._tick_timer.cancel()
        self._tick_timer = None
        self._tick_target = None
