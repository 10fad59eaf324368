"""
Assistant status: the enabled flag plus the activity of the current request.

Callers push activity at fixed checkpoints (request start, success/empty,
failure, enable/disable). The reported status is DISABLED whenever the
assistant is disabled, whatever an in-flight request last pushed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List

from codegenie.utils.logger import logger


class Activity(Enum):
    READY = "ready"
    DISABLED = "disabled"
    GENERATING = "generating"
    NO_RESPONSE = "no_response"
    ERROR = "error"


STATUS_TEXT: Dict[Activity, str] = {
    Activity.READY: "$(check) CodeGenie: Ready",
    Activity.DISABLED: "$(x) CodeGenie: Disabled",
    Activity.GENERATING: "$(sync~spin) CodeGenie: Generating...",
    Activity.NO_RESPONSE: "$(alert) CodeGenie: No response",
    Activity.ERROR: "$(error) CodeGenie: Error",
}


class AssistantDisabledError(RuntimeError):
    """Raised when work is started while the assistant is disabled."""

    pass


@dataclass(frozen=True)
class AssistantStatus:
    """Snapshot of the assistant's mode and activity."""

    enabled: bool
    activity: Activity

    @property
    def text(self) -> str:
        """Status bar text for this state."""
        return STATUS_TEXT[self.activity]

    def to_dict(self) -> Dict[str, object]:
        return {
            'enabled': self.enabled,
            'activity': self.activity.value,
            'text': self.text,
        }


StatusListener = Callable[[AssistantStatus], None]


class StatusController:
    """
    Holds the process-wide enabled flag and the last pushed activity.

    One instance is created at startup and injected into every component
    that reads or changes the assistant's state.
    """

    def __init__(self, enabled: bool = True):
        self._enabled = enabled
        self._activity = Activity.READY
        self._listeners: List[StatusListener] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def activity(self) -> Activity:
        """Last activity pushed by the pipeline (not pre-empted by disable)."""
        return self._activity

    @property
    def status(self) -> AssistantStatus:
        if not self._enabled:
            return AssistantStatus(enabled=False, activity=Activity.DISABLED)
        return AssistantStatus(enabled=True, activity=self._activity)

    @property
    def text(self) -> str:
        return self.status.text

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """
        Register a callback fired after every status change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # === TOGGLES ===

    def enable(self):
        self._enabled = True
        self._activity = Activity.READY
        self._notify()

    def disable(self):
        self._enabled = False
        self._notify()

    # === REQUEST CHECKPOINTS ===

    def begin_request(self):
        """
        Mark a request as in flight.

        Raises:
            AssistantDisabledError: If the assistant is disabled
        """
        if not self._enabled:
            raise AssistantDisabledError("CodeGenie is disabled")
        self._set_activity(Activity.GENERATING)

    def finish_request(self, result_empty: bool):
        self._set_activity(Activity.NO_RESPONSE if result_empty else Activity.READY)

    def fail_request(self):
        self._set_activity(Activity.ERROR)

    def _set_activity(self, activity: Activity):
        self._activity = activity
        self._notify()

    def _notify(self):
        status = self.status
        logger.status_changed(status.enabled, status.activity.value)

        # Fire-and-forget: listener failures are logged, never raised
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception as e:
                logger.error('STATUS', "Status listener failed", e)
