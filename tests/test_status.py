"""
Tests for the assistant status state machine.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from codegenie.autocomplete.status import (
    Activity,
    AssistantDisabledError,
    StatusController,
)


class TestTransitions:
    def test_initial_state_ready(self):
        controller = StatusController()
        assert controller.enabled
        assert controller.status.activity is Activity.READY
        assert controller.text == "$(check) CodeGenie: Ready"

    def test_request_cycle(self):
        controller = StatusController()
        controller.begin_request()
        assert controller.status.activity is Activity.GENERATING
        assert controller.text == "$(sync~spin) CodeGenie: Generating..."

        controller.finish_request(result_empty=False)
        assert controller.status.activity is Activity.READY

    def test_empty_result_is_no_response(self):
        controller = StatusController()
        controller.begin_request()
        controller.finish_request(result_empty=True)
        assert controller.status.activity is Activity.NO_RESPONSE
        assert controller.text == "$(alert) CodeGenie: No response"

    def test_failure_is_error(self):
        controller = StatusController()
        controller.begin_request()
        controller.fail_request()
        assert controller.status.activity is Activity.ERROR
        assert controller.text == "$(error) CodeGenie: Error"

    def test_next_successful_cycle_returns_to_ready(self):
        controller = StatusController()
        controller.begin_request()
        controller.fail_request()
        controller.begin_request()
        controller.finish_request(result_empty=False)
        assert controller.status.activity is Activity.READY


class TestDisabled:
    def test_disabled_pre_empts_every_activity(self):
        controller = StatusController()
        controller.begin_request()
        controller.disable()
        assert controller.status.activity is Activity.DISABLED

        # An in-flight request reporting back does not show through
        for push in (
            lambda: controller.finish_request(result_empty=False),
            lambda: controller.finish_request(result_empty=True),
            controller.fail_request,
        ):
            push()
            assert controller.status.activity is Activity.DISABLED
            assert not controller.status.enabled
            assert controller.text == "$(x) CodeGenie: Disabled"

    def test_cannot_start_generating_when_disabled(self):
        controller = StatusController(enabled=False)
        with pytest.raises(AssistantDisabledError):
            controller.begin_request()
        assert controller.activity is not Activity.GENERATING

    def test_enable_resets_to_ready(self):
        controller = StatusController()
        controller.begin_request()
        controller.fail_request()
        controller.disable()
        controller.enable()
        assert controller.status.activity is Activity.READY
        assert controller.enabled


class TestListeners:
    def test_listener_receives_each_change(self):
        controller = StatusController()
        seen = []
        controller.subscribe(lambda status: seen.append(status.activity))

        controller.begin_request()
        controller.finish_request(result_empty=True)
        controller.disable()
        controller.enable()

        assert seen == [
            Activity.GENERATING,
            Activity.NO_RESPONSE,
            Activity.DISABLED,
            Activity.READY,
        ]

    def test_unsubscribe(self):
        controller = StatusController()
        seen = []
        unsubscribe = controller.subscribe(seen.append)
        unsubscribe()
        controller.begin_request()
        assert seen == []

    def test_failing_listener_does_not_break_transitions(self):
        controller = StatusController()
        seen = []

        def broken(status):
            raise RuntimeError("status bar gone")

        controller.subscribe(broken)
        controller.subscribe(seen.append)
        controller.begin_request()

        assert controller.status.activity is Activity.GENERATING
        assert len(seen) == 1

    def test_status_to_dict(self):
        controller = StatusController()
        controller.disable()
        assert controller.status.to_dict() == {
            "enabled": False,
            "activity": "disabled",
            "text": "$(x) CodeGenie: Disabled",
        }
