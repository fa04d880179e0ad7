"""Tests for the ValuationCompleted handler and its wiring through the bus."""

from unittest.mock import Mock

from core.event_bus import EventBus
from core.events import ValuationCompleted
from core.exceptions import DependencyError
from core.handlers.valuation_completed_handler import handle_valuation_completed
from core.services.intake_service import IntakeService
from core.services.notification_service import NotificationService


def test_handler_sends_report():
    notifications = Mock(spec=NotificationService)
    valuation = Mock()

    handle_valuation_completed(notifications)(ValuationCompleted.create(valuation))

    notifications.send_valuation_report.assert_called_once_with(valuation)


def test_completion_sends_report_with_saved_estimates(
    valuation_service, contact, property_data
):
    notifications = Mock(spec=NotificationService)
    bus = EventBus()
    bus.subscribe(ValuationCompleted, handle_valuation_completed(notifications))
    intake = IntakeService(valuation_service, bus)

    started = intake.start_intake(contact)
    intake.complete_intake(started.id, property_data)

    [call] = notifications.send_valuation_report.call_args_list
    sent = call.args[0]
    assert sent.id == started.id
    assert sent.conservative_estimate == 835417


def test_send_failure_leaves_completed_record(valuation_service, contact, property_data):
    notifications = Mock(spec=NotificationService)
    notifications.send_valuation_report.side_effect = DependencyError("gateway down")
    bus = EventBus()
    bus.subscribe(ValuationCompleted, handle_valuation_completed(notifications))
    intake = IntakeService(valuation_service, bus)

    started = intake.start_intake(contact)
    result = intake.complete_intake(started.id, property_data)

    stored = valuation_service.get(started.id)
    assert result.optimistic_estimate == 1253125
    assert stored.stage2_completed is True
    assert stored.optimistic_estimate == 1253125
