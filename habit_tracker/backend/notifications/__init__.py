"""
Notification Pipeline.

    producer.py   - turns domain events into pending Notification rows
    dispatcher.py - one tick: deliver pending notifications, build a report
    scheduler.py  - owns the recurring dispatcher job (APScheduler)
    reminders.py  - minute job that queues habit reminders
    transport.py  - messaging transport contract
    runtime.py    - wires the pieces together for the application lifespan

Flow:
    event -> NotificationProducer -> Notification(sent=False)
          -> DispatchScheduler tick -> NotificationDispatcher.run_once()
          -> MessageTransport.send_notification() -> mark_notification_sent()
"""

from habit_tracker.backend.notifications.dispatcher import (
    DeliveryOutcome,
    DeliveryResult,
    DispatchReport,
    DispatchSettings,
    NotificationDispatcher,
    RetentionPolicy,
)
from habit_tracker.backend.notifications.producer import NotificationProducer
from habit_tracker.backend.notifications.scheduler import DispatchScheduler, SchedulerState
from habit_tracker.backend.notifications.transport import MessageTransport, NullTransport

__all__ = [
    "DeliveryOutcome",
    "DeliveryResult",
    "DispatchReport",
    "DispatchScheduler",
    "DispatchSettings",
    "MessageTransport",
    "NotificationDispatcher",
    "NotificationProducer",
    "NullTransport",
    "RetentionPolicy",
    "SchedulerState",
]
