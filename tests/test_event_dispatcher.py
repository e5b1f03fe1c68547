"""Tests for the domain EventDispatcher (register / unregister / notify)."""

from unittest import TestCase
from unittest.mock import call, patch

from structlog.testing import capture_logs

from storefront.core.application.event_handlers import (
    SendEmailWhenProductIsCreatedHandler,
    SendMessage1WhenCustomerIsCreatedHandler,
    SendMessage2WhenCustomerIsCreatedHandler,
    SendMessageWhenCustomerAddressIsChangedHandler,
)
from storefront.core.domain.entities import AddressEntity, CustomerEntity
from storefront.core.domain.events import (
    CustomerAddressChangedEvent,
    CustomerCreatedEvent,
    ProductCreatedEvent,
)
from storefront.core.domain.exceptions import InvalidEventNameError, InvalidHandlerError
from storefront.core.domain.services import EventDispatcher


class RecordingHandler:
    """Handler de teste: anota (nome, evento) numa lista compartilhada."""

    def __init__(self, name: str, calls: list, fail: bool = False) -> None:
        self.name = name
        self.calls = calls
        self.fail = fail

    def handle(self, event) -> None:
        self.calls.append((self.name, event))
        if self.fail:
            raise RuntimeError(f"{self.name} failed")


def product_created_event() -> ProductCreatedEvent:
    return ProductCreatedEvent(
        {"name": "Product 1", "description": "Product 1 description", "price": 10.0}
    )


class EventDispatcherRegistrationTests(TestCase):
    # ----------------------------------------------------------------─  register

    def test_register_an_event_handler(self) -> None:
        dispatcher = EventDispatcher()
        handler = SendEmailWhenProductIsCreatedHandler()

        dispatcher.register("ProductCreatedEvent", handler)

        handlers = dispatcher.get_event_handlers()
        self.assertIn("ProductCreatedEvent", handlers)
        self.assertEqual(len(handlers["ProductCreatedEvent"]), 1)
        self.assertIs(handlers["ProductCreatedEvent"][0], handler)

    def test_key_is_absent_before_first_registration(self) -> None:
        dispatcher = EventDispatcher()

        self.assertNotIn("ProductCreatedEvent", dispatcher.get_event_handlers())
        self.assertIsNone(dispatcher.get_event_handlers().get("ProductCreatedEvent"))
        self.assertFalse(dispatcher.has_handlers("ProductCreatedEvent"))

    def test_register_preserves_registration_order(self) -> None:
        dispatcher = EventDispatcher()
        first = SendMessage1WhenCustomerIsCreatedHandler()
        second = SendMessage2WhenCustomerIsCreatedHandler()

        dispatcher.register("CustomerCreatedEvent", first)
        dispatcher.register("CustomerCreatedEvent", second)

        self.assertEqual(dispatcher.event_handlers["CustomerCreatedEvent"], [first, second])

    def test_register_same_handler_twice_keeps_duplicates(self) -> None:
        dispatcher = EventDispatcher()
        handler = SendEmailWhenProductIsCreatedHandler()

        dispatcher.register("ProductCreatedEvent", handler)
        dispatcher.register("ProductCreatedEvent", handler)

        self.assertEqual(len(dispatcher.event_handlers["ProductCreatedEvent"]), 2)

    def test_deduplicate_option_ignores_same_instance(self) -> None:
        dispatcher = EventDispatcher(deduplicate=True)
        handler = SendEmailWhenProductIsCreatedHandler()
        other = SendEmailWhenProductIsCreatedHandler()

        dispatcher.register("ProductCreatedEvent", handler)
        dispatcher.register("ProductCreatedEvent", handler)
        dispatcher.register("ProductCreatedEvent", other)

        self.assertEqual(dispatcher.event_handlers["ProductCreatedEvent"], [handler, other])

    def test_register_rejects_invalid_event_names(self) -> None:
        dispatcher = EventDispatcher()
        handler = SendEmailWhenProductIsCreatedHandler()

        for bad in ("", "   ", " ProductCreatedEvent", None, 42):
            with self.subTest(event_name=bad), self.assertRaises(InvalidEventNameError):
                dispatcher.register(bad, handler)

        self.assertEqual(dict(dispatcher.get_event_handlers()), {})

    def test_register_rejects_objects_without_handle(self) -> None:
        dispatcher = EventDispatcher()

        def send_email(event) -> None:
            pass

        for bad in (send_email, object(), None):
            with self.subTest(handler=bad), self.assertRaises(InvalidHandlerError):
                dispatcher.register("ProductCreatedEvent", bad)

        self.assertNotIn("ProductCreatedEvent", dispatcher.get_event_handlers())

    def test_invalid_event_name_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            EventDispatcher().register("", SendEmailWhenProductIsCreatedHandler())

    def test_registry_view_is_read_only_and_live(self) -> None:
        dispatcher = EventDispatcher()
        view = dispatcher.get_event_handlers()

        with self.assertRaises(TypeError):
            view["ProductCreatedEvent"] = []  # type: ignore[index]

        dispatcher.register("ProductCreatedEvent", SendEmailWhenProductIsCreatedHandler())
        self.assertIn("ProductCreatedEvent", view)

    def test_register_logs_the_subscription(self) -> None:
        dispatcher = EventDispatcher()

        with capture_logs() as logs:
            dispatcher.register("ProductCreatedEvent", SendEmailWhenProductIsCreatedHandler())

        self.assertEqual(logs[0]["event"], "event.registered")
        self.assertEqual(logs[0]["handler_name"], "SendEmailWhenProductIsCreatedHandler")
        self.assertEqual(logs[0]["listeners"], 1)


class EventDispatcherUnregisterTests(TestCase):
    def test_unregister_an_event_handler(self) -> None:
        dispatcher = EventDispatcher()
        handler = SendEmailWhenProductIsCreatedHandler()
        dispatcher.register("ProductCreatedEvent", handler)

        dispatcher.unregister("ProductCreatedEvent", handler)

        self.assertIn("ProductCreatedEvent", dispatcher.get_event_handlers())
        self.assertEqual(len(dispatcher.get_event_handlers()["ProductCreatedEvent"]), 0)

    def test_unregister_removes_one_occurrence_at_a_time(self) -> None:
        dispatcher = EventDispatcher()
        handler = SendEmailWhenProductIsCreatedHandler()
        dispatcher.register("ProductCreatedEvent", handler)
        dispatcher.register("ProductCreatedEvent", handler)

        dispatcher.unregister("ProductCreatedEvent", handler)
        self.assertEqual(dispatcher.event_handlers["ProductCreatedEvent"], [handler])

        dispatcher.unregister("ProductCreatedEvent", handler)
        self.assertEqual(dispatcher.event_handlers["ProductCreatedEvent"], [])

    def test_unregister_removes_the_earliest_occurrence(self) -> None:
        dispatcher = EventDispatcher()
        a = SendMessage1WhenCustomerIsCreatedHandler()
        b = SendMessage2WhenCustomerIsCreatedHandler()
        for handler in (a, b, a):
            dispatcher.register("CustomerCreatedEvent", handler)

        dispatcher.unregister("CustomerCreatedEvent", a)

        self.assertEqual(dispatcher.event_handlers["CustomerCreatedEvent"], [b, a])

    def test_unregister_matches_by_identity_not_type(self) -> None:
        dispatcher = EventDispatcher()
        registered = SendEmailWhenProductIsCreatedHandler()
        other = SendEmailWhenProductIsCreatedHandler()
        dispatcher.register("ProductCreatedEvent", registered)

        dispatcher.unregister("ProductCreatedEvent", other)

        self.assertEqual(dispatcher.event_handlers["ProductCreatedEvent"], [registered])

    def test_unregister_unknown_key_is_a_noop(self) -> None:
        dispatcher = EventDispatcher()

        dispatcher.unregister("ProductCreatedEvent", SendEmailWhenProductIsCreatedHandler())

        self.assertNotIn("ProductCreatedEvent", dispatcher.get_event_handlers())

    def test_unregister_rejects_invalid_event_names(self) -> None:
        with self.assertRaises(InvalidEventNameError):
            EventDispatcher().unregister("", SendEmailWhenProductIsCreatedHandler())

    def test_unregister_all_event_handlers(self) -> None:
        dispatcher = EventDispatcher()
        handler = SendEmailWhenProductIsCreatedHandler()
        dispatcher.register("ProductCreatedEvent", handler)
        dispatcher.register("CustomerCreatedEvent", SendMessage1WhenCustomerIsCreatedHandler())
        dispatcher.unregister("CustomerCreatedEvent", handler)

        dispatcher.unregister_all()

        self.assertIsNone(dispatcher.get_event_handlers().get("ProductCreatedEvent"))
        self.assertNotIn("CustomerCreatedEvent", dispatcher.get_event_handlers())
        self.assertEqual(len(dispatcher.get_event_handlers()), 0)

    def test_register_after_unregister_all_recreates_the_key(self) -> None:
        dispatcher = EventDispatcher()
        handler = SendEmailWhenProductIsCreatedHandler()
        dispatcher.register("ProductCreatedEvent", handler)
        dispatcher.unregister_all()

        dispatcher.register("ProductCreatedEvent", handler)

        self.assertEqual(dispatcher.event_handlers["ProductCreatedEvent"], [handler])


class EventDispatcherNotifyTests(TestCase):
    def test_notify_all_event_handlers(self) -> None:
        dispatcher = EventDispatcher()
        handler = SendEmailWhenProductIsCreatedHandler()
        dispatcher.register("ProductCreatedEvent", handler)
        event = product_created_event()

        with patch.object(handler, "handle") as spy:
            dispatcher.notify(event)

        spy.assert_called_once_with(event)

    def test_notify_fans_out_in_registration_order(self) -> None:
        dispatcher = EventDispatcher()
        calls: list = []
        dispatcher.register("ProductCreatedEvent", RecordingHandler("h1", calls))
        dispatcher.register("ProductCreatedEvent", RecordingHandler("h2", calls))
        event = product_created_event()

        dispatcher.notify(event)

        self.assertEqual([name for name, _ in calls], ["h1", "h2"])
        self.assertTrue(all(received is event for _, received in calls))

    def test_duplicate_registration_is_invoked_twice(self) -> None:
        dispatcher = EventDispatcher()
        calls: list = []
        handler = RecordingHandler("h", calls)
        dispatcher.register("ProductCreatedEvent", handler)
        dispatcher.register("ProductCreatedEvent", handler)

        dispatcher.notify(product_created_event())

        self.assertEqual(len(calls), 2)

    def test_notify_other_key_invokes_nothing(self) -> None:
        dispatcher = EventDispatcher()
        calls: list = []
        dispatcher.register("CustomerCreatedEvent", RecordingHandler("h", calls))

        dispatcher.notify(product_created_event())

        self.assertEqual(calls, [])

    def test_notify_without_registrations_is_a_noop(self) -> None:
        dispatcher = EventDispatcher()

        dispatcher.notify(product_created_event())

        self.assertNotIn("ProductCreatedEvent", dispatcher.get_event_handlers())

    def test_notify_after_unregister_invokes_nothing(self) -> None:
        dispatcher = EventDispatcher()
        calls: list = []
        handler = RecordingHandler("h", calls)
        dispatcher.register("ProductCreatedEvent", handler)
        dispatcher.unregister("ProductCreatedEvent", handler)

        dispatcher.notify(product_created_event())

        self.assertEqual(calls, [])

    def test_handler_failure_propagates_and_aborts_remaining(self) -> None:
        dispatcher = EventDispatcher()
        calls: list = []
        dispatcher.register("ProductCreatedEvent", RecordingHandler("h1", calls))
        dispatcher.register("ProductCreatedEvent", RecordingHandler("boom", calls, fail=True))
        dispatcher.register("ProductCreatedEvent", RecordingHandler("h3", calls))

        with self.assertRaisesRegex(RuntimeError, "boom failed"):
            dispatcher.notify(product_created_event())

        self.assertEqual([name for name, _ in calls], ["h1", "boom"])

    def test_notify_isolated_runs_every_handler_and_reports_failures(self) -> None:
        dispatcher = EventDispatcher()
        calls: list = []
        failing = RecordingHandler("boom", calls, fail=True)
        dispatcher.register("ProductCreatedEvent", RecordingHandler("h1", calls))
        dispatcher.register("ProductCreatedEvent", failing)
        dispatcher.register("ProductCreatedEvent", RecordingHandler("h3", calls))

        with capture_logs() as logs:
            failures = dispatcher.notify_isolated(product_created_event())

        self.assertEqual([name for name, _ in calls], ["h1", "boom", "h3"])
        self.assertEqual(len(failures), 1)
        self.assertIs(failures[0].handler, failing)
        self.assertIsInstance(failures[0].error, RuntimeError)
        self.assertEqual(failures[0].handler_name, "RecordingHandler")
        errors = [entry for entry in logs if entry["log_level"] == "error"]
        self.assertEqual(errors[0]["event"], "event.handler_error")

    def test_notify_isolated_does_not_swallow_base_exceptions(self) -> None:
        class Interrupting:
            def handle(self, event) -> None:
                raise KeyboardInterrupt

        dispatcher = EventDispatcher()
        dispatcher.register("ProductCreatedEvent", Interrupting())

        with self.assertRaises(KeyboardInterrupt):
            dispatcher.notify_isolated(product_created_event())

    def test_notify_rejects_event_without_declared_name(self) -> None:
        class Anonymous:
            payload: dict = {}

        with self.assertRaises(InvalidEventNameError):
            EventDispatcher().notify(Anonymous())

    def test_notify_accepts_duck_typed_events(self) -> None:
        class PingEvent:
            event_name = "Ping"
            payload = {"n": 1}

        dispatcher = EventDispatcher()
        calls: list = []
        dispatcher.register("Ping", RecordingHandler("h", calls))
        event = PingEvent()

        dispatcher.notify(event)

        self.assertEqual(calls, [("h", event)])

    def test_handler_registered_during_notify_runs_next_time(self) -> None:
        dispatcher = EventDispatcher()
        calls: list = []
        late = RecordingHandler("late", calls)

        class Registering:
            def handle(self, event) -> None:
                calls.append(("registering", event))
                dispatcher.register("ProductCreatedEvent", late)

        dispatcher.register("ProductCreatedEvent", Registering())
        dispatcher.notify(product_created_event())
        self.assertEqual([name for name, _ in calls], ["registering"])

        dispatcher.notify(product_created_event())
        self.assertIn("late", [name for name, _ in calls])


class EventDispatcherScenarioTests(TestCase):
    def test_notify_when_customer_is_created(self) -> None:
        dispatcher = EventDispatcher()
        dispatcher2 = EventDispatcher()
        handler = SendMessage1WhenCustomerIsCreatedHandler()
        handler2 = SendMessage2WhenCustomerIsCreatedHandler()

        dispatcher.register("CustomerCreatedEvent", handler)
        dispatcher2.register("CustomerCreatedEvent", handler2)
        self.assertEqual(dispatcher.event_handlers["CustomerCreatedEvent"], [handler])
        self.assertEqual(dispatcher2.event_handlers["CustomerCreatedEvent"], [handler2])

        event = CustomerCreatedEvent({"id": "123", "name": "Customer 1"})
        with patch.object(handler, "handle") as spy, patch.object(handler2, "handle") as spy2:
            dispatcher.notify(event)

            spy.assert_called_once_with(event)
            spy2.assert_not_called()

            dispatcher2.notify(event)
            spy2.assert_called_once_with(event)

    def test_dispatchers_do_not_share_registrations(self) -> None:
        first = EventDispatcher()
        second = EventDispatcher()

        first.register("CustomerCreatedEvent", SendMessage1WhenCustomerIsCreatedHandler())

        self.assertNotIn("CustomerCreatedEvent", second.get_event_handlers())

    def test_notify_when_customer_address_is_changed(self) -> None:
        dispatcher = EventDispatcher()
        handler = SendMessageWhenCustomerAddressIsChangedHandler()
        dispatcher.register(CustomerAddressChangedEvent.event_name, handler)

        customer = CustomerEntity("1", "Customer 1", address=AddressEntity("Street 1", 1, "Zipcode 1", "City 1"))
        customer.change_address(AddressEntity("Street 2", 2, "Zipcode 2", "City 2"))
        (event,) = customer.pull_events()

        with capture_logs() as logs:
            dispatcher.notify(event)

        messages = [entry["event"] for entry in logs]
        self.assertIn(
            "Endereço do cliente: 1, Customer 1 alterado para: Street 2, 2, Zipcode 2, City 2",
            messages,
        )

    def test_shared_handler_across_dispatchers(self) -> None:
        first = EventDispatcher()
        second = EventDispatcher()
        calls: list = []
        shared = RecordingHandler("shared", calls)
        first.register("ProductCreatedEvent", shared)
        second.register("ProductCreatedEvent", shared)

        first.unregister("ProductCreatedEvent", shared)
        second.notify(product_created_event())

        self.assertEqual(len(calls), 1)
        self.assertEqual(calls[0][0], "shared")
        self.assertEqual(first.event_handlers["ProductCreatedEvent"], [])
        self.assertEqual(second.event_handlers["ProductCreatedEvent"], [shared])

    def test_product_created_handler_logs_on_notify(self) -> None:
        dispatcher = EventDispatcher()
        dispatcher.register("ProductCreatedEvent", SendEmailWhenProductIsCreatedHandler())

        with capture_logs() as logs:
            dispatcher.notify(product_created_event())

        self.assertEqual(
            [entry["event"] for entry in logs],
            ["event.dispatch", "Sending email to product owner"],
        )
        self.assertEqual(logs[0]["listeners"], 1)
        self.assertEqual(logs[1]["product_name"], "Product 1")

    def test_mock_handlers_are_called_in_order(self) -> None:
        dispatcher = EventDispatcher()
        first = SendMessage1WhenCustomerIsCreatedHandler()
        second = SendMessage2WhenCustomerIsCreatedHandler()
        dispatcher.register("CustomerCreatedEvent", first)
        dispatcher.register("CustomerCreatedEvent", second)
        event = CustomerCreatedEvent({"id": "123", "name": "Customer 1"})

        with patch.object(first, "handle") as spy1, patch.object(second, "handle") as spy2:
            manager_calls: list = []
            spy1.side_effect = lambda e: manager_calls.append(call.first(e))
            spy2.side_effect = lambda e: manager_calls.append(call.second(e))
            dispatcher.notify(event)

        self.assertEqual(manager_calls, [call.first(event), call.second(event)])
