"""Tests for the @controller / @service / @component / @configuration markers."""

from __future__ import annotations

import pytest

from calllog.framework.categories import Category, categories_of, is_watched
from calllog.framework.interceptor import CallInterceptor, LoggingProxy, is_instrumented
from calllog.framework.stereotypes import component, configuration, controller, service, stereotype, watch


class TestMarkers:
    @pytest.mark.parametrize(
        ("marker", "category"),
        [
            (controller, Category.CONTROLLER),
            (service, Category.SERVICE),
            (component, Category.COMPONENT),
            (configuration, Category.CONFIGURATION),
        ],
    )
    def test_marker_registers_category(self, marker, category):
        @marker
        class Thing:
            def act(self):
                return 1

        assert categories_of(Thing) == {category}
        assert is_instrumented(Thing.act)

    def test_marked_class_logs_calls(self, default_interceptor, sink):
        @service
        class PaymentService:
            def charge(self, account, amount):
                return f"{account}:{amount}"

        assert PaymentService().charge("acc-1", 20) == "acc-1:20"
        assert sink.messages == [
            "Started charge [account=acc-1,amount=20]",
            "Finished charge [account=acc-1,amount=20] returned [acc-1:20] in 7 ms",
        ]

    def test_stacked_markers_wrap_once(self, default_interceptor, sink):
        @service
        @component
        class Scheduler:
            def tick(self):
                return "tock"

        assert categories_of(Scheduler) == {Category.SERVICE, Category.COMPONENT}
        Scheduler().tick()
        assert sink.messages == [
            "Started tick []",
            "Finished tick [] returned [tock] in 7 ms",
        ]

    def test_stereotype_with_many_categories(self):
        @stereotype(Category.CONTROLLER, Category.CONFIGURATION)
        class Admin:
            pass

        assert categories_of(Admin) == {Category.CONTROLLER, Category.CONFIGURATION}

    def test_configuration_holder_factory_methods(self, default_interceptor, sink):
        @configuration
        class AppConfig:
            def database_url(self):
                return "sqlite://"

        AppConfig().database_url()
        assert sink.messages[0] == "Started database_url []"

    def test_calls_between_layers_nest(self, default_interceptor, sink):
        @service
        class Inventory:
            def reserve(self, sku):
                return True

        @controller
        class CheckoutController:
            def __init__(self, inventory):
                self.inventory = inventory

            def checkout(self, sku):
                return self.inventory.reserve(sku)

        CheckoutController(Inventory()).checkout("A-1")
        assert sink.messages == [
            "Started checkout [sku=A-1]",
            "Started reserve [sku=A-1]",
            "Finished reserve [sku=A-1] returned [True] in 7 ms",
            "Finished checkout [sku=A-1] returned [True] in 7 ms",
        ]

    def test_unmarked_class_is_silent(self, default_interceptor, sink):
        class Helper:
            def help(self):
                return 1

        Helper().help()
        assert not is_watched(Helper)
        assert sink.records == []


class TestWatch:
    def test_watch_defaults_to_component(self, default_interceptor, sink):
        class Cache:
            def get(self, key):
                return None

        proxy = watch(Cache())
        assert isinstance(proxy, LoggingProxy)
        assert categories_of(Cache) == {Category.COMPONENT}

        proxy.get("k")
        assert sink.messages[0] == "Started get [key=k]"

    def test_watch_with_own_interceptor(self, registry, sink, clock):
        interceptor = CallInterceptor(registry=registry, sink=sink, clock=clock)

        class Mailer:
            def send(self, to):
                return "sent"

        proxy = watch(Mailer(), Category.SERVICE, interceptor=interceptor)
        assert registry.categories_of(Mailer) == {Category.SERVICE}
        assert not is_watched(Mailer)

        assert proxy.send("ops@example.com") == "sent"
        assert sink.messages[0] == "Started send [to=ops@example.com]"
