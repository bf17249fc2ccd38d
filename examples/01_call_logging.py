#!/usr/bin/env python3
"""Call Logging: Started/Finished/Failed records around application layers.

WHY CALL LOGGING
────────────────
When a request misbehaves, the first question is which layer it reached and
with what arguments.  Marking controllers, services, components and
configuration holders gives every public method call an entry record, an
exit record with the elapsed time, or a failure record with the error,
without touching the business code.

ARCHITECTURE
────────────
    ┌────────────────────────────────────────┐
    │  @controller / @service / @component    │
    │  class OrderService: ...                 │
    └──────────────────┬─────────────────────┘
                       │  method call
                       ▼
    ┌────────────────────────────────────────┐
    │  CallInterceptor                         │
    │    Started place [order_id=42]           │
    │    Finished place [...] returned [...]   │
    │    Failed place [...] thrown [...        │
    └──────────────────┬─────────────────────┘
                       ▼
              structlog (console or JSON)

Run: python examples/01_call_logging.py
"""
from calllog import LogContext, configure_logging, controller, service, watch


@service
class OrderService:
    def place(self, order_id, quantity=1):
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        return f"order-{order_id}"


@controller
class OrderController:
    def __init__(self, orders):
        self.orders = orders

    def post(self, order_id, quantity):
        return self.orders.place(order_id, quantity=quantity)


class PriceCache:
    def lookup(self, sku):
        return 9.99


def main():
    print("=" * 60)
    print("Call Logging Examples")
    print("=" * 60)

    # === 1. Configure logging ===
    print("\n[1] Configure Logging")
    configure_logging(level="INFO", json_format=False)

    # === 2. Nested layers ===
    print("\n[2] Controller -> Service")
    api = OrderController(OrderService())
    with LogContext(request_id="req-001"):
        api.post(42, 3)

    # === 3. Failures are logged and re-raised ===
    print("\n[3] Failure")
    try:
        api.post(43, 0)
    except ValueError as e:
        print(f"  caller still sees: {e!r}")

    # === 4. Objects built elsewhere ===
    print("\n[4] Watching an existing object")
    prices = watch(PriceCache())
    prices.lookup("A-1")

    # === 5. JSON output ===
    print("\n[5] JSON output")
    configure_logging(level="INFO", json_format=True, service="orders-api")
    api.post(44, 1)


if __name__ == "__main__":
    main()
