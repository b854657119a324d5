from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.orders"
    label = "orders"

    def ready(self) -> None:
        from modules.orders.events import OrderLineAdded, OrderShipped
        from modules.orders.handlers import (
            order_line_added_handler,
            order_shipped_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(OrderLineAdded, order_line_added_handler)
        event_bus.subscribe(OrderShipped, order_shipped_handler)
