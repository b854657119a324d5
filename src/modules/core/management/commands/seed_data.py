from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.orders.models import Order
from modules.orders.services import OrderLineService
from modules.products.models import Product

OPEN_ORDER_ID = 99998
SHIPPED_ORDER_ID = 99999

SEED_PRODUCTS = [
    # (id, name, stock_quantity, unavailable)
    (1, "Chai", 20, False),
    (2, "Chang", 5, False),
    (3, "Aniseed Syrup", 13, True),
    (4, "Chef Anton's Cajun Seasoning", 53, False),
]


class Command(BaseCommand):
    help = "Seed database with a small development catalogue and two orders."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        with transaction.atomic():
            products = self._seed_products()
            orders = self._seed_orders()
        lines_created = self._seed_lines()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"products={len(products)}, "
                f"orders={len(orders)}, "
                f"lines={lines_created}"
            )
        )

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        for product_id, name, stock, unavailable in SEED_PRODUCTS:
            product, _ = Product.objects.get_or_create(
                id=product_id,
                defaults={
                    "name": name,
                    "stock_quantity": stock,
                    "unavailable": unavailable,
                },
            )
            products.append(product)
        return products

    def _seed_orders(self) -> list[Order]:
        self.stdout.write("Creating orders...")
        open_order, _ = Order.objects.get_or_create(
            id=OPEN_ORDER_ID, defaults={"discount": Decimal("0.15")}
        )
        shipped_order, _ = Order.objects.get_or_create(
            id=SHIPPED_ORDER_ID,
            defaults={"shipped_on": date(1994, 8, 16)},
        )
        return [open_order, shipped_order]

    def _seed_lines(self) -> int:
        # Lines go through the service so ordered quantities stay consistent.
        if Order.objects.get(id=OPEN_ORDER_ID).lines.exists():
            return 0
        OrderLineService().add_line(OPEN_ORDER_ID, 1, 16)
        return 1
