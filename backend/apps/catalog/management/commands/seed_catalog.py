from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.carts.models import CartItem
from apps.catalog.models import Product

# name, category, cost, rating
PRODUCTS = [
    ("UNIFACTOR Mens Running Shoes", "Fashion", "50", 5),
    ("YONEX Smash Badminton Racquet", "Sports", "100", 5),
    ("Tan Leatherette Weekender Duffle", "Fashion", "150", 4),
    ("The Minimalist Slim Leather Watch", "Electronics", "60", 5),
    ("Atomberg 1200mm BLDC Ceiling Fan", "Home & Kitchen", "80", 4),
    ("Bonsai Spirit Tree Table Lamp", "Home & Kitchen", "80", 3),
    ("Stylecon 9 Seater RHS Sofa Set", "Home & Kitchen", "650", 3),
    ("Ultra Bass Over-Ear Headphones", "Electronics", "40", 4),
]


class Command(BaseCommand):
    help = "Load the sample product catalog."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete existing products (and the cart lines pointing at them) first",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing products...")
            CartItem.objects.all().delete()
            Product.objects.all().delete()

        created = 0
        for name, category, cost, rating in PRODUCTS:
            _, was_created = Product.objects.update_or_create(
                name=name,
                defaults={
                    "category": category,
                    "cost": Decimal(cost),
                    "rating": rating,
                },
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Catalog seeded: {created} created, {len(PRODUCTS) - created} updated."
            )
        )
