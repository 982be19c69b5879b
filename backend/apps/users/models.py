from decimal import Decimal

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.core.validators import MinValueValidator
from django.db import models


def default_wallet_money() -> Decimal:
    return Decimal(str(settings.DEFAULT_WALLET_MONEY))


class User(AbstractUser):
    # username, password, is_staff, is_superuser, ... are inherited
    email = models.EmailField(unique=True)
    wallet_money = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=default_wallet_money,
        validators=[MinValueValidator(0)],
    )
    # NULL means the user has not supplied a shipping address yet
    address = models.CharField(max_length=255, blank=True, null=True, default=None)

    def has_set_non_default_address(self) -> bool:
        """True once a real shipping address replaced the unset/sentinel value."""
        address = (self.address or "").strip()
        if not address:
            return False
        return address != settings.DEFAULT_ADDRESS

    def __str__(self):
        return self.username
