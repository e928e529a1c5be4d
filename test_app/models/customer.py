from django.db import models

from .base import TimestampedModel
from .mixins import Auditable


class Customer(Auditable, TimestampedModel):
    name = models.CharField(max_length=100)

    class Meta:
        app_label = "test_app"
        db_table = "customers"

    def __str__(self):
        return self.name
