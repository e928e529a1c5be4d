from typing import Optional

from django.db import models

from model_reflector.relations import BelongsTo

from .order import Order


class Shipment(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="shipments")
    carrier = models.CharField(max_length=50)

    class Meta:
        app_label = "test_app"
        db_table = "shipments"

    def parcel_order(self) -> BelongsTo:
        return BelongsTo(self, "order")

    def maybe_order(self) -> BelongsTo | None:
        return BelongsTo(self, "order")

    def optional_order(self) -> Optional[BelongsTo]:
        return BelongsTo(self, "order")

    def label(self) -> str:
        return f"{self.carrier}-{self.pk}"

    def notes(self):
        return ""
