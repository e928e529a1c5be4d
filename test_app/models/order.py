from django.contrib.contenttypes.fields import GenericRelation
from django.db import models

from .base import TimestampedModel
from .comment import Comment
from .customer import Customer
from .mixins import HasReference
from .tag import Tag


class Order(HasReference, TimestampedModel):
    customer = models.ForeignKey(
        Customer, on_delete=models.CASCADE, related_name="orders"
    )
    billing_customer = models.ForeignKey(
        Customer,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="billed_orders",
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name="orders")
    comments = GenericRelation(Comment)
    number = models.CharField(max_length=20)

    class Meta:
        app_label = "test_app"
        db_table = "orders"

    def total(self) -> int:
        return 0
