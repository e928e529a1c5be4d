from django.db import models

from .customer import Customer


class CustomerProfile(models.Model):
    customer = models.OneToOneField(
        Customer, on_delete=models.CASCADE, related_name="profile"
    )
    bio = models.TextField(blank=True)

    class Meta:
        app_label = "test_app"
        db_table = "customer_profiles"
