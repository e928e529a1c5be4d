from django.db import models


class Truck(models.Model):
    payload = models.PositiveIntegerField(default=0)

    class Meta:
        app_label = "test_app"
        db_table = "trucks"
