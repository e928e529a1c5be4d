from django.db import models


class Vehicle(models.Model):
    name = models.CharField(max_length=100)

    class Meta:
        app_label = "test_app"
        db_table = "vehicles"
