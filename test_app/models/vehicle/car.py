from django.db import models


class Car(models.Model):
    seats = models.PositiveSmallIntegerField(default=4)

    class Meta:
        app_label = "test_app"
        db_table = "cars"
