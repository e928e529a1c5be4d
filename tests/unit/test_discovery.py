"""
Unit tests for filesystem model discovery and the inferred model structure.
"""

import logging

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.test import override_settings

from model_reflector.core.discovery import (
    WITH_ABSTRACT,
    WITHOUT_ABSTRACT,
    iter_module_names,
    supposed_parent_class,
)
from model_reflector.core.types import ModelStructure
from test_app.models import (
    Car,
    Comment,
    Customer,
    CustomerProfile,
    Order,
    Shipment,
    Tag,
    TimestampedModel,
    Truck,
    Vehicle,
)

pytestmark = pytest.mark.unit

CONCRETE_MODELS = [
    Comment,
    Customer,
    Order,
    CustomerProfile,
    Shipment,
    Tag,
    Vehicle,
    Car,
    Truck,
]


def vehicle_settings():
    return override_settings(
        MODEL_REFLECTOR={
            "model_settings": {"root_package": "test_app", "directory": "models/vehicle"}
        }
    )


class TestConfiguration:
    def test_values_from_settings(self, model_reflector):
        assert model_reflector.get_root_package() == "test_app"
        assert model_reflector.get_models_directory() == "models"
        assert model_reflector.get_model_root_namespace() == "test_app.models"

    def test_nested_directory(self, model_reflector):
        with vehicle_settings():
            assert model_reflector.get_model_root_namespace() == "test_app.models.vehicle"

    def test_defaults_apply_without_settings(self, model_reflector):
        with override_settings(MODEL_REFLECTOR={}):
            assert model_reflector.get_root_package() == "app"
            assert model_reflector.get_model_root_namespace() == "app.models"

    @pytest.mark.parametrize("directory", ["", None])
    def test_empty_directory_uses_root_package(self, model_reflector, directory):
        with override_settings(
            MODEL_REFLECTOR={
                "model_settings": {"root_package": "test_app", "directory": directory}
            }
        ):
            assert model_reflector.get_models_directory() is None
            assert model_reflector.get_model_root_namespace() == "test_app"
            assert model_reflector.get_all_models() == CONCRETE_MODELS


class TestGetAllModels:
    def test_concrete_models_in_path_order(self, model_reflector):
        assert model_reflector.get_all_models() == CONCRETE_MODELS

    def test_abstract_models_on_request(self, model_reflector):
        models = model_reflector.get_all_models(without_abstract=False)
        assert models == [TimestampedModel, *CONCRETE_MODELS]

    def test_results_are_cached_per_mode(self, model_reflector):
        concrete = model_reflector.get_all_models()
        everything = model_reflector.get_all_models(without_abstract=False)

        assert model_reflector.get_all_models() is concrete
        assert model_reflector.get_all_models(without_abstract=False) is everything
        assert set(model_reflector._filesystem_models) == {WITH_ABSTRACT, WITHOUT_ABSTRACT}

    def test_cache_ignores_later_setting_changes(self, model_reflector):
        first = model_reflector.get_all_models()
        with vehicle_settings():
            assert model_reflector.get_all_models() is first

    def test_broken_modules_are_skipped(self, model_reflector, caplog):
        with caplog.at_level(logging.WARNING, logger="model_reflector.core.discovery"):
            model_reflector.get_all_models()

        assert "test_app.models.legacy" in caplog.text

    def test_nested_directory(self, model_reflector):
        with vehicle_settings():
            assert model_reflector.get_all_models() == [Vehicle, Car, Truck]

    @pytest.mark.parametrize(
        "model_settings",
        [
            {"root_package": "no_such_package", "directory": "models"},
            {"root_package": "model_reflector.defaults", "directory": ""},
            {"root_package": "test_app", "directory": "missing"},
        ],
    )
    def test_bad_configuration(self, model_reflector, model_settings):
        with override_settings(MODEL_REFLECTOR={"model_settings": model_settings}):
            with pytest.raises(ImproperlyConfigured):
                model_reflector.get_all_models()

    def test_module_names(self, tmp_path):
        (tmp_path / "fleet").mkdir()
        for name in ["__init__.py", "tag.py", "fleet/__init__.py", "fleet/car.py", "notes.txt"]:
            (tmp_path / name).write_text("")

        assert list(iter_module_names(tmp_path, "shop.models")) == [
            "shop.models",
            "shop.models.fleet",
            "shop.models.fleet.car",
            "shop.models.tag",
        ]


class TestInstantiatableModels:
    def test_maps_models_to_empty_instances(self, model_reflector):
        instances = model_reflector.get_all_instantiatable_models()

        assert list(instances) == CONCRETE_MODELS
        for model, instance in instances.items():
            assert type(instance) is model
            assert instance.pk is None

    def test_filter_by_trait(self, model_reflector):
        from test_app.models import Archivable, Auditable, HasReference

        assert list(model_reflector.get_all_instantiatable_models(Auditable)) == [Customer]
        assert list(model_reflector.get_all_instantiatable_models(Archivable)) == [Customer]
        assert list(model_reflector.get_all_instantiatable_models(HasReference)) == [Order]
        assert model_reflector.get_all_instantiatable_models(Auditable, HasReference) == {}


class TestStructureInformation:
    def test_parents_follow_packages(self, model_reflector):
        structure = model_reflector.get_instantiatable_model_structure_information()

        assert list(structure) == CONCRETE_MODELS
        assert structure[Car] == ModelStructure(parent_class=Vehicle, child_classes=[])
        assert structure[Truck] == ModelStructure(parent_class=Vehicle, child_classes=[])
        assert structure[Vehicle] == ModelStructure(parent_class=None, child_classes=[Car, Truck])
        assert structure[Order] == ModelStructure(parent_class=None, child_classes=[])

    def test_computed_once(self, model_reflector):
        first = model_reflector.get_instantiatable_model_structure_information()
        assert model_reflector.get_instantiatable_model_structure_information() is first

    def test_nested_root_namespace(self, model_reflector):
        with vehicle_settings():
            structure = model_reflector.get_instantiatable_model_structure_information()

        assert list(structure) == [Vehicle, Car, Truck]
        assert all(entry.parent_class is None for entry in structure.values())
        assert all(entry.child_classes == [] for entry in structure.values())

    def test_supposed_parent_class(self):
        assert supposed_parent_class(Car, "test_app.models") is Vehicle
        assert supposed_parent_class(Vehicle, "test_app.models") is None
        assert supposed_parent_class(Order, "test_app.models") is None
        assert supposed_parent_class(Car, "test_app.models.vehicle") is None
