"""
Unit tests for relation enumeration and lookup.
"""

import pytest

from model_reflector.exceptions import InvalidModelError, RelationNotFoundError
from test_app.models import Comment, Customer, Order, Shipment, Tag

pytestmark = pytest.mark.unit


class TestGetModelRelations:
    def test_order_customer_relation(self, model_reflector):
        relations = model_reflector.get_model_relations(Order)

        customer = relations["customer"]
        assert customer.relation == "customer"
        assert customer.return_type == "BelongsTo"
        assert customer.related_class is Customer
        assert isinstance(customer.related_model, Customer)
        assert customer.related_model.pk is None
        assert customer.related_table == "customers"
        assert customer.foreign_key_name == "customer_id"
        assert customer.qualified_foreign_key_name == "orders.customer_id"
        assert customer.is_relation_parent is True

    def test_reverse_relations(self, model_reflector):
        relations = model_reflector.get_model_relations(Customer)

        orders = relations["orders"]
        assert orders.return_type == "HasMany"
        assert orders.related_class is Order
        assert orders.foreign_key_name == "customer_id"
        assert orders.qualified_foreign_key_name == "orders.customer_id"
        assert orders.is_relation_parent is False

        profile = relations["profile"]
        assert profile.return_type == "HasOne"
        assert profile.qualified_foreign_key_name == "customer_profiles.customer_id"
        assert profile.is_relation_parent is False

    def test_relations_without_foreign_key_are_partial(self, model_reflector):
        tags = model_reflector.get_model_relations(Order)["tags"]
        assert tags.return_type == "BelongsToMany"
        assert tags.related_class is None
        assert tags.foreign_key_name is None
        assert tags.is_relation_parent is None
        assert not tags.has_foreign_key

        commentable = model_reflector.get_model_relations(Comment)["commentable"]
        assert commentable.return_type == "MorphTo"
        assert commentable.related_class is None

    def test_generic_relation(self, model_reflector):
        comments = model_reflector.get_model_relations(Order)["comments"]
        assert comments.return_type == "MorphMany"
        assert comments.related_class is Comment
        assert comments.foreign_key_name == "object_id"
        assert comments.qualified_foreign_key_name == "comments.object_id"

    def test_plain_fields_and_methods_are_not_relations(self, model_reflector):
        relations = model_reflector.get_model_relations(Order)
        assert "number" not in relations
        assert "customer_id" not in relations
        assert "total" not in relations
        assert "reference" not in relations

    def test_annotated_methods_are_relations(self, model_reflector):
        relations = model_reflector.get_model_relations(Shipment)

        assert list(relations) == ["parcel_order", "order"]
        parcel_order = relations["parcel_order"]
        assert parcel_order.return_type == "BelongsTo"
        assert parcel_order.related_class is Order
        assert parcel_order.foreign_key_name == "order_id"

    def test_union_return_types_are_never_relations(self, model_reflector):
        relations = model_reflector.get_model_relations(Shipment)
        assert "maybe_order" not in relations
        assert "optional_order" not in relations

    def test_accepts_instances_paths_and_labels(self, model_reflector):
        by_class = model_reflector.get_model_relations(Order)
        assert model_reflector.get_model_relations(Order()) is by_class
        assert model_reflector.get_model_relations("test_app.models.order.Order") is by_class
        assert model_reflector.get_model_relations("test_app.Order") is by_class

    def test_second_call_returns_cached_mapping(self, model_reflector):
        first = model_reflector.get_model_relations(Order)
        second = model_reflector.get_model_relations(Order)
        assert first is second

    def test_force_refresh_recomputes(self, model_reflector):
        model_reflector._model_relations_cache[Tag] = {}
        assert model_reflector.get_model_relations(Tag) == {}

        refreshed = model_reflector.get_model_relations(Tag, force_refresh=True)
        assert "orders" in refreshed
        assert model_reflector.get_model_relations(Tag) is refreshed

    @pytest.mark.parametrize("value", [None, 42, "no.such.Model", object(), str])
    def test_rejects_non_models(self, model_reflector, value):
        with pytest.raises(InvalidModelError):
            model_reflector.get_model_relations(value)


class TestGetRelationByTarget:
    def test_returns_matching_relation(self, model_reflector):
        assert model_reflector.get_relation_by_target(Customer, Order) == "orders"
        assert model_reflector.get_relation_by_target(Order, Comment) == "comments"

    def test_first_declared_relation_wins(self, model_reflector):
        # customer and billing_customer both point at Customer
        assert model_reflector.get_relation_by_target(Order, Customer) == "customer"
        # ModelBase adds field descriptors to the class dict after the plain methods
        assert model_reflector.get_relation_by_target(Shipment, Order) == "parcel_order"

    def test_accepts_instances_and_paths(self, model_reflector):
        assert model_reflector.get_relation_by_target(Order(), Customer()) == "customer"
        assert (
            model_reflector.get_relation_by_target(
                Order, "test_app.models.customer.Customer"
            )
            == "customer"
        )

    def test_missing_relation_raises(self, model_reflector):
        with pytest.raises(RelationNotFoundError) as exc_info:
            model_reflector.get_relation_by_target(Tag, Customer)

        error = exc_info.value
        assert error.target_name == "test_app.models.customer.Customer"
        assert error.model_name == "test_app.models.tag.Tag"
        assert "Customer" in str(error) and "Tag" in str(error)
        assert isinstance(error, LookupError)

    def test_relations_without_related_class_never_match(self, model_reflector):
        with pytest.raises(RelationNotFoundError):
            model_reflector.get_relation_by_target(Order, Tag)
