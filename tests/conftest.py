import pytest

from model_reflector.core.reflector import ModelReflector
from model_reflector.relations import Relation


@pytest.fixture
def model_reflector():
    return ModelReflector()


@pytest.fixture
def restore_morph_map():
    saved = dict(Relation.morph_map())
    yield
    Relation.morph_map(saved, merge=False)
