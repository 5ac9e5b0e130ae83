import json
from pathlib import Path

import pytest

from ts_model_graph.analyzer import ModelGraphBuilder
from ts_model_graph.config import ModelGraphConfig
from ts_model_graph.introspection import DeclarationParser

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def library_dump():
    with open(TEST_DATA / "library.json") as f:
        return json.load(f)


@pytest.fixture
def build_graph():
    """Build a graph from a dump dict; keyword arguments are config fields."""

    def _build(data, **config_values):
        config = ModelGraphConfig.from_dict(config_values)
        declarations = DeclarationParser().parse(data)
        return ModelGraphBuilder(config).build(declarations)

    return _build


@pytest.fixture
def library_graph(library_dump, build_graph):
    return build_graph(library_dump)
