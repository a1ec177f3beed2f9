import os

import pytest
from hypothesis import HealthCheck, settings

from knot.knot_ast import ASTNode
from knot.knot_config import GrammarConfig
from knot.knot_grammar import parse_source

settings.register_profile(
    "ci", max_examples=300, deadline=None, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile("dev", max_examples=60, deadline=None)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def parse_ok(source: str, config: GrammarConfig | None = None) -> list[ASTNode]:
    result = parse_source(source, config)
    assert result.error is None, str(result.error)
    return result.nodes


def parse_one(source: str, config: GrammarConfig | None = None) -> ASTNode:
    nodes = parse_ok(source, config)
    assert len(nodes) == 1, nodes
    return nodes[0]


@pytest.fixture  # type: ignore[misc]
def prefix_config() -> GrammarConfig:
    return GrammarConfig(keyword_boundary=False)


@pytest.fixture  # type: ignore[misc]
def last_error_config() -> GrammarConfig:
    return GrammarConfig(error_policy="last")
