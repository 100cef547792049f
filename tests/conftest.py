from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator

MANIFEST = """\
namespace: prod-preview
feature_flags:
  - name: preview
    labels:
      - team=products
      - env=preview
  - name: mobile
    labels:
      - platform=mobile
subgraphs:
  - name: products
    schema_path: schemas/products.graphql
    routing_url: http://products-pr-{PR_NUMBER}.preview.internal/graphql
  - name: reviews
    schema_path: schemas/reviews.graphqls
    routing_url: http://reviews.preview.internal/graphql
"""

_ACTION_ENV_VARS = (
    "INPUT_CONFIG_PATH",
    "INPUT_CREATE",
    "INPUT_UPDATE",
    "INPUT_DESTROY",
    "INPUT_COSMO_API_KEY",
    "INPUT_GITHUB_TOKEN",
    "COSMO_API_KEY",
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_EVENT_PATH",
    "GITHUB_WORKSPACE",
    "GITHUB_OUTPUT",
    "GITHUB_STEP_SUMMARY",
    "GITHUB_API_URL",
    "WGC_BINARY",
)


@pytest.fixture(autouse=True)
def clean_action_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ACTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    schemas = root / "schemas"
    schemas.mkdir(parents=True)
    (schemas / "products.graphql").write_text("type Query { products: [String!]! }\n")
    (schemas / "reviews.graphqls").write_text("type Query { reviews: [String!]! }\n")
    (root / "cosmo.yaml").write_text(MANIFEST)
    return root.resolve()


@pytest.fixture
def manifest_path(workspace: Path) -> Path:
    return workspace / "cosmo.yaml"
