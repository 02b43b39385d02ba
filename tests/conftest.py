"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

from openapi_autodoc.config import Config, GeneratorConfig
from openapi_autodoc.models.schema import FieldDescriptor, FieldKind, FieldLocation, SchemaDescriptor
from openapi_autodoc.models.security import AuthHandler, BearerAuthScheme


@pytest.fixture
def fixtures_path() -> Path:
    """Get the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_api(fixtures_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Make the sample_api handler package importable."""
    monkeypatch.syspath_prepend(str(fixtures_path))
    return fixtures_path / "sample_api"


@pytest.fixture
def examples_path() -> Path:
    """Get the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def strict_config() -> Config:
    """Configuration failing on malformed annotations and missing sources."""
    return Config(generator=GeneratorConfig(strict_annotations=True, require_source=True))


@pytest.fixture
def user_schema() -> SchemaDescriptor:
    """A body type with string, array and numeric constraints."""
    return SchemaDescriptor(
        name="User",
        description="A user account",
        fields=[
            FieldDescriptor(name="name", kind=FieldKind.STRING, validation="required,min=2,max=10"),
            FieldDescriptor(
                name="roles",
                kind=FieldKind.ARRAY,
                validation="min=1,max=3",
                items=FieldDescriptor(name="items", kind=FieldKind.STRING),
            ),
            FieldDescriptor(name="age", kind=FieldKind.INTEGER, validation="min=0,max=150"),
        ],
    )


@pytest.fixture
def user_params() -> SchemaDescriptor:
    """Path and query parameters."""
    return SchemaDescriptor(
        name="UserParams",
        fields=[
            FieldDescriptor(name="userId", kind=FieldKind.INTEGER, location=FieldLocation.PATH),
            FieldDescriptor(
                name="limit",
                kind=FieldKind.INTEGER,
                location=FieldLocation.QUERY,
                validation="min=1,max=100",
                description="Page size",
                example=20,
            ),
        ],
    )


@pytest.fixture
def bearer_auth() -> AuthHandler:
    """A bearer token auth handler."""
    return AuthHandler(scheme=BearerAuthScheme(name="BearerAuth", format="JWT"))


@pytest.fixture
def write_package(tmp_path: Path):
    """Write a throwaway package of source units and return its directory."""

    def _write(name: str, units: dict[str, str]) -> Path:
        package_dir = tmp_path / name
        package_dir.mkdir(parents=True, exist_ok=True)
        (package_dir / "__init__.py").write_text("", encoding="utf-8")
        for file_name, source in units.items():
            (package_dir / file_name).write_text(source, encoding="utf-8")
        return package_dir

    return _write
