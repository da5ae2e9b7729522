"""Shared pytest fixtures for spatialschema tests."""

import textwrap
from pathlib import Path

import pytest

SAMPLE_SCHEMA = textwrap.dedent("""\
    package improbable.demo;
    import "improbable/vector3.schema";

    enum Color {
      RED = 0;
      GREEN = 1;
    }

    type Coordinates {
      option java_package = demo;
      double x = 1;
      map<EntityId, float> weights = 2;
      list<Color> colors = 3;
      enum Inner { A = 1; }
      type Nested { int32 n = 1; }
    }

    [Range(min = 0, max = 100)]
    component Position {
      id = 54;
      data Coordinates;
      event Moved moved;
      command MoveResponse move(MoveRequest);
      int32 extra = 2;
    }
""")


@pytest.fixture
def sample_schema() -> str:
    """Return a well-formed schema exercising every construct."""
    return SAMPLE_SCHEMA


@pytest.fixture
def schema_project(tmp_path: Path) -> Path:
    """Create a temporary project with a schema.toml and two schema files."""
    schema_dir = tmp_path / "schema"
    (schema_dir / "nested").mkdir(parents=True)
    (schema_dir / "position.schema").write_text(SAMPLE_SCHEMA)
    (schema_dir / "nested" / "health.schema").write_text(
        "package demo;\ncomponent Health {\n  id = 1002;\n  int32 current = 1;\n}\n"
    )
    (schema_dir / "notes.txt").write_text("not a schema")

    (tmp_path / "schema.toml").write_text(
        textwrap.dedent("""\
            [project]
            name = "demo"

            [schema]
            paths = ["schema"]
        """)
    )
    return tmp_path
