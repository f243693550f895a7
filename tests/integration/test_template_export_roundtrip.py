from __future__ import annotations

import json
from pathlib import Path

import pytest

from bulk_import.cli import main as cli_main
from bulk_import.logging.init import reset_logging
from bulk_import.schemas.entities import BUILTIN_SCHEMAS

"""Template -> validate -> export -> re-validate round trip through the CLI."""


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.mark.parametrize("entity", sorted(BUILTIN_SCHEMAS))
def test_template_round_trip(entity: str, temp_workdir: Path, capsys):
    template = temp_workdir / "data" / f"{entity}_template.csv"
    assert cli_main(["template", "--entity", entity, "-o", str(template)]) == 0

    persisted = temp_workdir / "persisted.json"
    assert cli_main(["validate", "--entity", entity, str(template), "--valid-out", str(persisted)]) == 0
    records = json.loads(persisted.read_text(encoding="utf-8"))
    assert len(records) == len(BUILTIN_SCHEMAS[entity].template_rows)

    exported = temp_workdir / "export.csv"
    assert cli_main(["export", "--entity", entity, "--input", str(persisted), "-o", str(exported)]) == 0
    assert exported.read_text(encoding="utf-8") == template.read_text(encoding="utf-8")

    capsys.readouterr()
    code = cli_main(["validate", "--entity", entity, str(exported), "--existing", str(persisted)])
    out = capsys.readouterr().out
    assert code == 2
    assert f"valid=0 invalid={len(records)}" in out
