# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Callable
import pytest

from bulk_import.config.loader import CONFIG_ENV_VAR


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        # set then delete so that undo also removes a value loaded from .env
        monkeypatch.setenv(CONFIG_ENV_VAR, "")
        monkeypatch.delenv(CONFIG_ENV_VAR)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """encoding: utf-8
error_log:
  enabled: true
  directory: ./logs
entities:
  cost_center:
    label: cost center
    plural: cost_centers
    fields:
      - name: code
        required: true
        label: Code
        pattern: "^[A-Z]{2}-[0-9]{3}$"
        format_message: "Code must look like AB-123"
        unique: true
      - name: name
        required: true
      - name: active
        kind: boolean
    template_rows:
      - {code: FN-100, name: Finance, active: true}
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path) -> Callable[[str, str], Path]:
    """Write CSV text under data/ and return its path."""
    def _write(name: str, text: str) -> Path:
        path = temp_workdir / "data" / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
