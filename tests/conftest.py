"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import os
import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local sdt package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of sdt modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name == "sdt" or module_name.startswith("sdt."):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user-level config, CI detection and SDT__ env vars out of tests."""
    import sdt.config.loader as loader

    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "no-global-config.yaml")
    monkeypatch.delenv("CI", raising=False)
    for key in list(os.environ):
        if key.upper().startswith("SDT__") or key == "SDT_TREESIT_COMMENTS":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _dumpers_importable(monkeypatch: pytest.MonkeyPatch) -> None:
    """Bundled dumpers run as `python -m sdt.dumpers.*` and must find this tree."""
    existing = os.environ.get("PYTHONPATH")
    paths = [str(_src_dir), existing] if existing else [str(_src_dir)]
    monkeypatch.setenv("PYTHONPATH", os.pathsep.join(paths))
