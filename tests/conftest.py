from __future__ import annotations

import os
from pathlib import Path

import pytest

DATA_FILE_NAME = "arepas_reina_pepiada.spanish.txt"
DATA_FILE_TEXT = "Masa: harina de maíz, agua y sal. Relleno: pollo, aguacate y mayonesa."


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    path = tmp_path / DATA_FILE_NAME
    path.write_text(DATA_FILE_TEXT, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _set_test_data_file(data_file: Path) -> None:
    os.environ["DATA_FILE_PATH"] = str(data_file)
    # Settings are cached via @lru_cache; clear so each test can use its own file.
    from topicqa.core.settings import get_settings

    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from topicqa.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
