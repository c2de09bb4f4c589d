from unittest.mock import patch

import pytest

import main as entrypoint
from killbot.config import AppSettings, DatabaseSettings

pytestmark = pytest.mark.asyncio


async def test_main_reports_corporations(db_path, execute_sql, caplog):
    await execute_sql(
        "INSERT INTO corporations (evecorporationid, lastkillid, lastlossid, name) VALUES (98765, 42, 7, 'Test Corp')"
    )
    await execute_sql("INSERT INTO ignoredregions (corporationID, regionid) VALUES (1, 10000002)")
    settings = AppSettings(log_level="INFO", db=DatabaseSettings(path=str(db_path)))

    with patch.object(entrypoint, "get_settings", return_value=settings):
        with caplog.at_level("INFO"):
            exit_code = await entrypoint.main()

    assert exit_code == 0
    assert "Tracking 1 corporations" in caplog.text
    assert "Test Corp" in caplog.text


async def test_main_fails_on_missing_tables(tmp_path):
    settings = AppSettings(log_level="INFO", db=DatabaseSettings(path=str(tmp_path / "empty.db")))

    with patch.object(entrypoint, "get_settings", return_value=settings):
        exit_code = await entrypoint.main()

    assert exit_code == 1


async def test_main_fails_on_unknown_backend():
    settings = AppSettings(log_level="INFO", db=DatabaseSettings(type="oracle", path=":memory:"))

    with patch.object(entrypoint, "get_settings", return_value=settings):
        exit_code = await entrypoint.main()

    assert exit_code == 1


async def test_main_fails_on_malformed_row(db_path, execute_sql):
    await execute_sql(
        "INSERT INTO corporations (evecorporationid, lastkillid, lastlossid) VALUES (98765, 'not a number', 0)"
    )
    settings = AppSettings(log_level="INFO", db=DatabaseSettings(path=str(db_path)))

    with patch.object(entrypoint, "get_settings", return_value=settings):
        exit_code = await entrypoint.main()

    assert exit_code == 1
