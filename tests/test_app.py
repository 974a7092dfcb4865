"""Tests for the Streamlit frontend, driven through streamlit's AppTest."""

from pathlib import Path

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from lifehub.config import StorageSettings, get_settings
from lifehub.services.storage import JsonFileStoreGateway


APP_PATH = Path(__file__).resolve().parents[1] / "app" / "main.py"


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the app at an empty data directory with a fresh session."""
    monkeypatch.setenv("LIFEHUB_DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    st.cache_resource.clear()
    yield tmp_path
    st.cache_resource.clear()


@pytest.fixture
def gateway(data_dir):
    return JsonFileStoreGateway(StorageSettings(_env_file=None, data_dir=data_dir))


def _start():
    app = AppTest.from_file(str(APP_PATH), default_timeout=30)
    app.run()
    assert not app.exception
    return app


class TestPlanPage:
    """Tests for completing tasks from the Plan page."""

    def test_recurring_task_completes_once_per_click(self, mutator, store, gateway):
        """Test one click moves a daily task forward exactly one day."""
        gateway.save(mutator.add_task(store, "Water plants", due="2026-11-01", recur="daily"))

        app = _start()
        app.radio(key="page").set_value("Plan").run()
        app.button(key="done-id-1").click().run()

        assert not app.exception
        task = gateway.load()["tasks"][0]
        assert task["due"] == "2026-11-02"
        assert task["done"] is False

    def test_plain_task_leaves_the_open_list(self, mutator, store, gateway):
        gateway.save(mutator.add_task(store, "Pay rent"))

        app = _start()
        app.radio(key="page").set_value("Plan").run()
        app.button(key="done-id-1").click().run()

        assert not app.exception
        assert gateway.load()["tasks"][0]["done"] is True
        assert not [b for b in app.button if b.key == "done-id-1"]


class TestSidebar:
    """Tests for the sidebar preferences."""

    def test_dark_mode_restyles_page(self, data_dir):
        app = _start()
        assert any("<style>" in m.value for m in app.markdown)

        app.toggle(key="dark_mode").set_value(False).run()
        assert not any("<style>" in m.value for m in app.markdown)

    def test_dark_mode_is_not_saved(self, data_dir, gateway):
        app = _start()
        app.toggle(key="dark_mode").set_value(False).run()
        assert gateway.load() is None

    def test_night_shift_mode_is_saved(self, data_dir, gateway):
        app = _start()
        night_shift = app.sidebar.toggle[1]
        assert night_shift.value is True

        night_shift.set_value(False).run()

        assert not app.exception
        assert gateway.load()["nightShiftMode"] is False
        assert app.sidebar.toggle[1].value is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
