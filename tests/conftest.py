import os
from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest

# Keep Kivy away from pytest's argv and the root logger
os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_NO_CONSOLELOG", "1")
os.environ.setdefault("KIVY_LOG_MODE", "PYTHON")

from todolist.data.models import Task
from todolist.data.session import TodoSession
from todolist.data.store import TaskStore

BASE_TIME = datetime(2024, 5, 1, 9, 0, 0)


def make_task(title, minutes=0, **kwargs):
    """Task with a fixed creation time, ``minutes`` after BASE_TIME."""
    return Task(title=title, created_at=BASE_TIME + timedelta(minutes=minutes), **kwargs)


@pytest.fixture
def store():
    return TaskStore()


@pytest.fixture
def session():
    return TodoSession()


@pytest.fixture
def sample_tasks():
    return [
        make_task("Buy milk", 0, description="Two litres, semi-skimmed", category="Shopping"),
        make_task("Walk dog", 10, category="Personal"),
        make_task("Write report", 20, description="Quarterly MILK sales", category="Work"),
    ]


@pytest.fixture
def filled_store(store, sample_tasks):
    for task in sample_tasks:
        store.add(task)
    return store


@pytest.fixture
def mock_app(store, session):
    app = Mock()
    app.store = store
    app.session = session
    app.font_family = 'Roboto'
    app.font_size = 18
    return app
