import pytest

from todolist.data.models import Task
from todolist.data.session import TodoSession
from todolist.data.store import TaskStore
from conftest import make_task


class TestTodoFlowIntegration:
    @pytest.fixture
    def test_system(self):
        """Store and session wired together the way the app does it"""
        store = TaskStore()
        session = TodoSession()
        renders = []
        store.subscribe(lambda _snapshot: renders.append(session.visible_tasks(store)))
        return {
            'store': store,
            'session': session,
            'renders': renders,
        }

    @pytest.mark.integration
    def test_add_toggle_delete_scenario(self, test_system):
        store = test_system['store']
        a = make_task("A", 0)
        b = make_task("B", 1)

        store.add(a)
        store.add(b)
        assert [t.title for t in store] == ["B", "A"]

        store.toggle(a)
        assert [(t.title, t.is_completed) for t in store] == [("B", False), ("A", True)]

        store.delete(b)
        assert [(t.title, t.is_completed) for t in store] == [("A", True)]

    @pytest.mark.integration
    def test_every_change_renders_current_view(self, test_system):
        store, session, renders = test_system['store'], test_system['session'], test_system['renders']
        session.search_query = "milk"

        store.add(make_task("Buy milk", 0))
        store.add(make_task("Walk dog", 5))

        assert [[t.title for t in view] for view in renders] == [["Buy milk"], ["Buy milk"]]

    @pytest.mark.integration
    def test_dialog_create_then_edit_flow(self, test_system):
        store, session = test_system['store'], test_system['session']

        session.open_new()
        if not session.is_editing:
            store.add(Task.create("Groceries", category="Shopping", color="#FFF9C4"))
        session.dismiss()

        created = store.tasks[0]
        session.open_edit(created)
        store.update(session.editing_task.edited(title="Groceries and bread"))
        session.dismiss()

        assert len(store) == 1
        assert store.get(created.id).title == "Groceries and bread"
        assert store.get(created.id).created_at == created.created_at
        assert session.show_dialog is False

    @pytest.mark.integration
    def test_stale_references_do_not_crash(self, test_system):
        store = test_system['store']
        task = Task.create("Short lived")
        store.add(task)
        store.delete(task)

        assert store.toggle(task) is None
        assert store.update(task.edited(title="zombie")) is None
        assert store.delete(task) == ()
