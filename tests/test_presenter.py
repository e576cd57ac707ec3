"""Tests for TodoPresenter."""

from datetime import date

from calendo.calendar_grid import GRID_SIZE
from calendo.presenter import TodoPresenter
from calendo.store import TodoStore

FIXED_TODAY = date(2025, 6, 15)

KEY = "2025-06-15"


class RecordingRenderer:
    def __init__(self):
        self.views = []

    def render(self, view):
        self.views.append(view)


def _presenter(store: TodoStore, today=FIXED_TODAY):
    renderer = RecordingRenderer()
    presenter = TodoPresenter(store, renderer, today=lambda: today)
    return presenter, renderer


class TestTodoPresenterLifecycle:
    def test_start_renders_once(self, store: TodoStore):
        presenter, renderer = _presenter(store)

        presenter.start()

        assert len(renderer.views) == 1

    def test_renders_on_every_event(self, store: TodoStore):
        presenter, renderer = _presenter(store)
        presenter.start()

        item = store.add_todo(KEY, "Buy milk")
        store.toggle_todo(KEY, item.id)
        store.set_selected_date(date(2025, 6, 20))
        store.set_selected_date(date(2025, 8, 1))
        store.delete_todo(KEY, item.id)

        assert len(renderer.views) == 6

    def test_stop_unsubscribes(self, store: TodoStore):
        presenter, renderer = _presenter(store)
        presenter.start()
        presenter.stop()

        store.add_todo(KEY, "Buy milk")

        assert len(renderer.views) == 1

    def test_start_twice_subscribes_once(self, store: TodoStore):
        presenter, renderer = _presenter(store)
        presenter.start()
        presenter.start()

        store.add_todo(KEY, "Buy milk")

        # two init renders, then a single render for the add
        assert len(renderer.views) == 3


class TestTodoPresenterView:
    def test_grid_flags(self, store: TodoStore):
        store.add_todo("2025-06-03", "Dentist")
        store.add_todo("2025-07-01", "Spills into the grid")
        store.set_selected_date(date(2025, 6, 10))
        presenter, _ = _presenter(store)

        view = presenter.build_view()

        assert len(view.cells) == GRID_SIZE
        assert view.title == "June 2025"
        today = [c for c in view.cells if c.is_today]
        selected = [c for c in view.cells if c.is_selected]
        with_todos = [c.key for c in view.cells if c.has_todos]
        assert [c.key for c in today] == ["2025-06-15"]
        assert [c.key for c in selected] == ["2025-06-10"]
        assert with_todos == ["2025-06-03", "2025-07-01"]

    def test_today_outside_displayed_month(self, store: TodoStore):
        store.set_current_date(date(2025, 9, 1))
        presenter, _ = _presenter(store)

        view = presenter.build_view()

        assert not any(c.is_today for c in view.cells)
        assert view.title == "September 2025"

    def test_selected_day_list(self, store: TodoStore):
        a = store.add_todo(KEY, "a")
        b = store.add_todo(KEY, "b")
        presenter, _ = _presenter(store)

        view = presenter.build_view()

        assert view.selected_key == KEY
        assert view.selected_label == "Sunday, June 15, 2025"
        assert view.todos == (a, b)
        assert view.can_add is True

    def test_can_add_false_when_full(self, store: TodoStore):
        for i in range(5):
            store.add_todo(KEY, f"t{i}")
        presenter, _ = _presenter(store)

        assert presenter.build_view().can_add is False

    def test_view_follows_month_change(self, store: TodoStore):
        presenter, renderer = _presenter(store)
        presenter.start()

        store.set_selected_date(date(2025, 12, 25))

        view = renderer.views[-1]
        assert (view.year, view.month) == (2025, 12)
        assert view.selected_key == "2025-12-25"
