"""Interactive terminal view of a loaded task aggregate."""

import logging
from enum import Enum

from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Footer, Label, Static

from .core.aggregate import TaskAggregate
from .render import (
    TITLE,
    render_later_and_other,
    render_overdue,
    render_rest_of_week,
    render_today,
)

logger = logging.getLogger(__name__)


class View(Enum):
    """Terminal view, declared in left-to-right order."""

    OVERDUE = "overdue"
    TODAY = "today"
    REST_OF_WEEK = "rest_of_week"
    LATER = "later"

    @property
    def title(self) -> str:
        return {
            View.OVERDUE: "Overdue",
            View.TODAY: "Today",
            View.REST_OF_WEEK: "Rest of the week",
            View.LATER: "Later and other",
        }[self]

    def prev(self) -> "View":
        views = list(View)
        return views[max(views.index(self) - 1, 0)]

    def next(self) -> "View":
        views = list(View)
        return views[min(views.index(self) + 1, len(views) - 1)]


def view_lines(aggregate: TaskAggregate, view: View) -> list[str]:
    match view:
        case View.OVERDUE:
            return render_overdue(aggregate)
        case View.TODAY:
            return render_today(aggregate)
        case View.REST_OF_WEEK:
            return render_rest_of_week(aggregate)
        case View.LATER:
            return render_later_and_other(aggregate)
    raise ValueError(f"Unknown view: {view!r}")


class DatebookApp(App):
    """Read-only task browser: one screen per bucket group."""

    CSS = """
    #header {
        dock: top;
        background: black;
        color: #00dd00;
        text-style: bold;
        padding: 0 1;
        width: 100%;
        height: 1;
    }

    #tasks {
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("h,left", "prev_view", "Previous"),
        ("l,right", "next_view", "Next"),
        ("j,down", "scroll_tasks(1)", "Down"),
        ("k,up", "scroll_tasks(-1)", "Up"),
        ("1", "show_view('overdue')", "Overdue"),
        ("2", "show_view('today')", "Today"),
        ("3", "show_view('rest_of_week')", "Week"),
        ("4", "show_view('later')", "Later"),
    ]

    def __init__(self, aggregate: TaskAggregate, view: View = View.TODAY):
        super().__init__()
        self.aggregate = aggregate
        self.current_view = view

    def compose(self) -> ComposeResult:
        yield Label(self._header_text(), id="header", markup=False)
        with VerticalScroll(id="scroller"):
            yield Static(self._content(), id="tasks", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        logger.info("Running TUI ...")

    def on_unmount(self) -> None:
        logger.info("Exiting TUI ...")

    def _header_text(self) -> str:
        return f"[ {TITLE} ]  [ {self.current_view.title} ]  (press 'q' to quit)"

    def _content(self) -> str:
        return "\n".join(view_lines(self.aggregate, self.current_view))

    def show(self, view: View) -> None:
        self.current_view = view
        self.query_one("#header", Label).update(self._header_text())
        self.query_one("#tasks", Static).update(self._content())
        self.query_one("#scroller", VerticalScroll).scroll_home(animate=False)

    def action_prev_view(self) -> None:
        self.show(self.current_view.prev())

    def action_next_view(self) -> None:
        self.show(self.current_view.next())

    def action_show_view(self, name: str) -> None:
        self.show(View(name))

    def action_scroll_tasks(self, lines: int) -> None:
        scroller = self.query_one("#scroller", VerticalScroll)
        scroller.scroll_relative(y=lines, animate=False)


def run(aggregate: TaskAggregate, view: View = View.TODAY) -> None:
    DatebookApp(aggregate, view).run()
