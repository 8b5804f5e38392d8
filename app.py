import html
import logging

import streamlit as st

from todo_app.api_client import TaskApiClient, TaskApiError
from todo_app.config import THEMES, TodoAppConfig
from todo_app.controller import TaskListController
from todo_app.effects import StreamlitCelebration, ToastNotificationSink
from todo_app.logging_setup import setup_logging
from todo_app.models import Priority, Task
from todo_app.pipeline import ALL, use_locale_collation
from todo_app.query_cache import QueryCache
from todo_app.sync import TaskSyncClient
from todo_app.theme import priority_flag, render_logo, set_theme

logger = logging.getLogger(__name__)

PRIORITIES = list(Priority)
PRIORITY_FILTERS = [ALL] + [str(int(p)) for p in PRIORITIES]
STATUS_LABELS = {"all": "All Tasks", "completed": "Completed", "active": "Active"}
SORT_LABELS = {"priority": "Priority", "title": "Title", "completed": "Status"}


@st.cache_resource(show_spinner=False)
def _app_config() -> TodoAppConfig:
    cfg = TodoAppConfig.from_env()
    setup_logging(level=cfg.log_level, log_dir=cfg.log_dir)
    use_locale_collation(cfg.collation_locale)
    logger.info("Task client configured api=%s", cfg.api_url)
    return cfg


def _controller() -> TaskListController:
    # One controller (and one cache) per browser session.
    if "todo_controller" not in st.session_state:
        cfg = _app_config()
        api = TaskApiClient(base_url=cfg.api_url, timeout_seconds=cfg.api_timeout_seconds)
        st.session_state.todo_controller = TaskListController(
            TaskSyncClient(api, QueryCache()),
            ToastNotificationSink(),
            StreamlitCelebration(cfg.celebration),
        )
    return st.session_state.todo_controller


# ----- widget callbacks and queued mutations -----

def _queue_new_task():
    ctrl = _controller()
    if ctrl.creating:
        return
    ctrl.new_title = st.session_state.get("new_title", "")
    ctrl.new_description = st.session_state.get("new_description", "")
    ctrl.new_priority = st.session_state.get("new_priority", Priority.LOW)
    ctrl.queue_new_task()


def _run_pending_mutations(ctrl: TaskListController):
    """Carry out queued creates and deletes, then rerun to re-enable the buttons.

    Runs at the end of the script so the page has already rendered its
    create and delete buttons disabled.
    """
    if not (ctrl.creating or ctrl.delete_pending):
        return
    if ctrl.creating:
        with st.spinner("Adding task..."):
            if ctrl.submit_new_task() is not None:
                st.session_state["reset_new_task_form"] = True
    for task_id in sorted(ctrl.deleting):
        with st.spinner("Deleting task..."):
            ctrl.delete_task(task_id)
    st.rerun()


def _on_completed_change(task: Task):
    key = f"done-{task.id}"
    if not _controller().set_completed(task, bool(st.session_state[key])):
        st.session_state.pop(key, None)


def _on_priority_change(task: Task):
    key = f"priority-{task.id}"
    if not _controller().set_priority(task.id, st.session_state[key]):
        st.session_state.pop(key, None)


def _on_description_change(task: Task):
    _controller().set_description(task.id, st.session_state[f"description-{task.id}"])


# ----- page -----

cfg = _app_config()
st.session_state.setdefault("theme", cfg.default_theme)
set_theme(page_title="Tasks", page_icon="✅", theme=st.session_state["theme"])

ctrl = _controller()

hc1, hc2 = st.columns([3, 1])
with hc1:
    render_logo()
with hc2:
    st.selectbox("Theme", options=list(THEMES), key="theme", format_func=str.capitalize, label_visibility="collapsed")

st.title("Tasks")

# New task form
# Widget keys can only be reset before the widgets are created.
if st.session_state.pop("reset_new_task_form", False):
    st.session_state["new_title"] = ctrl.new_title
    st.session_state["new_description"] = ctrl.new_description
    st.session_state["new_priority"] = ctrl.new_priority
st.session_state.setdefault("new_priority", Priority.LOW)
with st.form("new-task", border=False):
    fc1, fc2, fc3 = st.columns([4, 1.4, 0.6])
    with fc1:
        st.text_input("Title", key="new_title", placeholder="Add a task...", label_visibility="collapsed")
    with fc2:
        st.selectbox(
            "Priority",
            options=PRIORITIES,
            key="new_priority",
            format_func=lambda p: p.label,
            label_visibility="collapsed",
        )
    with fc3:
        st.form_submit_button("➕", on_click=_queue_new_task, disabled=ctrl.creating)
    st.text_area(
        "Description",
        key="new_description",
        placeholder="Add a description... (optional)",
        label_visibility="collapsed",
    )

# Filtering and sorting controls
st.session_state.setdefault("priority_filter", ctrl.priority_filter)
st.session_state.setdefault("status_filter", ctrl.status_filter)
st.session_state.setdefault("sort_field", ctrl.sort_field)

ctrl.search = st.text_input("Search", placeholder="Search tasks...", label_visibility="collapsed")
sc1, sc2, sc3, sc4, sc5 = st.columns([1.4, 1.4, 1.4, 0.5, 0.5])
with sc1:
    ctrl.priority_filter = st.selectbox(
        "Filter Priority",
        options=PRIORITY_FILTERS,
        key="priority_filter",
        format_func=lambda v: "All Priorities" if v == ALL else f"{Priority(int(v)).label} Priority",
        label_visibility="collapsed",
    )
with sc2:
    ctrl.status_filter = st.selectbox(
        "Filter Status",
        options=list(STATUS_LABELS),
        key="status_filter",
        format_func=STATUS_LABELS.get,
        label_visibility="collapsed",
    )
with sc3:
    ctrl.sort_field = st.selectbox(
        "Sort By",
        options=list(SORT_LABELS),
        key="sort_field",
        format_func=SORT_LABELS.get,
        label_visibility="collapsed",
    )
with sc4:
    st.button(
        "⇅",
        key="sort-order",
        on_click=ctrl.toggle_sort_order,
        help=f"Sorted {'descending' if ctrl.sort_order == 'desc' else 'ascending'}",
    )
with sc5:
    st.button("↻", key="refresh", on_click=ctrl.refresh, help="Reload tasks from the service")

try:
    with st.spinner("Loading tasks..."):
        visible = ctrl.visible_tasks()
except TaskApiError as exc:
    logger.warning("Could not load tasks: %s", exc)
    st.error("Could not load tasks from the task service.")
    visible = None

for task in visible or []:
    with st.container(border=True):
        c1, c2, c3, c4, c5 = st.columns([0.4, 4, 1.6, 0.5, 0.5], vertical_alignment="center")
        with c1:
            st.checkbox(
                "Done",
                value=task.completed,
                key=f"done-{task.id}",
                on_change=_on_completed_change,
                args=(task,),
                label_visibility="collapsed",
            )
        with c2:
            css = "todo-title-done" if task.completed else ""
            st.markdown(f"<span class='{css}'>{html.escape(task.title)}</span>", unsafe_allow_html=True)
        with c3:
            st.selectbox(
                "Priority",
                options=PRIORITIES,
                index=PRIORITIES.index(task.priority),
                key=f"priority-{task.id}",
                format_func=lambda p: p.label,
                on_change=_on_priority_change,
                args=(task,),
                label_visibility="collapsed",
            )
            st.markdown(priority_flag(task.priority), unsafe_allow_html=True)
        with c4:
            st.button(
                "▴" if ctrl.is_expanded(task.id) else "▾",
                key=f"expand-{task.id}",
                on_click=ctrl.toggle_expanded,
                args=(task.id,),
            )
        with c5:
            st.button(
                "🗑",
                key=f"delete-{task.id}",
                on_click=ctrl.queue_delete,
                args=(task.id,),
                disabled=ctrl.delete_pending,
            )
        if ctrl.is_expanded(task.id):
            st.text_area(
                "Description",
                value=task.description or "",
                key=f"description-{task.id}",
                placeholder="Add a description...",
                on_change=_on_description_change,
                args=(task,),
                height=100,
                label_visibility="collapsed",
            )

if visible is not None:
    message = ctrl.empty_message()
    if message:
        st.markdown(f"<p class='todo-empty'>{message}</p>", unsafe_allow_html=True)

_run_pending_mutations(ctrl)
