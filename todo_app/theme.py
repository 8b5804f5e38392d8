import streamlit as st
from streamlit.errors import StreamlitAPIException

from todo_app.config import THEMES
from todo_app.models import Priority

PRIORITY_COLORS = {
    Priority.LOW: "#6b7280",
    Priority.MEDIUM: "#f97316",
    Priority.HIGH: "#ef4444",
}

_LIGHT = {
    "background": "#ffffff",
    "foreground": "#0f172a",
    "muted": "#64748b",
    "card": "#f8fafc",
    "border": "#e2e8f0",
    "primary": "#0b63d6",
}

_DARK = {
    "background": "#0b1120",
    "foreground": "#e2e8f0",
    "muted": "#94a3b8",
    "card": "#111827",
    "border": "#1f2937",
    "primary": "#60a5fa",
}


def _palette_vars(palette: dict) -> str:
    return " ".join(f"--todo-{name}:{value};" for name, value in palette.items())


def theme_css(theme: str = "system") -> str:
    """CSS custom properties + rules for ``theme``; unknown names mean system."""
    if theme not in THEMES:
        theme = "system"
    if theme == "light":
        variables = f":root {{ {_palette_vars(_LIGHT)} }}"
    elif theme == "dark":
        variables = f":root {{ {_palette_vars(_DARK)} }}"
    else:
        variables = (
            f":root {{ {_palette_vars(_LIGHT)} }}\n"
            f"@media (prefers-color-scheme: dark) {{ :root {{ {_palette_vars(_DARK)} }} }}"
        )
    rules = """
    .stApp { background:var(--todo-background); color:var(--todo-foreground); }
    .stApp h1 { color:var(--todo-primary); text-align:center; font-weight:800; }
    .todo-logo { display:flex; align-items:center; gap:.5rem; font-weight:700; font-size:1.25rem; color:var(--todo-foreground); }
    .todo-logo .todo-logo-icon { color:var(--todo-primary); font-size:1.4rem; }
    .todo-title-done { text-decoration:line-through; color:var(--todo-muted); }
    .todo-empty { text-align:center; color:var(--todo-muted); }
    div[data-testid="stVerticalBlockBorderWrapper"] { background:var(--todo-card); border-color:var(--todo-border); }
    """
    return f"<style>{variables}\n{rules}</style>"


def set_theme(
    page_title: str = "Tasks",
    page_icon: str = "✅",
    theme: str = "system",
    layout: str = "centered",
):
    """Configure the Streamlit page and inject the CSS for ``theme``.

    Safe to call at the top of every rerun: Streamlit only honours the first
    set_page_config, the CSS is re-injected each time.
    """
    try:
        st.set_page_config(page_title=page_title, page_icon=page_icon, layout=layout)
    except StreamlitAPIException:
        # set_page_config can only be called once per run.
        pass
    st.markdown(theme_css(theme), unsafe_allow_html=True)


def priority_flag(priority: Priority) -> str:
    color = PRIORITY_COLORS[priority]
    return f"<span style='color:{color}'>⚑</span> {priority.label}"


def render_logo() -> None:
    st.markdown(
        "<div class='todo-logo'><span class='todo-logo-icon'>✔</span><span>TodoList</span></div>",
        unsafe_allow_html=True,
    )
