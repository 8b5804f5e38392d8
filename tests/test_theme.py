from todo_app import theme
from todo_app.models import Priority


def test_set_theme():
    try:
        theme.set_theme(page_title="Tasks", theme="dark")
    except Exception as e:
        assert False, f"set_theme raised an exception: {e}"


def test_light_and_dark_css_use_their_palettes():
    assert "#0b1120" in theme.theme_css("dark")
    assert "#0b1120" not in theme.theme_css("light")


def test_system_theme_follows_color_scheme():
    css = theme.theme_css("system")
    assert "prefers-color-scheme: dark" in css
    assert theme.theme_css("neon") == css


def test_priority_flag_is_coloured():
    assert theme.PRIORITY_COLORS[Priority.HIGH] in theme.priority_flag(Priority.HIGH)
    assert "High" in theme.priority_flag(Priority.HIGH)
