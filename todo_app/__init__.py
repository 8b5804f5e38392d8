"""Single-user to-do list: Streamlit client and task service."""

__version__ = "1.0.0"
