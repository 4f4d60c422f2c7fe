"""Streamlit launcher: `streamlit run app.py`."""

from src.app.app import main

main()
