"""Streamlit dashboard package."""
