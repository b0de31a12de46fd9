"""Streamlit presentation layer for the Starry Geo dashboard."""
