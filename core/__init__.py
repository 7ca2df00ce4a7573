"""Core (UI-agnostic) dashboard logic.

This package contains:
- CSV loading with fallback data (text -> pandas rows -> labeled series)
- series reconciliation (union of years) and min-max normalization (shared years)
- chart assembly (ChartSpec, Altair -> Vega-Lite spec dict)
- view payloads for the API and the Streamlit app
"""
