"""
AC Trend Explorer core.

Trend extraction, pattern grouping, Sankey flow graphs and summary tables for
assembly-constituency win/loss data. Only `config`, `data` and `ui` import
Streamlit; everything else is plain Python.
"""

__version__ = "1.0.0"
