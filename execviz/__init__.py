"""
execviz package
===============

Bar chart of U.S. executions per year (2000 onward), built from the
execution database CSV.

- The CLI entry point is in `execviz/cli.py`.
- Loading and row validation is in `execviz/loader.py`.
- Grouping by year is in `execviz/aggregate.py`.
- Pixel scales are in `execviz/scales.py`; drawing and tooltips in `execviz/chart.py`.
"""

__version__ = '0.1.0'
