"""Forest plot generator.

Turns a CSV of study effect estimates and 95% confidence intervals into
an interactive forest plot: inverse-variance weights, weight-sized
diamonds, readable log-scale ticks and a synchronized label table.
"""

__version__ = "0.1.0"
