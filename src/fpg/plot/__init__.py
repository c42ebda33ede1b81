"""Forest plot layout and rendering.

Tick synthesis and layout planning are pure computations; the payload
module packages them for Plotly, and the figure/static modules render
them with plotly and matplotlib.
"""

from .layout import plan_layout  # noqa: F401
from .payload import build_payload  # noqa: F401
from .ticks import plan_ticks  # noqa: F401
