"""Meta‑analysis utilities.

This package derives fixed-effect inverse-variance weights from
confidence intervals and summarises them as per-study weight shares
for the label table and hover text.
"""

from .augment import augment, standard_error, inverse_variance_weight  # noqa: F401
from .summary import total_weight, weight_percentages, build_table  # noqa: F401
