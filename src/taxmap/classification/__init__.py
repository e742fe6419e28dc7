"""Natural-breaks classification of tax indicator values.

Provides the Jenks/Fisher breaks solver, class assignment and the colour
ramp used to paint map points and legend swatches.
"""

from taxmap.classification.assign import classify
from taxmap.classification.breaks import class_counts, compute_breaks, goodness_of_variance_fit
from taxmap.classification.color import color_for
from taxmap.classification.engine import NaturalBreaksClassifier, build_legend
from taxmap.classification.models import Classification, LegendEntry
from taxmap.classification.palette import generate_palette, rgb_to_css, rgb_to_hex
from taxmap.classification.sample import prepare_sample

__all__ = [
    "Classification",
    "LegendEntry",
    "NaturalBreaksClassifier",
    "build_legend",
    "class_counts",
    "classify",
    "color_for",
    "compute_breaks",
    "generate_palette",
    "goodness_of_variance_fit",
    "prepare_sample",
    "rgb_to_css",
    "rgb_to_hex",
]
