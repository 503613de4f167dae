"""
Content-aware image width resizing by seam carving.

Seams are found one at a time with a forward-energy dynamic program
(Rubinstein et al. 2008) and removed or duplicated to change the width.
"""

__version__ = "0.1.0"

from .errors import SeamCarvingError, ImageTooSmallError, TooManySeamsError
from .intensity import RGBWeights, to_intensity
from .index_tracker import IndexTracker
from .energy import MASK_PENALTY, pixel_energy, transition_costs
from .seam import cost_matrix, backtrack, find_seam
from .carving import ResizeMode, SeamCarver, accumulate_seams, carve

__all__ = [
    'SeamCarvingError',
    'ImageTooSmallError',
    'TooManySeamsError',
    'RGBWeights',
    'to_intensity',
    'IndexTracker',
    'MASK_PENALTY',
    'pixel_energy',
    'transition_costs',
    'cost_matrix',
    'backtrack',
    'find_seam',
    'ResizeMode',
    'SeamCarver',
    'accumulate_seams',
    'carve',
]
