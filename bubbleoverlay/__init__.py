"""
isort:skip_file
"""

from .errors import BubbleOverlayError as BubbleOverlayError
from .errors import ConfigurationError as ConfigurationError
from .errors import ValidationError as ValidationError
from .Point import Point as Point
from .BubbleNode import BubbleNode as BubbleNode
from .PointRegistry import PointRegistry as PointRegistry
from .RadiusScalePolicy import compute_radius_range as compute_radius_range
from .LinearScale import LinearScale as LinearScale
from .ColorManager import ColorManager as ColorManager
from .TransitionManager import TransitionManager as TransitionManager
from .BubbleOverlayChart import BubbleOverlayChart as BubbleOverlayChart
