"""Static site pieces: theme colours, template instantiation and sidebar."""

from .colors import darken_hex, generate_color_variations, lighten_hex
from .instantiator import TemplateInstantiator, instantiate_templates
from .sidebar import build_sidebar

__all__ = [
    "TemplateInstantiator",
    "build_sidebar",
    "darken_hex",
    "generate_color_variations",
    "instantiate_templates",
    "lighten_hex",
]
