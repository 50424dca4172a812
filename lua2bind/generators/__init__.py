"""lua2bind.generators package

Code generators for turning extracted Lua schemas into C++ wrappers.
"""

from .naming import NamingScheme
from .binding_emitter import BindingEmitter
from .binding_generator import BindingGenerator, BindingBatch, GeneratedSource

__all__ = [
    "NamingScheme",
    "BindingEmitter",
    "BindingGenerator",
    "BindingBatch",
    "GeneratedSource",
]
