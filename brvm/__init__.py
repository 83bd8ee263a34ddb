"""
Brainrot VM

Runtime for compiled Brainrot bytecode: values, the stack interpreter and
a high-level Context API.
"""

from .context import Context, Script, create_context, run
from .interpreter import Interpreter
from .types import Value

__version__ = "0.4.0"

__all__ = [
    'Context',
    'Script',
    'create_context',
    'run',
    'Interpreter',
    'Value',
]
