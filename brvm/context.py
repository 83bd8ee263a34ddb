"""
Brainrot Context

The main interface for compiling and executing Brainrot code from Python.
"""

import logging
from dataclasses import dataclass
from typing import Optional, TextIO

from brainrot import compile_source, read_source, Bytecode
from brainrot.errors import FormatError

from .interpreter import Interpreter
from .types import Value

logger = logging.getLogger(__name__)


@dataclass
class Script:
    """
    A compiled Brainrot script.
    
    Contains bytecode and metadata ready for execution.
    """
    
    source: str
    bytecode: Bytecode
    filename: Optional[str] = None
    
    def disassemble(self) -> str:
        """Get disassembly of the bytecode."""
        return self.bytecode.disassemble()
    
    def save(self, path: str) -> None:
        """Save compiled bytecode to file."""
        data = self.bytecode.serialize()
        with open(path, 'wb') as f:
            f.write(data)
        logger.debug("wrote %d bytes to %s", len(data), path)
    
    @classmethod
    def load(cls, path: str) -> 'Script':
        """Load compiled bytecode from file."""
        with open(path, 'rb') as f:
            data = f.read()
        try:
            bytecode = Bytecode.deserialize(data)
        except FormatError as e:
            raise e.with_filename(path)
        return cls(source="", bytecode=bytecode, filename=path)


class Context:
    """
    Brainrot execution context.
    
    Example:
        ctx = Context()
        script = ctx.compile('LOCK IN SAY "hi" ITS OVER')
        ctx.execute(script)
    """
    
    def __init__(self,
                 input_stream: Optional[TextIO] = None,
                 output_stream: Optional[TextIO] = None,
                 debug: bool = False):
        """
        Create a new Brainrot context.
        
        Args:
            input_stream: Stream TOUCHY reads from (default: sys.stdin)
            output_stream: Stream SAY writes to (default: sys.stdout)
            debug: Trace every executed instruction through logging
        """
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.debug = debug
        self._last_run: Optional[Interpreter] = None
    
    def compile(self, source: str, filename: Optional[str] = None) -> Script:
        """
        Compile Brainrot source code.
        
        Args:
            source: Brainrot source code string
            filename: Optional filename for error messages
            
        Returns:
            Compiled Script object
        """
        bytecode = compile_source(source, filename)
        return Script(source=source, bytecode=bytecode, filename=filename)
    
    def compile_file(self, path: str) -> Script:
        """Compile a Brainrot source file."""
        return self.compile(read_source(path), filename=path)
    
    def load(self, path: str) -> Script:
        """Load a compiled bytecode file."""
        return Script.load(path)
    
    def execute(self, script: Script) -> None:
        """
        Execute a compiled script on a fresh VM.
        
        Args:
            script: Compiled Script object
        """
        vm = Interpreter(self.input_stream, self.output_stream, trace=self.debug)
        self._last_run = vm
        vm.run(script.bytecode)
    
    def get_global(self, name: str) -> Value:
        """Value of a braincell at the end of the last execution."""
        if self._last_run is None:
            raise ValueError("No script has been executed yet")
        return self._last_run.get_global(name)


def create_context(**kwargs) -> Context:
    """Create a new Brainrot context."""
    return Context(**kwargs)


def run(source: str, **kwargs) -> None:
    """
    Compile and run Brainrot code.
    
    Args:
        source: Brainrot source code
        **kwargs: Context options
    """
    ctx = Context(**kwargs)
    script = ctx.compile(source)
    ctx.execute(script)
