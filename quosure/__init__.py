"""quosure: Deferred evaluation of captured expressions, with quasiquotes and data masks."""

from .core import (QuoteError, StructuralError, InvalidSpliceTarget,  # noqa: F401
                   ScopeFrozenError, UnboundSymbol, InvalidName, NotASequence)
from .dumper import dump  # noqa: F401
from .evaluator import evaluate  # noqa: F401
from .expander import expand  # noqa: F401
from .markers import unquote, splice, definition_arg, definitionArg  # noqa: F401
from .nodes import literal, symbol, call  # noqa: F401
from .parser import from_source  # noqa: F401
from .quotes import ScopedQuote, capture, capture_all, quo  # noqa: F401
from .scope import Scope, new_data_mask  # noqa: F401
from .unparser import unparse, as_label  # noqa: F401

# For public API inspection, import modules that wouldn't otherwise get imported.
from . import debug  # noqa: F401

__version__ = "1.0.0"
