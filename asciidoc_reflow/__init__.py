"""
asciidoc-reflow: paragraph reflow for AsciiDoc specification sources.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    asciidoc-reflow chapters/intro.adoc --overwrite

Library Usage:
    from pathlib import Path
    from asciidoc_reflow import ReflowConfig, reflow_document

    content = Path("chapters/intro.adoc").read_text()
    result = reflow_document(content, ReflowConfig(margin=76, next_vu=100))
    print(result.text, end="")
"""

import logging

from .config import ConfigError, ReflowConfig
from .exceptions import ReflowError, ReflowFileError
from .models import Diagnostic, DiagnosticKind, ReflowResult
from .reflow import reflow_document, reflow_file, reflow_lines, split_lines
from .state import ReflowState
from .wrap import wrap_paragraph

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core functionality
    "reflow_document",
    "reflow_file",
    "reflow_lines",
    "split_lines",
    "wrap_paragraph",
    "ReflowState",
    # Data models
    "ReflowConfig",
    "ReflowResult",
    "Diagnostic",
    "DiagnosticKind",
    # Exceptions
    "ConfigError",
    "ReflowError",
    "ReflowFileError",
    # Version
    "__version__",
]
