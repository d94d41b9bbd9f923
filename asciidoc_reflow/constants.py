"""Constants and markup patterns used across the asciidoc-reflow package."""

from __future__ import annotations

import re

from .config import ReflowConfig

DEFAULT_CONFIG = ReflowConfig()

DEFAULT_MARGIN = DEFAULT_CONFIG.margin
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
ASCIIDOC_EXTENSIONS = (".adoc", ".asciidoc", ".asc", ".txt")

# Lines end at "\n" only; the newline stays with its line.
LINE_END_PATTERN = re.compile(r"(?<=\n)")

# Words are separated by ASCII blanks; other spaces (e.g. U+00A0) bind words.
WORD_SEPARATOR_PATTERN = re.compile(r"[ \t]+")

# Markup that always ends a paragraph:
#   blank line, [block options], [[anchor]], // comment, <<<< page break,
#   :attribute-setting, macro-directive::terms, standalone +, label::
# Comment block delimiters (//// and longer) are left to the block rules.
END_PARA_PATTERN = re.compile(r"^([ \t]*|\[.*\]|//(?!/{2,}$).*|<<<<|:.*|[a-z]+::.*|\+|.*::)$")

# Markup that ends a paragraph and is passed through as-is:
#   .Block title, === Section title, image::path[attributes]
# Literal block delimiters (.... and longer) are left to the block rules.
END_PARA_CONTINUE_PATTERN = re.compile(r"^(\.(?!\.{3,}$).*|=+ .+|image:.*\[.*\])$")

# Delimiters of blocks whose contents are reflowed:
#   -- (open), **** (sidebar), ==== (example), ____ (quote)
BLOCK_REFLOW_PATTERN = re.compile(r"^(--|[*=_]{4,})$")

# Delimiters of blocks whose contents are left alone:
#   |=== (table), ++++ (passthrough), .... (literal), //// (comment),
#   ---- (listing), ``` (listing)
BLOCK_PASSTHROUGH_PATTERN = re.compile(r"^(\|={3,}|`{3}|[-.+/]{4,})$")

# Lines introducing a list item (hanging paragraph):
#   * bullet, ** bullet, -- bullet, . bullet, {empty}:: bullet, :: bullet,
#   1. item, <1> callout
BEGIN_BULLET_PATTERN = re.compile(r"^ *([-*.]+|\{empty\}::|::|[0-9]+[.]|<([0-9]+)>) ")

# include:: of a generated API definition, used to scope tag generation.
INCLUDE_PATTERN = re.compile(
    r"include::(?P<directory_traverse>((\.\./){1,4}|\{INCS-VAR\}/|\{generated\}/)(generated/)?)"
    r"(?P<generated_type>\w+)/(?P<category>\w+)/(?P<entity_name>[^./]+)\.txt\[\]"
)
INCLUDE_API_TYPE = "api"
INCLUDE_API_CATEGORIES = ("protos", "structs")

# First parameter reference in a Valid Usage statement.
PNAME_PATTERN = re.compile(r"pname:(?P<param>\w+)")

# Explicit Valid Usage list item; DOTALL keeps the line terminator in the tail.
VU_ITEM_PATTERN = re.compile(r"^(?P<head>  [*]+)( *)(?P<tail>.*)", re.DOTALL)
NESTED_VU_ITEM_PATTERN = re.compile(r"^  \*\*")

# Words that end with a period without ending a sentence.
END_INITIAL_PATTERN = re.compile(r"^[A-Z]\.$")
END_ABBREV_PATTERN = re.compile(r"(e\.g|i\.e|c\.f)\.$", re.IGNORECASE)

# Trailing vendor suffix ignored when comparing promoted API names.
VENDOR_SUFFIX_PATTERN = re.compile(r"[A-Z]+$")

# Pseudo block delimiter wrapping "common" Valid Usage statements.
COMMON_VU_DELIMITER = "// Common Valid Usage"
COMMON_VU_API_NAME = "{refpage}"

# Block title that marks the next reflow block as a Valid Usage block.
VALID_USAGE_TITLE = ".Valid Usage"

OPEN_BLOCK_DELIMITER = "--"
DOCUMENT_TITLE_PREFIX = "= "
HARD_BREAK_TOKEN = "+"

VU_PREFIX = "VUID"
VUID_ANCHOR_PREFIX = f"[[{VU_PREFIX}-"
VU_NUMBER_WIDTH = 5
MISSING_PARAM_NAME = "None"
