"""
Configuration constants for Rust outline extraction.

Defines the markers and keywords the line classifier recognizes, plus the
defaults used by file discovery and rendering.
"""

# Documentation comment marker (outer doc comment)
DOC_COMMENT_MARKER: str = "///"

# Plain line comment marker
LINE_COMMENT_MARKER: str = "//"

# Attribute / preprocessor marker (#[derive], #![allow], ...)
ATTRIBUTE_MARKER: str = "#"

# Public-visibility qualifier stripped from displayed summaries
VISIBILITY_QUALIFIER: str = "pub "

# Declaration keywords
FUNCTION_KEYWORD: str = "fn"
STRUCT_OR_ENUM_KEYWORDS: tuple = ("struct", "enum")
STATIC_KEYWORD: str = "static"
IMPORT_KEYWORD: str = "use"

# Brace characters tracked for balance
OPEN_BRACE: str = "{"
CLOSE_BRACE: str = "}"

# Statement terminator completing unit/tuple structs
STATEMENT_TERMINATOR: str = ";"

# Cargo manifest file name
CARGO_MANIFEST: str = "Cargo.toml"

# Fallback source directory when no workspace members are declared
DEFAULT_SOURCE_DIR: str = "src"

# Preview size used when a large file has no outline
FALLBACK_PREVIEW_BYTES: int = 1024

# Document headers
WORKSPACE_HEADER: str = "# Workspace Code Structure Outline"
SRC_HEADER: str = "# Src Code Structure Outline"
