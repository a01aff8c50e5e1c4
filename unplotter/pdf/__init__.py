# PDF reading, viewport and curve extraction module

from .reader import (
    open_pdf,
    get_page,
    get_page_dimensions,
    PDFReadError,
    PDFPasswordProtectedError,
    PDFCorruptedError,
)

from .viewport import Viewport

from .curves import (
    extract_all_paths,
    flatten_bezier,
    path_to_polylines,
    extract_page_curves,
    describe_curve,
)

__all__ = [
    # Reader functions
    "open_pdf",
    "get_page",
    "get_page_dimensions",
    # Reader exceptions
    "PDFReadError",
    "PDFPasswordProtectedError",
    "PDFCorruptedError",
    # Viewport
    "Viewport",
    # Curve extraction
    "extract_all_paths",
    "flatten_bezier",
    "path_to_polylines",
    "extract_page_curves",
    "describe_curve",
]
