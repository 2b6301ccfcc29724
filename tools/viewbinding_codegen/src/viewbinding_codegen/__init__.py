from .collector import ClassId, ElementKind, ViewBindings, collect_element, scan_ui_file, scan_ui_text
from .common import ViewBindingError, write_output
from .renderer import derive_base_name, output_file_name, pascal_case, render_header

__all__ = [
    "ClassId",
    "ElementKind",
    "ViewBindingError",
    "ViewBindings",
    "collect_element",
    "derive_base_name",
    "output_file_name",
    "pascal_case",
    "render_header",
    "scan_ui_file",
    "scan_ui_text",
    "write_output",
]
