from __future__ import annotations

import string

from .collector import ClassId, ViewBindings

OUTPUT_SUFFIX = "_viewbinding.h"

BANNER = "/* Generated By View Binding Code Generator, Do Not Edit By Hand */"

# Shared by every generated header; the text must stay byte-for-byte stable.
VIEW_BINDING_UTILS = [
    "#ifndef VIEW_BINDING_INSIDE_UTILS",
    "#define VIEW_BINDING_INSIDE_UTILS",
    "",
    "#define view_binding_full(widget_class, WidgetType, BindingType, binding_name, widget_name) \\",
    "\tgtk_widget_class_bind_template_child_full(GTK_WIDGET_CLASS(widget_class), #widget_name, FALSE, "
    "G_STRUCT_OFFSET(WidgetType, binding_name) + G_STRUCT_OFFSET(BindingType, widget_name));",
    "",
    "#define view_binding_full_private(widget_class, WidgetType, BindingType, binding_name, widget_name) \\",
    "\tgtk_widget_class_bind_template_child_full(GTK_WIDGET_CLASS(widget_class), #widget_name, FALSE, "
    "G_PRIVATE_OFFSET(WidgetType, binding_name) + G_STRUCT_OFFSET(BindingType, widget_name));",
    "",
    "#endif /* VIEW_BINDING_INSIDE_UTILS */",
]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def derive_base_name(file_name: str) -> str:
    stem, dot, _ = file_name.rpartition(".")
    if not dot:
        stem = file_name
    return stem.replace("-", "_").translate(_ASCII_LOWER)


def pascal_case(base_name: str) -> str:
    parts: list[str] = []
    for segment in base_name.split("_"):
        if not segment:
            continue
        head = segment[0]
        if head in string.ascii_lowercase:
            head = head.translate(_ASCII_UPPER)
        parts.append(head + segment[1:])
    return "".join(parts)


def output_file_name(base_name: str) -> str:
    return f"{base_name}{OUTPUT_SUFFIX}"


def include_guard(application_id: str, base_name: str) -> str:
    return f"{application_id}_{base_name}_VIEW_BINDING_H_"


def _render_binding_macro(macro_name: str, helper: str, binding_type: str, class_ids: list[ClassId]) -> list[str]:
    lines = [
        f"#define {macro_name}(widget_class, WidgetType, binding_name) \\",
        "\tdo { \\",
    ]
    for class_id in class_ids:
        lines.append(f"\t\t{helper}(widget_class, WidgetType, {binding_type}, binding_name, {class_id.id}) \\")
    lines.append("\t} while(0) ")
    return lines


def render_class_bindings(base_name: str, class_ids: list[ClassId]) -> list[str]:
    binding_type = f"{pascal_case(base_name)}Binding"
    lines = ["", "/* Class Bindings */", "typedef struct {"]
    for class_id in class_ids:
        lines.append(f"\t{class_id.class_name} *{class_id.id};")
    lines.append(f"}} {binding_type};")

    lines.append("")
    lines.extend(_render_binding_macro(f"{base_name}_view_binding", "view_binding_full", binding_type, class_ids))
    lines.append("")
    lines.extend(
        _render_binding_macro(
            f"{base_name}_view_binding_private",
            "view_binding_full_private",
            binding_type,
            class_ids,
        )
    )
    return lines


def render_signal_handlers(base_name: str, handlers: list[str]) -> list[str]:
    lines = [
        "",
        "/* Signal Handlers */",
        f"#define {base_name}_view_binding_callback(widget_class) \\",
        "\tdo { \\",
    ]
    for handler in handlers:
        lines.append(f"\t\tgtk_widget_class_bind_template_callback(GTK_WIDGET_CLASS(widget_class), {handler}); \\")
    lines.append("\t} while(0) ")
    return lines


def render_header(base_name: str, bindings: ViewBindings, application_id: str) -> str:
    """Render the complete ``<base_name>_viewbinding.h`` text for one UI file.

    The line buffer is local to this call; nothing is shared between files.
    """
    guard = include_guard(application_id, base_name)
    lines: list[str] = [
        BANNER,
        "",
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
    ]
    lines.extend(VIEW_BINDING_UTILS)

    if bindings.class_ids:
        lines.extend(render_class_bindings(base_name, bindings.class_ids))
    if bindings.handlers:
        lines.extend(render_signal_handlers(base_name, bindings.handlers))

    lines.append("")
    lines.append(f"#endif /* {guard} */")
    return "\n".join(lines) + "\n"
