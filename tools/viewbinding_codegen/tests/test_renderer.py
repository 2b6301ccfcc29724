from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[3]
SRC_ROOT = REPO_ROOT / "tools" / "viewbinding_codegen" / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from viewbinding_codegen.collector import ClassId, ViewBindings
from viewbinding_codegen.renderer import (
    VIEW_BINDING_UTILS,
    derive_base_name,
    include_guard,
    output_file_name,
    pascal_case,
    render_header,
)

APP_ID = "com_example_App"

EXPECTED_UTILS = """#ifndef VIEW_BINDING_INSIDE_UTILS
#define VIEW_BINDING_INSIDE_UTILS

#define view_binding_full(widget_class, WidgetType, BindingType, binding_name, widget_name) \\
\tgtk_widget_class_bind_template_child_full(GTK_WIDGET_CLASS(widget_class), #widget_name, FALSE, G_STRUCT_OFFSET(WidgetType, binding_name) + G_STRUCT_OFFSET(BindingType, widget_name));

#define view_binding_full_private(widget_class, WidgetType, BindingType, binding_name, widget_name) \\
\tgtk_widget_class_bind_template_child_full(GTK_WIDGET_CLASS(widget_class), #widget_name, FALSE, G_PRIVATE_OFFSET(WidgetType, binding_name) + G_STRUCT_OFFSET(BindingType, widget_name));

#endif /* VIEW_BINDING_INSIDE_UTILS */
"""


class NamingTests(unittest.TestCase):
    def test_base_name(self) -> None:
        self.assertEqual(derive_base_name("My-Widget.ui"), "my_widget")
        self.assertEqual(derive_base_name("login-view.ui"), "login_view")
        self.assertEqual(derive_base_name("main.window.ui"), "main.window")

    def test_pascal_case(self) -> None:
        self.assertEqual(pascal_case("my_widget"), "MyWidget")
        self.assertEqual(pascal_case("login__view_"), "LoginView")
        self.assertEqual(pascal_case("list_2nd_row"), "List2ndRow")

    def test_output_file_name(self) -> None:
        self.assertEqual(output_file_name("login_view"), "login_view_viewbinding.h")

    def test_include_guard(self) -> None:
        self.assertEqual(include_guard(APP_ID, "login_view"), "com_example_App_login_view_VIEW_BINDING_H_")


class RenderHeaderTests(unittest.TestCase):
    def test_utils_block_is_verbatim(self) -> None:
        self.assertEqual("\n".join(VIEW_BINDING_UTILS) + "\n", EXPECTED_UTILS)

    def test_empty_file_renders_boilerplate_only(self) -> None:
        header = render_header("empty", ViewBindings(), APP_ID)
        expected = (
            "/* Generated By View Binding Code Generator, Do Not Edit By Hand */\n"
            "\n"
            "#ifndef com_example_App_empty_VIEW_BINDING_H_\n"
            "#define com_example_App_empty_VIEW_BINDING_H_\n"
            "\n" + EXPECTED_UTILS + "\n"
            "#endif /* com_example_App_empty_VIEW_BINDING_H_ */\n"
        )
        self.assertEqual(header, expected)
        self.assertNotIn("typedef struct", header)
        self.assertNotIn("_view_binding_callback", header)

    def test_login_view_round_trip(self) -> None:
        bindings = ViewBindings(
            class_ids=[ClassId(class_name="GtkButton", id="submit_btn")],
            handlers=["on_submit_clicked"],
        )
        header = render_header("login_view", bindings, APP_ID)

        expected_tail = (
            "#endif /* VIEW_BINDING_INSIDE_UTILS */\n"
            "\n"
            "/* Class Bindings */\n"
            "typedef struct {\n"
            "\tGtkButton *submit_btn;\n"
            "} LoginViewBinding;\n"
            "\n"
            "#define login_view_view_binding(widget_class, WidgetType, binding_name) \\\n"
            "\tdo { \\\n"
            "\t\tview_binding_full(widget_class, WidgetType, LoginViewBinding, binding_name, submit_btn) \\\n"
            "\t} while(0) \n"
            "\n"
            "#define login_view_view_binding_private(widget_class, WidgetType, binding_name) \\\n"
            "\tdo { \\\n"
            "\t\tview_binding_full_private(widget_class, WidgetType, LoginViewBinding, binding_name, submit_btn) \\\n"
            "\t} while(0) \n"
            "\n"
            "/* Signal Handlers */\n"
            "#define login_view_view_binding_callback(widget_class) \\\n"
            "\tdo { \\\n"
            "\t\tgtk_widget_class_bind_template_callback(GTK_WIDGET_CLASS(widget_class), on_submit_clicked); \\\n"
            "\t} while(0) \n"
            "\n"
            "#endif /* com_example_App_login_view_VIEW_BINDING_H_ */\n"
        )
        self.assertTrue(header.endswith(expected_tail), header)

    def test_records_keep_first_seen_order(self) -> None:
        bindings = ViewBindings(
            class_ids=[
                ClassId(class_name="GtkLabel", id="title"),
                ClassId(class_name="GtkEntry", id="name_entry"),
                ClassId(class_name="GtkButton", id="apply"),
            ],
            handlers=["on_name_changed", "on_apply", "on_name_changed"],
        )
        header = render_header("settings", bindings, APP_ID)

        fields = [line for line in header.splitlines() if line.startswith("\tGtk")]
        self.assertEqual(fields, ["\tGtkLabel *title;", "\tGtkEntry *name_entry;", "\tGtkButton *apply;"])

        public = [line for line in header.splitlines() if line.startswith("\t\tview_binding_full(")]
        self.assertEqual([line.split(", ")[-1] for line in public], ["title) \\", "name_entry) \\", "apply) \\"])

        callbacks = [line for line in header.splitlines() if "bind_template_callback" in line]
        self.assertEqual(len(callbacks), 3)
        self.assertIn("on_name_changed); \\", callbacks[0])
        self.assertIn("on_apply); \\", callbacks[1])
        self.assertIn("on_name_changed); \\", callbacks[2])

    def test_signals_only(self) -> None:
        header = render_header("about", ViewBindings(handlers=["on_close"]), APP_ID)
        self.assertNotIn("typedef struct", header)
        self.assertNotIn("#define about_view_binding(", header)
        self.assertIn("#define about_view_binding_callback(widget_class) \\", header)

    def test_objects_only(self) -> None:
        header = render_header("about", ViewBindings(class_ids=[ClassId("GtkImage", "logo")]), APP_ID)
        self.assertIn("} AboutBinding;", header)
        self.assertIn("\t\tview_binding_full_private(widget_class, WidgetType, AboutBinding, binding_name, logo) \\", header)
        self.assertNotIn("/* Signal Handlers */", header)


if __name__ == "__main__":
    unittest.main()
