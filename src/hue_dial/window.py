"""Main application window."""

import logging
import math

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Gtk, Adw, GLib

from hue_dial.core.dial_controller import MAX_BORDER_WIDTH, DialController
from hue_dial.core.exporter import export_png
from hue_dial.ui.dial_widget import DialWidget

logger = logging.getLogger(__name__)


class HueDialWindow(Adw.ApplicationWindow):
    """Main application window with property sidebar and dial area."""

    def __init__(self, application: Adw.Application):
        super().__init__(application=application)

        self.controller = DialController()
        self.controller.connect("changed", self._on_dial_changed)

        # Set while rows are being updated from the dial
        self._syncing = False

        # Window properties
        self.set_title("Hue Dial")
        self.set_default_size(720, 480)

        # Main layout: OverlaySplitView (sidebar + content)
        self.split_view = Adw.OverlaySplitView()
        self.split_view.set_sidebar_position(Gtk.PackType.START)
        self.split_view.set_min_sidebar_width(280)
        self.split_view.set_max_sidebar_width(360)

        self.sidebar = self._create_sidebar()
        self.split_view.set_sidebar(self.sidebar)

        self.content = self._create_content_area()
        self.split_view.set_content(self.content)

        # Toast overlay for notifications
        self.toast_overlay = Adw.ToastOverlay()
        self.toast_overlay.set_child(self.split_view)

        self.set_content(self.toast_overlay)

    def _create_sidebar(self) -> Gtk.Box:
        """Create sidebar with controls."""
        sidebar = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)

        header = Adw.HeaderBar()
        header.set_show_end_title_buttons(False)
        sidebar.append(header)

        scrolled = Gtk.ScrolledWindow()
        scrolled.set_vexpand(True)
        scrolled.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)

        controls_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        controls_box.set_spacing(18)
        controls_box.set_margin_top(12)
        controls_box.set_margin_bottom(12)
        controls_box.set_margin_start(12)
        controls_box.set_margin_end(12)

        controls_box.append(self._create_handles_group())
        controls_box.append(self._create_layout_group())

        self.export_button = Gtk.Button(label="Export PNG...")
        self.export_button.add_css_class("pill")
        self.export_button.set_margin_top(12)
        self.export_button.connect("clicked", self._on_export_clicked)
        controls_box.append(self.export_button)

        scrolled.set_child(controls_box)
        sidebar.append(scrolled)

        return sidebar

    def _create_angle_row(
        self, title: str, subtitle: str, radians: float, on_changed
    ) -> Adw.SpinRow:
        row = Adw.SpinRow()
        row.set_title(title)
        row.set_subtitle(subtitle)
        row.set_adjustment(
            Gtk.Adjustment(
                value=math.degrees(radians), lower=0.0, upper=360.0, step_increment=1.0
            )
        )
        row.set_digits(1)
        row.set_wrap(True)
        row.connect("changed", on_changed)
        return row

    def _create_handles_group(self) -> Adw.PreferencesGroup:
        """Create handle angle controls group."""
        group = Adw.PreferencesGroup()
        group.set_title("Handles")
        group.set_description("Handle angles in degrees, counterclockwise from the right")

        self.alpha_row = self._create_angle_row(
            "Alpha", "First handle", self.controller.get_alpha(), self._on_alpha_row_changed
        )
        group.add(self.alpha_row)

        self.beta_row = self._create_angle_row(
            "Beta", "Second handle", self.controller.get_beta(), self._on_beta_row_changed
        )
        group.add(self.beta_row)

        clockwise_row = Adw.SwitchRow()
        clockwise_row.set_title("Clockwise")
        clockwise_row.set_subtitle("Direction of the range from alpha to beta")
        clockwise_row.set_active(self.controller.get_clockwise())
        clockwise_row.connect("notify::active", self._on_clockwise_toggled)
        self.clockwise_row = clockwise_row
        group.add(clockwise_row)

        return group

    def _create_layout_group(self) -> Adw.PreferencesGroup:
        """Create layout controls group."""
        group = Adw.PreferencesGroup()
        group.set_title("Layout")

        border_row = Adw.SpinRow()
        border_row.set_title("Border Width")
        border_row.set_subtitle("Padding around the dial (px)")
        border_row.set_adjustment(
            Gtk.Adjustment(
                value=self.controller.get_border_width(),
                lower=0,
                upper=MAX_BORDER_WIDTH,
                step_increment=1,
            )
        )
        border_row.set_digits(0)
        border_row.connect("changed", self._on_border_changed)
        self.border_row = border_row
        group.add(border_row)

        return group

    def _create_content_area(self) -> Gtk.Box:
        """Create main content area with the dial."""
        content = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)

        header = Adw.HeaderBar()
        content.append(header)

        self.dial_widget = DialWidget(self.controller)
        self.dial_widget.set_hexpand(True)
        self.dial_widget.set_vexpand(True)
        content.append(self.dial_widget)

        self.range_label = Gtk.Label()
        self.range_label.add_css_class("dim-label")
        self.range_label.set_margin_top(6)
        self.range_label.set_margin_bottom(12)
        content.append(self.range_label)
        self._update_range_label()

        return content

    # Signal handlers
    def _on_alpha_row_changed(self, widget):
        if self._syncing:
            return
        self.controller.set_alpha(math.radians(widget.get_value()))

    def _on_beta_row_changed(self, widget):
        if self._syncing:
            return
        self.controller.set_beta(math.radians(widget.get_value()))

    def _on_clockwise_toggled(self, widget, param):
        if self._syncing:
            return
        self.controller.set_clockwise(widget.get_active())

    def _on_border_changed(self, widget):
        if self._syncing:
            return
        self.controller.set_border_width(int(widget.get_value()))

    def _on_dial_changed(self, name: str):
        """Mirror dial changes (e.g. from dragging) into the rows."""
        self._syncing = True
        try:
            if name == "alpha":
                self.alpha_row.set_value(math.degrees(self.controller.get_alpha()))
            elif name == "beta":
                self.beta_row.set_value(math.degrees(self.controller.get_beta()))
            elif name == "clockwise":
                self.clockwise_row.set_active(self.controller.get_clockwise())
            elif name == "border-width":
                self.border_row.set_value(self.controller.get_border_width())
        finally:
            self._syncing = False

        self._update_range_label()

    def _update_range_label(self):
        alpha = math.degrees(self.controller.get_alpha())
        beta = math.degrees(self.controller.get_beta())
        direction = "clockwise" if self.controller.get_clockwise() else "counterclockwise"
        self.range_label.set_label(f"{alpha:.1f}° → {beta:.1f}° ({direction})")

    def _on_export_clicked(self, widget):
        """Ask for a destination and export the dial as PNG."""
        dialog = Gtk.FileDialog()
        dialog.set_title("Export Dial")
        dialog.set_initial_name("dial.png")
        dialog.save(self, None, self._on_export_file_chosen)

    def _on_export_file_chosen(self, dialog, result):
        try:
            file = dialog.save_finish(result)
        except GLib.Error as e:
            # Dismissed by the user
            logger.debug(f"Export cancelled: {e.message}")
            return

        if file is None:
            return

        path = file.get_path()
        if export_png(self.controller, path, size=512):
            self.show_toast(f"Exported to {path}")
        else:
            self.show_toast("Error exporting dial image")

    def show_toast(self, message: str):
        """Show a toast notification."""
        toast = Adw.Toast.new(message)
        toast.set_timeout(3)
        self.toast_overlay.add_toast(toast)
