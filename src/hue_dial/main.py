"""Main entry point for the Hue Dial demo application."""

import logging
import sys

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Gtk, Adw, Gio, GLib

from hue_dial import __version__
from hue_dial.window import HueDialWindow


class HueDialApp(Adw.Application):
    """Main application class."""

    def __init__(self):
        super().__init__(
            application_id="io.github.huedial.HueDial",
            flags=Gio.ApplicationFlags.DEFAULT_FLAGS,
        )

        self.add_main_option(
            "verbose",
            ord("v"),
            GLib.OptionFlags.NONE,
            GLib.OptionArg.NONE,
            "Enable debug logging",
            None,
        )

    def do_handle_local_options(self, options):
        """Configure logging from the command line."""
        verbose = options.contains("verbose")
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        # Continue with default processing
        return -1

    def do_activate(self):
        """Called when the application is activated."""
        win = self.props.active_window
        if not win:
            win = HueDialWindow(application=self)

        win.present()

    def do_startup(self):
        """Called when the application starts."""
        Adw.Application.do_startup(self)

        self._setup_actions()

    def _setup_actions(self):
        """Setup application actions and keyboard shortcuts."""
        quit_action = Gio.SimpleAction.new("quit", None)
        quit_action.connect("activate", lambda *_: self.quit())
        self.add_action(quit_action)
        self.set_accels_for_action("app.quit", ["<Ctrl>Q"])

        about_action = Gio.SimpleAction.new("about", None)
        about_action.connect("activate", self._on_about)
        self.add_action(about_action)

    def _on_about(self, action, param):
        """Show about dialog."""
        about = Adw.AboutWindow(
            transient_for=self.props.active_window,
            application_name="Hue Dial",
            application_icon="application-x-executable",
            version=__version__,
            license_type=Gtk.License.GPL_3_0,
        )
        about.present()


def main():
    """Main function."""
    app = HueDialApp()
    return app.run(sys.argv)


if __name__ == "__main__":
    sys.exit(main())
