"""Entry point: glues pystray (daemon thread) with tkinter (main thread)."""

import ctypes
import logging
import os
import threading

from datepicker_window import DatePickerWindow
from icon_gen import create_icon_image
from tray_icon import create_tray


def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("MINI_DATEPICKER_DEBUG") else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # DPI awareness so positions / fonts are crisp on Hi-DPI monitors
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        pass

    picker = DatePickerWindow()

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        picker.root.after(0, picker.toggle)

    def on_clear() -> None:
        picker.root.after(0, picker.clear_selection)

    def on_settings() -> None:
        picker.root.after(0, picker.open_settings)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            picker.destroy()
        picker.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit,
                       on_clear=on_clear, on_settings=on_settings)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    # tkinter main loop on the main thread
    picker.root.mainloop()


if __name__ == "__main__":
    main()
