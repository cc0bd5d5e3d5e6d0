"""Single-month date picker window (tkinter) positioned above the taskbar."""

import ctypes
import logging
from datetime import date
from tkinter import font as tkfont
import tkinter as tk

from calendar_logic import day_of_year
from datepicker_engine import DatePickerEngine, DayFlags
from locales import LOCALE_DATA
from pseudo_styles import StyleRegistry, pseudo_style_ids, update_pseudo_class_styles
from settings import load_settings, props_from_settings, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
FOCUS_BG = "#E5F1FB"
DISABLED_FOCUS_BG = "#F0F0F0"
ACTIVE_BG = "#8CC4EC"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
OTHER_MONTH_FG = "#AAAAAA"
DISABLED_FG = "#CCCCCC"
WEEKEND_FG = "#CC0000"

HOVER_NAV_STYLE = {"fg": ACCENT}
FOCUS_STYLE = {"highlightbackground": ACCENT, "highlightcolor": ACCENT}
BLUR_STYLE = {"highlightbackground": GRID_BG, "highlightcolor": GRID_BG}

# tk keysym -> DOM-style key names understood by the engine
_TK_KEYS = {
    "Home": "Home",
    "End": "End",
    "Up": "ArrowUp",
    "Down": "ArrowDown",
    "Left": "ArrowLeft",
    "Right": "ArrowRight",
    "Prior": "PageUp",
    "Next": "PageDown",
    "Return": "Enter",
    "KP_Enter": "Enter",
    "space": " ",
}

_MAX_WEEKS = 6


class _MonthPanel:
    """Pre-allocated widget pool for the month (nav bar + 6 weeks max)."""

    __slots__ = ("frame", "prev_nav", "label", "next_nav", "day_headers", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict,
                 on_press, on_release, on_enter, on_leave) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        nav = tk.Frame(self.frame, bg=HEADER_BG)
        nav.grid(row=0, column=0, columnspan=7, sticky="we", pady=(0, 2))
        self.prev_nav = tk.Label(
            nav, text="◀", font=fonts["nav"], bg=HEADER_BG, cursor="hand2",
        )
        self.prev_nav.pack(side="left", padx=6)
        self.next_nav = tk.Label(
            nav, text="▶", font=fonts["nav"], bg=HEADER_BG, cursor="hand2",
        )
        self.next_nav.pack(side="right", padx=6)
        self.label = tk.Label(nav, font=fonts["header"], bg=HEADER_BG, fg="#333333")
        self.label.pack(side="top")

        self.day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(self.frame, font=fonts["bold"], bg=GRID_BG, width=3)
            lbl.grid(row=1, column=col)
            self.day_headers.append(lbl)

        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(_MAX_WEEKS):
            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=fonts["cell_w"], height=fonts["cell_h"],
                    bg=GRID_BG, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=r + 2, column=c)
                # Handlers look the day up in _widget_keys
                cell.bind("<ButtonPress>", on_press)
                cell.bind("<ButtonRelease>", on_release)
                cell.bind("<Enter>", on_enter)
                cell.bind("<Leave>", on_leave)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class DatePickerWindow:
    """Date picker that appears above the taskbar."""

    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title(self._title())
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._setup_fonts()

        self._settings = load_settings()
        self.engine = DatePickerEngine(props_from_settings(
            self._settings,
            on_update=self._on_selection_changed,
            on_month_update=self._on_month_changed,
        ))

        self._styles = StyleRegistry()
        self._style_ids = pseudo_style_ids()
        self._register_styles()

        # Widget-to-key mapping (filled during _refresh)
        self._widget_keys: dict[int, str] = {}

        _tmp = tk.Label(self.root, text="00", font=self.font_normal, width=3)
        _tmp.update_idletasks()
        fonts = {
            "header": self.font_header, "bold": self.font_bold,
            "normal": self.font_normal, "nav": self.font_nav,
            "cell_w": _tmp.winfo_reqwidth(), "cell_h": _tmp.winfo_reqheight(),
        }
        _tmp.destroy()

        self._outer = tk.Frame(self.root, bg=GRID_BG, highlightthickness=2, **BLUR_STYLE)
        self._outer.pack(padx=6, pady=4)
        self._panel = _MonthPanel(
            self._outer, fonts,
            self._on_day_press, self._on_day_release,
            self._on_day_enter, self._on_day_leave,
        )
        self._panel.frame.pack()
        self._bind_nav(self._panel.prev_nav, self._style_ids.prev_month_nav, self.engine.prev_month)
        self._bind_nav(self._panel.next_nav, self._style_ids.next_month_nav, self.engine.next_month)

        self._footer_label = tk.Label(
            self._outer, font=self.font_footer, bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

        # Toplevel bindings see every child event after the widget's own
        self.root.bind("<FocusIn>", self._on_focus_in)
        self.root.bind("<FocusOut>", self._on_focus_out)
        self.root.bind("<KeyPress>", self._on_key)
        self.root.bind("<ButtonPress>", self._on_wrapper_press)
        self.root.bind("<ButtonRelease>", self._on_wrapper_release)
        self.root.bind("<Escape>", self._on_escape)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)

        self._refresh()
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_footer = tkfont.Font(family=base, size=9)

    @staticmethod
    def _title() -> str:
        return f"Mini Date Picker  Day: {day_of_year(date.today())}"

    # ------------------------------------------------------------------
    # Pseudo-class styles
    # ------------------------------------------------------------------
    def _register_styles(self) -> None:
        update_pseudo_class_styles(
            self._styles, self._style_ids,
            HOVER_NAV_STYLE, HOVER_NAV_STYLE, FOCUS_STYLE,
            self.engine.prevent_focus_style,
        )

    def _bind_nav(self, label: tk.Label, style_id: str, command) -> None:
        def _enter(_e):
            label.configure(**self._styles.lookup(style_id))

        def _leave(_e):
            label.configure(fg="black")

        def _click(_e):
            command()
            self._refresh()

        label.bind("<Enter>", _enter)
        label.bind("<Leave>", _leave)
        label.bind("<Button-1>", _click)

    # ------------------------------------------------------------------
    # Redraw from engine state
    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        engine = self.engine
        panel = self._panel
        self._widget_keys.clear()

        panel.label.configure(text=engine.month_label())
        for lbl, (name, is_weekend) in zip(panel.day_headers, engine.week_header()):
            fg = WEEKEND_FG if is_weekend else "#333333"
            if engine.props.disabled:
                fg = DISABLED_FG
            lbl.configure(text=name, fg=fg)

        weeks = engine.weeks()
        for r in range(_MAX_WEEKS):
            for c in range(7):
                cell = panel.day_cells[r][c]
                if r >= len(weeks) or weeks[r][c] is None:
                    self._draw_cell(cell, "", GRID_BG, GRID_BG, self.font_normal)
                    continue
                flags = engine.day_flags(weeks[r][c])
                if flags.is_hidden:
                    self._draw_cell(cell, "", GRID_BG, GRID_BG, self.font_normal)
                    continue
                bg, fg = self._day_colors(flags, engine.props.disabled)
                self._draw_cell(
                    cell, str(flags.day), bg, fg,
                    self.font_bold if flags.is_today else self.font_normal,
                    cursor="" if flags.is_disabled_by_range else "hand2",
                )
                self._widget_keys[id(cell)] = flags.date_key

        wrapper = engine.wrapper_flags()
        if wrapper.show_focus_style:
            if engine.prevent_focus_style:
                focus = FOCUS_STYLE
            else:
                focus = self._styles.lookup(self._style_ids.wrapper, "focus")
            self._outer.configure(**(focus or BLUR_STYLE))
        else:
            self._outer.configure(**BLUR_STYLE)

        self._footer_label.configure(text=self._footer_text())

    @staticmethod
    def _day_colors(flags: DayFlags, disabled: bool) -> tuple[str, str]:
        bg, fg = GRID_BG, "black"
        if flags.is_weekend:
            fg = WEEKEND_FG
        if flags.is_other_month:
            fg = OTHER_MONTH_FG
        if disabled or flags.is_disabled_by_range:
            fg = DISABLED_FG
        if flags.is_today:
            bg, fg = ACCENT, "white"
        if flags.is_selected:
            bg, fg = SEL_BG, "black"
        if flags.is_focused:
            bg = DISABLED_FOCUS_BG if (disabled or flags.is_disabled_by_range) else FOCUS_BG
        if flags.is_active:
            bg = ACTIVE_BG
        return bg, fg

    def _draw_cell(self, cell: tk.Canvas, text: str, bg: str, fg: str,
                   font, cursor: str = "") -> None:
        cell.delete("all")
        w = cell.winfo_width()
        h = cell.winfo_height()
        if w <= 1:
            w = int(cell["width"]) + 2
        if h <= 1:
            h = int(cell["height"]) + 2
        cell.configure(bg=bg, cursor=cursor)
        if text:
            cell.create_text(w // 2, h // 2, text=text, fill=fg, font=font)

    def _footer_text(self) -> str:
        today_str = f"Today: {date.today().strftime('%d.%m.%Y')}"
        selected = self.engine.selected_date
        if selected is None:
            return today_str
        return f"Selected: {selected.strftime('%d.%m.%Y')}     {today_str}"

    # ------------------------------------------------------------------
    # Engine callbacks
    # ------------------------------------------------------------------
    def _on_selection_changed(self, value) -> None:
        if value is not None and self._settings.get("copy_to_clipboard"):
            self.root.clipboard_clear()
            self.root.clipboard_append(value.isoformat())
        logger.debug("Selection changed to %s", value)

    def _on_month_changed(self, month: int, year: int) -> None:
        logger.debug("Month changed to %d/%d", month, year)

    # ------------------------------------------------------------------
    # Wrapper events (toplevel bindings)
    # ------------------------------------------------------------------
    def _on_focus_in(self, event: tk.Event) -> None:
        if event.widget is self.root:
            self.engine.focus_wrapper()
            self._refresh()

    def _on_focus_out(self, event: tk.Event) -> None:
        if event.widget is self.root:
            self.engine.blur_wrapper()
            self._refresh()

    def _on_wrapper_press(self, event: tk.Event) -> None:
        self.engine.wrapper_pointer_down(event.num - 1)
        self._refresh()

    def _on_wrapper_release(self, event: tk.Event) -> None:
        self.engine.wrapper_pointer_up(event.num - 1)
        self._refresh()

    def _on_key(self, event: tk.Event) -> None:
        key = _TK_KEYS.get(event.keysym)
        if key is not None and self.engine.handle_key(key):
            self._refresh()

    # ------------------------------------------------------------------
    # Day cell events
    # ------------------------------------------------------------------
    def _on_day_press(self, event: tk.Event) -> None:
        key = self._widget_keys.get(id(event.widget))
        if key:
            # tk numbers buttons from 1 (left)
            self.engine.day_pointer_down(key, event.num - 1)

    def _on_day_release(self, event: tk.Event) -> None:
        w = event.widget.winfo_containing(event.x_root, event.y_root)
        key = self._widget_keys.get(id(w)) if w else None
        self.engine.day_pointer_release(key, event.num - 1)

    def _on_day_enter(self, event: tk.Event) -> None:
        key = self._widget_keys.get(id(event.widget))
        if key:
            self.engine.day_pointer_enter(key)
            self._refresh()

    def _on_day_leave(self, event: tk.Event) -> None:
        key = self._widget_keys.get(id(event.widget))
        if key:
            self.engine.day_pointer_leave(key)
            self._refresh()

    # ------------------------------------------------------------------
    # ESC clears selection first, then hides
    # ------------------------------------------------------------------
    def _on_escape(self, _event: tk.Event) -> None:
        if self.engine.selected_date is not None and not self.engine.props.read_only:
            self.clear_selection()
        else:
            self.hide()

    def clear_selection(self) -> None:
        self.engine.commit_selection(None, self.engine.displayed_month,
                                     self.engine.displayed_year)
        self._refresh()

    # ------------------------------------------------------------------
    # Settings dialog
    # ------------------------------------------------------------------
    def open_settings(self) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("Settings")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="Locale:", font=self.font_normal).grid(
            row=0, column=0, sticky="w", pady=4,
        )
        locale_choices = ["en"] + sorted(LOCALE_DATA)
        locale_var = tk.StringVar(value=self._settings.get("locale") or "en")
        tk.OptionMenu(frame, locale_var, *locale_choices).grid(
            row=0, column=1, sticky="we", padx=(8, 0), pady=4,
        )

        entries: dict[str, tk.Entry] = {}
        for row, (key, text) in enumerate((("min_date", "Earliest (YYYY-MM-DD):"),
                                           ("max_date", "Latest (YYYY-MM-DD):")), start=1):
            tk.Label(frame, text=text, font=self.font_normal).grid(
                row=row, column=0, sticky="w", pady=4,
            )
            entry = tk.Entry(frame, width=12, font=self.font_normal)
            entry.insert(0, self._settings.get(key) or "")
            entry.grid(row=row, column=1, padx=(8, 0), pady=4)
            entries[key] = entry

        flag_vars: dict[str, tk.BooleanVar] = {}
        for row, (key, text) in enumerate((
            ("show_other_month_date", "Show days of other months"),
            ("read_only", "Read-only"),
            ("prevent_focus_style_for_touch_and_click", "Focus ring for keyboard only"),
            ("copy_to_clipboard", "Copy selected date to clipboard"),
        ), start=3):
            var = tk.BooleanVar(value=bool(self._settings.get(key)))
            flag_vars[key] = var
            tk.Checkbutton(frame, text=text, variable=var, font=self.font_normal).grid(
                row=row, column=0, columnspan=2, sticky="w", pady=2,
            )

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=7, column=0, columnspan=2, pady=(8, 0))

        def on_ok() -> None:
            bounds = {}
            for key, entry in entries.items():
                text = entry.get().strip()
                if text:
                    try:
                        date.fromisoformat(text)
                    except ValueError:
                        entry.configure(bg="#FFE0E0")
                        return
                bounds[key] = text or None

            settings = load_settings()
            locale = locale_var.get()
            settings["locale"] = None if locale == "en" else locale
            settings.update(bounds)
            for key, var in flag_vars.items():
                settings[key] = var.get()
            save_settings(settings)
            self._settings = settings

            self.engine.props_changed(props_from_settings(
                settings,
                on_update=self._on_selection_changed,
                on_month_update=self._on_month_changed,
            ))
            self._register_styles()
            dlg.destroy()
            self._refresh()

        tk.Button(btn_frame, text="OK", width=8, command=on_ok).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.root.title(self._title())
        self._refresh()
        self.root.deiconify()
        self.root.update_idletasks()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.root.withdraw()

    def destroy(self) -> None:
        self._styles.unregister_all(self._style_ids.all())
        self.root.destroy()

    # ------------------------------------------------------------------
    # Position bottom-right above taskbar
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        try:
            import ctypes.wintypes
            rect = ctypes.wintypes.RECT()
            ctypes.windll.user32.SystemParametersInfoW(0x0030, 0, ctypes.byref(rect), 0)
            work_right = rect.right
            work_bottom = rect.bottom
        except (AttributeError, ImportError, ValueError):
            # Not on Windows: use the full screen
            work_right = self.root.winfo_screenwidth()
            work_bottom = self.root.winfo_screenheight()

        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = work_right - win_w - 12
        y = work_bottom - win_h - 12
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
