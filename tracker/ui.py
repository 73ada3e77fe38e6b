import logging

import tkinter as tk
from tkinter import messagebox

from PIL import Image, ImageTk

from tracker.animation import CounterAnimator
from tracker.chart import AttendanceChart
from tracker.constants import (
    APP_NAME,
    APP_VERSION,
    LOGO_FILE,
    NOTIFICATION_COLORS,
    NOTIFICATION_ICONS,
    NOTIFICATION_MS,
    STAT_FONT,
    STATUS_COLORS,
    STORAGE_MODE,
    TITLE_FONT,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from tracker.dispatch import Action, Dispatcher
from tracker.exceptions import ValidationError
from tracker.export import export_report
from tracker.logic import AttendanceStore
from tracker.storage import initialize_storage, make_storage

logger = logging.getLogger(__name__)


class Toast:
    """Auto-dismissing banner in the top right corner of the window."""

    def __init__(self, master):
        self.master = master
        self.window = None
        self._timer = None

    def show(self, message, severity="info"):
        self.dismiss()

        color = NOTIFICATION_COLORS.get(severity, NOTIFICATION_COLORS["info"])
        icon = NOTIFICATION_ICONS.get(severity, NOTIFICATION_ICONS["info"])

        self.window = tk.Toplevel(self.master)
        self.window.overrideredirect(True)
        self.window.attributes("-topmost", True)
        tk.Label(
            self.window, text=f"{icon}  {message}", font=("Arial", 11, "bold"),
            bg=color, fg="white", padx=16, pady=10, wraplength=300, justify="left"
        ).pack()

        self.window.update_idletasks()
        x = self.master.winfo_rootx() + self.master.winfo_width() - self.window.winfo_width() - 20
        y = self.master.winfo_rooty() + 20
        self.window.geometry(f"+{x}+{y}")

        self._timer = self.master.after(NOTIFICATION_MS, self.dismiss)

    def dismiss(self):
        if self._timer is not None:
            self.master.after_cancel(self._timer)
            self._timer = None
        if self.window is not None:
            self.window.destroy()
            self.window = None


class AttendanceApp:
    def __init__(self, master, store):
        self.master = master
        self.store = store
        master.title(f"{APP_NAME} v{APP_VERSION}")
        master.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        master.configure(bg="white")
        master.option_add("*Font", "Arial 10")

        self.toast = Toast(master)
        self.dispatcher = Dispatcher(store, notify=self.toast.show, confirm=messagebox.askyesno)

        try:
            logo = Image.open(LOGO_FILE).resize((64, 64))
            self.logo_image = ImageTk.PhotoImage(logo)
            tk.Label(master, image=self.logo_image, bg="white").place(relx=0.02, rely=0.01, anchor="nw")
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not load logo %s", LOGO_FILE)

        tk.Label(
            master, text=APP_NAME, font=TITLE_FONT, fg="#2c3e50", bg="white", pady=10
        ).pack()

        button_style = {"font": ("Arial", 11), "relief": "raised", "bd": 1, "padx": 8, "pady": 3}

        input_frame = tk.Frame(master, bg="white")
        input_frame.pack(pady=5)

        tk.Label(input_frame, text="Subject name:", font=("Arial", 12),
                 fg="#2c3e50", bg="white").grid(row=0, column=0, padx=3, pady=3)

        self.name_entry = tk.Entry(input_frame, font=("Arial", 11), bg="#ecf0f1", fg="#2c3e50", width=28)
        self.name_entry.grid(row=0, column=1, padx=3, pady=3)
        self.name_entry.bind("<Return>", lambda event: self.add_subject())
        self.name_entry.bind("<Control-Return>", lambda event: self.add_subject())

        tk.Button(
            input_frame, text="Add Subject ➕", **button_style,
            command=self.add_subject, bg="#27ae60", fg="white"
        ).grid(row=0, column=2, padx=3, pady=3)

        tk.Button(
            input_frame, text="Export 💾", **button_style,
            command=self.export_data, bg="#d35400", fg="white"
        ).grid(row=0, column=3, padx=3, pady=3)

        tk.Button(
            input_frame, text="Reset All 🗑", **button_style,
            command=self.reset_all, bg="#e74c3c", fg="white"
        ).grid(row=0, column=4, padx=3, pady=3)

        self.create_statistics()

        body = tk.Frame(master, bg="white")
        body.pack(fill="both", expand=True, padx=15, pady=10)

        self.create_subject_list(body)

        chart_frame = tk.Frame(body, bg="white")
        chart_frame.pack(side="right", fill="both", expand=True)
        self.chart = AttendanceChart(chart_frame)
        self.chart.widget.pack(fill="both", expand=True)

        self.store.subscribe(self.refresh)
        master.protocol("WM_DELETE_WINDOW", self.on_close)
        self.name_entry.focus_set()

    def create_statistics(self):
        stats_frame = tk.Frame(self.master, bg="white")
        stats_frame.pack(pady=5)

        self.counters = {}
        cards = [
            ("subjects", "Subjects", False),
            ("attended", "Attended", False),
            ("missed", "Missed", False),
            ("overall", "Overall", True),
        ]
        for column, (key, title, percent) in enumerate(cards):
            card = tk.Frame(stats_frame, bg="#ecf0f1", padx=18, pady=6)
            card.grid(row=0, column=column, padx=6)
            value_label = tk.Label(card, text="0", font=STAT_FONT, fg="#2c3e50", bg="#ecf0f1")
            value_label.pack()
            tk.Label(card, text=title, font=("Arial", 10), fg="#7f8c8d", bg="#ecf0f1").pack()

            self.counters[key] = CounterAnimator(
                schedule=self.master.after,
                cancel=self.master.after_cancel,
                render=lambda text, label=value_label: label.config(text=text),
                percent=percent,
            )

    def create_subject_list(self, parent):
        list_frame = tk.Frame(parent, bg="white")
        list_frame.pack(side="left", fill="both", expand=True)

        self.subject_canvas = tk.Canvas(list_frame, bg="white", highlightthickness=0, width=420)
        scrollbar = tk.Scrollbar(list_frame, orient="vertical", command=self.subject_canvas.yview)
        self.subject_canvas.configure(yscrollcommand=scrollbar.set)

        self.cards_frame = tk.Frame(self.subject_canvas, bg="white")
        self.cards_frame.bind(
            "<Configure>",
            lambda event: self.subject_canvas.configure(scrollregion=self.subject_canvas.bbox("all"))
        )
        self.subject_canvas.create_window((0, 0), window=self.cards_frame, anchor="nw")

        self.subject_canvas.pack(side="left", fill="both", expand=True)
        scrollbar.pack(side="right", fill="y")

    # ==================================================
    # rendering
    # ==================================================

    def refresh(self, subjects, stats):
        self.render_subjects(subjects)

        self.counters["subjects"].animate_to(stats.subject_count)
        self.counters["attended"].animate_to(stats.total_attended)
        self.counters["missed"].animate_to(stats.total_missed)
        self.counters["overall"].animate_to(stats.overall_percentage)

        self.chart.update(*self.store.chart_series())

    def render_subjects(self, subjects):
        for child in self.cards_frame.winfo_children():
            child.destroy()

        if not subjects:
            empty = tk.Frame(self.cards_frame, bg="white", pady=40)
            empty.pack(fill="x")
            tk.Label(empty, text="📝", font=("Arial", 28), bg="white").pack()
            tk.Label(empty, text="No subjects added yet", font=("Arial", 13, "bold"),
                     fg="#2c3e50", bg="white").pack()
            tk.Label(empty, text="Add your first subject to start tracking attendance",
                     fg="#7f8c8d", bg="white").pack()
            return

        for subject in subjects:
            self.create_subject_card(subject)

    def create_subject_card(self, subject):
        status = self.store.status_of(subject)
        color = STATUS_COLORS[status.value]

        card = tk.Frame(self.cards_frame, bg="#f8fafc", bd=1, relief="solid", padx=10, pady=8)
        card.pack(fill="x", pady=4, padx=2)

        header = tk.Frame(card, bg="#f8fafc")
        header.pack(fill="x")
        tk.Label(header, text=subject.name, font=("Arial", 13, "bold"),
                 fg="#2c3e50", bg="#f8fafc").pack(side="left")
        tk.Label(header, text=f"{status.icon} {status.label}", font=("Arial", 10, "bold"),
                 fg="white", bg=color, padx=6).pack(side="right")

        stats_row = tk.Frame(card, bg="#f8fafc")
        stats_row.pack(fill="x", pady=4)
        for value, title in [
            (subject.attended, "Attended"),
            (subject.missed, "Missed"),
            (subject.total, "Total"),
            (f"{subject.percentage:.1f}%", "Attendance"),
        ]:
            cell = tk.Frame(stats_row, bg="#f8fafc")
            cell.pack(side="left", expand=True)
            tk.Label(cell, text=str(value), font=("Arial", 12, "bold"), fg=color if title == "Attendance" else "#2c3e50",
                     bg="#f8fafc").pack()
            tk.Label(cell, text=title, font=("Arial", 9), fg="#7f8c8d", bg="#f8fafc").pack()

        actions = tk.Frame(card, bg="#f8fafc")
        actions.pack(fill="x")
        action_style = {"font": ("Arial", 10), "relief": "raised", "bd": 1, "padx": 6, "fg": "white"}

        tk.Button(actions, text="✓ Present", bg="#22c55e", **action_style,
                  command=lambda: self.dispatcher.dispatch(Action.PRESENT, subject_id=subject.id)
                  ).pack(side="left", padx=3)
        tk.Button(actions, text="✗ Absent", bg="#ef4444", **action_style,
                  command=lambda: self.dispatcher.dispatch(Action.ABSENT, subject_id=subject.id)
                  ).pack(side="left", padx=3)
        tk.Button(actions, text="Delete", bg="#7f8c8d", **action_style,
                  command=lambda: self.dispatcher.dispatch(Action.DELETE, subject_id=subject.id)
                  ).pack(side="right", padx=3)

    # ==================================================
    # actions
    # ==================================================

    def add_subject(self):
        subject = self.dispatcher.dispatch(Action.ADD, name=self.name_entry.get())
        if subject is not None:
            self.name_entry.delete(0, tk.END)
        self.name_entry.focus_set()

    def reset_all(self):
        self.dispatcher.dispatch(Action.RESET)

    def export_data(self):
        try:
            path = export_report(self.store.subjects, scheme=self.store.scheme)
        except ValidationError as e:
            self.toast.show(str(e), "warning")
        except OSError as e:
            logger.exception("Export failed")
            self.toast.show(f"Export failed: {e}", "error")
        else:
            self.toast.show(f"Report saved to {path}", "success")

    def on_close(self):
        for counter in self.counters.values():
            counter.stop()
        self.toast.dismiss()
        self.store.close()
        self.master.destroy()


def run_app(storage_mode=STORAGE_MODE):
    initialize_storage(storage_mode)
    storage = make_storage(storage_mode)

    root = tk.Tk()
    store = AttendanceStore(storage)
    AttendanceApp(root, store)
    store.open()
    root.mainloop()
