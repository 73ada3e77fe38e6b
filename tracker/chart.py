from matplotlib.figure import Figure
from matplotlib.ticker import MaxNLocator

ATTENDED_COLOR = "#22c55e"
MISSED_COLOR = "#ef4444"


def tick_label(name, attended, missed):
    total = attended + missed
    percentage = attended / total * 100 if total > 0 else 0.0
    return f"{name}\n{percentage:.1f}%"


def draw_attendance_bars(ax, names, attended, missed):
    ax.clear()

    if not names:
        ax.text(0.5, 0.5, "No subjects added yet", ha="center", va="center", fontsize=12)
        ax.axis("off")
        return

    ax.axis("on")
    positions = list(range(len(names)))
    width = 0.38

    ax.bar([p - width / 2 for p in positions], attended, width=width,
           color=ATTENDED_COLOR, edgecolor="#16a34a", label="Attended")
    ax.bar([p + width / 2 for p in positions], missed, width=width,
           color=MISSED_COLOR, edgecolor="#dc2626", label="Missed")

    rotate = len(names) > 4
    ax.set_xticks(positions)
    ax.set_xticklabels(
        [tick_label(*row) for row in zip(names, attended, missed)],
        rotation=45 if rotate else 0, ha="right" if rotate else "center"
    )
    ax.set_ylim(bottom=0)
    ax.yaxis.set_major_locator(MaxNLocator(integer=True))
    ax.grid(axis="y", color="#000000", alpha=0.1)
    ax.set_title("Attendance per Subject", fontsize=12, fontweight="bold")
    ax.legend(loc="upper right")


class AttendanceChart:
    def __init__(self, master):
        from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

        self.figure = Figure(figsize=(6, 3), dpi=100)
        self.ax = self.figure.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.figure, master=master)
        self.widget = self.canvas.get_tk_widget()

    def update(self, names, attended, missed):
        draw_attendance_bars(self.ax, names, attended, missed)
        self.figure.tight_layout()
        self.canvas.draw_idle()
