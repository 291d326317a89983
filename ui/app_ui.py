"""
Tkinter UI logic for the sheet layout planner.
"""
import logging
import threading
import tkinter as tk
from tkinter import ttk, messagebox, scrolledtext
from typing import List, Optional

from config import DEFAULT_TOLERANCE, SERVICE_ACCOUNT_FILE
from export.google_sheets import GoogleSheetsExporter
from models.errors import ConfigurationError, ExportError, StorageError, ValidationError
from models.part import Component, LayoutState, PlacementResult, Sheet
from packing.engine import place
from storage.store import LayoutStore
from ui.input_collector import collect_layout
from visualization.layout_drawing import describe_placements, unplaced_message
from visualization.visualizer import LayoutVisualizer

log = logging.getLogger(__name__)


def _text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class EntryRow:
    """One editable sheet or component row: a frame of labelled entries."""

    def __init__(self, parent, labels, values, on_change, on_remove):
        self.frame = ttk.Frame(parent)
        self.frame.pack(fill=tk.X, padx=5, pady=2)
        self.vars: List[tk.StringVar] = []
        for column, (label, value) in enumerate(zip(labels, values)):
            ttk.Label(self.frame, text=label).grid(row=0, column=column * 2, padx=2)
            var = tk.StringVar(value=_text(value))
            ttk.Entry(self.frame, textvariable=var, width=8).grid(row=0, column=column * 2 + 1, padx=2)
            var.trace_add("write", lambda *args: on_change())
            self.vars.append(var)
        ttk.Button(self.frame, text="Remove", command=lambda: on_remove(self)).grid(
            row=0, column=len(labels) * 2, padx=5)

    def values(self):
        return tuple(var.get() for var in self.vars)

    def destroy(self):
        self.frame.destroy()


class SheetLayoutApp:
    def __init__(self, root, store: Optional[LayoutStore] = None):
        self.root = root
        self.store = store or LayoutStore()
        self.root.title("Sheet Layout Planner")
        self.root.geometry("1200x800")
        self.root.columnconfigure(1, weight=1)
        self.root.rowconfigure(0, weight=1)

        self.sheet_rows: List[EntryRow] = []
        self.component_rows: List[EntryRow] = []
        self.state: Optional[LayoutState] = None
        self.result: Optional[PlacementResult] = None
        self._loading = False

        form = ttk.Frame(self.root)
        form.grid(row=0, column=0, sticky="nsew", padx=10, pady=10)

        # Sheets
        self.sheets_frame = ttk.LabelFrame(form, text="Sheets")
        self.sheets_frame.pack(fill=tk.X, pady=5)
        ttk.Button(form, text="Add sheet", command=self.add_sheet).pack(anchor=tk.W)

        # Components
        self.components_frame = ttk.LabelFrame(form, text="Components")
        self.components_frame.pack(fill=tk.X, pady=5)
        ttk.Button(form, text="Add component", command=self.add_component).pack(anchor=tk.W)

        # Tolerance and actions
        actions = ttk.Frame(form)
        actions.pack(fill=tk.X, pady=10)
        ttk.Label(actions, text="Tolerance (mm):").grid(row=0, column=0, padx=5)
        self.tolerance_var = tk.StringVar(value=_text(DEFAULT_TOLERANCE))
        ttk.Entry(actions, textvariable=self.tolerance_var, width=8).grid(row=0, column=1, padx=5)
        self.tolerance_var.trace_add("write", lambda *args: self.optimize_layout())
        ttk.Button(actions, text="Optimize", command=self.optimize_layout).grid(row=0, column=2, padx=5)
        ttk.Button(actions, text="Export to Google Sheets",
                   command=self.export_to_google_sheets).grid(row=0, column=3, padx=5)

        # Results
        results_frame = ttk.LabelFrame(form, text="Optimized Layouts")
        results_frame.pack(fill=tk.BOTH, expand=True, pady=5)
        self.results_text = scrolledtext.ScrolledText(results_frame, wrap=tk.WORD, height=12, width=60)
        self.results_text.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)
        self.results_text.config(state=tk.DISABLED)

        # Canvas area
        visualization_frame = ttk.LabelFrame(self.root, text="Layout")
        visualization_frame.grid(row=0, column=1, sticky="nsew", padx=10, pady=10)
        self.visualizer = LayoutVisualizer(visualization_frame)

        self.status_bar = ttk.Label(self.root, text="", relief=tk.SUNKEN, anchor="w")
        self.status_bar.grid(row=1, column=0, columnspan=2, sticky="ew")

        self.load_saved_data()

    def load_saved_data(self):
        try:
            state = self.store.load()
        except StorageError:
            log.warning("Ignoring unreadable saved layout", exc_info=True)
            state = None
        self._loading = True
        try:
            if state:
                for sheet in state.sheets:
                    self.add_sheet(sheet)
                for component in state.components:
                    self.add_component(component)
                self.tolerance_var.set(_text(state.tolerance))
            else:
                self.add_sheet()
                self.add_component()
        finally:
            self._loading = False
        self.optimize_layout()

    def add_sheet(self, sheet: Optional[Sheet] = None):
        values = (sheet.length, sheet.width, sheet.thickness) if sheet else (None, None, None)
        row = EntryRow(self.sheets_frame, ("Length (mm):", "Width (mm):", "Thickness (mm):"),
                       values, self.optimize_layout, self.remove_sheet)
        self.sheet_rows.append(row)
        self.optimize_layout()

    def add_component(self, component: Optional[Component] = None):
        values = (component.length, component.width) if component else (None, None)
        row = EntryRow(self.components_frame, ("Length (mm):", "Width (mm):"),
                       values, self.optimize_layout, self.remove_component)
        self.component_rows.append(row)
        self.optimize_layout()

    def remove_sheet(self, row: EntryRow):
        self.sheet_rows.remove(row)
        row.destroy()
        self.optimize_layout()

    def remove_component(self, row: EntryRow):
        self.component_rows.remove(row)
        row.destroy()
        self.optimize_layout()

    def optimize_layout(self):
        """Collect the form, run the engine and refresh every view."""
        if self._loading:
            return
        try:
            state = collect_layout(
                [row.values() for row in self.sheet_rows],
                [row.values() for row in self.component_rows],
                self.tolerance_var.get()
            )
            result = place(state.sheets, state.components, state.tolerance)
        except (ValidationError, ConfigurationError) as e:
            self.set_status(str(e))
            return
        self.state = state
        self.result = result
        self.visualizer.show(state.sheets, state.components, result)
        self.display_result(describe_placements(result, state.components))
        warning = unplaced_message(result)
        if warning:
            log.warning(warning)
            self.set_status(warning)
        else:
            self.set_status(f"Placed {len(result.placements)} component(s) on "
                            f"{result.sheets_used} sheet(s)")
        self.save_data()

    def save_data(self):
        try:
            self.store.save(self.state)
        except (OSError, StorageError) as e:
            log.exception("Failed to save layout")
            self.set_status(f"Could not save layout: {e}")

    def display_result(self, lines):
        self.results_text.config(state=tk.NORMAL)
        self.results_text.delete(1.0, tk.END)
        self.results_text.insert(tk.END, "\n".join(lines))
        self.results_text.config(state=tk.DISABLED)

    def set_status(self, text: str):
        self.status_bar.config(text=text)

    def export_to_google_sheets(self):
        if not self.state or not self.result or not self.state.components:
            messagebox.showwarning("Warning", "Add sheets and components before exporting.")
            return
        export_thread = threading.Thread(target=self.run_export_to_google_sheets,
                                         args=(self.state, self.result), daemon=True)
        export_thread.start()

    def run_export_to_google_sheets(self, state: LayoutState, result: PlacementResult):
        try:
            exporter = GoogleSheetsExporter(SERVICE_ACCOUNT_FILE)
            spreadsheet_id = exporter.export_layout(state, result)
        except ExportError as e:
            log.exception("Export to Google Sheets failed")
            self.root.after(0, messagebox.showerror, "Export error", str(e))
            return
        self.root.after(0, messagebox.showinfo, "Success",
                        f"Layout exported to Google Sheets ({spreadsheet_id}).")
